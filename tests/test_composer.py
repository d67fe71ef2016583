"""Tests for the notification composer."""

import pytest

from frame_notifications.audience import AllOptedIn, FollowersOf
from frame_notifications.composer import NotificationIntent, compose
from frame_notifications.exceptions import (
    CompositionError,
    InvalidContentError,
    InvalidParameterError,
    MissingParameterError,
    UnknownIntentError,
)


def test_release_announcement():
    composition = compose(
        "release", {"release_id": 12, "creator_name": "Ana", "creator_fid": 345}
    )

    assert composition.content.title == "🎨 New Epoch Available!"
    assert composition.content.body == (
        "Epoch 12 by Ana is now live. Tap to explore their amazing work!"
    )
    assert composition.audience == AllOptedIn()


def test_creator_announcement():
    composition = compose(
        NotificationIntent.CREATOR, {"creator_name": "Ana", "message": "New drop tonight"}
    )

    assert composition.content.title == "👤 Ana Update"
    assert composition.content.body == "New drop tonight"
    assert composition.audience == AllOptedIn()


def test_feature_announcement():
    composition = compose("feature", {"feature": "Zoom", "description": "Pinch to zoom"})

    assert composition.content.title == "✨ New Feature: Zoom"
    assert composition.content.body == "Pinch to zoom"


def test_event_announcement():
    composition = compose("event", {"event_name": "Gallery Night", "description": "Join us"})

    assert composition.content.title == "🎉 Gallery Night"
    assert composition.content.body == "Join us"


def test_custom_defaults_to_all_opted_in():
    composition = compose("custom", {"title": "Hello", "body": "World"})

    assert composition.content.title == "Hello"
    assert composition.audience == AllOptedIn()


def test_custom_followers_target():
    composition = compose(
        "custom", {"title": "Hello", "body": "World", "target": "followers", "target_fid": 7}
    )

    assert composition.audience == FollowersOf(7)


def test_custom_followers_without_fid_falls_back_to_all():
    composition = compose("custom", {"title": "Hello", "body": "World", "target": "followers"})

    assert composition.audience == AllOptedIn()


def test_custom_followers_of_fid_zero():
    composition = compose(
        "custom", {"title": "Hello", "body": "World", "target": "followers", "target_fid": 0}
    )

    assert composition.audience == FollowersOf(0)


def test_custom_followers_accepts_numeric_string_fid():
    composition = compose(
        "custom", {"title": "Hello", "body": "World", "target": "followers", "target_fid": "7"}
    )

    assert composition.audience == FollowersOf(7)


@pytest.mark.parametrize("target_fid", ["abc", -3, True, 1.5, ""])
def test_custom_invalid_target_fid(target_fid):
    parameters = {
        "title": "Hello",
        "body": "World",
        "target": "followers",
        "target_fid": target_fid,
    }

    with pytest.raises(InvalidParameterError) as exc_info:
        compose("custom", parameters)

    assert exc_info.value.field == "target_fid"
    assert isinstance(exc_info.value, CompositionError)


def test_custom_unknown_target_is_rejected():
    with pytest.raises(InvalidParameterError) as exc_info:
        compose("custom", {"title": "Hello", "body": "World", "target": "everyone"})

    assert exc_info.value.field == "target"


def test_target_url_is_forwarded():
    composition = compose(
        "feature",
        {"feature": "Zoom", "description": "Pinch", "target_url": "https://gallery.example/zoom"},
    )

    assert composition.content.target_url == "https://gallery.example/zoom"


@pytest.mark.parametrize(
    ("alias", "intent"),
    [
        ("epoch", NotificationIntent.RELEASE),
        ("artist", NotificationIntent.CREATOR),
        ("app_update", NotificationIntent.FEATURE),
        ("EVENT", NotificationIntent.EVENT),
    ],
)
def test_intent_aliases(alias, intent):
    assert NotificationIntent.parse(alias) is intent


def test_unknown_intent():
    with pytest.raises(UnknownIntentError):
        compose("birthday", {})


def test_release_without_parameters_is_missing_release_id():
    with pytest.raises(MissingParameterError) as exc_info:
        compose("release", {})

    assert exc_info.value.intent == "release"
    assert exc_info.value.field == "release_id"


@pytest.mark.parametrize(
    ("intent", "parameters", "field"),
    [
        ("release", {"release_id": 1, "creator_name": "Ana"}, "creator_fid"),
        ("release", {"release_id": 1, "creator_fid": 2}, "creator_name"),
        ("creator", {"creator_name": "Ana"}, "message"),
        ("creator", {"message": "hi"}, "creator_name"),
        ("feature", {"description": "x"}, "feature"),
        ("event", {"event_name": "Night", "description": "  "}, "description"),
        ("custom", {"body": "World"}, "title"),
        ("custom", {"title": "Hello", "body": None}, "body"),
    ],
)
def test_missing_parameter_names_the_field(intent, parameters, field):
    with pytest.raises(MissingParameterError) as exc_info:
        compose(intent, parameters)

    assert exc_info.value.field == field


def test_overlong_content_is_rejected():
    with pytest.raises(InvalidContentError):
        compose("custom", {"title": "t" * 101, "body": "b"})


def test_compose_is_pure():
    parameters = {"release_id": 3, "creator_name": "Ana", "creator_fid": 9}

    assert compose("release", parameters) == compose("release", dict(parameters))
