"""Builds notification content and audience for each supported intent."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .audience import AllOptedIn, Audience, FollowersOf
from .delivery import NotificationContent
from .exceptions import InvalidParameterError, MissingParameterError, UnknownIntentError


class NotificationIntent(Enum):
    """Kinds of broadcast the gallery sends."""

    RELEASE = "release"
    CREATOR = "creator"
    FEATURE = "feature"
    EVENT = "event"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: NotificationIntent | str) -> NotificationIntent:
        """Accept an intent, its value, or one of the admin form's type names."""
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        name = _INTENT_ALIASES.get(name, name)
        try:
            return cls(name)
        except ValueError:
            raise UnknownIntentError(str(value)) from None


_INTENT_ALIASES = {
    "epoch": "release",
    "artist": "creator",
    "app_update": "feature",
}


@dataclass(frozen=True)
class Composition:
    """Content plus the audience it goes to."""

    content: NotificationContent
    audience: Audience


def compose(
    intent: NotificationIntent | str, parameters: Mapping[str, Any]
) -> Composition:
    """
    Build the notification for ``intent`` from ``parameters``.

    Raises MissingParameterError naming the first absent required field.
    Pure: equal inputs give equal compositions.
    """
    parsed = NotificationIntent.parse(intent)
    return _BUILDERS[parsed](_Params(parsed, parameters))


class _Params:
    def __init__(self, intent: NotificationIntent, values: Mapping[str, Any]) -> None:
        self.intent = intent
        self.values = values

    def require(self, name: str) -> Any:
        value = self.values.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise MissingParameterError(self.intent.value, name)
        return value

    def optional(self, name: str, default: Any = None) -> Any:
        value = self.values.get(name)
        return default if value is None else value

    def fid(self, name: str) -> int | None:
        value = self.values.get(name)
        if value is None:
            return None
        if isinstance(value, str) and value.strip().isdigit():
            return int(value)
        if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
            return value
        raise InvalidParameterError(self.intent.value, name, "must be a non-negative integer")

    def content(self, title: str, body: str) -> NotificationContent:
        return NotificationContent(
            title=title, body=body, target_url=self.optional("target_url")
        )


def _release(p: _Params) -> Composition:
    release_id = p.require("release_id")
    creator_name = p.require("creator_name")
    # Carried by the admin form; the body names the creator only.
    p.require("creator_fid")
    return Composition(
        content=p.content(
            "🎨 New Epoch Available!",
            f"Epoch {release_id} by {creator_name} is now live. "
            "Tap to explore their amazing work!",
        ),
        audience=AllOptedIn(),
    )


def _creator(p: _Params) -> Composition:
    creator_name = p.require("creator_name")
    message = p.require("message")
    return Composition(
        content=p.content(f"👤 {creator_name} Update", message),
        audience=AllOptedIn(),
    )


def _feature(p: _Params) -> Composition:
    feature = p.require("feature")
    description = p.require("description")
    return Composition(
        content=p.content(f"✨ New Feature: {feature}", description),
        audience=AllOptedIn(),
    )


def _event(p: _Params) -> Composition:
    event_name = p.require("event_name")
    description = p.require("description")
    return Composition(
        content=p.content(f"🎉 {event_name}", description),
        audience=AllOptedIn(),
    )


def _custom(p: _Params) -> Composition:
    title = p.require("title")
    body = p.require("body")
    target = str(p.optional("target", "all")).strip().lower()
    if target not in _CUSTOM_TARGETS:
        raise InvalidParameterError(p.intent.value, "target", "must be 'all' or 'followers'")
    target_fid = p.fid("target_fid")

    audience: Audience = AllOptedIn()
    if target == "followers" and target_fid is not None:
        audience = FollowersOf(target_fid)
    return Composition(content=p.content(title, body), audience=audience)


_CUSTOM_TARGETS = ("all", "followers")


_BUILDERS: dict[NotificationIntent, Callable[[_Params], Composition]] = {
    NotificationIntent.RELEASE: _release,
    NotificationIntent.CREATOR: _creator,
    NotificationIntent.FEATURE: _feature,
    NotificationIntent.EVENT: _event,
    NotificationIntent.CUSTOM: _custom,
}
