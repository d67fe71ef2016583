"""Tests for the outcome classifier."""

import asyncio

import pytest

from frame_notifications.classifier import classify
from frame_notifications.delivery import (
    Failed,
    NoToken,
    RateLimited,
    Sent,
    TransportResult,
)


def test_success_is_sent(make_recipient):
    assert classify(make_recipient(1), TransportResult.success()) == Sent(1)


def test_rate_limit_is_kept_apart_from_failure(make_recipient):
    assert classify(make_recipient(2), TransportResult.rate_limited()) == RateLimited(2)


def test_transport_error_is_failed_with_detail(make_recipient):
    outcome = classify(make_recipient(3), TransportResult.error("HTTP 500"))

    assert outcome == Failed(3, "HTTP 500")
    assert outcome.error_message == "FID 3: HTTP 500"


def test_invalid_token_is_no_token(make_recipient):
    assert classify(make_recipient(4), TransportResult.no_token()) == NoToken(4)


@pytest.mark.parametrize(
    "attempt",
    [
        TransportResult.error("boom"),
        TransportResult.success(),
        RuntimeError("connection reset"),
        None,
    ],
)
def test_missing_token_takes_precedence(make_recipient, attempt):
    recipient = make_recipient(5, with_token=False)

    assert classify(recipient, attempt) == NoToken(5)


def test_exception_is_failed(make_recipient):
    outcome = classify(make_recipient(6), ConnectionError("connection reset"))

    assert outcome == Failed(6, "connection reset")


def test_exception_without_message_uses_type_name(make_recipient):
    outcome = classify(make_recipient(7), RuntimeError())

    assert outcome == Failed(7, "RuntimeError")


def test_timeout_is_failed(make_recipient):
    outcome = classify(make_recipient(8), asyncio.TimeoutError())

    assert outcome == Failed(8, "timed out")


def test_missing_attempt_with_token_is_failed(make_recipient):
    outcome = classify(make_recipient(9), None)

    assert isinstance(outcome, Failed)


def test_classification_is_pure(make_recipient):
    recipient = make_recipient(10)
    result = TransportResult.error("HTTP 503")

    assert classify(recipient, result) == classify(recipient, result)
