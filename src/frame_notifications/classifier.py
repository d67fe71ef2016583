"""Maps a delivery attempt to exactly one outcome kind."""

from __future__ import annotations

import asyncio

from .delivery import (
    DeliveryOutcome,
    Failed,
    NoToken,
    RateLimited,
    Recipient,
    Sent,
    TransportResult,
    TransportStatus,
)


def classify(
    recipient: Recipient,
    attempt: TransportResult | BaseException | None,
) -> DeliveryOutcome:
    """
    Classify one attempt for ``recipient``.

    A recipient without a registered token is always NoToken, whatever the
    attempt says. Rate limiting is kept apart from generic failures.
    """
    fid = recipient.fid
    if recipient.token is None:
        return NoToken(fid)

    if isinstance(attempt, asyncio.TimeoutError):
        return Failed(fid, "timed out")
    if isinstance(attempt, BaseException):
        return Failed(fid, str(attempt) or type(attempt).__name__)
    if attempt is None:
        return Failed(fid, "no delivery attempt recorded")

    if attempt.status is TransportStatus.SUCCESS:
        return Sent(fid)
    if attempt.status is TransportStatus.NO_TOKEN:
        return NoToken(fid)
    if attempt.status is TransportStatus.RATE_LIMITED:
        return RateLimited(fid)
    return Failed(fid, attempt.detail or "Unknown error")
