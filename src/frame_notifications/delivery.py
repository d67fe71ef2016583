"""Recipient, content, outcome and report types."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Union

from .exceptions import InvalidContentError

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 100
BODY_MAX_LENGTH = 500
TARGET_URL_MAX_LENGTH = 1024


@dataclass(frozen=True)
class DeliveryToken:
    """Notification endpoint and token registered by a Farcaster client."""

    url: str
    token: str = field(repr=False)


@dataclass(frozen=True)
class Recipient:
    """Immutable view of a known mini-app user."""

    fid: int
    username: str | None = None
    opted_in: bool = False
    token: DeliveryToken | None = None
    added_at: datetime | None = None
    last_activity: datetime | None = None


@dataclass(frozen=True)
class NotificationContent:
    """Immutable, validated notification title and body."""

    title: str
    body: str
    target_url: str | None = None

    def __post_init__(self) -> None:
        errors: dict[str, list[str]] = {}
        _check_length(errors, "title", self.title, TITLE_MAX_LENGTH)
        _check_length(errors, "body", self.body, BODY_MAX_LENGTH)
        if self.target_url is not None and len(self.target_url) > TARGET_URL_MAX_LENGTH:
            errors.setdefault("target_url", []).append(
                f"must be at most {TARGET_URL_MAX_LENGTH} characters"
            )
        if errors:
            raise InvalidContentError(errors)


def _check_length(errors: dict[str, list[str]], name: str, value: str, limit: int) -> None:
    if not isinstance(value, str) or not value.strip():
        errors.setdefault(name, []).append("must not be empty")
    elif len(value) > limit:
        errors.setdefault(name, []).append(f"must be at most {limit} characters")


class OutcomeKind(Enum):
    """Per-recipient delivery outcomes."""

    SENT = "sent"
    FAILED = "failed"
    NO_TOKEN = "no_token"
    RATE_LIMITED = "rate_limited"


@dataclass(frozen=True)
class Sent:
    fid: int
    kind: ClassVar[OutcomeKind] = OutcomeKind.SENT


@dataclass(frozen=True)
class Failed:
    fid: int
    detail: str
    kind: ClassVar[OutcomeKind] = OutcomeKind.FAILED

    @property
    def error_message(self) -> str:
        return f"FID {self.fid}: {self.detail}"


@dataclass(frozen=True)
class NoToken:
    fid: int
    kind: ClassVar[OutcomeKind] = OutcomeKind.NO_TOKEN


@dataclass(frozen=True)
class RateLimited:
    fid: int
    kind: ClassVar[OutcomeKind] = OutcomeKind.RATE_LIMITED


DeliveryOutcome = Union[Sent, Failed, NoToken, RateLimited]


class TransportStatus(Enum):
    """What the push transport reported for one token."""

    SUCCESS = "success"
    NO_TOKEN = "no_token"
    RATE_LIMITED = "rate_limited"
    ERROR = "error"


@dataclass(frozen=True)
class TransportResult:
    """Immutable result of one delivery attempt."""

    status: TransportStatus
    detail: str | None = None

    @classmethod
    def success(cls) -> TransportResult:
        return cls(TransportStatus.SUCCESS)

    @classmethod
    def no_token(cls) -> TransportResult:
        return cls(TransportStatus.NO_TOKEN)

    @classmethod
    def rate_limited(cls) -> TransportResult:
        return cls(TransportStatus.RATE_LIMITED)

    @classmethod
    def error(cls, detail: str) -> TransportResult:
        return cls(TransportStatus.ERROR, detail=detail)


@dataclass(frozen=True)
class DispatchReport:
    """Aggregate result of one dispatch.

    ``sent + failed + no_token + rate_limited == targeted`` always holds.
    """

    sent: int = 0
    failed: int = 0
    no_token: int = 0
    rate_limited: int = 0
    targeted: int = 0
    errors: tuple[str, ...] = ()
    notification_id: str | None = None

    @property
    def success(self) -> bool:
        return self.sent > 0

    @classmethod
    def empty(cls, notification_id: str | None = None) -> DispatchReport:
        return cls(notification_id=notification_id)

    @classmethod
    def store_failure(cls, error: BaseException) -> DispatchReport:
        """Zero report carrying the error that stopped the batch."""
        return cls(errors=(str(error),))

    def to_dict(self) -> dict[str, Any]:
        """Payload rendered by the operator dashboard."""
        return {
            "success": self.success,
            "results": {
                "sent": self.sent,
                "failed": self.failed,
                "noToken": self.no_token,
                "rateLimited": self.rate_limited,
            },
            "errors": list(self.errors),
            "targeted": self.targeted,
        }


class ReportBuilder:
    """Folds delivery outcomes into a DispatchReport."""

    def __init__(self) -> None:
        self._counts: dict[OutcomeKind, int] = {kind: 0 for kind in OutcomeKind}
        self._errors: list[str] = []

    def add(self, outcome: DeliveryOutcome) -> None:
        self._counts[outcome.kind] += 1
        if isinstance(outcome, Failed):
            self._errors.append(outcome.error_message)

    def build(self, notification_id: str | None = None) -> DispatchReport:
        return DispatchReport(
            sent=self._counts[OutcomeKind.SENT],
            failed=self._counts[OutcomeKind.FAILED],
            no_token=self._counts[OutcomeKind.NO_TOKEN],
            rate_limited=self._counts[OutcomeKind.RATE_LIMITED],
            targeted=sum(self._counts.values()),
            errors=tuple(self._errors),
            notification_id=notification_id,
        )
