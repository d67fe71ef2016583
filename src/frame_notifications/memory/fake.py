"""In-memory store and transport for test assertions."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any

from frame_notifications.delivery import (
    DeliveryToken,
    NotificationContent,
    Recipient,
    TransportResult,
)
from frame_notifications.exceptions import StoreUnavailableError
from frame_notifications.ports.recipients import IRecipientRegistry, IRecipientStore
from frame_notifications.ports.transport import IPushTransport

logger = logging.getLogger(__name__)


class InMemoryRecipientStore(IRecipientStore, IRecipientRegistry):
    """
    Test double (Fake) keeping recipients and the event log in dicts.

    Set ``unavailable`` to make reads raise StoreUnavailableError.
    """

    def __init__(self, recipients: list[Recipient] | None = None) -> None:
        self.recipients: dict[int, Recipient] = {r.fid: r for r in recipients or []}
        self.events: list[dict[str, Any]] = []
        self.unavailable = False
        self.list_calls = 0

    async def list_recipients(self) -> list[Recipient]:
        self.list_calls += 1
        self._check_available()
        return list(self.recipients.values())

    async def get_delivery_token(self, fid: int) -> DeliveryToken | None:
        self._check_available()
        recipient = self.recipients.get(fid)
        return recipient.token if recipient else None

    async def add_recipient(self, fid: int, username: str | None = None) -> None:
        now = datetime.now(timezone.utc)
        self.recipients[fid] = Recipient(
            fid=fid, username=username, added_at=now, last_activity=now
        )

    async def remove_recipient(self, fid: int) -> None:
        self.recipients.pop(fid, None)

    async def set_delivery_token(self, fid: int, token: DeliveryToken) -> None:
        current = self.recipients.get(fid) or Recipient(fid=fid)
        self.recipients[fid] = replace(current, opted_in=True, token=token)

    async def delete_delivery_token(self, fid: int) -> None:
        current = self.recipients.get(fid)
        if current is not None:
            self.recipients[fid] = replace(current, opted_in=False, token=None)

    async def log_event(
        self, fid: int, event: str, details: dict[str, Any] | None = None
    ) -> None:
        self.events.append({"fid": fid, "event": event, "details": details})

    def _check_available(self) -> None:
        if self.unavailable:
            raise StoreUnavailableError("in-memory store marked unavailable")


@dataclass
class AttemptedDelivery:
    """Record of a delivery attempt for test assertions."""

    token: DeliveryToken
    content: NotificationContent
    notification_id: str


class InMemoryPushTransport(IPushTransport):
    """
    Test double (Fake) that records attempts and replays scripted results.

    ``results`` maps a token string to the TransportResult to return, or to
    an exception to raise. Unscripted tokens succeed. ``delay`` makes every
    attempt sleep first.
    """

    def __init__(
        self,
        results: dict[str, TransportResult | Exception] | None = None,
        delay: float = 0.0,
    ) -> None:
        self.results = dict(results or {})
        self.delay = delay
        self.attempts: list[AttemptedDelivery] = []

    async def attempt(
        self,
        token: DeliveryToken,
        content: NotificationContent,
        notification_id: str,
    ) -> TransportResult:
        self.attempts.append(AttemptedDelivery(token, content, notification_id))
        if self.delay:
            await asyncio.sleep(self.delay)
        result = self.results.get(token.token, TransportResult.success())
        if isinstance(result, Exception):
            raise result
        return result

    @property
    def attempted_tokens(self) -> list[str]:
        return [a.token.token for a in self.attempts]

    def assert_attempted(self, token: str, count: int = 1) -> None:
        """Helper for test assertions."""
        matches = [a for a in self.attempts if a.token.token == token]
        if len(matches) != count:
            raise AssertionError(
                f"Expected {count} attempts for token {token}, but found {len(matches)}."
            )

    def clear(self) -> None:
        """Clear all recorded attempts."""
        self.attempts.clear()
