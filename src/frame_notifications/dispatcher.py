"""BatchDispatcher: fan one notification out to an audience."""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import TYPE_CHECKING

from .classifier import classify
from .correlation import (
    generate_dispatch_id,
    get_dispatch_id,
    reset_dispatch_id,
    set_dispatch_id,
)
from .delivery import (
    DeliveryOutcome,
    DispatchReport,
    NotificationContent,
    Recipient,
    ReportBuilder,
    TransportResult,
)
from .exceptions import StoreUnavailableError

if TYPE_CHECKING:
    from .audience import Audience
    from .ports.recipients import IRecipientStore
    from .ports.transport import IPushTransport

logger = logging.getLogger(__name__)


class BatchDispatcher:
    """
    Delivers one piece of content to every recipient an audience selects.

    The recipient list is read once per dispatch. Each recipient gets exactly
    one attempt and exactly one outcome; a failing recipient never stops the
    others. With ``max_concurrency=1`` attempts run one after another.
    """

    def __init__(
        self,
        store: IRecipientStore,
        transport: IPushTransport,
        max_concurrency: int = 1,
        attempt_timeout: float | None = 10.0,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.store = store
        self.transport = transport
        self.max_concurrency = max_concurrency
        self.attempt_timeout = attempt_timeout

    async def dispatch(
        self, audience: Audience, content: NotificationContent
    ) -> DispatchReport:
        """
        Send ``content`` to ``audience`` and return the aggregate report.

        Raises StoreUnavailableError if the recipient list cannot be read; in
        that case no delivery is attempted.
        """
        notification_id = generate_dispatch_id()
        context_token = set_dispatch_id(notification_id)
        start = time.monotonic()
        try:
            recipients = await self._load_recipients()
            targets = audience.select(recipients)
            logger.info(
                f"Dispatching '{content.title}' to {len(targets)} of {len(recipients)} recipients"
            )

            outcomes = await self._attempt_all(targets, content, notification_id)

            builder = ReportBuilder()
            for outcome in outcomes:
                builder.add(outcome)
            report = builder.build(notification_id)

            self._log_summary(report, audience, start)
            return report
        finally:
            reset_dispatch_id(context_token)

    async def send_one(
        self, recipient: Recipient, content: NotificationContent
    ) -> DeliveryOutcome:
        """Deliver to a single recipient, classified like any batch member."""
        notification_id = generate_dispatch_id()
        context_token = set_dispatch_id(notification_id)
        try:
            outcomes = await self._attempt_all([recipient], content, notification_id)
            return outcomes[0]
        finally:
            reset_dispatch_id(context_token)

    async def _load_recipients(self) -> list[Recipient]:
        try:
            return list(await self.store.list_recipients())
        except StoreUnavailableError:
            logger.error("Recipient store unavailable, dispatch aborted")
            raise
        except Exception as e:
            logger.error(f"Failed to list recipients: {str(e)}")
            raise StoreUnavailableError(str(e)) from e

    async def _attempt_all(
        self,
        targets: list[Recipient],
        content: NotificationContent,
        notification_id: str,
    ) -> list[DeliveryOutcome]:
        if not targets:
            return []

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def _bounded(recipient: Recipient) -> DeliveryOutcome:
            async with semaphore:
                return await self._attempt(recipient, content, notification_id)

        # gather keeps input order, so the report is deterministic even when
        # attempts overlap.
        return list(await asyncio.gather(*(_bounded(r) for r in targets)))

    async def _attempt(
        self,
        recipient: Recipient,
        content: NotificationContent,
        notification_id: str,
    ) -> DeliveryOutcome:
        if recipient.token is None:
            return classify(recipient, None)

        attempt: TransportResult | BaseException
        try:
            call = self.transport.attempt(recipient.token, content, notification_id)
            if self.attempt_timeout is not None:
                attempt = await asyncio.wait_for(call, timeout=self.attempt_timeout)
            else:
                attempt = await call
        except asyncio.TimeoutError as e:
            logger.warning(
                f"Delivery to FID {recipient.fid} timed out after {self.attempt_timeout}s"
            )
            attempt = e
        except Exception as e:
            logger.error(f"Failed to deliver to FID {recipient.fid}: {str(e)}")
            attempt = e

        outcome = classify(recipient, attempt)
        logger.debug(f"FID {recipient.fid}: {outcome.kind.value}")
        return outcome

    def _log_summary(
        self, report: DispatchReport, audience: Audience, start: float
    ) -> None:
        try:
            entry = {
                "kind": "dispatch",
                "audience": type(audience).__name__,
                "outcome": "success" if report.success else "no_delivery",
                "targeted": report.targeted,
                "sent": report.sent,
                "failed": report.failed,
                "no_token": report.no_token,
                "rate_limited": report.rate_limited,
                "duration_ms": round((time.monotonic() - start) * 1000, 2),
                "dispatch_id": get_dispatch_id(),
            }
            logger.info(json.dumps(entry))
        except Exception:  # noqa: BLE001
            logger.debug("Failed to emit dispatch summary", exc_info=True)
