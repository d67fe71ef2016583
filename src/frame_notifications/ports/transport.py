"""Push transport port."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..delivery import DeliveryToken, NotificationContent, TransportResult


@runtime_checkable
class IPushTransport(Protocol):
    """
    Port for delivering one notification to one registered token.

    Delivery problems are reported through the returned TransportResult.
    Implementations may still raise for network errors; the dispatcher
    classifies those as failed deliveries.
    """

    async def attempt(
        self,
        token: DeliveryToken,
        content: NotificationContent,
        notification_id: str,
    ) -> TransportResult:
        """Attempt delivery and report what the push API said."""
        ...
