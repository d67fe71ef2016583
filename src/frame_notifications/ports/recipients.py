"""Recipient store ports."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ..delivery import DeliveryToken, Recipient


@runtime_checkable
class IRecipientStore(Protocol):
    """
    Read side of the recipient store, all the dispatcher ever needs.

    Implementations: InMemoryRecipientStore, RedisRecipientStore.
    """

    async def list_recipients(self) -> list[Recipient]:
        """
        Return every known recipient with its opt-in flag and token.

        Raises StoreUnavailableError when the backing store cannot be reached.
        """
        ...

    async def get_delivery_token(self, fid: int) -> DeliveryToken | None:
        """Resolve one recipient's delivery token, None when not registered."""
        ...


@runtime_checkable
class IRecipientRegistry(Protocol):
    """Write side of the recipient store, driven by mini-app lifecycle events."""

    async def add_recipient(self, fid: int, username: str | None = None) -> None:
        """Register a recipient (opted out until a token is stored)."""
        ...

    async def remove_recipient(self, fid: int) -> None:
        """Forget a recipient together with its token."""
        ...

    async def set_delivery_token(self, fid: int, token: DeliveryToken) -> None:
        """Store a token and mark the recipient as opted in."""
        ...

    async def delete_delivery_token(self, fid: int) -> None:
        """Clear a token and mark the recipient as opted out."""
        ...

    async def log_event(
        self, fid: int, event: str, details: dict[str, Any] | None = None
    ) -> None:
        """Append an entry to the event log."""
        ...
