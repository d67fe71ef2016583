"""Dispatch ID management: ties log lines of one batch together."""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

_dispatch_id: ContextVar[str | None] = ContextVar("dispatch_id", default=None)


def get_dispatch_id() -> str | None:
    """Get current dispatch ID from context."""
    return _dispatch_id.get()


def set_dispatch_id(dispatch_id: str | None) -> Token[str | None]:
    """Set dispatch ID in context; the returned token restores the previous one."""
    return _dispatch_id.set(dispatch_id)


def reset_dispatch_id(token: Token[str | None]) -> None:
    """Restore the dispatch ID that was current before ``set_dispatch_id``."""
    _dispatch_id.reset(token)


def generate_dispatch_id() -> str:
    """Generate a new dispatch ID.

    The same value is sent to the push API as the notification id, which the
    Farcaster clients use to de-duplicate deliveries.
    """
    return str(uuid.uuid4())
