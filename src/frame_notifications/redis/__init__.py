"""Redis-backed recipient store."""

from __future__ import annotations

from .store import RedisRecipientStore

__all__ = ["RedisRecipientStore"]
