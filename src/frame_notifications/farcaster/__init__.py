"""Farcaster mini-app push transport."""

from __future__ import annotations

from .transport import FarcasterPushTransport

__all__ = ["FarcasterPushTransport"]
