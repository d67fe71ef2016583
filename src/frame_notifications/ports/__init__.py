"""Port definitions for the notification engine."""

from __future__ import annotations

from .recipients import IRecipientRegistry, IRecipientStore
from .transport import IPushTransport

__all__ = [
    "IRecipientStore",
    "IRecipientRegistry",
    "IPushTransport",
]
