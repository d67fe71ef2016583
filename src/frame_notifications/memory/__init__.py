"""Memory adapters for testing and development."""

from __future__ import annotations

from .console import ConsolePushTransport
from .fake import InMemoryPushTransport, InMemoryRecipientStore

__all__ = ["ConsolePushTransport", "InMemoryPushTransport", "InMemoryRecipientStore"]
