"""Bulk push notifications for Farcaster mini apps: compose, fan out, report."""

from __future__ import annotations

from .audience import AllOptedIn, Audience, FollowersOf
from .classifier import classify
from .composer import Composition, NotificationIntent, compose
from .config import NotificationSettings
from .delivery import (
    DeliveryOutcome,
    DeliveryToken,
    DispatchReport,
    Failed,
    NoToken,
    NotificationContent,
    OutcomeKind,
    RateLimited,
    Recipient,
    ReportBuilder,
    Sent,
    TransportResult,
    TransportStatus,
)
from .dispatcher import BatchDispatcher
from .events import FrameEventHandler, parse_frame_event
from .exceptions import (
    CompositionError,
    InvalidContentError,
    InvalidParameterError,
    MissingParameterError,
    NotificationError,
    StoreUnavailableError,
    TransportError,
    UnknownIntentError,
)

# Memory adapters for testing
from .memory.console import ConsolePushTransport
from .memory.fake import InMemoryPushTransport, InMemoryRecipientStore
from .ports.recipients import IRecipientRegistry, IRecipientStore
from .ports.transport import IPushTransport
from .sanitization import MetadataSanitizer
from .service import NotificationService, NotificationStats

__all__ = [
    "AllOptedIn",
    "Audience",
    "FollowersOf",
    "classify",
    "Composition",
    "NotificationIntent",
    "compose",
    "NotificationSettings",
    "DeliveryOutcome",
    "DeliveryToken",
    "DispatchReport",
    "Failed",
    "NoToken",
    "NotificationContent",
    "OutcomeKind",
    "RateLimited",
    "Recipient",
    "ReportBuilder",
    "Sent",
    "TransportResult",
    "TransportStatus",
    "BatchDispatcher",
    "FrameEventHandler",
    "parse_frame_event",
    "CompositionError",
    "InvalidContentError",
    "InvalidParameterError",
    "MissingParameterError",
    "NotificationError",
    "StoreUnavailableError",
    "TransportError",
    "UnknownIntentError",
    "ConsolePushTransport",
    "InMemoryPushTransport",
    "InMemoryRecipientStore",
    "IRecipientRegistry",
    "IRecipientStore",
    "IPushTransport",
    "MetadataSanitizer",
    "NotificationService",
    "NotificationStats",
]
