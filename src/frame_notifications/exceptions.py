"""Exception hierarchy for frame notifications."""

from __future__ import annotations


class NotificationError(Exception):
    """Root exception for the notification toolkit."""


class CompositionError(NotificationError):
    """Base class for errors raised while building a notification."""


class UnknownIntentError(CompositionError):
    """Raised when a notification intent name is not recognised."""

    def __init__(self, intent: str) -> None:
        self.intent = intent
        super().__init__(f"Unknown notification intent {intent!r}")


class MissingParameterError(CompositionError):
    """Raised when an intent is composed without one of its required fields."""

    def __init__(self, intent: str, field: str) -> None:
        self.intent = intent
        self.field = field
        super().__init__(f"{intent} notifications require {field}")


class InvalidParameterError(CompositionError):
    """Raised when an intent parameter is present but has an unusable value."""

    def __init__(self, intent: str, field: str, reason: str) -> None:
        self.intent = intent
        self.field = field
        self.reason = reason
        super().__init__(f"{intent} notifications: {field} {reason}")


class InvalidContentError(CompositionError):
    """Raised when a title, body or target url falls outside its bounds.

    Carries structured errors: ``{field: [messages]}``.
    """

    def __init__(self, errors: dict[str, list[str]]) -> None:
        self.errors = errors
        super().__init__(str(self.errors))


class StoreUnavailableError(NotificationError):
    """Raised when the recipient store cannot be read."""


class TransportError(NotificationError):
    """Raised when a push transport is unusable (misconfiguration, not delivery)."""
