"""Metadata sanitization: keeps delivery tokens out of logs and the event log."""

from __future__ import annotations

from typing import Any

_DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset(
    {
        "token",
        "tokens",
        "successfultokens",
        "invalidtokens",
        "ratelimitedtokens",
        "api_key",
        "authorization",
        "secret",
        "signer_uuid",
        "signature",
    }
)


class MetadataSanitizer:
    """
    Returns copies of payloads with credential fields redacted.

    Notification urls and fids are kept; anything that lets a caller push to
    a user (tokens, keys, signatures) becomes ``"***"``.
    """

    def __init__(self, *, sensitive_fields: set[str] | None = None) -> None:
        sensitive = set(sensitive_fields or _DEFAULT_SENSITIVE_FIELDS)
        self._sensitive_fields = {f.lower() for f in sensitive}

    def sanitize(self, metadata: dict[str, Any]) -> dict[str, Any]:
        """Return a sanitized copy of metadata safe for logging."""
        return self._sanitize_dict(metadata)

    def _sanitize_dict(self, data: dict[str, Any]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, value in data.items():
            result[str(key)] = self._sanitize_value(value, str(key).lower())
        return result

    def _sanitize_value(self, value: Any, field_name: str | None = None) -> Any:
        if field_name is not None and field_name in self._sensitive_fields:
            return "***"
        if isinstance(value, dict):
            return self._sanitize_dict(value)
        if isinstance(value, list):
            return [self._sanitize_value(item) for item in value]
        return value


default_sanitizer = MetadataSanitizer()
