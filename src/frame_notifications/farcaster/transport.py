"""Farcaster mini-app notification transport using httpx."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..delivery import DeliveryToken, NotificationContent, TransportResult
from ..exceptions import TransportError
from ..ports.transport import IPushTransport
from ..sanitization import MetadataSanitizer, default_sanitizer

logger = logging.getLogger(__name__)


class FarcasterPushTransport(IPushTransport):
    """
    Posts one notification to the endpoint a Farcaster client registered.

    The client answers with the tokens it accepted, rejected as invalid, or
    throttled:
    ``{"result": {"successfulTokens": [], "invalidTokens": [], "rateLimitedTokens": []}}``
    """

    def __init__(
        self,
        default_target_url: str | None = None,
        timeout: float = 10.0,
        user_agent: str = "frame-notifications/0.1.0",
        http_transport: httpx.AsyncBaseTransport | None = None,
        sanitizer: MetadataSanitizer | None = None,
    ):
        self.default_target_url = default_target_url
        self.timeout = timeout
        self.user_agent = user_agent
        self.http_transport = http_transport
        self.sanitizer = sanitizer or default_sanitizer

    def build_payload(
        self,
        token: DeliveryToken,
        content: NotificationContent,
        notification_id: str,
    ) -> dict[str, Any]:
        """Request body for one token."""
        payload: dict[str, Any] = {
            "notificationId": notification_id,
            "title": content.title,
            "body": content.body,
            "tokens": [token.token],
        }
        target_url = content.target_url or self.default_target_url
        if target_url:
            payload["targetUrl"] = target_url
        return payload

    async def attempt(
        self,
        token: DeliveryToken,
        content: NotificationContent,
        notification_id: str,
    ) -> TransportResult:
        if not token.url.startswith(("https://", "http://")):
            raise TransportError(f"Unsupported notification endpoint {token.url!r}")

        payload = self.build_payload(token, content, notification_id)
        logger.debug(f"POST {token.url} {self.sanitizer.sanitize(payload)}")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.http_transport
            ) as client:
                response = await client.post(
                    token.url,
                    json=payload,
                    headers={"User-Agent": self.user_agent},
                )
        except httpx.TimeoutException:
            logger.error(f"Notification request to {token.url} timed out")
            return TransportResult.error(f"Request timed out after {self.timeout}s")
        except httpx.HTTPError as e:
            logger.error(f"Failed to reach notification endpoint {token.url}: {str(e)}")
            return TransportResult.error(str(e))

        if response.status_code == 429:
            logger.warning(f"Rate limited by {token.url}")
            return TransportResult.rate_limited()
        if response.is_error:
            logger.error(
                f"Notification HTTP error: {response.status_code} - {self._loggable_body(response)}"
            )
            return TransportResult.error(f"HTTP {response.status_code}")

        return self._parse_result(token, response)

    def _parse_result(self, token: DeliveryToken, response: httpx.Response) -> TransportResult:
        try:
            result = response.json()["result"]
            if not isinstance(result, dict):
                raise TypeError("result is not an object")
        except (ValueError, KeyError, TypeError):
            logger.error(f"Unexpected notification response: {self._loggable_body(response)}")
            return TransportResult.error("Malformed response from notification endpoint")

        if token.token in (result.get("successfulTokens") or []):
            return TransportResult.success()
        if token.token in (result.get("invalidTokens") or []):
            return TransportResult.no_token()
        if token.token in (result.get("rateLimitedTokens") or []):
            return TransportResult.rate_limited()
        return TransportResult.error("Token missing from notification response")

    def _loggable_body(self, response: httpx.Response) -> str:
        # Raw bodies may echo tokens; only sanitized JSON objects are logged.
        try:
            body = response.json()
        except ValueError:
            return f"<{len(response.content)} bytes>"
        if isinstance(body, dict):
            return str(self.sanitizer.sanitize(body))
        return f"<{type(body).__name__}>"
