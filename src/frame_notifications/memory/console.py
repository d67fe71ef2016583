"""Console transport for development debugging."""

from __future__ import annotations

import logging

from frame_notifications.delivery import (
    DeliveryToken,
    NotificationContent,
    TransportResult,
)
from frame_notifications.ports.transport import IPushTransport

logger = logging.getLogger(__name__)


class ConsolePushTransport(IPushTransport):
    """
    Development adapter that prints notifications instead of pushing them.
    """

    def __init__(self, output_to_stdout: bool = True):
        self.output_to_stdout = output_to_stdout

    async def attempt(
        self,
        token: DeliveryToken,
        content: NotificationContent,
        notification_id: str,
    ) -> TransportResult:
        output = [
            "═" * 50,
            "PUSH NOTIFICATION",
            f"Endpoint: {token.url}",
            f"Id:       {notification_id}",
            f"Title:    {content.title}",
            f"Body:     {content.body}",
        ]
        if content.target_url:
            output.append(f"Target:   {content.target_url}")
        output.append("═" * 50)

        full_output = "\n".join(output)
        logger.info(full_output)

        if self.output_to_stdout:
            print(full_output)

        return TransportResult.success()
