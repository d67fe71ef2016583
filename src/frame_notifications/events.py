"""Mini-app lifecycle events: keeps the recipient store in step with clients."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .delivery import DeliveryOutcome, DeliveryToken, NotificationContent, Recipient
from .sanitization import MetadataSanitizer, default_sanitizer

if TYPE_CHECKING:
    from .dispatcher import BatchDispatcher
    from .ports.recipients import IRecipientRegistry

logger = logging.getLogger(__name__)

WELCOME_ADDED = NotificationContent(
    title="Welcome to 0ffline Viewer!",
    body="Mini app added to client. You can now receive notifications.",
)
WELCOME_ENABLED = NotificationContent(
    title="Ding ding ding",
    body="Notifications are now enabled! Stay tuned for updates.",
)


class NotificationDetails(BaseModel):
    """Endpoint and token a client hands over when notifications are enabled."""

    model_config = ConfigDict(frozen=True)

    url: str
    token: str = Field(repr=False)

    def to_token(self) -> DeliveryToken:
        return DeliveryToken(url=self.url, token=self.token)


class FrameAdded(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    event: Literal["frame_added"] = "frame_added"
    notification_details: NotificationDetails | None = Field(
        default=None, alias="notificationDetails"
    )


class FrameRemoved(BaseModel):
    model_config = ConfigDict(frozen=True)

    event: Literal["frame_removed"] = "frame_removed"


class NotificationsEnabled(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    event: Literal["notifications_enabled"] = "notifications_enabled"
    notification_details: NotificationDetails = Field(alias="notificationDetails")


class NotificationsDisabled(BaseModel):
    model_config = ConfigDict(frozen=True)

    event: Literal["notifications_disabled"] = "notifications_disabled"


FrameEvent = Annotated[
    Union[FrameAdded, FrameRemoved, NotificationsEnabled, NotificationsDisabled],
    Field(discriminator="event"),
]

_frame_event_adapter: TypeAdapter[Any] = TypeAdapter(FrameEvent)


def parse_frame_event(payload: dict[str, Any]) -> FrameEvent:
    """Parse the decoded ``event`` object of a verified webhook request."""
    return _frame_event_adapter.validate_python(payload)  # type: ignore[no-any-return]


class FrameEventHandler:
    """
    Applies lifecycle events to the recipient registry.

    Signature verification happens before this handler is reached. Welcome
    notifications go through the dispatcher so their outcome is classified
    like any other delivery and never raises.
    """

    def __init__(
        self,
        registry: IRecipientRegistry,
        dispatcher: BatchDispatcher,
        send_welcome: bool = True,
        sanitizer: MetadataSanitizer | None = None,
    ):
        self.registry = registry
        self.dispatcher = dispatcher
        self.send_welcome = send_welcome
        self.sanitizer = sanitizer or default_sanitizer

    async def handle(self, fid: int, event: FrameEvent) -> DeliveryOutcome | None:
        """Apply ``event`` for ``fid``; returns the welcome outcome when one was sent."""
        await self.registry.log_event(
            fid, event.event, self.sanitizer.sanitize(event.model_dump(by_alias=True))
        )

        if isinstance(event, FrameAdded):
            await self.registry.add_recipient(fid)
            if event.notification_details is None:
                await self.registry.delete_delivery_token(fid)
                return None
            token = event.notification_details.to_token()
            await self.registry.set_delivery_token(fid, token)
            return await self._welcome(fid, token, WELCOME_ADDED)

        if isinstance(event, FrameRemoved):
            await self.registry.delete_delivery_token(fid)
            await self.registry.remove_recipient(fid)
            return None

        if isinstance(event, NotificationsEnabled):
            token = event.notification_details.to_token()
            await self.registry.set_delivery_token(fid, token)
            return await self._welcome(fid, token, WELCOME_ENABLED)

        await self.registry.delete_delivery_token(fid)
        return None

    async def _welcome(
        self, fid: int, token: DeliveryToken, content: NotificationContent
    ) -> DeliveryOutcome | None:
        if not self.send_welcome:
            return None
        outcome = await self.dispatcher.send_one(
            Recipient(fid=fid, opted_in=True, token=token), content
        )
        logger.info(f"Welcome notification to FID {fid}: {outcome.kind.value}")
        return outcome
