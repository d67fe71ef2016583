"""NotificationService: the entry point notification call sites are handed."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .audience import AllOptedIn
from .composer import NotificationIntent, compose
from .delivery import DeliveryOutcome, DispatchReport, NotificationContent, Recipient
from .dispatcher import BatchDispatcher
from .exceptions import StoreUnavailableError

if TYPE_CHECKING:
    from .audience import Audience
    from .config import NotificationSettings
    from .ports.recipients import IRecipientStore
    from .ports.transport import IPushTransport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationStats:
    """Opt-in figures for the admin dashboard."""

    total_users: int
    users_with_notifications: int
    notification_rate: float


class NotificationService:
    """
    Composes and dispatches gallery notifications.

    Build one at process start and pass it to whatever sends notifications;
    there is no module-level instance.
    """

    def __init__(
        self,
        store: IRecipientStore,
        transport: IPushTransport,
        dispatcher: BatchDispatcher | None = None,
    ):
        self.store = store
        self.transport = transport
        self.dispatcher = dispatcher or BatchDispatcher(store, transport)

    @classmethod
    def from_settings(cls, settings: NotificationSettings) -> NotificationService:
        """Wire the Redis store and Farcaster transport from configuration."""
        from .farcaster.transport import FarcasterPushTransport
        from .redis.store import RedisRecipientStore

        store = RedisRecipientStore.from_url(settings.redis_url, key_prefix=settings.key_prefix)
        transport = FarcasterPushTransport(
            default_target_url=settings.app_url,
            timeout=settings.transport_timeout,
        )
        dispatcher = BatchDispatcher(
            store,
            transport,
            max_concurrency=settings.max_concurrency,
            attempt_timeout=settings.attempt_timeout,
        )
        return cls(store, transport, dispatcher=dispatcher)

    async def send(
        self, intent: NotificationIntent | str, parameters: Mapping[str, Any]
    ) -> DispatchReport:
        """
        Compose ``intent`` and dispatch it.

        MissingParameterError is raised before anything is sent.
        StoreUnavailableError propagates.
        """
        composition = compose(intent, parameters)
        return await self.dispatcher.dispatch(composition.audience, composition.content)

    async def broadcast(
        self, audience: Audience, content: NotificationContent
    ) -> DispatchReport:
        """
        Dispatch for operator-facing callers.

        A store outage comes back as an unsuccessful report carrying the error
        instead of an exception.
        """
        try:
            return await self.dispatcher.dispatch(audience, content)
        except StoreUnavailableError as e:
            logger.error(f"Broadcast aborted: {str(e)}")
            return DispatchReport.store_failure(e)

    async def send_to_all_users(self, content: NotificationContent) -> DispatchReport:
        return await self.broadcast(AllOptedIn(), content)

    async def send_to_user(self, fid: int, content: NotificationContent) -> DeliveryOutcome:
        """Deliver to one recipient by FID, whether or not it appears in the user list."""
        token = await self.store.get_delivery_token(fid)
        recipient = Recipient(fid=fid, opted_in=token is not None, token=token)
        return await self.dispatcher.send_one(recipient, content)

    async def get_stats(self) -> NotificationStats:
        recipients = await self.store.list_recipients()
        total = len(recipients)
        enabled = sum(1 for r in recipients if r.opted_in)
        return NotificationStats(
            total_users=total,
            users_with_notifications=enabled,
            notification_rate=(enabled / total) * 100 if total else 0.0,
        )

    async def has_notifications_enabled(self, fid: int) -> bool:
        try:
            return await self.store.get_delivery_token(fid) is not None
        except StoreUnavailableError:
            logger.warning(f"Could not check notification status for FID {fid}")
            return False
