"""Redis implementation of the recipient store."""

from __future__ import annotations

import json
import logging
import time
import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from redis.exceptions import RedisError

from ..delivery import DeliveryToken, Recipient
from ..exceptions import StoreUnavailableError
from ..ports.recipients import IRecipientRegistry, IRecipientStore

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger("frame_notifications.redis_store")

EVENT_LOG_LIMIT = 1000


class RedisRecipientStore(IRecipientStore, IRecipientRegistry):
    """
    Recipient store over the mini app's key-value layout.

    Keys (``prefix`` defaults to ``frames-v2-demo``):
    - ``{prefix}:users-list``: set of known fids
    - ``{prefix}:user-info:{fid}``: JSON user info
    - ``{prefix}:user:{fid}``: JSON notification details ``{url, token}``
    - ``{prefix}:events``: list of JSON event entries, newest first
    """

    def __init__(self, redis_client: Redis[bytes], key_prefix: str = "frames-v2-demo") -> None:
        self._redis = redis_client
        self._key_prefix = key_prefix

    @classmethod
    def from_url(cls, url: str, key_prefix: str = "frames-v2-demo") -> RedisRecipientStore:
        from redis.asyncio import from_url

        return cls(from_url(url), key_prefix=key_prefix)

    # ── Keys ─────────────────────────────────────────────────────

    def _users_key(self) -> str:
        return f"{self._key_prefix}:users-list"

    def _info_key(self, fid: int) -> str:
        return f"{self._key_prefix}:user-info:{fid}"

    def _token_key(self, fid: int) -> str:
        return f"{self._key_prefix}:user:{fid}"

    def _events_key(self) -> str:
        return f"{self._key_prefix}:events"

    # ── Reads ────────────────────────────────────────────────────

    async def list_recipients(self) -> list[Recipient]:
        try:
            members = await self._redis.smembers(self._users_key())
            fids = sorted(int(m) for m in members or [])
            if not fids:
                return []
            infos = await self._redis.mget([self._info_key(fid) for fid in fids])
            tokens = await self._redis.mget([self._token_key(fid) for fid in fids])
        except RedisError as e:
            logger.error("Redis recipient listing failed: %s", e)
            raise StoreUnavailableError(f"Recipient store unavailable: {e}") from e

        recipients = []
        for fid, raw_info, raw_token in zip(fids, infos, tokens):
            if not raw_info:
                # Listed but never tracked; nothing to notify.
                continue
            info = _decode(raw_info, self._info_key(fid))
            if info is None:
                continue
            token = _token_from(raw_token, self._token_key(fid))
            recipients.append(_recipient_from(fid, info, token))
        return recipients

    async def get_delivery_token(self, fid: int) -> DeliveryToken | None:
        try:
            raw = await self._redis.get(self._token_key(fid))
        except RedisError as e:
            logger.error("Redis token lookup failed for FID %s: %s", fid, e)
            raise StoreUnavailableError(f"Recipient store unavailable: {e}") from e
        return _token_from(raw, self._token_key(fid))

    # ── Writes ───────────────────────────────────────────────────

    async def add_recipient(self, fid: int, username: str | None = None) -> None:
        now = _now()
        info = {
            "fid": fid,
            "username": username,
            "addedAt": now,
            "lastActivity": now,
            "hasNotifications": False,
            "eventsCount": 0,
        }
        await self._redis.set(self._info_key(fid), json.dumps(info))
        await self._redis.sadd(self._users_key(), fid)

    async def remove_recipient(self, fid: int) -> None:
        await self._redis.delete(self._info_key(fid))
        await self._redis.srem(self._users_key(), fid)
        await self._redis.delete(self._token_key(fid))
        logger.info("User %s removed from recipient store", fid)

    async def set_delivery_token(self, fid: int, token: DeliveryToken) -> None:
        payload = {"url": token.url, "token": token.token}
        await self._redis.set(self._token_key(fid), json.dumps(payload))
        await self._update_info(fid, hasNotifications=True)

    async def delete_delivery_token(self, fid: int) -> None:
        await self._redis.delete(self._token_key(fid))
        await self._update_info(fid, hasNotifications=False)

    async def log_event(
        self, fid: int, event: str, details: dict[str, Any] | None = None
    ) -> None:
        entry = {
            "id": f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}",
            "fid": fid,
            "event": event,
            "timestamp": _now(),
            "details": details,
        }
        try:
            await self._redis.lpush(self._events_key(), json.dumps(entry, default=str))
            await self._redis.ltrim(self._events_key(), 0, EVENT_LOG_LIMIT - 1)
        except RedisError as e:
            # The event log is diagnostic only.
            logger.warning("Redis event log write failed: %s", e)

    async def _update_info(self, fid: int, **updates: Any) -> None:
        raw = await self._redis.get(self._info_key(fid))
        if not raw:
            return
        info = _decode(raw, self._info_key(fid))
        if info is None:
            return
        info.update(updates)
        info["lastActivity"] = _now()
        info["eventsCount"] = int(info.get("eventsCount") or 0) + 1
        await self._redis.set(self._info_key(fid), json.dumps(info))


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _parse_time(value: Any) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def _decode(raw: bytes | str, key: str) -> dict[str, Any] | None:
    """Decode one stored JSON object; a corrupt record is logged and dropped."""
    try:
        data = json.loads(raw)
    except ValueError:
        logger.warning("Ignoring undecodable record at %s", key)
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring non-object record at %s", key)
        return None
    return data


def _token_from(raw: bytes | str | None, key: str) -> DeliveryToken | None:
    if not raw:
        return None
    data = _decode(raw, key)
    if data is None:
        return None
    url, token = data.get("url"), data.get("token")
    if not isinstance(url, str) or not isinstance(token, str) or not url or not token:
        return None
    return DeliveryToken(url=url, token=token)


def _recipient_from(fid: int, info: dict[str, Any], token: DeliveryToken | None) -> Recipient:
    return Recipient(
        fid=fid,
        username=info.get("username"),
        opted_in=bool(info.get("hasNotifications")),
        token=token,
        added_at=_parse_time(info.get("addedAt")),
        last_activity=_parse_time(info.get("lastActivity")),
    )
