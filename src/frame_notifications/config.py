"""Runtime settings for the notification service, read from the environment."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class NotificationSettings(BaseSettings):
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        alias="FRAME_NOTIFICATIONS_REDIS_URL",
    )
    key_prefix: str = Field(default="frames-v2-demo", alias="FRAME_NOTIFICATIONS_KEY_PREFIX")
    app_url: str | None = Field(default=None, alias="FRAME_NOTIFICATIONS_APP_URL")
    transport_timeout: float = Field(default=10.0, alias="FRAME_NOTIFICATIONS_TRANSPORT_TIMEOUT")
    attempt_timeout: float | None = Field(
        default=15.0,
        alias="FRAME_NOTIFICATIONS_ATTEMPT_TIMEOUT",
    )
    max_concurrency: int = Field(default=1, ge=1, alias="FRAME_NOTIFICATIONS_MAX_CONCURRENCY")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )
