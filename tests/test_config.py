"""Tests for NotificationSettings."""

import pytest
from pydantic import ValidationError

from frame_notifications.config import NotificationSettings


def test_defaults(monkeypatch):
    monkeypatch.delenv("FRAME_NOTIFICATIONS_REDIS_URL", raising=False)
    settings = NotificationSettings(_env_file=None)

    assert settings.redis_url == "redis://localhost:6379/0"
    assert settings.key_prefix == "frames-v2-demo"
    assert settings.max_concurrency == 1
    assert settings.app_url is None


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("FRAME_NOTIFICATIONS_REDIS_URL", "redis://cache:6379/2")
    monkeypatch.setenv("FRAME_NOTIFICATIONS_MAX_CONCURRENCY", "8")
    monkeypatch.setenv("FRAME_NOTIFICATIONS_APP_URL", "https://gallery.example")

    settings = NotificationSettings(_env_file=None)

    assert settings.redis_url == "redis://cache:6379/2"
    assert settings.max_concurrency == 8
    assert settings.app_url == "https://gallery.example"


def test_rejects_zero_concurrency(monkeypatch):
    monkeypatch.setenv("FRAME_NOTIFICATIONS_MAX_CONCURRENCY", "0")

    with pytest.raises(ValidationError):
        NotificationSettings(_env_file=None)
