"""Test configuration for frame-notifications."""

import pytest

from frame_notifications.delivery import DeliveryToken, NotificationContent, Recipient

pytest_plugins = ["pytest_asyncio"]

NOTIFY_URL = "https://api.warpcast.com/v1/frame-notifications"


def _recipient(fid: int, *, opted_in: bool = True, with_token: bool = True) -> Recipient:
    token = DeliveryToken(url=NOTIFY_URL, token=f"token-{fid}")
    return Recipient(
        fid=fid,
        username=f"user{fid}",
        opted_in=opted_in,
        token=token if with_token else None,
    )


@pytest.fixture
def make_recipient():
    """Factory for recipients whose token string is ``token-{fid}``."""
    return _recipient


@pytest.fixture
def content():
    """Sample notification content."""
    return NotificationContent(title="Test Title", body="Test message body")


@pytest.fixture
def recipients():
    """Five opted-in recipients with tokens."""
    return [_recipient(fid) for fid in range(1, 6)]
