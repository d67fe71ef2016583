"""Tests for in-memory adapters."""

import pytest

from frame_notifications.delivery import DeliveryToken, TransportResult, TransportStatus
from frame_notifications.exceptions import StoreUnavailableError
from frame_notifications.memory.console import ConsolePushTransport
from frame_notifications.memory.fake import InMemoryPushTransport, InMemoryRecipientStore

TOKEN = DeliveryToken(url="https://example.com/notify", token="abc")


@pytest.mark.asyncio
async def test_in_memory_transport_records_attempts(content):
    transport = InMemoryPushTransport()

    result = await transport.attempt(TOKEN, content, "notif-1")

    assert result.status is TransportStatus.SUCCESS
    assert len(transport.attempts) == 1
    assert transport.attempts[0].notification_id == "notif-1"
    assert transport.attempts[0].content == content


@pytest.mark.asyncio
async def test_in_memory_transport_replays_scripted_results(content):
    transport = InMemoryPushTransport(results={"abc": TransportResult.rate_limited()})

    result = await transport.attempt(TOKEN, content, "notif-1")

    assert result.status is TransportStatus.RATE_LIMITED


@pytest.mark.asyncio
async def test_in_memory_transport_raises_scripted_exceptions(content):
    transport = InMemoryPushTransport(results={"abc": ConnectionError("down")})

    with pytest.raises(ConnectionError):
        await transport.attempt(TOKEN, content, "notif-1")

    assert transport.attempted_tokens == ["abc"]


@pytest.mark.asyncio
async def test_in_memory_transport_assert_attempted_failure(content):
    transport = InMemoryPushTransport()
    await transport.attempt(TOKEN, content, "notif-1")

    with pytest.raises(AssertionError) as exc_info:
        transport.assert_attempted("abc", count=2)

    assert "Expected 2 attempts" in str(exc_info.value)


@pytest.mark.asyncio
async def test_in_memory_transport_clear(content):
    transport = InMemoryPushTransport()
    await transport.attempt(TOKEN, content, "notif-1")

    transport.clear()

    assert transport.attempts == []


@pytest.mark.asyncio
async def test_in_memory_store_registry_roundtrip():
    store = InMemoryRecipientStore()

    await store.add_recipient(10, username="ana")
    assert (await store.list_recipients())[0].opted_in is False

    await store.set_delivery_token(10, TOKEN)
    [recipient] = await store.list_recipients()
    assert recipient.opted_in is True
    assert recipient.username == "ana"
    assert await store.get_delivery_token(10) == TOKEN

    await store.delete_delivery_token(10)
    assert await store.get_delivery_token(10) is None

    await store.remove_recipient(10)
    assert await store.list_recipients() == []


@pytest.mark.asyncio
async def test_in_memory_store_unavailable():
    store = InMemoryRecipientStore()
    store.unavailable = True

    with pytest.raises(StoreUnavailableError):
        await store.list_recipients()
    with pytest.raises(StoreUnavailableError):
        await store.get_delivery_token(1)


@pytest.mark.asyncio
async def test_console_transport_prints(content, capsys):
    transport = ConsolePushTransport()

    result = await transport.attempt(TOKEN, content, "notif-1")

    assert result.status is TransportStatus.SUCCESS
    out = capsys.readouterr().out
    assert "Test Title" in out
    assert "notif-1" in out
    assert "https://example.com/notify" in out


@pytest.mark.asyncio
async def test_console_transport_can_stay_quiet(content, capsys):
    transport = ConsolePushTransport(output_to_stdout=False)

    await transport.attempt(TOKEN, content, "notif-1")

    assert capsys.readouterr().out == ""
