"""Tests for the in-memory mock transport."""

import asyncio
import threading

import pytest

from mail_compose import Sender, new_message, set_html_from_string, set_plain_from_string, to
from mail_compose.mock import MockSender


def require_plain(msg):
    if msg.plain is None:
        raise ValueError("plain body required")


@pytest.fixture
def message():
    return new_message("f@example.com", "Hello", to("a@example.com"), set_plain_from_string("hi"))


def test_mock_sender_satisfies_sender_interface():
    assert isinstance(MockSender(), Sender)


@pytest.mark.asyncio
async def test_default_configuration_accepts_everything(message):
    sender = MockSender()

    await sender.send(message)
    await sender.send(message)

    assert sender.message_count == 2
    assert sender.sent == [message, message]


@pytest.mark.asyncio
async def test_fixed_error_fails_every_call_and_counts(message):
    error = ConnectionError("smtp down")
    sender = MockSender(error=error)

    for expected in (1, 2, 3):
        with pytest.raises(ConnectionError) as excinfo:
            await sender.send(message)
        assert excinfo.value is error
        assert sender.message_count == expected
    assert sender.sent == []


@pytest.mark.asyncio
async def test_reset_zeroes_count_and_keeps_configuration(message):
    error = ConnectionError("smtp down")
    sender = MockSender(error=error)
    with pytest.raises(ConnectionError):
        await sender.send(message)

    sender.reset()

    assert sender.message_count == 0
    with pytest.raises(ConnectionError):
        await sender.send(message)


@pytest.mark.asyncio
async def test_reset_applies_replacement_configuration(message):
    sender = MockSender(error=ConnectionError("smtp down"))
    with pytest.raises(ConnectionError):
        await sender.send(message)

    sender.reset(error=None, validator=require_plain)
    await sender.send(message)

    assert sender.message_count == 1
    assert sender.sent == [message]


@pytest.mark.asyncio
async def test_set_error_switches_behaviour(message):
    sender = MockSender()
    await sender.send(message)

    error = TimeoutError("slow")
    sender.set_error(error)
    with pytest.raises(TimeoutError):
        await sender.send(message)

    sender.set_error(None)
    await sender.send(message)
    assert sender.message_count == 3


@pytest.mark.asyncio
async def test_validator_rejects_html_only_message():
    sender = MockSender(validator=require_plain)
    html_only = new_message("f@example.com", "s", to("a@example.com"), set_html_from_string("<p>hi</p>"))

    with pytest.raises(ValueError, match="plain body required"):
        await sender.send(html_only)

    assert sender.message_count == 1
    assert sender.sent == []


@pytest.mark.asyncio
async def test_error_takes_precedence_over_validator(message):
    calls = []
    error = RuntimeError("fixed")
    sender = MockSender(validator=calls.append, error=error)

    with pytest.raises(RuntimeError) as excinfo:
        await sender.send(message)

    assert excinfo.value is error
    assert calls == []


@pytest.mark.asyncio
async def test_concurrent_tasks_are_all_counted(message):
    sender = MockSender()

    await asyncio.gather(*(sender.send(message) for _ in range(100)))

    assert sender.message_count == 100


def test_concurrent_threads_are_all_counted(message):
    sender = MockSender()

    def worker():
        for _ in range(25):
            asyncio.run(sender.send(message))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sender.message_count == 200
    assert len(sender.sent) == 200
