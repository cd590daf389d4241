import asyncio
import json
import time

import pytest
import websockets

from gatesdk import websocket as ws
from gatesdk.websocket import (
    MessageHandler,
    ping_message,
    run_with_callback,
    run_with_handler,
    subscribe_message,
    ws_url,
)


class FakeConnection:
    def __init__(self, messages, block_when_empty=False, fail_on_ping=False):
        self.messages = list(messages)
        self.block_when_empty = block_when_empty
        self.fail_on_ping = fail_on_ping
        self.sent = []
        self.closed = False

    async def send(self, text):
        self.sent.append(text)
        if self.fail_on_ping and json.loads(text)["channel"] == "futures.ping":
            raise ConnectionError("pipe closed")

    async def recv(self):
        if self.messages:
            return self.messages.pop(0)
        if self.block_when_empty:
            await asyncio.Event().wait()
        raise ConnectionError("stream ended")

    async def close(self):
        self.closed = True


@pytest.fixture
def fast(monkeypatch):
    monkeypatch.setattr(ws, "RETRY_DELAY", 0)
    monkeypatch.setattr(ws, "MAX_RETRY_DELAY", 0)
    monkeypatch.setattr(ws, "MAX_RETRY_ATTEMPTS", 1)
    return monkeypatch


def install(monkeypatch, connections):
    urls = []

    async def fake_connect(url):
        urls.append(url)
        item = connections.pop(0) if connections else OSError("refused")
        if isinstance(item, Exception):
            raise item
        return item

    monkeypatch.setattr(websockets, "connect", fake_connect)
    return urls


def test_ws_url():
    assert ws_url("fx-ws.gateio.ws") == "wss://fx-ws.gateio.ws/v4/ws/usdt"


def test_subscribe_message_shape():
    before = int(time.time())
    text = subscribe_message("1m", "BTC_USDT")
    decoded = json.loads(text)
    assert decoded["channel"] == "futures.candlesticks"
    assert decoded["event"] == "subscribe"
    assert decoded["payload"] == ["1m", "BTC_USDT"]
    assert before <= decoded["time"] <= int(time.time())
    assert text.startswith('{"channel":"futures.candlesticks","event":"subscribe"')


def test_ping_message_shape():
    decoded = json.loads(ping_message())
    assert decoded["channel"] == "futures.ping"
    assert abs(decoded["time"] - time.time()) < 5
    assert list(decoded) == ["channel", "time"]


def test_message_handler_is_abstract():
    with pytest.raises(TypeError):
        MessageHandler()


@pytest.mark.asyncio
async def test_callback_receives_text_messages(fast):
    connection = FakeConnection(['{"a":1}', b"\x00binary", '{"b":2}'])
    urls = install(fast, [connection])
    received = []

    async def callback(msg):
        received.append(msg)

    result = await run_with_callback("stream.example.com", "1m", "BTC_USDT", callback)

    assert result is None
    assert received == ['{"a":1}', '{"b":2}']
    assert urls == [ws_url("stream.example.com")]
    assert json.loads(connection.sent[0])["payload"] == ["1m", "BTC_USDT"]
    assert connection.closed


@pytest.mark.asyncio
async def test_handler_receives_text_messages(fast):
    install(fast, [FakeConnection(["first", "second"])])

    class Collector(MessageHandler):
        def __init__(self):
            self.seen = []

        async def handle(self, msg):
            self.seen.append(msg)

    collector = Collector()
    result = await run_with_handler("stream.example.com", "5m", "ETH_USDT", collector)
    assert result is None
    assert collector.seen == ["first", "second"]


@pytest.mark.asyncio
async def test_gives_up_after_max_attempts(fast):
    fast.setattr(ws, "MAX_RETRY_ATTEMPTS", 3)
    urls = install(fast, [])

    async def callback(msg):
        raise AssertionError("no message expected")

    result = await run_with_callback("stream.example.com", "1m", "BTC_USDT", callback)
    assert result is None
    assert urls == [ws_url("stream.example.com")] * 3


@pytest.mark.asyncio
async def test_successful_connection_resets_retry_count(fast):
    fast.setattr(ws, "MAX_RETRY_ATTEMPTS", 2)
    first = FakeConnection(["one"])
    second = FakeConnection(["two"])
    urls = install(fast, [OSError("refused"), first, second])
    received = []

    async def callback(msg):
        received.append(msg)

    result = await run_with_callback("stream.example.com", "1m", "BTC_USDT", callback)
    assert result is None
    assert received == ["one", "two"]
    assert len(urls) == 5
    assert first.closed and second.closed


@pytest.mark.asyncio
async def test_heartbeat_sent_when_quiet(fast):
    fast.setattr(ws, "HEARTBEAT_INTERVAL", 0.01)
    connection = FakeConnection([], block_when_empty=True, fail_on_ping=True)
    install(fast, [connection])

    async def callback(msg):
        raise AssertionError("no message expected")

    result = await asyncio.wait_for(
        run_with_callback("stream.example.com", "1m", "BTC_USDT", callback), timeout=5
    )
    assert result is None
    channels = [json.loads(text)["channel"] for text in connection.sent]
    assert channels == ["futures.candlesticks", "futures.ping"]
    assert connection.closed