"""Streaming candlestick subscription with heartbeats and reconnection."""

from __future__ import annotations

import asyncio
import json
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any

import websockets

logger = logging.getLogger(__name__)

HEARTBEAT_INTERVAL = 20
RETRY_DELAY = 5
MAX_RETRY_ATTEMPTS = 10
MAX_RETRY_DELAY = 60

MessageCallback = Callable[[str], Awaitable[None]]


class MessageHandler(ABC):
    """Receives every text message delivered by the stream."""

    @abstractmethod
    async def handle(self, msg: str) -> None:
        """Process one text message."""


def ws_url(wss_domain: str) -> str:
    """Return the USDT futures stream URL for a host."""
    return f"wss://{wss_domain}/v4/ws/usdt"


def _encode(message: dict[str, Any]) -> str:
    return json.dumps(message, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


def subscribe_message(interval: str, symbol: str) -> str:
    """Build the candlestick subscription request."""
    return _encode(
        {
            "time": int(time.time()),
            "channel": "futures.candlesticks",
            "event": "subscribe",
            "payload": [interval, symbol],
        }
    )


def ping_message() -> str:
    """Build the application-level heartbeat message."""
    return _encode({"channel": "futures.ping", "time": int(time.time())})


async def _close_quietly(connection: Any) -> None:
    try:
        await connection.close()
    except Exception:  # noqa: BLE001 - the connection is being dropped anyway
        pass


async def _pump(connection: Any, dispatch: MessageCallback) -> None:
    """Relay messages until the connection fails; ping whenever it goes quiet."""
    while True:
        try:
            message = await asyncio.wait_for(connection.recv(), HEARTBEAT_INTERVAL)
        except asyncio.TimeoutError:
            try:
                await connection.send(ping_message())
            except Exception as exc:
                logger.warning("heartbeat failed: %r", exc)
                return
            continue
        except Exception as exc:
            logger.warning("receiving a WebSocket message failed: %r", exc)
            return
        if isinstance(message, str):
            await dispatch(message)


async def _run(wss_domain: str, interval: str, symbol: str, dispatch: MessageCallback) -> None:
    logger.info("initialising Gate WebSocket")
    retry_count = 0
    retry_delay = RETRY_DELAY

    while True:
        try:
            connection = await websockets.connect(ws_url(wss_domain))
        except Exception as exc:
            logger.warning("connection failed: %r", exc)
        else:
            try:
                try:
                    await connection.send(subscribe_message(interval, symbol))
                except Exception as exc:
                    logger.warning("subscription failed: %r", exc)
                    continue
                retry_count = 0
                retry_delay = RETRY_DELAY
                await _pump(connection, dispatch)
            finally:
                await _close_quietly(connection)

        retry_count += 1
        if retry_count >= MAX_RETRY_ATTEMPTS:
            logger.error("maximum number of retries reached, giving up")
            return
        logger.info("reconnecting in %s seconds", retry_delay)
        await asyncio.sleep(retry_delay)
        retry_delay = min(retry_delay * 2, MAX_RETRY_DELAY)


async def run_with_handler(
    wss_domain: str, interval: str, symbol: str, handler: MessageHandler
) -> None:
    """Stream candlesticks for a symbol, passing each text message to the handler."""
    await _run(wss_domain, interval, symbol, handler.handle)


async def run_with_callback(
    wss_domain: str, interval: str, symbol: str, callback: MessageCallback
) -> None:
    """Stream candlesticks for a symbol, passing each text message to the callback."""
    await _run(wss_domain, interval, symbol, callback)