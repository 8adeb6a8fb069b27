"""Websocket connection that receives events and dispatches them to callbacks."""

from __future__ import annotations

import asyncio
import inspect
import logging
import threading
from collections.abc import Callable
from enum import Enum
from typing import Any
from urllib.parse import urlsplit

import websockets

from .events import Event, parse_event

logger = logging.getLogger(__name__)

Callback = Callable[[Event], Any]


def _event_key(event: Any) -> str:
    return event.value if isinstance(event, Enum) else str(event)


class Core:
    """Connects to the bot's websocket and routes events to registered callbacks."""

    def __init__(self, api: str, bot_qq: int, max_retry_count: int = 10) -> None:
        self.api = api
        self.api_url = urlsplit(api)
        self.bot_qq = bot_qq
        self.max_retry_count = max_retry_count
        self.retry_count = 0
        self._handlers: dict[str, list[Callback]] = {}
        self._lock = threading.Lock()
        self._panic_handler: Callable[[BaseException], Any] | None = None
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def ws_url(self) -> str:
        return f"ws://{self.api_url.netloc}/ws"

    def set_panic_handler(self, handler: Callable[[BaseException], Any] | None) -> None:
        """Set the function that receives exceptions raised by callbacks."""
        with self._lock:
            self._panic_handler = handler

    def on(self, event: Any, callback: Callback) -> None:
        """Register ``callback`` for events named ``event``."""
        with self._lock:
            self._handlers.setdefault(_event_key(event), []).append(callback)

    async def dispatch(self, raw: bytes | str) -> Event | None:
        """Decode one event and run its callbacks; returns None if it cannot be decoded."""
        try:
            event = parse_event(raw)
        except ValueError as exc:
            logger.error("error: %s", exc)
            return None
        with self._lock:
            callbacks = list(self._handlers.get(event.name, ()))
            handler = self._panic_handler
        try:
            for callback in callbacks:
                result = callback(event)
                if inspect.isawaitable(result):
                    await result
        except Exception as exc:
            if handler is not None:
                handler(exc)
            else:
                logger.debug("event handle function failed: %s", exc, exc_info=exc)
        return event

    async def listen_and_wait(self) -> None:
        """Receive events until cancelled, reconnecting after failures.

        Raises the last error once more than ``max_retry_count`` reconnects fail in a row.
        """
        while True:
            try:
                await self._session()
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                logger.debug("connection error: %s", exc)
                self.retry_count += 1
                if self.retry_count > self.max_retry_count:
                    logger.info("retry limit exceeded")
                    raise
                logger.warning("connection failed, reconnect attempt %d", self.retry_count)
                await asyncio.sleep(self.retry_count)

    async def _session(self) -> None:
        async with websockets.connect(self.ws_url) as ws:
            self.retry_count = 0
            logger.info("connected to %s", self.api_url.netloc)
            try:
                while True:
                    message = await ws.recv()
                    logger.debug("%s", message)
                    task = asyncio.create_task(self.dispatch(message))
                    self._tasks.add(task)
                    task.add_done_callback(self._tasks.discard)
            finally:
                pending = list(self._tasks)
                if pending:
                    await asyncio.gather(*pending, return_exceptions=True)