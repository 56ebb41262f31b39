"""
Message passing between the interaction side and the application side.

The wheel's interaction code only produces plain, immutable messages. The
Dispatcher hands them to application-side subscribers, either right away
(direct mode) or through a queue the application drains on its own thread
(queued mode). Nothing mutable crosses the boundary.

A failing subscriber is logged and skipped; it never reaches the code that
posted the message. Posting with nobody subscribed is a silent no-op.
"""

from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from typing import Callable, Union

from .gestures import GesturePhase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaletteMessage:
    """All live handle colors, in handle order."""
    colors: tuple[str, ...]
    phase: GesturePhase


@dataclass(frozen=True)
class ActiveHexMessage:
    """Color of the selected handle."""
    hex: str


@dataclass(frozen=True)
class ActiveHandleMessage:
    """Index of the handle a gesture selected."""
    index: int


Message = Union[PaletteMessage, ActiveHexMessage, ActiveHandleMessage]


class Dispatcher:
    """
    Delivers wheel messages to subscribers.

    Usage:
        dispatcher = Dispatcher(queued=True)
        dispatcher.subscribe(PaletteMessage, lambda m: print(m.colors))
        dispatcher.post(PaletteMessage(("#FF0000",), GesturePhase.SET))
        dispatcher.drain()  # on the application thread
    """

    def __init__(self, queued: bool = False):
        self.queued = queued
        self._subscribers: dict[type, list[Callable[[Message], None]]] = {}
        self._queue: queue.SimpleQueue[Message] = queue.SimpleQueue()
        self._lock = threading.Lock()
        self._closed = False

    def subscribe(self, message_type: type, callback: Callable[[Message], None]) -> None:
        """Register a callback for one message type."""
        with self._lock:
            self._subscribers.setdefault(message_type, []).append(callback)

    def unsubscribe(self, message_type: type, callback: Callable[[Message], None]) -> None:
        """Remove a previously registered callback."""
        with self._lock:
            callbacks = self._subscribers.get(message_type)
            if callbacks and callback in callbacks:
                callbacks.remove(callback)

    def post(self, message: Message) -> None:
        """Send a message (queued or delivered immediately)."""
        if self._closed:
            return
        if self.queued:
            self._queue.put(message)
        else:
            self._deliver(message)

    def drain(self, max_messages: int | None = None) -> int:
        """
        Deliver queued messages on the calling thread.

        Returns:
            Number of messages delivered
        """
        delivered = 0
        while max_messages is None or delivered < max_messages:
            try:
                message = self._queue.get_nowait()
            except queue.Empty:
                break
            self._deliver(message)
            delivered += 1
        return delivered

    @property
    def pending(self) -> int:
        """Messages waiting in the queue."""
        return self._queue.qsize()

    def close(self) -> None:
        """Stop accepting messages and drop anything still queued."""
        self._closed = True
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                break

    def _deliver(self, message: Message) -> None:
        if self._closed:
            return
        with self._lock:
            callbacks = list(self._subscribers.get(type(message), ()))
        if not callbacks:
            logger.debug("No subscriber for %s, dropped", type(message).__name__)
            return
        for callback in callbacks:
            try:
                callback(message)
            except Exception:
                logger.exception("Subscriber failed handling %s", type(message).__name__)
