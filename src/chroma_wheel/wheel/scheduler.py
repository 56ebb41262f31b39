"""
Two-tier emission scheduler for wheel updates.

Pointer moves arrive far faster than the rest of an application wants to
re-render, so updates are rate-limited per stream:

- Palette stream (all handle colors), default 30 fps
- Active-hex stream (selected color readout), default 60 fps

Each stream emits immediately if its interval has passed since the last
emission; otherwise it keeps exactly one trailing timer for the remaining
delay and the newest value replaces any older pending one.

Gesture begin/end and programmatic sets skip throttling: they emit at once
and cancel any pending trailing timer, so the first and last frame of every
interaction always reach the consumer.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Protocol, Sequence

from .dispatcher import (
    ActiveHandleMessage,
    ActiveHexMessage,
    Dispatcher,
    PaletteMessage,
)
from .gestures import GesturePhase

logger = logging.getLogger(__name__)

DEFAULT_PALETTE_FPS = 30.0
DEFAULT_ACTIVE_HEX_FPS = 60.0

# Phases that always emit immediately
IMMEDIATE_PHASES = frozenset({GesturePhase.BEGIN, GesturePhase.END, GesturePhase.SET})


class Timer(Protocol):
    def start(self) -> None: ...
    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], Timer]


def thread_timer(delay: float, callback: Callable[[], None]) -> Timer:
    """Default timer factory: a daemon threading.Timer."""
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    return timer


class ThrottledStream:
    """
    One rate-limited output with trailing-edge coalescing.

    At most one trailing timer is outstanding at any time.
    """

    def __init__(
        self,
        name: str,
        fps: float,
        emit: Callable[[Any], None],
        *,
        _clock: Callable[[], float] = time.monotonic,
        _timer_factory: TimerFactory = thread_timer,
    ):
        if fps <= 0:
            raise ValueError(f"{name}: fps must be positive, got {fps}")
        self.name = name
        self.interval = 1.0 / fps
        self._emit = emit
        self._clock = _clock
        self._timer_factory = _timer_factory

        self._lock = threading.RLock()
        self._last_emit: float | None = None
        self._timer: Timer | None = None
        self._pending_value: Any = None
        self._generation = 0
        self._closed = False

    @property
    def pending(self) -> bool:
        """True while a trailing emission is scheduled."""
        return self._timer is not None

    def submit(self, value: Any, immediate: bool = False) -> bool:
        """
        Offer a value for emission.

        Args:
            value: Value passed to the emit callback
            immediate: Bypass throttling and cancel any pending emission

        Returns:
            True if the value was emitted now, False if deferred (or closed)
        """
        with self._lock:
            if self._closed:
                return False

            now = self._clock()
            due = self._last_emit is None or now - self._last_emit >= self.interval
            if not (immediate or due):
                # Coalesce: newest value wins, one timer only
                self._pending_value = value
                if self._timer is None:
                    delay = max(0.0, self.interval - (now - self._last_emit))
                    self._generation += 1
                    generation = self._generation
                    self._timer = self._timer_factory(delay, lambda: self._fire(generation))
                    self._timer.start()
                return False

            self._cancel_timer()
            self._last_emit = now

        # Callbacks run without the lock so a subscriber may publish back
        self._emit(value)
        return True

    def _fire(self, generation: int) -> None:
        with self._lock:
            # Superseded by an immediate emission or cancel
            if self._closed or generation != self._generation or self._timer is None:
                return
            self._timer = None
            value = self._pending_value
            self._pending_value = None
            self._last_emit = self._clock()

        self._emit(value)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            self._generation += 1
        self._pending_value = None

    def cancel(self) -> None:
        """Drop any pending trailing emission."""
        with self._lock:
            self._cancel_timer()

    def close(self) -> None:
        """Cancel pending work and refuse further values."""
        with self._lock:
            self._cancel_timer()
            self._closed = True


class UpdateScheduler:
    """
    Rate-governs the wheel's outbound signals.

    Palette and active-hex updates go through their own ThrottledStream;
    active-handle changes are rare (once per gesture) and always immediate.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        palette_fps: float = DEFAULT_PALETTE_FPS,
        active_hex_fps: float = DEFAULT_ACTIVE_HEX_FPS,
        *,
        _clock: Callable[[], float] = time.monotonic,
        _timer_factory: TimerFactory = thread_timer,
    ):
        self.dispatcher = dispatcher
        self.palette_stream = ThrottledStream(
            "palette",
            palette_fps,
            dispatcher.post,
            _clock=_clock,
            _timer_factory=_timer_factory,
        )
        self.active_hex_stream = ThrottledStream(
            "active_hex",
            active_hex_fps,
            dispatcher.post,
            _clock=_clock,
            _timer_factory=_timer_factory,
        )
        self._disposed = False

    def publish(
        self,
        colors: Sequence[str],
        active_hex: str | None,
        phase: GesturePhase,
    ) -> None:
        """
        Offer the current palette (and selected color) for emission.

        Args:
            colors: Palette in handle order
            active_hex: Selected color, or None to leave that stream alone
            phase: Gesture phase; BEGIN/END/SET bypass throttling
        """
        if self._disposed:
            return
        immediate = phase in IMMEDIATE_PHASES
        self.palette_stream.submit(PaletteMessage(tuple(colors), phase), immediate)
        if active_hex is not None:
            self.active_hex_stream.submit(ActiveHexMessage(active_hex), immediate)

    def publish_active_handle(self, index: int) -> None:
        if self._disposed:
            return
        self.dispatcher.post(ActiveHandleMessage(index))

    @property
    def pending(self) -> bool:
        return self.palette_stream.pending or self.active_hex_stream.pending

    def cancel(self) -> None:
        """Drop pending trailing emissions on both streams."""
        self.palette_stream.cancel()
        self.active_hex_stream.cancel()

    def dispose(self) -> None:
        """Cancel timers for good; later publishes are ignored."""
        self._disposed = True
        self.palette_stream.close()
        self.active_hex_stream.close()
        logger.debug("Update scheduler disposed")
