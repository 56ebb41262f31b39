"""Test configuration for chroma_wheel."""

import pytest

from chroma_wheel.color import ColorCache, ColorModel
from chroma_wheel.wheel import handle_position


class FakeClock:
    """Deterministic clock for cache and throttle tests."""

    def __init__(self, start: float = 0.0):
        self._now = start

    def __call__(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += seconds

    def set(self, now: float) -> None:
        self._now = now


class FakeTimer:
    """Timer that only fires when the owning factory advances the clock."""

    def __init__(self, due: float, delay: float, callback):
        self.due = due
        self.delay = delay
        self.callback = callback
        self.started = False
        self.cancelled = False
        self.fired = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def live(self) -> bool:
        return self.started and not self.cancelled and not self.fired


class FakeTimerFactory:
    """Timer factory bound to a FakeClock."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.timers: list[FakeTimer] = []

    def __call__(self, delay, callback) -> FakeTimer:
        timer = FakeTimer(self.clock() + delay, delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def live(self) -> list[FakeTimer]:
        return [t for t in self.timers if t.live]

    def advance(self, seconds: float) -> None:
        """Advance the clock, firing due timers in order."""
        target = self.clock() + seconds
        while True:
            due = [t for t in self.live if t.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self.clock.set(max(self.clock(), timer.due))
            timer.fired = True
            timer.callback()
        self.clock.set(target)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def fake_timers(fake_clock):
    return FakeTimerFactory(fake_clock)


@pytest.fixture
def model(fake_clock):
    return ColorModel(ColorCache(max_size=100, _clock=fake_clock))


def wheel_point(angle: float, saturation: float = 1.0, size: float = 300.0) -> tuple[float, float]:
    """Pointer coordinates for a wheel position."""
    r = size / 2
    return handle_position(angle, saturation, r, r, r)


@pytest.fixture
def point():
    return wheel_point
