"""
Handle state for the color wheel.

Five handle slots are allocated up front; the active scheme decides how many
of them are live. Handles are never destroyed, only reset. All setters
normalize their input so the stored state always satisfies:

- angle in [0, 360)
- saturation in [0, 1]
- lightness in [0, 100]
"""

import math
from dataclasses import dataclass
from typing import NamedTuple

from .schemes import MAX_HANDLES


def normalize_angle(angle: float) -> float:
    """Wrap an angle into [0, 360); non-finite values become 0."""
    if not math.isfinite(angle):
        return 0.0
    result = angle % 360.0
    # -1e-15 % 360 rounds to 360.0
    return 0.0 if result >= 360.0 else result


def clamp(value: float, low: float, high: float, default: float | None = None) -> float:
    """Clamp value into [low, high]; non-finite values become default (or low)."""
    if not math.isfinite(value):
        return low if default is None else default
    return max(low, min(high, value))


class HandleState(NamedTuple):
    """Immutable snapshot of one handle (safe to pass between contexts)."""
    index: int
    angle: float
    saturation: float
    lightness: float
    freed: bool


@dataclass
class Handle:
    """A draggable point on the wheel: hue angle, radial saturation, lightness."""
    index: int
    angle: float = 0.0
    saturation: float = 1.0
    lightness: float = 50.0
    freed: bool = False

    def snapshot(self) -> HandleState:
        return HandleState(self.index, self.angle, self.saturation, self.lightness, self.freed)


class HandleStore:
    """
    Owns the handle slots and the active (selected) handle index.

    Single-writer: the current gesture or the most recent programmatic call.
    """

    def __init__(self, count: int = 1):
        self._handles = [Handle(index=i) for i in range(MAX_HANDLES)]
        self._count = 1
        self._active = 0
        self.set_count(count)

    @property
    def count(self) -> int:
        """Number of live handles."""
        return self._count

    def set_count(self, count: int) -> None:
        """Set the number of live handles (clamped to 1..5)."""
        self._count = max(1, min(MAX_HANDLES, int(count)))
        self._active = self.clamp_index(self._active)

    def clamp_index(self, index: int) -> int:
        """Clamp a handle index into [0, count-1]."""
        try:
            index = int(index)
        except (TypeError, ValueError):
            return 0
        return max(0, min(self._count - 1, index))

    @property
    def active_index(self) -> int:
        return self._active

    @active_index.setter
    def active_index(self, index: int) -> None:
        self._active = self.clamp_index(index)

    def __getitem__(self, index: int) -> Handle:
        return self._handles[index]

    def __len__(self) -> int:
        return self._count

    @property
    def anchor(self) -> Handle:
        return self._handles[0]

    def active_handles(self) -> list[Handle]:
        """Live handles, in index order."""
        return self._handles[: self._count]

    def set(
        self,
        index: int,
        angle: float | None = None,
        saturation: float | None = None,
        lightness: float | None = None,
    ) -> Handle:
        """
        Update a handle slot. None leaves a component unchanged.

        Out-of-range values are normalized, not rejected.
        """
        handle = self._handles[index]
        if angle is not None:
            handle.angle = normalize_angle(angle)
        if saturation is not None:
            handle.saturation = clamp(saturation, 0.0, 1.0)
        if lightness is not None:
            handle.lightness = clamp(lightness, 0.0, 100.0)
        return handle

    def free(self, index: int) -> None:
        """Mark a dependent handle as independent of scheme propagation."""
        if index != 0:
            self._handles[index].freed = True

    def clear_freed(self) -> None:
        for handle in self._handles:
            handle.freed = False

    @property
    def freed_indices(self) -> frozenset[int]:
        return frozenset(h.index for h in self._handles if h.freed)

    def reset(self) -> None:
        """Return every slot to its initial value."""
        for handle in self._handles:
            handle.angle = 0.0
            handle.saturation = 1.0
            handle.lightness = 50.0
            handle.freed = False
        self._active = 0

    def snapshot(self) -> tuple[HandleState, ...]:
        """Snapshot of the live handles."""
        return tuple(h.snapshot() for h in self.active_handles())
