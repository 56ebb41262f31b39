"""
Pointer geometry for the color wheel.

Maps raw pointer coordinates (relative to the wheel's bounds) to hue angle
and radial saturation, and picks the handle a gesture should move.

Angles are measured clockwise on screen with 0 deg pointing straight up,
matching where handle markers are drawn.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .handles import HandleState, clamp, normalize_angle


class GesturePhase(Enum):
    """Lifecycle tag of a pointer stream (SET marks programmatic updates)."""

    BEGIN = "begin"
    CHANGE = "change"
    END = "end"
    SET = "set"


@dataclass(frozen=True)
class PointerEvent:
    """One pointer sample: position relative to the wheel bounds plus phase."""
    x: float
    y: float
    phase: GesturePhase = GesturePhase.CHANGE

    @classmethod
    def from_dict(cls, data: dict) -> "PointerEvent":
        """Build from {"x": .., "y": .., "phase": "begin|change|end"}."""
        return cls(
            x=float(data["x"]),
            y=float(data["y"]),
            phase=GesturePhase(str(data.get("phase", "change")).lower()),
        )


def angle_from_point(px: float, py: float, cx: float, cy: float) -> float:
    """
    Hue angle of a pointer position.

    atan2 measures from the +x axis; adding 450 (= 360 + 90) rotates 0 deg to
    "up" while keeping the intermediate value positive before the modulo.
    """
    deg = math.degrees(math.atan2(py - cy, px - cx))
    return normalize_angle(deg + 450.0)


def saturation_from_point(
    px: float, py: float, cx: float, cy: float, radius: float
) -> float:
    """Radial distance from the centre as a 0-1 saturation."""
    if radius <= 0:
        return 0.0
    return clamp(math.hypot(px - cx, py - cy) / radius, 0.0, 1.0)


def handle_position(
    angle: float, saturation: float, cx: float, cy: float, radius: float
) -> tuple[float, float]:
    """Screen position of a handle (inverse of angle/saturation_from_point)."""
    rad = math.radians(angle - 90.0)
    r = radius * clamp(saturation, 0.0, 1.0)
    return cx + math.cos(rad) * r, cy + math.sin(rad) * r


class GestureMapper:
    """
    Converts pointer events into handle selection and (angle, saturation).

    The handle picked at gesture begin stays selected until the next begin,
    so a drag never jumps to another handle it passes over.
    """

    def __init__(self, size: float = 300.0, snap_step: float | None = None):
        """
        Initialize the mapper.

        Args:
            size: Diameter of the rendered wheel (pointer coords are 0..size)
            snap_step: Optional angle step in degrees to snap hues to
        """
        self.snap_step = snap_step
        self.resize(size)
        self._selected: int | None = None

    def resize(self, size: float) -> None:
        self.size = max(0.0, float(size))
        self.radius = self.size / 2
        self.cx = self.radius
        self.cy = self.radius

    @property
    def selected(self) -> int | None:
        """Handle held by the current gesture (None between gestures)."""
        return self._selected

    def angle_at(self, x: float, y: float) -> float:
        angle = angle_from_point(x, y, self.cx, self.cy)
        if self.snap_step:
            angle = normalize_angle(round(angle / self.snap_step) * self.snap_step)
        return angle

    def saturation_at(self, x: float, y: float) -> float:
        return saturation_from_point(x, y, self.cx, self.cy, self.radius)

    def map_point(self, x: float, y: float) -> tuple[float, float]:
        """Pointer position -> (angle, saturation)."""
        return self.angle_at(x, y), self.saturation_at(x, y)

    def nearest_handle(self, x: float, y: float, handles: Sequence[HandleState]) -> int:
        """
        Index of the live handle closest to the pointer.

        Ties go to the lowest index.
        """
        best = 0
        best_dist = math.inf
        for handle in handles:
            hx, hy = handle_position(
                handle.angle, handle.saturation, self.cx, self.cy, self.radius
            )
            dist = math.hypot(x - hx, y - hy)
            if dist < best_dist:
                best_dist = dist
                best = handle.index
        return best

    def begin(self, x: float, y: float, handles: Sequence[HandleState]) -> int:
        """Start a gesture: select and hold the nearest handle."""
        self._selected = self.nearest_handle(x, y, handles)
        return self._selected

    def end(self) -> int | None:
        """Finish the gesture, returning the handle it held."""
        selected = self._selected
        self._selected = None
        return selected
