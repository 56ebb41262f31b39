"""
Core color value types.

- HSL: hue in degrees, saturation/lightness in percent
- RGB: 8-bit channel triple
- CacheEntry: everything the color model knows about one hex value
"""

from dataclasses import dataclass
from typing import NamedTuple


class HSL(NamedTuple):
    """
    HSL color representation.

    - h: Hue in degrees, 0.0-360.0 (0=red, 120=green, 240=blue)
    - s: Saturation in percent, 0.0-100.0
    - l: Lightness in percent, 0.0-100.0
    """
    h: float
    s: float = 100.0
    l: float = 50.0

    def with_lightness(self, light: float) -> "HSL":
        """Return a copy with updated lightness."""
        return HSL(self.h, self.s, max(0.0, min(100.0, light)))


class RGB(NamedTuple):
    """RGB color with 0-255 channels."""
    r: int
    g: int
    b: int


@dataclass
class CacheEntry:
    """
    Cached conversion results for one normalized hex color.

    Timestamps come from the owning cache's clock, so they are only
    comparable with other values from that clock.
    """
    hex: str
    r: int
    g: int
    b: int
    h: float
    s: float
    l: float
    luminance: float
    created_at: float = 0.0
    last_accessed: float = 0.0
    access_count: int = 0
    expires_at: float | None = None

    @property
    def rgb(self) -> RGB:
        return RGB(self.r, self.g, self.b)

    @property
    def hsl(self) -> HSL:
        return HSL(self.h, self.s, self.l)

    def is_expired(self, now: float) -> bool:
        """Check if this entry's TTL has passed."""
        return self.expires_at is not None and now >= self.expires_at
