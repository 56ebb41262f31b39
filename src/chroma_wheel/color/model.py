"""
Cached color model.

ColorModel is the single entry point for hex -> RGB/HSL/luminance lookups.
Every hex value is converted once, then served from an injected ColorCache.
HSL -> hex goes through the pure conversion path (hues on the wheel are
continuous, so caching them would mostly thrash the cache).
"""

import logging

from .cache import ColorCache
from .convert import (
    FALLBACK_HEX,
    contrast_from_luminance,
    hsl_to_hex,
    parse_hex,
    relative_luminance,
    rgb_to_hsl,
    hex_to_rgb,
)
from .types import HSL, RGB, CacheEntry

logger = logging.getLogger(__name__)


class ColorModel:
    """
    Color conversions backed by an LRU/TTL cache.

    Usage:
        model = ColorModel()
        model.to_hsl("#FF0000")           # HSL(h=0.0, s=100.0, l=50.0)
        model.to_hex(180, 100, 50)        # "#00FFFF"
        model.contrast_ratio("#000", "#FFF")  # 21.0
    """

    def __init__(self, cache: ColorCache | None = None):
        self.cache = cache if cache is not None else ColorCache()

    def normalize(self, value: object) -> str:
        """Normalize a color to "#RRGGBB", falling back to black."""
        hex_str = parse_hex(value)
        if hex_str is None:
            logger.debug("Invalid color %r, using %s", value, FALLBACK_HEX)
            return FALLBACK_HEX
        return hex_str

    def entry(self, value: object) -> CacheEntry:
        """Get (or compute) the cache entry for a color."""
        return self.cache.get_or_compute(self.normalize(value), _compute_entry)

    def to_rgb(self, value: object) -> RGB:
        return self.entry(value).rgb

    def to_hsl(self, value: object) -> HSL:
        """
        Convert a color to HSL.

        Args:
            value: Hex string (3/4/6/8 digits) or color name

        Returns:
            HSL with hue in degrees and s/l in percent; HSL(0, 0, 0) for
            malformed input
        """
        return self.entry(value).hsl

    def to_hex(self, h: float, s: float, l: float) -> str:
        """Convert HSL (degrees, percent, percent) to "#RRGGBB"."""
        return hsl_to_hex(h, s, l)

    def luminance(self, value: object) -> float:
        """WCAG relative luminance (0.0-1.0)."""
        return self.entry(value).luminance

    def contrast_ratio(self, color_a: object, color_b: object) -> float:
        """
        WCAG contrast ratio between two colors.

        Symmetric in its arguments; 1.0 when either luminance is unusable.
        """
        return contrast_from_luminance(self.luminance(color_a), self.luminance(color_b))

    def adjust_lightness(self, value: object, delta: float) -> str:
        """Shift lightness by delta percent, keeping hue and saturation."""
        hsl = self.to_hsl(value)
        return self.to_hex(*hsl.with_lightness(hsl.l + delta))


def _compute_entry(hex_str: str) -> CacheEntry:
    rgb = hex_to_rgb(hex_str)
    hsl = rgb_to_hsl(rgb)
    return CacheEntry(
        hex=hex_str,
        r=rgb.r,
        g=rgb.g,
        b=rgb.b,
        h=hsl.h,
        s=hsl.s,
        l=hsl.l,
        luminance=relative_luminance(rgb),
    )
