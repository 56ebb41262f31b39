"""Color conversion, caching and value types."""

from .types import HSL, RGB, CacheEntry
from .cache import ColorCache
from .convert import (
    NAMED_COLORS,
    normalize_hex,
    parse_hex,
    hex_to_rgb,
    rgb_to_hsl,
    hsl_to_hex,
    hsl_to_rgb,
    relative_luminance,
    contrast_from_luminance,
)
from .model import ColorModel

__all__ = [
    "HSL",
    "RGB",
    "CacheEntry",
    "ColorCache",
    "ColorModel",
    "NAMED_COLORS",
    "normalize_hex",
    "parse_hex",
    "hex_to_rgb",
    "rgb_to_hsl",
    "hsl_to_hex",
    "hsl_to_rgb",
    "relative_luminance",
    "contrast_from_luminance",
]
