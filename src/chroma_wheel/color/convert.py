"""
Color conversion utilities.

Pure functions for hex/RGB/HSL conversion and WCAG luminance. These never
raise on bad input: malformed colors resolve to black and out-of-range
components are clamped, because values may come from half-typed user text.
"""

import colorsys
import math
import re

from .types import HSL, RGB

FALLBACK_HEX = "#000000"

_HEX_DIGITS = re.compile(r"^[0-9a-fA-F]+$")

# Named colors (CSS values, uppercase #RRGGBB)
NAMED_COLORS: dict[str, str] = {
    # Primary / secondary
    "red": "#FF0000",
    "green": "#008000",
    "lime": "#00FF00",
    "blue": "#0000FF",
    "yellow": "#FFFF00",
    "cyan": "#00FFFF",
    "aqua": "#00FFFF",
    "magenta": "#FF00FF",
    "fuchsia": "#FF00FF",

    # Warm
    "orange": "#FFA500",
    "coral": "#FF7F50",
    "pink": "#FFC0CB",
    "gold": "#FFD700",
    "brown": "#A52A2A",
    "maroon": "#800000",

    # Cool
    "purple": "#800080",
    "violet": "#EE82EE",
    "indigo": "#4B0082",
    "navy": "#000080",
    "teal": "#008080",
    "olive": "#808000",

    # Neutrals
    "white": "#FFFFFF",
    "black": "#000000",
    "gray": "#808080",
    "grey": "#808080",
    "silver": "#C0C0C0",
}


def parse_hex(value: object) -> str | None:
    """
    Parse a color string to canonical "#RRGGBB" form.

    Accepts "#RGB", "#RGBA", "#RRGGBB", "#RRGGBBAA" (with or without "#"),
    a "0x" prefix, and names from NAMED_COLORS. Alpha is dropped.

    Returns:
        Uppercase "#RRGGBB", or None if the value is not a color
    """
    if not isinstance(value, str):
        return None

    text = value.strip()
    named = NAMED_COLORS.get(text.lower())
    if named is not None:
        return named

    if text[:2].lower() == "0x":
        text = text[2:]
    text = text.lstrip("#")

    if not _HEX_DIGITS.match(text):
        return None

    # Expand shorthand (#RGB / #RGBA -> #RRGGBB)
    if len(text) in (3, 4):
        text = "".join(c * 2 for c in text[:3])
    elif len(text) in (6, 8):
        text = text[:6]
    else:
        return None

    return f"#{text.upper()}"


def normalize_hex(value: object) -> str:
    """Normalize any input to "#RRGGBB", falling back to black."""
    return parse_hex(value) or FALLBACK_HEX


def hex_to_rgb(hex_color: str) -> RGB:
    """
    Convert hex color string to RGB.

    Args:
        hex_color: Any form accepted by parse_hex

    Returns:
        RGB tuple (black for malformed input)
    """
    hex_str = normalize_hex(hex_color)
    return RGB(
        int(hex_str[1:3], 16),
        int(hex_str[3:5], 16),
        int(hex_str[5:7], 16),
    )


def rgb_to_hsl(rgb: RGB) -> HSL:
    """
    Convert RGB to HSL.

    Values are not rounded, so hsl_to_hex(rgb_to_hsl(x)) reproduces x.
    """
    h, l, s = colorsys.rgb_to_hls(rgb.r / 255.0, rgb.g / 255.0, rgb.b / 255.0)
    return HSL((h * 360.0) % 360.0, s * 100.0, l * 100.0)


def _finite_or(value: float, default: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return value if math.isfinite(value) else default


def _channel_hex(value: float) -> str:
    """Format one 0-255 channel, "00" if it is not a valid byte."""
    if not math.isfinite(value):
        return "00"
    channel = int(round(value))
    if channel < 0 or channel > 255:
        return "00"
    return f"{channel:02X}"


def hsl_to_hex(h: float, s: float, l: float) -> str:
    """
    Convert HSL to hex string.

    Args:
        h: Hue in degrees (wrapped modulo 360)
        s: Saturation 0-100 (clamped)
        l: Lightness 0-100 (clamped)

    Returns:
        Hex string like "#FF6B00"
    """
    h = _finite_or(h, 0.0) % 360.0
    s = max(0.0, min(100.0, _finite_or(s, 0.0)))
    l = max(0.0, min(100.0, _finite_or(l, 0.0)))

    r, g, b = colorsys.hls_to_rgb(h / 360.0, l / 100.0, s / 100.0)
    return f"#{_channel_hex(r * 255)}{_channel_hex(g * 255)}{_channel_hex(b * 255)}"


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """Convert HSL to RGB via the validated hex path."""
    return hex_to_rgb(hsl_to_hex(h, s, l))


def relative_luminance(rgb: RGB) -> float:
    """
    WCAG relative luminance of an sRGB color.

    Returns:
        Luminance 0.0 (black) to 1.0 (white)
    """
    def linearize(c: int) -> float:
        c = c / 255.0
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = (linearize(c) for c in rgb)
    # Weights sum to 1.0 but float addition can overshoot for white
    return min(1.0, 0.2126 * r + 0.7152 * g + 0.0722 * b)


def contrast_from_luminance(lum_a: float, lum_b: float) -> float:
    """
    WCAG contrast ratio from two luminance values.

    Non-finite or out-of-range inputs yield 1.0 (no contrast).
    """
    if not (math.isfinite(lum_a) and math.isfinite(lum_b)):
        return 1.0
    if not (0.0 <= lum_a <= 1.0 and 0.0 <= lum_b <= 1.0):
        return 1.0
    bright = max(lum_a, lum_b)
    dark = min(lum_a, lum_b)
    return (bright + 0.05) / (dark + 0.05)
