"""
Defensive parsing of typed HSL values.

Text fields feed the wheel while the user is still typing, so anything that
is not a plain decimal number ("", "-", "1e3", "inf", "12abc") falls back to
a neutral default instead of raising.
"""

import math
import re

from .color.types import HSL

# Plain decimals only: no exponent, no inf/nan, no hex
_DECIMAL = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")

DEFAULT_HUE = 0.0
DEFAULT_SATURATION = 0.0
DEFAULT_LIGHTNESS = 50.0


def parse_number(value: object, default: float) -> float:
    """
    Parse a number from text or a numeric value.

    Returns:
        The parsed float, or default for malformed/non-finite input
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            # int too large for a float
            return default
        return number if math.isfinite(number) else default
    if not isinstance(value, str):
        return default

    text = value.strip()
    if not _DECIMAL.match(text):
        return default
    number = float(text)
    return number if math.isfinite(number) else default


def parse_hue(value: object) -> float:
    """Hue in degrees, wrapped into [0, 360)."""
    return parse_number(value, DEFAULT_HUE) % 360.0


def parse_percent(value: object, default: float) -> float:
    """Percentage clamped into [0, 100]."""
    return max(0.0, min(100.0, parse_number(value, default)))


def parse_hsl(h: object, s: object, l: object) -> HSL:
    """
    Parse three typed HSL components.

    Args:
        h: Hue in degrees
        s: Saturation in percent
        l: Lightness in percent

    Returns:
        HSL with every component in range
    """
    return HSL(
        parse_hue(h),
        parse_percent(s, DEFAULT_SATURATION),
        parse_percent(l, DEFAULT_LIGHTNESS),
    )
