"""
Human-readable color descriptions.

Classifies a color by hue family, temperature and brightness so palette
reports can summarize what a palette contains.
"""

from dataclasses import dataclass

from ..color.model import ColorModel

# Upper hue bound (exclusive) -> category name
HUE_CATEGORIES: list[tuple[float, str]] = [
    (30, "red"),
    (60, "orange"),
    (90, "yellow"),
    (150, "green"),
    (210, "cyan"),
    (270, "blue"),
    (330, "purple"),
    (360, "red"),
]


@dataclass(frozen=True)
class ColorDescription:
    """Classification of a single color."""
    hex: str
    category: str
    temperature: str  # "warm", "cool" or "neutral"
    brightness: str
    lightness_level: str
    saturation_level: str
    is_light: bool
    text_color: str  # "#000000" or "#FFFFFF", whichever reads better


def hue_category(h: float, s: float) -> str:
    if s < 10:
        return "grayscale"
    for bound, name in HUE_CATEGORIES:
        if h < bound:
            return name
    return "red"


def temperature(r: int, g: int, b: int) -> str:
    ratio = (r + g * 0.5) / (b + 1)
    if ratio > 1.5:
        return "warm"
    if ratio < 0.8:
        return "cool"
    return "neutral"


def brightness_label(luminance: float) -> str:
    if luminance > 0.8:
        return "very light"
    if luminance > 0.6:
        return "light"
    if luminance > 0.4:
        return "medium"
    if luminance > 0.2:
        return "dark"
    return "very dark"


def lightness_level(l: float) -> str:
    if l < 20:
        return "very dark"
    if l < 40:
        return "dark"
    if l < 60:
        return "medium"
    if l < 80:
        return "light"
    return "very light"


def saturation_level(s: float) -> str:
    if s < 20:
        return "desaturated"
    if s < 40:
        return "muted"
    if s < 70:
        return "moderate"
    return "vibrant"


def describe_color(model: ColorModel, color: str) -> ColorDescription:
    """
    Describe a color.

    Args:
        model: Color model used for (cached) conversions
        color: Any color string the model accepts

    Returns:
        ColorDescription for the normalized color
    """
    entry = model.entry(color)
    on_black = model.contrast_ratio(entry.hex, "#000000")
    return ColorDescription(
        hex=entry.hex,
        category=hue_category(entry.h, entry.s),
        temperature=temperature(entry.r, entry.g, entry.b),
        brightness=brightness_label(entry.luminance),
        lightness_level=lightness_level(entry.l),
        saturation_level=saturation_level(entry.s),
        is_light=entry.luminance > 0.5,
        text_color="#000000" if on_black >= 4.5 else "#FFFFFF",
    )
