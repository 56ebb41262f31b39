"""
Scheme registry with built-in color schemes.

A scheme says how many handles are active on the wheel and where each
dependent handle sits relative to handle 0 (angular offsets in degrees).
Some schemes also shift lightness per handle instead of copying it.

Usage:
    from chroma_wheel.wheel.schemes import get_scheme, Scheme

    spec = get_scheme("triadic")
    spec.offsets        # (0, 120, 240)
    spec.handle_count   # 3
"""

from dataclasses import dataclass
from enum import Enum

MAX_HANDLES = 5


class Scheme(Enum):
    """Named color schemes. SINGLE is the fallback for unknown names."""

    COMPLEMENTARY = "complementary"
    ANALOGOUS = "analogous"
    TRIADIC = "triadic"
    TETRADIC = "tetradic"
    SPLIT_COMPLEMENTARY = "split-complementary"
    MONOCHROMATIC = "monochromatic"
    COMPOUND = "compound"
    SHADES = "shades"
    TINTS = "tints"
    SINGLE = "single"

    @classmethod
    def parse(cls, name: "str | Scheme | None") -> "Scheme":
        """
        Resolve a scheme name, falling back to SINGLE.

        Case-insensitive; accepts "split-complementary", "split_complementary"
        and "splitComplementary".
        """
        if isinstance(name, Scheme):
            return name
        if not isinstance(name, str):
            return cls.SINGLE
        key = name.strip().replace("_", "-")
        if key == "splitComplementary":
            key = "split-complementary"
        try:
            return cls(key.lower())
        except ValueError:
            return cls.SINGLE


@dataclass(frozen=True)
class SchemeSpec:
    """
    Immutable scheme definition.

    lightness_steps holds a lightness delta per handle (relative to handle 0),
    or None when dependents copy the anchor's lightness.
    """

    scheme: Scheme
    display_name: str
    description: str
    offsets: tuple[float, ...]
    lightness_steps: tuple[float, ...] | None = None
    lightness_bounds: tuple[float, float] = (0.0, 100.0)

    def __post_init__(self):
        if not self.offsets:
            raise ValueError("Scheme must have at least one offset")
        if self.lightness_steps is not None and len(self.lightness_steps) != len(self.offsets):
            raise ValueError("lightness_steps must match offsets")

    @property
    def name(self) -> str:
        return self.scheme.value

    @property
    def handle_count(self) -> int:
        return min(len(self.offsets), MAX_HANDLES)

    def offset(self, index: int) -> float:
        """Angular offset for a handle (0 for slots beyond the table)."""
        if 0 <= index < len(self.offsets):
            return self.offsets[index]
        return 0.0

    def lightness_for(self, index: int, anchor_lightness: float) -> float:
        """
        Lightness of handle `index` given the anchor's lightness.

        Mirrors the anchor unless the scheme defines a lightness ramp.
        """
        if index == 0 or self.lightness_steps is None:
            return anchor_lightness
        if index >= len(self.lightness_steps):
            return anchor_lightness
        low, high = self.lightness_bounds
        return max(low, min(high, anchor_lightness + self.lightness_steps[index]))


# Global scheme registry
SCHEMES: dict[Scheme, SchemeSpec] = {}


def register_scheme(spec: SchemeSpec) -> None:
    """Register a scheme in the global registry."""
    SCHEMES[spec.scheme] = spec


def get_scheme(name: "str | Scheme | None") -> SchemeSpec:
    """Get a scheme by name; unknown names get the single-handle scheme."""
    return SCHEMES[Scheme.parse(name)]


def list_schemes() -> list[str]:
    """Get names of the selectable schemes (excludes the fallback)."""
    return [s.value for s in SCHEMES if s is not Scheme.SINGLE]


# Built-in scheme definitions
_BUILTINS: list[SchemeSpec] = [
    # === Hue-offset schemes (dependents mirror saturation + lightness) ===
    SchemeSpec(
        Scheme.COMPLEMENTARY, "Complementary",
        "Colors opposite on the color wheel",
        (0, 180),
    ),
    SchemeSpec(
        Scheme.ANALOGOUS, "Analogous",
        "Colors adjacent on the color wheel",
        (0, 30, -30),
    ),
    SchemeSpec(
        Scheme.TRIADIC, "Triadic",
        "Three colors evenly spaced on the color wheel",
        (0, 120, 240),
    ),
    SchemeSpec(
        Scheme.TETRADIC, "Tetradic",
        "Four colors forming a rectangle on the color wheel",
        (0, 90, 180, 270),
    ),
    SchemeSpec(
        Scheme.SPLIT_COMPLEMENTARY, "Split Complementary",
        "Base color plus two colors adjacent to its complement",
        (0, 150, 210),
    ),
    SchemeSpec(
        Scheme.COMPOUND, "Compound",
        "Combination of complementary and analogous",
        (0, 30, 180, 210),
    ),
    # === Single-hue schemes (dependents get a lightness ramp) ===
    SchemeSpec(
        Scheme.MONOCHROMATIC, "Monochromatic",
        "Variations of a single hue",
        (0, 0, 0),
        lightness_steps=(0, -30, 30),
        lightness_bounds=(10.0, 90.0),
    ),
    SchemeSpec(
        Scheme.SHADES, "Shades",
        "Darker variations of a color",
        (0, 0, 0, 0, 0),
        lightness_steps=(0, -10, -20, -30, -40),
        lightness_bounds=(5.0, 100.0),
    ),
    SchemeSpec(
        Scheme.TINTS, "Tints",
        "Lighter variations of a color",
        (0, 0, 0, 0, 0),
        lightness_steps=(0, 10, 20, 30, 40),
        lightness_bounds=(0.0, 95.0),
    ),
    # === Fallback ===
    SchemeSpec(
        Scheme.SINGLE, "Single",
        "One color, no companions",
        (0,),
    ),
]

# Register all built-in schemes on module import
for _spec in _BUILTINS:
    register_scheme(_spec)
