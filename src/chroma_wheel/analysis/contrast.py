"""
Palette contrast and similarity analysis.

Luminance is computed once per distinct color and each unordered pair is
compared once, so a palette of N colors costs N luminance lookups and
N*(N-1)/2 ratio computations.
"""

from dataclasses import dataclass, field
from typing import Sequence

from ..color.convert import contrast_from_luminance
from ..color.model import ColorModel
from .describe import describe_color

DEFAULT_MIN_RATIO = 4.5

# Thresholds below which two colors count as near-duplicates
SIMILAR_HUE_DEGREES = 15.0
SIMILAR_SATURATION = 20.0
SIMILAR_LIGHTNESS = 20.0

# Lightness step tried by suggest_fix
FIX_STEP = 20.0


@dataclass(frozen=True)
class ContrastIssue:
    """A pair of palette colors below the required contrast ratio."""
    colors: tuple[str, str]
    indices: tuple[int, int]
    ratio: float
    min_required: float


@dataclass(frozen=True)
class SimilarityIssue:
    """A pair of palette colors that are likely redundant."""
    colors: tuple[str, str]
    indices: tuple[int, int]
    hue_diff: float
    saturation_diff: float
    lightness_diff: float


@dataclass(frozen=True)
class FixSuggestion:
    """A single lightness adjustment that makes a pair pass."""
    kind: str  # "lighten" or "darken"
    original_color: str
    suggested_color: str
    new_ratio: float


@dataclass
class PaletteAnalysis:
    contrast_issues: list[ContrastIssue] = field(default_factory=list)
    similarity_issues: list[SimilarityIssue] = field(default_factory=list)


@dataclass
class PaletteReport:
    """Full palette validation result."""
    is_valid: bool
    contrast_issues: list[ContrastIssue]
    similarity_issues: list[SimilarityIssue]
    average_contrast: float
    distribution: dict


def hue_distance(a: float, b: float) -> float:
    """Shortest angular distance between two hues (0-180)."""
    d = abs(a - b) % 360.0
    return 360.0 - d if d > 180.0 else d


class ContrastValidator:
    """Pairwise accessibility checks over a palette."""

    def __init__(self, model: ColorModel | None = None, min_ratio: float = DEFAULT_MIN_RATIO):
        self.model = model if model is not None else ColorModel()
        self.min_ratio = min_ratio

    def pairwise_contrast(self, colors: Sequence[str]) -> list[list[float]]:
        """
        Contrast matrix for a palette.

        Returns:
            matrix[i][j] = contrast between colors i and j (diagonal 1.0)
        """
        hexes = [self.model.normalize(c) for c in colors]
        luminance = {h: self.model.luminance(h) for h in set(hexes)}

        n = len(hexes)
        matrix = [[1.0] * n for _ in range(n)]
        for i in range(n):
            for j in range(i + 1, n):
                ratio = contrast_from_luminance(luminance[hexes[i]], luminance[hexes[j]])
                matrix[i][j] = ratio
                matrix[j][i] = ratio
        return matrix

    def find_low_contrast(
        self, colors: Sequence[str], min_ratio: float | None = None
    ) -> list[ContrastIssue]:
        """Flag every pair whose contrast is below min_ratio."""
        min_ratio = self.min_ratio if min_ratio is None else min_ratio
        hexes = [self.model.normalize(c) for c in colors]
        matrix = self.pairwise_contrast(hexes)

        issues = []
        for i in range(len(hexes)):
            for j in range(i + 1, len(hexes)):
                if matrix[i][j] < min_ratio:
                    issues.append(ContrastIssue(
                        colors=(hexes[i], hexes[j]),
                        indices=(i, j),
                        ratio=matrix[i][j],
                        min_required=min_ratio,
                    ))
        return issues

    def find_similar(self, colors: Sequence[str]) -> list[SimilarityIssue]:
        """Flag pairs closer than 15 deg hue, 20 saturation and 20 lightness."""
        hexes = [self.model.normalize(c) for c in colors]
        hsls = [self.model.to_hsl(h) for h in hexes]

        issues = []
        for i in range(len(hexes)):
            for j in range(i + 1, len(hexes)):
                hue_diff = hue_distance(hsls[i].h, hsls[j].h)
                sat_diff = abs(hsls[i].s - hsls[j].s)
                light_diff = abs(hsls[i].l - hsls[j].l)
                if (
                    hue_diff < SIMILAR_HUE_DEGREES
                    and sat_diff < SIMILAR_SATURATION
                    and light_diff < SIMILAR_LIGHTNESS
                ):
                    issues.append(SimilarityIssue(
                        colors=(hexes[i], hexes[j]),
                        indices=(i, j),
                        hue_diff=hue_diff,
                        saturation_diff=sat_diff,
                        lightness_diff=light_diff,
                    ))
        return issues

    def suggest_fix(
        self, color_a: str, color_b: str, min_ratio: float | None = None
    ) -> FixSuggestion | None:
        """
        Suggest one lightness step that makes a pair pass.

        Tries lightening the lighter color by +20, then darkening the darker
        color by -20 (hue and saturation unchanged).

        Returns:
            The first passing adjustment, or None if the pair already passes
            or no single step is enough
        """
        min_ratio = self.min_ratio if min_ratio is None else min_ratio
        a = self.model.normalize(color_a)
        b = self.model.normalize(color_b)
        if self.model.contrast_ratio(a, b) >= min_ratio:
            return None

        if self.model.luminance(a) >= self.model.luminance(b):
            lighter, darker = a, b
        else:
            lighter, darker = b, a

        lightened = self.model.adjust_lightness(lighter, FIX_STEP)
        ratio = self.model.contrast_ratio(lightened, darker)
        if ratio >= min_ratio:
            return FixSuggestion("lighten", lighter, lightened, ratio)

        darkened = self.model.adjust_lightness(darker, -FIX_STEP)
        ratio = self.model.contrast_ratio(lighter, darkened)
        if ratio >= min_ratio:
            return FixSuggestion("darken", darker, darkened, ratio)

        return None

    def nearest_accessible(
        self, background: str, target: str, min_ratio: float | None = None
    ) -> str:
        """
        Return target if it is readable on background, else black or white.

        The fallback is black when black itself contrasts with the
        background by more than 3:1, white otherwise.
        """
        min_ratio = self.min_ratio if min_ratio is None else min_ratio
        target = self.model.normalize(target)
        if self.model.contrast_ratio(background, target) >= min_ratio:
            return target
        if self.model.contrast_ratio(background, "#000000") > 3.0:
            return "#000000"
        return "#FFFFFF"

    def analyze(
self, colors: Sequence[str], min_ratio: float | None = None) -> PaletteAnalysis:
        """Contrast and similarity issues for a palette."""
        return PaletteAnalysis(
            contrast_issues=self.find_low_contrast(colors, min_ratio),
            similarity_issues=self.find_similar(colors),
        )

    def validate_palette(
        self, colors: Sequence[str], min_ratio: float | None = None
    ) -> PaletteReport:
        """
        Full palette report: issues, average contrast and color distribution.

        Palettes with fewer than two colors are trivially valid.
        """
        hexes = [self.model.normalize(c) for c in colors]
        if len(hexes) < 2:
            return PaletteReport(True, [], [], 0.0, self._distribution(hexes))

        analysis = self.analyze(hexes, min_ratio)
        matrix = self.pairwise_contrast(hexes)
        ratios = [
            matrix[i][j]
            for i in range(len(hexes))
            for j in range(i + 1, len(hexes))
        ]
        return PaletteReport(
            is_valid=not analysis.contrast_issues and not analysis.similarity_issues,
            contrast_issues=analysis.contrast_issues,
            similarity_issues=analysis.similarity_issues,
            average_contrast=round(sum(ratios) / len(ratios), 2),
            distribution=self._distribution(hexes),
        )

    def _distribution(self, hexes: Sequence[str]) -> dict:
        categories: dict[str, int] = {}
        temperatures = {"warm": 0, "cool": 0, "neutral": 0}
        brightness = {"light": 0, "dark": 0}

        for hex_color in hexes:
            desc = describe_color(self.model, hex_color)
            categories[desc.category] = categories.get(desc.category, 0) + 1
            temperatures[desc.temperature] += 1
            brightness["light" if desc.is_light else "dark"] += 1

        return {
            "categories": categories,
            "temperatures": temperatures,
            "brightness": brightness,
            "diversity": len(categories) / len(hexes) if hexes else 0.0,
        }
