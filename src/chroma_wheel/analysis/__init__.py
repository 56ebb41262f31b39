"""Palette accessibility analysis."""

from .contrast import (
    ContrastValidator,
    ContrastIssue,
    SimilarityIssue,
    FixSuggestion,
    PaletteAnalysis,
    PaletteReport,
    hue_distance,
)
from .describe import ColorDescription, describe_color

__all__ = [
    "ContrastValidator",
    "ContrastIssue",
    "SimilarityIssue",
    "FixSuggestion",
    "PaletteAnalysis",
    "PaletteReport",
    "hue_distance",
    "ColorDescription",
    "describe_color",
]
