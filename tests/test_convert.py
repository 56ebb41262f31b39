"""Tests for chroma_wheel.color.convert."""

import math

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from chroma_wheel.color import (
    HSL,
    RGB,
    contrast_from_luminance,
    hex_to_rgb,
    hsl_to_hex,
    normalize_hex,
    parse_hex,
    relative_luminance,
    rgb_to_hsl,
)


# ---------------------------------------------------------------------------
# TestParseHex
# ---------------------------------------------------------------------------

class TestParseHex:

    @pytest.mark.parametrize("raw, expected", [
        ("#ff0000", "#FF0000"),
        ("FF0000", "#FF0000"),
        ("#fff", "#FFFFFF"),
        ("abc", "#AABBCC"),
        ("#F00F", "#FF0000"),
        ("#FF000080", "#FF0000"),
        ("0xff8800", "#FF8800"),
        ("  #123456  ", "#123456"),
        ("red", "#FF0000"),
        (" Cyan ", "#00FFFF"),
    ])
    def test_accepted_forms(self, raw, expected):
        assert parse_hex(raw) == expected

    @pytest.mark.parametrize("raw", ["", "#", "#12", "#12345", "zzzzzz", "#GG0000", "notacolor"])
    def test_rejected_strings(self, raw):
        assert parse_hex(raw) is None

    @pytest.mark.parametrize("raw", [None, 123, 1.5, ["#FFF"]])
    def test_non_strings(self, raw):
        assert parse_hex(raw) is None

    def test_normalize_falls_back_to_black(self):
        assert normalize_hex("nope") == "#000000"
        assert normalize_hex(None) == "#000000"


# ---------------------------------------------------------------------------
# TestConversions
# ---------------------------------------------------------------------------

class TestConversions:

    def test_hex_to_rgb(self):
        assert hex_to_rgb("#FF8000") == RGB(255, 128, 0)
        assert hex_to_rgb("xyz") == RGB(0, 0, 0)
        assert hex_to_rgb("#bad") == RGB(0xBB, 0xAA, 0xDD)

    def test_rgb_to_hsl_primary(self):
        assert rgb_to_hsl(RGB(255, 0, 0)) == HSL(0.0, 100.0, 50.0)
        assert tuple(rgb_to_hsl(RGB(0, 0, 255))) == pytest.approx((240.0, 100.0, 50.0))

    def test_rgb_to_hsl_achromatic(self):
        hsl = rgb_to_hsl(RGB(128, 128, 128))
        assert hsl.h == 0.0
        assert hsl.s == 0.0
        assert hsl.l == pytest.approx(50.196, abs=1e-3)

    @pytest.mark.parametrize("h, s, l, expected", [
        (0, 100, 50, "#FF0000"),
        (120, 100, 50, "#00FF00"),
        (240, 100, 50, "#0000FF"),
        (180, 100, 50, "#00FFFF"),
        (0, 0, 100, "#FFFFFF"),
        (0, 0, 0, "#000000"),
    ])
    def test_hsl_to_hex(self, h, s, l, expected):
        assert hsl_to_hex(h, s, l) == expected

    def test_hue_wraps(self):
        assert hsl_to_hex(360, 100, 50) == "#FF0000"
        assert hsl_to_hex(-120, 100, 50) == "#0000FF"
        assert hsl_to_hex(600, 100, 50) == "#0000FF"

    def test_out_of_range_components_clamp(self):
        assert hsl_to_hex(0, 150, 50) == "#FF0000"
        assert hsl_to_hex(0, 100, 150) == "#FFFFFF"
        assert hsl_to_hex(0, -10, -10) == "#000000"

    def test_non_finite_components_never_raise(self):
        assert hsl_to_hex(math.nan, 100, 50) == "#FF0000"
        assert hsl_to_hex(0, math.inf, 50) == "#808080"
        assert hsl_to_hex(0, 100, math.nan) == "#000000"
        assert hsl_to_hex("x", None, "y") == "#000000"

    @pytest.mark.parametrize("hex_color", [
        "#FF6B6B", "#123456", "#ABCDEF", "#00FF7F", "#808080", "#000000", "#FFFFFF",
    ])
    def test_round_trip_is_stable(self, hex_color):
        h, s, l = rgb_to_hsl(hex_to_rgb(hex_color))
        assert hsl_to_hex(h, s, l) == hex_color

    @given(st.integers(min_value=0, max_value=0xFFFFFF))
    @settings(max_examples=300)
    def test_round_trip_any_color(self, value):
        hex_color = f"#{value:06X}"
        hsl = rgb_to_hsl(hex_to_rgb(hex_color))

        assert 0.0 <= hsl.h < 360.0
        assert 0.0 <= hsl.s <= 100.0
        assert 0.0 <= hsl.l <= 100.0
        assert hsl_to_hex(*hsl) == hex_color


# ---------------------------------------------------------------------------
# TestLuminance
# ---------------------------------------------------------------------------

class TestLuminance:

    def test_extremes(self):
        assert relative_luminance(RGB(0, 0, 0)) == 0.0
        assert relative_luminance(RGB(255, 255, 255)) == pytest.approx(1.0)

    def test_channel_weights(self):
        assert relative_luminance(RGB(255, 0, 0)) == pytest.approx(0.2126)
        assert relative_luminance(RGB(0, 255, 0)) == pytest.approx(0.7152)
        assert relative_luminance(RGB(0, 0, 255)) == pytest.approx(0.0722)

    def test_contrast_black_white(self):
        assert contrast_from_luminance(1.0, 0.0) == pytest.approx(21.0)
        assert contrast_from_luminance(0.0, 1.0) == pytest.approx(21.0)

    @pytest.mark.parametrize("a, b", [(math.nan, 0.5), (0.5, math.inf), (1.5, 0.2), (-0.1, 0.2)])
    def test_invalid_luminance_gives_no_contrast(self, a, b):
        assert contrast_from_luminance(a, b) == 1.0
