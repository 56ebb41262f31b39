"""Tests for chroma_wheel.wheel.engine."""

import logging

import pytest

from chroma_wheel.config import WheelConfig
from chroma_wheel.wheel import ColorWheelEngine, GesturePhase, PointerEvent


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def events():
    return {"palette": [], "hex": [], "handle": []}


@pytest.fixture
def build(fake_clock, fake_timers, events):
    engines = []

    def _build(**overrides):
        settings = {"anchor_hex": "#FF0000", "scheme": "complementary"}
        settings.update(overrides)
        engine = ColorWheelEngine(
            WheelConfig(**settings),
            on_palette_change=lambda colors, phase: events["palette"].append((colors, phase)),
            on_active_hex_change=events["hex"].append,
            on_active_handle_change=events["handle"].append,
            _clock=fake_clock,
            _timer_factory=fake_timers,
        )
        engines.append(engine)
        return engine

    yield _build
    for engine in engines:
        engine.dispose()


def _press(engine, point, angle, phase, saturation=1.0):
    x, y = point(angle, saturation)
    engine.handle_pointer(PointerEvent(x, y, phase))


# ---------------------------------------------------------------------------
# TestInitialState
# ---------------------------------------------------------------------------

class TestInitialState:

    def test_complementary_palette(self, build, events):
        engine = build()
        assert engine.palette == ["#FF0000", "#00FFFF"]
        assert engine.active_hex == "#FF0000"
        assert engine.active_index == 0
        assert events == {"palette": [], "hex": [], "handle": []}

    def test_defaults_without_config(self):
        engine = ColorWheelEngine()
        try:
            assert engine.scheme.name == "analogous"
            assert len(engine.palette) == 3
            assert engine.palette[0] == "#FF6B6B"
        finally:
            engine.dispose()

    def test_refresh_emits_current_state(self, build, events):
        engine = build()
        engine.refresh()
        assert events["palette"] == [(["#FF0000", "#00FFFF"], GesturePhase.SET)]
        assert events["hex"] == ["#FF0000"]
        assert events["handle"] == [0]


# ---------------------------------------------------------------------------
# TestPointerGestures
# ---------------------------------------------------------------------------

class TestPointerGestures:

    def test_analogous_drag(self, build, point):
        engine = build(scheme="analogous")
        _press(engine, point, 0, GesturePhase.BEGIN)
        _press(engine, point, 50, GesturePhase.CHANGE)

        angles = [h.angle for h in engine.handles]
        assert angles == pytest.approx([50.0, 80.0, 20.0], abs=1e-6)

    def test_begin_selects_nearest_and_emits(self, build, events, point):
        engine = build()
        _press(engine, point, 170, GesturePhase.BEGIN)

        assert engine.active_index == 1
        assert events["handle"] == [1]
        assert events["palette"][-1][1] is GesturePhase.BEGIN
        assert events["hex"] == ["#00FFFF"]

    def test_tap_selects_without_moving(self, build, point):
        engine = build(scheme="analogous")
        _press(engine, point, 30, GesturePhase.BEGIN)
        _press(engine, point, 100, GesturePhase.END)

        assert engine.active_index == 1
        assert engine.handles[1].angle == pytest.approx(30.0)
        assert not engine.freed_indices

    def test_release_position_is_applied(self, build, point):
        engine = build()
        _press(engine, point, 0, GesturePhase.BEGIN)
        _press(engine, point, 20, GesturePhase.CHANGE)
        _press(engine, point, 40, GesturePhase.END)

        assert engine.handles[0].angle == pytest.approx(40.0, abs=1e-6)
        assert engine.handles[1].angle == pytest.approx(220.0, abs=1e-6)
        assert engine.mapper.selected is None

    def test_dragging_dependent_frees_it(self, build, point):
        engine = build(scheme="triadic")
        _press(engine, point, 120, GesturePhase.BEGIN)
        _press(engine, point, 100, GesturePhase.CHANGE, saturation=0.5)

        assert engine.freed_indices == frozenset({1})
        assert engine.handles[1].saturation == pytest.approx(0.5)
        assert engine.handles[2].angle == pytest.approx(240.0)

    def test_change_without_begin_selects_handle(self, build, events, point):
        engine = build()
        _press(engine, point, 175, GesturePhase.CHANGE)
        assert engine.active_index == 1
        assert events["handle"] == [1]


# ---------------------------------------------------------------------------
# TestEmission
# ---------------------------------------------------------------------------

class TestEmission:

    def test_changes_within_interval_coalesce(self, build, events, fake_timers, point):
        engine = build()
        _press(engine, point, 0, GesturePhase.BEGIN)
        fake_timers.advance(0.005)
        _press(engine, point, 10, GesturePhase.CHANGE)
        fake_timers.advance(0.010)
        _press(engine, point, 20, GesturePhase.CHANGE)

        assert len(events["palette"]) == 1
        fake_timers.advance(0.025)

        assert len(events["palette"]) == 2
        colors, phase = events["palette"][-1]
        assert phase is GesturePhase.CHANGE
        assert colors == engine.palette

    def test_gesture_end_flush(self, build, events, fake_timers, point):
        engine = build()
        _press(engine, point, 0, GesturePhase.BEGIN)
        fake_timers.advance(0.005)
        _press(engine, point, 20, GesturePhase.CHANGE)
        assert engine.scheduler.pending

        fake_timers.advance(0.005)
        _press(engine, point, 25, GesturePhase.END)
        assert not engine.scheduler.pending

        fake_timers.advance(1.0)
        assert len(events["palette"]) == 2
        colors, phase = events["palette"][-1]
        assert phase is GesturePhase.END
        assert colors == engine.palette
        assert events["hex"][-1] == engine.palette[0]

    def test_fixed_selection_skips_hex_for_dependent_drag(self, build, events, fake_timers, point):
        engine = build(scheme="analogous", selection_follows_active=False)
        _press(engine, point, 30, GesturePhase.BEGIN)
        assert events["hex"] == ["#FF0000"]

        fake_timers.advance(1.0)
        _press(engine, point, 60, GesturePhase.CHANGE)
        _press(engine, point, 70, GesturePhase.END)
        fake_timers.advance(1.0)

        assert events["hex"] == ["#FF0000"]
        assert engine.active_hex == "#FF0000"
        assert len(events["palette"]) == 3

    def test_following_selection_reports_dragged_color(self, build, events, fake_timers, point):
        engine = build(scheme="analogous")
        _press(engine, point, 30, GesturePhase.BEGIN)
        fake_timers.advance(1.0)
        _press(engine, point, 60, GesturePhase.CHANGE)

        assert events["hex"][-1] == engine.palette[1]
        assert engine.active_hex == engine.palette[1]

    def test_consumer_failure_does_not_break_engine(self, fake_clock, fake_timers, caplog):
        def broken(colors, phase):
            raise RuntimeError("render failed")

        engine = ColorWheelEngine(
            WheelConfig(anchor_hex="#FF0000", scheme="complementary"),
            on_palette_change=broken,
            _clock=fake_clock,
            _timer_factory=fake_timers,
        )
        with caplog.at_level(logging.ERROR):
            engine.set_anchor("#00FF00")

        assert engine.palette == ["#00FF00", "#FF00FF"]
        assert "Subscriber failed" in caplog.text
        engine.dispose()


# ---------------------------------------------------------------------------
# TestProgrammaticUpdates
# ---------------------------------------------------------------------------

class TestProgrammaticUpdates:

    def test_set_anchor_is_immediate(self, build, events):
        engine = build()
        engine.set_anchor("#0000FF")
        engine.set_anchor("#00FF00")
        assert [p for p, _ in events["palette"]] == [
            ["#0000FF", "#FFFF00"],
            ["#00FF00", "#FF00FF"],
        ]
        assert all(phase is GesturePhase.SET for _, phase in events["palette"])

    def test_typed_values_fall_back_to_defaults(self, build, events):
        engine = build(scheme="analogous")
        index = engine.set_handle_hsl(1, "abc", "", "50")

        assert index == 1
        assert engine.freed_indices == frozenset({1})
        assert engine.palette[1] == "#808080"
        assert events["palette"][-1][1] is GesturePhase.SET

    def test_huge_typed_values_do_not_raise(self, build):
        engine = build()
        engine.set_handle_hsl(1, 10**400, 50, 10**400)
        assert engine.palette[1] == "#BF4040"

    def test_typed_anchor_values(self, build):
        engine = build()
        engine.set_handle_hsl(0, "120", "100", "50")
        assert engine.palette == ["#00FF00", "#FF00FF"]

    def test_set_scheme_clears_freed(self, build):
        engine = build(scheme="analogous")
        engine.set_handle_hsl(2, 10, 100, 50)
        engine.set_scheme("triadic")

        assert not engine.freed_indices
        assert engine.palette == ["#FF0000", "#00FF00", "#0000FF"]

    def test_set_scheme_reports_clamped_active_handle(self, build, events):
        engine = build(scheme="tetradic")
        engine.select_handle(3)
        engine.set_scheme("complementary")

        assert engine.active_index == 1
        assert events["handle"] == [3, 1]

    def test_toggle_linked(self, build):
        engine = build()
        assert engine.toggle_linked() is False
        assert engine.linked is False
        assert engine.toggle_linked() is True

    def test_nudge_active(self, build):
        engine = build()
        engine.nudge_active(delta_angle=15.0)
        assert engine.handles[0].angle == pytest.approx(15.0)
        assert engine.handles[1].angle == pytest.approx(195.0)

    def test_set_active_handle_hsl(self, build):
        engine = build()
        engine.select_handle(1)
        engine.set_active_handle_hsl(240, 100, 50)
        assert engine.palette[1] == "#0000FF"
        assert engine.freed_indices == frozenset({1})

    def test_reset_links(self, build):
        engine = build()
        engine.set_handle_hsl(1, 90, 100, 50)
        engine.reset_links()
        assert engine.palette == ["#FF0000", "#00FFFF"]

    def test_selection_follows_toggle_emits(self, build, events):
        engine = build()
        engine.select_handle(1)
        engine.set_selection_follows_active(False)
        assert events["hex"][-1] == "#FF0000"


# ---------------------------------------------------------------------------
# TestAnalysisAndStatus
# ---------------------------------------------------------------------------

class TestAnalysisAndStatus:

    def test_analyze_current_palette(self, build):
        engine = build()
        analysis = engine.analyze_palette()
        assert len(analysis.contrast_issues) == 1
        assert analysis.contrast_issues[0].indices == (0, 1)
        assert analysis.similarity_issues == []

    def test_analyze_given_colors(self, build):
        engine = build()
        analysis = engine.analyze_palette(["#000000", "#FFFFFF"])
        assert analysis.contrast_issues == []

    def test_status(self, build):
        engine = build()
        status = engine.get_status()
        assert status["scheme"] == "complementary"
        assert status["palette"] == ["#FF0000", "#00FFFF"]
        assert status["freed"] == []
        assert status["linked"] is True
        assert "cache" in status


# ---------------------------------------------------------------------------
# TestDispose
# ---------------------------------------------------------------------------

class TestDispose:

    def test_no_emission_after_dispose(self, build, events, fake_timers, point):
        engine = build()
        _press(engine, point, 0, GesturePhase.BEGIN)
        fake_timers.advance(0.005)
        _press(engine, point, 20, GesturePhase.CHANGE)
        engine.dispose()

        fake_timers.advance(1.0)
        _press(engine, point, 40, GesturePhase.BEGIN)
        engine.set_anchor("#0000FF")

        assert len(events["palette"]) == 1
        assert not fake_timers.live

    def test_dispose_is_idempotent(self, build):
        engine = build()
        engine.dispose()
        engine.dispose()
        assert len(engine.model.cache) == 0
