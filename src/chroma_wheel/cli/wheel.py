"""
chroma-wheel command line.

Subcommands:
    palette   Print the palette for an anchor color and scheme
    analyze   Check a palette for low-contrast and near-duplicate pairs
    replay    Feed a recorded pointer trace through the engine
    schemes   List available color schemes

Trace files are YAML:

    anchor_hex: "#FF0000"   # optional, overrides config
    scheme: analogous       # optional, overrides config
    events:
      - {t: 0.000, x: 150, y: 10, phase: begin}
      - {t: 0.016, x: 170, y: 12, phase: change}
      - {t: 0.120, x: 190, y: 20, phase: end}

Event times are in seconds and replayed on a virtual clock, so throttled
emissions come out exactly as they would have live.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable

import yaml

from ..analysis import ContrastValidator, describe_color
from ..color import ColorModel
from ..config import WheelConfig, load_config
from ..wheel import ColorWheelEngine, GesturePhase, PointerEvent, get_scheme, list_schemes


def _load(args: argparse.Namespace) -> WheelConfig:
    if args.config:
        return load_config(Path(args.config))
    return WheelConfig.with_defaults()


# =============================================================================
# palette
# =============================================================================

def cmd_palette(args: argparse.Namespace) -> int:
    config = _load(args)
    if args.anchor:
        config.anchor_hex = args.anchor
    if args.scheme:
        config.scheme = args.scheme

    engine = ColorWheelEngine(config)
    try:
        spec = engine.scheme
        print(f"[SCHEME] {spec.display_name} ({spec.handle_count} colors)")
        for i, hex_color in enumerate(engine.palette):
            desc = describe_color(engine.model, hex_color)
            marker = "*" if i == 0 else " "
            print(f" {marker} {i}: {hex_color}  {desc.category:<8} {desc.temperature:<7} {desc.brightness}")
    finally:
        engine.dispose()
    return 0


# =============================================================================
# analyze
# =============================================================================

def cmd_analyze(args: argparse.Namespace) -> int:
    config = _load(args)
    min_ratio = args.min_ratio if args.min_ratio is not None else config.min_contrast
    validator = ContrastValidator(ColorModel(), min_ratio)

    report = validator.validate_palette(args.colors)
    colors = [validator.model.normalize(c) for c in args.colors]
    print(f"Palette: {' '.join(colors)}")
    print(f"Average contrast: {report.average_contrast:.2f}")
    print()

    if report.contrast_issues:
        print(f"[CONTRAST] {len(report.contrast_issues)} pair(s) below {min_ratio}:1")
        for issue in report.contrast_issues:
            a, b = issue.colors
            print(f"  {a} / {b}: {issue.ratio:.2f}:1")
            fix = validator.suggest_fix(a, b, min_ratio)
            if fix:
                print(
                    f"    suggestion: {fix.kind} {fix.original_color} -> "
                    f"{fix.suggested_color} ({fix.new_ratio:.2f}:1)"
                )
            else:
                print("    suggestion: none (a single step is not enough)")
    else:
        print("[CONTRAST] OK")

    if report.similarity_issues:
        print(f"[SIMILAR] {len(report.similarity_issues)} near-duplicate pair(s):")
        for issue in report.similarity_issues:
            a, b = issue.colors
            print(
                f"  {a} / {b}: hue {issue.hue_diff:.0f} deg, "
                f"sat {issue.saturation_diff:.0f}, light {issue.lightness_diff:.0f}"
            )
    else:
        print("[SIMILAR] OK")

    return 0 if report.is_valid else 1


# =============================================================================
# replay
# =============================================================================

class _VirtualTimeline:
    """Clock and timer factory that only advance when told to."""

    def __init__(self):
        self.now = 0.0
        self._timers: list["_VirtualTimer"] = []

    def clock(self) -> float:
        return self.now

    def timer(self, delay: float, callback: Callable[[], None]) -> "_VirtualTimer":
        return _VirtualTimer(self, self.now + delay, callback)

    def advance_to(self, t: float) -> None:
        """Move time forward, firing timers that come due on the way."""
        while True:
            due = [tm for tm in self._timers if tm.due <= t]
            if not due:
                break
            timer = min(due, key=lambda tm: tm.due)
            self._timers.remove(timer)
            self.now = max(self.now, timer.due)
            timer.callback()
        self.now = max(self.now, t)

    def flush(self) -> None:
        while self._timers:
            self.advance_to(max(tm.due for tm in self._timers))


class _VirtualTimer:
    def __init__(self, timeline: _VirtualTimeline, due: float, callback: Callable[[], None]):
        self.timeline = timeline
        self.due = due
        self.callback = callback

    def start(self) -> None:
        self.timeline._timers.append(self)

    def cancel(self) -> None:
        if self in self.timeline._timers:
            self.timeline._timers.remove(self)


def _parse_events(raw_events: list) -> list[tuple[float, PointerEvent]]:
    """Validate trace events up front so a bad line fails before replay."""
    if not isinstance(raw_events, list):
        raise ValueError(f"events must be a list, got {raw_events!r}")
    parsed = []
    t = 0.0
    for i, raw in enumerate(raw_events):
        if not isinstance(raw, dict):
            raise ValueError(f"event {i}: expected a mapping, got {raw!r}")
        try:
            t = float(raw.get("t", t))
            event = PointerEvent.from_dict(raw)
        except KeyError as e:
            raise ValueError(f"event {i}: missing field {e}") from e
        except (TypeError, ValueError) as e:
            raise ValueError(f"event {i}: {e}") from e
        parsed.append((t, event))
    return parsed


def cmd_replay(args: argparse.Namespace) -> int:
    config = _load(args)
    with open(args.trace) as f:
        trace = yaml.safe_load(f) or {}
    if not isinstance(trace, dict):
        raise ValueError(f"{args.trace}: trace must be a mapping")

    if "anchor_hex" in trace:
        config.anchor_hex = str(trace["anchor_hex"])
    if "scheme" in trace:
        config.scheme = str(trace["scheme"])

    events = _parse_events(trace.get("events") or [])

    timeline = _VirtualTimeline()
    counts = {"palette": 0, "active_hex": 0}

    def on_palette(colors: list[str], phase: GesturePhase) -> None:
        counts["palette"] += 1
        print(f"[PALETTE] t={timeline.now * 1000:7.1f}ms {phase.value:<6} {' '.join(colors)}")

    def on_active_hex(hex_color: str) -> None:
        counts["active_hex"] += 1
        if args.show_active:
            print(f"[ACTIVE]  t={timeline.now * 1000:7.1f}ms {hex_color}")

    def on_active_handle(index: int) -> None:
        print(f"[HANDLE]  t={timeline.now * 1000:7.1f}ms handle {index}")

    engine = ColorWheelEngine(
        config,
        on_palette_change=on_palette,
        on_active_hex_change=on_active_hex,
        on_active_handle_change=on_active_handle,
        _clock=timeline.clock,
        _timer_factory=timeline.timer,
    )
    try:
        print(f"[REPLAY] {len(events)} events, scheme={engine.scheme.name}, anchor={engine.palette[0]}")
        for t, event in events:
            timeline.advance_to(t)
            engine.handle_pointer(event)
        timeline.flush()

        print()
        print(f"[REPLAY] {len(events)} events -> {counts['palette']} palette / "
              f"{counts['active_hex']} active-hex emissions")
        print(f"[REPLAY] Final palette: {' '.join(engine.palette)}")
        freed = sorted(engine.freed_indices)
        if freed:
            print(f"[REPLAY] Freed handles: {freed}")
    finally:
        engine.dispose()
    return 0


# =============================================================================
# schemes
# =============================================================================

def cmd_schemes(args: argparse.Namespace) -> int:
    for name in list_schemes():
        spec = get_scheme(name)
        offsets = ", ".join(f"{o:g}" for o in spec.offsets)
        print(f"  {name:<20} [{offsets}]")
        print(f"  {'':<20} {spec.description}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chroma-wheel",
        description="Multi-handle color wheel: schemes, palettes and contrast checks",
    )
    parser.add_argument("--config", "-c", help="Path to YAML config file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("palette", help="Print the palette for an anchor and scheme")
    p.add_argument("--anchor", "-a", help="Anchor color (hex or name)")
    p.add_argument("--scheme", "-s", help="Scheme name")
    p.set_defaults(func=cmd_palette)

    p = sub.add_parser("analyze", help="Check contrast and similarity of colors")
    p.add_argument("colors", nargs="+", help="Colors to check")
    p.add_argument("--min-ratio", type=float, default=None, help="Minimum contrast ratio")
    p.set_defaults(func=cmd_analyze)

    p = sub.add_parser("replay", help="Replay a recorded pointer trace")
    p.add_argument("trace", help="Trace YAML file")
    p.add_argument("--show-active", action="store_true", help="Also print active-hex emissions")
    p.set_defaults(func=cmd_replay)

    p = sub.add_parser("schemes", help="List color schemes")
    p.set_defaults(func=cmd_schemes)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"ERROR: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
