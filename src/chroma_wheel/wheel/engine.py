"""
Color wheel engine - the facade an application talks to.

The ColorWheelEngine combines:
- HandleStore + SyncEngine (handle state and scheme propagation)
- GestureMapper (pointer geometry -> handle selection and movement)
- UpdateScheduler + Dispatcher (rate-limited outbound messages)
- ColorModel + ContrastValidator (conversions and accessibility checks)

Every mutation ends in a publish: gesture begin/end and programmatic sets
emit immediately, drag changes go through the throttled streams.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Sequence

from ..analysis.contrast import ContrastValidator, PaletteAnalysis, PaletteReport
from ..color.cache import ColorCache
from ..color.model import ColorModel
from ..color.types import HSL
from ..config.schema import WheelConfig
from ..inputs import parse_hsl
from .dispatcher import (
    ActiveHandleMessage,
    ActiveHexMessage,
    Dispatcher,
    PaletteMessage,
)
from .gestures import GestureMapper, GesturePhase, PointerEvent
from .handles import HandleState, HandleStore
from .scheduler import TimerFactory, UpdateScheduler, thread_timer
from .schemes import Scheme, SchemeSpec
from .sync import SyncEngine

logger = logging.getLogger(__name__)


class ColorWheelEngine:
    """
    Multi-handle color wheel.

    Usage:
        engine = ColorWheelEngine(
            WheelConfig(anchor_hex="#FF0000", scheme="complementary"),
            on_palette_change=lambda colors, phase: print(colors),
        )
        engine.palette  # ["#FF0000", "#00FFFF"]

        # From the pointer handler:
        engine.handle_pointer(PointerEvent(150, 10, GesturePhase.BEGIN))
        engine.handle_pointer(PointerEvent(200, 40, GesturePhase.CHANGE))
        engine.handle_pointer(PointerEvent(210, 45, GesturePhase.END))

        engine.dispose()
    """

    def __init__(
        self,
        config: WheelConfig | None = None,
        model: ColorModel | None = None,
        dispatcher: Dispatcher | None = None,
        on_palette_change: Callable[[list[str], GesturePhase], None] | None = None,
        on_active_hex_change: Callable[[str], None] | None = None,
        on_active_handle_change: Callable[[int], None] | None = None,
        *,
        _clock: Callable[[], float] = time.monotonic,
        _timer_factory: TimerFactory = thread_timer,
    ):
        if config is None:
            config = WheelConfig.with_defaults()
        self.config = config

        # Color model (owns its cache unless one was injected)
        self._owns_cache = model is None
        if model is None:
            cache = ColorCache(
                max_size=config.cache.max_size,
                ttl=config.cache.ttl_seconds,
                sweep_interval=config.cache.sweep_interval,
                _clock=_clock,
            )
            cache.init()
            model = ColorModel(cache)
        self.model = model
        self.validator = ContrastValidator(model, config.min_contrast)

        # Outbound messages
        self._owns_dispatcher = dispatcher is None
        self.dispatcher = dispatcher if dispatcher is not None else Dispatcher()
        self.scheduler = UpdateScheduler(
            self.dispatcher,
            palette_fps=config.throttle.palette_fps,
            active_hex_fps=config.throttle.active_hex_fps,
            _clock=_clock,
            _timer_factory=_timer_factory,
        )
        self._subscriptions: list[tuple[type, Callable]] = []
        if on_palette_change is not None:
            self._subscribe(
                PaletteMessage, lambda m: on_palette_change(list(m.colors), m.phase)
            )
        if on_active_hex_change is not None:
            self._subscribe(ActiveHexMessage, lambda m: on_active_hex_change(m.hex))
        if on_active_handle_change is not None:
            self._subscribe(ActiveHandleMessage, lambda m: on_active_handle_change(m.index))

        # Handle state
        self.store = HandleStore()
        self.sync = SyncEngine(self.store, config.scheme, config.linked)
        self.sync.set_anchor_hex(config.anchor_hex, self.model)
        self.selection_follows_active = config.selection_follows_active

        # Pointer handling
        self.mapper = GestureMapper(config.size, config.snap_step)
        self._moved = False

        self._disposed = False

    def _subscribe(self, message_type: type, callback: Callable) -> None:
        self.dispatcher.subscribe(message_type, callback)
        self._subscriptions.append((message_type, callback))

    # =========================================================================
    # Read-only state
    # =========================================================================

    @property
    def scheme(self) -> SchemeSpec:
        return self.sync.scheme

    @property
    def linked(self) -> bool:
        return self.sync.linked

    @property
    def palette(self) -> list[str]:
        """Hex colors of the live handles, handle 0 first."""
        return self.sync.palette(self.model)

    @property
    def active_index(self) -> int:
        return self.store.active_index

    @property
    def active_hex(self) -> str:
        """Selected handle's color, or the anchor's when selection is fixed."""
        index = self.sync.selected_index(self.selection_follows_active)
        return self.palette[index]

    @property
    def handles(self) -> tuple[HandleState, ...]:
        return self.store.snapshot()

    @property
    def freed_indices(self) -> frozenset[int]:
        return self.store.freed_indices

    # =========================================================================
    # Emission
    # =========================================================================

    def _publish(self, phase: GesturePhase, edited_index: int | None = None) -> None:
        """
        Offer the current palette to the scheduler.

        Args:
            phase: Phase tag for the emission
            edited_index: Handle moved by a drag, or None for selection
                changes and programmatic sets
        """
        if self._disposed:
            return
        colors = self.palette
        active_hex: str | None = None
        # With a fixed selection, dragging a dependent leaves the readout alone
        if self.selection_follows_active or edited_index in (None, 0):
            active_hex = colors[self.sync.selected_index(self.selection_follows_active)]
        self.scheduler.publish(colors, active_hex, phase)

    def refresh(self) -> None:
        """Emit the current state immediately (e.g. after subscribing late)."""
        self.scheduler.publish_active_handle(self.active_index)
        self._publish(GesturePhase.SET)

    # =========================================================================
    # Pointer input
    # =========================================================================

    def handle_pointer(self, event: PointerEvent) -> None:
        """
        Process one pointer sample.

        BEGIN selects the nearest live handle and emits immediately.
        CHANGE drags the held handle through the throttled streams.
        END applies the release position (if the pointer moved during the
        gesture) and flushes immediately, superseding any pending emission.
        """
        if self._disposed:
            return

        if event.phase is GesturePhase.BEGIN:
            self._begin(event)
            self._publish(GesturePhase.BEGIN)

        elif event.phase is GesturePhase.CHANGE:
            index = self.mapper.selected
            if index is None:
                # Missed the begin sample: select as if the gesture started here
                index = self._begin(event)
            angle, saturation = self.mapper.map_point(event.x, event.y)
            self.sync.drag(index, angle, saturation)
            self._moved = True
            self._publish(GesturePhase.CHANGE, index)

        elif event.phase is GesturePhase.END:
            index = self.mapper.end()
            if index is not None and self._moved:
                angle, saturation = self.mapper.map_point(event.x, event.y)
                self.sync.drag(index, angle, saturation)
            self._moved = False
            self._publish(GesturePhase.END, index)

        else:
            logger.debug("Ignoring pointer event with phase %s", event.phase.value)

    def _begin(self, event: PointerEvent) -> int:
        index = self.mapper.begin(event.x, event.y, self.store.snapshot())
        self._moved = False
        self.store.active_index = index
        self.scheduler.publish_active_handle(index)
        return index

    # =========================================================================
    # Programmatic updates
    # =========================================================================

    def set_anchor(self, hex_color: str) -> None:
        """Set handle 0 from a hex color and re-seed non-freed dependents."""
        self.sync.set_anchor_hex(hex_color, self.model)
        self._publish(GesturePhase.SET)

    def set_anchor_hsl(self, hsl: HSL) -> None:
        self.sync.set_anchor_hsl(hsl)
        self._publish(GesturePhase.SET)

    def set_scheme(self, scheme: "str | Scheme") -> SchemeSpec:
        """
        Switch scheme. Freed handles rejoin and every live handle is
        recomputed from handle 0.
        """
        previous_active = self.store.active_index
        spec = self.sync.set_scheme(scheme)
        if self.store.active_index != previous_active:
            self.scheduler.publish_active_handle(self.store.active_index)
        self._publish(GesturePhase.SET)
        return spec

    def set_linked(self, linked: bool) -> None:
        """Toggle propagation for future edits (moves nothing)."""
        self.sync.set_linked(linked)

    def toggle_linked(self) -> bool:
        self.sync.set_linked(not self.sync.linked)
        return self.sync.linked

    def set_selection_follows_active(self, follows: bool) -> None:
        self.selection_follows_active = bool(follows)
        self._publish(GesturePhase.SET)

    def select_handle(self, index: int) -> int:
        """Make a handle active without moving it."""
        self.store.active_index = index
        self.scheduler.publish_active_handle(self.store.active_index)
        self._publish(GesturePhase.SET)
        return self.store.active_index

    def set_handle_hsl(self, index: int, h: object, s: object, l: object) -> int:
        """
        Set a handle from typed values (numbers or text).

        Malformed components fall back to neutral defaults; the update uses
        the same linking rules as a drag and is never rate-limited.

        Returns:
            The (clamped) index that was set
        """
        index = self.sync.set_handle_hsl(index, parse_hsl(h, s, l))
        self._publish(GesturePhase.SET)
        return index

    def set_active_handle_hsl(self, h: object, s: object, l: object) -> int:
        return self.set_handle_hsl(self.store.active_index, h, s, l)

    def nudge_active(self, delta_angle: float = 0.0, delta_saturation: float = 0.0) -> int:
        """Move the active handle by a relative step (keyboard control)."""
        index = self.sync.nudge(self.store.active_index, delta_angle, delta_saturation)
        self._publish(GesturePhase.SET)
        return index

    def reset_links(self) -> None:
        self.sync.reset_links()
        self._publish(GesturePhase.SET)

    # =========================================================================
    # Analysis
    # =========================================================================

    def analyze_palette(self, colors: Sequence[str] | None = None) -> PaletteAnalysis:
        """Contrast and similarity issues for a palette (current one by default)."""
        return self.validator.analyze(self.palette if colors is None else colors)

    def validate_palette(self, colors: Sequence[str] | None = None) -> PaletteReport:
        return self.validator.validate_palette(self.palette if colors is None else colors)

    def get_status(self) -> dict:
        """Get current engine status for display."""
        return {
            "scheme": self.sync.scheme.name,
            "scheme_display_name": self.sync.scheme.display_name,
            "handle_count": self.store.count,
            "linked": self.sync.linked,
            "selection_follows_active": self.selection_follows_active,
            "active_index": self.active_index,
            "active_hex": self.active_hex,
            "palette": self.palette,
            "freed": sorted(self.store.freed_indices),
            "gesture_active": self.mapper.selected is not None,
            "pending_emission": self.scheduler.pending,
            "cache": self.model.cache.stats(),
        }

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def dispose(self) -> None:
        """Cancel pending emissions and release owned resources."""
        if self._disposed:
            return
        self._disposed = True
        self.scheduler.dispose()
        for message_type, callback in self._subscriptions:
            self.dispatcher.unsubscribe(message_type, callback)
        self._subscriptions.clear()
        if self._owns_dispatcher:
            self.dispatcher.close()
        if self._owns_cache:
            self.model.cache.destroy()
        logger.debug("Color wheel engine disposed")
