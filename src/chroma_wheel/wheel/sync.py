"""
Scheme-aware handle synchronization.

SyncEngine applies the propagation rules whenever a handle changes:

- Anchor set: handle 0 takes the value, every non-freed dependent is
  placed at anchor + offset with the scheme's saturation/lightness rule.
- Drag / programmatic set of handle 0 while linked: same as anchor set.
- Drag / programmatic set of handle i > 0 while linked: handle i is freed
  (it stops following handle 0 until the scheme changes or links reset).
- Scheme change: freed flags clear, every live handle is recomputed.
- Link toggle: moves nothing, only changes what future edits propagate.
"""

from ..color.model import ColorModel
from ..color.types import HSL
from .handles import HandleStore
from .schemes import Scheme, SchemeSpec, get_scheme


class SyncEngine:
    """Keeps dependent handles in step with handle 0 for the active scheme."""

    def __init__(
        self,
        store: HandleStore,
        scheme: "str | Scheme" = Scheme.ANALOGOUS,
        linked: bool = True,
    ):
        self.store = store
        self.linked = linked
        self._spec = get_scheme(scheme)
        self.store.set_count(self._spec.handle_count)

    @property
    def scheme(self) -> SchemeSpec:
        return self._spec

    @property
    def count(self) -> int:
        return self.store.count

    # =========================================================================
    # Propagation
    # =========================================================================

    def _propagate(self, include_freed: bool = False) -> None:
        """Place dependents relative to handle 0 per the scheme."""
        anchor = self.store.anchor
        for i in range(1, self.store.count):
            if self.store[i].freed and not include_freed:
                continue
            self.store.set(
                i,
                angle=anchor.angle + self._spec.offset(i),
                saturation=anchor.saturation,
                lightness=self._spec.lightness_for(i, anchor.lightness),
            )

    def set_anchor_hsl(self, hsl: HSL) -> None:
        """
        Set handle 0 from HSL (degrees, percent, percent) and propagate.

        Runs regardless of the linked flag: an anchor change re-seeds
        every dependent that has not been freed.
        """
        self.store.set(0, angle=hsl.h, saturation=hsl.s / 100.0, lightness=hsl.l)
        self._propagate()

    def set_anchor_hex(self, hex_color: str, model: ColorModel) -> None:
        self.set_anchor_hsl(model.to_hsl(hex_color))

    def drag(self, index: int, angle: float, saturation: float) -> int:
        """
        Move a handle from gesture output.

        Returns:
            The (clamped) index that was moved
        """
        index = self.store.clamp_index(index)
        self.store.set(index, angle=angle, saturation=saturation)
        self._after_edit(index)
        return index

    def nudge(self, index: int, delta_angle: float = 0.0, delta_saturation: float = 0.0) -> int:
        """Move a handle relative to its current position."""
        index = self.store.clamp_index(index)
        handle = self.store[index]
        return self.drag(index, handle.angle + delta_angle, handle.saturation + delta_saturation)

    def set_handle_hsl(self, index: int, hsl: HSL) -> int:
        """
        Programmatic set (e.g. typed values) with the same rules as drag.

        Returns:
            The (clamped) index that was set
        """
        index = self.store.clamp_index(index)
        self.store.set(index, angle=hsl.h, saturation=hsl.s / 100.0, lightness=hsl.l)
        self._after_edit(index)
        return index

    def _after_edit(self, index: int) -> None:
        if not self.linked:
            return
        if index == 0:
            self._propagate()
        else:
            self.store.free(index)

    def set_scheme(self, scheme: "str | Scheme") -> SchemeSpec:
        """Switch scheme: clear freed flags and recompute every live handle."""
        self._spec = get_scheme(scheme)
        self.store.set_count(self._spec.handle_count)
        self.store.clear_freed()
        self._propagate(include_freed=True)
        return self._spec

    def set_linked(self, linked: bool) -> None:
        self.linked = bool(linked)

    def reset_links(self) -> None:
        """Clear freed flags and snap every dependent back to the scheme."""
        self.store.clear_freed()
        self._propagate()

    # =========================================================================
    # Palette derivation
    # =========================================================================

    def palette(self, model: ColorModel) -> list[str]:
        """Hex colors of the live handles, in handle order."""
        return [
            model.to_hex(h.angle, h.saturation * 100.0, h.lightness)
            for h in self.store.active_handles()
        ]

    def selected_index(self, follows_active: bool) -> int:
        """Index whose color is reported as the active/selected hex."""
        if follows_active:
            return self.store.clamp_index(self.store.active_index)
        return 0
