"""Interactive multi-handle color wheel."""

from .schemes import (
    MAX_HANDLES,
    Scheme,
    SchemeSpec,
    SCHEMES,
    register_scheme,
    get_scheme,
    list_schemes,
)
from .handles import Handle, HandleState, HandleStore
from .sync import SyncEngine
from .gestures import (
    GesturePhase,
    PointerEvent,
    GestureMapper,
    angle_from_point,
    saturation_from_point,
    handle_position,
)
from .dispatcher import (
    Dispatcher,
    PaletteMessage,
    ActiveHexMessage,
    ActiveHandleMessage,
)
from .scheduler import ThrottledStream, UpdateScheduler
from .engine import ColorWheelEngine

__all__ = [
    "MAX_HANDLES",
    "Scheme",
    "SchemeSpec",
    "SCHEMES",
    "register_scheme",
    "get_scheme",
    "list_schemes",
    "Handle",
    "HandleState",
    "HandleStore",
    "SyncEngine",
    "GesturePhase",
    "PointerEvent",
    "GestureMapper",
    "angle_from_point",
    "saturation_from_point",
    "handle_position",
    "Dispatcher",
    "PaletteMessage",
    "ActiveHexMessage",
    "ActiveHandleMessage",
    "ThrottledStream",
    "UpdateScheduler",
    "ColorWheelEngine",
]
