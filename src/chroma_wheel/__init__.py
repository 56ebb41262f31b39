"""chroma-wheel - multi-handle color wheel engine with scheme syncing and contrast checks."""

from .color import ColorCache, ColorModel, HSL, RGB
from .config import WheelConfig, load_config
from .wheel import ColorWheelEngine, GesturePhase, PointerEvent, Scheme
from .analysis import ContrastValidator

__version__ = "0.1.0"

__all__ = [
    "ColorCache",
    "ColorModel",
    "HSL",
    "RGB",
    "WheelConfig",
    "load_config",
    "ColorWheelEngine",
    "GesturePhase",
    "PointerEvent",
    "Scheme",
    "ContrastValidator",
]
