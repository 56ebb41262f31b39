"""Configuration dataclasses."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class CacheConfig:
    """Color cache configuration."""
    max_size: int = 1000
    ttl_seconds: Optional[float] = 1800.0  # None = never expire
    sweep_interval: Optional[float] = None  # Seconds, None = lazy expiry only


@dataclass
class ThrottleConfig:
    """Emission rate limits (updates per second)."""
    palette_fps: float = 30.0
    active_hex_fps: float = 60.0


@dataclass
class WheelConfig:
    """Main color wheel configuration."""
    anchor_hex: str = "#FF6B6B"
    scheme: str = "analogous"
    linked: bool = True
    selection_follows_active: bool = True
    size: float = 300.0  # Wheel diameter in pointer units
    snap_step: Optional[float] = None  # Snap hues to this many degrees
    min_contrast: float = 4.5
    cache: CacheConfig = field(default_factory=CacheConfig)
    throttle: ThrottleConfig = field(default_factory=ThrottleConfig)

    @classmethod
    def with_defaults(cls) -> "WheelConfig":
        """Create config with sensible defaults."""
        return cls()
