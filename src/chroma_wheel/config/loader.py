"""Configuration file loading and saving."""

from pathlib import Path
from typing import Any
import yaml

from .schema import CacheConfig, ThrottleConfig, WheelConfig


def config_from_dict(data: dict[str, Any]) -> WheelConfig:
    """Build a WheelConfig from parsed YAML, filling in defaults."""
    defaults = WheelConfig()

    # Parse cache config
    cache_data = data.get("cache") or {}
    cache = CacheConfig(
        max_size=int(cache_data.get("max_size", defaults.cache.max_size)),
        ttl_seconds=cache_data.get("ttl_seconds", defaults.cache.ttl_seconds),
        sweep_interval=cache_data.get("sweep_interval", defaults.cache.sweep_interval),
    )

    # Parse throttle config
    throttle_data = data.get("throttle") or {}
    throttle = ThrottleConfig(
        palette_fps=float(throttle_data.get("palette_fps", defaults.throttle.palette_fps)),
        active_hex_fps=float(throttle_data.get("active_hex_fps", defaults.throttle.active_hex_fps)),
    )

    return WheelConfig(
        anchor_hex=str(data.get("anchor_hex", defaults.anchor_hex)),
        scheme=str(data.get("scheme", defaults.scheme)),
        linked=bool(data.get("linked", defaults.linked)),
        selection_follows_active=bool(
            data.get("selection_follows_active", defaults.selection_follows_active)
        ),
        size=float(data.get("size", defaults.size)),
        snap_step=data.get("snap_step", defaults.snap_step),
        min_contrast=float(data.get("min_contrast", defaults.min_contrast)),
        cache=cache,
        throttle=throttle,
    )


def load_config(config_path: Path) -> WheelConfig:
    """Load configuration from YAML file."""
    with open(config_path) as f:
        data = yaml.safe_load(f) or {}
    return config_from_dict(data)


def save_config(config: WheelConfig, config_path: Path) -> None:
    """Save configuration to YAML file."""
    data: dict[str, Any] = {
        "anchor_hex": config.anchor_hex,
        "scheme": config.scheme,
        "linked": config.linked,
        "selection_follows_active": config.selection_follows_active,
        "size": config.size,
        "snap_step": config.snap_step,
        "min_contrast": config.min_contrast,
        "cache": {
            "max_size": config.cache.max_size,
            "ttl_seconds": config.cache.ttl_seconds,
            "sweep_interval": config.cache.sweep_interval,
        },
        "throttle": {
            "palette_fps": config.throttle.palette_fps,
            "active_hex_fps": config.throttle.active_hex_fps,
        },
    }

    with open(config_path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
