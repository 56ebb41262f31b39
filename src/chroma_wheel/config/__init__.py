"""Configuration schema and loading."""

from .schema import WheelConfig, CacheConfig, ThrottleConfig
from .loader import load_config, save_config, config_from_dict

__all__ = [
    "WheelConfig",
    "CacheConfig",
    "ThrottleConfig",
    "load_config",
    "save_config",
    "config_from_dict",
]
