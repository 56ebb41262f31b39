"""
CLI entry points for chroma-wheel.

Contains the main executable:
- wheel: palette generation, contrast analysis and pointer-trace replay
"""

from .wheel import main

__all__ = [
    "main",
]
