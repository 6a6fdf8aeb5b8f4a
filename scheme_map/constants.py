# scheme_map/constants.py
"""
Tunables shared across the project.

- SCHEME_SIZE: slots in a terminal colour scheme (8 normal + 8 bright)
- DEFAULT_SCHEME: built-in base used when none is requested
- DEFAULT_BLOCK_ROWS: image rows per scan block; cancellation is checked
  between blocks
- OPAQUE: widened alpha value reported by Color.to_channels()
"""
from __future__ import annotations

SCHEME_SIZE: int = 16

DEFAULT_SCHEME: str = "vga"

DEFAULT_BLOCK_ROWS: int = 64

# Unique colours compared against the base per vectorised step.
NEAREST_CHUNK: int = 65536

OPAQUE: int = 0xFFFF

OUTPUT_FORMATS = ("hex", "xrdb")

__all__ = [
    "SCHEME_SIZE",
    "DEFAULT_SCHEME",
    "DEFAULT_BLOCK_ROWS",
    "NEAREST_CHUNK",
    "OPAQUE",
    "OUTPUT_FORMATS",
]
