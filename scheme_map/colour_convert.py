# scheme_map/colour_convert.py
from __future__ import annotations

"""
Widened-space conversions and Euclidean metrics.

Exports:
  widen_u8(rgb)
  palette_channels(palette)
  pack_rgb(rgb) / unpack_rgb(keys)
  squared_distances(samples, targets)
  nearest_slot_indices(samples, targets)
  colour_distance(a, b)

All distances are computed on int64 widened channels so ties are exact.
"""

import math
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from .constants import NEAREST_CHUNK
from .core_types import Color, U8Rows, WideRows


# 8-bit to 16-bit


def widen_u8(rgb: np.ndarray) -> WideRows:
    """
    Bit-replicate each 8-bit channel (v | v << 8). Vectorised.
    Args:
      rgb: uint8 array[...,3]
    Returns:
      int64 array[...,3]
    """
    wide = np.asarray(rgb).astype(np.int64)
    return wide | (wide << 8)


def palette_channels(palette: Sequence[Color]) -> WideRows:
    """Widened (N,3) rows for a sequence of Colors."""
    rows = np.array([c.rgb for c in palette], dtype=np.uint8).reshape(-1, 3)
    return widen_u8(rows)


# Packed keys


def pack_rgb(rgb: np.ndarray) -> NDArray[np.uint32]:
    """Flatten (...,3) uint8 rows into 0xRRGGBB uint32 keys."""
    flat = np.asarray(rgb).reshape(-1, 3).astype(np.uint32)
    return (flat[:, 0] << 16) | (flat[:, 1] << 8) | flat[:, 2]


def unpack_rgb(keys: np.ndarray) -> U8Rows:
    """Inverse of pack_rgb: uint32 keys to (N,3) uint8 rows."""
    k = np.asarray(keys, dtype=np.uint32).reshape(-1)
    out = np.empty((k.shape[0], 3), dtype=np.uint8)
    out[:, 0] = (k >> 16) & 0xFF
    out[:, 1] = (k >> 8) & 0xFF
    out[:, 2] = k & 0xFF
    return out


# Distances


def squared_distances(samples: WideRows, targets: WideRows) -> NDArray[np.int64]:
    """
    Exact squared Euclidean distances between widened rows.
    Args:
      samples: int64 [N,3]
      targets: int64 [S,3]
    Returns:
      int64 [N,S]
    """
    out = np.zeros((samples.shape[0], targets.shape[0]), dtype=np.int64)
    # Per channel keeps peak memory at one (N,S) temporary.
    for ch in range(3):
        diff = samples[:, ch, None] - targets[None, :, ch]
        out += diff * diff
    return out


def nearest_slot_indices(
    samples: WideRows, targets: WideRows, chunk: int = NEAREST_CHUNK
) -> NDArray[np.int64]:
    """
    For each sample row, index of the nearest target row.
    Ties go to the lowest target index (np.argmin keeps the first minimum).
    """
    n = samples.shape[0]
    out = np.empty(n, dtype=np.int64)
    step = max(1, int(chunk))
    for start in range(0, n, step):
        end = min(start + step, n)
        d2 = squared_distances(samples[start:end], targets)
        out[start:end] = np.argmin(d2, axis=1)
    return out


def colour_distance(a: Color, b: Color) -> float:
    """Euclidean distance between two Colors in widened space."""
    ra, ga, ba, _ = a.to_channels()
    rb, gb, bb, _ = b.to_channels()
    return math.sqrt((ra - rb) ** 2 + (ga - gb) ** 2 + (ba - bb) ** 2)


__all__ = [
    "widen_u8",
    "palette_channels",
    "pack_rgb",
    "unpack_rgb",
    "squared_distances",
    "nearest_slot_indices",
    "colour_distance",
]
