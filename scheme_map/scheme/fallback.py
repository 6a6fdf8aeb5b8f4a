from __future__ import annotations

"""
Nearest-match pass for slots the best-match pass left empty.

Frequency is ignored here: each requested slot takes the single sample with
the smallest widened-space distance to its base colour. Samples are visited
in row-major order and only a strictly smaller distance replaces the current
pick, so the first minimal sample wins.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Sequence

import numpy as np

from ..analysis import ColourCounts
from ..colour_convert import (
    colour_distance,
    palette_channels,
    squared_distances,
    widen_u8,
)
from ..constants import DEFAULT_BLOCK_ROWS, NEAREST_CHUNK
from ..core_types import (
    CancelToken,
    Color,
    ColorDistance,
    U8Image,
    U8Rows,
    assert_u8_image_rgb,
)
from ..errors import EmptyPixelSourceError
from ..utils import is_cancelled, iter_row_spans


@dataclass(frozen=True)
class NearestMatches:
    """Per-slot nearest samples. complete=False after a cancelled scan."""

    matches: Dict[int, ColorDistance] = field(default_factory=dict)
    complete: bool = True


def _scan_nearest(
    blocks: Iterable[U8Rows],
    base: Sequence[Color],
    slots: Sequence[int],
    cancellation_token: Optional[CancelToken],
) -> NearestMatches:
    targets = palette_channels([base[s] for s in slots])
    n_slots = len(slots)
    best_d2 = np.full(n_slots, np.iinfo(np.int64).max, dtype=np.int64)
    best_rgb = np.zeros((n_slots, 3), dtype=np.uint8)
    found = np.zeros(n_slots, dtype=bool)
    cols = np.arange(n_slots)
    complete = True

    for n_block, block in enumerate(blocks):
        if n_block > 0 and is_cancelled(cancellation_token):
            complete = False
            break
        if block.shape[0] == 0:
            continue
        d2 = squared_distances(widen_u8(block), targets)
        rows = np.argmin(d2, axis=0)
        block_min = d2[rows, cols]
        better = block_min < best_d2
        best_d2[better] = block_min[better]
        best_rgb[better] = block[rows[better]]
        found |= better

    matches: Dict[int, ColorDistance] = {}
    for k, slot in enumerate(slots):
        if found[k]:
            colour = Color.from_row(best_rgb[k].tolist())
            matches[slot] = ColorDistance(colour, colour_distance(colour, base[slot]))
    return NearestMatches(matches=matches, complete=complete)


def match_nearest(
    pixels: U8Image,
    base: Sequence[Color],
    slots: Sequence[int],
    cancellation_token: Optional[CancelToken] = None,
    block_rows: int = DEFAULT_BLOCK_ROWS,
) -> NearestMatches:
    """Scan every pixel once for each requested slot's nearest colour."""
    rgb = assert_u8_image_rgb(pixels)
    slots = list(slots)
    if not slots:
        return NearestMatches()
    if rgb.shape[0] * rgb.shape[1] == 0:
        raise EmptyPixelSourceError()

    blocks = (
        rgb[start:end].reshape(-1, 3)
        for start, end in iter_row_spans(int(rgb.shape[0]), block_rows)
    )
    return _scan_nearest(blocks, base, slots, cancellation_token)


def match_nearest_counted(
    counts: ColourCounts,
    base: Sequence[Color],
    slots: Sequence[int],
    chunk: int = NEAREST_CHUNK,
) -> NearestMatches:
    """
    Same rule over a counted colour table. The table is ordered by first
    occurrence, so this agrees with scanning the pixels it was counted from.
    """
    slots = list(slots)
    if not slots or len(counts) == 0:
        return NearestMatches()
    step = max(1, int(chunk))
    blocks = (
        counts.colours[start : start + step] for start in range(0, len(counts), step)
    )
    return _scan_nearest(blocks, base, slots, None)


__all__ = ["NearestMatches", "match_nearest", "match_nearest_counted"]
