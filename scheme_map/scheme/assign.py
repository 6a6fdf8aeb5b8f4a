from __future__ import annotations

"""
Best-match pass: give each base slot the most frequent image colour among
the colours that are nearest to that slot.
"""

from typing import List, Optional, Sequence

import numpy as np

from ..analysis import ColourCounts
from ..colour_convert import nearest_slot_indices, palette_channels, widen_u8
from ..core_types import Color, ColorCount


def nearest_slots(counts: ColourCounts, base: Sequence[Color]) -> np.ndarray:
    """Nearest base slot for every counted colour (ties to the lowest slot)."""
    if len(counts) == 0:
        return np.zeros((0,), dtype=np.int64)
    return nearest_slot_indices(widen_u8(counts.colours), palette_channels(base))


def assign_best_matches(
    counts: ColourCounts, base: Sequence[Color]
) -> List[Optional[ColorCount]]:
    """
    One entry per base slot: the winning ColorCount, or None when no colour
    is nearest to that slot.

    Highest count wins. Equal counts go to the colour seen first in
    row-major scan order.
    """
    best: List[Optional[ColorCount]] = [None] * len(base)
    if len(counts) == 0 or not best:
        return best

    slot_of = nearest_slots(counts, base)
    # np.lexsort sorts by the last key first: slot, then count desc, then first_seen.
    order = np.lexsort((counts.first_seen, -counts.counts, slot_of))
    slots_sorted = slot_of[order]
    won_slots, heads = np.unique(slots_sorted, return_index=True)

    for slot, head in zip(won_slots.tolist(), heads.tolist()):
        i = int(order[head])
        best[slot] = ColorCount(
            Color.from_row(counts.colours[i].tolist()), int(counts.counts[i])
        )
    return best


__all__ = ["nearest_slots", "assign_best_matches"]
