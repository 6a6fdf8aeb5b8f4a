from __future__ import annotations

"""
Colour frequency counting over a pixel source.

The scan walks the image in row blocks, top to bottom, and checks the
cancellation token between blocks, so the first block is always read. A
cancelled count covers exactly the rows read so far and is flagged
complete=False.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np
from numpy.typing import NDArray

from .colour_convert import pack_rgb, unpack_rgb
from .constants import DEFAULT_BLOCK_ROWS
from .core_types import (
    CancelToken,
    Color,
    ColorCount,
    U8Image,
    U8Rows,
    assert_u8_image_rgb,
)
from .utils import is_cancelled, iter_row_spans


@dataclass(frozen=True)
class ColourCounts:
    """
    Distinct colours of a pixel source, ordered by first occurrence.

    colours    : uint8 [U,3]
    counts     : int64 [U], each >= 1
    first_seen : int64 [U], row-major index of the first pixel of that colour
    scanned    : pixels actually read
    total      : pixels in the source
    complete   : False when the scan was cancelled early
    """

    colours: U8Rows
    counts: NDArray[np.int64]
    first_seen: NDArray[np.int64]
    scanned: int
    total: int
    complete: bool

    def __len__(self) -> int:
        return int(self.counts.shape[0])

    def items(self) -> List[ColorCount]:
        return [
            ColorCount(Color.from_row(row), int(n))
            for row, n in zip(self.colours.tolist(), self.counts.tolist())
        ]

    def as_dict(self) -> Dict[Color, int]:
        return {cc.color: cc.count for cc in self.items()}


def empty_counts(total: int = 0) -> ColourCounts:
    return ColourCounts(
        colours=np.zeros((0, 3), dtype=np.uint8),
        counts=np.zeros((0,), dtype=np.int64),
        first_seen=np.zeros((0,), dtype=np.int64),
        scanned=0,
        total=total,
        complete=True,
    )


def count_colours(
    pixels: U8Image,
    cancellation_token: Optional[CancelToken] = None,
    block_rows: int = DEFAULT_BLOCK_ROWS,
) -> ColourCounts:
    """
    Tabulate occurrences of each distinct colour.

    Counts sum to the number of pixels scanned; colours never seen are
    absent rather than present with a zero count.
    """
    rgb = assert_u8_image_rgb(pixels)
    height, width = int(rgb.shape[0]), int(rgb.shape[1])
    total = height * width

    counts: Dict[int, int] = {}
    first_seen: Dict[int, int] = {}
    scanned = 0
    complete = True

    for n_block, (start, end) in enumerate(iter_row_spans(height, block_rows)):
        if n_block > 0 and is_cancelled(cancellation_token):
            complete = False
            break
        keys = pack_rgb(rgb[start:end])
        if keys.size == 0:
            continue
        uniq, first, n = np.unique(keys, return_index=True, return_counts=True)
        offset = start * width
        for key, pos, c in zip(uniq.tolist(), first.tolist(), n.tolist()):
            if key in counts:
                counts[key] += c
            else:
                counts[key] = c
                first_seen[key] = offset + pos
        scanned += int(keys.size)

    if not counts:
        out = empty_counts(total)
        return ColourCounts(
            out.colours, out.counts, out.first_seen, scanned, total, complete
        )

    key_arr = np.fromiter(counts.keys(), dtype=np.uint32, count=len(counts))
    count_arr = np.fromiter(counts.values(), dtype=np.int64, count=len(counts))
    first_arr = np.fromiter(
        (first_seen[k] for k in counts), dtype=np.int64, count=len(counts)
    )
    order = np.argsort(first_arr, kind="stable")

    return ColourCounts(
        colours=unpack_rgb(key_arr[order]),
        counts=count_arr[order],
        first_seen=first_arr[order],
        scanned=scanned,
        total=total,
        complete=complete,
    )


__all__ = ["ColourCounts", "empty_counts", "count_colours"]
