from __future__ import annotations

"""
Scheme composer.

Counts image colours, runs the best-match pass, fills the remaining slots
with the nearest-match pass, and merges both in base-slot order.
"""

import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ..analysis import ColourCounts, count_colours
from ..constants import DEFAULT_BLOCK_ROWS
from ..core_types import (
    CancelToken,
    Color,
    ColorCount,
    ColorDistance,
    U8Image,
    assert_u8_image_rgb,
)
from ..errors import EmptyPixelSourceError, IncompleteSchemeError
from ..utils import debug_log, format_seconds_compact, key_value_pairs_to_string
from .assign import assign_best_matches
from .fallback import match_nearest, match_nearest_counted

SOURCE_BEST = "best"
SOURCE_NEAREST = "nearest"
SOURCE_UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class SchemeResult:
    colours: Tuple[Optional[Color], ...]
    sources: Tuple[str, ...]
    counts: ColourCounts
    cancelled: bool

    def __len__(self) -> int:
        return len(self.colours)

    def unresolved(self) -> List[int]:
        return [i for i, c in enumerate(self.colours) if c is None]

    def scheme(self) -> List[Color]:
        """
        All slot colours. new_scheme always reads at least one row block, so
        only a hand-built result with an empty slot raises IncompleteSchemeError.
        """
        missing = self.unresolved()
        if missing:
            raise IncompleteSchemeError(missing)
        return [c for c in self.colours if c is not None]


def compose_scheme(
    best: Sequence[Optional[ColorCount]],
    nearest: Dict[int, ColorDistance],
    size: int,
) -> Tuple[List[Optional[Color]], List[str]]:
    """Best-match result where assigned, else the nearest match, per slot."""
    colours: List[Optional[Color]] = []
    sources: List[str] = []
    for i in range(size):
        cc = best[i] if i < len(best) else None
        if cc is not None:
            colours.append(cc.color)
            sources.append(SOURCE_BEST)
        elif i in nearest:
            colours.append(nearest[i].color)
            sources.append(SOURCE_NEAREST)
        else:
            colours.append(None)
            sources.append(SOURCE_UNRESOLVED)
    return colours, sources


def new_scheme(
    pixels: U8Image,
    base: Sequence[Color],
    cancellation_token: Optional[CancelToken] = None,
    block_rows: int = DEFAULT_BLOCK_ROWS,
    debug: bool = False,
) -> SchemeResult:
    """
    Derive one colour per base slot from an image.

    Cancellation degrades the result instead of failing: the passes use what
    they scanned so far and SchemeResult.cancelled is set.
    """
    rgb = assert_u8_image_rgb(pixels)
    if len(base) == 0:
        raise ValueError("base palette is empty")

    t0 = time.perf_counter()
    counts = count_colours(rgb, cancellation_token, block_rows)
    best = assign_best_matches(counts, base)
    t1 = time.perf_counter()

    unassigned = [i for i, cc in enumerate(best) if cc is None]
    nearest: Dict[int, ColorDistance] = {}
    cancelled = not counts.complete
    if unassigned:
        if counts.total == 0:
            raise EmptyPixelSourceError()
        if counts.complete:
            found = match_nearest(
                rgb, base, unassigned, cancellation_token, block_rows
            )
            nearest.update(found.matches)
            cancelled = cancelled or not found.complete
        else:
            # Counting stopped early; the rows counted so far stand in for a scan.
            nearest.update(match_nearest_counted(counts, base, unassigned).matches)
    t2 = time.perf_counter()

    colours, sources = compose_scheme(best, nearest, len(base))

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Pixels", counts.total),
                    ("Scanned", counts.scanned),
                    ("Uniques", len(counts)),
                    ("Unassigned", len(unassigned)),
                    ("Cancelled", cancelled),
                    ("Count", format_seconds_compact(t1 - t0)),
                    ("Fallback", format_seconds_compact(t2 - t1)),
                ]
            )
        )
        for i, (colour, source) in enumerate(zip(colours, sources)):
            detail = ""
            cc = best[i]
            if cc is not None:
                detail = f"count={cc.count:,}"
            elif i in nearest:
                detail = f"distance={nearest[i].distance:.1f}"
            shown = colour.hex if colour is not None else "-"
            debug_log(f"  slot {i:2d} {base[i].hex} -> {shown}  {source} {detail}")

    return SchemeResult(
        colours=tuple(colours),
        sources=tuple(sources),
        counts=counts,
        cancelled=cancelled,
    )


__all__ = [
    "SOURCE_BEST",
    "SOURCE_NEAREST",
    "SOURCE_UNRESOLVED",
    "SchemeResult",
    "compose_scheme",
    "new_scheme",
]
