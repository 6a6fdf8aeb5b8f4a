"""Shared builders for the test suite."""

from typing import List, Sequence

import numpy as np

from scheme_map.core_types import Color, parse_hex


def image_from_hex(rows: Sequence[Sequence[str]]) -> np.ndarray:
    """Build a uint8 (H,W,3) image from rows of '#rrggbb' strings."""
    return np.array(
        [[parse_hex(h).rgb for h in row] for row in rows], dtype=np.uint8
    ).reshape(len(rows), len(rows[0]) if rows else 0, 3)


def palette(*hexes: str) -> List[Color]:
    return [parse_hex(h) for h in hexes]


class TripAfter:
    """Cancellation token that reports cancelled after n checks."""

    def __init__(self, n: int) -> None:
        self.n = n
        self.calls = 0

    def is_set(self) -> bool:
        self.calls += 1
        return self.calls > self.n
