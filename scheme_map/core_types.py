from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.

Colours are 24-bit RGB. Matching happens in the widened space, where each
8-bit channel v becomes the 16-bit value v | v << 8.
"""

import re
import threading
from dataclasses import dataclass
from typing import Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .constants import OPAQUE
from .errors import MalformedTripletError

# Basic aliases

RGBTuple = Tuple[int, int, int]
RGBA16Tuple = Tuple[int, int, int, int]
HexStr = str

U8Image = NDArray[np.uint8]  # (H, W, 3)
U8Rows = NDArray[np.uint8]  # (N, 3)
WideRows = NDArray[np.int64]  # (N, 3) widened channels

# Cooperative cancellation flag; scans poll is_set() between row blocks.
CancelToken = threading.Event

_TRIPLET = re.compile(r"#[0-9a-fA-F]{6}")


# Channel helpers


def widen_channel(value: int) -> int:
    """8-bit channel to 16-bit by bit replication (0xab -> 0xabab)."""
    return value | (value << 8)


def _check_channel(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"{name} channel must be an int, got {type(value).__name__}")
    v = int(value)
    if not 0 <= v <= 0xFF:
        raise ValueError(f"{name} channel out of range 0..255: {v}")
    return v


# Value objects


@dataclass(frozen=True)
class Color:
    """Opaque 24-bit RGB colour. Equal channels mean the same colour."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        # Normalise numpy scalars so hashing and equality stay exact.
        object.__setattr__(self, "r", _check_channel("red", self.r))
        object.__setattr__(self, "g", _check_channel("green", self.g))
        object.__setattr__(self, "b", _check_channel("blue", self.b))

    @classmethod
    def from_hex(cls, text: str) -> "Color":
        return parse_hex(text)

    @classmethod
    def from_row(cls, row: Union[Sequence[int], NDArray[np.generic]]) -> "Color":
        """Build from a 3-length sequence or array row."""
        if len(row) < 3:
            raise ValueError("row too small for RGB")
        return cls(int(row[0]), int(row[1]), int(row[2]))

    @property
    def rgb(self) -> RGBTuple:
        return (self.r, self.g, self.b)

    @property
    def hex(self) -> HexStr:
        return format_hex(self)

    def to_channels(self) -> RGBA16Tuple:
        """Widened (R16, G16, B16, A16); alpha is always fully opaque."""
        return (
            widen_channel(self.r),
            widen_channel(self.g),
            widen_channel(self.b),
            OPAQUE,
        )

    def __str__(self) -> str:
        return format_hex(self)


@dataclass(frozen=True)
class ColorCount:
    """Colour with its occurrence count."""

    color: Color
    count: int


@dataclass(frozen=True)
class ColorDistance:
    """Colour with its Euclidean distance (widened space) to a reference."""

    color: Color
    distance: float


Palette = Tuple[Color, ...]


# Hex triplets


def parse_hex(text: str) -> Color:
    """
    Parse '#rrggbb' (either case) into a Color.

    Anything else, including surrounding whitespace and the '#rgb' short form,
    raises MalformedTripletError.
    """
    if not isinstance(text, str) or _TRIPLET.fullmatch(text) is None:
        raise MalformedTripletError(str(text))
    return Color(int(text[1:3], 16), int(text[3:5], 16), int(text[5:7], 16))


def format_hex(color: Color) -> HexStr:
    """Color to lowercase '#rrggbb'."""
    return f"#{color.r:02x}{color.g:02x}{color.b:02x}"


def as_palette(colors: Sequence[Color]) -> Palette:
    """Freeze a sequence of Colors into a Palette tuple."""
    out = tuple(colors)
    for i, c in enumerate(out):
        if not isinstance(c, Color):
            raise TypeError(f"palette entry {i} is not a Color: {c!r}")
    return out


def assert_u8_image_rgb(image: np.ndarray) -> U8Image:
    """Validate a uint8 (H,W,3) image and return it typed as U8Image."""
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[-1] != 3:
        raise TypeError("expected uint8 (H,W,3) image")
    return image  # type: ignore[return-value]


__all__ = [
    # aliases / types
    "RGBTuple",
    "RGBA16Tuple",
    "HexStr",
    "U8Image",
    "U8Rows",
    "WideRows",
    "CancelToken",
    "Palette",
    # value objects
    "Color",
    "ColorCount",
    "ColorDistance",
    # helpers
    "widen_channel",
    "parse_hex",
    "format_hex",
    "as_palette",
    "assert_u8_image_rgb",
]
