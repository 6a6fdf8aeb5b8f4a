from __future__ import annotations

"""
Base palette definitions and loaders.

Exports:
  BUILTIN_SCHEMES: Mapping[str, tuple[str, ...]]  # name -> 16 '#rrggbb'
  scheme_names() -> list[str]
  build_palette(name=DEFAULT_SCHEME) -> Palette
  parse_palette_text(text, size=SCHEME_SIZE) -> Palette
  load_palette_file(path, size=SCHEME_SIZE) -> Palette

Slot order is the conventional one: black, red, green, yellow, blue,
magenta, cyan, white, then the bright variants in the same order.
The tables are read-only; callers resolve a Palette here and pass it into
the scheme functions.
"""

from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from .constants import DEFAULT_SCHEME, SCHEME_SIZE
from .core_types import Palette, as_palette, parse_hex
from .errors import MalformedTripletError, PaletteSizeError, UnknownSchemeError


_SCHEMES: Dict[str, Tuple[str, ...]] = {
    "vga": (
        "#000000", "#aa0000", "#00aa00", "#aa5500",
        "#0000aa", "#aa00aa", "#00aaaa", "#aaaaaa",
        "#555555", "#ff5555", "#55ff55", "#ffff55",
        "#5555ff", "#ff55ff", "#55ffff", "#ffffff",
    ),
    "rxvt": (
        "#000000", "#cd0000", "#00cd00", "#cdcd00",
        "#0000cd", "#cd00cd", "#00cdcd", "#faebd7",
        "#404040", "#ff0000", "#00ff00", "#ffff00",
        "#0000ff", "#ff00ff", "#00ffff", "#ffffff",
    ),
    "xterm": (
        "#000000", "#cd0000", "#00cd00", "#cdcd00",
        "#0000ee", "#cd00cd", "#00cdcd", "#e5e5e5",
        "#7f7f7f", "#ff0000", "#00ff00", "#ffff00",
        "#5c5cff", "#ff00ff", "#00ffff", "#ffffff",
    ),
    "tango": (
        "#2e3436", "#cc0000", "#4e9a06", "#c4a000",
        "#3465a4", "#75507b", "#06989a", "#d3d7cf",
        "#555753", "#ef2929", "#8ae234", "#fce94f",
        "#729fcf", "#ad7fa8", "#34e2e2", "#eeeeec",
    ),
    "solarized": (
        "#073642", "#dc322f", "#859900", "#b58900",
        "#268bd2", "#d33682", "#2aa198", "#eee8d5",
        "#002b36", "#cb4b16", "#586e75", "#657b83",
        "#839496", "#6c71c4", "#93a1a1", "#fdf6e3",
    ),
}

BUILTIN_SCHEMES: Mapping[str, Tuple[str, ...]] = MappingProxyType(_SCHEMES)


def scheme_names() -> List[str]:
    """Built-in scheme names, sorted."""
    return sorted(BUILTIN_SCHEMES)


def build_palette(name: str = DEFAULT_SCHEME) -> Palette:
    """Look up a built-in scheme (case-insensitive) and parse it."""
    key = name.strip().lower()
    if key not in BUILTIN_SCHEMES:
        raise UnknownSchemeError(name, scheme_names())
    return as_palette([parse_hex(hx) for hx in BUILTIN_SCHEMES[key]])


def parse_palette_text(text: str, size: Optional[int] = SCHEME_SIZE) -> Palette:
    """
    Parse one '#rrggbb' per line. Lines end at LF only (one trailing CR
    is dropped); the final newline is optional. Any other blank or malformed line
    aborts with MalformedTripletError naming the line.
    With size=None any non-empty count is accepted.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    colors = []
    for lineno, raw in enumerate(lines, start=1):
        line = raw[:-1] if raw.endswith("\r") else raw
        try:
            colors.append(parse_hex(line))
        except MalformedTripletError:
            raise MalformedTripletError(line, line=lineno) from None
    if not colors:
        raise PaletteSizeError("base palette is empty")
    if size is not None and len(colors) != size:
        raise PaletteSizeError(
            f"base palette has {len(colors)} entries, expected {size}"
        )
    return as_palette(colors)


def load_palette_file(path: Path, size: Optional[int] = SCHEME_SIZE) -> Palette:
    """Read a base palette text file. OSError propagates."""
    with open(path, "r", encoding="utf-8", newline="") as fh:
        text = fh.read()
    return parse_palette_text(text, size=size)


__all__ = [
    "BUILTIN_SCHEMES",
    "scheme_names",
    "build_palette",
    "parse_palette_text",
    "load_palette_file",
]
