# scheme_map/errors.py
from __future__ import annotations

"""
Exception types raised by scheme_map.

Only the CLI catches these. Library code raises them (or lets OSError from
file access through) and never substitutes a default value.
"""

from typing import Optional, Sequence


class SchemeError(Exception):
    """Base class for scheme_map failures."""


class MalformedTripletError(SchemeError, ValueError):
    """Text is not exactly '#' followed by six hex digits."""

    def __init__(self, text: str, line: Optional[int] = None) -> None:
        self.text = text
        self.line = line
        where = f"line {line}: " if line is not None else ""
        super().__init__(f"{where}malformed triplet {text!r}")


class UnknownSchemeError(SchemeError, KeyError):
    """A built-in base scheme was requested by a name that has no entry."""

    def __init__(self, name: str, available: Sequence[str] = ()) -> None:
        self.name = name
        self.available = tuple(available)
        super().__init__(name)

    def __str__(self) -> str:
        known = ", ".join(self.available) or "-"
        return f"unknown base scheme {self.name!r} (available: {known})"


class PaletteSizeError(SchemeError, ValueError):
    """A base palette file holds the wrong number of entries."""


class EmptyPixelSourceError(SchemeError):
    """The pixel source has no samples, so unassigned slots cannot be filled."""

    def __init__(self, message: str = "no pixels to scan") -> None:
        super().__init__(message)


class IncompleteSchemeError(SchemeError):
    """A cancelled run left at least one slot without any colour."""

    def __init__(self, slots: Sequence[int]) -> None:
        self.slots = tuple(slots)
        listed = ", ".join(str(s) for s in self.slots)
        super().__init__(f"scan cancelled before slots {listed} were resolved")


__all__ = [
    "SchemeError",
    "MalformedTripletError",
    "UnknownSchemeError",
    "PaletteSizeError",
    "EmptyPixelSourceError",
    "IncompleteSchemeError",
]
