# scheme_map/utils.py
from __future__ import annotations

"""
Shared utilities for scheme_map.

Row-block iteration for the pixel scans, scheme text formatting, time
formatting, and tidy logging. Standard output carries the scheme itself, so
every log helper writes to stderr.
"""

import sys
from typing import Any, Iterable, Iterator, List, Optional, Sequence, Tuple

from .constants import DEFAULT_BLOCK_ROWS
from .core_types import CancelToken, Color, format_hex


#  Time formatting


def format_seconds_compact(seconds: float) -> str:
    """Human-friendly seconds: '<ms>ms', '<s>s', or 'Mm Ss'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds - 60 * minutes:.1f}s"


def format_total_duration_compact(seconds: float) -> str:
    """Compact total duration: 'Mm Ss', 'Ss.s', or 'ms'."""
    if seconds >= 60.0:
        minutes = int(seconds // 60)
        rem = int(round(seconds - 60 * minutes))
        return f"{minutes}m {rem}s"
    if seconds >= 1.0:
        return f"{seconds:.1f}s"
    return f"{seconds * 1000.0:.1f}ms"


# Scan helpers


def iter_row_spans(
    height: int, block_rows: int = DEFAULT_BLOCK_ROWS
) -> Iterator[Tuple[int, int]]:
    """Contiguous [start, end) row spans of at most block_rows rows, top to bottom."""
    step = max(1, int(block_rows))
    for start in range(0, max(0, int(height)), step):
        yield start, min(start + step, height)


def is_cancelled(token: Optional[CancelToken]) -> bool:
    """True when a cancellation token is present and set."""
    return token is not None and token.is_set()


# Scheme output


def format_scheme(colors: Sequence[Color], fmt: str = "hex") -> List[str]:
    """
    Render a scheme as text lines.
      hex  : '#rrggbb' per slot
      xrdb : '*colorN: #rrggbb' per slot
    """
    if fmt == "hex":
        return [format_hex(c) for c in colors]
    if fmt == "xrdb":
        return [f"*color{i}: {format_hex(c)}" for i, c in enumerate(colors)]
    raise ValueError(f"unknown output format {fmt!r}")


# Pretty logging


def format_bool_on_off(value: Any) -> str:
    """Pretty boolean: 'on'/'off' for bools; str(value) otherwise."""
    if isinstance(value, bool):
        return "on" if value else "off"
    return str(value)


def format_number_compact(value: Any) -> str:
    """Pretty number: 1_234 style for ints; compact for floats; passthrough otherwise."""
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        text = f"{value:.3f}".rstrip("0").rstrip(".")
        return text
    return str(value)


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """
    Format (name, value) pairs as 'Name: value' blocks separated by sep.
    Uses format_bool_on_off / format_number_compact for readability.
    """
    out: List[str] = []
    for name, value in pairs:
        display = (
            format_bool_on_off(value)
            if isinstance(value, bool)
            else format_number_compact(value)
        )
        out.append(f"{name}{eq}{display}")
    return sep.join(out)


def print_config_line(
    section: str, pairs: Iterable[Tuple[str, Any]], debug: bool
) -> None:
    """
    Emit a single human-readable config line, e.g.:
      [scan] Size: 640x480  Block rows: 64  Timeout: -
    Routes to debug_log() when debug=True, else to log().
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line)


def log(message: str) -> None:
    """Plain log line."""
    print(message, file=sys.stderr, flush=True)


def debug_log(message: str) -> None:
    """Debug log line."""
    print(f"[debug] {message}", file=sys.stderr, flush=True)


def warn(message: str) -> None:
    """Warning log line."""
    print(f"[warn] {message}", file=sys.stderr, flush=True)


def error(message: str) -> None:
    """Error log line."""
    print(f"[error] {message}", file=sys.stderr, flush=True)


__all__ = [
    "format_seconds_compact",
    "format_total_duration_compact",
    "iter_row_spans",
    "is_cancelled",
    "format_scheme",
    "format_bool_on_off",
    "format_number_compact",
    "key_value_pairs_to_string",
    "print_config_line",
    "log",
    "debug_log",
    "warn",
    "error",
]
