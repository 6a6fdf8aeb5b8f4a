#!/usr/bin/env python3
"""
imgscheme.py
Derive a 16-colour terminal scheme from an image.

Usage:
  python imgscheme.py IMAGE [--base NAME | --base-file PATH] [--format hex|xrdb]
                      [--output PATH] [--timeout SECONDS] [--block-rows N] [--debug]
  python imgscheme.py --list-bases

Method:
  Every distinct image colour is attached to its nearest base slot; each slot
  takes the most frequent colour attached to it. Slots nothing was attached
  to take the single image colour closest to their base colour.

Output:
  One '#rrggbb' per line in base-slot order (or '*colorN: #rrggbb' with
  --format xrdb), on stdout or to --output. Logs go to stderr.

Notes:
  Ctrl-C or --timeout stops the pixel scan early; the scheme is then built
  from the part of the image read so far and a warning is printed.
"""

from __future__ import annotations

import argparse
import signal
import sys
import threading
import time
from pathlib import Path
from typing import List, Optional, Sequence

from PIL import UnidentifiedImageError

from scheme_map.constants import (
    DEFAULT_BLOCK_ROWS,
    DEFAULT_SCHEME,
    OUTPUT_FORMATS,
    SCHEME_SIZE,
)
from scheme_map.core_types import CancelToken, Palette
from scheme_map.errors import SchemeError
from scheme_map.image_io import load_image_rgb
from scheme_map.palette_data import (
    BUILTIN_SCHEMES,
    build_palette,
    load_palette_file,
    scheme_names,
)
from scheme_map.scheme import new_scheme
from scheme_map.utils import (
    debug_log,
    error,
    format_scheme,
    format_total_duration_compact,
    key_value_pairs_to_string,
    log,
    print_config_line,
    warn,
)

EXIT_OK = 0
EXIT_SCHEME = 1
EXIT_INPUT = 2


# CLI args


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        image: Path to the source image (None with --list-bases)
        base: built-in scheme name
        base_file: optional Path to a '#rrggbb' per line file
        any_size: accept base files that are not 16 entries long
        format: "hex" | "xrdb"
        output: optional Path; stdout when omitted
        timeout: optional seconds before the scan is cancelled
        block_rows: rows per scan block
        list_bases: print built-in names and exit
        debug: bool for per-slot details
    """
    parser = argparse.ArgumentParser(
        prog="imgscheme",
        description="Derive a terminal colour scheme from an image.",
    )
    parser.add_argument("image", type=Path, nargs="?", help="Input image")
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--base",
        default=DEFAULT_SCHEME,
        help=f"Built-in base scheme (default: {DEFAULT_SCHEME}).",
    )
    source.add_argument(
        "--base-file",
        type=Path,
        default=None,
        help="Base scheme file: one #rrggbb per line.",
    )
    parser.add_argument(
        "--any-size",
        action="store_true",
        help=f"Accept base files with other than {SCHEME_SIZE} entries.",
    )
    parser.add_argument(
        "--format", choices=list(OUTPUT_FORMATS), default="hex", help="Output format."
    )
    parser.add_argument(
        "--output", type=Path, default=None, help="Write the scheme here."
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Stop scanning after this many seconds and use the partial result.",
    )
    parser.add_argument(
        "--block-rows",
        type=int,
        default=DEFAULT_BLOCK_ROWS,
        help="Image rows scanned between cancellation checks.",
    )
    parser.add_argument(
        "--list-bases", action="store_true", help="List built-in base schemes."
    )
    parser.add_argument("--debug", action="store_true", help="Verbose slot details")
    args = parser.parse_args(argv)
    if not args.list_bases and args.image is None:
        parser.error("the following arguments are required: image")
    if args.block_rows < 1:
        parser.error("--block-rows must be >= 1")
    return args


def _resolve_base(args: argparse.Namespace) -> Palette:
    if args.base_file is not None:
        return load_palette_file(
            args.base_file, size=None if args.any_size else SCHEME_SIZE
        )
    return build_palette(args.base)


def _emit(lines: List[str], output: Optional[Path]) -> None:
    text = "".join(f"{line}\n" for line in lines)
    if output is None:
        sys.stdout.write(text)
        sys.stdout.flush()
        return
    output.write_text(text, encoding="utf-8")


def _install_cancellation(
    token: CancelToken, timeout: Optional[float]
) -> Optional[threading.Timer]:
    """SIGINT and the optional timer both set the same token."""

    def _on_sigint(signum, frame):
        token.set()

    if threading.current_thread() is threading.main_thread():
        signal.signal(signal.SIGINT, _on_sigint)

    if timeout is None:
        return None
    timer = threading.Timer(max(0.0, timeout), token.set)
    timer.daemon = True
    timer.start()
    return timer


# Entry point


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point. Returns the process exit code."""
    args = parse_cli_args(argv)

    if args.list_bases:
        for name in scheme_names():
            sys.stdout.write(f"{name}\n")
        sys.stdout.flush()
        return EXIT_OK

    t_start = time.perf_counter()

    try:
        base = _resolve_base(args)
    except SchemeError as e:
        error(str(e))
        return EXIT_SCHEME
    except OSError as e:
        error(f"cannot read base file: {e}")
        return EXIT_INPUT

    if not args.image.exists():
        error(f"not found: {args.image}")
        return EXIT_INPUT
    try:
        pixels = load_image_rgb(args.image)
    except (UnidentifiedImageError, OSError) as e:
        error(f"cannot read image: {e}")
        return EXIT_INPUT

    height, width = int(pixels.shape[0]), int(pixels.shape[1])
    print_config_line(
        "scan",
        [
            ("Image", args.image.name),
            ("Size", f"{width}x{height}"),
            (
                "Base",
                str(args.base_file) if args.base_file else args.base.lower(),
            ),
            ("Slots", len(base)),
            ("Block rows", args.block_rows),
            ("Timeout", args.timeout if args.timeout is not None else "-"),
        ],
        debug=args.debug,
    )
    if args.debug and args.base_file is None:
        debug_log(f"built-in schemes: {', '.join(sorted(BUILTIN_SCHEMES))}")

    token: CancelToken = threading.Event()
    previous_sigint = signal.getsignal(signal.SIGINT)
    timer = _install_cancellation(token, args.timeout)
    try:
        result = new_scheme(
            pixels, base, token, block_rows=args.block_rows, debug=args.debug
        )
        colours = result.scheme()
    except SchemeError as e:
        error(str(e))
        return EXIT_SCHEME
    finally:
        if timer is not None:
            timer.cancel()
        if threading.current_thread() is threading.main_thread():
            signal.signal(signal.SIGINT, previous_sigint)

    if result.cancelled:
        counts = result.counts
        warn(
            "scan cancelled; scheme built from a partial scan "
            f"({counts.scanned:,} of {counts.total:,} pixels counted)"
        )

    try:
        _emit(format_scheme(colours, args.format), args.output)
    except OSError as e:
        error(f"cannot write output: {e}")
        return EXIT_INPUT

    if args.debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Best", result.sources.count("best")),
                    ("Nearest", result.sources.count("nearest")),
                    ("Total", format_total_duration_compact(time.perf_counter() - t_start)),
                ]
            )
        )
    elif args.output is not None:
        log(f"Wrote {args.output}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
