"""
scheme_map package.

Purpose:
  Derive a terminal colour scheme from an image. See imgscheme.py for the CLI.

Public API:
  new_scheme    : image + base palette -> SchemeResult (one colour per slot).
  core_types    : Color, ColorCount, ColorDistance, parse_hex, format_hex.
  palette_data  : built-in base schemes and the base-file loader.
  analysis      : colour frequency counting.
  colour_convert: widened-space distances.
  image_io      : Pillow-backed image loading.
  utils         : shared helpers (formatting, logging).

Quick start:
  from scheme_map import new_scheme, build_palette, load_image_rgb
  result = new_scheme(load_image_rgb(path), build_palette("vga"))
  print("\\n".join(c.hex for c in result.scheme()))
"""

__version__ = "0.1.0"

from . import analysis
from . import colour_convert
from . import core_types
from . import errors
from . import image_io
from . import palette_data
from . import utils

from .core_types import Color, ColorCount, ColorDistance, format_hex, parse_hex
from .errors import (
    EmptyPixelSourceError,
    IncompleteSchemeError,
    MalformedTripletError,
    PaletteSizeError,
    SchemeError,
    UnknownSchemeError,
)
from .image_io import load_image_rgb
from .palette_data import build_palette, load_palette_file, scheme_names
from .scheme import SchemeResult, new_scheme

__all__ = [
    "__version__",
    "analysis",
    "colour_convert",
    "core_types",
    "errors",
    "image_io",
    "palette_data",
    "utils",
    "Color",
    "ColorCount",
    "ColorDistance",
    "format_hex",
    "parse_hex",
    "SchemeError",
    "MalformedTripletError",
    "UnknownSchemeError",
    "PaletteSizeError",
    "EmptyPixelSourceError",
    "IncompleteSchemeError",
    "load_image_rgb",
    "build_palette",
    "load_palette_file",
    "scheme_names",
    "SchemeResult",
    "new_scheme",
]
