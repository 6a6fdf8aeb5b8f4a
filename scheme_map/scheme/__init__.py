"""
Scheme derivation subpackage.

Exports:
  new_scheme           : image + base palette -> SchemeResult.
  compose_scheme       : merge best-match and nearest-match results per slot.
  assign_best_matches  : frequency-driven best-match pass.
  match_nearest        : distance-driven pass over the pixel source.
"""

from .assign import assign_best_matches
from .fallback import NearestMatches, match_nearest, match_nearest_counted
from .run import SchemeResult, compose_scheme, new_scheme

__all__ = [
    "assign_best_matches",
    "NearestMatches",
    "match_nearest",
    "match_nearest_counted",
    "SchemeResult",
    "compose_scheme",
    "new_scheme",
]
