"""Lexical classification of rows for colourised rendering."""

from .highlighter import Classification, classify, is_separator, overlay_matches
from .options import FLAG_NAMES, HighlightingOptions
from .types import COLORS, FG_RESET, Type

__all__ = [
    "COLORS",
    "Classification",
    "FG_RESET",
    "FLAG_NAMES",
    "HighlightingOptions",
    "Type",
    "classify",
    "is_separator",
    "overlay_matches",
]
