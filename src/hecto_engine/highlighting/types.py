"""Lexical classes produced by the highlighter and their terminal colours."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple

Rgb = Tuple[int, int, int]


class Type(Enum):
    NONE = "none"
    NUMBER = "number"
    MATCH = "match"
    STRING = "string"
    ESCAPE = "escape"
    CHARACTER = "character"
    COMMENT = "comment"
    PRIMARY_KEY = "primary_key"
    SECONDARY_KEY = "secondary_key"

    def to_color(self) -> Rgb:
        return COLORS[self]

    def fg_sequence(self) -> str:
        """ANSI escape setting the foreground to this type's colour."""

        red, green, blue = self.to_color()
        return f"\x1b[38;2;{red};{green};{blue}m"


COLORS: Mapping[Type, Rgb] = MappingProxyType(
    {
        Type.NONE: (255, 255, 255),
        Type.NUMBER: (220, 163, 163),
        Type.MATCH: (38, 139, 210),
        Type.STRING: (211, 54, 130),
        Type.ESCAPE: (255, 255, 0),
        Type.CHARACTER: (108, 113, 196),
        Type.COMMENT: (133, 153, 0),
        Type.PRIMARY_KEY: (181, 137, 0),
        Type.SECONDARY_KEY: (42, 161, 152),
    }
)

FG_RESET = "\x1b[39m"

__all__ = ["COLORS", "FG_RESET", "Rgb", "Type"]
