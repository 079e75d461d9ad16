"""Cursor positions and search direction shared by rows and documents."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class Position:
    """``x`` is a grapheme column, ``y`` a row index."""

    x: int = 0
    y: int = 0


class SearchDirection(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


__all__ = ["Position", "SearchDirection"]
