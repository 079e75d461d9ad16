"""Adapter boundary types for rendering a document in a host widget."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

from .state import Position


@dataclass(slots=True)
class DocumentMirror:
    """Host-friendly snapshot of the visible part of a document.

    ``lines`` are already rendered (ANSI colour escapes included) and clipped
    to the viewport. ``cursor`` is relative to the viewport.
    """

    lines: tuple[str, ...]
    cursor: Position
    filename: Optional[str]
    filetype: str
    dirty: bool
    line_count: int
    status: str = ""
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


class DocumentSync(Protocol):
    """How hosts pull render snapshots out of an editing session."""

    def pull_mirror(self) -> DocumentMirror:
        """Return the latest snapshot the host should draw."""
        ...


__all__ = ["DocumentMirror", "DocumentSync"]
