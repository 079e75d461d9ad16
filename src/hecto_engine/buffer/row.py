"""A single line of text plus its derived highlighting."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import islice
from typing import List, Optional

import grapheme

from hecto_engine.highlighting import (
    FG_RESET,
    HighlightingOptions,
    Type,
    classify,
    overlay_matches,
)

from .state import SearchDirection
from .validation import ensure_split_point


@dataclass(slots=True)
class Row:
    """Grapheme-indexed line storage.

    Editing, rendering and search take grapheme indices. ``highlighting``
    holds one entry per code point, so the two only line up for text made of
    single code point graphemes. Edits never re-highlight on their own; the
    owner calls :meth:`highlight` once it is done mutating.
    """

    content: str = ""
    highlighting: List[Type] = field(default_factory=list)
    has_open_string: bool = False
    _length: int = field(init=False, default=0, repr=False)

    def __post_init__(self) -> None:
        self._length = grapheme.length(self.content)

    @classmethod
    def from_str(cls, text: str) -> "Row":
        return cls(content=text)

    def __len__(self) -> int:
        return self._length

    def __str__(self) -> str:
        return self.content

    @property
    def length(self) -> int:
        return self._length

    def is_empty(self) -> bool:
        return self._length == 0

    def graphemes(self) -> List[str]:
        return list(grapheme.graphemes(self.content))

    def as_bytes(self) -> bytes:
        return self.content.encode("utf-8")

    def render(self, start: int, end: int) -> str:
        end = min(end, self._length)
        start = min(start, end)
        pieces: List[str] = []
        current = Type.NONE
        window = islice(grapheme.graphemes(self.content), start, end)
        for index, cluster in enumerate(window, start):
            kind = (
                self.highlighting[index]
                if index < len(self.highlighting)
                else Type.NONE
            )
            if kind is not current:
                current = kind
                pieces.append(kind.fg_sequence())
            pieces.append(" " if cluster == "\t" else cluster)
        pieces.append(FG_RESET)
        return "".join(pieces)

    def insert(self, at: int, ch: str) -> None:
        if at >= self._length:
            self.content += ch
        else:
            clusters = self.graphemes()
            clusters.insert(at, ch)
            self.content = "".join(clusters)
        self._length = grapheme.length(self.content)

    def delete(self, at: int) -> None:
        if at >= self._length:
            return
        clusters = self.graphemes()
        del clusters[at]
        self.content = "".join(clusters)
        # Neighbours of the removed cluster can join into one.
        self._length = grapheme.length(self.content)

    def append(self, other: "Row") -> None:
        self.content += other.content
        # The seam can fuse two clusters, e.g. a leading combining mark.
        self._length = grapheme.length(self.content)

    def split(self, at: int) -> "Row":
        """Keep graphemes ``[0, at)`` and return the rest as a new row."""

        ensure_split_point(self._length, at)
        clusters = self.graphemes()
        self.content = "".join(clusters[:at])
        self._length = grapheme.length(self.content)
        return Row(content="".join(clusters[at:]))

    def find(
        self,
        query: str,
        at: int,
        direction: SearchDirection = SearchDirection.FORWARD,
    ) -> Optional[int]:
        """Grapheme index of ``query`` inside the window selected by ``at``.

        Forward searches ``[at, length)`` for the first hit, backward searches
        ``[0, at)`` for the last one.
        """

        if not query or at < 0 or at > self._length:
            return None

        clusters = self.graphemes()
        if direction is SearchDirection.FORWARD:
            start, end = at, self._length
        else:
            start, end = 0, at

        window = clusters[start:end]
        haystack = "".join(window)
        if direction is SearchDirection.FORWARD:
            offset = haystack.find(query)
        else:
            offset = haystack.rfind(query)
        if offset < 0:
            return None

        consumed = 0
        for index, cluster in enumerate(window):
            if consumed == offset:
                return start + index
            if consumed > offset:
                break
            consumed += len(cluster)
        # The hit starts inside a cluster.
        return None

    def highlight(
        self, options: HighlightingOptions, query: Optional[str] = None
    ) -> None:
        result = classify(self.content, options)
        if query:
            width = grapheme.length(query)
            starts: List[int] = []
            search_at = 0
            hit = self.find(query, search_at)
            while hit is not None:
                starts.append(hit)
                search_at = hit + width
                hit = self.find(query, search_at)
            overlay_matches(result.highlighting, starts, width)
        self.highlighting = result.highlighting
        self.has_open_string = result.open_string


__all__ = ["Row"]
