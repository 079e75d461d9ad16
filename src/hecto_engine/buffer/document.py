"""Line-oriented document built from highlighted rows."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

from hecto_engine.filetype import FileType, FileTypeRegistry, shared_registry
from hecto_engine.runtime.telemetry import record_event, span

from .row import Row
from .state import Position, SearchDirection


class DocumentIOError(OSError):
    """Raised when a document cannot be read from or written to disk."""

    def __init__(self, message: str, *, path: str, operation: str) -> None:
        super().__init__(message)
        self.path = path
        self.operation = operation


def split_lines(text: str) -> List[str]:
    """Split on ``\\n``, strip one trailing ``\\r`` per line, drop the final empty tail."""

    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class Document:
    """Ordered rows plus filename, dirty flag and resolved filetype.

    Row indices are stable between edits: rows are only inserted or removed
    by ``insert_newline`` and the row merge in ``delete``. Out-of-range
    positions are ignored rather than reported.
    """

    def __init__(
        self,
        rows: Optional[Iterable[Row]] = None,
        *,
        filename: Optional[str] = None,
        registry: Optional[FileTypeRegistry] = None,
    ) -> None:
        self.rows: List[Row] = list(rows or [])
        self.filename = filename
        self.registry = registry or shared_registry()
        self.filetype: FileType = self.registry.resolve(filename)
        self._dirty = False

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        *,
        filename: Optional[str] = None,
        registry: Optional[FileTypeRegistry] = None,
    ) -> "Document":
        document = cls(
            (Row.from_str(line) for line in lines),
            filename=filename,
            registry=registry,
        )
        document.highlight()
        return document

    @classmethod
    def open(
        cls,
        path: str | os.PathLike[str],
        *,
        registry: Optional[FileTypeRegistry] = None,
    ) -> "Document":
        filename = os.fspath(path)
        with span(
            "document::open",
            component="document",
            metadata={"path": filename},
        ) as handle:
            try:
                with Path(filename).open(encoding="utf-8", newline="") as handle_in:
                    contents = handle_in.read()
            except (OSError, UnicodeDecodeError) as exc:
                raise DocumentIOError(
                    f"Cannot open file: {filename}", path=filename, operation="open"
                ) from exc

            document = cls.from_lines(
                split_lines(contents), filename=filename, registry=registry
            )
            handle.add_metadata("rows", len(document))
            handle.add_metadata("filetype", document.file_type_name())
            return document

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def is_empty(self) -> bool:
        return not self.rows

    def is_dirty(self) -> bool:
        return self._dirty

    def file_type_name(self) -> str:
        return self.filetype.name

    def row(self, index: int) -> Optional[Row]:
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return None

    def snapshot(self) -> Sequence[str]:
        """Row contents without exposing the rows themselves."""

        return tuple(row.content for row in self.rows)

    def insert(self, at: Position, ch: str) -> None:
        if at.y > len(self.rows):
            return
        self._dirty = True
        if ch == "\n":
            self.insert_newline(at)
            return

        options = self.filetype.options
        if at.y == len(self.rows):
            row = Row()
            row.insert(0, ch)
            row.highlight(options)
            self.rows.append(row)
        else:
            row = self.rows[at.y]
            row.insert(at.x, ch)
            row.highlight(options)

    def insert_newline(self, at: Position) -> None:
        if at.y > len(self.rows):
            return
        self._dirty = True
        if at.y == len(self.rows):
            self.rows.append(Row())
            return

        options = self.filetype.options
        current = self.rows[at.y]
        new_row = current.split(at.x)
        current.highlight(options)
        new_row.highlight(options)
        self.rows.insert(at.y + 1, new_row)
        record_event(
            "document.split_row",
            level="debug",
            data={"row": at.y, "column": at.x},
        )

    def delete(self, at: Position) -> None:
        if at.y >= len(self.rows):
            return
        self._dirty = True

        options = self.filetype.options
        row = self.rows[at.y]
        if at.x == len(row) and at.y + 1 < len(self.rows):
            following = self.rows.pop(at.y + 1)
            row.append(following)
            record_event(
                "document.merge_rows",
                level="debug",
                data={"row": at.y, "merged": at.y + 1},
            )
        else:
            row.delete(at.x)
        row.highlight(options)

    def save(self) -> None:
        """Write every row followed by ``\\n``; a document without filename is left alone."""

        if self.filename is None:
            return
        filename = self.filename
        with span(
            "document::save",
            component="document",
            metadata={"path": filename, "rows": len(self.rows)},
        ):
            try:
                with Path(filename).open("wb") as handle_out:
                    for row in self.rows:
                        handle_out.write(row.as_bytes())
                        handle_out.write(b"\n")
            except OSError as exc:
                raise DocumentIOError(
                    f"Cannot write file: {filename}", path=filename, operation="save"
                ) from exc

            self.filetype = self.registry.resolve(filename)
            self._dirty = False
            self.highlight()

    def find(
        self,
        query: str,
        at: Position,
        direction: SearchDirection = SearchDirection.FORWARD,
    ) -> Optional[Position]:
        if at.y < 0 or at.y >= len(self.rows):
            return None

        with span(
            "document::find",
            metadata={"direction": direction.value, "row": at.y},
        ):
            if direction is SearchDirection.FORWARD:
                candidates = range(at.y, len(self.rows))
            else:
                candidates = range(at.y, -1, -1)

            for y in candidates:
                row = self.rows[y]
                if y == at.y:
                    x = at.x
                elif direction is SearchDirection.FORWARD:
                    x = 0
                else:
                    x = len(row)
                found = row.find(query, x, direction)
                if found is not None:
                    return Position(x=found, y=y)
            return None

    def highlight(self, query: Optional[str] = None) -> None:
        options = self.filetype.options
        for row in self.rows:
            row.highlight(options, query)


__all__ = ["Document", "DocumentIOError", "split_lines"]
