"""Editing session that turns host key events into document operations."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import grapheme

from hecto_engine import __version__
from hecto_engine.buffer import (
    Document,
    DocumentIOError,
    DocumentMirror,
    Position,
    SearchDirection,
)
from hecto_engine.filetype import (
    FileTypeConfigError,
    FileTypeRegistry,
    default_registry,
    load_builtin_filetypes,
)
from hecto_engine.runtime.telemetry import record_event

HELP_MESSAGE = "HELP: Ctrl-F = find | Ctrl-S = save | Ctrl-Q = quit"
SEARCH_PROMPT = "Search (ESC to cancel, arrows to navigate): "
SAVE_AS_PROMPT = "Save as: "
QUIT_TIMES = 1
# Seconds a status message stays on the message bar.
STATUS_TIMEOUT = 5.0

MOVEMENT_KEYS = frozenset(
    {"up", "down", "left", "right", "home", "end", "pageup", "pagedown"}
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def cursor_span(plain: str, column: int) -> tuple[int, int]:
    """Code point range of the grapheme at ``column`` in a rendered line.

    A column past the end maps to the empty range at the end of ``plain``.
    """

    offset = 0
    for index, cluster in enumerate(grapheme.graphemes(plain)):
        if index == column:
            return offset, offset + len(cluster)
        offset += len(cluster)
    return offset, offset


def _load_registry(
    filetypes: Optional[str],
) -> tuple[FileTypeRegistry, Optional[str]]:
    try:
        return default_registry(config_path=filetypes), None
    except FileTypeConfigError as exc:
        record_event(
            "editor.filetypes_failed",
            level="error",
            data={"path": exc.source, "reason": str(exc)},
        )
        return load_builtin_filetypes(FileTypeRegistry()), f"ERR: {exc}"


def load_document(
    filename: Optional[str], filetypes: Optional[str] = None
) -> tuple[Document, str]:
    """Open ``filename`` for an editing session and pick the first status line.

    A file that cannot be read still yields an empty document bound to
    ``filename`` so saving creates it. A broken filetype configuration falls
    back to the built-in filetypes.
    """

    registry, error = _load_registry(filetypes)
    if not filename:
        return Document(registry=registry), error or HELP_MESSAGE
    try:
        document = Document.open(filename, registry=registry)
    except DocumentIOError:
        document = Document(filename=filename, registry=registry)
        return document, f"ERR: Could not open file: {filename}"
    return document, error or HELP_MESSAGE


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update host widgets."""

    update_view: Callable[[DocumentMirror], None]
    update_status: Callable[[str], None] = _noop
    request_exit: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


@dataclass(slots=True)
class _Prompt:
    kind: str
    label: str
    text: str = ""
    origin: Optional[Position] = None
    direction: SearchDirection = SearchDirection.FORWARD


class TextualEditorAdapter:
    """Owns the cursor, viewport and prompts for one document."""

    def __init__(
        self,
        document: Document,
        hooks: TextualUIHooks,
        *,
        width: int = 80,
        height: int = 24,
        status: str = HELP_MESSAGE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = clock
        self.document = document
        self.hooks = hooks
        self.width = max(width, 1)
        self.height = max(height, 1)
        self.position = Position()
        self.offset = Position()
        self.status = status
        self.quit_times = QUIT_TIMES
        self.should_quit = False
        self._prompt: Optional[_Prompt] = None
        self._refresh()

    @property
    def status(self) -> str:
        return self._status

    @status.setter
    def status(self, message: str) -> None:
        self._status = message
        self._status_time = self._clock()

    def visible_status(self) -> str:
        """The status message, or an empty string once it has expired."""

        if self._clock() - self._status_time < STATUS_TIMEOUT:
            return self._status
        return ""

    @property
    def prompt_text(self) -> Optional[str]:
        return self._prompt.text if self._prompt else None

    def refresh(self) -> None:
        self._refresh()

    def resize(self, width: int, height: int) -> None:
        self.width = max(width, 1)
        self.height = max(height, 1)
        self.scroll()
        self._refresh()

    def handle_key(self, key: str, *, text: Optional[str] = None) -> bool:
        """Dispatch one host key event; returns False for ignored keys."""

        self._log_state("key ->", key=key, text=text)
        if self._prompt is not None:
            self._handle_prompt_key(key, text)
            self._refresh()
            return True

        consumed = True
        if key == "ctrl+q":
            if self._confirm_quit():
                self._refresh()
                return True
        elif key == "ctrl+s":
            self.save()
        elif key == "ctrl+f":
            self.start_search()
        elif key == "enter":
            self.document.insert(self.position, "\n")
            self.move_cursor("right")
        elif key == "tab":
            self.document.insert(self.position, "\t")
            self.move_cursor("right")
        elif key == "delete":
            self.document.delete(self.position)
        elif key == "backspace":
            if self.position.x > 0 or self.position.y > 0:
                self.move_cursor("left")
                self.document.delete(self.position)
        elif key in MOVEMENT_KEYS:
            self.move_cursor(key)
        elif text and text.isprintable():
            self.document.insert(self.position, text)
            self.move_cursor("right")
        else:
            consumed = False

        self.scroll()
        if self.quit_times < QUIT_TIMES:
            self.quit_times = QUIT_TIMES
            self.status = ""
        self._refresh()
        return consumed

    def _confirm_quit(self) -> bool:
        """Return True when the quit was deferred by the unsaved-changes warning."""

        if self.quit_times > 0 and self.document.is_dirty():
            self.status = (
                "WARNING! File has unsaved changes. Press Ctrl-Q again to quit."
            )
            self.quit_times -= 1
            return True
        self.should_quit = True
        self.hooks.request_exit()
        return False

    def move_cursor(self, key: str) -> None:
        x, y = self.position.x, self.position.y
        height = len(self.document)
        row = self.document.row(y)
        width = len(row) if row is not None else 0

        if key == "up":
            y = max(y - 1, 0)
        elif key == "down":
            if y < height:
                y += 1
        elif key == "left":
            if x > 0:
                x -= 1
            elif y > 0:
                y -= 1
                previous = self.document.row(y)
                x = len(previous) if previous is not None else 0
        elif key == "right":
            if x < width:
                x += 1
            elif y < height:
                y += 1
                x = 0
        elif key == "pageup":
            y = y - self.height if y > self.height else 0
        elif key == "pagedown":
            y = y + self.height if y + self.height < height else height
        elif key == "home":
            x = 0
        elif key == "end":
            x = width

        row = self.document.row(y)
        width = len(row) if row is not None else 0
        self.position = Position(x=min(x, width), y=y)

    def scroll(self) -> None:
        x, y = self.position.x, self.position.y
        offset_x, offset_y = self.offset.x, self.offset.y

        if y < offset_y:
            offset_y = y
        elif y >= offset_y + self.height:
            offset_y = y - self.height + 1

        if x < offset_x:
            offset_x = x
        elif x >= offset_x + self.width:
            offset_x = x - self.width + 1

        self.offset = Position(x=offset_x, y=offset_y)

    def save(self) -> None:
        if self.document.filename is None:
            self._prompt = _Prompt(kind="save_as", label=SAVE_AS_PROMPT)
            return
        self._write()

    def _write(self) -> None:
        try:
            self.document.save()
        except DocumentIOError as exc:
            self.status = "Error writing file!"
            record_event(
                "editor.save_failed",
                level="error",
                data={"path": exc.path, "reason": str(exc.__cause__ or exc)},
            )
            return
        self.status = "File saved successfully."

    def start_search(self) -> None:
        self._prompt = _Prompt(kind="search", label=SEARCH_PROMPT, origin=self.position)

    def _handle_prompt_key(self, key: str, text: Optional[str]) -> None:
        prompt = self._prompt
        assert prompt is not None

        if key == "enter":
            self._finish_prompt(prompt, cancelled=False)
            return
        if key == "escape":
            prompt.text = ""
            self._finish_prompt(prompt, cancelled=True)
            return
        if key == "backspace":
            prompt.text = prompt.text[:-1]
        elif text and text.isprintable() and key not in MOVEMENT_KEYS:
            prompt.text += text

        if prompt.kind == "search":
            self._search_step(prompt, key)

    def _search_step(self, prompt: _Prompt, key: str) -> None:
        moved = False
        if key in ("right", "down"):
            prompt.direction = SearchDirection.FORWARD
            self.move_cursor("right")
            moved = True
        elif key in ("left", "up"):
            prompt.direction = SearchDirection.BACKWARD
        else:
            prompt.direction = SearchDirection.FORWARD

        found = self.document.find(prompt.text, self.position, prompt.direction)
        if found is not None:
            self.position = found
            self.scroll()
        elif moved:
            self.move_cursor("left")
        self.document.highlight(prompt.text or None)

    def _finish_prompt(self, prompt: _Prompt, *, cancelled: bool) -> None:
        self._prompt = None
        self.status = ""
        value = prompt.text

        if prompt.kind == "search":
            if cancelled or not value:
                self.position = prompt.origin or Position()
                self.scroll()
            elif self.document.find(value, self.position) is None:
                self.status = f"{value} is not found"
            self.document.highlight(None)
            return

        if not value:
            self.status = "Save aborted."
            return
        self.document.filename = value
        self._write()

    def pull_mirror(self) -> DocumentMirror:
        lines = []
        for screen_row in range(self.height):
            row = self.document.row(self.offset.y + screen_row)
            if row is not None:
                lines.append(
                    row.render(self.offset.x, self.offset.x + self.width)
                )
            elif self.document.is_empty() and screen_row == self.height // 3:
                lines.append(self._welcome_line())
            else:
                lines.append("~")

        status = (
            f"{self._prompt.label}{self._prompt.text}"
            if self._prompt
            else self.visible_status()
        )
        return DocumentMirror(
            lines=tuple(lines),
            cursor=Position(
                x=self.position.x - self.offset.x,
                y=self.position.y - self.offset.y,
            ),
            filename=self.document.filename,
            filetype=self.document.file_type_name(),
            dirty=self.document.is_dirty(),
            line_count=len(self.document),
            status=status,
            attributes={"status_bar": self.status_bar()},
        )

    def status_bar(self) -> str:
        name = (self.document.filename or "[No Name]")[:20]
        modified = " (modified)" if self.document.is_dirty() else ""
        left = f"{name} - {len(self.document)} lines{modified}"
        right = (
            f"{self.document.file_type_name()} | "
            f"{self.position.y + 1}/{len(self.document)}"
        )
        padding = max(self.width - len(left) - len(right), 1)
        return f"{left}{' ' * padding}{right}"[: self.width]

    def _welcome_line(self) -> str:
        message = f"hecto-engine -- version {__version__}"
        padding = max((self.width - len(message)) // 2, 1)
        return f"~{' ' * (padding - 1)}{message}"[: self.width]

    def _refresh(self) -> None:
        mirror = self.pull_mirror()
        self.hooks.update_view(mirror)
        self.hooks.update_status(mirror.status)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        return {
            "cursor": (self.position.x, self.position.y),
            "prompt": self._prompt.kind if self._prompt else None,
            "dirty": self.document.is_dirty(),
            "rows": len(self.document),
        }


__all__ = [
    "HELP_MESSAGE",
    "STATUS_TIMEOUT",
    "TextualEditorAdapter",
    "TextualUIHooks",
    "cursor_span",
    "load_document",
]
