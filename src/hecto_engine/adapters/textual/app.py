"""Executable Textual app hosting an editing session."""

from __future__ import annotations

import argparse
import os
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' extra to use hecto_engine.adapters.textual.app"
    ) from exc

from hecto_engine.buffer import Document, DocumentMirror
from hecto_engine.filetype import ENV_FILETYPES
from hecto_engine.runtime import telemetry

from .controller import (
    HELP_MESSAGE,
    TextualEditorAdapter,
    TextualUIHooks,
    cursor_span,
    load_document,
)

# Rows reserved below the text area for the status and message bars.
CHROME_ROWS = 2


def render_mirror(mirror: DocumentMirror) -> Text:
    """Viewport text with the cursor cell drawn in reverse video."""

    lines = [Text.from_ansi(line) for line in mirror.lines]
    cursor = mirror.cursor
    if 0 <= cursor.y < len(lines):
        line = lines[cursor.y]
        start, end = cursor_span(line.plain, cursor.x)
        if start == end:
            line.append(" ")
            end = start + 1
        line.stylize("reverse", start, end)
    return Text("\n").join(lines)


class HectoEditorApp(App[None]):
    """Full-screen editor drawing ``DocumentMirror`` snapshots."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#document-view {
		height: 1fr;
		overflow: hidden;
	}

	#status-bar {
		height: 1;
		background: $surface-lighten-2;
		color: $text;
	}

	#message-bar {
		height: 1;
	}
	"""

    def __init__(self, document: Document, *, status: str = HELP_MESSAGE) -> None:
        super().__init__()
        self._document = document
        self._initial_status = status
        self.adapter: TextualEditorAdapter | None = None
        self._view: Static | None = None
        self._status_bar: Static | None = None
        self._message_bar: Static | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="editor"):
            self._view = Static("", id="document-view")
            yield self._view
        self._status_bar = Static("", id="status-bar")
        self._message_bar = Static("", id="message-bar")
        yield self._status_bar
        yield self._message_bar

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            request_exit=self.exit,
            log=self._log_line,
        )
        width, height = self.size
        self.adapter = TextualEditorAdapter(
            self._document,
            hooks,
            width=width,
            height=max(height - CHROME_ROWS, 1),
            status=self._initial_status,
        )
        # Expires status messages even while no keys arrive.
        self.set_interval(1.0, self.adapter.refresh)

    def on_resize(self, event: events.Resize) -> None:
        if self.adapter:
            width, height = event.size
            self.adapter.resize(width, max(height - CHROME_ROWS, 1))

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        self.adapter.handle_key(event.key, text=event.character)
        event.stop()

    async def action_quit(self) -> None:
        # Textual binds ctrl+q to quit; route it through the dirty-file check.
        if self.adapter is None:
            self.exit()
            return
        self.adapter.handle_key("ctrl+q")

    def _update_view(self, mirror: DocumentMirror) -> None:
        if self._view:
            self._view.update(render_mirror(mirror))
        if self._status_bar:
            self._status_bar.update(mirror.attributes.get("status_bar", ""))

    def _update_status(self, status: str) -> None:
        if self._message_bar:
            self._message_bar.update(status)

    def _log_line(self, line: str) -> None:
        telemetry.record_event("editor.key", level="debug", data={"line": line})


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit a file with hecto-engine.")
    parser.add_argument("filename", nargs="?", help="File to open")
    parser.add_argument(
        "--filetypes",
        default=os.environ.get(ENV_FILETYPES),
        help="JSON file with extra filetype keyword lists",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default="production",
        help="Telemetry preset (default: production, logs to a file)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    document, status = load_document(args.filename, args.filetypes)
    HectoEditorApp(document, status=status).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
