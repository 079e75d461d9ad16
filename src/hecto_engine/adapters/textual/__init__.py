"""Textual host adapter. ``app`` needs the optional ``textual`` extra."""

from .controller import (
    HELP_MESSAGE,
    STATUS_TIMEOUT,
    TextualEditorAdapter,
    TextualUIHooks,
    cursor_span,
    load_document,
)

__all__ = [
    "HELP_MESSAGE",
    "STATUS_TIMEOUT",
    "TextualEditorAdapter",
    "TextualUIHooks",
    "cursor_span",
    "load_document",
]
