"""Row/document buffer model."""

from .document import Document, DocumentIOError, split_lines
from .row import Row
from .state import Position, SearchDirection
from .sync import DocumentMirror, DocumentSync
from .validation import BufferValidationError, ensure_split_point

__all__ = [
    "BufferValidationError",
    "Document",
    "DocumentIOError",
    "DocumentMirror",
    "DocumentSync",
    "Position",
    "Row",
    "SearchDirection",
    "ensure_split_point",
    "split_lines",
]
