"""Validation helpers for caller contract breaches."""

from __future__ import annotations

from typing import Optional

from .state import Position


class BufferValidationError(RuntimeError):
    """Raised when a caller hands the buffer an impossible index."""

    def __init__(
        self,
        message: str,
        *,
        index: Optional[int] = None,
        position: Optional[Position] = None,
    ) -> None:
        super().__init__(message)
        self.index = index
        self.position = position


def ensure_split_point(length: int, at: int) -> int:
    if at < 0 or at > length:
        raise BufferValidationError(
            f"Split point {at} outside row of length {length}", index=at
        )
    return at


__all__ = ["BufferValidationError", "ensure_split_point"]
