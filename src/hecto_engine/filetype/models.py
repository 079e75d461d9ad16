"""Filetype value objects."""

from __future__ import annotations

from dataclasses import dataclass, field

from hecto_engine.highlighting import HighlightingOptions

DEFAULT_NAME = "No filetype"


@dataclass(frozen=True, slots=True)
class FileType:
    name: str = DEFAULT_NAME
    options: HighlightingOptions = field(default_factory=HighlightingOptions)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("FileType name cannot be empty")

    @classmethod
    def default(cls) -> "FileType":
        return cls()


class FileTypeConfigError(ValueError):
    """Raised when filetype configuration data has the wrong shape."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(f"{source}: {message}" if source else message)
        self.source = source


__all__ = ["DEFAULT_NAME", "FileType", "FileTypeConfigError"]
