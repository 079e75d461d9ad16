"""Extension-keyed registry resolving filenames to filetypes."""

from __future__ import annotations

from pathlib import PurePath
from typing import Dict, Iterable, Optional

from hecto_engine.runtime.telemetry import span

from .models import FileType


def normalize_extension(extension: str) -> str:
    return extension.strip().lstrip(".").lower()


def extension_of(filename: str) -> str:
    return normalize_extension(PurePath(filename).suffix)


class FileTypeConflictError(RuntimeError):
    """Raised when an extension is already claimed by another filetype."""

    def __init__(self, extension: str, existing: FileType) -> None:
        super().__init__(
            f"Extension '{extension}' already registered for '{existing.name}'"
        )
        self.extension = extension
        self.existing = existing


class FileTypeRegistry:
    """Maps lower-cased extensions (without the dot) to filetypes."""

    def __init__(
        self,
        *,
        fallback: Optional[FileType] = None,
        logger_name: str | None = None,
    ) -> None:
        self._by_extension: Dict[str, FileType] = {}
        self._fallback = fallback or FileType.default()
        self._logger_name = logger_name

    @property
    def fallback(self) -> FileType:
        return self._fallback

    def extensions(self) -> tuple[str, ...]:
        return tuple(sorted(self._by_extension))

    def register(
        self,
        filetype: FileType,
        extensions: Iterable[str],
        *,
        replace: bool = False,
    ) -> FileType:
        normalized = tuple(
            dict.fromkeys(normalize_extension(ext) for ext in extensions)
        )
        with span(
            "filetype::register",
            logger_name=self._logger_name,
            component="filetype",
            metadata={"filetype": filetype.name, "extensions": normalized},
        ) as handle:
            if not normalized or not all(normalized):
                handle.fail("empty_extension")
                raise ValueError(
                    f"FileType '{filetype.name}' needs at least one non-empty extension"
                )
            if not replace:
                for ext in normalized:
                    existing = self._by_extension.get(ext)
                    if existing is not None:
                        raise FileTypeConflictError(ext, existing)
            for ext in normalized:
                self._by_extension[ext] = filetype
            return filetype

    def unregister(self, extension: str) -> Optional[FileType]:
        return self._by_extension.pop(normalize_extension(extension), None)

    def resolve(self, filename: Optional[str]) -> FileType:
        if not filename:
            return self._fallback
        return self._by_extension.get(extension_of(filename), self._fallback)


__all__ = [
    "FileTypeConflictError",
    "FileTypeRegistry",
    "extension_of",
    "normalize_extension",
]
