"""Filetype resolution and keyword-list configuration."""

from .models import DEFAULT_NAME, FileType, FileTypeConfigError
from .registry import (
    FileTypeConflictError,
    FileTypeRegistry,
    extension_of,
    normalize_extension,
)
from .defaults import RUST, load_builtin_filetypes
from .loader import (
    ENV_FILETYPES,
    default_registry,
    load_filetypes,
    parse_filetypes,
    shared_registry,
)

__all__ = [
    "DEFAULT_NAME",
    "ENV_FILETYPES",
    "FileType",
    "FileTypeConfigError",
    "FileTypeConflictError",
    "FileTypeRegistry",
    "RUST",
    "default_registry",
    "extension_of",
    "load_builtin_filetypes",
    "load_filetypes",
    "normalize_extension",
    "parse_filetypes",
    "shared_registry",
]
