"""Built-in filetypes that seed every registry."""

from __future__ import annotations

from typing import Iterable

from hecto_engine.highlighting import HighlightingOptions

from .models import FileType
from .registry import FileTypeRegistry

RUST_PRIMARY_KEYS: tuple[str, ...] = (
    "as",
    "break",
    "const",
    "continue",
    "crate",
    "else",
    "enum",
    "extern",
    "false",
    "fn",
    "for",
    "if",
    "impl",
    "in",
    "let",
    "loop",
    "match",
    "mod",
    "move",
    "mut",
    "pub",
    "ref",
    "return",
    "self",
    "Self",
    "static",
    "struct",
    "super",
    "trait",
    "true",
    "type",
    "unsafe",
    "use",
    "where",
    "while",
    "dyn",
    "abstract",
    "become",
    "box",
    "do",
    "final",
    "macro",
    "override",
    "priv",
    "typeof",
    "unsized",
    "virtual",
    "yield",
    "async",
    "await",
    "try",
)

RUST_SECONDARY_KEYS: tuple[str, ...] = (
    "bool",
    "char",
    "i8",
    "i16",
    "i32",
    "i64",
    "isize",
    "u8",
    "u16",
    "u32",
    "u64",
    "usize",
    "f32",
    "f64",
)

RUST = FileType(
    name="Rust",
    options=HighlightingOptions(
        numbers=True,
        strings=True,
        characters=True,
        comments=True,
        primary_keys=RUST_PRIMARY_KEYS,
        secondary_keys=RUST_SECONDARY_KEYS,
    ),
)

BUILTIN_FILETYPES: tuple[tuple[FileType, tuple[str, ...]], ...] = (
    (RUST, ("rs",)),
)


def load_builtin_filetypes(
    registry: FileTypeRegistry,
    *,
    include: Iterable[str] | None = None,
    replace: bool = False,
) -> FileTypeRegistry:
    """Register the built-in filetypes, optionally filtered by name."""

    wanted = set(include) if include is not None else None
    for filetype, extensions in BUILTIN_FILETYPES:
        if wanted is not None and filetype.name not in wanted:
            continue
        registry.register(filetype, extensions, replace=replace)
    return registry


__all__ = [
    "BUILTIN_FILETYPES",
    "RUST",
    "RUST_PRIMARY_KEYS",
    "RUST_SECONDARY_KEYS",
    "load_builtin_filetypes",
]
