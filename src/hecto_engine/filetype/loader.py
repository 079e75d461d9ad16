"""Load filetype keyword lists from JSON configuration.

The expected document is keyed by extension::

    {
        "py": {
            "name": "Python",
            "primary_keys": ["def", "class", "return"],
            "secondary_keys": ["int", "str"],
            "comments": false
        }
    }

Every flag defaults to ``True`` for configured filetypes. ``name`` defaults to
the upper-cased extension.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from hecto_engine.highlighting import FLAG_NAMES, HighlightingOptions
from hecto_engine.runtime.telemetry import record_event, span

from .defaults import load_builtin_filetypes
from .models import FileType, FileTypeConfigError
from .registry import FileTypeRegistry, normalize_extension

ENV_FILETYPES = "HECTO_ENGINE_FILETYPES"

_LIST_KEYS = ("primary_keys", "secondary_keys")

_SHARED_REGISTRIES: Dict[Optional[str], FileTypeRegistry] = {}


def _parse_entry(extension: str, entry: Any, source: Optional[str]) -> FileType:
    if not isinstance(entry, Mapping):
        raise FileTypeConfigError(
            f"entry for '{extension}' must be an object", source=source
        )
    for key in _LIST_KEYS:
        value = entry.get(key, [])
        if isinstance(value, str) or not isinstance(value, list):
            raise FileTypeConfigError(
                f"'{extension}.{key}' must be a list of strings", source=source
            )
        if not all(isinstance(item, str) for item in value):
            raise FileTypeConfigError(
                f"'{extension}.{key}' must only contain strings", source=source
            )
    name = entry.get("name") or extension.upper()
    if not isinstance(name, str):
        raise FileTypeConfigError(f"'{extension}.name' must be a string", source=source)
    options = HighlightingOptions.from_mapping(
        entry, **{flag: True for flag in FLAG_NAMES}
    )
    return FileType(name=name, options=options)


def parse_filetypes(
    data: Any,
    *,
    registry: Optional[FileTypeRegistry] = None,
    source: Optional[str] = None,
) -> FileTypeRegistry:
    """Register every entry of ``data`` into ``registry`` (replacing)."""

    if not isinstance(data, Mapping):
        raise FileTypeConfigError("top level must be an object", source=source)
    target = registry or FileTypeRegistry()
    for raw_extension, entry in data.items():
        extension = normalize_extension(str(raw_extension))
        if not extension:
            raise FileTypeConfigError("empty extension key", source=source)
        filetype = _parse_entry(extension, entry, source)
        target.register(filetype, (extension,), replace=True)
    return target


def load_filetypes(
    path: str | os.PathLike[str],
    *,
    registry: Optional[FileTypeRegistry] = None,
) -> FileTypeRegistry:
    source = os.fspath(path)
    with span(
        "filetype::load",
        component="filetype",
        metadata={"path": source},
    ):
        try:
            data = json.loads(Path(source).read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise FileTypeConfigError(f"invalid JSON: {exc}", source=source) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise FileTypeConfigError(
                f"cannot read file: {exc}", source=source
            ) from exc
        return parse_filetypes(data, registry=registry, source=source)


def default_registry(*, config_path: Optional[str] = None) -> FileTypeRegistry:
    """Built-ins plus the file named by ``config_path`` or ``HECTO_ENGINE_FILETYPES``."""

    registry = load_builtin_filetypes(FileTypeRegistry())
    path = config_path or os.getenv(ENV_FILETYPES)
    if path:
        load_filetypes(path, registry=registry)
        record_event(
            "filetype.config_loaded",
            level="debug",
            data={"path": path, "extensions": registry.extensions()},
        )
    return registry


def shared_registry() -> FileTypeRegistry:
    """The default registry, built once per ``HECTO_ENGINE_FILETYPES`` value."""

    path = os.getenv(ENV_FILETYPES)
    if path not in _SHARED_REGISTRIES:
        _SHARED_REGISTRIES[path] = default_registry(config_path=path)
    return _SHARED_REGISTRIES[path]


__all__ = [
    "ENV_FILETYPES",
    "default_registry",
    "load_filetypes",
    "parse_filetypes",
    "shared_registry",
]
