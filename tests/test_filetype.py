import json

import pytest

from hecto_engine.buffer import Document
from hecto_engine.filetype import (
    DEFAULT_NAME,
    RUST,
    FileType,
    FileTypeConfigError,
    FileTypeConflictError,
    FileTypeRegistry,
    default_registry,
    load_builtin_filetypes,
    load_filetypes,
    parse_filetypes,
    shared_registry,
)
from hecto_engine.highlighting import HighlightingOptions


def make_registry() -> FileTypeRegistry:
    return load_builtin_filetypes(FileTypeRegistry())


def test_resolve_builtin_extension_case_insensitively() -> None:
    registry = make_registry()

    assert registry.resolve("src/main.rs") is RUST
    assert registry.resolve("MAIN.RS") is RUST
    assert RUST.options.comments and RUST.options.characters
    assert "fn" in RUST.options.primary_keys
    assert "u8" in RUST.options.secondary_keys


def test_unknown_extension_falls_back() -> None:
    registry = make_registry()

    for filename in ("notes.txt", "Makefile", None, ""):
        filetype = registry.resolve(filename)
        assert filetype.name == DEFAULT_NAME
        assert not filetype.options.enabled


def test_register_conflict_and_replace() -> None:
    registry = make_registry()
    other = FileType(name="Other Rust", options=HighlightingOptions(numbers=True))

    with pytest.raises(FileTypeConflictError) as info:
        registry.register(other, (".rs",))
    assert info.value.extension == "rs"

    registry.register(other, ("rs",), replace=True)
    assert registry.resolve("a.rs") is other


def test_register_requires_extension() -> None:
    with pytest.raises(ValueError):
        FileTypeRegistry().register(RUST, ("",))


def test_unregister_returns_previous() -> None:
    registry = make_registry()

    assert registry.unregister(".rs") is RUST
    assert registry.extensions() == ()


def test_parse_filetypes_defaults_flags_on() -> None:
    registry = parse_filetypes(
        {
            ".PY": {
                "name": "Python",
                "primary_keys": ["def", "class"],
                "secondary_keys": ["int"],
                "comments": False,
            },
            "go": {"primary_keys": ["func"]},
        }
    )

    python = registry.resolve("x.py")
    assert python.name == "Python"
    assert python.options.primary_keys == ("def", "class")
    assert python.options.numbers is True
    assert python.options.comments is False
    assert registry.resolve("x.go").name == "GO"


@pytest.mark.parametrize(
    "data",
    [
        [],
        {"py": "nope"},
        {"py": {"primary_keys": "def"}},
        {"py": {"secondary_keys": [1]}},
        {"": {}},
    ],
)
def test_parse_filetypes_rejects_bad_shapes(data: object) -> None:
    with pytest.raises(FileTypeConfigError):
        parse_filetypes(data)


def test_load_filetypes_from_json(tmp_path) -> None:
    path = tmp_path / "filetypes.json"
    path.write_text(json.dumps({"c": {"name": "C", "primary_keys": ["if"]}}))

    registry = load_filetypes(path, registry=make_registry())

    assert registry.resolve("a.c").name == "C"
    assert registry.resolve("a.rs") is RUST


def test_load_filetypes_invalid_json(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json")

    with pytest.raises(FileTypeConfigError) as info:
        load_filetypes(path)
    assert info.value.source == str(path)


def test_default_registry_reads_environment(tmp_path, monkeypatch) -> None:
    path = tmp_path / "filetypes.json"
    path.write_text(json.dumps({"rs": {"name": "Custom Rust"}}))
    monkeypatch.setenv("HECTO_ENGINE_FILETYPES", str(path))

    registry = default_registry()

    assert registry.resolve("lib.rs").name == "Custom Rust"


def test_default_registry_without_config() -> None:
    assert default_registry().resolve("lib.rs") is RUST


def test_load_filetypes_missing_file(tmp_path) -> None:
    path = tmp_path / "absent.json"

    with pytest.raises(FileTypeConfigError) as info:
        load_filetypes(path)

    assert info.value.source == str(path)
    assert isinstance(info.value.__cause__, FileNotFoundError)


def test_shared_registry_is_built_once() -> None:
    registry = shared_registry()

    assert shared_registry() is registry
    assert Document().registry is registry
    assert registry.resolve("lib.rs") is RUST
