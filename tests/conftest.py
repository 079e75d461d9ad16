import os

import pytest

os.environ.setdefault("HECTO_ENGINE_DISABLE_CONSOLE", "1")
os.environ.pop("HECTO_ENGINE_FILETYPES", None)

from hecto_engine.highlighting import HighlightingOptions  # noqa: E402


@pytest.fixture
def all_flags() -> HighlightingOptions:
    return HighlightingOptions(
        numbers=True,
        strings=True,
        characters=True,
        comments=True,
        primary_keys=("foo", "let", "fn"),
        secondary_keys=("u8", "foo"),
    )
