import pytest

from hecto_engine.buffer import BufferValidationError, Row, SearchDirection
from hecto_engine.highlighting import FG_RESET, HighlightingOptions, Type

FLAG = "\U0001F1E9\U0001F1EA"  # regional indicators D + E, one cluster
SAMPLES = ("hello world", f"{FLAG}ab{FLAG}", "café x", "")


def test_length_counts_grapheme_clusters() -> None:
    row = Row.from_str(f"{FLAG}ab")

    assert len(row) == 3
    assert len(row.content) == 4
    assert row.graphemes() == [FLAG, "a", "b"]


@pytest.mark.parametrize("text", SAMPLES)
def test_split_then_append_restores_row(text: str) -> None:
    original = Row.from_str(text)
    for at in range(len(original) + 1):
        row = Row.from_str(text)
        tail = row.split(at)
        assert len(row) == at
        assert len(tail) == len(original) - at
        row.append(tail)
        assert row.content == original.content
        assert len(row) == len(original)


def test_split_returns_row_without_highlighting(all_flags: HighlightingOptions) -> None:
    row = Row.from_str("let x")
    row.highlight(all_flags)

    tail = row.split(3)

    assert tail.content == " x"
    assert tail.highlighting == []


def test_split_outside_row_is_a_contract_breach() -> None:
    row = Row.from_str("abc")

    with pytest.raises(BufferValidationError) as info:
        row.split(4)

    assert info.value.index == 4
    assert row.content == "abc"


@pytest.mark.parametrize("text", SAMPLES)
def test_insert_then_delete_is_identity(text: str) -> None:
    original = Row.from_str(text)
    for at in range(len(original)):
        row = Row.from_str(text)
        row.insert(at, "Z")
        assert len(row) == len(original) + 1
        row.delete(at)
        assert row.content == original.content
        assert len(row) == len(original)


def test_insert_before_grapheme_and_past_end() -> None:
    row = Row.from_str(f"a{FLAG}b")

    row.insert(1, "x")
    row.insert(99, "!")

    assert row.content == f"ax{FLAG}b!"
    assert len(row) == 5


def test_delete_removes_whole_cluster_and_ignores_out_of_range() -> None:
    row = Row.from_str(f"a{FLAG}b")

    row.delete(1)
    row.delete(5)

    assert row.content == "ab"
    assert len(row) == 2


def test_insert_combining_mark_keeps_length_true() -> None:
    row = Row.from_str("cafe")

    row.insert(4, "\u0301")

    assert len(row) == 4


def test_append_recounts_clusters_fused_at_the_seam() -> None:
    row = Row.from_str("e")

    row.append(Row.from_str("\u0301x"))

    assert row.content == "e\u0301x"
    assert len(row) == 2
    row.delete(1)
    row.delete(1)
    assert row.content == "e\u0301"
    assert len(row) == 1


def test_delete_recounts_when_neighbours_fuse() -> None:
    row = Row.from_str("\U0001F1E9a\U0001F1EA")
    assert len(row) == 3

    row.delete(1)

    assert row.content == FLAG
    assert len(row) == 1


def test_find_forward_and_backward_windows() -> None:
    row = Row.from_str("ab ab ab")

    assert row.find("ab", 0) == 0
    assert row.find("ab", 1) == 3
    assert row.find("ab", 8, SearchDirection.BACKWARD) == 6
    assert row.find("ab", 5, SearchDirection.BACKWARD) == 3
    assert row.find("ab", 1, SearchDirection.BACKWARD) is None


def test_find_reports_grapheme_index() -> None:
    row = Row.from_str(f"{FLAG}{FLAG} needle")

    assert row.find("needle", 0) == 3
    assert row.find("needle", 3) == 3
    assert row.find("needle", 4) is None


def test_find_ignores_hits_inside_a_cluster() -> None:
    row = Row.from_str(f"{FLAG}x")

    assert row.find("\U0001F1EA", 0) is None
    assert row.find("\U0001F1EA", 2, SearchDirection.BACKWARD) is None
    assert row.find("x", 0) == 1


def test_find_rejects_empty_query_and_out_of_range_start() -> None:
    row = Row.from_str("abc")

    assert row.find("", 0) is None
    assert row.find("a", 4) is None
    assert row.find("c", 3) is None


def test_render_replaces_tabs_and_appends_reset() -> None:
    row = Row.from_str("a\tb")

    assert row.render(0, 10) == "a b" + FG_RESET


def test_render_compresses_colour_runs(all_flags: HighlightingOptions) -> None:
    row = Row.from_str("let x = 10;")
    row.highlight(all_flags)

    expected = (
        Type.PRIMARY_KEY.fg_sequence()
        + "let"
        + Type.NONE.fg_sequence()
        + " x = "
        + Type.NUMBER.fg_sequence()
        + "10"
        + Type.NONE.fg_sequence()
        + ";"
        + FG_RESET
    )
    assert row.render(0, 80) == expected


def test_render_clips_to_window(all_flags: HighlightingOptions) -> None:
    row = Row.from_str("let x = 10;")
    row.highlight(all_flags)

    assert row.render(4, 5) == "x" + FG_RESET
    assert row.render(20, 30) == FG_RESET
    assert row.render(8, 99) == Type.NUMBER.fg_sequence() + "10" + (
        Type.NONE.fg_sequence() + ";" + FG_RESET
    )


def test_highlight_tracks_open_string(all_flags: HighlightingOptions) -> None:
    row = Row.from_str('let s = "open')

    row.highlight(all_flags)
    assert row.has_open_string is True

    row.insert(len(row), '"')
    row.highlight(all_flags)
    assert row.has_open_string is False


def test_as_bytes_is_utf8() -> None:
    assert Row.from_str("é").as_bytes() == "é".encode("utf-8")
