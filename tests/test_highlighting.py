from hecto_engine.buffer import Row
from hecto_engine.highlighting import (
    COLORS,
    HighlightingOptions,
    Type,
    classify,
    is_separator,
)

N = Type.NONE


def kinds(text: str, options: HighlightingOptions) -> list[Type]:
    return classify(text, options).highlighting


def test_one_entry_per_code_point(all_flags: HighlightingOptions) -> None:
    text = 'fn main() { let s = "x\\n"; // done'

    assert len(kinds(text, all_flags)) == len(text)


def test_comment_runs_to_end_of_row(all_flags: HighlightingOptions) -> None:
    assert kinds("x // y", all_flags) == [N, N] + [Type.COMMENT] * 4


def test_comment_wins_inside_string_literal(all_flags: HighlightingOptions) -> None:
    text = '"// not a comment"'

    result = kinds(text, all_flags)

    assert result[0] is Type.STRING
    assert result[1:] == [Type.COMMENT] * (len(text) - 1)


def test_character_literals(all_flags: HighlightingOptions) -> None:
    assert kinds("'a'", all_flags) == [Type.CHARACTER] * 3
    assert kinds("'\\n'", all_flags) == [Type.CHARACTER] * 4
    assert kinds("'abc'", all_flags) == [N] * 5
    assert kinds("'", all_flags) == [N]


def test_string_with_escape_and_terminator(all_flags: HighlightingOptions) -> None:
    result = classify('"a\\"b" x', all_flags)

    assert result.highlighting == [
        Type.STRING,
        Type.STRING,
        Type.ESCAPE,
        Type.ESCAPE,
        Type.STRING,
        Type.STRING,
        N,
        N,
    ]
    assert result.open_string is False


def test_unterminated_string_keeps_classification(
    all_flags: HighlightingOptions,
) -> None:
    result = classify('"abc', all_flags)

    assert result.highlighting == [Type.STRING] * 4
    assert result.open_string is True


def test_numbers_need_token_start(all_flags: HighlightingOptions) -> None:
    num = Type.NUMBER

    assert kinds("2.5", all_flags) == [num] * 3
    assert kinds("x1", all_flags) == [N, N]
    assert kinds("1..2", all_flags) == [num, num, N, num]
    assert kinds("(42)", all_flags) == [N, num, num, N]


def test_keyword_requires_separators(all_flags: HighlightingOptions) -> None:
    assert kinds("foobar", all_flags) == [N] * 6
    assert kinds("foo bar", all_flags) == [Type.PRIMARY_KEY] * 3 + [N] * 4
    assert kinds("(foo)", all_flags) == [N] + [Type.PRIMARY_KEY] * 3 + [N]
    assert kinds("xfoo", all_flags) == [N] * 4


def test_primary_tier_wins_over_secondary(all_flags: HighlightingOptions) -> None:
    assert kinds("foo: u8", all_flags) == (
        [Type.PRIMARY_KEY] * 3 + [N, N] + [Type.SECONDARY_KEY] * 2
    )


def test_disabled_options_classify_nothing() -> None:
    text = 'let x = "a" // 1'

    assert kinds(text, HighlightingOptions()) == [N] * len(text)


def test_separators_are_ascii_only() -> None:
    assert is_separator(" ")
    assert is_separator(";")
    assert not is_separator("a")
    assert not is_separator("\u00a0")


def test_match_overlay_marks_non_overlapping_hits() -> None:
    row = Row.from_str("a needle b needle")

    row.highlight(HighlightingOptions(), "needle")

    matches = [i for i, kind in enumerate(row.highlighting) if kind is Type.MATCH]
    assert matches == list(range(2, 8)) + list(range(11, 17))


def test_match_overlay_overrides_lexical_classes(
    all_flags: HighlightingOptions,
) -> None:
    row = Row.from_str("let x")

    row.highlight(all_flags, "et")

    assert row.highlighting[:3] == [Type.PRIMARY_KEY, Type.MATCH, Type.MATCH]


def test_match_overlay_is_grapheme_indexed() -> None:
    # The overlay uses grapheme positions on a per-code-point vector.
    row = Row.from_str("\U0001F1E9\U0001F1EAx")

    row.highlight(HighlightingOptions(), "x")

    assert row.highlighting == [N, Type.MATCH, N]


def test_every_type_has_a_colour() -> None:
    assert set(COLORS) == set(Type)
    assert len(COLORS) == 9
    assert Type.NUMBER.fg_sequence() == "\x1b[38;2;220;163;163m"


def test_options_from_mapping_and_key_order() -> None:
    options = HighlightingOptions.from_mapping(
        {"primary_keys": ["if", "else", "if"], "secondary_keys": ["int"]},
        numbers=True,
    )

    assert options.primary_keys == ("if", "else")
    assert options.secondary_keys == ("int",)
    assert options.numbers is True
    assert options.comments is False
    assert options.enabled
    assert not HighlightingOptions().enabled
