"""Single-pass lexical classifier used by rows.

Rules are tried in a fixed order at each position and the first rule that
claims it wins: comment, character literal, string literal, number, primary
keyword, secondary keyword. Unclaimed positions are ``Type.NONE``.

Comments are checked before strings, so ``"// x"`` classifies as a comment
from the first slash onward even though it sits inside a string literal.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .options import HighlightingOptions
from .types import Type

SEPARATORS = frozenset(string.punctuation + " \t\n\r\x0c")


def is_separator(ch: str) -> bool:
    return ch in SEPARATORS


@dataclass(slots=True)
class Classification:
    highlighting: List[Type]
    # True when the pass ended inside an unterminated string literal.
    open_string: bool = False


def classify(text: str, options: HighlightingOptions) -> Classification:
    """Return one ``Type`` per character (code point) of ``text``."""

    size = len(text)
    highlighting: List[Type] = []
    in_string = False
    i = 0

    while i < size:
        ch = text[i]

        if options.comments and ch == "/" and text[i + 1 : i + 2] == "/":
            highlighting.extend([Type.COMMENT] * (size - i))
            break

        if in_string:
            if ch == "\\" and i + 1 < size:
                highlighting.extend((Type.ESCAPE, Type.ESCAPE))
                i += 2
                continue
            highlighting.append(Type.STRING)
            in_string = ch != '"'
            i += 1
            continue

        if options.characters and ch == "'":
            end = _character_literal_end(text, i)
            if end is not None:
                highlighting.extend([Type.CHARACTER] * (end - i + 1))
                i = end + 1
                continue

        if options.strings and ch == '"':
            highlighting.append(Type.STRING)
            in_string = True
            i += 1
            continue

        if options.numbers and _is_number_part(text, i, highlighting):
            highlighting.append(Type.NUMBER)
            i += 1
            continue

        matched = _match_keyword(text, i, options)
        if matched is not None:
            keyword, kind = matched
            highlighting.extend([kind] * len(keyword))
            i += len(keyword)
            continue

        highlighting.append(Type.NONE)
        i += 1

    return Classification(highlighting=highlighting, open_string=in_string)


def _character_literal_end(chars: str, start: int) -> Optional[int]:
    if start + 1 >= len(chars):
        return None
    closing = start + 3 if chars[start + 1] == "\\" else start + 2
    if closing < len(chars) and chars[closing] == "'":
        return closing
    return None


def _is_number_part(chars: str, i: int, highlighting: Sequence[Type]) -> bool:
    ch = chars[i]
    prev_type = highlighting[i - 1] if i > 0 else Type.NONE
    if ch.isascii() and ch.isdigit():
        at_token_start = i == 0 or is_separator(chars[i - 1])
        return at_token_start or prev_type is Type.NUMBER
    if ch == ".":
        prev = chars[i - 1] if i > 0 else ""
        return prev_type is Type.NUMBER and prev.isascii() and prev.isdigit()
    return False


def _match_keyword(
    chars: str, i: int, options: HighlightingOptions
) -> Optional[tuple[str, Type]]:
    if i > 0 and not is_separator(chars[i - 1]):
        return None
    tiers = (
        (options.primary_keys, Type.PRIMARY_KEY),
        (options.secondary_keys, Type.SECONDARY_KEY),
    )
    for keywords, kind in tiers:
        for keyword in keywords:
            end = i + len(keyword)
            if chars[i:end] != keyword:
                continue
            if end < len(chars) and not is_separator(chars[end]):
                continue
            return keyword, kind
    return None


def overlay_matches(
    highlighting: List[Type], starts: Iterable[int], width: int
) -> None:
    """Overwrite ``width`` entries from each start with ``Type.MATCH``."""

    for start in starts:
        stop = min(start + width, len(highlighting))
        for index in range(start, stop):
            highlighting[index] = Type.MATCH


__all__ = [
    "Classification",
    "SEPARATORS",
    "classify",
    "is_separator",
    "overlay_matches",
]
