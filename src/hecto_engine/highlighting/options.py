"""Per-filetype switches that drive the highlighter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

FLAG_NAMES = ("numbers", "strings", "characters", "comments")


def _normalize_keys(keys: Iterable[str]) -> tuple[str, ...]:
    # Order is match priority, so keep the first occurrence of duplicates.
    return tuple(dict.fromkeys(key for key in keys if key))


@dataclass(frozen=True, slots=True)
class HighlightingOptions:
    """Immutable description of which lexical classes are active."""

    numbers: bool = False
    strings: bool = False
    characters: bool = False
    comments: bool = False
    primary_keys: tuple[str, ...] = ()
    secondary_keys: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.primary_keys, str) or isinstance(
            self.secondary_keys, str
        ):
            raise TypeError("keyword lists must be sequences of strings")
        object.__setattr__(self, "primary_keys", _normalize_keys(self.primary_keys))
        object.__setattr__(
            self, "secondary_keys", _normalize_keys(self.secondary_keys)
        )

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], **defaults: bool
    ) -> "HighlightingOptions":
        """Build options from ``{"primary_keys": [...], "secondary_keys": [...]}``.

        Flag keys present in ``data`` win over ``defaults``; absent flags fall
        back to ``defaults`` and then to ``False``.
        """

        unknown = set(defaults) - set(FLAG_NAMES)
        if unknown:
            raise TypeError(f"Unknown highlighting flags: {sorted(unknown)}")
        flags = {
            name: bool(data.get(name, defaults.get(name, False)))
            for name in FLAG_NAMES
        }
        return cls(
            primary_keys=tuple(data.get("primary_keys", ())),
            secondary_keys=tuple(data.get("secondary_keys", ())),
            **flags,
        )

    @property
    def enabled(self) -> bool:
        return any(getattr(self, name) for name in FLAG_NAMES) or bool(
            self.primary_keys or self.secondary_keys
        )


__all__ = ["FLAG_NAMES", "HighlightingOptions"]
