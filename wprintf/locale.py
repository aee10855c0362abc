"""Locale rules consulted by locale-sensitive conversion directives."""

from __future__ import annotations

from typing import Any, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

# Value localeconv() uses in a grouping list to stop further grouping.
CHAR_MAX = 127


class Locale(BaseModel):
    """Immutable bundle of numeric rendering rules."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = "C"
    decimal_point: str = "."
    thousands_sep: str = ""
    grouping: Tuple[int, ...] = ()
    group_repeat: bool = True

    @field_validator("decimal_point")
    @classmethod
    def check_decimal_point(cls, value: str) -> str:
        if not value:
            raise ValueError("decimal_point cannot be empty")
        return value

    @field_validator("grouping")
    @classmethod
    def check_grouping(cls, value: Tuple[int, ...]) -> Tuple[int, ...]:
        if any(size <= 0 for size in value):
            raise ValueError("grouping sizes must be positive")
        return value

    @classmethod
    def from_localeconv(cls, conv: Mapping[str, Any], name: str = "native") -> "Locale":
        """Build a locale from a mapping shaped like ``locale.localeconv()``."""
        sizes: list[int] = []
        # A trailing 0, or no terminator at all, repeats the last size.
        repeat = True
        for size in conv.get("grouping", ()):
            if size == 0:
                break
            if size >= CHAR_MAX:
                repeat = False
                break
            sizes.append(int(size))
        return cls(
            name=name,
            decimal_point=conv.get("decimal_point") or ".",
            thousands_sep=conv.get("thousands_sep") or "",
            grouping=tuple(sizes),
            group_repeat=repeat,
        )

    def apply_grouping(self, digits: str) -> str:
        """Insert the thousands separator between digit groups, right to left."""
        if not self.grouping or not self.thousands_sep:
            return digits
        groups: list[str] = []
        end = len(digits)
        sizes = iter(self.grouping)
        size = next(sizes)
        while end > 0:
            start = max(0, end - size)
            groups.append(digits[start:end])
            end = start
            following = next(sizes, None)
            if following is not None:
                size = following
            elif not self.group_repeat:
                if end > 0:
                    groups.append(digits[:end])
                break
        return self.thousands_sep.join(reversed(groups))


C_LOCALE = Locale()
