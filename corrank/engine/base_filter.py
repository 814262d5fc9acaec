"""Base symbol/currency filter.

Interprets the optional user-supplied base ("NZD", "nzdusd", ...) and tests
observations against it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from ..parser.symbols import normalize_symbol

_CURRENCY_PATTERN = re.compile(r'^[A-Z]{3}$')
_PAIR_PATTERN = re.compile(r'^[A-Z]{6}$')
# Looser fallback: six or more leading letters, first six kept
_LOOSE_PAIR_PATTERN = re.compile(r'^([A-Z]{6})[A-Z]*$')


class FilterMode(Enum):
    """How a base filter restricts observations."""
    NONE = "none"
    CURRENCY = "currency"   # 3-letter code, prefix/suffix of either pair
    PAIR = "pair"           # 6-letter code, equal to either pair
    INVALID = "invalid"     # Rejected before extraction


@dataclass(frozen=True)
class BaseFilter:
    """A parsed base filter, fixed for the lifetime of one ranking request."""
    mode: FilterMode = FilterMode.NONE
    value: str = ""

    @classmethod
    def none(cls) -> BaseFilter:
        return cls(FilterMode.NONE, "")

    @classmethod
    def currency(cls, code: str) -> BaseFilter:
        return cls(FilterMode.CURRENCY, code)

    @classmethod
    def pair(cls, code: str) -> BaseFilter:
        return cls(FilterMode.PAIR, code)

    @classmethod
    def invalid(cls, raw: str) -> BaseFilter:
        return cls(FilterMode.INVALID, raw)

    @property
    def is_active(self) -> bool:
        """True when the filter actually restricts results."""
        return self.mode in (FilterMode.CURRENCY, FilterMode.PAIR)

    @property
    def is_valid(self) -> bool:
        return self.mode != FilterMode.INVALID

    def matches(self, a: str, b: str) -> bool:
        """Test whether the observation ``(a, b)`` passes the filter.

        Raises:
            ValueError: If the filter is invalid; such requests are rejected
                before extraction
        """
        if self.mode == FilterMode.NONE:
            return True
        if self.mode == FilterMode.PAIR:
            return a == self.value or b == self.value
        if self.mode == FilterMode.CURRENCY:
            code = self.value
            return (
                a.startswith(code) or a.endswith(code) or
                b.startswith(code) or b.endswith(code)
            )
        raise ValueError(f"Cannot apply invalid base filter {self.value!r}")

    def describe(self) -> str:
        """Short human-readable form, e.g. ``currency NZD``."""
        if self.mode == FilterMode.NONE:
            return "none"
        return f"{self.mode.value} {self.value}"


def parse_base_filter(raw: str | None) -> BaseFilter:
    """Classify user base input into a filter.

    Examples:
        'nzd'    -> currency NZD
        'nzdusd' -> pair NZDUSD
        'nz'     -> invalid NZ
        ''       -> none
    """
    value = normalize_symbol(raw)

    if not value:
        return BaseFilter.none()
    if _CURRENCY_PATTERN.match(value):
        return BaseFilter.currency(value)
    if _PAIR_PATTERN.match(value):
        return BaseFilter.pair(value)

    loose = _LOOSE_PAIR_PATTERN.match(value)
    if loose:
        return BaseFilter.pair(loose.group(1))

    return BaseFilter.invalid(value)
