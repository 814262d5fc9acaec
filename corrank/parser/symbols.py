"""Symbol and cell value normalization."""

from __future__ import annotations

import math
import re

# Quote characters and any whitespace (including inner spaces: "EUR USD")
_NOISE_PATTERN = re.compile(r'[\'"\s]+')


def normalize_symbol(raw: str | None) -> str:
    """Canonicalize a raw symbol token.

    Example: ' "eur usd" ' -> 'EURUSD'

    An empty result means the symbol is absent.
    """
    if raw is None:
        return ""
    return _NOISE_PATTERN.sub('', str(raw)).upper().strip()


def parse_percentage(raw: str | None) -> float | None:
    """Parse a correlation cell such as ``92.5``, ``-0.4`` or ``85%``.

    Returns:
        The signed value, or None if the cell is empty, unparsable or
        not finite
    """
    if raw is None:
        return None
    text = str(raw).strip()
    if text.endswith('%'):
        text = text[:-1].strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value
