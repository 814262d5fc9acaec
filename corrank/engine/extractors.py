"""Correlation observation extractors.

One extractor per supported CSV shape, selected by the classifier's tag.
Both emit the same unordered pair more than once when the source repeats it
(symmetric matrix cells, duplicate rows); deduplication is the ranker's job.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..parser.grid import Grid
from ..parser.symbols import normalize_symbol, parse_percentage
from .base_filter import BaseFilter
from .classifier import CsvFormat, long_format_columns

logger = logging.getLogger(__name__)

# Joins the sorted symbols of a pair; never occurs inside a symbol
KEY_SEPARATOR = "::"


@dataclass(frozen=True)
class Observation:
    """One correlation value (percent, signed) for an unordered symbol pair."""
    a: str
    b: str
    corr: float

    @property
    def abs_corr(self) -> float:
        return abs(self.corr)

    @property
    def key(self) -> str:
        """Identity of the unordered pair: ``(A, B)`` and ``(B, A)`` share it."""
        return KEY_SEPARATOR.join(sorted((self.a, self.b)))


def _cell(row: list[str], index: int) -> str:
    """Return the cell at index, or '' when the row is too short."""
    if 0 <= index < len(row):
        return row[index]
    return ""


class Extractor:
    """Walks a classified grid and emits observations."""

    fmt: CsvFormat = CsvFormat.UNRECOGNIZED

    def __init__(self):
        self.skipped = 0

    def extract(self, grid: Grid, base_filter: BaseFilter) -> list[Observation]:
        """Extract observations passing the base filter.

        Args:
            grid: Parsed grid, header row first
            base_filter: Valid base filter for this request

        Returns:
            Observations in source order
        """
        raise NotImplementedError

    def _skip(self, reason: str, *args) -> None:
        self.skipped += 1
        logger.debug("Skipped " + reason, *args)


class LongFormatExtractor(Extractor):
    """Extractor for ``pair1,pair2,...,day,...`` exports."""

    fmt = CsvFormat.LONG

    def extract(self, grid: Grid, base_filter: BaseFilter) -> list[Observation]:
        self.skipped = 0
        if not grid:
            return []

        columns = long_format_columns(grid[0])
        if len(columns) < 3:
            logger.debug("Long-format header is missing columns: %s", grid[0])
            return []

        pair1_idx = columns["pair1"]
        pair2_idx = columns["pair2"]
        day_idx = columns["day"]

        observations = []
        for line_no, row in enumerate(grid[1:], 2):
            a = normalize_symbol(_cell(row, pair1_idx))
            b = normalize_symbol(_cell(row, pair2_idx))
            if not a or not b or a == b:
                self._skip("row %d: missing or self-referential pair", line_no)
                continue

            if not base_filter.matches(a, b):
                continue

            corr = parse_percentage(_cell(row, day_idx))
            if corr is None:
                self._skip("row %d: unparsable day value %r", line_no, _cell(row, day_idx))
                continue

            observations.append(Observation(a, b, corr))

        return observations


class MatrixFormatExtractor(Extractor):
    """Extractor for square symbol-by-symbol correlation grids.

    The header's first cell is a label; the remaining header cells name the
    columns and the first cell of each data row names the row.
    """

    fmt = CsvFormat.MATRIX

    def extract(self, grid: Grid, base_filter: BaseFilter) -> list[Observation]:
        self.skipped = 0
        if not grid:
            return []

        col_symbols = [normalize_symbol(cell) for cell in grid[0][1:]]

        observations = []
        for line_no, row in enumerate(grid[1:], 2):
            if not row:
                continue
            row_symbol = normalize_symbol(row[0])

            for j in range(1, len(row)):
                col_symbol = _cell(col_symbols, j - 1)
                if not row_symbol or not col_symbol or row_symbol == col_symbol:
                    continue

                # The predicate is symmetric in (row, col)
                if not base_filter.matches(row_symbol, col_symbol):
                    continue

                corr = parse_percentage(row[j])
                if corr is None:
                    self._skip("row %d col %d: unparsable value %r", line_no, j, row[j])
                    continue

                observations.append(Observation(row_symbol, col_symbol, corr))

        return observations


EXTRACTORS: dict[CsvFormat, type[Extractor]] = {
    CsvFormat.LONG: LongFormatExtractor,
    CsvFormat.MATRIX: MatrixFormatExtractor,
}


def get_extractor(fmt: CsvFormat) -> Extractor:
    """Instantiate the extractor for a classified format.

    Raises:
        ValueError: If the format is not supported
    """
    try:
        return EXTRACTORS[fmt]()
    except KeyError:
        raise ValueError(f"No extractor for format: {fmt.value}") from None


def extract_observations(
    grid: Grid,
    fmt: CsvFormat,
    base_filter: BaseFilter
) -> list[Observation]:
    """Extract observations from a grid using the extractor for its format.

    Raises:
        ValueError: If the format is unrecognized or the filter is invalid
    """
    if not base_filter.is_valid:
        raise ValueError(f"Invalid base filter: {base_filter.value!r}")
    return get_extractor(fmt).extract(grid, base_filter)
