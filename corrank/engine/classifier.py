"""CSV format classification.

Decides which supported export shape a parsed grid matches, using only the
header row contents and the shapes of the first two rows.
"""

from __future__ import annotations

import logging
from enum import Enum

from ..parser.grid import Grid

logger = logging.getLogger(__name__)

# Header tokens that identify a long-format export (matched as a set)
LONG_FORMAT_COLUMNS = ("pair1", "pair2", "day")

# A matrix header needs more than this many cells (label + symbols)
MIN_MATRIX_HEADER_CELLS = 5


class CsvFormat(Enum):
    """Supported correlation CSV shapes."""
    LONG = "long"                   # One observation per row
    MATRIX = "matrix"               # Square symbol-by-symbol grid
    UNRECOGNIZED = "unrecognized"


def classify_format(grid: Grid) -> CsvFormat:
    """Classify a parsed grid.

    Args:
        grid: Rows of cells, header first

    Returns:
        CsvFormat.LONG, CsvFormat.MATRIX or CsvFormat.UNRECOGNIZED
    """
    if len(grid) < 2:
        return CsvFormat.UNRECOGNIZED

    header = grid[0]
    tokens = {cell.strip().lower() for cell in header}

    if all(col in tokens for col in LONG_FORMAT_COLUMNS):
        logger.debug("Header contains %s - long format", ", ".join(LONG_FORMAT_COLUMNS))
        return CsvFormat.LONG

    if len(header) > MIN_MATRIX_HEADER_CELLS and len(grid[1]) == len(header):
        logger.debug("Header has %d cells matching row 2 - matrix format", len(header))
        return CsvFormat.MATRIX

    logger.debug(
        "Unrecognized format: header has %d cells, row 2 has %d",
        len(header), len(grid[1])
    )
    return CsvFormat.UNRECOGNIZED


def long_format_columns(header: list[str]) -> dict[str, int]:
    """Locate the long-format columns by name.

    Extra columns (``5min``, ``week``, ...) may be interleaved anywhere, so
    positions are never assumed. The first occurrence of a name wins.

    Returns:
        Mapping of column name to index for each column that was found
    """
    columns: dict[str, int] = {}
    for i, cell in enumerate(header):
        name = cell.strip().lower()
        if name in LONG_FORMAT_COLUMNS and name not in columns:
            columns[name] = i
    return columns
