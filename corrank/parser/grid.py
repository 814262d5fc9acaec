"""CSV row parser.

Turns raw correlation CSV text into a grid of string cells, detecting the
delimiter and locating the true header line. Two export shapes are expected:

* long format - a ``pair1,pair2,...,day,...`` header, possibly preceded by
  free-text preamble lines (titles, timestamps) that must be discarded
* matrix format - the first line is a header of column symbols
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

Grid = list[list[str]]

# Any newline style: CRLF, bare CR, LF
_NEWLINE_PATTERN = re.compile(r'\r\n|\r|\n')

# Lowercased prefixes that identify a long-format header line
_LONG_HEADER_PREFIXES = ("pair1,", "pair1;")

_BOM = "\ufeff"


@dataclass
class ParsedGrid:
    """Grid of cells plus how it was located in the raw text."""
    rows: Grid = field(default_factory=list)
    delimiter: str = ","
    header_index: int = 0       # Index of the header among non-blank lines

    @property
    def is_empty(self) -> bool:
        return not self.rows


def detect_delimiter(line: str) -> str:
    """Pick ``;`` only when it strictly outnumbers ``,`` in the line."""
    if line.count(';') > line.count(','):
        return ';'
    return ','


def split_lines(text: str) -> list[str]:
    """Split text on any newline style, trim each line and drop blanks."""
    lines = _NEWLINE_PATTERN.split(text.strip())
    return [line.strip() for line in lines if line.strip()]


def find_long_header(lines: list[str]) -> int | None:
    """Return the index of the first ``pair1`` header line, if any."""
    for i, line in enumerate(lines):
        if line.lower().startswith(_LONG_HEADER_PREFIXES):
            return i
    return None


def split_cells(line: str, delimiter: str) -> list[str]:
    """Split a line into cells, unquoting and trimming each one."""
    return [_clean_cell(cell) for cell in line.split(delimiter)]


def _clean_cell(cell: str) -> str:
    if cell.startswith('"'):
        cell = cell[1:]
    if cell.endswith('"'):
        cell = cell[:-1]
    return cell.strip()


def parse_grid_detailed(text: str | None) -> ParsedGrid:
    """Parse raw CSV text and report where the header was found.

    Args:
        text: Raw CSV content

    Returns:
        ParsedGrid; its ``rows`` are empty when the text is blank
    """
    # Text from stdin or HTTP still carries the byte-order mark
    if text and text.startswith(_BOM):
        text = text[1:]

    if not text or not text.strip():
        return ParsedGrid()

    lines = split_lines(text)

    header_index = find_long_header(lines)
    if header_index is None:
        # Matrix candidate: the very first line is the header
        header_index = 0

    retained = lines[header_index:]
    delimiter = detect_delimiter(retained[0])

    return ParsedGrid(
        rows=[split_cells(line, delimiter) for line in retained],
        delimiter=delimiter,
        header_index=header_index,
    )


def parse_grid(text: str | None) -> Grid:
    """Parse raw CSV text into a grid of cells.

    Rows shorter than the header are kept as they are; consumers index
    defensively. Blank input yields an empty grid rather than an error.
    """
    return parse_grid_detailed(text).rows
