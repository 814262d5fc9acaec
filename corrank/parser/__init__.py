"""Parsers for correlation CSV exports."""

from .grid import ParsedGrid, parse_grid, parse_grid_detailed
from .symbols import normalize_symbol, parse_percentage

__all__ = [
    "ParsedGrid",
    "parse_grid",
    "parse_grid_detailed",
    "normalize_symbol",
    "parse_percentage",
]
