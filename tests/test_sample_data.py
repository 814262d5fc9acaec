"""Smoke tests for real-world style sample exports.

Discovers all .csv files in tests/sample_data/ and runs them through the
pipeline, asserting no crash and a ranked result. Also includes specific
assertion tests for each known sample file.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from corrank.engine.classifier import CsvFormat
from corrank.engine.extractors import Observation
from corrank.engine.pipeline import Status, rank_correlations
from corrank.source import read_content


_SAMPLE_DIR = Path(__file__).parent / "sample_data"
_ALL_SAMPLE_FILES = sorted(_SAMPLE_DIR.rglob("*.csv"))


def _file_ids(paths: list[Path]) -> list[str]:
    """Return short relative IDs for parametrize display."""
    base = Path(__file__).parent
    return [str(p.relative_to(base)) for p in paths]


def _rank(name: str, **kwargs):
    return rank_correlations(read_content(str(_SAMPLE_DIR / name)), **kwargs)


# ---------------------------------------------------------------------------
# Parametrized smoke tests
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("sample_path", _ALL_SAMPLE_FILES, ids=_file_ids(_ALL_SAMPLE_FILES))
def test_sample_file_ranks(sample_path: Path) -> None:
    """Every sample file must classify and produce a ranked result."""
    outcome = rank_correlations(read_content(str(sample_path)))

    assert outcome.status == Status.OK
    assert 0 < len(outcome.results) <= 6
    abs_values = [o.abs_corr for o in outcome.results]
    assert abs_values == sorted(abs_values, reverse=True)
    assert len({o.key for o in outcome.results}) == len(outcome.results)


# ---------------------------------------------------------------------------
# Specific sample assertions
# ---------------------------------------------------------------------------

class TestLongSnapshot:
    """long_snapshot.csv: preamble lines, extra columns, bad rows."""

    def test_format_and_counts(self):
        outcome = _rank("long_snapshot.csv")
        assert outcome.fmt == CsvFormat.LONG
        assert outcome.observation_count == 7
        assert outcome.skipped == 3

    def test_ranking(self):
        outcome = _rank("long_snapshot.csv")
        assert outcome.results == [
            Observation("EURUSD", "USDCHF", -95.4),
            Observation("EURUSD", "GBPUSD", 92.1),
            Observation("AUDUSD", "NZDUSD", 89.7),
            Observation("GBPJPY", "EURJPY", 87.5),
            Observation("USDJPY", "EURJPY", 64.2),
            Observation("NZDUSD", "USDCAD", -48.3),
        ]

    def test_currency_base(self):
        outcome = _rank("long_snapshot.csv", base="JPY")
        assert [o.key for o in outcome.results] == ["EURJPY::GBPJPY", "EURJPY::USDJPY"]

    def test_pair_base(self):
        outcome = _rank("long_snapshot.csv", base="eurusd")
        assert [o.corr for o in outcome.results] == [-95.4, 92.1]


class TestMatrixSnapshot:
    """matrix_snapshot.csv: quoted, comma-delimited square matrix."""

    def test_format(self):
        outcome = _rank("matrix_snapshot.csv")
        assert outcome.fmt == CsvFormat.MATRIX
        assert outcome.observation_count == 30
        assert outcome.skipped == 0

    def test_ranking(self):
        outcome = _rank("matrix_snapshot.csv")
        assert [(o.a, o.b, o.corr) for o in outcome.results] == [
            ("AUDUSD", "NZDUSD", 94.6),
            ("EURUSD", "USDCHF", -93.2),
            ("EURUSD", "GBPUSD", 88.4),
            ("GBPUSD", "USDCHF", -81.7),
            ("EURUSD", "AUDUSD", 62.5),
            ("EURUSD", "NZDUSD", 58.1),
        ]


class TestMatrixSemicolon:
    """matrix_semicolon.csv: semicolon delimiter, percent signs, decimal commas."""

    def test_decimal_comma_cells_skipped(self):
        outcome = _rank("matrix_semicolon.csv")
        assert outcome.fmt == CsvFormat.MATRIX
        assert outcome.skipped == 2

    def test_symmetric_cell_fills_in(self):
        """The unparsable EURUSD row cells are covered by their mirror cells."""
        outcome = _rank("matrix_semicolon.csv")
        assert [(o.a, o.b, o.corr) for o in outcome.results] == [
            ("AUDUSD", "NZDUSD", 95.0),
            ("USDCHF", "EURUSD", -93.0),
            ("GBPUSD", "EURUSD", 88.0),
            ("GBPUSD", "USDCHF", -82.0),
            ("EURUSD", "AUDUSD", 62.0),
            ("EURUSD", "NZDUSD", 58.0),
        ]
