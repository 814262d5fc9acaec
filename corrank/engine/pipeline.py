"""Ranking request pipeline.

Runs one request end to end: parse -> classify -> base filter -> extract ->
rank. Data problems never raise; they end the request with a status that
the caller shows to the user.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from ..parser.grid import parse_grid_detailed
from .base_filter import BaseFilter, parse_base_filter
from .classifier import CsvFormat, classify_format
from .extractors import Observation, get_extractor
from .ranker import DEFAULT_TOP_N, Ranker

logger = logging.getLogger(__name__)


class Status(Enum):
    """Outcome of a ranking request."""
    OK = "ok"
    EMPTY_INPUT = "empty_input"                     # Nothing to do
    UNRECOGNIZED_FORMAT = "unrecognized_format"     # Halts before ranking
    INVALID_BASE = "invalid_base"                   # Halts before extraction
    NO_MATCHES_FOR_BASE = "no_matches_for_base"
    NO_RESULTS = "no_results"


# Statuses that reject the request rather than merely returning nothing
ERROR_STATUSES = frozenset({Status.UNRECOGNIZED_FORMAT, Status.INVALID_BASE})


@dataclass
class RankingOutcome:
    """Result of a ranking request plus what happened along the way."""
    status: Status
    results: list[Observation] = field(default_factory=list)
    fmt: CsvFormat | None = None
    base_filter: BaseFilter = field(default_factory=BaseFilter.none)
    observation_count: int = 0   # Observations extracted, before dedupe
    skipped: int = 0             # Rows/cells skipped as unparsable
    top_n: int = DEFAULT_TOP_N

    @property
    def ok(self) -> bool:
        return self.status == Status.OK

    @property
    def is_error(self) -> bool:
        return self.status in ERROR_STATUSES

    @property
    def message(self) -> str:
        """User-facing status text."""
        if self.status == Status.OK:
            return f"Showing top {len(self.results)} strongest correlations (ranked by absolute value)."
        if self.status == Status.EMPTY_INPUT:
            return "Nothing to do: the CSV is empty."
        if self.status == Status.UNRECOGNIZED_FORMAT:
            return (
                "Unrecognized CSV format. Expected a long export with "
                "pair1, pair2 and day columns, or a square correlation matrix "
                "with symbols as row and column headers."
            )
        if self.status == Status.INVALID_BASE:
            return (
                f"Invalid base '{self.base_filter.value}'. Use a 3-letter "
                "currency (e.g. NZD) or a 6-letter pair (e.g. NZDUSD)."
            )
        if self.status == Status.NO_MATCHES_FOR_BASE:
            return f"No correlations found involving {self.base_filter.value}."
        return "No results. The CSV contained no usable correlation values."


def rank_correlations(
    text: str | None,
    base: str | None = "",
    top_n: int = DEFAULT_TOP_N
) -> RankingOutcome:
    """Rank the strongest pairwise correlations in raw CSV text.

    Args:
        text: Raw CSV content (long or matrix format)
        base: Optional base currency ("NZD") or pair ("NZDUSD")
        top_n: Maximum number of results

    Returns:
        RankingOutcome; ``results`` is empty unless status is OK

    Raises:
        ValueError: If top_n is negative
    """
    ranker = Ranker(top_n=top_n)
    parsed = parse_grid_detailed(text)
    base_filter = parse_base_filter(base)

    if parsed.is_empty:
        return RankingOutcome(Status.EMPTY_INPUT, base_filter=base_filter, top_n=top_n)

    logger.debug(
        "Parsed %d rows (delimiter %r, header at line %d)",
        len(parsed.rows), parsed.delimiter, parsed.header_index + 1
    )

    if not base_filter.is_valid:
        logger.debug("Rejected base %r", base_filter.value)
        return RankingOutcome(Status.INVALID_BASE, base_filter=base_filter, top_n=top_n)

    fmt = classify_format(parsed.rows)
    if fmt == CsvFormat.UNRECOGNIZED:
        return RankingOutcome(
            Status.UNRECOGNIZED_FORMAT, fmt=fmt, base_filter=base_filter, top_n=top_n
        )

    extractor = get_extractor(fmt)
    observations = extractor.extract(parsed.rows, base_filter)
    results = ranker.rank(observations)

    logger.debug(
        "Extracted %d observations from %s format (%d skipped), kept %d",
        len(observations), fmt.value, extractor.skipped, len(results)
    )

    if results:
        status = Status.OK
    elif base_filter.is_active:
        status = Status.NO_MATCHES_FOR_BASE
    else:
        status = Status.NO_RESULTS

    return RankingOutcome(
        status=status,
        results=results,
        fmt=fmt,
        base_filter=base_filter,
        observation_count=len(observations),
        skipped=extractor.skipped,
        top_n=top_n,
    )
