"""Core classification, extraction and ranking engine."""

from .base_filter import BaseFilter, FilterMode, parse_base_filter
from .classifier import CsvFormat, classify_format
from .extractors import Observation, extract_observations
from .pipeline import RankingOutcome, Status, rank_correlations
from .ranker import Ranker, rank_top_n

__all__ = [
    "BaseFilter",
    "FilterMode",
    "parse_base_filter",
    "CsvFormat",
    "classify_format",
    "Observation",
    "extract_observations",
    "Ranker",
    "rank_top_n",
    "RankingOutcome",
    "Status",
    "rank_correlations",
]
