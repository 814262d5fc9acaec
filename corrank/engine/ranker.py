"""Correlation ranking engine.

Collapses repeated observations of the same unordered pair and ranks the
survivors by absolute correlation.
"""

from __future__ import annotations

from collections.abc import Iterable

from .extractors import Observation

DEFAULT_TOP_N = 6


class Ranker:
    """Deduplicates and ranks observations by absolute correlation."""

    def __init__(self, top_n: int = DEFAULT_TOP_N):
        """Initialize ranker.

        Args:
            top_n: Maximum number of results to return

        Raises:
            ValueError: If top_n is negative
        """
        if top_n < 0:
            raise ValueError(f"top_n must be >= 0, got {top_n}")
        self.top_n = top_n

    def dedupe(self, observations: Iterable[Observation]) -> list[Observation]:
        """Keep the strongest observation per unordered pair.

        On equal absolute values the earliest observation is kept. The
        returned list preserves the order in which pairs were first seen.
        """
        best: dict[str, Observation] = {}
        for obs in observations:
            prev = best.get(obs.key)
            if prev is None or obs.abs_corr > prev.abs_corr:
                best[obs.key] = obs
        return list(best.values())

    def rank(self, observations: Iterable[Observation]) -> list[Observation]:
        """Rank observations, strongest absolute correlation first.

        Args:
            observations: Observations, possibly repeating pairs

        Returns:
            At most ``top_n`` observations, one per pair, sorted by
            non-increasing absolute value (ties keep insertion order)
        """
        unique = self.dedupe(observations)
        # sorted() is stable, so equal magnitudes keep first-seen order
        ranked = sorted(unique, key=lambda o: o.abs_corr, reverse=True)
        return ranked[:self.top_n]


def rank_top_n(
    observations: Iterable[Observation],
    n: int = DEFAULT_TOP_N
) -> list[Observation]:
    """Convenience function to rank observations and keep the top ``n``."""
    return Ranker(top_n=n).rank(observations)
