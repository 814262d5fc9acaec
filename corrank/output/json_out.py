"""JSON output formatter for ranking results.

Generates structured JSON for programmatic use.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from .. import __version__
from ..engine.extractors import Observation
from ..engine.pipeline import RankingOutcome


class JSONOutput:
    """JSON output formatter."""

    def generate(self, outcome: RankingOutcome, source: str | None = None) -> dict:
        """Generate JSON-serializable dictionary.

        Args:
            outcome: Ranking outcome
            source: Optional description of where the CSV came from

        Returns:
            Dictionary ready for JSON serialization
        """
        base = outcome.base_filter
        result: dict[str, Any] = {
            "metadata": {
                "generated_at": datetime.now().isoformat(),
                "tool": "corrank",
                "version": __version__,
            },
            "request": {
                "source": source,
                "format": outcome.fmt.value if outcome.fmt else None,
                "base_filter": {"mode": base.mode.value, "value": base.value},
                "top_n": outcome.top_n,
            },
            "status": outcome.status.value,
            "message": outcome.message,
            "summary": {
                "observations": outcome.observation_count,
                "skipped": outcome.skipped,
                "returned": len(outcome.results),
            },
            "results": [
                self._observation_to_dict(obs, rank)
                for rank, obs in enumerate(outcome.results, 1)
            ],
        }
        return result

    def to_json(self, outcome: RankingOutcome, indent: int = 2, **kwargs) -> str:
        """Generate JSON string."""
        data = self.generate(outcome, **kwargs)
        return json.dumps(data, indent=indent, default=str)

    def save(self, outcome: RankingOutcome, output_path: str | Path, **kwargs) -> None:
        """Save JSON report to file."""
        content = self.to_json(outcome, **kwargs)
        Path(output_path).write_text(content, encoding='utf-8')

    def _observation_to_dict(self, obs: Observation, rank: int) -> dict:
        return {
            "rank": rank,
            "a": obs.a,
            "b": obs.b,
            "corr": obs.corr,
            "abs": obs.abs_corr,
        }
