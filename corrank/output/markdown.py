"""Markdown output formatter for ranking results.

Generates a short markdown report suitable for notes or trading journals.
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path

from ..engine.extractors import Observation
from ..engine.pipeline import RankingOutcome

_MD_SPECIAL = re.compile(r'([\\`*_\{\}\[\]()#+\-.!|])')


def _escape_md(text: str) -> str:
    """Escape markdown special characters in user-derived text."""
    return _MD_SPECIAL.sub(r'\\\1', text)


class MarkdownOutput:
    """Markdown output formatter."""

    def generate(self, outcome: RankingOutcome, source: str | None = None) -> str:
        """Generate full markdown report.

        Args:
            outcome: Ranking outcome
            source: Optional description of where the CSV came from

        Returns:
            Markdown formatted string
        """
        sections = [self._generate_header(outcome, source)]

        if outcome.ok:
            sections.append(self._generate_results(outcome.results))
        else:
            sections.append(self._generate_status(outcome))

        return "\n\n".join(sections) + "\n"

    def save(self, outcome: RankingOutcome, output_path: str | Path, **kwargs) -> None:
        """Save markdown report to file."""
        content = self.generate(outcome, **kwargs)
        Path(output_path).write_text(content, encoding='utf-8')

    def _generate_header(self, outcome: RankingOutcome, source: str | None) -> str:
        lines = [
            "# Correlation Ranking Report",
            "",
            f"**Generated:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            "",
        ]
        if source:
            lines.append(f"- **Source:** {_escape_md(source)}")
        lines.extend([
            f"- **Format:** {outcome.fmt.value if outcome.fmt else 'n/a'}",
            f"- **Base filter:** {_escape_md(outcome.base_filter.describe())}",
            f"- **Observations:** {outcome.observation_count}",
            f"- **Skipped cells:** {outcome.skipped}",
        ])
        return "\n".join(lines)

    def _generate_results(self, results: list[Observation]) -> str:
        lines = [
            f"## Top {len(results)} Correlations",
            "",
            "Ranked by absolute value.",
            "",
            "| # | Pair A | Pair B | Correlation |",
            "|---|--------|--------|-------------|",
        ]
        for rank, obs in enumerate(results, 1):
            lines.append(f"| {rank} | {_escape_md(obs.a)} | {_escape_md(obs.b)} | {obs.corr:g}% |")
        return "\n".join(lines)

    def _generate_status(self, outcome: RankingOutcome) -> str:
        return "\n".join([
            "## No Results",
            "",
            f"> {outcome.message}",
        ])
