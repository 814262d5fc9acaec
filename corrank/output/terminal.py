"""Rich terminal output for ranking results.

Provides formatted, color-coded terminal output using the Rich library.
Theme: Catppuccin Mocha (https://catppuccin.com/palette/)
"""

from __future__ import annotations

from rich.align import Align
from rich.box import ROUNDED
from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from .. import __version__
from ..engine.extractors import Observation
from ..engine.pipeline import RankingOutcome, Status

# Catppuccin Mocha palette (subset in use)
MOCHA = {
    "mauve": "#cba6f7",
    "red": "#f38ba8",
    "maroon": "#eba0ac",
    "peach": "#fab387",
    "yellow": "#f9e2af",
    "green": "#a6e3a1",
    "teal": "#94e2d5",
    "sapphire": "#74c7ec",
    "blue": "#89b4fa",
    "lavender": "#b4befe",
    "text": "#cdd6f4",
    "subtext0": "#a6adc8",
    "overlay1": "#7f849c",
    "overlay0": "#6c7086",
    "surface2": "#585b70",
    "surface1": "#45475a",
    "surface0": "#313244",
    "crust": "#11111b",
}

# Rich theme for markup tags
MOCHA_THEME = Theme({
    "info": MOCHA["sapphire"],
    "warning": MOCHA["peach"],
    "danger": MOCHA["red"],
    "success": MOCHA["green"],
})

# Border color of the status panel for each non-OK outcome
STATUS_COLORS = {
    Status.EMPTY_INPUT: MOCHA["overlay1"],
    Status.NO_RESULTS: MOCHA["yellow"],
    Status.NO_MATCHES_FOR_BASE: MOCHA["yellow"],
    Status.UNRECOGNIZED_FORMAT: MOCHA["red"],
    Status.INVALID_BASE: MOCHA["red"],
}


# ── Badge / display helpers ──────────────────────────────────────────────


def _strength_color(abs_corr: float) -> str:
    if abs_corr >= 80:
        return MOCHA["green"]
    if abs_corr >= 60:
        return MOCHA["yellow"]
    if abs_corr >= 40:
        return MOCHA["peach"]
    return MOCHA["red"]


def _corr_badge(corr: float) -> Text:
    """Render a correlation as a compact colored pill: e.g. `` +92.0% ``."""
    color = _strength_color(abs(corr))
    badge = Text()
    badge.append(f" {corr:+.1f}% ", style=f"bold {MOCHA['crust']} on {color}")
    return badge


def _strength_bar(abs_corr: float, width: int = 20) -> Text:
    """Build a bar for an absolute correlation (0-100).

    Returns a Rich Text object like: ████████████████░░░░
    """
    filled = int(round(min(abs_corr, 100) / 100 * width))
    bar = Text()
    bar.append("█" * filled, style=_strength_color(abs_corr))
    bar.append("░" * (width - filled), style=MOCHA["surface2"])
    return bar


def _direction(corr: float) -> Text:
    if corr >= 0:
        return Text("positive", style=MOCHA["teal"])
    return Text("negative", style=MOCHA["maroon"])


# ── Main output class ────────────────────────────────────────────────────


class TerminalOutput:
    """Rich terminal output formatter."""

    def __init__(
        self,
        console: Console | None = None,
        no_color: bool = False,
    ):
        """Initialize terminal output.

        Args:
            console: Optional Rich console instance
            no_color: If True, disable colored output
        """
        if console:
            self.console = console
        elif no_color:
            self.console = Console(no_color=True, highlight=False)
        else:
            self.console = Console(theme=MOCHA_THEME)

    def print_header(self, outcome: RankingOutcome, source: str | None = None) -> None:
        """Print the banner and request summary.

        Args:
            outcome: Ranking outcome
            source: Optional description of where the CSV came from
        """
        self.console.print()
        self.console.print(
            Panel(
                Align.center(
                    Text(
                        "CORRANK - Strongest Pairwise Correlations",
                        style=f"bold {MOCHA['mauve']}",
                    )
                ),
                box=ROUNDED,
                border_style=MOCHA["mauve"],
                padding=(0, 1),
            )
        )

        summary = Text()
        if source:
            summary.append("Source: ", style=MOCHA["subtext0"])
            summary.append(source, style=MOCHA["text"])
            summary.append("  ")
        summary.append("Format: ", style=MOCHA["subtext0"])
        fmt = outcome.fmt.value if outcome.fmt else "-"
        summary.append(f" {fmt.upper()} ", style=f"bold {MOCHA['lavender']}")
        summary.append("  Base: ", style=MOCHA["subtext0"])
        summary.append(outcome.base_filter.describe(), style=MOCHA["text"])

        if outcome.observation_count or outcome.skipped:
            summary.append(" | ", style=MOCHA["surface2"])
            summary.append(f"{outcome.observation_count} observations", style=MOCHA["text"])
            summary.append(" | ", style=MOCHA["surface2"])
            summary.append(f"{outcome.skipped} skipped", style=MOCHA["overlay1"])

        self.console.print(summary)
        self.console.print()

    def print_results(self, results: list[Observation]) -> None:
        """Print ranked observations in a bordered table."""
        table = Table(
            box=ROUNDED,
            border_style=MOCHA["surface1"],
            header_style=f"bold {MOCHA['blue']}",
            title=(
                f"[bold {MOCHA['yellow']}]"
                f"TOP {len(results)} - RANKED BY ABSOLUTE VALUE"
                f"[/bold {MOCHA['yellow']}]"
            ),
            title_justify="left",
        )
        table.add_column("#", justify="right", style=MOCHA["overlay1"])
        table.add_column("Pair", style=f"bold {MOCHA['text']}")
        table.add_column("Correlation", justify="right")
        table.add_column("Direction")
        table.add_column("Strength")

        for rank, obs in enumerate(results, 1):
            table.add_row(
                str(rank),
                f"{obs.a} ↔ {obs.b}",
                _corr_badge(obs.corr),
                _direction(obs.corr),
                _strength_bar(obs.abs_corr),
            )

        self.console.print(table)
        self.console.print()

    def print_status(self, outcome: RankingOutcome) -> None:
        """Print the status message for outcomes without results."""
        color = STATUS_COLORS.get(outcome.status, MOCHA["overlay1"])
        self.console.print(
            Panel(
                Text(outcome.message, style=MOCHA["text"]),
                title=f"[bold {color}]{outcome.status.value.upper().replace('_', ' ')}[/bold {color}]",
                title_align="left",
                box=ROUNDED,
                border_style=color,
                padding=(0, 1),
            )
        )
        self.console.print()

    def print_footer(self) -> None:
        self.console.print(Rule(style=MOCHA["surface2"]))
        self.console.print(
            Align.center(Text(f"corrank v{__version__}", style=MOCHA["overlay0"]))
        )

    def render(self, outcome: RankingOutcome, source: str | None = None) -> None:
        """Print a full report for an outcome."""
        self.print_header(outcome, source=source)
        if outcome.ok:
            self.print_results(outcome.results)
            self.console.print(Text(outcome.message, style=MOCHA["subtext0"]))
        else:
            self.print_status(outcome)
        self.print_footer()


def print_results(
    outcome: RankingOutcome,
    console: Console | None = None,
    no_color: bool = False
) -> None:
    """Convenience function to print an outcome to the terminal."""
    TerminalOutput(console=console, no_color=no_color).render(outcome)
