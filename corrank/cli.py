"""corrank CLI - Correlation Ranking Engine.

Main command-line interface for ranking correlation CSV exports.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .engine.pipeline import RankingOutcome, rank_correlations
from .engine.ranker import DEFAULT_TOP_N
from .parser.symbols import normalize_symbol
from .source import (
    DEFAULT_PERIODS,
    DEFAULT_SYMBOLS,
    build_csv_url,
    fetch_text,
    is_correlation_page_link,
    read_content,
)

# Exit code for requests rejected because of the file or the base
EXIT_REJECTED = 2


def parse_symbols(symbols_str: str) -> list[str]:
    """Parse a comma-separated symbol list (e.g. 'eurusd, GBPUSD').

    Raises:
        argparse.ArgumentTypeError: If the list is empty or a symbol is not
            six letters
    """
    result = []
    for raw in symbols_str.split(','):
        symbol = normalize_symbol(raw)
        if not symbol:
            continue
        if len(symbol) != 6 or not symbol.isalpha():
            raise argparse.ArgumentTypeError(
                f"Invalid symbol '{raw.strip()}'. Symbols are 6-letter pair codes like EURUSD"
            )
        result.append(symbol)
    if not result:
        raise argparse.ArgumentTypeError("At least one symbol is required")
    return result


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def load_csv(parsed_args: argparse.Namespace) -> tuple[str, str]:
    """Load CSV text from the source selected on the command line.

    Returns:
        Tuple of (csv text, source description)
    """
    if parsed_args.url or parsed_args.fetch or parsed_args.link:
        url = parsed_args.url
        if url is None:
            url = build_csv_url(parsed_args.symbols, parsed_args.periods)
        if parsed_args.verbose:
            mode = "proxy" if parsed_args.proxy else "direct"
            print(f"Fetching CSV snapshot ({mode}): {url}", file=sys.stderr)
        return fetch_text(url, use_proxy=parsed_args.proxy), url

    input_arg = parsed_args.input
    source = 'stdin' if input_arg == '-' else input_arg
    if parsed_args.verbose:
        print(f"Reading input: {source}", file=sys.stderr)
    return read_content(input_arg), source


def render(outcome: RankingOutcome, parsed_args: argparse.Namespace, source: str) -> None:
    """Write the outcome in the requested format."""
    if parsed_args.format == 'terminal':
        from .output.terminal import TerminalOutput

        TerminalOutput(no_color=parsed_args.no_color).render(outcome, source=source)
        return

    if parsed_args.format == 'markdown':
        from .output.markdown import MarkdownOutput

        content = MarkdownOutput().generate(outcome, source=source)
    else:
        from .output.json_out import JSONOutput

        content = JSONOutput().to_json(outcome, source=source)

    if parsed_args.output:
        parsed_args.output.write_text(content, encoding='utf-8')
        print(f"Report saved to: {parsed_args.output}", file=sys.stderr)
    else:
        print(content)


def main(args: list[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog='corrank',
        description='Correlation Ranking Engine - Rank the strongest pairwise correlations in a CSV export',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  corrank correlation.csv
  corrank -                                       # read from stdin
  cat correlation.csv | corrank                   # pipe input
  corrank correlation.csv --base nzd --top 10
  corrank correlation.csv --base eurusd --format json
  corrank --fetch --proxy
  corrank --link https://www.mataf.net/en/forex/tools/correlation
        """
    )

    parser.add_argument(
        'input',
        nargs='?',
        help='Input CSV path, or "-" to read from stdin (omit when piping or fetching)'
    )

    source_group = parser.add_mutually_exclusive_group()
    source_group.add_argument(
        '--fetch',
        action='store_true',
        help='Fetch the daily correlation snapshot for --symbols instead of reading a file'
    )
    source_group.add_argument(
        '--url',
        metavar='URL',
        help='Fetch the CSV from this URL'
    )
    source_group.add_argument(
        '--link',
        metavar='PAGE_LINK',
        help='Correlation page link; validated, then the daily snapshot is fetched'
    )

    parser.add_argument(
        '--proxy',
        action='store_true',
        help='Fetch through the raw CORS proxy (use when direct access is blocked)'
    )

    parser.add_argument(
        '--symbols',
        metavar='SYM[,SYM...]',
        type=parse_symbols,
        default=list(DEFAULT_SYMBOLS),
        help='Symbol basket for --fetch/--link (default: 28 major forex pairs)'
    )

    parser.add_argument(
        '--periods',
        type=_positive_int,
        default=DEFAULT_PERIODS,
        help=f'Number of periods of the snapshot (default: {DEFAULT_PERIODS})'
    )

    parser.add_argument(
        '-b', '--base',
        default='',
        metavar='BASE',
        help='Only show pairs involving this currency (e.g. NZD) or pair (e.g. NZDUSD)'
    )

    parser.add_argument(
        '-n', '--top',
        type=_positive_int,
        default=DEFAULT_TOP_N,
        help=f'Number of results to show (default: {DEFAULT_TOP_N})'
    )

    parser.add_argument(
        '-f', '--format',
        choices=['terminal', 'markdown', 'json'],
        default='terminal',
        help='Output format (default: terminal)'
    )

    parser.add_argument(
        '-o', '--output',
        type=Path,
        help='Output file; requires --format markdown or json (default: stdout)'
    )

    parser.add_argument(
        '--no-color',
        action='store_true',
        help='Disable colored output (terminal only)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parsed_args = parser.parse_args(args)

    if parsed_args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    if parsed_args.output and parsed_args.format == 'terminal':
        parser.error('--output requires --format markdown or json')

    fetching = parsed_args.fetch or parsed_args.url or parsed_args.link

    if fetching and parsed_args.input is not None:
        parser.error('an input file cannot be combined with --fetch, --url or --link')

    if parsed_args.link and not is_correlation_page_link(parsed_args.link):
        print(
            "Error: That link doesn't look like the Mataf correlation page. "
            "Paste the correlation page link.",
            file=sys.stderr
        )
        return 1

    if not fetching:
        # Support piped stdin when no input argument is given
        if parsed_args.input is None and not sys.stdin.isatty():
            parsed_args.input = '-'

        if parsed_args.input is None:
            parser.error('the following arguments are required: input (or pipe data via stdin, or use --fetch)')

        if parsed_args.input != '-':
            input_path = Path(parsed_args.input)
            if not input_path.exists():
                print(f"Error: Input file not found: {parsed_args.input}", file=sys.stderr)
                return 1
            if not input_path.is_file():
                print(f"Error: Input is not a file: {parsed_args.input}", file=sys.stderr)
                return 1

    try:
        content, source = load_csv(parsed_args)

        if parsed_args.verbose:
            print(f"Read {len(content)} chars. Parsing...", file=sys.stderr)

        outcome = rank_correlations(content, base=parsed_args.base, top_n=parsed_args.top)

        if parsed_args.verbose:
            fmt = outcome.fmt.value if outcome.fmt else 'n/a'
            print(
                f"Format: {fmt}, base: {outcome.base_filter.describe()}, "
                f"{outcome.observation_count} observations, {outcome.skipped} skipped",
                file=sys.stderr
            )

        render(outcome, parsed_args, source)

        if outcome.is_error:
            return EXIT_REJECTED
        return 0

    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    except (MemoryError, RecursionError):
        raise
    except Exception as e:
        print(f"Error ({type(e).__name__}): {e}", file=sys.stderr)
        if parsed_args.verbose:
            import traceback
            traceback.print_exc()
        else:
            print("Use --verbose for full traceback", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
