"""Correlation CSV sources.

Reads CSV text from a local file or stdin, or fetches the Mataf correlation
snapshot over HTTP (directly or through a raw CORS proxy).
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)

# Default forex basket, the same as the Mataf correlation page
DEFAULT_SYMBOLS: tuple[str, ...] = (
    "AUDCAD", "AUDCHF", "AUDJPY", "AUDNZD", "AUDUSD",
    "CADCHF", "CADJPY", "CHFJPY",
    "EURAUD", "EURCAD", "EURCHF", "EURGBP", "EURJPY", "EURNZD", "EURUSD",
    "GBPAUD", "GBPCAD", "GBPCHF", "GBPJPY", "GBPNZD", "GBPUSD",
    "NZDCAD", "NZDCHF", "NZDJPY", "NZDUSD",
    "USDCAD", "USDCHF", "USDJPY",
)

# "Num Period" of the daily (1D) snapshot
DEFAULT_PERIODS = 50

DEFAULT_TIMEOUT = 30

SNAPSHOT_URL = "https://www.mataf.io/api/tools/csv/correl/snapshot/forex/{periods}/correlation.csv"
PROXY_URL = "https://api.allorigins.win/raw?url={url}"
CORRELATION_PAGE = "mataf.net/en/forex/tools/correlation"

MAX_INPUT_SIZE = 100 * 1024 * 1024  # 100 MB


class FetchError(RuntimeError):
    """Raised when the CSV could not be retrieved."""


def build_csv_url(
    symbols: tuple[str, ...] | list[str] = DEFAULT_SYMBOLS,
    periods: int = DEFAULT_PERIODS
) -> str:
    """Build the snapshot CSV URL for a symbol basket.

    Example:
        build_csv_url(["EURUSD", "GBPUSD"]) ->
        'https://www.mataf.io/.../forex/50/correlation.csv?symbol=EURUSD%7CGBPUSD'
    """
    if periods <= 0:
        raise ValueError(f"periods must be positive, got {periods}")
    symbol_param = quote("|".join(symbols), safe="")
    return f"{SNAPSHOT_URL.format(periods=periods)}?symbol={symbol_param}"


def is_correlation_page_link(link: str | None) -> bool:
    """Check that a pasted link points at the Mataf correlation page."""
    return bool(link) and CORRELATION_PAGE in link.strip()


def proxied_url(url: str) -> str:
    """Wrap a URL in the raw CORS proxy."""
    return PROXY_URL.format(url=quote(url, safe=""))


def fetch_text(
    url: str,
    use_proxy: bool = False,
    timeout: float = DEFAULT_TIMEOUT,
    session: requests.Session | None = None
) -> str:
    """Fetch CSV text over HTTP.

    Args:
        url: CSV URL
        use_proxy: Route the request through the raw CORS proxy
        timeout: Request timeout in seconds
        session: Optional requests session (a new request is made otherwise)

    Returns:
        Response body as text

    Raises:
        FetchError: On transport errors or a non-2xx response
    """
    final_url = proxied_url(url) if use_proxy else url
    logger.info("Fetching %s (%s)", final_url, "proxy" if use_proxy else "direct")

    http = session if session is not None else requests
    try:
        response = http.get(final_url, timeout=timeout)
    except requests.RequestException as e:
        raise FetchError(f"Request failed: {e}") from e

    if not response.ok:
        raise FetchError(f"HTTP {response.status_code}")

    return response.text


def read_content(input_arg: str | None) -> str:
    """Read input content from a file path, '-' for stdin, or piped stdin.

    Args:
        input_arg: File path string, '-' for explicit stdin, or None to check
                   for piped stdin automatically.

    Returns:
        File content as a string.
    """
    if input_arg == '-' or (input_arg is None and not sys.stdin.isatty()):
        return sys.stdin.read()

    if input_arg is None:
        raise ValueError("input_arg must be a file path or '-' for stdin")

    path = Path(input_arg)

    file_size = path.stat().st_size
    if file_size > MAX_INPUT_SIZE:
        raise ValueError(
            f"Input file exceeds {MAX_INPUT_SIZE // (1024 * 1024)}MB limit "
            f"({file_size // (1024 * 1024)}MB)"
        )

    # utf-8-sig drops the BOM spreadsheet exports tend to add
    for encoding in ['utf-8-sig', 'utf-16']:
        try:
            return path.read_text(encoding=encoding)
        except UnicodeError:
            continue

    # Every byte sequence is valid latin-1
    return path.read_text(encoding='latin-1')
