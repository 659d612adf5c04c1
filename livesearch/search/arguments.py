"""Command-line parsing and validation for a live search run.

Everything here raises ``UsageError`` instead of exiting so the parsing rules
can be exercised without a subprocess.
"""

import argparse
import logging
import math
import re
from datetime import date
from typing import Iterable, List, Optional, Sequence

from livesearch.core.exceptions import UsageError
from livesearch.search.models import Mode, SearchArgs

logger = logging.getLogger(__name__)

MAX_HANDLES = 10
DEFAULT_MAX_RESULTS = 12
MIN_MAX_RESULTS = 1
MAX_MAX_RESULTS = 50

ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
# Years 0000-0099 are never valid bounds.
MIN_YEAR = 100

EPILOG = """\
environment:
  OPENROUTER_API_KEY   API key (required)
  GROK_MODEL           model id (default: x-ai/grok-4)

queries starting with "-" must be attached to the flag: --q="-rust vs go"

exit codes:
  0  success
  1  HTTP error response (non-retriable, or retries exhausted)
  2  usage/validation error
  3  network/timeout error
  4  JSON parse error
"""


class LiveSearchArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError rather than exiting."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(f"{self.format_usage().rstrip()}\n{self.prog}: error: {message}")


def finite_number(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError("must be a number")
    if not math.isfinite(number):
        raise argparse.ArgumentTypeError("must be a number")
    return number


def non_negative_int(value: str) -> int:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError("must be >= 0 integer")
    if not math.isfinite(number) or not number.is_integer() or number < 0:
        raise argparse.ArgumentTypeError("must be >= 0 integer")
    return int(number)


def build_parser() -> LiveSearchArgumentParser:
    parser = LiveSearchArgumentParser(
        prog="grok-search",
        description="Ask Grok via OpenRouter with X/Twitter Live Search and print JSON.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument(
        "--q",
        "--query",
        dest="query",
        required=True,
        help="Question to ask (use --q=-text when it starts with a dash)",
    )
    parser.add_argument("--mode", choices=[m.value for m in Mode], help="Live Search mode (default: auto)")
    parser.add_argument(
        "--include",
        nargs="*",
        action="extend",
        default=[],
        metavar="HANDLE",
        help="Only search posts from these handles (max 10)",
    )
    parser.add_argument(
        "--exclude",
        nargs="*",
        action="extend",
        default=[],
        metavar="HANDLE",
        help="Skip posts from these handles (max 10)",
    )
    parser.add_argument("--from", dest="from_date", metavar="YYYY-MM-DD", help="Earliest post date")
    parser.add_argument("--to", dest="to_date", metavar="YYYY-MM-DD", help="Latest post date")
    parser.add_argument("--max", dest="max_results", type=finite_number, metavar="N", help="Max search results, 1-50 (default: 12)")
    parser.add_argument("--min-faves", type=non_negative_int, metavar="N", help="Minimum favorite count")
    parser.add_argument("--min-views", type=non_negative_int, metavar="N", help="Minimum view count")
    return parser


def parse_args(argv: Sequence[str]) -> SearchArgs:
    """Turn raw tokens into a validated SearchArgs."""
    parser = build_parser()
    namespace, unknown = parser.parse_known_args(list(argv))
    if unknown:
        # Stray tokens are usually quoting artifacts; tolerate them.
        logger.debug("Ignoring unrecognized arguments: %s", unknown)

    if namespace.include and namespace.exclude:
        raise UsageError("You cannot set both --include and --exclude (xAI constraint).")

    return SearchArgs(
        query=namespace.query,
        mode=Mode(namespace.mode) if namespace.mode else None,
        include=list(namespace.include),
        exclude=list(namespace.exclude),
        from_date=ensure_iso_date(namespace.from_date),
        to_date=ensure_iso_date(namespace.to_date),
        max_results=namespace.max_results,
        min_faves=namespace.min_faves,
        min_views=namespace.min_views,
    )


def ensure_iso_date(value: Optional[str]) -> Optional[str]:
    """Return ``value`` unchanged if it is a real YYYY-MM-DD calendar date."""
    if not value:
        return None
    if not ISO_DATE_PATTERN.fullmatch(value):
        raise UsageError(f"Date must be YYYY-MM-DD: {value}")
    year, month, day = (int(part) for part in value.split("-"))
    if year < MIN_YEAR:
        raise UsageError(f"Invalid calendar date (YYYY-MM-DD): {value}")
    try:
        rendered = date(year, month, day).isoformat()
    except ValueError:
        rendered = None
    if rendered != value:
        raise UsageError(f"Invalid calendar date (YYYY-MM-DD): {value}")
    return value


def strip_at(handle: str) -> str:
    return handle[1:] if handle.startswith("@") else handle


def normalize_handles(handles: Iterable[str]) -> List[str]:
    """Lowercase, drop a leading @, dedupe and cap at MAX_HANDLES."""
    unique = dict.fromkeys(strip_at(h).lower() for h in handles)
    return list(unique)[:MAX_HANDLES]


def clamp_max_results(value: Optional[float]) -> int:
    if value is None or not math.isfinite(value):
        return DEFAULT_MAX_RESULTS
    return int(min(MAX_MAX_RESULTS, max(MIN_MAX_RESULTS, value)))
