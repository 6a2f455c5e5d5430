"""
Emoji Leaderboard CLI

Ranks the workspace's custom emoji uploaders, reading Slack data from the
daily cache when available.

Usage:
    emoji-leaderboard --weeks 1 --top 5
    OR
    python -m emoji_leaderboard.cli --since 2024-01-01 --cache-bust
"""

import sys
from pathlib import Path

# Enable both `python emoji_leaderboard/cli.py` and `python -m emoji_leaderboard.cli` execution modes.
# This ensures emoji_leaderboard imports work regardless of how the script is invoked.
_project_root = str(Path(__file__).parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import argparse
import logging
import time
from datetime import date, datetime

from emoji_leaderboard.config import (
    SECONDS_PER_DAY,
    SECONDS_PER_WEEK,
    SECONDS_PER_YEAR,
    SINCE_DATE_FORMAT,
    load_credentials,
)
from emoji_leaderboard.errors import LeaderboardError
from emoji_leaderboard.ingestion.cache import CacheStore
from emoji_leaderboard.ingestion.fetcher import PagedFetcher
from emoji_leaderboard.ingestion.repository import RecordRepository, fill_missing_names
from emoji_leaderboard.ingestion.transport import SlackTransport
from emoji_leaderboard.leaderboard.engine import format_leaderboard, rank
from emoji_leaderboard.utils import set_package_log_level, setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


class RelativeWindowAction(argparse.Action):
    """
    Store ``now - N * unit_seconds`` into the shared ``since`` destination.

    Cutoffs before the epoch are clamped to 0 (all time).
    """

    def __init__(self, option_strings, dest, unit_seconds: int = SECONDS_PER_DAY, now=None, **kwargs):
        self.unit_seconds = unit_seconds
        self.now = now
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        now = self.now if self.now is not None else time.time()
        setattr(namespace, self.dest, max(0, int(now) - values * self.unit_seconds))


def parse_since_date(value: str) -> int:
    """Convert YYYY-MM-DD into epoch seconds at local midnight."""
    try:
        return max(0, int(datetime.strptime(value, SINCE_DATE_FORMAT).timestamp()))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a date as YYYY-MM-DD, got '{value}'")


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected zero or a positive number, got {value}")
    return number


def build_parser(now: float | None = None) -> argparse.ArgumentParser:
    """
    Build the argument parser.

    The time-window flags all write to ``since``; when several are given,
    the last one on the command line wins.

    Args:
        now: Reference epoch time for --days/--weeks/--years (default: current time)
    """
    parser = argparse.ArgumentParser(
        prog="emoji-leaderboard",
        description="Show who uploaded the most custom emoji to Slack.",
        usage="%(prog)s [--weeks 1 --top 5]",
    )

    window = parser.add_argument_group("time window (defaults to all time)")
    window.add_argument(
        "--days", dest="since", default=0, type=non_negative_int, metavar="NUM",
        action=RelativeWindowAction, unit_seconds=SECONDS_PER_DAY, now=now,
        help="How many days ago to check for emoji uploads.",
    )
    window.add_argument(
        "--weeks", dest="since", default=0, type=non_negative_int, metavar="NUM",
        action=RelativeWindowAction, unit_seconds=SECONDS_PER_WEEK, now=now,
        help="How many weeks ago to check for emoji uploads.",
    )
    window.add_argument(
        "--years", dest="since", default=0, type=non_negative_int, metavar="NUM",
        action=RelativeWindowAction, unit_seconds=SECONDS_PER_YEAR, now=now,
        help="How many years ago to check for emoji uploads.",
    )
    window.add_argument(
        "--since", dest="since", default=0, type=parse_since_date, metavar="DATE",
        help="YYYY-MM-DD Emoji uploads since the given date starting at 12am.",
    )

    parser.add_argument(
        "--top", type=non_negative_int, default=None, metavar="NUM",
        help="Show the top NUM uploaders, defaults to displaying all.",
    )
    parser.add_argument(
        "--cache-bust", action="store_true",
        help="Skip the cache even if it exists and query Slack.",
    )
    parser.add_argument(
        "--resolve-users", action="store_true",
        help="Also load the user list and fill in missing uploader names.",
    )
    parser.add_argument(
        "--cache-dir", type=Path, default=None, metavar="PATH",
        help="Cache root directory (default: ./cache).",
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Log every request and cache access.",
    )
    return parser


def run(args: argparse.Namespace, transport: SlackTransport | None = None, today: date | None = None) -> str:
    """
    Load the data and build the leaderboard text.

    Raises:
        LeaderboardError: On missing credentials or a failed fetch
    """
    credentials = load_credentials()
    cache = CacheStore(args.cache_dir, day=today or date.today())
    use_cache = not args.cache_bust

    slack = transport or SlackTransport()
    try:
        repository = RecordRepository(PagedFetcher(slack), cache, credentials)
        emojis = repository.get_emojis(use_cache=use_cache)
        if args.resolve_users:
            user_map = repository.get_users(use_cache=use_cache)
            emojis = fill_missing_names(emojis, user_map)
    finally:
        if transport is None:
            slack.close()

    entries, items = rank(emojis, top_n=args.top, since=args.since)
    return format_leaderboard(entries, items, top_n=args.top, since=args.since)


def main(argv: list[str] | None = None, today: date | None = None) -> int:
    """
    Main entry point for the emoji leaderboard.

    Returns:
        Process exit status (0 on success, 1 on failure)
    """
    args = build_parser().parse_args(argv)
    if args.verbose:
        set_package_log_level(logging.DEBUG)

    try:
        report = run(args, today=today)
    except LeaderboardError as e:
        logger.error(str(e))
        return 1

    print(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
