"""
Emoji Leaderboard Engine

This module turns a list of emoji records into a ranked leaderboard of
uploaders:
- Time filtering (only emoji created at or after a cutoff)
- Grouping by uploader display name (exact match, no case folding)
- Ranking by upload count, ties kept in first-appearance order
- Optional top-N limit (a limit larger than the field shows everyone)

Usage:
    from emoji_leaderboard.leaderboard import rank, format_leaderboard
    entries, items = rank(emojis, top_n=5, since=cutoff)
    print(format_leaderboard(entries, items, top_n=5, since=cutoff))
"""

from datetime import datetime
from typing import Sequence

import pandas as pd

from emoji_leaderboard.models import Emoji, LeaderboardEntry
from emoji_leaderboard.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


def effective_top_n(top_n: int | None, contributor_count: int) -> int | None:
    """
    Resolve the ranking limit.

    A limit larger than the number of contributors is treated as "show all"
    (None), so the output never claims a top N out of fewer than N people.

    Raises:
        ValueError: If top_n is negative
    """
    if top_n is None:
        return None
    if top_n < 0:
        raise ValueError(f"top_n must be zero or positive, got {top_n}")
    if contributor_count < top_n:
        return None
    return top_n


def emojis_to_dataframe(records: Sequence[Emoji]) -> pd.DataFrame:
    """Build a DataFrame with columns: name, created, contributor."""
    return pd.DataFrame(
        [(e.name, e.created, e.user_display_name) for e in records],
        columns=["name", "created", "contributor"],
    )


def rank(
    records: Sequence[Emoji],
    top_n: int | None = None,
    since: int = 0,
) -> tuple[list[LeaderboardEntry], list[str]]:
    """
    Rank emoji uploaders by number of uploads.

    Args:
        records: Emoji records (not modified)
        top_n: Number of uploaders to keep (None = all)
        since: Epoch seconds; only emoji created at or after this count (0 = all time)

    Returns:
        Tuple of (ranked entries, names of every emoji uploaded by the ranked
        uploaders in ranking order)
    """
    df = emojis_to_dataframe(records)
    df = df[df["created"] >= since]

    grouped = df.groupby("contributor", sort=False)
    counts = grouped.size()
    limit = effective_top_n(top_n, len(counts))

    # Stable sort keeps first-appearance order for tied counts
    ranked = counts.sort_values(ascending=False, kind="stable")
    if limit is not None:
        ranked = ranked.head(limit)

    names_by_contributor = {
        contributor: tuple(group["name"]) for contributor, group in grouped
    }

    entries = [
        LeaderboardEntry(
            rank=position,
            contributor=contributor,
            count=int(count),
            items=names_by_contributor[contributor],
        )
        for position, (contributor, count) in enumerate(ranked.items(), start=1)
    ]
    items = [name for entry in entries for name in entry.items]

    logger.debug(
        f"Ranked {len(entries)} of {len(counts)} uploaders from {len(df)} emojis since {since}"
    )
    return entries, items


def format_leaderboard(
    entries: Sequence[LeaderboardEntry],
    items: Sequence[str],
    top_n: int | None = None,
    since: int = 0,
) -> str:
    """
    Render the leaderboard as plain text.

    The header says "all" unless a limit applied; ``top_n`` is resolved the
    same way ``rank`` resolves it.
    """
    # entries already reflect the limit, so only the header depends on it
    shown = "all" if top_n is None or len(entries) < top_n else f"the top {top_n}"
    since_label = datetime.fromtimestamp(since).strftime("%Y-%m-%d %H:%M:%S")

    lines = [f"Showing {shown} emoji uploaders since {since_label}:", ""]
    lines.extend(f"{entry.rank}) @{entry.contributor}: {entry.count}" for entry in entries)
    lines.append("")
    lines.append(" ".join(f":{name}:" for name in items))
    return "\n".join(lines)
