"""
Uploader Leaderboard

Modules:
- engine: Time filtering, grouping, ranking and text rendering
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "rank":
        from emoji_leaderboard.leaderboard.engine import rank
        return rank
    if name == "format_leaderboard":
        from emoji_leaderboard.leaderboard.engine import format_leaderboard
        return format_leaderboard
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
