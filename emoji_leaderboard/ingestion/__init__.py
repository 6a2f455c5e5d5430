"""
Data Ingestion

Modules:
- cache: Daily JSON cache keyed by dataset and date
- transport: requests-based form POST client
- fetcher: Cursor and page-counted pagination with rate-limit retry
- repository: Cache-first access to the users and emojis datasets
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "CacheStore":
        from emoji_leaderboard.ingestion.cache import CacheStore
        return CacheStore
    if name == "SlackTransport":
        from emoji_leaderboard.ingestion.transport import SlackTransport
        return SlackTransport
    if name == "PagedFetcher":
        from emoji_leaderboard.ingestion.fetcher import PagedFetcher
        return PagedFetcher
    if name == "RecordRepository":
        from emoji_leaderboard.ingestion.repository import RecordRepository
        return RecordRepository
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
