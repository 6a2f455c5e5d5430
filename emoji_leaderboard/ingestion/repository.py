"""
Record Repository

Cache-first access to the two Slack datasets the leaderboard needs:

- users: id -> leaderboard name map (from ``users.list``)
- emojis: non-alias custom emoji (from ``emoji.adminList``)

On a cache miss the full dataset is fetched, normalized, written to the
daily cache, and returned. Nothing is written unless the whole paginated
fetch succeeded.
"""

from emoji_leaderboard.config import (
    EMOJI_LIST_METHOD,
    EMOJI_PAGE_COUNT,
    EMOJI_SORT_BY,
    EMOJI_SORT_DIR,
    EMOJIS_DATASET,
    USERS_DATASET,
    USERS_LIST_METHOD,
    USERS_PAGE_LIMIT,
    SlackCredentials,
)
from emoji_leaderboard.errors import CacheCorrupt, CacheMiss
from emoji_leaderboard.ingestion.cache import CacheStore
from emoji_leaderboard.ingestion.fetcher import (
    CursorPagination,
    PageCountPagination,
    PagedFetcher,
)
from emoji_leaderboard.models import Emoji, InvalidRecord, SlackUser
from emoji_leaderboard.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


class RecordRepository:
    """Orchestrates CacheStore and PagedFetcher for each dataset."""

    def __init__(self, fetcher: PagedFetcher, cache: CacheStore, credentials: SlackCredentials):
        self.fetcher = fetcher
        self.cache = cache
        self.credentials = credentials

    def _read_cache(self, dataset: str):
        """Return cached data, or None when the cache cannot be used."""
        try:
            return self.cache.read(dataset)
        except CacheCorrupt as e:
            logger.warning(f"{e}; fetching fresh data instead")
        except CacheMiss as e:
            logger.debug(str(e))
        return None

    def get_users(self, use_cache: bool = True) -> dict[str, str]:
        """
        Return the workspace's user id -> leaderboard name map.

        Soft-deleted users are dropped. The name is the profile's display
        name, or the real name when no display name is set.
        """
        if use_cache:
            cached = self._read_cache(USERS_DATASET)
            if cached is not None:
                return cached

        logger.info("Fetching user info from Slack...")
        members = self.fetcher.fetch_all(
            USERS_LIST_METHOD,
            {"limit": USERS_PAGE_LIMIT},
            self.credentials,
            CursorPagination("members"),
        )

        logger.info(f"Parsing {len(members)} users...")
        user_map: dict[str, str] = {}
        skipped = 0
        for raw in members:
            try:
                user = SlackUser.from_api(raw)
            except InvalidRecord as e:
                skipped += 1
                logger.debug(f"Skipping user record: {e}")
                continue
            if user.deleted:
                continue
            user_map[user.id] = user.leaderboard_name

        if skipped:
            logger.warning(f"Skipped {skipped} malformed user records")

        self.cache.write(USERS_DATASET, user_map)
        return user_map

    def get_emojis(self, use_cache: bool = True) -> list[Emoji]:
        """
        Return every non-alias custom emoji in the workspace.

        Aliases are removed before the cache write, so cached data never
        contains them.
        """
        if use_cache:
            cached = self._read_cache(EMOJIS_DATASET)
            if cached is not None:
                return parse_emojis(cached)

        logger.info("Fetching emojis from Slack...")
        raw_emojis = self.fetcher.fetch_all(
            EMOJI_LIST_METHOD,
            {
                "page": 1,
                "count": EMOJI_PAGE_COUNT,
                "sort_by": EMOJI_SORT_BY,
                "sort_dir": EMOJI_SORT_DIR,
            },
            self.credentials,
            PageCountPagination("emoji"),
        )

        emojis = [e for e in parse_emojis(raw_emojis) if not e.is_alias]
        logger.info(f"Kept {len(emojis)} of {len(raw_emojis)} emojis after removing aliases")

        self.cache.write(EMOJIS_DATASET, [e.to_dict() for e in emojis])
        return emojis


def parse_emojis(records: list) -> list[Emoji]:
    """
    Convert raw emoji records into Emoji objects, preserving order.

    Malformed records are skipped with a warning.
    """
    emojis = []
    skipped = 0
    for raw in records:
        try:
            emojis.append(Emoji.from_api(raw))
        except InvalidRecord as e:
            skipped += 1
            logger.debug(f"Skipping emoji record: {e}")

    if skipped:
        logger.warning(f"Skipped {skipped} malformed emoji records")
    return emojis


def fill_missing_names(emojis: list[Emoji], user_map: dict[str, str]) -> list[Emoji]:
    """
    Fill in empty uploader names from the user id map.

    Args:
        emojis: Emoji records (not modified)
        user_map: User id -> leaderboard name

    Returns:
        New list in the same order; emoji with a known ``user_id`` and an
        empty ``user_display_name`` get the mapped name
    """
    filled = []
    for emoji in emojis:
        if not emoji.user_display_name and user_map.get(emoji.user_id):
            emoji = emoji.with_display_name(user_map[emoji.user_id])
        filled.append(emoji)
    return filled
