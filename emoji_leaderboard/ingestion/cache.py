"""
Daily JSON Cache

Stores fetched datasets once per day so repeated runs on the same day reuse
the cached payload instead of hitting the Slack API again.

Layout:
    <root>/<YYYY-MM-DD>/user_id_map.json
    <root>/<YYYY-MM-DD>/emojis.json
"""

import json
from datetime import date
from pathlib import Path

from emoji_leaderboard.config import (
    CACHE_DATE_FORMAT,
    CACHE_FILENAMES,
    CACHE_SHAPES,
    default_cache_folder,
)
from emoji_leaderboard.errors import CacheCorrupt, CacheMiss
from emoji_leaderboard.utils import atomic_write_json, setup_logging, validate_dataset

# --- Module Logger ---
logger = setup_logging(__name__)


class CacheStore:
    """
    Read-through / write-through cache keyed by (dataset, day).

    The cache root and the default day are fixed at construction, so nothing
    here depends on when the process started.
    """

    def __init__(self, root: Path | None = None, day: date | None = None):
        self.root = Path(root) if root is not None else default_cache_folder()
        self.day = day or date.today()

    def path_for(self, dataset: str, day: date | None = None) -> Path:
        validate_dataset(dataset)
        day = day or self.day
        return self.root / day.strftime(CACHE_DATE_FORMAT) / CACHE_FILENAMES[dataset]

    def read(self, dataset: str, day: date | None = None):
        """
        Load a cached dataset.

        Args:
            dataset: Dataset name ("users" or "emojis")
            day: Cache date (default: the store's day)

        Returns:
            Parsed JSON: a dict for users, a list for emojis

        Raises:
            CacheMiss: If no cache file exists for the key
            CacheCorrupt: If the file is not valid JSON of the expected shape
        """
        path = self.path_for(dataset, day)
        if not path.is_file():
            raise CacheMiss(f"No cached {dataset} at {path}")

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CacheCorrupt(path, str(e)) from e

        expected = CACHE_SHAPES[dataset]
        if not isinstance(data, expected):
            raise CacheCorrupt(path, f"expected a JSON {expected.__name__}, found {type(data).__name__}")

        logger.info(f"Reading {dataset} from cache ({path})")
        return data

    def write(self, dataset: str, records, day: date | None = None) -> Path:
        """
        Write a dataset to the cache, replacing any existing file for the key.

        Returns:
            Path of the written file
        """
        path = self.path_for(dataset, day)
        atomic_write_json(records, path)
        logger.info(f"Wrote {len(records)} {dataset} records to cache ({path})")
        return path
