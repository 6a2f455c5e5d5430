"""
Central configuration for the Emoji Leaderboard.

All shared constants and configuration values should be defined here
to avoid duplication and ensure consistency across modules.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from emoji_leaderboard.errors import ConfigurationError

# --- Cache Paths ---
CACHE_DIRNAME = "cache"
CACHE_DATE_FORMAT = "%Y-%m-%d"

# --- Dataset Configuration ---
USERS_DATASET = "users"
EMOJIS_DATASET = "emojis"

# Allowed dataset names (for validation)
ALLOWED_DATASETS = frozenset({USERS_DATASET, EMOJIS_DATASET})

# Cache file name and expected JSON shape per dataset
CACHE_FILENAMES = {
    USERS_DATASET: "user_id_map.json",
    EMOJIS_DATASET: "emojis.json",
}
CACHE_SHAPES = {
    USERS_DATASET: dict,
    EMOJIS_DATASET: list,
}

# --- Slack API ---
DEFAULT_SLACK_DOMAIN = "slack.com"
USERS_LIST_METHOD = "users.list"
EMOJI_LIST_METHOD = "emoji.adminList"
USERS_PAGE_LIMIT = 100
EMOJI_PAGE_COUNT = 100
EMOJI_SORT_BY = "name"
EMOJI_SORT_DIR = "asc"
SESSION_COOKIE_NAME = "d"
REQUEST_TIMEOUT = 30  # seconds

# --- Rate Limiting ---
RATE_LIMIT_STATUS = 429
RATE_LIMIT_BACKOFF = 1.0  # seconds to wait after a 429
CURSOR_PAGE_DELAY = 0.1  # proactive pause between cursor pages
MAX_RATE_LIMIT_RETRIES = 60  # consecutive 429s per request; None = unbounded

# --- Time Windows ---
SECONDS_PER_DAY = 24 * 60 * 60
SECONDS_PER_WEEK = 7 * SECONDS_PER_DAY
SECONDS_PER_YEAR = 365 * SECONDS_PER_DAY
SINCE_DATE_FORMAT = "%Y-%m-%d"


def default_cache_folder() -> Path:
    """Cache root used when none is given: `./cache` under the working directory."""
    return Path.cwd() / CACHE_DIRNAME


# --- Credentials (environment) ---
TOKEN_ENV_VAR = "SLACK_PARAM_TOKEN"
COOKIE_ENV_VAR = "SLACK_COOKIE_D"
DOMAIN_ENV_VAR = "SLACK_DOMAIN"


@dataclass(frozen=True)
class SlackCredentials:
    """Opaque credentials sent with every Slack API request."""

    token: str
    cookie: str
    domain: str = DEFAULT_SLACK_DOMAIN

    def api_url(self, method: str) -> str:
        return f"https://{self.domain}/api/{method}"

    def __repr__(self) -> str:
        return f"SlackCredentials(token='***', cookie='***', domain={self.domain!r})"


def load_credentials(env: dict | None = None) -> SlackCredentials:
    """
    Load Slack credentials from the environment.

    Values from a local ``.env`` file are loaded first (without overriding
    variables that are already set).

    Args:
        env: Mapping to read instead of ``os.environ`` (mainly for tests)

    Returns:
        SlackCredentials instance

    Raises:
        ConfigurationError: If the token or session cookie is missing
    """
    if env is None:
        load_dotenv()
        env = os.environ

    token = (env.get(TOKEN_ENV_VAR) or "").strip()
    cookie = (env.get(COOKIE_ENV_VAR) or "").strip()
    domain = (env.get(DOMAIN_ENV_VAR) or "").strip() or DEFAULT_SLACK_DOMAIN

    missing = [
        name for name, value in ((TOKEN_ENV_VAR, token), (COOKIE_ENV_VAR, cookie))
        if not value
    ]
    if missing:
        raise ConfigurationError(
            f"Please set environment variables for Slack auth: {', '.join(missing)}"
        )

    return SlackCredentials(token=token, cookie=cookie, domain=domain)
