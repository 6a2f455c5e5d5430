"""
Exception hierarchy for the Emoji Leaderboard.

Every error raised on purpose by this package derives from LeaderboardError,
so the CLI can report it and exit non-zero.
"""

import json


class LeaderboardError(Exception):
    """Base exception for all emoji leaderboard errors"""
    pass


class ConfigurationError(LeaderboardError):
    """Required configuration (credentials) is missing or invalid"""
    pass


class FetchError(LeaderboardError):
    """A paginated fetch could not be completed"""
    pass


class FetchFailed(FetchError):
    """Transport-level failure (anything other than a rate limit)"""

    def __init__(self, detail: str, body: str = ""):
        self.detail = detail
        self.body = body
        super().__init__(f"request failed! {detail}: {body}")


class ApiRejected(FetchError):
    """The API answered, but with ``ok`` set to false"""

    def __init__(self, payload: dict):
        self.payload = payload
        error = payload.get("error", "unknown_error") if isinstance(payload, dict) else "unknown_error"
        super().__init__(f"Response was not OK ({error}): {json.dumps(payload)}")


class RetryExhausted(FetchError):
    """Rate limiting persisted beyond the allowed number of retries"""

    def __init__(self, url: str, attempts: int):
        self.url = url
        self.attempts = attempts
        super().__init__(f"Still rate limited by {url} after {attempts} attempts")


class CacheMiss(LeaderboardError):
    """No usable cache file exists for the requested dataset and date"""
    pass


class CacheCorrupt(CacheMiss):
    """A cache file exists but is not valid JSON of the expected shape"""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Corrupt cache file {path}: {reason}")
