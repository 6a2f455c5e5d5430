"""
Paginated Slack API Fetcher

Issues repeated requests against one Slack API method, advancing through
cursors or page numbers, and accumulates every page's records into a single
list. Rate-limited requests (HTTP 429) are retried after a fixed backoff, up
to a configurable number of consecutive attempts.

Usage:
    fetcher = PagedFetcher(SlackTransport())
    members = fetcher.fetch_all(
        "users.list", {"limit": 100}, credentials, CursorPagination("members")
    )
"""

import json
import time
from typing import Callable

from emoji_leaderboard.config import (
    CURSOR_PAGE_DELAY,
    MAX_RATE_LIMIT_RETRIES,
    RATE_LIMIT_BACKOFF,
    RATE_LIMIT_STATUS,
    SESSION_COOKIE_NAME,
    SlackCredentials,
)
from emoji_leaderboard.errors import ApiRejected, FetchFailed, RetryExhausted
from emoji_leaderboard.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


class CursorPagination:
    """
    Cursor-based paging: each response carries
    ``response_metadata.next_cursor``; an empty cursor ends the loop.
    """

    pace_requests = True

    def __init__(self, records_key: str):
        self.records_key = records_key

    def advance(self, params: dict, body: dict) -> dict | None:
        metadata = body.get("response_metadata") or {}
        next_cursor = str(metadata.get("next_cursor") or "")
        if not next_cursor:
            return None
        return {**params, "cursor": next_cursor}


class PageCountPagination:
    """
    Page-counted paging: each response carries ``paging.pages``; pages
    ``2..pages`` are requested after the initial page.
    """

    pace_requests = False

    def __init__(self, records_key: str):
        self.records_key = records_key

    def advance(self, params: dict, body: dict) -> dict | None:
        paging = body.get("paging") or {}
        total_pages = int(paging.get("pages") or 1)
        page = int(params.get("page") or 1)
        if page >= total_pages:
            return None
        return {**params, "page": page + 1}


class PagedFetcher:
    """Fetch every page of a Slack API method into one list of raw records."""

    def __init__(
        self,
        transport,
        sleep: Callable[[float], None] = time.sleep,
        rate_limit_backoff: float = RATE_LIMIT_BACKOFF,
        page_delay: float = CURSOR_PAGE_DELAY,
        max_rate_limit_retries: int | None = MAX_RATE_LIMIT_RETRIES,
    ):
        self.transport = transport
        self.sleep = sleep
        self.rate_limit_backoff = rate_limit_backoff
        self.page_delay = page_delay
        self.max_rate_limit_retries = max_rate_limit_retries

    def fetch_all(
        self,
        endpoint: str,
        initial_params: dict,
        credentials: SlackCredentials,
        strategy: CursorPagination | PageCountPagination,
    ) -> list[dict]:
        """
        Fetch all pages of ``endpoint``.

        Args:
            endpoint: Slack API method name (e.g. "users.list")
            initial_params: Parameters for the first request
            credentials: Token and session cookie sent with each request
            strategy: CursorPagination or PageCountPagination

        Returns:
            Records from every page, in page order

        Raises:
            FetchFailed: Transport error other than a rate limit, or a bad body
            ApiRejected: The API returned ``ok: false``
            RetryExhausted: Too many consecutive rate-limited attempts
        """
        url = credentials.api_url(endpoint)
        params = dict(initial_params)
        records: list[dict] = []
        requests_made = 0

        while True:
            body = self._request(url, params, credentials)
            requests_made += 1

            batch = body.get(strategy.records_key) or []
            if not isinstance(batch, list):
                raise FetchFailed(
                    f"expected a list under '{strategy.records_key}'", json.dumps(body)
                )
            records.extend(batch)
            logger.debug(f"{endpoint}: request {requests_made} returned {len(batch)} records")

            next_params = strategy.advance(params, body)
            if next_params is None:
                break
            params = next_params

            if strategy.pace_requests and self.page_delay:
                self.sleep(self.page_delay)  # Avoid hitting the rate limit

        logger.info(f"Fetched {len(records)} records from {endpoint} in {requests_made} requests")
        return records

    def _request(self, url: str, params: dict, credentials: SlackCredentials) -> dict:
        form = {**params, "token": credentials.token}
        cookies = {SESSION_COOKIE_NAME: credentials.cookie}
        retries = 0

        while True:
            response = self.transport.post(url, form, cookies)
            if response.error is None or response.status_code != RATE_LIMIT_STATUS:
                break

            if self.max_rate_limit_retries is not None and retries >= self.max_rate_limit_retries:
                raise RetryExhausted(url, retries + 1)
            retries += 1
            logger.debug(f"Rate limited by {url}, retry {retries} in {self.rate_limit_backoff}s")
            self.sleep(self.rate_limit_backoff)

        if response.error is not None:
            raise FetchFailed(response.error, response.body)

        try:
            body = json.loads(response.body)
        except json.JSONDecodeError as e:
            raise FetchFailed(f"invalid JSON in response ({e})", response.body) from e

        if not isinstance(body, dict) or not body.get("ok"):
            raise ApiRejected(body)

        return body
