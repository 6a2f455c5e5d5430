"""
HTTP transport for the Slack Web API.

Wraps a ``requests.Session`` behind a single ``post`` call that never raises
for network or HTTP errors; instead it returns a TransportResponse with the
status code, raw body, and an error description. The fetcher decides what to
do with each outcome.
"""

from dataclasses import dataclass

import requests

from emoji_leaderboard.config import REQUEST_TIMEOUT
from emoji_leaderboard.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


@dataclass(frozen=True)
class TransportResponse:
    status_code: int | None
    body: str
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SlackTransport:
    """Form-encoded POST client with a per-call cookie jar."""

    def __init__(self, session: requests.Session | None = None, timeout: float = REQUEST_TIMEOUT):
        self.session = session or requests.Session()
        self.timeout = timeout

    def post(self, url: str, form: dict, cookies: dict | None = None) -> TransportResponse:
        """
        POST ``form`` to ``url``.

        Args:
            url: Full endpoint URL
            form: Parameters sent as an ``application/x-www-form-urlencoded`` body
            cookies: Cookies sent with this request only

        Returns:
            TransportResponse (``error`` is set for network failures and
            HTTP status >= 400)
        """
        try:
            response = self.session.post(url, data=form, cookies=cookies, timeout=self.timeout)
        except requests.RequestException as e:
            logger.debug(f"POST {url} raised {e.__class__.__name__}: {e}")
            return TransportResponse(status_code=None, body="", error=f"{e.__class__.__name__}: {e}")

        error = None
        if not response.ok:
            error = f"{response.status_code} {response.reason}"
        return TransportResponse(status_code=response.status_code, body=response.text, error=error)

    def close(self) -> None:
        self.session.close()
