"""
Test doubles shared by the ingestion and CLI tests.
"""

import json

from emoji_leaderboard.config import SlackCredentials
from emoji_leaderboard.ingestion.transport import TransportResponse

CREDENTIALS = SlackCredentials(token="xoxc-test", cookie="cookie-d", domain="example.slack.com")


def ok_response(**payload) -> TransportResponse:
    """A 200 response whose JSON body has ``ok: true`` plus ``payload``."""
    return TransportResponse(status_code=200, body=json.dumps({"ok": True, **payload}))


def rate_limited() -> TransportResponse:
    return TransportResponse(status_code=429, body="", error="429 Too Many Requests")


def make_emoji(name, user="alice", created=1_700_000_000, is_alias=0, user_id="U1"):
    """Raw emoji record in the ``emoji.adminList`` shape."""
    return {
        "name": name,
        "is_alias": is_alias,
        "alias_for": "",
        "url": f"https://emoji.example/{name}.png",
        "team_id": "T1",
        "user_id": user_id,
        "created": created,
        "user_display_name": user,
    }


def make_member(user_id, display_name="", real_name="", deleted=False):
    """Raw member record in the ``users.list`` shape."""
    return {
        "id": user_id,
        "deleted": deleted,
        "profile": {"display_name": display_name, "real_name": real_name},
    }


class FakeTransport:
    """Replays canned responses and records every request."""

    def __init__(self, responses=()):
        self.responses = list(responses)
        self.calls = []

    def post(self, url, form, cookies=None):
        self.calls.append({"url": url, "form": dict(form), "cookies": dict(cookies or {})})
        if not self.responses:
            raise AssertionError(f"Unexpected request to {url}")
        return self.responses.pop(0)

    def close(self):
        pass


class RecordingSleep:
    """Stands in for time.sleep and records requested delays."""

    def __init__(self):
        self.delays = []

    def __call__(self, seconds):
        self.delays.append(seconds)
