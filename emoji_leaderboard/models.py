"""
Typed records for the Emoji Leaderboard.

Raw Slack API payloads are converted into these dataclasses at the
fetch/cache boundary. Records missing required fields are rejected with
InvalidRecord so callers can quarantine them instead of passing raw dicts
through the pipeline.

Sample emoji payload from ``emoji.adminList``:

    {
      "name": "+++1",
      "is_alias": 0,
      "alias_for": "",
      "url": "https://emoji.slack-edge.com/TBPR4B74Y/%252B%252B%252B1/165bb739875e5f96.png",
      "team_id": "TBPR4B74Y",
      "user_id": "U0383JGA16C",
      "created": 1693516337,
      "is_bad": false,
      "user_display_name": "Ian Chesal",
      "avatar_hash": "8a307b2a66ee",
      "can_delete": false,
      "synonyms": []
    }
"""

from dataclasses import dataclass, field, replace


class InvalidRecord(ValueError):
    """A raw API record lacks a required field or has the wrong type"""
    pass


def _require(data: dict, key: str):
    if not isinstance(data, dict):
        raise InvalidRecord(f"Expected an object, got {type(data).__name__}")
    value = data.get(key)
    if value is None or value == "":
        raise InvalidRecord(f"Missing required field '{key}'")
    return value


@dataclass(frozen=True)
class SlackUser:
    """A workspace member from ``users.list``."""

    id: str
    deleted: bool = False
    display_name: str = ""
    real_name: str = ""

    @property
    def leaderboard_name(self) -> str:
        """Display name if set, otherwise the real name."""
        return self.display_name or self.real_name

    @classmethod
    def from_api(cls, data: dict) -> "SlackUser":
        user_id = str(_require(data, "id"))
        profile = data.get("profile") or {}
        return cls(
            id=user_id,
            deleted=bool(data.get("deleted", False)),
            display_name=str(profile.get("display_name") or ""),
            real_name=str(profile.get("real_name") or ""),
        )


@dataclass(frozen=True)
class Emoji:
    """A custom emoji from ``emoji.adminList``."""

    name: str
    created: int
    user_display_name: str = ""
    user_id: str = ""
    is_alias: bool = False
    alias_for: str = ""
    url: str = ""
    extra: dict = field(default_factory=dict, compare=False, repr=False)

    _FIELDS = ("name", "created", "user_display_name", "user_id", "is_alias", "alias_for", "url")

    @classmethod
    def from_api(cls, data: dict) -> "Emoji":
        """
        Build an Emoji from an API (or cached) record.

        Unknown keys are kept in ``extra`` so cached files keep the full
        payload.

        Raises:
            InvalidRecord: If ``name`` or ``created`` is missing or malformed
        """
        name = str(_require(data, "name"))
        raw_created = _require(data, "created")
        try:
            created = int(raw_created)
            is_alias = bool(int(data.get("is_alias") or 0))
        except (TypeError, ValueError):
            raise InvalidRecord(f"Emoji '{name}' has malformed 'created' or 'is_alias' values") from None

        return cls(
            name=name,
            created=created,
            user_display_name=str(data.get("user_display_name") or ""),
            user_id=str(data.get("user_id") or ""),
            is_alias=is_alias,
            alias_for=str(data.get("alias_for") or ""),
            url=str(data.get("url") or ""),
            extra={k: v for k, v in data.items() if k not in cls._FIELDS},
        )

    def to_dict(self) -> dict:
        """Return the record in the API's wire shape (``is_alias`` as 0/1)."""
        record = dict(self.extra)
        record.update({
            "name": self.name,
            "is_alias": int(self.is_alias),
            "alias_for": self.alias_for,
            "url": self.url,
            "user_id": self.user_id,
            "created": self.created,
            "user_display_name": self.user_display_name,
        })
        return record

    def with_display_name(self, display_name: str) -> "Emoji":
        return replace(self, user_display_name=display_name)


@dataclass(frozen=True)
class LeaderboardEntry:
    """One ranked contributor."""

    rank: int
    contributor: str
    count: int
    items: tuple[str, ...] = ()
