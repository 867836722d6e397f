"""
Core data types. No behavior, just shapes.
"""

from dataclasses import dataclass, fields
from enum import Enum

# Returned by fetch_max_id() when the response can't be read as an ID.
UNKNOWN_MAX_ID = -1

HN_ITEM_URL = "https://news.ycombinator.com/item?id={}"

# Placeholder for stories without a `by` field; never looked up.
UNKNOWN_AUTHOR = "unknown author"


class ItemType(Enum):
    STORY = "story"
    COMMENT = "comment"
    POLL = "poll"
    JOB = "job"
    POLLOPT = "pollopt"


class GapDecision(Enum):
    REPLAY = "replay"
    FAST_FORWARD = "fast-forward"


@dataclass(frozen=True)
class Item:
    """A single Hacker News item as returned by /item/<id>.json."""
    id: int
    type: str | None = None
    by: str | None = None
    title: str | None = None
    url: str | None = None
    text: str | None = None
    time: int | None = None          # epoch seconds
    score: int | None = None
    descendants: int | None = None
    deleted: bool = False
    dead: bool = False
    parent: int | None = None
    kids: tuple[int, ...] = ()
    poll: int | None = None
    parts: tuple[int, ...] = ()

    @classmethod
    def from_api(cls, data: dict) -> "Item":
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        for key in ("kids", "parts"):
            if key in values:
                values[key] = tuple(values[key] or ())
        for key in ("deleted", "dead"):
            if key in values:
                values[key] = bool(values[key])
        return cls(**values)

    @property
    def hn_url(self) -> str:
        return HN_ITEM_URL.format(self.id)

    def __repr__(self) -> str:
        return f"Item({self.id}, {self.type}, {(self.title or '')[:50]})"


@dataclass(frozen=True)
class UserSummary:
    """Account details shown next to a story's author."""
    handle: str
    created: int | None = None       # epoch seconds
    karma: int | None = None

    @classmethod
    def from_api(cls, data: dict) -> "UserSummary":
        return cls(
            handle=data.get("id", ""),
            created=data.get("created"),
            karma=data.get("karma"),
        )


@dataclass
class RunStats:
    """Running counters for one watch session."""
    start_id: int
    displayed: int = 0
    skipped: int = 0

    def scanned(self, current_id: int) -> int:
        return current_id - self.start_id
