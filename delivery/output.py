"""
Output delivery. Console only.

Story blocks for humans plus a one-line "Last check" indicator that is
erased in place once the idle wait is over. Not machine-parseable.
"""

import sys
from datetime import datetime, timezone
from email.utils import formatdate
from typing import TextIO

from models import Item, RunStats, UserSummary

UNKNOWN = "UNKNOWN"
NONE = "NONE"


def display_datetime(epoch: int | None) -> str:
    """Epoch seconds -> 'Tue, 24 Aug 2021 10:00:00 GMT'."""
    if epoch is None:
        return UNKNOWN
    return formatdate(epoch, usegmt=True)


def display_date(epoch: int | None) -> str:
    """Epoch seconds -> 'dd-mm-yyyy' (UTC), date only."""
    if epoch is None:
        return UNKNOWN
    return datetime.fromtimestamp(epoch, tz=timezone.utc).strftime("%d-%m-%Y")


def describe_author(user: UserSummary | None) -> str:
    """Enrichment shown after the author handle. Anything missing -> UNKNOWN."""
    if user is None or not _is_int(user.created) or not _is_int(user.karma):
        return UNKNOWN
    try:
        since = display_date(user.created)
    except (OverflowError, OSError, ValueError):
        return UNKNOWN
    return f"account since {since}. [karma: {user.karma}]"


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def format_story(item: Item, author: str, author_info: str, stats: RunStats) -> str:
    return (
        f"\n"
        f"  Title:      '{item.title or NONE}'\n"
        f"  HN link:     {item.hn_url}\n"
        f"  Story URL:   {item.url or NONE}\n"
        f"  Posted by:  '{author}' {author_info}\n"
        f"  Posted on:   {display_datetime(item.time)}.\n"
        f"  Exec stats: '{stats.displayed}' displayed. '{stats.skipped}' omitted. "
        f"'{stats.scanned(item.id)}' total scanned.\n"
    )


class ConsoleOutput:
    """Writes to a text stream (stdout by default)."""

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream or sys.stdout
        self._status_width = 0

    def info(self, message: str):
        print(message, file=self._stream)

    def story(self, item: Item, author: str, author_info: str, stats: RunStats):
        print(format_story(item, author, author_info, stats), file=self._stream)

    def idle_start(self, now: datetime):
        line = f"Last check: {now.strftime('%H:%M')}"
        self._status_width = len(line)
        self._stream.write(line)
        self._stream.flush()

    def idle_clear(self):
        # back to col 0, blank the status line, back to col 0
        self._stream.write("\r" + " " * self._status_width + "\r")
        self._stream.flush()
        self._status_width = 0
