"""
Base item source interface. The poller only talks to this.
"""

from abc import ABC, abstractmethod

from models import Item, UserSummary


class FetchError(Exception):
    """The remote source could not be reached or returned garbage."""


class ItemSource(ABC):
    """
    A source of items addressed by a monotonically increasing integer ID.

    Contract:
    - fetch_item() returns None for IDs with no record. Holes are normal.
    - fetch_max_id() returns -1 when the answer can't be read as an ID.
    - fetch_user() is best effort; callers treat None as unknown.
    - Transport failures surface as FetchError.
    """

    @abstractmethod
    def fetch_max_id(self) -> int:
        ...

    @abstractmethod
    def fetch_item(self, item_id: int) -> Item | None:
        ...

    @abstractmethod
    def fetch_user(self, handle: str) -> UserSummary | None:
        ...
