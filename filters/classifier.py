"""
Decides which fetched items get shown. Only live stories pass.

Types available: comment / story / poll / job / pollopt. The poller walks
every ID regardless of type; this is the only display filter.
"""

from models import Item, ItemType


def is_removed(item: Item) -> bool:
    return bool(item.deleted or item.dead)


def is_displayable(item: Item) -> bool:
    return item.type == ItemType.STORY.value and not is_removed(item)
