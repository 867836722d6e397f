from collectors.base import FetchError, ItemSource
from collectors.hackernews import HackerNewsClient

__all__ = [
    "FetchError",
    "ItemSource",
    "HackerNewsClient",
]
