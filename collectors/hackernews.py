"""
Hacker News item source. Uses the official Firebase API.

Endpoints (all plain GET, JSON bodies, `null` for missing records):
- /maxitem.json       newest item ID
- /item/<id>.json     one item
- /user/<handle>.json one account

Strategy:
- One requests.Session, every call bounded by a timeout
- Transient failures (connection errors, 429, 5xx) retried by tenacity with exponential backoff
- After the last retry the failure is raised as FetchError
"""

import logging
import time
from typing import Callable

import requests
import tenacity
from tenacity import retry_if_exception_type, stop_after_attempt, wait_exponential

from collectors.base import FetchError, ItemSource
from config.settings import Config
from models import UNKNOWN_AUTHOR, UNKNOWN_MAX_ID, Item, UserSummary

log = logging.getLogger(__name__)

RETRY_STATUSES = {429, 500, 502, 503, 504}


class TransientHTTPError(Exception):
    """A status code worth retrying."""


class HackerNewsClient(ItemSource):
    def __init__(
        self,
        config: Config,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._base = config.api_base.rstrip("/")
        self._timeout = config.request_timeout
        self._max_retries = config.max_retries
        self._backoff = config.retry_backoff
        self._sleep = sleep
        self._session = session or requests.Session()
        self._session.headers["User-Agent"] = config.user_agent

    def fetch_max_id(self) -> int:
        """Newest item ID, or -1 if the body isn't a positive integer."""
        raw = self._get_json("/maxitem.json")
        try:
            max_id = int(raw)
        except (TypeError, ValueError, OverflowError):
            log.warning(f"Unparseable max item ID: {raw!r}")
            return UNKNOWN_MAX_ID
        if isinstance(raw, bool) or max_id <= 0:
            log.warning(f"Unparseable max item ID: {raw!r}")
            return UNKNOWN_MAX_ID
        return max_id

    def fetch_item(self, item_id: int) -> Item | None:
        data = self._get_json(f"/item/{item_id}.json")
        if not data:
            return None
        if not isinstance(data, dict):
            raise FetchError(f"Item {item_id}: expected an object, got {type(data).__name__}")
        if "id" not in data:
            data = {**data, "id": item_id}
        return Item.from_api(data)

    def fetch_user(self, handle: str) -> UserSummary | None:
        if not handle or handle == UNKNOWN_AUTHOR:
            return None
        data = self._get_json(f"/user/{handle}.json")
        if not isinstance(data, dict):
            return None
        return UserSummary.from_api(data)

    def _get_json(self, path: str):
        """GET base+path and decode JSON, retrying transient failures."""
        url = f"{self._base}{path}"
        retrying = tenacity.Retrying(
            stop=stop_after_attempt(self._max_retries + 1),
            wait=wait_exponential(multiplier=self._backoff),
            retry=retry_if_exception_type((requests.RequestException, TransientHTTPError)),
            sleep=self._sleep,
            before_sleep=self._log_retry,
        )
        try:
            return retrying(self._get_once, url)
        except tenacity.RetryError as e:
            attempt = e.last_attempt
            raise FetchError(
                f"Giving up on {url} after {attempt.attempt_number} attempts: {attempt.exception()}"
            ) from e

    def _get_once(self, url: str):
        resp = self._session.get(url, timeout=self._timeout)
        if resp.status_code in RETRY_STATUSES:
            raise TransientHTTPError(f"HTTP {resp.status_code} from {url}")
        if resp.status_code != 200:
            raise FetchError(f"HTTP {resp.status_code} from {url}")
        try:
            return resp.json()
        except ValueError as e:
            raise FetchError(f"Invalid JSON from {url}: {e}") from e

    @staticmethod
    def _log_retry(retry_state: tenacity.RetryCallState):
        log.warning(
            f"GET {retry_state.args[0]} failed ({retry_state.outcome.exception()}), "
            f"retrying in {retry_state.next_action.sleep:.1f}s"
        )
