"""
The poll loop. Walks the item ID space one ID at a time, forever.

States:
- RESUME       once, at start: read cursor, snapshot max ID, pick start ID
- GAP_CONFIRM  once, only if the backlog is larger than gap_threshold
- WALK         fetch current ID; show it if it's a live story; save cursor; advance
- IDLE_WAIT    caught up with the newest ID: show "Last check", sleep, retry same ID

Everything with side effects (source, cursor store, output, prompt, sleep,
clock) is injected so tests can drive it with step() and no real waits.
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable

from collectors.base import FetchError, ItemSource
from config.settings import Config
from delivery.output import ConsoleOutput, describe_author
from filters.classifier import is_displayable
from models import UNKNOWN_AUTHOR, UNKNOWN_MAX_ID, GapDecision, Item, RunStats
from poller.gap import DEFAULT_GAP_THRESHOLD, GapPrompt, apply_gap_decision, needs_gap_confirmation
from storage.base import CursorStore

log = logging.getLogger(__name__)


class State(Enum):
    RESUME = "resume"
    GAP_CONFIRM = "gap_confirm"
    WALK = "walk"
    IDLE_WAIT = "idle_wait"


@dataclass
class PollSettings:
    gap_threshold: int = DEFAULT_GAP_THRESHOLD
    grace_period: float = 3.0
    idle_interval: float = 120.0

    @classmethod
    def from_config(cls, config: Config) -> "PollSettings":
        return cls(
            gap_threshold=config.gap_threshold,
            grace_period=config.grace_period,
            idle_interval=config.idle_interval,
        )


class Poller:
    def __init__(
        self,
        source: ItemSource,
        store: CursorStore,
        output: ConsoleOutput,
        confirm: GapPrompt,
        settings: PollSettings | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.source = source
        self.store = store
        self.output = output
        self.confirm = confirm
        self.settings = settings or PollSettings()
        self._sleep = sleep
        self._clock = clock

        self.state = State.RESUME
        self.current_id: int | None = None
        self.max_id_at_start = UNKNOWN_MAX_ID
        self.gap = 0
        self.stats: RunStats | None = None

        self._handlers = {
            State.RESUME: self._resume,
            State.GAP_CONFIRM: self._confirm_gap,
            State.WALK: self._walk,
            State.IDLE_WAIT: self._idle_wait,
        }

    def step(self) -> State:
        """Run the handler for the current state once; return the next state."""
        self.state = self._handlers[self.state]()
        return self.state

    def run(self, max_steps: int | None = None):
        """Loop forever (or for max_steps transitions)."""
        steps = 0
        while max_steps is None or steps < max_steps:
            self.step()
            steps += 1

    # ── States ──

    def _resume(self) -> State:
        cursor = self.store.load()
        self.output.info(f"Retrieved stored HN ID: {cursor}")

        # One snapshot for both the start position and the gap.
        now_id = self.source.fetch_max_id()

        if cursor > 0:
            start = cursor
        elif now_id == UNKNOWN_MAX_ID:
            raise FetchError("Newest item ID is unavailable and there is no stored cursor to resume from")
        else:
            start = now_id

        self.current_id = start
        self.max_id_at_start = now_id
        self.gap = 0 if now_id == UNKNOWN_MAX_ID else now_id - start
        self.output.info(f"New HN items since last run: {self.gap}")

        if needs_gap_confirmation(start, now_id, self.settings.gap_threshold):
            return State.GAP_CONFIRM
        return self._start_walk()

    def _confirm_gap(self) -> State:
        self.output.info(
            f"\nWARNING: more than {self.settings.gap_threshold} (ie '{self.gap}') "
            f"new HN articles to be checked!"
        )
        decision = self.confirm(self.gap)
        self.current_id = apply_gap_decision(decision, self.current_id, self.max_id_at_start)

        if decision is GapDecision.REPLAY:
            self.output.info(f"'{self.gap}' HN items to be retrieved and processed...")
        else:
            self.output.info(f"Reset to newest HN ID: '{self.current_id}'...")
        log.debug(f"Gap decision: {decision.value}, starting at {self.current_id}")

        # time to abort with Ctrl+C if not intended
        self._sleep(self.settings.grace_period)
        return self._start_walk()

    def _start_walk(self) -> State:
        self.stats = RunStats(start_id=self.current_id)
        minutes = self.settings.idle_interval / 60
        self.output.info(f"Starting with Hacker News ID: '{self.current_id}'")
        self.output.info(f"Waiting for new HN stories... checking every {minutes:g} minutes\n")
        return State.WALK

    def _walk(self) -> State:
        item = self.source.fetch_item(self.current_id)

        if item is None:
            # Might be a hole in the ID space rather than the end of it
            latest = self.source.fetch_max_id()
            if latest != UNKNOWN_MAX_ID and self.current_id < latest:
                log.debug(f"No record for {self.current_id} (max {latest}), skipping")
                self.current_id += 1
                self.stats.skipped += 1
                return State.WALK
            return State.IDLE_WAIT

        if is_displayable(item):
            self._display(item)

        self.store.save(self.current_id)
        self.current_id += 1
        return State.WALK

    def _idle_wait(self) -> State:
        self.output.idle_start(self._clock())
        try:
            self._sleep(self.settings.idle_interval)
        finally:
            self.output.idle_clear()
        return State.WALK

    # ── Helpers ──

    def _display(self, item: Item):
        self.stats.displayed += 1
        author = item.by or UNKNOWN_AUTHOR
        self.output.story(item, author, self._author_info(author), self.stats)

    def _author_info(self, handle: str) -> str:
        try:
            user = self.source.fetch_user(handle)
        except FetchError as e:
            log.debug(f"User lookup for '{handle}' failed: {e}")
            user = None
        return describe_author(user)
