"""
Backlog handling at startup.

The policy is pure: given where we'd start and the newest ID, is the gap
big enough to ask about, and where does each answer put us. Asking is
a separate, swappable callable so unattended runs can skip the prompt.
"""

import logging
from typing import Callable

from models import UNKNOWN_MAX_ID, GapDecision

log = logging.getLogger(__name__)

DEFAULT_GAP_THRESHOLD = 100

GapPrompt = Callable[[int], GapDecision]


def needs_gap_confirmation(current: int, max_id: int, threshold: int = DEFAULT_GAP_THRESHOLD) -> bool:
    """True iff more than `threshold` items were published since `current`."""
    if max_id == UNKNOWN_MAX_ID:
        return False
    return (max_id - current) > threshold


def apply_gap_decision(decision: GapDecision, current: int, max_id: int) -> int:
    """Starting ID after the operator's choice."""
    if decision is GapDecision.FAST_FORWARD and max_id != UNKNOWN_MAX_ID:
        return max_id
    return current


def prompt_gap_decision(gap: int, input_fn: Callable[[str], str] = input) -> GapDecision:
    """Ask on the terminal. Anything but 'y' fast-forwards."""
    try:
        answer = input_fn(
            "Retrieve ALL anyway ('y')  OR  start with current newest ('n') [RECOMMENDED] ? [y/N] "
        )
    except EOFError:
        log.info(f"No terminal input, skipping backlog of {gap} items")
        return GapDecision.FAST_FORWARD
    if answer.strip().lower() in ("y", "yes"):
        return GapDecision.REPLAY
    return GapDecision.FAST_FORWARD


def gap_prompt_for(policy: str) -> GapPrompt:
    """Map HNPULL_GAP_POLICY to the callable the poller uses."""
    match policy:
        case "ask":
            return prompt_gap_decision
        case "replay":
            return lambda gap: GapDecision.REPLAY
        case "fast-forward":
            return lambda gap: GapDecision.FAST_FORWARD
        case _:
            raise ValueError(f"Unknown gap policy: {policy}")
