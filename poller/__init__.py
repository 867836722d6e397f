from poller.engine import Poller, PollSettings, State
from poller.gap import apply_gap_decision, gap_prompt_for, needs_gap_confirmation, prompt_gap_decision

__all__ = [
    "Poller",
    "PollSettings",
    "State",
    "apply_gap_decision",
    "gap_prompt_for",
    "needs_gap_confirmation",
    "prompt_gap_decision",
]
