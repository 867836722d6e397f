"""
Tests for the startup backlog policy.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from models import UNKNOWN_MAX_ID, GapDecision
from poller.gap import apply_gap_decision, gap_prompt_for, needs_gap_confirmation, prompt_gap_decision


class TestNeedsGapConfirmation:
    def test_exactly_threshold_does_not_trigger(self):
        assert needs_gap_confirmation(1000, 1100) is False

    def test_one_over_threshold_triggers(self):
        assert needs_gap_confirmation(1000, 1101) is True

    def test_no_gap(self):
        assert needs_gap_confirmation(5000, 5000) is False

    def test_cursor_ahead_of_max(self):
        assert needs_gap_confirmation(5000, 4990) is False

    def test_unknown_max_never_triggers(self):
        assert needs_gap_confirmation(10, UNKNOWN_MAX_ID) is False

    def test_custom_threshold(self):
        assert needs_gap_confirmation(0, 11, threshold=10) is True
        assert needs_gap_confirmation(1, 11, threshold=10) is False


class TestApplyGapDecision:
    def test_replay_keeps_position(self):
        assert apply_gap_decision(GapDecision.REPLAY, 1000, 5000) == 1000

    def test_fast_forward_jumps_to_max(self):
        assert apply_gap_decision(GapDecision.FAST_FORWARD, 1000, 5000) == 5000

    def test_fast_forward_never_jumps_to_sentinel(self):
        assert apply_gap_decision(GapDecision.FAST_FORWARD, 1000, UNKNOWN_MAX_ID) == 1000


class TestPrompt:
    @pytest.mark.parametrize("answer", ["y", "Y", "yes", " y "])
    def test_yes_replays(self, answer):
        assert prompt_gap_decision(500, input_fn=lambda _: answer) is GapDecision.REPLAY

    @pytest.mark.parametrize("answer", ["n", "", "maybe"])
    def test_anything_else_fast_forwards(self, answer):
        assert prompt_gap_decision(500, input_fn=lambda _: answer) is GapDecision.FAST_FORWARD

    def test_eof_fast_forwards(self):
        def no_tty(_):
            raise EOFError

        assert prompt_gap_decision(500, input_fn=no_tty) is GapDecision.FAST_FORWARD


class TestGapPromptFor:
    def test_fixed_policies(self):
        assert gap_prompt_for("replay")(999) is GapDecision.REPLAY
        assert gap_prompt_for("fast-forward")(999) is GapDecision.FAST_FORWARD

    def test_ask_uses_terminal_prompt(self):
        assert gap_prompt_for("ask") is prompt_gap_decision

    def test_unknown_policy(self):
        with pytest.raises(ValueError):
            gap_prompt_for("sometimes")
