"""Keyframe escape heuristic.

A search that keeps failing around the same keyframe is nudged out of that
neighbourhood in increasingly drastic ways:

    REKEY       mutate the current keyframe into a new keyframe
    RESTART     mutate the original digits into a new keyframe
    DEGENERATE  mutate the original with the full digit alphabet and
                adopt the result as the new original

Each action has its own threshold. A threshold fires when its metric
exceeds it and then jumps to the next multiple of its initial value above
the current number of tested candidates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sized

DEFAULT_DEGENERATE_STEP = 160
RESTART_FACTOR = 4


class KeyframeAction(Enum):
    """What the search loop should do with its keyframe after a round."""
    NORMAL = "normal"
    REKEY = "rekey"
    RESTART = "restart"
    DEGENERATE = "degenerate"


def next_multiple_above(step: int, value: int) -> int:
    """Smallest multiple of step strictly greater than value."""
    return step + (value // step) * step


@dataclass
class _Threshold:
    step: int
    current: int = field(init=False)

    def __post_init__(self):
        if self.step < 1:
            raise ValueError(f"threshold step must be >= 1, got {self.step}")
        self.current = self.step

    def check(self, metric: int, advance_past: int) -> bool:
        fired = metric > self.current
        if fired:
            self.current = next_multiple_above(self.step, advance_past)
        return fired


class HeuristicController:
    """Decides after every failed round whether to move the keyframe.

    Args:
        digit_length: Length of the keyframe; the rekey step, and four times
            it the restart step.
        degenerate_step: Step of the degenerate threshold, compared against
            the number of rounds that produced an empty batch.
    """

    def __init__(self, digit_length: int, degenerate_step: int = DEFAULT_DEGENERATE_STEP):
        self._rekey = _Threshold(digit_length)
        self._restart = _Threshold(RESTART_FACTOR * digit_length)
        self._degenerate = _Threshold(degenerate_step)

    @property
    def rekey_threshold(self) -> int:
        return self._rekey.current

    @property
    def restart_threshold(self) -> int:
        return self._restart.current

    @property
    def degenerate_threshold(self) -> int:
        return self._degenerate.current

    def thresholds(self) -> tuple[int, int, int]:
        return (self.rekey_threshold, self.restart_threshold, self.degenerate_threshold)

    def evaluate(self, tested: Sized, failed_viable: int) -> KeyframeAction:
        """Update all thresholds and pick this round's action.

        All three thresholds are checked every round, even when an earlier
        one already decides the action.

        Args:
            tested: The tested set (only its size is used).
            failed_viable: Number of rounds so far whose batch was empty.

        Returns:
            The first applicable action in order REKEY, RESTART, DEGENERATE,
            or NORMAL if none applies.
        """
        size = len(tested)
        rekey = self._rekey.check(size, size)
        restart = self._restart.check(size, size)
        degenerate = self._degenerate.check(failed_viable, max(size, failed_viable))

        if size == 0 or rekey:
            return KeyframeAction.REKEY
        if restart:
            return KeyframeAction.RESTART
        if degenerate:
            return KeyframeAction.DEGENERATE
        return KeyframeAction.NORMAL
