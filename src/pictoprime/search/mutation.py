"""Single digit mutations of a digit string.

All candidates of a search are derived from a keyframe by replacing exactly
one digit. Which digits may replace which is governed by an adjacency table
chosen so that the printed number keeps roughly the same shape.
"""

from __future__ import annotations

import random
from typing import AbstractSet, Mapping, Optional, Sequence, Tuple

DEFAULT_RETRY_BUDGET = 256


class MutationError(ValueError):
    """Raised when a digit string has no position that may be mutated."""


def swap_last_digit(original: str, last_digit_table: Mapping[str, str]) -> str:
    """Replace the trailing digit using the last-digit table.

    Args:
        original: Digit string.
        last_digit_table: Digit -> replacement digit.

    Returns:
        The digit string with its last digit substituted, or the input
        unchanged when the last digit has no table entry.
    """
    last = original[-1]
    if last in last_digit_table:
        return original[:-1] + last_digit_table[last]
    return original


class DigitMutator:
    """Random single-digit substitutions under an adjacency table.

    The mutator owns its random source so that a search can be replayed from
    a seed and no module-level random state is shared between searches.
    """

    def __init__(
        self,
        allowed_modifications: Mapping[str, Sequence[str]],
        rng: Optional[random.Random] = None,
    ):
        self.allowed_modifications = allowed_modifications
        self.rng = rng if rng is not None else random.Random()

    def _replacements(self, digit: str, index: int, alphabet: Optional[Sequence[str]]) -> Tuple[str, ...]:
        if alphabet is not None:
            choices = tuple(alphabet)
        else:
            choices = tuple(self.allowed_modifications.get(digit, ()))
        if index == 0:
            # never introduce a leading zero
            choices = tuple(c for c in choices if c != '0')
        return choices

    def mutable_indices(self, source: str, alphabet: Optional[Sequence[str]] = None) -> list[int]:
        """Positions of source that mutate_once may pick.

        The final position is never included. In normal mode a position is
        eligible when its digit has an adjacency entry; with an explicit
        alphabet every position is eligible.
        """
        return [
            i for i in range(len(source) - 1)
            if self._replacements(source[i], i, alphabet)
        ]

    def mutate_once(self, source: str, alphabet: Optional[Sequence[str]] = None) -> str:
        """Replace one randomly chosen digit of source.

        The index is drawn uniformly from the eligible positions and the new
        digit uniformly from the adjacency entry of the old digit (or from
        ``alphabet`` when given). The replacement may equal the old digit.

        Args:
            source: Digit string of length >= 2.
            alphabet: Optional override of the replacement set; enables
                mutation at every position.

        Returns:
            A digit string of the same length as source.

        Raises:
            MutationError: If source has no eligible position.
        """
        indices = self.mutable_indices(source, alphabet)
        if not indices:
            raise MutationError(f"no mutable digit in {source!r}")

        index = self.rng.choice(indices)
        replace_with = self.rng.choice(self._replacements(source[index], index, alphabet))
        return source[:index] + replace_with + source[index + 1:]

    def mutate_until_novel(
        self,
        tested: AbstractSet[int],
        source: str,
        alphabet: Optional[Sequence[str]] = None,
        retry_budget: int = DEFAULT_RETRY_BUDGET,
    ) -> str:
        """Mutate source until the result has not been tested yet.

        Gives up after ``retry_budget`` extra attempts and returns the last
        mutation even if it was already tested.
        """
        value = self.mutate_once(source, alphabet)
        attempts = 0
        while int(value) in tested and attempts < retry_budget:
            value = self.mutate_once(source, alphabet)
            attempts += 1
        return value
