"""Almost Sophie Germain companion search.

For a prime p, a Sophie Germain companion is 2p + 1. This module relaxes the
multiplier: it walks the sequence 2, 4, 6, 8, 10, 20, ..., 90, 100, 200, ...
and looks for the first m such that m*p + 1 is a probable prime.
"""

from __future__ import annotations

import logging
from itertools import islice
from typing import Iterator, List, Optional

from pictoprime.core.sieve import SmallPrimeSieve
from pictoprime.search.race import PrimalityRace

logger = logging.getLogger(__name__)

LEADING_MULTIPLIERS = (2, 4, 6, 8)
MAX_DECADE = 32


class AlmostSophieGermainMultipliers:
    """Iterator over the fixed multiplier sequence.

    Yields 2, 4, 6, 8 and then ``10**i * j`` for j cycling 1..9, with i
    starting at 1 and incremented every nine terms. Stops once i would
    exceed 32; every later call to ``next()`` raises StopIteration again.
    """

    def __init__(self):
        self.index = -1

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        self.index += 1
        if self.index < len(LEADING_MULTIPLIERS):
            return LEADING_MULTIPLIERS[self.index]

        offset = self.index - len(LEADING_MULTIPLIERS)
        decade = offset // 9 + 1
        if decade > MAX_DECADE:
            raise StopIteration
        return 10 ** decade * (offset % 9 + 1)


def companion_value(multiplier: int, prime: int) -> int:
    """Companion candidate ``multiplier * prime + 1``.

    This is not the ``multiplier * (prime + 1)`` form, which is even for
    every odd prime and so never a probable prime. With a multiplier of 2
    it is the classical Sophie Germain companion ``2p + 1``.
    """
    return multiplier * prime + 1


def find_almost_sophie_germain(
    prime: int,
    sieve: SmallPrimeSieve,
    race: PrimalityRace,
    batch_size: Optional[int] = None,
) -> Optional[int]:
    """Find the first probable prime companion of prime.

    Multipliers are drawn ``batch_size`` at a time; companions with a small
    prime factor are dropped and the rest are raced through the primality
    test.

    Args:
        prime: A (probable) prime.
        sieve: Small prime rejection filter.
        race: Open primality race to test survivors with.
        batch_size: Multipliers per batch. Defaults to the race's worker count.

    Returns:
        The companion value, or None once the multiplier sequence is exhausted.
    """
    if batch_size is None:
        batch_size = race.workers

    multipliers = AlmostSophieGermainMultipliers()
    while True:
        batch: List[int] = list(islice(multipliers, batch_size))
        if not batch:
            logger.info("No almost Sophie Germain companion found for %d", prime)
            return None

        survivors = [
            value for value in (companion_value(m, prime) for m in batch)
            if not sieve.is_divisible_by_small_prime(value)
        ]
        if not survivors:
            continue

        winner = race.race(survivors)
        if winner is not None:
            logger.info("Found almost Sophie Germain companion with multiplier %d",
                        (winner - 1) // prime)
            return winner
