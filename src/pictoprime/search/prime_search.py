"""Search for a probable prime that keeps the look of a digit pattern.

The approach:
1. Steer the last digit towards one a prime can end with
2. Mutate single digits of a keyframe into a batch of untested candidates
3. Race the batch through a probabilistic primality test
4. On failure let the escape heuristic decide whether to move the keyframe
5. Repeat until a candidate wins, then optionally look for a companion prime

Mutations only swap digits for visually similar ones, so the result still
reads like the picture the digits were drawn from.
"""

from __future__ import annotations

import logging
import random
import sys
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Set

from tqdm import tqdm

from pictoprime.core.sieve import SmallPrimeSieve
from pictoprime.search.batch import generate_batch
from pictoprime.search.heuristic import HeuristicController, KeyframeAction
from pictoprime.search.mutation import DigitMutator, MutationError, swap_last_digit
from pictoprime.search.race import ExecutorFactory, PrimalityRace, available_parallelism
from pictoprime.search.settings import DIGITS, SearchSettings
from pictoprime.search.sophie import find_almost_sophie_germain

logger = logging.getLogger(__name__)

# Digit strings of large pictures run past the default int<->str limit (3.11+)
if hasattr(sys, "set_int_max_str_digits"):
    sys.set_int_max_str_digits(0)


@dataclass
class PrimeSearchResult:
    """Results from a prime search."""
    prime: str
    attempts: int
    workers: int
    distinct_tested: int
    elapsed: float
    companion: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        if self.companion is not None:
            d['companion'] = str(self.companion)
        return d


def validate_digits(digits: str) -> str:
    """Check that digits is a usable search input.

    Raises:
        ValueError: If digits is empty, shorter than two characters, holds
            anything but 0-9, or starts with a zero.
    """
    if not isinstance(digits, str) or not digits:
        raise ValueError("digit string must be a non-empty str")
    if any(c not in DIGITS for c in digits):
        raise ValueError(f"digit string may only contain 0-9, got {digits!r}")
    if len(digits) < 2:
        raise ValueError("digit string needs at least two digits")
    if digits[0] == '0':
        raise ValueError("digit string must not start with 0")
    return digits


class PrimeSearch:
    """Mutation-driven probable prime search.

    Each call to :meth:`find_prime` acquires its own worker pool and releases
    it before returning, so one instance can run several searches in turn.

    Args:
        settings: Digit tables, confidence and sieve bound.
        workers: Parallelism; also the batch size. Defaults to the CPU count.
        rng: Random source for mutations and witness seeds.
        executor_factory: Executor type for the primality race.
        sieve: Prebuilt small prime sieve to share between searches.
    """

    def __init__(
        self,
        settings: Optional[SearchSettings] = None,
        workers: Optional[int] = None,
        rng: Optional[random.Random] = None,
        executor_factory: Optional[ExecutorFactory] = None,
        sieve: Optional[SmallPrimeSieve] = None,
    ):
        self.settings = settings if settings is not None else SearchSettings()
        self.workers = workers if workers is not None else available_parallelism()
        self.rng = rng if rng is not None else random.Random()
        self.executor_factory = executor_factory
        self.sieve = sieve if sieve is not None else SmallPrimeSieve(self.settings.sieve_bound)
        self.mutator = DigitMutator(self.settings.allowed_modifications, self.rng)

    def find_prime(
        self,
        digits: str,
        find_sophie_companion: bool = False,
        progress: bool = False,
    ) -> PrimeSearchResult:
        """Find a probable prime close to digits.

        Blocks until a probable prime is found; there is no time limit.

        Args:
            digits: Source digit string.
            find_sophie_companion: Also search for an almost Sophie Germain
                companion of the prime found.
            progress: Show a round counter on stderr.

        Returns:
            PrimeSearchResult for the search.

        Raises:
            ValueError: If digits is malformed.
            MutationError: If no digit of the input may be mutated.
        """
        validate_digits(digits)
        start_time = time.time()

        original = swap_last_digit(digits, self.settings.last_digit_modification)
        if not self.mutator.mutable_indices(original):
            raise MutationError(
                f"no digit of {original!r} has an entry in allowed_modifications"
            )
        keyframe = original

        tested: Set[int] = set()
        attempts = 0
        failed_viable = 0
        controller = HeuristicController(len(keyframe))

        logger.debug("Searching from %s with %d workers", original, self.workers)

        with PrimalityRace(
            self.settings.confidence,
            workers=self.workers,
            executor_factory=self.executor_factory,
            rng=self.rng,
        ) as race, tqdm(desc="Search rounds", unit="round", disable=not progress, leave=False) as pbar:
            while True:
                batch = generate_batch(tested, keyframe, self.workers, self.sieve, self.mutator)
                winner = race.race(batch)
                if winner is not None:
                    break

                attempts += 1
                if not batch:
                    failed_viable += 1
                pbar.update(1)

                action = controller.evaluate(tested, failed_viable)
                if action is KeyframeAction.REKEY:
                    keyframe = self.mutator.mutate_until_novel(tested, keyframe)
                elif action is KeyframeAction.RESTART:
                    keyframe = self.mutator.mutate_until_novel(tested, original)
                elif action is KeyframeAction.DEGENERATE:
                    keyframe = original = self.mutator.mutate_once(original, DIGITS)

                if action is not KeyframeAction.NORMAL:
                    logger.debug("Round %d: %s -> keyframe %s (tested=%d, failed_viable=%d)",
                                 attempts, action.value, keyframe, len(tested), failed_viable)

            logger.info("Found probable prime after %d rounds (%d distinct candidates)",
                        attempts, len(tested))

            companion = None
            if find_sophie_companion:
                logger.info("Trying to find almost Sophie Germain companion")
                companion = find_almost_sophie_germain(winner, self.sieve, race)

        return PrimeSearchResult(
            prime=str(winner),
            attempts=attempts,
            workers=self.workers,
            distinct_tested=len(tested),
            elapsed=time.time() - start_time,
            companion=companion,
        )


def find_prime(
    digits: str,
    find_sophie_companion: bool = False,
    confidence: Optional[int] = None,
    settings: Optional[SearchSettings] = None,
    workers: Optional[int] = None,
    seed: Optional[int] = None,
    executor_factory: Optional[ExecutorFactory] = None,
    progress: bool = False,
) -> PrimeSearchResult:
    """Run one probable prime search with a fresh PrimeSearch.

    Args:
        digits: Source digit string.
        find_sophie_companion: Also search for a companion prime.
        confidence: False positive bound ``2**-confidence``. Overrides the
            value in settings when given; settings default to
            DEFAULT_CONFIDENCE.
        settings: Digit tables; defaults when omitted.
        workers: Parallelism. Defaults to the CPU count.
        seed: Seed for the search's random source.
        executor_factory: Executor type for the primality race.
        progress: Show a round counter.

    Returns:
        PrimeSearchResult for the search.
    """
    if settings is None:
        settings = SearchSettings()
    if confidence is not None:
        settings = settings.with_confidence(confidence)

    search = PrimeSearch(
        settings=settings,
        workers=workers,
        rng=random.Random(seed),
        executor_factory=executor_factory,
    )
    return search.find_prime(digits, find_sophie_companion, progress=progress)
