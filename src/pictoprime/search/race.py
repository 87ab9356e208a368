"""Concurrent first-success-wins primality testing.

Every candidate of a batch is tested by its own worker. The first worker to
report a probable prime decides the race; evaluations that have not started
yet are cancelled and the results of those still running are ignored.
"""

from __future__ import annotations

import logging
import os
import random
from concurrent.futures import FIRST_COMPLETED, Executor, ProcessPoolExecutor, wait
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from pictoprime.core.primality import is_probable_prime, rounds_for_confidence

logger = logging.getLogger(__name__)

ExecutorFactory = Callable[..., Executor]


@dataclass(frozen=True)
class CandidateOutcome:
    """Result of testing one candidate."""
    candidate: int
    probable_prime: bool


def evaluate_candidate(candidate: int, confidence: int, seed: int) -> CandidateOutcome:
    """Worker body: test one candidate with its own seeded random source."""
    rng = random.Random(seed)
    return CandidateOutcome(candidate, is_probable_prime(candidate, confidence, rng=rng))


def available_parallelism() -> int:
    return os.cpu_count() or 1


class PrimalityRace:
    """Races batches of candidates over a worker pool it owns.

    The pool is acquired in the constructor and released by ``close()``; a
    closed race cannot be reused. Create one per search.

    Args:
        confidence: Composites pass with probability at most
            ``2**-confidence``. Must be passed explicitly.
        workers: Pool size. Defaults to the number of CPUs.
        executor_factory: Callable taking ``max_workers`` and returning an
            Executor. Defaults to ProcessPoolExecutor since the test is
            CPU-bound.
        rng: Source of per-candidate seeds for the witness draws.
    """

    def __init__(
        self,
        confidence: int,
        workers: Optional[int] = None,
        executor_factory: Optional[ExecutorFactory] = None,
        rng: Optional[random.Random] = None,
    ):
        rounds_for_confidence(confidence)  # validates
        self.confidence = confidence
        self.workers = workers if workers is not None else available_parallelism()
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        self.rng = rng if rng is not None else random.Random()

        if executor_factory is None:
            executor_factory = ProcessPoolExecutor
        self._executor = executor_factory(max_workers=self.workers)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def race(self, candidates: Iterable[int]) -> Optional[int]:
        """Test candidates concurrently and return the first probable prime.

        Args:
            candidates: Integers to test.

        Returns:
            The winning candidate, or None when no candidate is a probable
            prime.

        Raises:
            RuntimeError: If the race has been closed.
        """
        if self._closed:
            raise RuntimeError("PrimalityRace is closed; create a new one for another search")

        pending = {
            self._executor.submit(
                evaluate_candidate, candidate, self.confidence, self.rng.getrandbits(64)
            )
            for candidate in candidates
        }
        try:
            while pending:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    outcome = future.result()
                    if outcome.probable_prime:
                        return outcome.candidate
            return None
        finally:
            for future in pending:
                future.cancel()

    def close(self) -> None:
        """Shut the pool down without waiting for abandoned evaluations."""
        if not self._closed:
            self._closed = True
            self._executor.shutdown(wait=False, cancel_futures=True)
            logger.debug("Primality race pool shut down")

    def __enter__(self) -> 'PrimalityRace':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
