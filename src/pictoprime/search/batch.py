"""Per-round candidate batch generation."""

from __future__ import annotations

from typing import List, MutableSet

from pictoprime.core.sieve import SmallPrimeSieve
from pictoprime.search.mutation import DigitMutator

BATCH_ATTEMPT_CAP = 256


def generate_batch(
    tested: MutableSet[int],
    keyframe: str,
    batch_size: int,
    sieve: SmallPrimeSieve,
    mutator: DigitMutator,
    attempt_cap: int = BATCH_ATTEMPT_CAP,
) -> List[int]:
    """Build one round of candidates derived from the keyframe.

    Each slot mutates the keyframe into a value not tested before and retries
    while that value has a small prime factor. Retrying stops when the shared
    attempt cap is hit or once ``len(tested)`` exceeds the keyframe length,
    after which slots accept whatever they drew. Every attempt is recorded in
    ``tested``.

    Only a single-slot batch is re-filtered through the sieve before being
    returned, so with several slots a sieve-divisible value can still reach
    the primality race. It simply fails there.

    Args:
        tested: Candidates generated so far in this search. Updated in place.
        keyframe: Digit string the candidates are mutated from.
        batch_size: Maximum number of candidates, normally the worker count.
        sieve: Small prime rejection filter.
        mutator: Source of single-digit mutations.
        attempt_cap: Total attempts allowed for the whole batch.

    Returns:
        List of candidates, possibly empty.
    """
    batch: List[int] = []
    attempts = 0
    while len(batch) < batch_size and attempts <= attempt_cap:
        while True:
            candidate = int(mutator.mutate_until_novel(tested, keyframe))
            tested.add(candidate)
            attempts += 1
            if not (
                sieve.is_divisible_by_small_prime(candidate)
                and attempts <= attempt_cap
                and len(tested) <= len(keyframe)
            ):
                break
        batch.append(candidate)
        attempts += 1

    if len(batch) == 1:
        return [c for c in batch if not sieve.is_divisible_by_small_prime(c)]
    return batch
