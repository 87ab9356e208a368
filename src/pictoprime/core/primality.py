"""Miller-Rabin probable prime testing with an explicit confidence level."""

from __future__ import annotations

import math
import random
from typing import Optional


def rounds_for_confidence(confidence: int) -> int:
    """Number of Miller-Rabin rounds needed for a given confidence.

    Each round lets a composite through with probability at most 1/4, so
    ``ceil(confidence / 2)`` rounds bound the false positive rate by
    ``2**-confidence``.

    Args:
        confidence: Required confidence exponent (>= 1).

    Returns:
        Number of rounds, at least 1.

    Raises:
        ValueError: If confidence is less than 1.
    """
    if confidence < 1:
        raise ValueError(f"confidence must be >= 1, got {confidence}")
    return max(1, math.ceil(confidence / 2))


def _split_power_of_two(m: int) -> tuple[int, int]:
    """Write m as ``2**r * d`` with d odd and return (r, d)."""
    r = (m & -m).bit_length() - 1
    return r, m >> r


def _passes_round(witness: int, n: int, r: int, d: int) -> bool:
    """True unless witness proves n composite."""
    x = pow(witness, d, n)
    if x == 1 or x == n - 1:
        return True
    for _ in range(r - 1):
        x = x * x % n
        if x == n - 1:
            return True
    return False


def miller_rabin_test(n: int, k: int = 10, rng: Optional[random.Random] = None) -> bool:
    """Miller-Rabin primality test.

    Args:
        n: Number to test
        k: Number of rounds, each with a fresh random witness
        rng: Source of random witnesses. A fresh unseeded one if omitted.

    Returns:
        True if probably prime, False if definitely composite
    """
    if n < 4:
        return n in (2, 3)
    if n % 2 == 0:
        return False

    if rng is None:
        rng = random.Random()

    r, d = _split_power_of_two(n - 1)
    return all(_passes_round(rng.randrange(2, n - 1), n, r, d) for _ in range(k))


def is_probable_prime(n: int, confidence: int, rng: Optional[random.Random] = None) -> bool:
    """Probable prime check with false positive probability <= 2**-confidence."""
    return miller_rabin_test(n, rounds_for_confidence(confidence), rng=rng)
