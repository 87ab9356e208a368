"""Small prime generation and cheap compositeness rejection.

The sieve is only ever run once per search up to a small fixed bound; its
primes are used to throw away candidates with an obvious small factor before
they reach the (much more expensive) probabilistic primality test.
"""

from __future__ import annotations

import math

import numpy as np

DEFAULT_SIEVE_BOUND = 17389


def generate_primes(limit: int) -> np.ndarray:
    """NumPy-based Sieve of Eratosthenes.

    Args:
        limit: Upper bound for prime generation (inclusive).

    Returns:
        Ascending array of prime numbers up to limit. Empty when limit < 2.
    """
    if limit < 2:
        return np.array([], dtype=np.int64)

    is_prime = np.ones(limit + 1, dtype=bool)
    is_prime[0] = False
    is_prime[1] = False

    for i in range(2, math.isqrt(limit) + 1):
        if is_prime[i]:
            is_prime[i*i::i] = False

    return np.nonzero(is_prime)[0].astype(np.int64)


class SmallPrimeSieve:
    """Precomputed primes up to a fixed bound, used as a rejection filter.

    Divisibility is checked with a single gcd against the product of all
    sieve primes instead of one modulo per prime.
    """

    def __init__(self, bound: int = DEFAULT_SIEVE_BOUND):
        self.bound = bound
        self._primes = generate_primes(bound)
        self._prime_set = frozenset(int(p) for p in self._primes)
        self._product = math.prod(int(p) for p in self._primes)

    @property
    def primes(self) -> np.ndarray:
        """Ascending array of the sieve primes."""
        return self._primes

    def __len__(self) -> int:
        return len(self._primes)

    def __contains__(self, value: int) -> bool:
        return value in self._prime_set

    def is_divisible_by_small_prime(self, candidate: int) -> bool:
        """Check whether any sieve prime divides the candidate.

        Unlike a plain divisibility test, a candidate that is itself one of
        the sieve primes is not reported: ``is_divisible_by_small_prime(7)``
        is False. Short inputs whose only probable primes lie below the bound
        can then still be found.

        Args:
            candidate: Non-negative integer to check.

        Returns:
            True if a sieve prime other than the candidate divides it.
        """
        if candidate == 0:
            return len(self._primes) > 0

        common = math.gcd(candidate, self._product)
        if common == 1:
            return False
        if common == candidate:
            # candidate is a squarefree product of sieve primes
            return candidate not in self._prime_set
        return True
