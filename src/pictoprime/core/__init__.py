"""Core prime generation and primality utilities."""

from pictoprime.core.sieve import (
    DEFAULT_SIEVE_BOUND,
    SmallPrimeSieve,
    generate_primes,
)
from pictoprime.core.primality import (
    is_probable_prime,
    miller_rabin_test,
    rounds_for_confidence,
)

__all__ = [
    "DEFAULT_SIEVE_BOUND",
    "SmallPrimeSieve",
    "generate_primes",
    "is_probable_prime",
    "miller_rabin_test",
    "rounds_for_confidence",
]
