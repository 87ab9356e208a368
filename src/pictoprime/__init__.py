"""Pictoprime - find probable primes whose digits draw a picture."""

__version__ = "0.1.0"

from pictoprime.core.sieve import SmallPrimeSieve, generate_primes
from pictoprime.search.prime_search import PrimeSearch, PrimeSearchResult, find_prime
from pictoprime.search.settings import SearchSettings

__all__ = [
    "SmallPrimeSieve",
    "generate_primes",
    "PrimeSearch",
    "PrimeSearchResult",
    "find_prime",
    "SearchSettings",
]
