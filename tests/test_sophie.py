"""Tests for the almost Sophie Germain companion search."""

import random
from concurrent.futures import ThreadPoolExecutor
from itertools import islice

import pytest

from pictoprime.core.primality import is_probable_prime
from pictoprime.core.sieve import SmallPrimeSieve
from pictoprime.search.race import PrimalityRace
from pictoprime.search.sophie import (
    AlmostSophieGermainMultipliers,
    companion_value,
    find_almost_sophie_germain,
)


@pytest.fixture(scope="module")
def sieve():
    return SmallPrimeSieve()


@pytest.fixture
def race():
    with PrimalityRace(40, workers=2, executor_factory=ThreadPoolExecutor,
                       rng=random.Random(0)) as race:
        yield race


class RecordingRace:
    """Race stand-in that never finds a prime."""

    def __init__(self, workers):
        self.workers = workers
        self.batches = []

    def race(self, candidates):
        self.batches.append(list(candidates))
        return None


class TestMultiplierSequence:
    """Tests for AlmostSophieGermainMultipliers."""

    def test_first_terms(self):
        """Sequence starts with the even numbers and then the decades."""
        expected = [2, 4, 6, 8, 10, 20, 30, 40, 50, 60, 70, 80, 90,
                    100, 200, 300, 400, 500, 600, 700, 800, 900, 1000]
        assert list(islice(AlmostSophieGermainMultipliers(), len(expected))) == expected

    def test_terminates_after_decade_32(self):
        """The last term is 9 * 10**32."""
        terms = list(AlmostSophieGermainMultipliers())
        assert len(terms) == 4 + 9 * 32
        assert terms[-1] == 9 * 10 ** 32
        assert terms[-9] == 10 ** 32

    def test_stays_exhausted(self):
        """Every call after exhaustion signals the end again."""
        multipliers = AlmostSophieGermainMultipliers()
        list(multipliers)
        with pytest.raises(StopIteration):
            next(multipliers)
        with pytest.raises(StopIteration):
            next(multipliers)


class TestFindAlmostSophieGermain:
    """Tests for find_almost_sophie_germain."""

    def test_companion_value(self):
        """Companion is m * p + 1."""
        assert companion_value(2, 11) == 23
        assert companion_value(10, 7) == 71

    def test_companion_is_odd_for_odd_primes(self):
        """Every multiplier gives an odd companion for an odd prime."""
        for m in AlmostSophieGermainMultipliers():
            assert companion_value(m, 8049922777) % 2 == 1

    def test_classic_sophie_germain(self, sieve, race):
        """For a Sophie Germain prime the first multiplier wins."""
        assert find_almost_sophie_germain(11, sieve, race) == 23
        assert find_almost_sophie_germain(5, sieve, race) == 11

    def test_large_prime(self, sieve, race):
        """The companion of a large prime is a probable prime of the right form."""
        p = 2 ** 61 - 1
        companion = find_almost_sophie_germain(p, sieve, race)
        assert companion is not None
        assert (companion - 1) % p == 0
        assert is_probable_prime(companion, 40, rng=random.Random(1))

    def test_exhaustion_returns_none(self, sieve):
        """Running out of multipliers is a normal not-found result."""
        fake = RecordingRace(workers=5)
        assert find_almost_sophie_germain(2 ** 61 - 1, sieve, fake) is None
        raced = [value for batch in fake.batches for value in batch]
        assert raced
        assert all(not sieve.is_divisible_by_small_prime(v) for v in raced)
        assert all(len(batch) <= 5 for batch in fake.batches)

    def test_batch_size_override(self, sieve):
        """Explicit batch size controls how many multipliers are drawn."""
        fake = RecordingRace(workers=8)
        find_almost_sophie_germain(2 ** 61 - 1, sieve, fake, batch_size=1)
        assert all(len(batch) == 1 for batch in fake.batches)
