"""Mutation-driven probable prime search."""

from pictoprime.search.settings import (
    DEFAULT_ALLOWED_MODIFICATIONS,
    DEFAULT_CONFIDENCE,
    DEFAULT_LAST_DIGIT_MODIFICATION,
    DIGITS,
    SearchSettings,
    SettingsError,
)
from pictoprime.search.mutation import (
    DigitMutator,
    MutationError,
    swap_last_digit,
)
from pictoprime.search.batch import generate_batch
from pictoprime.search.heuristic import (
    HeuristicController,
    KeyframeAction,
)
from pictoprime.search.race import (
    CandidateOutcome,
    PrimalityRace,
    evaluate_candidate,
)
from pictoprime.search.sophie import (
    AlmostSophieGermainMultipliers,
    find_almost_sophie_germain,
)
from pictoprime.search.prime_search import (
    PrimeSearch,
    PrimeSearchResult,
    find_prime,
    validate_digits,
)

__all__ = [
    # Settings
    'DEFAULT_ALLOWED_MODIFICATIONS',
    'DEFAULT_CONFIDENCE',
    'DEFAULT_LAST_DIGIT_MODIFICATION',
    'DIGITS',
    'SearchSettings',
    'SettingsError',
    # Mutation and batches
    'DigitMutator',
    'MutationError',
    'swap_last_digit',
    'generate_batch',
    # Heuristic
    'HeuristicController',
    'KeyframeAction',
    # Race
    'CandidateOutcome',
    'PrimalityRace',
    'evaluate_candidate',
    # Companion search
    'AlmostSophieGermainMultipliers',
    'find_almost_sophie_germain',
    # Search
    'PrimeSearch',
    'PrimeSearchResult',
    'find_prime',
    'validate_digits',
]
