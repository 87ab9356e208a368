"""Search configuration: digit tables and primality confidence.

Settings files are plain JSON. Both snake_case keys and the camelCase keys
used by the original ``settings.json`` layout are accepted::

    {
        "allowedModifications": {"0": ["8", "9", "5"], "1": ["7"]},
        "lastDigitModification": {"0": "3", "2": "3"},
        "confidence": 40
    }

Keys that are missing keep their default values.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from pictoprime.core.sieve import DEFAULT_SIEVE_BOUND

DIGITS = "0123456789"

DEFAULT_CONFIDENCE = 40

DEFAULT_ALLOWED_MODIFICATIONS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    '0': ('8', '9', '5'),
    '1': ('7',),
    '2': ('6',),
    '4': ('9',),
    '5': ('0',),
    '6': ('2',),
    '7': ('1',),
    '8': ('0', '9'),
    '9': ('4',),
})

DEFAULT_LAST_DIGIT_MODIFICATION: Mapping[str, str] = MappingProxyType({
    '0': '3',
    '2': '3',
    '4': '9',
    '6': '9',
    '8': '9',
    '5': '3',
})

_KEY_ALIASES = {
    'allowedModifications': 'allowed_modifications',
    'lastDigitModification': 'last_digit_modification',
    'sieveBound': 'sieve_bound',
}


class SettingsError(ValueError):
    """Raised when a settings source holds invalid tables or values."""


def _check_digit(value: Any, where: str) -> str:
    if not isinstance(value, str) or len(value) != 1 or value not in DIGITS:
        raise SettingsError(f"{where}: expected a single decimal digit, got {value!r}")
    return value


def _freeze_adjacency(table: Mapping[str, Any]) -> Mapping[str, Tuple[str, ...]]:
    frozen = {}
    for digit, replacements in table.items():
        _check_digit(digit, "allowed_modifications key")
        if isinstance(replacements, str):
            replacements = list(replacements)
        replacements = tuple(
            _check_digit(r, f"allowed_modifications[{digit!r}]") for r in replacements
        )
        if not replacements:
            raise SettingsError(f"allowed_modifications[{digit!r}] must not be empty")
        frozen[digit] = replacements
    return MappingProxyType(frozen)


def _freeze_last_digit(table: Mapping[str, Any]) -> Mapping[str, str]:
    frozen = {}
    for digit, replacement in table.items():
        _check_digit(digit, "last_digit_modification key")
        frozen[digit] = _check_digit(replacement, f"last_digit_modification[{digit!r}]")
    return MappingProxyType(frozen)


@dataclass(frozen=True)
class SearchSettings:
    """Immutable configuration for one or more prime searches.

    Attributes:
        allowed_modifications: Digit -> digits that may replace it. Digits
            without an entry are never mutated in normal mode.
        last_digit_modification: Digit -> replacement applied once to the
            trailing digit before the search starts.
        confidence: The probabilistic test accepts a composite with
            probability at most ``2**-confidence``. Low values are fast but
            let composites through; set them deliberately.
        sieve_bound: Upper bound of the small prime rejection sieve.
    """
    allowed_modifications: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: DEFAULT_ALLOWED_MODIFICATIONS
    )
    last_digit_modification: Mapping[str, str] = field(
        default_factory=lambda: DEFAULT_LAST_DIGIT_MODIFICATION
    )
    confidence: int = DEFAULT_CONFIDENCE
    sieve_bound: int = DEFAULT_SIEVE_BOUND

    def __post_init__(self):
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(
            self, 'allowed_modifications', _freeze_adjacency(self.allowed_modifications)
        )
        object.__setattr__(
            self, 'last_digit_modification', _freeze_last_digit(self.last_digit_modification)
        )
        if not isinstance(self.confidence, int) or self.confidence < 1:
            raise SettingsError(f"confidence must be an integer >= 1, got {self.confidence!r}")
        if not isinstance(self.sieve_bound, int) or self.sieve_bound < 2:
            raise SettingsError(f"sieve_bound must be an integer >= 2, got {self.sieve_bound!r}")

    def with_confidence(self, confidence: int) -> 'SearchSettings':
        """Copy of these settings with a different confidence level."""
        return SearchSettings(
            allowed_modifications=self.allowed_modifications,
            last_digit_modification=self.last_digit_modification,
            confidence=confidence,
            sieve_bound=self.sieve_bound,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'allowed_modifications': {
                k: list(v) for k, v in self.allowed_modifications.items()
            },
            'last_digit_modification': dict(self.last_digit_modification),
            'confidence': self.confidence,
            'sieve_bound': self.sieve_bound,
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> 'SearchSettings':
        """Build settings from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in d.items():
            key = _KEY_ALIASES.get(key, key)
            if key in known:
                kwargs[key] = value
        for key in ('allowed_modifications', 'last_digit_modification'):
            if key in kwargs and not isinstance(kwargs[key], Mapping):
                raise SettingsError(f"{key} must be a JSON object")
        return cls(**kwargs)

    @classmethod
    def load(cls, path: str | Path) -> 'SearchSettings':
        """Load settings from a JSON file.

        Raises:
            FileNotFoundError: If the file does not exist.
            SettingsError: If the file is not valid JSON or holds invalid values.
        """
        with open(path, encoding='utf-8') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise SettingsError(f"{path}: invalid JSON ({e})") from e
        if not isinstance(data, dict):
            raise SettingsError(f"{path}: expected a JSON object at top level")
        return cls.from_dict(data)

    def save(self, path: str | Path) -> None:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2)
