"""Tests for search settings."""

import json

import pytest

from pictoprime.search.settings import (
    DEFAULT_ALLOWED_MODIFICATIONS,
    DEFAULT_CONFIDENCE,
    DEFAULT_LAST_DIGIT_MODIFICATION,
    SearchSettings,
    SettingsError,
)


class TestDefaults:
    """Tests for default settings."""

    def test_default_tables(self):
        """Defaults carry the standard digit tables."""
        settings = SearchSettings()
        assert settings.allowed_modifications['0'] == ('8', '9', '5')
        assert settings.allowed_modifications['8'] == ('0', '9')
        assert '3' not in settings.allowed_modifications
        assert settings.last_digit_modification['5'] == '3'
        assert settings.confidence == DEFAULT_CONFIDENCE

    def test_tables_are_read_only(self):
        """Tables cannot be modified after construction."""
        settings = SearchSettings()
        with pytest.raises(TypeError):
            settings.allowed_modifications['3'] = ('8',)
        with pytest.raises(TypeError):
            DEFAULT_LAST_DIGIT_MODIFICATION['1'] = '3'

    def test_frozen(self):
        """Settings objects are immutable."""
        settings = SearchSettings()
        with pytest.raises(AttributeError):
            settings.confidence = 1

    def test_with_confidence(self):
        """with_confidence copies everything else."""
        settings = SearchSettings().with_confidence(2)
        assert settings.confidence == 2
        assert dict(settings.allowed_modifications) == dict(DEFAULT_ALLOWED_MODIFICATIONS)


class TestValidation:
    """Tests for settings validation."""

    @pytest.mark.parametrize("table", [
        {'a': ('1',)},
        {'1': ()},
        {'1': ('12',)},
        {'12': ('1',)},
    ])
    def test_bad_adjacency(self, table):
        """Malformed adjacency tables are rejected."""
        with pytest.raises(SettingsError):
            SearchSettings(allowed_modifications=table)

    def test_bad_last_digit(self):
        """Last digit replacements must be single digits."""
        with pytest.raises(SettingsError):
            SearchSettings(last_digit_modification={'2': '33'})

    def test_bad_confidence(self):
        """Confidence must be positive."""
        with pytest.raises(SettingsError):
            SearchSettings(confidence=0)
        with pytest.raises(ValueError):
            SearchSettings(confidence=-1)

    def test_string_replacements(self):
        """A string of digits is accepted as a replacement list."""
        settings = SearchSettings(allowed_modifications={'0': '895'})
        assert settings.allowed_modifications['0'] == ('8', '9', '5')


class TestSerialization:
    """Tests for dictionary and JSON conversion."""

    def test_from_dict_camel_case(self):
        """Original settings.json keys are understood."""
        settings = SearchSettings.from_dict({
            'allowedModifications': {'1': ['7']},
            'lastDigitModification': {'0': '3'},
            'unknown': 1,
        })
        assert dict(settings.allowed_modifications) == {'1': ('7',)}
        assert dict(settings.last_digit_modification) == {'0': '3'}

    def test_from_dict_partial(self):
        """Missing keys keep their defaults."""
        settings = SearchSettings.from_dict({'confidence': 12})
        assert settings.confidence == 12
        assert settings.allowed_modifications == SearchSettings().allowed_modifications

    def test_from_dict_wrong_type(self):
        """Tables must be objects."""
        with pytest.raises(SettingsError):
            SearchSettings.from_dict({'allowed_modifications': ['1', '7']})

    def test_save_and_load(self, tmp_path):
        """Settings survive a trip through a JSON file."""
        path = tmp_path / "settings.json"
        original = SearchSettings(confidence=8, allowed_modifications={'1': ('7',)})
        original.save(path)
        loaded = SearchSettings.load(path)
        assert loaded == original

    def test_load_invalid_json(self, tmp_path):
        """Broken JSON is reported as a settings error."""
        path = tmp_path / "settings.json"
        path.write_text("{not json")
        with pytest.raises(SettingsError):
            SearchSettings.load(path)

    def test_load_non_object(self, tmp_path):
        """Top-level JSON must be an object."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps([1, 2]))
        with pytest.raises(SettingsError):
            SearchSettings.load(path)

    def test_load_missing_file(self, tmp_path):
        """Missing files propagate as FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            SearchSettings.load(tmp_path / "missing.json")
