"""Tests for display preferences."""

import pytest

from lib.preferences import Preferences, load_preferences, save_preferences
from lib.storage import PREFERENCES_KEY, JsonStore


class TestPreferences:
    def test_defaults(self):
        prefs = Preferences()
        assert prefs.store_mode is False
        assert prefs.store_layout == 'default'
        assert prefs.theme == 'system'

    def test_from_dict_ignores_invalid_values(self):
        prefs = Preferences.from_dict({"store_mode": "yes", "store_layout": "warehouse", "theme": "dark"})
        assert prefs.store_mode is False
        assert prefs.store_layout == 'default'
        assert prefs.theme == 'dark'

    def test_updated(self):
        prefs = Preferences().updated({"store_mode": True, "store_layout": "perimeterFirst"})
        assert prefs.store_mode is True
        assert prefs.store_layout == 'perimeterFirst'

    def test_updated_does_not_modify_original(self):
        original = Preferences()
        original.updated({"theme": "light"})
        assert original.theme == 'system'

    @pytest.mark.parametrize("changes", [
        {"colour": "red"},
        {"store_mode": "on"},
        {"store_layout": "warehouse"},
        {"theme": "neon"},
    ])
    def test_updated_rejects_invalid(self, changes):
        with pytest.raises(ValueError):
            Preferences().updated(changes)


class TestPersistence:
    def test_load_without_saved_preferences(self, tmp_path):
        assert load_preferences(JsonStore(tmp_path)) == Preferences()

    def test_save_and_load(self, tmp_path):
        store = JsonStore(tmp_path)
        save_preferences(store, Preferences(store_mode=True, theme='dark'))
        assert load_preferences(store) == Preferences(store_mode=True, theme='dark')

    def test_load_non_dict(self, tmp_path):
        store = JsonStore(tmp_path)
        store.save(PREFERENCES_KEY, ["not", "a", "dict"])
        assert load_preferences(store) == Preferences()
