"""Display preferences, loaded once at startup and saved on every change."""

from dataclasses import dataclass
from typing import Self

from lib.storage import PREFERENCES_KEY, JsonStore
from lib.store_mode import STORE_LAYOUTS

THEMES = ('light', 'dark', 'system')


@dataclass
class Preferences:
    store_mode: bool = False
    store_layout: str = 'default'
    theme: str = 'system'

    def to_dict(self) -> dict:
        return {
            "store_mode": self.store_mode,
            "store_layout": self.store_layout,
            "theme": self.theme,
        }

    @classmethod
    def from_dict(cls, d: dict) -> Self:
        """Build preferences from stored data, ignoring values we don't recognize."""
        prefs = cls()
        if isinstance(d.get("store_mode"), bool):
            prefs.store_mode = d["store_mode"]
        if d.get("store_layout") in STORE_LAYOUTS:
            prefs.store_layout = d["store_layout"]
        if d.get("theme") in THEMES:
            prefs.theme = d["theme"]
        return prefs

    def updated(self, changes: dict) -> Self:
        """Return a copy with changes applied.

        Raises:
            ValueError: If a key is unknown or a value is invalid.
        """
        merged = self.to_dict()
        for key, value in changes.items():
            if key not in merged:
                raise ValueError(f"Unknown preference: {key}")
            merged[key] = value

        if not isinstance(merged["store_mode"], bool):
            raise ValueError("store_mode must be true or false")
        if merged["store_layout"] not in STORE_LAYOUTS:
            raise ValueError(f"Unknown store layout: {merged['store_layout']}")
        if merged["theme"] not in THEMES:
            raise ValueError(f"Unknown theme: {merged['theme']}")

        return Preferences(**merged)


def load_preferences(store: JsonStore) -> Preferences:
    data = store.load(PREFERENCES_KEY, {})
    if not isinstance(data, dict):
        return Preferences()
    return Preferences.from_dict(data)


def save_preferences(store: JsonStore, prefs: Preferences) -> None:
    store.save(PREFERENCES_KEY, prefs.to_dict())
