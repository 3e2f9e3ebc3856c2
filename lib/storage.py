"""Key-value persistence backed by one JSON file per key."""

import json
import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

SELECTED_RECIPES_KEY = "selected_recipes"
GROCERY_LIST_KEY = "grocery_list"
CUSTOM_RECIPES_KEY = "custom_recipes"
PREFERENCES_KEY = "preferences"


class JsonStore:
    """Load/save/clear JSON values under simple string keys.

    Each key maps to `<data_dir>/<key>.json`. A missing or unreadable file
    loads as the caller's default, so a corrupt file never blocks startup.
    """

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def _path(self, key: str) -> Path:
        if not re.match(r'^[A-Za-z0-9_-]+$', key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.data_dir / f"{key}.json"

    def load(self, key: str, default=None):
        filepath = self._path(key)

        if not filepath.exists():
            return default

        try:
            return json.loads(filepath.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read %s, using default: %s", filepath, e)
            return default

    def save(self, key: str, value) -> Path:
        filepath = self._path(key)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        # Write to a temp file, then swap it in
        tmp_path = filepath.with_suffix(".json.tmp")
        tmp_path.write_text(json.dumps(value, indent=2, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(filepath)

        return filepath

    def clear(self, key: str) -> bool:
        """Remove a stored value. Returns True if something was removed."""
        filepath = self._path(key)
        if filepath.exists():
            filepath.unlink()
            return True
        return False
