"""Recipe book - bundled default recipes plus the user's custom recipes."""

import json
import logging
import random
import string
import time
from pathlib import Path
from typing import Optional

from lib.dietary import detect_dietary_badges
from lib.models import Recipe
from lib.recipe_validator import RecipeValidationError, ensure_valid_recipe
from lib.storage import CUSTOM_RECIPES_KEY, JsonStore

logger = logging.getLogger(__name__)

DEFAULT_RECIPES_PATH = Path(__file__).parent.parent / "data" / "recipes.json"


def load_default_recipes(path: Path = DEFAULT_RECIPES_PATH) -> list[Recipe]:
    """Load the bundled recipes shipped with the app."""
    with open(path, encoding="utf-8") as f:
        return [Recipe.from_dict(r) for r in json.load(f)]


def _random_id() -> str:
    return ''.join(random.choices(string.digits + string.ascii_lowercase, k=9))


class RecipeBook:
    """Bundled recipes are read-only; custom recipes are persisted in a JsonStore."""

    def __init__(self, store: JsonStore, defaults: Optional[list[Recipe]] = None):
        self.store = store
        self.defaults = defaults if defaults is not None else load_default_recipes()
        self.custom = self._load_custom()

    def _load_custom(self) -> list[Recipe]:
        recipes = []
        for entry in self.store.load(CUSTOM_RECIPES_KEY, []):
            try:
                recipes.append(Recipe.from_dict(entry))
            except (TypeError, ValueError, AttributeError, KeyError) as e:
                logger.warning("Skipping unreadable custom recipe: %s", e)
        return recipes

    def _save_custom(self) -> None:
        self.store.save(CUSTOM_RECIPES_KEY, [r.to_dict() for r in self.custom])

    def all_recipes(self) -> list[Recipe]:
        return self.defaults + self.custom

    def by_id(self) -> dict[str, Recipe]:
        return {recipe.id: recipe for recipe in self.all_recipes()}

    def get(self, recipe_id: str) -> Optional[Recipe]:
        return self.by_id().get(recipe_id)

    def is_custom(self, recipe_id: str) -> bool:
        return any(r.id == recipe_id for r in self.custom)

    def save_recipe(self, recipe: Recipe) -> Recipe:
        """Create or edit a custom recipe.

        A recipe without an id is new and gets `custom-{epoch ms}`. A recipe
        with the id of an existing custom recipe replaces it.

        Raises:
            RecipeValidationError: If the recipe is invalid.
        """
        ensure_valid_recipe(recipe)
        recipe.badges = None

        if not recipe.id:
            recipe.id = f"custom-{int(time.time() * 1000)}"
            while self.get(recipe.id):
                recipe.id = f"custom-{int(time.time() * 1000)}-{_random_id()}"
            self.custom.append(recipe)
        elif self.is_custom(recipe.id):
            self.custom = [recipe if r.id == recipe.id else r for r in self.custom]
        elif self.get(recipe.id):
            raise RecipeValidationError([f"Bundled recipe {recipe.id} can't be edited"])
        else:
            self.custom.append(recipe)

        self._save_custom()
        logger.info("Saved recipe %s (%s)", recipe.id, recipe.name)
        return recipe

    def delete_recipe(self, recipe_id: str) -> bool:
        """Delete a custom recipe. Returns False if there was no such custom recipe."""
        if not self.is_custom(recipe_id):
            return False
        self.custom = [r for r in self.custom if r.id != recipe_id]
        self._save_custom()
        return True

    def import_recipes(self, data) -> int:
        """Import recipes from exported JSON data.

        Entries need a string name and an ingredient list; anything else is
        skipped. Entries without an id get a random one, entries whose id is
        already taken are skipped.

        Returns:
            Number of recipes imported
        """
        if not isinstance(data, list):
            return 0

        existing_ids = set(self.by_id())
        imported = 0

        for entry in data:
            if not isinstance(entry, dict):
                continue
            if not isinstance(entry.get("name"), str) or not isinstance(entry.get("ingredients"), list):
                continue

            try:
                recipe = Recipe.from_dict(entry)
            except (TypeError, ValueError, AttributeError) as e:
                logger.warning("Skipping malformed recipe %r: %s", entry.get("name"), e)
                continue

            if not recipe.id:
                recipe.id = _random_id()
            if recipe.id in existing_ids:
                continue

            existing_ids.add(recipe.id)
            self.custom.append(recipe)
            imported += 1

        if imported:
            self._save_custom()
        return imported

    def export_recipes(self) -> list[dict]:
        return [r.to_dict() for r in self.custom]

    def badges_for(self, recipe: Recipe) -> list[str]:
        """Dietary badges for a recipe, computed once and cached on it."""
        if recipe.badges is None:
            recipe.badges = detect_dietary_badges(recipe.ingredients)
        return recipe.badges
