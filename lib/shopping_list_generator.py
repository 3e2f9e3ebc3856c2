"""Shopping list generation from selected recipes.

Turns a set of (recipe, servings) selections into a merged grocery list and
provides the editing operations the list supports afterwards. The list
operations are pure and return new lists; ShoppingSession ties them to
undo/redo history and persistence.
"""

import logging
from dataclasses import replace
from typing import Callable, Optional

from lib.categories import detect_category
from lib.history import DEFAULT_MAX_HISTORY, ListHistory
from lib.ingredient_aggregator import generate_item_id, merge_ingredients, scale_ingredients
from lib.models import CATEGORIES, GroceryItem, Recipe, ScaledIngredient, SelectedRecipe
from lib.quantities import is_valid_quantity
from lib.share import decompress_list_data
from lib.storage import GROCERY_LIST_KEY, SELECTED_RECIPES_KEY, JsonStore

logger = logging.getLogger(__name__)

DEFAULT_SERVINGS = 4
CUSTOM_SOURCE = "Custom"

EDITABLE_FIELDS = {'name', 'quantity', 'unit', 'category', 'notes', 'checked'}


def build_scaled_ingredients(
    selected: list[SelectedRecipe],
    recipes_by_id: dict[str, Recipe],
) -> tuple[list[ScaledIngredient], list[str], list[str]]:
    """Scale each selected recipe and tag its ingredients with the recipe name.

    Returns:
        Tuple of (scaled ingredients, loaded recipe names, warning messages)
    """
    scaled = []
    loaded = []
    warnings = []

    for selection in selected:
        recipe = recipes_by_id.get(selection.recipe_id)
        if not recipe:
            warnings.append(f"Recipe not found: {selection.recipe_id}")
            continue

        ratio = selection.servings / recipe.servings_base
        for ing in scale_ingredients(recipe.ingredients, ratio):
            scaled.append(ScaledIngredient.from_ingredient(ing, recipe.name))
        loaded.append(recipe.name)

    return scaled, loaded, warnings


def generate_shopping_list(
    selected: list[SelectedRecipe],
    recipes_by_id: dict[str, Recipe],
    id_generator: Optional[Callable[[], str]] = None,
) -> dict:
    """Generate a merged grocery list from recipe selections.

    Args:
        selected: Recipes picked by the user with target servings
        recipes_by_id: Lookup of all known recipes
        id_generator: Optional id factory passed through to the merge engine

    Returns:
        Dict with keys:
            - success: bool
            - items: list of GroceryItem
            - recipes: list of recipe names used
            - warnings: list of warning messages
            - error: error message (if success=False)
    """
    if not selected:
        return {"success": False, "error": "No recipes selected"}

    scaled, loaded, warnings = build_scaled_ingredients(selected, recipes_by_id)

    if not scaled:
        return {
            "success": False,
            "error": "No ingredients found in any selected recipe",
            "warnings": warnings,
        }

    items = merge_ingredients(scaled, id_generator=id_generator)
    logger.info("Generated %d items from %d recipes", len(items), len(loaded))

    return {
        "success": True,
        "items": items,
        "recipes": loaded,
        "warnings": warnings,
    }


def toggle_recipe_selection(
    selected: list[SelectedRecipe],
    recipe_id: str,
    recipes_by_id: dict[str, Recipe],
) -> list[SelectedRecipe]:
    """Add a recipe at its base servings, or remove it if already selected."""
    if any(s.recipe_id == recipe_id for s in selected):
        return [s for s in selected if s.recipe_id != recipe_id]

    recipe = recipes_by_id.get(recipe_id)
    servings = recipe.servings_base if recipe else DEFAULT_SERVINGS
    return selected + [SelectedRecipe(recipe_id=recipe_id, servings=servings)]


def remove_selection(selected: list[SelectedRecipe], recipe_id: str) -> list[SelectedRecipe]:
    return [s for s in selected if s.recipe_id != recipe_id]


def update_servings(selected: list[SelectedRecipe], recipe_id: str, servings: int) -> list[SelectedRecipe]:
    """Change the target servings of a selected recipe.

    Raises:
        ValueError: If servings is not a whole number of at least 1.
    """
    if isinstance(servings, bool) or not isinstance(servings, int) or servings < 1:
        raise ValueError("Servings must be a whole number of at least 1")

    return [
        SelectedRecipe(recipe_id=s.recipe_id, servings=servings) if s.recipe_id == recipe_id else s
        for s in selected
    ]


def toggle_item(items: list[GroceryItem], item_id: str) -> list[GroceryItem]:
    return [replace(item, checked=not item.checked) if item.id == item_id else item for item in items]


def update_item(items: list[GroceryItem], item_id: str, updates: dict) -> list[GroceryItem]:
    """Apply field updates to one item.

    Raises:
        ValueError: If an update names a field that can't be edited or
            sets an invalid value.
    """
    unknown = set(updates) - EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Cannot edit field(s): {', '.join(sorted(unknown))}")
    if 'category' in updates and updates['category'] not in CATEGORIES:
        raise ValueError(f"Unknown category: {updates['category']}")
    if 'name' in updates and not str(updates['name'] or "").strip():
        raise ValueError("Item name is required")
    if 'quantity' in updates:
        if not is_valid_quantity(updates['quantity']):
            raise ValueError("Quantity must be greater than zero")

    return [replace(item, **updates) if item.id == item_id else item for item in items]


def delete_item(items: list[GroceryItem], item_id: str) -> list[GroceryItem]:
    return [item for item in items if item.id != item_id]


def add_custom_item(
    items: list[GroceryItem],
    name: str,
    quantity: float = 1,
    unit: str = "item",
    category: Optional[str] = None,
    notes: Optional[str] = None,
    id_generator: Optional[Callable[[], str]] = None,
) -> list[GroceryItem]:
    """Append a hand-entered item to the list.

    Raises:
        ValueError: If the name is empty, quantity isn't positive or the
            category is unknown.
    """
    name = (name or "").strip()
    if not name:
        raise ValueError("Item name is required")
    if not is_valid_quantity(quantity):
        raise ValueError("Quantity must be greater than zero")
    if category is not None and category not in CATEGORIES:
        raise ValueError(f"Unknown category: {category}")

    new_item = GroceryItem(
        id=(id_generator or generate_item_id)(),
        name=name,
        quantity=quantity,
        unit=(unit or "item").strip(),
        category=category or detect_category(name),
        notes=(notes or "").strip() or None,
        checked=False,
        source_recipes=[CUSTOM_SOURCE],
    )
    return items + [new_item]


class ShoppingSession:
    """One user's selections and grocery list, with undo/redo and persistence.

    State is loaded from the store on construction and saved after every
    change, so the store always reflects what the user last saw.
    """

    def __init__(self, store: JsonStore, max_history: int = DEFAULT_MAX_HISTORY,
                 id_generator: Optional[Callable[[], str]] = None):
        self.store = store
        self.id_generator = id_generator
        self.selected = self._load_selected()
        self.history = ListHistory(self._load_grocery_list(), max_history=max_history)

    def _load_selected(self) -> list[SelectedRecipe]:
        selected = []
        for entry in self.store.load(SELECTED_RECIPES_KEY, []):
            try:
                selected.append(SelectedRecipe.from_dict(entry))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping unreadable selection: %s", e)
        return selected

    def _load_grocery_list(self) -> list[GroceryItem]:
        items = []
        for entry in self.store.load(GROCERY_LIST_KEY, []):
            try:
                items.append(GroceryItem.from_dict(entry))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping unreadable grocery item: %s", e)
        return items

    def _save_selected(self) -> None:
        self.store.save(SELECTED_RECIPES_KEY, [s.to_dict() for s in self.selected])

    def _save_grocery_list(self) -> None:
        self.store.save(GROCERY_LIST_KEY, [item.to_dict() for item in self.history.present])

    @property
    def items(self) -> list[GroceryItem]:
        return self.history.present

    # Selections

    def toggle_recipe(self, recipe_id: str, recipes_by_id: dict[str, Recipe]) -> None:
        self.selected = toggle_recipe_selection(self.selected, recipe_id, recipes_by_id)
        self._save_selected()

    def remove_recipe(self, recipe_id: str) -> None:
        self.selected = remove_selection(self.selected, recipe_id)
        self._save_selected()

    def set_servings(self, recipe_id: str, servings: int) -> None:
        self.selected = update_servings(self.selected, recipe_id, servings)
        self._save_selected()

    # Grocery list

    def generate(self, recipes_by_id: dict[str, Recipe]) -> dict:
        """Rebuild the list from the current selections. History starts over."""
        result = generate_shopping_list(self.selected, recipes_by_id, id_generator=self.id_generator)
        if result["success"]:
            self.history.reset(result["items"])
            self._save_grocery_list()
        return result

    def _apply(self, items: list[GroceryItem]) -> None:
        self.history.set(items)
        self._save_grocery_list()

    def toggle_item(self, item_id: str) -> None:
        self._apply(toggle_item(self.items, item_id))

    def update_item(self, item_id: str, updates: dict) -> None:
        self._apply(update_item(self.items, item_id, updates))

    def delete_item(self, item_id: str) -> None:
        self._apply(delete_item(self.items, item_id))

    def add_item(self, name: str, quantity: float = 1, unit: str = "item",
                 category: Optional[str] = None, notes: Optional[str] = None) -> GroceryItem:
        items = add_custom_item(self.items, name, quantity, unit, category, notes,
                                id_generator=self.id_generator)
        self._apply(items)
        return items[-1]

    def has_item(self, item_id: str) -> bool:
        return any(item.id == item_id for item in self.items)

    def undo(self) -> bool:
        changed = self.history.undo()
        if changed:
            self._save_grocery_list()
        return changed

    def redo(self) -> bool:
        changed = self.history.redo()
        if changed:
            self._save_grocery_list()
        return changed

    def import_shared(self, encoded: str) -> bool:
        """Replace the list with a shared one. Leaves state alone if decoding fails."""
        items = decompress_list_data(encoded)
        if items is None:
            return False
        self._apply(items)
        return True

    def reset(self) -> None:
        """Drop selections, the grocery list and its history."""
        self.selected = []
        self.history.reset([])
        self.store.clear(SELECTED_RECIPES_KEY)
        self.store.clear(GROCERY_LIST_KEY)
