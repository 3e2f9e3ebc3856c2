"""Recipe and ingredient validation at the authoring boundary.

Recipes are checked here before they are saved. Scaling and merging assume
valid input and do not re-check it.
"""

from typing import Optional

from lib.categories import detect_category
from lib.models import CATEGORIES, Ingredient, Recipe
from lib.quantities import is_valid_quantity


class RecipeValidationError(ValueError):
    """Raised when a recipe can't be saved. `errors` lists every problem found."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


def build_ingredient(
    name: str,
    quantity: float = 1,
    unit: str = "item",
    notes: Optional[str] = None,
    category: Optional[str] = None,
) -> Ingredient:
    """Create an ingredient from form input.

    Trims the name and notes (blank notes become None) and detects the
    category from the name when none is given.

    Raises:
        RecipeValidationError: If the name is empty or the quantity isn't positive.
    """
    name = (name or "").strip()
    errors = validate_ingredient_fields(name, quantity, category)
    if errors:
        raise RecipeValidationError(errors)

    notes = (notes or "").strip() or None

    return Ingredient(
        name=name,
        quantity=float(quantity),
        unit=(unit or "item").strip(),
        notes=notes,
        category=category or detect_category(name),
    )


def validate_ingredient_fields(name: str, quantity, category: Optional[str] = None) -> list[str]:
    errors = []

    if not name or not name.strip():
        errors.append("Ingredient name is required")

    if isinstance(quantity, bool) or not isinstance(quantity, (int, float)):
        errors.append(f"Quantity for '{name}' must be a number")
    elif not is_valid_quantity(quantity):
        errors.append(f"Quantity for '{name}' must be greater than zero")

    if category is not None and category not in CATEGORIES:
        errors.append(f"Unknown category for '{name}': {category}")

    return errors


def validate_recipe(recipe: Recipe) -> list[str]:
    """Check a recipe before saving.

    Returns:
        List of error messages, empty if the recipe is valid
    """
    errors = []

    if not recipe.name or not recipe.name.strip():
        errors.append("Recipe name is required")

    if isinstance(recipe.servings_base, bool) or not isinstance(recipe.servings_base, int) or recipe.servings_base < 1:
        errors.append("Base servings must be a whole number of at least 1")

    if not recipe.ingredients:
        errors.append("At least one ingredient is required")

    for ing in recipe.ingredients:
        errors.extend(validate_ingredient_fields(ing.name, ing.quantity, ing.category))

    return errors


def ensure_valid_recipe(recipe: Recipe) -> Recipe:
    """Return the recipe if valid.

    Raises:
        RecipeValidationError: With every problem found.
    """
    errors = validate_recipe(recipe)
    if errors:
        raise RecipeValidationError(errors)
    return recipe


def parse_recipe_data(data: dict) -> Recipe:
    """Build and validate a recipe from a JSON payload.

    Ingredients without a category get one detected from their name.

    Raises:
        RecipeValidationError: If the payload is malformed or the recipe invalid.
    """
    if not isinstance(data, dict):
        raise RecipeValidationError(["Recipe must be an object"])
    if not isinstance(data.get("ingredients", []), list):
        raise RecipeValidationError(["Ingredients must be a list"])

    try:
        recipe = Recipe.from_dict(data)
    except (TypeError, ValueError, AttributeError) as e:
        raise RecipeValidationError([f"Malformed recipe: {e}"]) from e

    recipe.name = recipe.name.strip() if isinstance(recipe.name, str) else ""
    recipe.tags = list(dict.fromkeys(str(tag).strip().lower() for tag in recipe.tags if str(tag).strip()))
    recipe.ingredients = [
        Ingredient(
            name=str(ing.name or "").strip(),
            quantity=ing.quantity,
            unit=str(ing.unit or "").strip() or "item",
            notes=str(ing.notes or "").strip() or None,
            category=ing.category or detect_category(str(ing.name or "")),
        )
        for ing in recipe.ingredients
    ]
    recipe.badges = None

    return ensure_valid_recipe(recipe)
