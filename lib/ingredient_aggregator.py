"""Ingredient aggregation logic for shopping list generation.

Combines like ingredients across recipes. Two entries are "like" when their
normalized name and normalized unit are both equal. Units are compared
literally after normalization: 2 tbsp and 0.25 cup of olive oil stay on
separate lines even though lib.units can convert between them.
"""

import logging
import random
import string
from typing import Callable, Iterable, Optional

from lib.ingredient_names import normalize_ingredient_name
from lib.models import GroceryItem, Ingredient, ScaledIngredient
from lib.quantities import round_quantity
from lib.units import normalize_unit

logger = logging.getLogger(__name__)

ID_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 9


def generate_item_id() -> str:
    """Random 9-character base-36 id for a grocery item."""
    return ''.join(random.choices(ID_ALPHABET, k=ID_LENGTH))


def make_merge_key(name: str, unit: str) -> tuple[str, str]:
    """Deduplication key for an ingredient: (normalized name, normalized unit)."""
    return normalize_ingredient_name(name), normalize_unit(unit)


def scale_ingredients(ingredients: Iterable[Ingredient], ratio: float) -> list[Ingredient]:
    """Scale every ingredient quantity by a serving ratio.

    Args:
        ingredients: Recipe ingredients (not modified)
        ratio: target servings / base servings, must be > 0

    Returns:
        New list in the same order with scaled quantities
    """
    return [ing.scaled(ratio) for ing in ingredients]


def merge_ingredients(
    ingredients: Iterable[ScaledIngredient],
    id_generator: Optional[Callable[[], str]] = None,
) -> list[GroceryItem]:
    """Combine like ingredients across recipes into grocery items.

    Quantities of the same merge key are summed and rounded once at the
    end, notes are unioned (exact string match) and the contributing recipe
    names are collected. Ingredients without a category fall back to
    'Other'; the category of the first ingredient in a group wins.

    Args:
        ingredients: Scaled ingredients tagged with their source recipe
        id_generator: Callable returning a fresh item id (random by default)

    Returns:
        One GroceryItem per merge key, in first-seen order
    """
    if id_generator is None:
        id_generator = generate_item_id

    groups = {}

    for ing in ingredients:
        key = make_merge_key(ing.name, ing.unit)
        group = groups.get(key)

        if group is None:
            groups[key] = {
                'name': key[0],
                'unit': key[1],
                'quantity': ing.quantity,
                'category': ing.category or 'Other',
                'notes': [ing.notes] if ing.notes else [],
                'sources': {ing.source_recipe: None},
            }
            continue

        group['quantity'] += ing.quantity
        if ing.notes and ing.notes not in group['notes']:
            group['notes'].append(ing.notes)
        group['sources'][ing.source_recipe] = None

    results = []
    for group in groups.values():
        results.append(GroceryItem(
            id=id_generator(),
            name=group['name'],
            quantity=round_quantity(group['quantity'], group['unit']),
            unit=group['unit'],
            category=group['category'],
            notes=', '.join(group['notes']) if group['notes'] else None,
            checked=False,
            source_recipes=list(group['sources']),
        ))

    logger.debug("Merged ingredients into %d grocery items", len(results))
    return results
