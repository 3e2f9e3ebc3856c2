"""Share grocery lists through a compact URL-safe string.

Only name, quantity, unit, category and checked state survive the trip.
Ids, notes and source recipes are dropped; decoded items get fresh
`shared-{index}` ids and "Shared" as their only source.
"""

import base64
import binascii
import json
import logging
from typing import Iterable, Optional
from urllib.parse import parse_qs, quote, unquote, urlencode, urlsplit

from lib.dietary import detect_dietary_badges, get_badge_label
from lib.models import GroceryItem, Recipe
from lib.quantities import is_valid_quantity

logger = logging.getLogger(__name__)

# Pantry uses lowercase 'a' because 'P' is taken by Produce
CATEGORY_CODES = {
    'Produce': 'P',
    'Meat': 'M',
    'Dairy': 'D',
    'Pantry': 'a',
    'Frozen': 'F',
    'Spices': 'S',
    'Other': 'O',
}
CODE_CATEGORIES = {code: category for category, code in CATEGORY_CODES.items()}

# Characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"

SHARED_SOURCE = "Shared"


def compress_list_data(items: Iterable[GroceryItem]) -> str:
    """Encode grocery items as a compact base64 string."""
    minimal = [
        {
            "n": item.name,
            "q": item.quantity,
            "u": item.unit,
            "c": CATEGORY_CODES.get(item.category, 'O'),
            "k": 1 if item.checked else 0,
        }
        for item in items
    ]

    payload = json.dumps(minimal, separators=(',', ':'), ensure_ascii=False)
    escaped = quote(payload, safe=_URI_COMPONENT_SAFE)
    return base64.b64encode(escaped.encode('ascii')).decode('ascii')


def _is_valid_entry(entry) -> bool:
    if not isinstance(entry, dict):
        return False
    if not isinstance(entry.get("n"), str) or not isinstance(entry.get("u"), str):
        return False
    if not is_valid_quantity(entry.get("q")):
        return False
    if not isinstance(entry.get("c", ""), str):
        return False
    checked = entry.get("k", 0)
    if isinstance(checked, bool) or checked not in (0, 1):
        return False
    return True


def decompress_list_data(compressed: str) -> Optional[list[GroceryItem]]:
    """Decode a string produced by compress_list_data.

    Returns:
        List of GroceryItem in the encoded order, or None if the input is
        not valid base64, not valid percent-encoded JSON, or not a list of
        item objects.
    """
    try:
        escaped = base64.b64decode(compressed, validate=True).decode('ascii')
        payload = unquote(escaped, errors='strict')
        minimal = json.loads(payload)
    except (binascii.Error, ValueError, TypeError, RecursionError) as e:
        logger.warning("Could not decode shared list: %s", e)
        return None

    if not isinstance(minimal, list) or not all(_is_valid_entry(entry) for entry in minimal):
        logger.warning("Shared list has an unexpected shape")
        return None

    return [
        GroceryItem(
            id=f"shared-{index}",
            name=entry["n"],
            quantity=entry["q"],
            unit=entry["u"],
            category=CODE_CATEGORIES.get(entry.get("c"), 'Other'),
            checked=entry.get("k") == 1,
            source_recipes=[SHARED_SOURCE],
        )
        for index, entry in enumerate(minimal)
    ]


def generate_share_url(items: Iterable[GroceryItem], base_url: str = "") -> str:
    """Build a link that carries the list in its `list` query parameter."""
    query = urlencode({"list": compress_list_data(items)})
    return f"{base_url}?{query}"


def parse_share_url(url: str) -> Optional[list[GroceryItem]]:
    """Extract a shared list from a URL, or None if there isn't a valid one."""
    try:
        query = urlsplit(url).query
    except ValueError:
        return None

    values = parse_qs(query).get("list")
    if not values:
        return None

    return decompress_list_data(values[0])


def get_common_dietary_badges(recipes: list[Recipe]) -> list[str]:
    """Badges shared by every recipe, in badge order. Empty for no recipes."""
    if not recipes:
        return []

    badge_sets = [set(detect_dietary_badges(recipe.ingredients)) for recipe in recipes]
    first = detect_dietary_badges(recipes[0].ingredients)
    return [badge for badge in first if all(badge in badges for badges in badge_sets)]


def generate_share_title(recipes: list[Recipe], item_count: int) -> str:
    """Title like "Vegetarian & Vegan Grocery List (12 items)"."""
    title = f"Grocery List ({item_count} items)"

    common = get_common_dietary_badges(recipes)
    if common:
        labels = [get_badge_label(badge) for badge in common[:2]]
        title = f"{' & '.join(labels)} {title}"

    return title


def generate_share_text(recipes: list[Recipe], item_count: int) -> str:
    """Plain-text share message with the title, dietary summary and recipes."""
    lines = [generate_share_title(recipes, item_count)]

    common = get_common_dietary_badges(recipes)
    if common:
        lines.append(', '.join(get_badge_label(badge) for badge in common))

    lines.append("")
    lines.append("Recipes:")
    for recipe in recipes:
        lines.append(f"- {recipe.name}")

    return '\n'.join(lines) + '\n'
