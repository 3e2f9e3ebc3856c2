#!/usr/bin/env python3
"""Generate a merged shopping list from recipes.

Scales each chosen recipe to the requested servings, merges like
ingredients and prints the list grouped by category.

Usage:
    python shopping_list.py --list-recipes                        # Show available recipes
    python shopping_list.py --recipe spaghetti-bolognese           # Base servings
    python shopping_list.py --recipe greek-salad:6 --recipe salmon-tacos
    python shopping_list.py --recipe greek-salad --markdown --store-mode
    python shopping_list.py --recipe greek-salad --share           # Print a share link
    python shopping_list.py --recipe greek-salad --output list.txt
    python shopping_list.py --recipes-file mine.json --recipe my-chili
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from lib.categories import group_by_category
from lib.models import Recipe, SelectedRecipe
from lib.recipe_book import RecipeBook
from lib.recipe_validator import parse_recipe_data
from lib.share import generate_share_url
from lib.shopping_list_generator import generate_shopping_list
from lib.storage import JsonStore
from lib.store_mode import STORE_LAYOUTS, category_order
from templates.shopping_list_template import export_as_text, generate_shopping_list_markdown

load_dotenv()

# Configuration
DATA_DIR = Path(os.getenv('GROCERY_DATA_DIR', Path.home() / ".grocery-merger"))
SHARE_BASE_URL = os.getenv('GROCERY_SHARE_BASE_URL', 'http://localhost:5000/')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'WARNING')


def parse_recipe_arg(value: str) -> tuple[str, int | None]:
    """Parse a --recipe value like 'greek-salad' or 'greek-salad:6'.

    Raises:
        ValueError: If the servings part isn't a whole number of at least 1.
    """
    recipe_id, sep, servings = value.partition(':')
    recipe_id = recipe_id.strip()
    if not recipe_id:
        raise ValueError(f"Invalid recipe: {value!r}")

    if not sep:
        return recipe_id, None

    try:
        count = int(servings)
    except ValueError:
        raise ValueError(f"Invalid servings for {recipe_id}: {servings!r}")
    if count < 1:
        raise ValueError(f"Servings for {recipe_id} must be at least 1")

    return recipe_id, count


def load_recipes_file(path: Path) -> list[Recipe]:
    """Load extra recipes from a JSON file holding a list of recipe objects.

    Raises:
        ValueError: If the file isn't a JSON list or a recipe is invalid.
    """
    data = json.loads(path.read_text(encoding='utf-8'))
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a list of recipes")

    recipes = []
    for entry in data:
        recipe = parse_recipe_data(entry)
        if not recipe.id:
            raise ValueError(f"Recipe '{recipe.name}' in {path} has no id")
        recipes.append(recipe)
    return recipes


def build_selections(recipe_args: list[str], recipes_by_id: dict[str, Recipe]) -> list[SelectedRecipe]:
    """Turn --recipe arguments into selections, defaulting to base servings."""
    selected = []
    for value in recipe_args:
        recipe_id, servings = parse_recipe_arg(value)
        if servings is None:
            recipe = recipes_by_id.get(recipe_id)
            servings = recipe.servings_base if recipe else 4
        selected.append(SelectedRecipe(recipe_id=recipe_id, servings=servings))
    return selected


def print_recipes(recipe_book: RecipeBook) -> None:
    for recipe in recipe_book.all_recipes():
        badges = ', '.join(recipe_book.badges_for(recipe))
        print(f"{recipe.id:<24} {recipe.name} (serves {recipe.servings_base})")
        if badges:
            print(f"{'':<24} {badges}")


def main():
    parser = argparse.ArgumentParser(description="Generate a merged shopping list from recipes")
    parser.add_argument('--recipe', action='append', default=[], metavar='ID[:SERVINGS]',
                        help='Recipe to include, optionally with target servings (repeatable)')
    parser.add_argument('--recipes-file', type=Path, help='Extra recipes as a JSON list')
    parser.add_argument('--layout', choices=list(STORE_LAYOUTS), default='default',
                        help='Store layout used with --store-mode')
    parser.add_argument('--store-mode', action='store_true', help='Order categories by store layout')
    parser.add_argument('--output', type=Path, help='Write to file instead of stdout')
    parser.add_argument('--share', action='store_true', help='Print a share link instead of the list')
    parser.add_argument('--markdown', action='store_true', help='Render as a markdown checklist')
    parser.add_argument('--list-recipes', action='store_true', help='List available recipes and exit')
    args = parser.parse_args()

    logging.basicConfig(level=LOG_LEVEL, format='%(levelname)s %(name)s: %(message)s')

    recipe_book = RecipeBook(JsonStore(DATA_DIR))

    if args.recipes_file:
        try:
            extra = load_recipes_file(args.recipes_file)
        except (OSError, ValueError) as e:
            print(f"Error: Could not load {args.recipes_file}: {e}", file=sys.stderr)
            sys.exit(1)
        recipe_book.defaults = recipe_book.defaults + extra

    if args.list_recipes:
        print_recipes(recipe_book)
        return

    recipes_by_id = recipe_book.by_id()

    try:
        selected = build_selections(args.recipe, recipes_by_id)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    result = generate_shopping_list(selected, recipes_by_id)

    for warning in result.get('warnings', []):
        print(f"Warning: {warning}", file=sys.stderr)

    if not result['success']:
        print(f"Error: {result['error']}", file=sys.stderr)
        sys.exit(1)

    items = result['items']
    print(f"Merged {len(result['recipes'])} recipes into {len(items)} items", file=sys.stderr)

    if args.share:
        content = generate_share_url(items, SHARE_BASE_URL)
    elif args.markdown:
        order = category_order(args.store_mode, args.layout)
        content = generate_shopping_list_markdown(group_by_category(items), category_order=order)
    else:
        content = export_as_text(group_by_category(items))

    if args.output:
        args.output.write_text(content, encoding='utf-8')
        print(f"Saved to {args.output}", file=sys.stderr)
        return

    print(content)


if __name__ == "__main__":
    main()
