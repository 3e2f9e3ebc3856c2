"""Shopping list text and markdown rendering.

Creates plain-text exports and markdown checklists from grouped grocery items.
"""

import re
from typing import Optional

from lib.models import CATEGORIES, GroceryItem
from lib.quantities import format_quantity


def format_grocery_item_text(item: GroceryItem) -> str:
    """Format an item as "quantity unit name (notes)"."""
    notes = f" ({item.notes})" if item.notes else ""
    return f"{format_quantity(item.quantity)} {item.unit} {item.name}{notes}"


def export_as_text(grouped: dict[str, list[GroceryItem]]) -> str:
    """Export grouped items as plain text.

    Args:
        grouped: Category -> items, as returned by group_by_category

    Returns:
        One "== Category ==" block per non-empty category in the fixed
        category order, each line prefixed with [x] or [ ].
    """
    lines = []

    for category in CATEGORIES:
        items = grouped.get(category, [])
        if not items:
            continue

        lines.append("")
        lines.append(f"== {category} ==")
        for item in items:
            checkbox = "[x]" if item.checked else "[ ]"
            lines.append(f"{checkbox} {format_grocery_item_text(item)}")

    return '\n'.join(lines).strip()


def generate_shopping_list_markdown(
    grouped: dict[str, list[GroceryItem]],
    title: str = "Shopping List",
    category_order: Optional[list[str]] = None,
) -> str:
    """Generate shopping list markdown with a checklist per category.

    Args:
        grouped: Category -> items, as returned by group_by_category
        title: Heading for the document
        category_order: Section order, e.g. from a store layout.
            Defaults to the fixed category order.

    Returns:
        Formatted markdown string
    """
    lines = [
        f"# {title}",
        "",
    ]

    for category in category_order or CATEGORIES:
        items = grouped.get(category, [])
        if not items:
            continue

        lines.append(f"## {category}")
        lines.append("")
        for item in items:
            checkbox = "x" if item.checked else " "
            lines.append(f"- [{checkbox}] {format_grocery_item_text(item)}")
        lines.append("")

    return '\n'.join(lines)


def generate_filename(title: str) -> str:
    """Generate a markdown filename from a list title, e.g. 'Shopping List.md'."""
    clean = ' '.join(title.split())
    # Remove characters that are problematic in filenames and headers
    clean = re.sub(r'[<>:"/\\|?*\x00-\x1f\x7f]', '', clean).strip()
    return f"{clean or 'Shopping List'}.md"
