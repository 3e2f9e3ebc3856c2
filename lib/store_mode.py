"""Store layouts for walking the shopping list in aisle order."""

from lib.models import CATEGORIES

STORE_LAYOUTS = {
    # Typical US store: produce at the entrance, dairy on the back wall,
    # meat next to it, frozen along a wall, pantry in the center aisles.
    'default': ['Produce', 'Dairy', 'Meat', 'Frozen', 'Pantry', 'Spices', 'Other'],
    # Shop the edges first
    'perimeterFirst': ['Produce', 'Meat', 'Dairy', 'Frozen', 'Pantry', 'Spices', 'Other'],
}

LAYOUT_DISPLAY_NAMES = {
    'default': 'Standard Store Layout',
    'perimeterFirst': 'Perimeter First',
}

# Order used when store mode is off
DEFAULT_CATEGORY_ORDER = list(CATEGORIES)


def reorder_by_store_layout(categories: list[str], layout: str = 'default') -> list[str]:
    """Sort categories by their position in a store layout.

    The sort is stable; categories missing from the layout go last.

    Raises:
        ValueError: If the layout name is unknown.
    """
    if layout not in STORE_LAYOUTS:
        raise ValueError(f"Unknown store layout: {layout}. Expected one of: {', '.join(STORE_LAYOUTS)}")

    order = STORE_LAYOUTS[layout]

    def position(category: str) -> int:
        return order.index(category) if category in order else len(order)

    return sorted(categories, key=position)


def get_layout_display_name(layout: str) -> str:
    return LAYOUT_DISPLAY_NAMES[layout]


def category_order(store_mode: bool, layout: str = 'default') -> list[str]:
    """Category order for display given the current store mode preference."""
    if not store_mode:
        return list(DEFAULT_CATEGORY_ORDER)
    return reorder_by_store_layout(DEFAULT_CATEGORY_ORDER, layout)
