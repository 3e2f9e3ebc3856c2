"""Quantity rounding and display formatting."""

import math

from lib.units import normalize_unit

# Measured precisely; everything else is eyeballed in quarters
WHOLE_NUMBER_UNITS = {'g', 'oz', 'ml'}

FRACTION_GLYPHS = {
    0.25: '¼',
    0.5: '½',
    0.75: '¾',
    0.33: '⅓',
    0.67: '⅔',
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with ties going up (100.5 -> 101, unlike round())."""
    return math.floor(value + 0.5)


def round_quantity(quantity: float, unit: str) -> float:
    """Round a merged quantity based on its unit.

    - g/oz/ml: nearest whole number
    - everything else (cup, tbsp, tsp, item, clove, lb, unknown): nearest 0.25
    """
    if normalize_unit(unit) in WHOLE_NUMBER_UNITS:
        return round_half_up(quantity)

    return round_half_up(quantity * 4) / 4


def format_quantity(quantity: float) -> str:
    """Format a quantity for display.

    Whole numbers render bare, common fractions as unicode glyphs
    (1.5 -> "1½", 0.25 -> "¼"), anything else as up to two decimals.
    """
    if quantity == math.floor(quantity):
        return str(int(quantity))

    whole = math.floor(quantity)
    fraction = round_half_up((quantity - whole) * 100) / 100

    glyph = FRACTION_GLYPHS.get(fraction)
    if glyph:
        return f"{whole}{glyph}" if whole > 0 else glyph

    return f"{quantity:.2f}".rstrip('0').rstrip('.')


def is_valid_quantity(quantity) -> bool:
    """True for a finite number above zero. Booleans, NaN and infinity are rejected."""
    if isinstance(quantity, bool) or not isinstance(quantity, (int, float)):
        return False
    return math.isfinite(quantity) and quantity > 0
