"""Unit normalization and conversion between compatible units (volume, weight)."""

from typing import NamedTuple, Optional

# Unit normalization map
UNIT_SYNONYMS = {
    "tablespoon": "tbsp", "tablespoons": "tbsp",
    "teaspoon": "tsp", "teaspoons": "tsp",
    "grams": "g", "gram": "g",
    "ounces": "oz", "ounce": "oz",
    "piece": "item", "pieces": "item", "items": "item",
    "clove": "clove", "cloves": "clove",
    "cups": "cup",
    "pounds": "lb", "pound": "lb",
    "milliliters": "ml", "milliliter": "ml",
}


class UnitConversion(NamedTuple):
    from_unit: str
    to_unit: str
    factor: float  # multiply from_unit quantity by this to get to_unit


UNIT_CONVERSIONS = [
    # Volume (US)
    UnitConversion('tbsp', 'tsp', 3),
    UnitConversion('cup', 'tbsp', 16),
    UnitConversion('cup', 'tsp', 48),
    UnitConversion('cup', 'ml', 236.588),
    UnitConversion('tbsp', 'ml', 14.787),
    UnitConversion('tsp', 'ml', 4.929),
    # Weight
    UnitConversion('lb', 'oz', 16),
    UnitConversion('lb', 'g', 453.592),
    UnitConversion('oz', 'g', 28.3495),
    UnitConversion('kg', 'g', 1000),
    # Liquid volume
    UnitConversion('l', 'ml', 1000),
    UnitConversion('qt', 'cup', 4),
    UnitConversion('pt', 'cup', 2),
    UnitConversion('gal', 'qt', 4),
    UnitConversion('gal', 'cup', 16),
]

# Larger display units, checked in order; the first whose threshold is met wins
PREFERRED_UNITS = {
    'tsp': [('cup', 48), ('tbsp', 3)],
    'tbsp': [('cup', 16)],
    'ml': [('l', 1000), ('cup', 236.588)],
    'g': [('kg', 1000), ('lb', 453.592)],
    'oz': [('lb', 16)],
}


def normalize_unit(unit: str) -> str:
    """Normalize a unit string to its canonical token.

    Args:
        unit: A unit string (e.g., "tablespoons", " Cups ", "pieces")

    Returns:
        Canonical token (e.g., "tbsp", "cup", "item").
        Unknown units pass through lowercased and trimmed.
    """
    if not unit:
        return ""
    normalized = unit.lower().strip()
    return UNIT_SYNONYMS.get(normalized, normalized)


def _find_conversion(from_unit: str, to_unit: str) -> Optional[UnitConversion]:
    for conv in UNIT_CONVERSIONS:
        if conv.from_unit == from_unit and conv.to_unit == to_unit:
            return conv
    return None


def convert_unit(quantity: float, from_unit: str, to_unit: str) -> Optional[float]:
    """Convert a quantity from one unit to another.

    Tries a direct table entry, then the reverse entry, then a single hop
    through one intermediate unit reached from a forward entry of the
    source unit. Longer chains are not attempted.

    Returns:
        The converted quantity, or None if no conversion path exists.
    """
    source = normalize_unit(from_unit)
    target = normalize_unit(to_unit)

    if source == target:
        return quantity

    direct = _find_conversion(source, target)
    if direct:
        return quantity * direct.factor

    reverse = _find_conversion(target, source)
    if reverse:
        return quantity / reverse.factor

    for first in UNIT_CONVERSIONS:
        if first.from_unit != source:
            continue
        intermediate = first.to_unit
        for second in UNIT_CONVERSIONS:
            if second.from_unit == intermediate and second.to_unit == target:
                return quantity * first.factor * second.factor
            if second.to_unit == intermediate and second.from_unit == target:
                return quantity * first.factor / second.factor

    return None


def are_units_convertible(unit1: str, unit2: str) -> bool:
    """Check whether two units are the same or have a conversion path."""
    u1 = normalize_unit(unit1)
    u2 = normalize_unit(unit2)

    if u1 == u2:
        return True

    return convert_unit(1, u1, u2) is not None


def optimize_unit(quantity: float, unit: str) -> tuple[float, str]:
    """Move a quantity to a larger display unit when it is big enough.

    e.g. 96 tsp -> 2 cup, 1500 g -> 1.5 kg. Quantities below every
    threshold keep their (normalized) unit.

    Returns:
        Tuple of (quantity, unit)
    """
    normalized = normalize_unit(unit)
    preferences = PREFERRED_UNITS.get(normalized)

    if not preferences:
        return quantity, normalized

    for preferred_unit, min_quantity in preferences:
        if quantity >= min_quantity:
            converted = convert_unit(quantity, normalized, preferred_unit)
            if converted is not None:
                return converted, preferred_unit

    return quantity, normalized
