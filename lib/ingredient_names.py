"""Ingredient name normalization - resolves common variants to one canonical name."""

# Synonym map for common ingredient name variations
SYNONYMS = {
    "scallions": "green onion", "scallion": "green onion",
    "spring onion": "green onion", "spring onions": "green onion",
    "capsicum": "bell pepper", "bell peppers": "bell pepper",
    "cilantro": "coriander", "coriander leaves": "coriander",
    "fresh coriander": "coriander",
    "garlic clove": "garlic", "garlic cloves": "garlic",
    "onions": "onion",
    "tomatoes": "tomato",
    "carrots": "carrot",
    "eggs": "egg",
    "lemons": "lemon",
    "limes": "lime",
}


def normalize_ingredient_name(name: str) -> str:
    """Normalize an ingredient name for grouping.

    Lowercases, trims whitespace, then applies the synonym map.
    Names without a synonym are returned lowercased and trimmed.
    """
    if not name:
        return ""
    normalized = name.lower().strip()
    return SYNONYMS.get(normalized, normalized)
