"""Dietary badge detection from a recipe's ingredient names.

An ingredient matches a keyword list when its lowercased name equals a
keyword or contains one ("parmesan cheese" contains "parmesan"). The reverse
is never checked, so "salt" does not match "salted butter". Exception lists
are checked first: "coconut milk" contains "milk" but is not dairy.
"""

from typing import Iterable

from lib.models import DIETARY_BADGES, Ingredient

MEAT_INGREDIENTS = [
    # Red meat
    'beef', 'ground beef', 'steak', 'roast beef', 'brisket',
    'pork', 'ground pork', 'ham', 'bacon', 'pork chop', 'pork loin',
    'lamb', 'ground lamb', 'lamb chop',
    'veal',
    # Poultry
    'chicken', 'chicken breast', 'chicken thigh', 'chicken wing', 'chicken drumstick',
    'turkey', 'ground turkey', 'duck', 'goose',
    # Fish & seafood
    'fish', 'salmon', 'salmon fillet', 'tuna', 'cod', 'halibut', 'tilapia',
    'trout', 'bass', 'snapper', 'mahi', 'swordfish', 'sardine', 'anchovy',
    'shrimp', 'prawn', 'crab', 'lobster', 'scallop', 'clam', 'mussel',
    'oyster', 'squid', 'calamari', 'octopus',
    # Processed meats
    'sausage', 'salami', 'pepperoni', 'prosciutto', 'pancetta', 'chorizo',
    'hot dog', 'deli meat', 'lunch meat',
    # Meat-based products
    'fish sauce', 'anchovy paste', 'worcestershire sauce', 'oyster sauce',
    'chicken broth', 'chicken stock', 'beef broth', 'beef stock',
    'bone broth', 'gelatin',
]

GLUTEN_INGREDIENTS = [
    # Wheat
    'flour', 'all-purpose flour', 'bread flour', 'wheat flour', 'whole wheat flour',
    'bread', 'breadcrumb', 'breadcrumbs', 'crouton', 'croutons',
    'pasta', 'spaghetti', 'penne', 'fettuccine', 'linguine', 'rigatoni',
    'macaroni', 'lasagna', 'noodle', 'noodles', 'ramen',
    'tortilla', 'flour tortilla', 'pita', 'naan', 'flatbread',
    'couscous', 'bulgur', 'seitan',
    # Barley/rye
    'barley', 'malt', 'beer',
    # Sauces
    'soy sauce', 'teriyaki sauce', 'hoisin sauce',
    # Baked goods
    'cake', 'cookie', 'muffin', 'biscuit', 'cracker', 'crackers',
    'panko', 'breading',
]

DAIRY_INGREDIENTS = [
    # Milk products
    'milk', 'whole milk', 'skim milk', '2% milk', 'cream', 'heavy cream',
    'whipping cream', 'half and half', 'evaporated milk', 'condensed milk',
    'buttermilk', 'sour cream', 'creme fraiche',
    # Cheese
    'cheese', 'parmesan', 'parmesan cheese', 'cheddar', 'cheddar cheese',
    'mozzarella', 'feta', 'feta cheese', 'gouda', 'brie', 'camembert',
    'gruyere', 'swiss', 'swiss cheese', 'provolone', 'monterey jack',
    'colby', 'american cheese', 'blue cheese', 'gorgonzola', 'ricotta',
    'cottage cheese', 'cream cheese', 'mascarpone', 'queso',
    # Butter & yogurt
    'butter', 'unsalted butter', 'salted butter', 'ghee',
    'yogurt', 'greek yogurt', 'plain yogurt',
    # Other
    'ice cream', 'whey', 'casein',
]

# Peanuts are a legume but included as a common allergen
NUT_INGREDIENTS = [
    'almond', 'almonds', 'almond butter', 'almond milk', 'almond flour',
    'walnut', 'walnuts',
    'pecan', 'pecans',
    'cashew', 'cashews', 'cashew butter',
    'pistachio', 'pistachios',
    'hazelnut', 'hazelnuts', 'hazelnut butter',
    'macadamia', 'macadamia nut',
    'brazil nut', 'brazil nuts',
    'pine nut', 'pine nuts',
    'chestnut', 'chestnuts',
    'peanut', 'peanuts', 'peanut butter', 'peanut oil',
    'nutella', 'praline', 'marzipan', 'nut butter',
]

# Animal products that are neither meat nor dairy
EGG_AND_HONEY_INGREDIENTS = [
    'egg', 'eggs', 'egg yolk', 'egg white', 'mayonnaise', 'mayo', 'honey',
]

DAIRY_EXCEPTIONS = [
    'coconut milk', 'coconut cream', 'almond milk', 'oat milk', 'soy milk',
    'rice milk', 'cashew milk', 'hemp milk', 'coconut yogurt', 'coconut butter',
    'vegan cheese', 'vegan butter', 'plant milk', 'nut milk',
]

GLUTEN_EXCEPTIONS = [
    'rice noodle', 'rice noodles', 'rice paper', 'rice flour',
    'buckwheat noodle', 'buckwheat noodles', 'soba noodles',
    'glass noodle', 'glass noodles', 'cellophane noodles', 'bean thread noodles',
    'kelp noodle', 'kelp noodles', 'zucchini noodle', 'zucchini noodles',
    'shirataki noodles', 'sweet potato noodles',
    'tamari', 'coconut aminos', 'gluten-free soy sauce',
    'corn tortilla', 'corn tortillas',
]

BADGE_LABELS = {
    'vegetarian': 'Vegetarian',
    'vegan': 'Vegan',
    'gluten-free': 'Gluten-Free',
    'dairy-free': 'Dairy-Free',
    'nut-free': 'Nut-Free',
}


def _normalize(name: str) -> str:
    return name.lower().strip()


def _matches_any(name: str, keywords: list[str]) -> bool:
    """True if the name equals or contains any keyword (never the reverse)."""
    normalized = _normalize(name)
    for keyword in keywords:
        keyword = _normalize(keyword)
        if normalized == keyword or keyword in normalized:
            return True
    return False


def ingredient_matches(name: str, keywords: list[str], exceptions: list[str] = None) -> bool:
    """Check one ingredient name against a restricted list, honoring exceptions."""
    if exceptions and _matches_any(name, exceptions):
        return False
    return _matches_any(name, keywords)


def has_ingredient_from(
    ingredients: Iterable[Ingredient],
    keywords: list[str],
    exceptions: list[str] = None,
) -> bool:
    return any(ingredient_matches(ing.name, keywords, exceptions) for ing in ingredients)


def detect_dietary_badges(ingredients: Iterable[Ingredient]) -> list[str]:
    """Detect which dietary badges apply to a set of ingredients.

    Args:
        ingredients: Ingredients to check (only names are used)

    Returns:
        Applicable badges in fixed order: vegetarian, vegan, gluten-free,
        dairy-free, nut-free. An empty ingredient list gets all five.
    """
    ingredients = list(ingredients)

    has_meat = has_ingredient_from(ingredients, MEAT_INGREDIENTS)
    has_dairy = has_ingredient_from(ingredients, DAIRY_INGREDIENTS, DAIRY_EXCEPTIONS)
    has_gluten = has_ingredient_from(ingredients, GLUTEN_INGREDIENTS, GLUTEN_EXCEPTIONS)
    has_nuts = has_ingredient_from(ingredients, NUT_INGREDIENTS)
    has_animal = has_dairy or has_meat or has_ingredient_from(ingredients, EGG_AND_HONEY_INGREDIENTS)

    present = {
        'vegetarian': not has_meat,
        'vegan': not has_animal,
        'gluten-free': not has_gluten,
        'dairy-free': not has_dairy,
        'nut-free': not has_nuts,
    }

    return [badge for badge in DIETARY_BADGES if present[badge]]


def get_badge_label(badge: str) -> str:
    return BADGE_LABELS[badge]
