"""Ingredient category detection and grouping.

Categories are detected by substring keyword matching. Keyword lists overlap
("basil" is both Produce and Spices, "lemon juice" is Produce but "juice"
style condiments live in Pantry), so the result depends on the order the
categories are checked in. That order is pinned by CLASSIFICATION_ORDER.
"""

from lib.models import CATEGORIES, GroceryItem

CLASSIFICATION_ORDER = ('Produce', 'Meat', 'Dairy', 'Pantry', 'Frozen', 'Spices')

CATEGORY_KEYWORDS = {
    'Produce': [
        'onion', 'garlic', 'tomato', 'potato', 'carrot', 'celery', 'lettuce',
        'spinach', 'kale', 'broccoli', 'cauliflower', 'pepper', 'cucumber',
        'zucchini', 'squash', 'mushroom', 'asparagus', 'green bean', 'pea',
        'corn', 'cabbage', 'brussels', 'artichoke', 'beet', 'radish',
        'turnip', 'parsnip', 'leek', 'shallot', 'ginger', 'lemon', 'lime',
        'orange', 'apple', 'banana', 'grape', 'strawberry', 'blueberry',
        'raspberry', 'blackberry', 'mango', 'pineapple', 'watermelon',
        'cantaloupe', 'honeydew', 'avocado', 'cilantro', 'parsley', 'basil',
        'mint', 'dill', 'thyme', 'rosemary', 'sage', 'oregano', 'chive',
        'scallion', 'green onion', 'spring onion', 'bean sprout', 'bok choy',
        'eggplant', 'fennel', 'okra', 'jalapeno', 'serrano', 'habanero',
        'poblano', 'bell pepper', 'romaine', 'arugula', 'watercress',
        'endive', 'radicchio', 'escarole', 'collard', 'swiss chard',
        'fresh', 'lemon juice', 'lime juice',
    ],
    'Meat': [
        'chicken', 'beef', 'pork', 'lamb', 'turkey', 'duck', 'goose',
        'venison', 'bison', 'rabbit', 'veal', 'bacon', 'ham', 'sausage',
        'salami', 'pepperoni', 'prosciutto', 'pancetta', 'chorizo',
        'ground beef', 'ground pork', 'ground turkey', 'ground chicken',
        'steak', 'roast', 'chop', 'rib', 'loin', 'tenderloin', 'brisket',
        'shank', 'shoulder', 'breast', 'thigh', 'drumstick', 'wing',
        'fish', 'salmon', 'tuna', 'cod', 'halibut', 'tilapia', 'trout',
        'bass', 'snapper', 'mahi', 'swordfish', 'shrimp', 'prawn',
        'crab', 'lobster', 'scallop', 'clam', 'mussel', 'oyster',
        'squid', 'calamari', 'octopus', 'anchovy',
    ],
    'Dairy': [
        'milk', 'cream', 'butter', 'cheese', 'yogurt', 'sour cream',
        'cream cheese', 'cottage cheese', 'ricotta', 'mozzarella',
        'parmesan', 'cheddar', 'feta', 'gouda', 'brie', 'camembert',
        'gruyere', 'swiss', 'provolone', 'monterey jack', 'colby',
        'american cheese', 'blue cheese', 'gorgonzola', 'mascarpone',
        'half and half', 'heavy cream', 'whipping cream', 'buttermilk',
        'evaporated milk', 'condensed milk', 'egg', 'eggs',
    ],
    'Pantry': [
        'flour', 'sugar', 'salt', 'oil', 'vinegar', 'soy sauce',
        'pasta', 'spaghetti', 'penne', 'fettuccine', 'linguine', 'rigatoni',
        'rice', 'quinoa', 'couscous', 'bulgur', 'barley', 'oats',
        'bread', 'crouton', 'breadcrumb', 'tortilla', 'pita', 'naan',
        'bean', 'lentil', 'chickpea', 'black bean', 'kidney bean',
        'cannellini', 'pinto', 'navy bean', 'split pea',
        'tomato paste', 'tomato sauce', 'crushed tomato', 'diced tomato',
        'broth', 'stock', 'bouillon', 'coconut milk', 'coconut cream',
        'peanut butter', 'almond butter', 'tahini', 'honey', 'maple syrup',
        'molasses', 'corn syrup', 'agave', 'jam', 'jelly', 'preserve',
        'mustard', 'ketchup', 'mayo', 'mayonnaise', 'relish', 'pickle',
        'olive', 'caper', 'anchovy paste', 'worcestershire', 'hot sauce',
        'sriracha', 'fish sauce', 'oyster sauce', 'hoisin', 'teriyaki',
        'soy', 'tamari', 'miso', 'sake', 'mirin', 'rice wine',
        'balsamic', 'red wine vinegar', 'white wine vinegar', 'apple cider',
        'nut', 'almond', 'walnut', 'pecan', 'cashew', 'peanut', 'pistachio',
        'seed', 'sesame', 'sunflower', 'pumpkin seed', 'flax', 'chia',
        'cornstarch', 'baking powder', 'baking soda', 'yeast', 'gelatin',
        'vanilla', 'cocoa', 'chocolate', 'chip', 'raisin', 'dried fruit',
        'cereal', 'granola', 'cracker', 'pretzel', 'popcorn',
        'taco shell', 'tortilla chip', 'salsa', 'guacamole',
        'brown sugar', 'powdered sugar', 'white sugar', 'cane sugar',
        'vegetable oil', 'canola oil', 'olive oil', 'sesame oil', 'coconut oil',
        'peanut oil', 'avocado oil', 'grapeseed oil', 'sunflower oil',
        'tamarind', 'arborio', 'jasmine rice', 'basmati', 'white wine',
        'red wine', 'marsala', 'sherry',
    ],
    'Frozen': [
        'frozen', 'ice cream', 'sorbet', 'gelato', 'popsicle',
        'frozen vegetable', 'frozen fruit', 'frozen berry',
        'frozen pizza', 'frozen dinner', 'frozen meal',
        'frozen pea', 'frozen corn', 'frozen spinach',
        'ice', 'frozen yogurt',
    ],
    'Spices': [
        'cumin', 'coriander', 'paprika', 'chili powder', 'cayenne',
        'cinnamon', 'nutmeg', 'clove', 'allspice', 'cardamom', 'ginger powder',
        'turmeric', 'curry', 'garam masala', 'five spice', "za'atar",
        'oregano', 'basil', 'thyme', 'rosemary', 'sage', 'marjoram',
        'tarragon', 'dill', 'bay leaf', 'fennel seed', 'caraway',
        'mustard seed', 'celery seed', 'poppy seed', 'sesame seed',
        'black pepper', 'white pepper', 'pink pepper', 'szechuan pepper',
        'red pepper flake', 'crushed red pepper', 'chili flake',
        'garlic powder', 'onion powder', 'smoked paprika', 'ancho',
        'chipotle', 'adobo', 'jerk', 'cajun', 'creole', 'old bay',
        'italian seasoning', 'herbs de provence', 'poultry seasoning',
        'pumpkin pie spice', 'apple pie spice', 'chai spice',
        'vanilla extract', 'almond extract', 'peppermint extract',
        'dried oregano', 'dried basil', 'dried thyme', 'dried dill',
        'dried parsley', 'dried rosemary', 'dried sage', 'dried mint',
        'saffron', 'sumac', 'fenugreek', 'asafoetida', 'nigella',
        'star anise', 'juniper', 'lavender', 'lemongrass',
        'salt', 'kosher salt', 'sea salt', 'flaky salt', 'finishing salt',
        'msg', 'seasoning', 'spice blend', 'rub', 'marinade',
    ],
}


def detect_category(name: str) -> str:
    """Detect the category of an ingredient from its name.

    Returns:
        The first category in CLASSIFICATION_ORDER with a keyword contained
        in the name, or 'Other'.
    """
    if not name:
        return 'Other'

    normalized = name.lower().strip()

    for category in CLASSIFICATION_ORDER:
        if any(keyword in normalized for keyword in CATEGORY_KEYWORDS[category]):
            return category

    return 'Other'


def group_by_category(items: list[GroceryItem]) -> dict[str, list[GroceryItem]]:
    """Group grocery items by category, sorted by name within each group.

    Every category is present in the result, empty or not. Items with a
    category outside the fixed set land in 'Other'.
    """
    grouped = {category: [] for category in CATEGORIES}

    for item in items:
        category = item.category if item.category in grouped else 'Other'
        grouped[category].append(item)

    for category in CATEGORIES:
        grouped[category].sort(key=lambda i: i.name.lower())

    return grouped
