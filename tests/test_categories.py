"""Tests for category detection and grouping."""

from lib.categories import CLASSIFICATION_ORDER, detect_category, group_by_category
from lib.models import CATEGORIES, GroceryItem


def make_item(name, category, item_id="1"):
    return GroceryItem(id=item_id, name=name, quantity=1, unit="item", category=category)


class TestDetectCategory:
    def test_produce(self):
        assert detect_category("Red Onion") == "Produce"
        assert detect_category("spinach") == "Produce"

    def test_meat(self):
        assert detect_category("chicken thighs") == "Meat"
        assert detect_category("salmon fillet") == "Meat"

    def test_dairy(self):
        assert detect_category("cheddar") == "Dairy"

    def test_pantry(self):
        assert detect_category("all-purpose flour") == "Pantry"

    def test_frozen(self):
        assert detect_category("sorbet") == "Frozen"
        assert detect_category("ice cubes") == "Frozen"

    def test_earlier_category_wins(self):
        """'cream' is a Dairy keyword and Dairy is checked before Frozen."""
        assert detect_category("vanilla ice cream") == "Dairy"

    def test_spices(self):
        assert detect_category("cumin") == "Spices"

    def test_unknown_is_other(self):
        assert detect_category("xanthan gum") == "Other"
        assert detect_category("") == "Other"

    def test_classification_order_is_pinned(self):
        assert CLASSIFICATION_ORDER == ('Produce', 'Meat', 'Dairy', 'Pantry', 'Frozen', 'Spices')

    def test_overlap_resolved_by_order(self):
        """Basil is listed under Produce and Spices; Produce is checked first."""
        assert detect_category("basil") == "Produce"
        assert detect_category("black pepper") == "Produce"


class TestGroupByCategory:
    def test_all_categories_present(self):
        grouped = group_by_category([])
        assert list(grouped) == list(CATEGORIES)
        assert all(items == [] for items in grouped.values())

    def test_groups_items(self):
        items = [make_item("milk", "Dairy", "1"), make_item("onion", "Produce", "2")]
        grouped = group_by_category(items)
        assert [i.name for i in grouped["Dairy"]] == ["milk"]
        assert [i.name for i in grouped["Produce"]] == ["onion"]

    def test_sorted_by_name_case_insensitive(self):
        items = [
            make_item("tomato", "Produce", "1"),
            make_item("Basil", "Produce", "2"),
            make_item("apple", "Produce", "3"),
        ]
        grouped = group_by_category(items)
        assert [i.name for i in grouped["Produce"]] == ["apple", "Basil", "tomato"]

    def test_unknown_category_goes_to_other(self):
        grouped = group_by_category([make_item("thing", "Bakery")])
        assert [i.name for i in grouped["Other"]] == ["thing"]
