"""Tests for list sharing."""

import base64
from urllib.parse import quote

import pytest

from lib.models import CATEGORIES, GroceryItem, Ingredient, Recipe
from lib.share import (
    compress_list_data,
    decompress_list_data,
    generate_share_text,
    generate_share_title,
    generate_share_url,
    get_common_dietary_badges,
    parse_share_url,
)


def make_recipe(name, *ingredient_names):
    return Recipe(
        id=name.lower().replace(" ", "-"),
        name=name,
        ingredients=[Ingredient(n, 1, "item") for n in ingredient_names],
    )


def encode_raw(text):
    return base64.b64encode(text.encode("ascii")).decode("ascii")


class TestCompressList:
    def test_round_trip_all_categories(self):
        units = ["cup", "g", "tbsp", "item", "lb", "clove", "bunch"]
        items = [
            GroceryItem(
                id=f"id-{n}", name=f"thing {n}", quantity=n + 0.5, unit=unit,
                category=category, notes="chopped", checked=n % 2 == 0,
                source_recipes=["Soup"],
            )
            for n, (category, unit) in enumerate(zip(CATEGORIES, units))
        ]

        decoded = decompress_list_data(compress_list_data(items))

        assert [i.category for i in decoded] == list(CATEGORIES)
        assert [i.name for i in decoded] == [i.name for i in items]
        assert [i.quantity for i in decoded] == [i.quantity for i in items]
        assert [i.unit for i in decoded] == units
        assert [i.checked for i in decoded] == [i.checked for i in items]

    def test_decoded_items_get_fresh_ids_and_shared_source(self):
        items = [GroceryItem(id="abc", name="salt", quantity=1, unit="tsp", notes="flaky")]
        decoded = decompress_list_data(compress_list_data(items))
        assert decoded[0].id == "shared-0"
        assert decoded[0].source_recipes == ["Shared"]
        assert decoded[0].notes is None

    def test_non_ascii_names(self):
        items = [GroceryItem(id="1", name="jalapeño", quantity=2, unit="item", category="Produce")]
        decoded = decompress_list_data(compress_list_data(items))
        assert decoded[0].name == "jalapeño"

    def test_output_is_valid_base64(self):
        encoded = compress_list_data([GroceryItem(id="1", name="a b", quantity=1, unit="item")])
        base64.b64decode(encoded, validate=True)

    def test_empty_list(self):
        assert decompress_list_data(compress_list_data([])) == []

    def test_unknown_category_code_decodes_to_other(self):
        encoded = encode_raw(quote('[{"n":"x","q":1,"u":"item","c":"Z","k":0}]'))
        assert decompress_list_data(encoded)[0].category == "Other"


class TestDecompressMalformed:
    def test_bad_base64(self):
        assert decompress_list_data("not base64!!") is None

    def test_empty_string(self):
        assert decompress_list_data("") is None

    def test_not_json(self):
        assert decompress_list_data(encode_raw("hello")) is None

    def test_bad_percent_encoding(self):
        assert decompress_list_data(encode_raw("%FF%FE")) is None

    def test_non_ascii_payload(self):
        encoded = base64.b64encode("ü".encode("utf-8")).decode("ascii")
        assert decompress_list_data(encoded) is None

    def test_wrong_shape(self):
        assert decompress_list_data(encode_raw(quote('{"n":"x"}'))) is None
        assert decompress_list_data(encode_raw(quote('[{"n":1,"q":1,"u":"g"}]'))) is None
        assert decompress_list_data(encode_raw(quote('[{"n":"x","q":"1","u":"g"}]'))) is None

    @pytest.mark.parametrize("entry", [
        '{"n":"x","q":1,"u":"item","c":[1],"k":0}',
        '{"n":"x","q":1,"u":"item","c":{"a":1},"k":0}',
        '{"n":"x","q":1,"u":"item","c":"a","k":[1]}',
        '{"n":"x","q":1,"u":"item","c":"a","k":2}',
        '{"n":"x","q":1,"u":"item","c":"a","k":true}',
    ])
    def test_bad_category_or_checked_field(self, entry):
        assert decompress_list_data(encode_raw(quote(f"[{entry}]"))) is None

    @pytest.mark.parametrize("quantity", ["0", "-2", "NaN", "Infinity"])
    def test_bad_quantity(self, quantity):
        encoded = encode_raw(quote(f'[{{"n":"x","q":{quantity},"u":"item"}}]'))
        assert decompress_list_data(encoded) is None

    def test_deeply_nested_payload(self):
        encoded = encode_raw(quote("[" * 100000 + "]" * 100000))
        assert decompress_list_data(encoded) is None


class TestShareUrl:
    def test_round_trip(self):
        items = [GroceryItem(id="1", name="flour", quantity=2.5, unit="cup", category="Pantry")]
        url = generate_share_url(items, "https://example.com/list")
        assert url.startswith("https://example.com/list?list=")

        parsed = parse_share_url(url)
        assert parsed[0].name == "flour"
        assert parsed[0].category == "Pantry"

    def test_missing_param(self):
        assert parse_share_url("https://example.com/list?other=1") is None

    def test_malformed_param(self):
        assert parse_share_url("https://example.com/list?list=garbage!") is None


class TestShareTitle:
    def test_no_recipes(self):
        assert generate_share_title([], 0) == "Grocery List (0 items)"

    def test_at_most_two_labels(self):
        recipes = [make_recipe("Tofu Bowl", "tofu", "rice")]
        assert generate_share_title(recipes, 3) == "Vegetarian & Vegan Grocery List (3 items)"

    def test_common_badges_only(self):
        recipes = [make_recipe("Tofu Bowl", "tofu"), make_recipe("Chicken Soup", "chicken", "milk")]
        assert get_common_dietary_badges(recipes) == ["gluten-free", "nut-free"]
        assert generate_share_title(recipes, 2) == "Gluten-Free & Nut-Free Grocery List (2 items)"

    def test_no_common_badges(self):
        recipes = [make_recipe("Everything", "beef", "milk", "flour", "walnuts")]
        assert generate_share_title(recipes, 1) == "Grocery List (1 items)"


class TestShareText:
    def test_with_badges(self):
        text = generate_share_text([make_recipe("Tofu Bowl", "tofu")], 3)
        assert text == (
            "Vegetarian & Vegan Grocery List (3 items)\n"
            "Vegetarian, Vegan, Gluten-Free, Dairy-Free, Nut-Free\n"
            "\n"
            "Recipes:\n"
            "- Tofu Bowl\n"
        )

    def test_without_badges(self):
        text = generate_share_text([make_recipe("Everything", "beef", "milk", "flour", "walnuts")], 1)
        assert text == "Grocery List (1 items)\n\nRecipes:\n- Everything\n"
