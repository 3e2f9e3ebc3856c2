"""Tests for recipe validation."""

import pytest

from lib.models import Ingredient, Recipe
from lib.recipe_validator import (
    RecipeValidationError,
    build_ingredient,
    ensure_valid_recipe,
    parse_recipe_data,
    validate_recipe,
)


def valid_recipe(**overrides):
    fields = dict(
        id="",
        name="Toast",
        servings_base=2,
        ingredients=[Ingredient("bread", 2, "item", category="Pantry")],
    )
    fields.update(overrides)
    return Recipe(**fields)


class TestBuildIngredient:
    def test_trims_and_detects_category(self):
        ingredient = build_ingredient("  Red Onion ", 1, "item", notes="  diced ")
        assert ingredient.name == "Red Onion"
        assert ingredient.notes == "diced"
        assert ingredient.category == "Produce"

    def test_blank_notes_become_none(self):
        assert build_ingredient("salt", notes="   ").notes is None

    def test_defaults(self):
        ingredient = build_ingredient("egg")
        assert ingredient.quantity == 1
        assert ingredient.unit == "item"

    def test_explicit_category_kept(self):
        assert build_ingredient("basil", category="Spices").category == "Spices"

    def test_empty_name(self):
        with pytest.raises(RecipeValidationError, match="Ingredient name is required"):
            build_ingredient("  ")

    def test_non_positive_quantity(self):
        with pytest.raises(RecipeValidationError, match="greater than zero"):
            build_ingredient("salt", 0)

    @pytest.mark.parametrize("quantity", [float("nan"), float("inf"), -float("inf")])
    def test_non_finite_quantity(self, quantity):
        with pytest.raises(RecipeValidationError, match="greater than zero"):
            build_ingredient("salt", quantity)

    def test_unknown_category(self):
        with pytest.raises(RecipeValidationError, match="Unknown category"):
            build_ingredient("salt", category="Bakery")


class TestValidateRecipe:
    def test_valid(self):
        assert validate_recipe(valid_recipe()) == []

    def test_collects_every_error(self):
        recipe = valid_recipe(name=" ", servings_base=0, ingredients=[])
        errors = validate_recipe(recipe)
        assert errors == [
            "Recipe name is required",
            "Base servings must be a whole number of at least 1",
            "At least one ingredient is required",
        ]

    def test_bad_ingredient(self):
        recipe = valid_recipe(ingredients=[Ingredient("", -1, "cup")])
        errors = validate_recipe(recipe)
        assert "Ingredient name is required" in errors
        assert any("greater than zero" in e for e in errors)

    def test_ensure_valid_raises_with_errors(self):
        with pytest.raises(RecipeValidationError) as exc_info:
            ensure_valid_recipe(valid_recipe(ingredients=[]))
        assert exc_info.value.errors == ["At least one ingredient is required"]
        assert isinstance(exc_info.value, ValueError)

    def test_ensure_valid_returns_recipe(self):
        recipe = valid_recipe()
        assert ensure_valid_recipe(recipe) is recipe


class TestParseRecipeData:
    def test_builds_recipe(self):
        recipe = parse_recipe_data({
            "name": " Chili ",
            "cuisine": "Tex-Mex",
            "tags": ["Spicy", "spicy", " One-Pot "],
            "servings_base": 6,
            "ingredients": [
                {"name": "ground beef", "quantity": 500, "unit": "g"},
                {"name": "kidney beans", "quantity": "2", "unit": "", "notes": " drained "},
            ],
        })
        assert recipe.name == "Chili"
        assert recipe.tags == ["spicy", "one-pot"]
        assert recipe.ingredients[0].category == "Meat"
        assert recipe.ingredients[1].quantity == 2.0
        assert recipe.ingredients[1].unit == "item"
        assert recipe.ingredients[1].notes == "drained"
        assert recipe.badges is None

    def test_not_a_dict(self):
        with pytest.raises(RecipeValidationError, match="must be an object"):
            parse_recipe_data(["nope"])

    def test_ingredients_not_a_list(self):
        with pytest.raises(RecipeValidationError, match="must be a list"):
            parse_recipe_data({"name": "x", "ingredients": "flour"})

    def test_malformed_quantity(self):
        with pytest.raises(RecipeValidationError, match="Malformed recipe"):
            parse_recipe_data({"name": "x", "ingredients": [{"name": "flour", "quantity": "lots"}]})

    @pytest.mark.parametrize("quantity", ["nan", "inf"])
    def test_non_finite_quantity_string(self, quantity):
        with pytest.raises(RecipeValidationError, match="greater than zero"):
            parse_recipe_data({"name": "x", "ingredients": [{"name": "flour", "quantity": quantity}]})

    def test_invalid_recipe(self):
        with pytest.raises(RecipeValidationError, match="At least one ingredient"):
            parse_recipe_data({"name": "Empty", "ingredients": []})
