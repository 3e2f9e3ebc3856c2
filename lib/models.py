"""Data types for recipes, selections and grocery list items."""

from dataclasses import dataclass, field, replace
from typing import Optional, Self

# Fixed enumeration order. Classification and text export both depend on it.
CATEGORIES = ('Produce', 'Meat', 'Dairy', 'Pantry', 'Frozen', 'Spices', 'Other')

DIETARY_BADGES = ('vegetarian', 'vegan', 'gluten-free', 'dairy-free', 'nut-free')


@dataclass(frozen=True)
class Ingredient:
    """A recipe-authored ingredient line."""
    name: str
    quantity: float
    unit: str
    notes: Optional[str] = None
    category: Optional[str] = None

    def scaled(self, ratio: float) -> Self:
        return replace(self, quantity=self.quantity * ratio)

    def to_dict(self) -> dict:
        d = {"name": self.name, "quantity": self.quantity, "unit": self.unit}
        if self.notes:
            d["notes"] = self.notes
        if self.category:
            d["category"] = self.category
        return d

    @classmethod
    def from_dict(cls, d: dict) -> Self:
        return cls(
            name=d.get("name", ""),
            quantity=float(d.get("quantity", 0)),
            unit=d.get("unit", ""),
            notes=d.get("notes") or None,
            category=d.get("category") or None,
        )


@dataclass(frozen=True)
class ScaledIngredient(Ingredient):
    """An ingredient already scaled for a selection, tagged with its recipe name."""
    source_recipe: str = ""

    @classmethod
    def from_ingredient(cls, ingredient: Ingredient, source_recipe: str) -> Self:
        return cls(
            name=ingredient.name,
            quantity=ingredient.quantity,
            unit=ingredient.unit,
            notes=ingredient.notes,
            category=ingredient.category,
            source_recipe=source_recipe,
        )


@dataclass
class Recipe:
    id: str
    name: str
    cuisine: str = ""
    tags: list[str] = field(default_factory=list)
    servings_base: int = 4
    ingredients: list[Ingredient] = field(default_factory=list)
    badges: Optional[list[str]] = None

    def to_dict(self) -> dict:
        d = {
            "id": self.id,
            "name": self.name,
            "cuisine": self.cuisine,
            "tags": list(self.tags),
            "servings_base": self.servings_base,
            "ingredients": [ing.to_dict() for ing in self.ingredients],
        }
        if self.badges is not None:
            d["badges"] = list(self.badges)
        return d

    @classmethod
    def from_dict(cls, d: dict) -> Self:
        return cls(
            id=str(d.get("id", "")),
            name=d.get("name", ""),
            cuisine=d.get("cuisine", ""),
            tags=list(d.get("tags", [])),
            servings_base=int(d.get("servings_base", 4)),
            ingredients=[Ingredient.from_dict(i) for i in d.get("ingredients", [])],
            badges=d.get("badges"),
        )


@dataclass
class SelectedRecipe:
    recipe_id: str
    servings: int

    def to_dict(self) -> dict:
        return {"recipe_id": self.recipe_id, "servings": self.servings}

    @classmethod
    def from_dict(cls, d: dict) -> Self:
        return cls(recipe_id=str(d["recipe_id"]), servings=int(d["servings"]))


@dataclass
class GroceryItem:
    """One line of the shopping list."""
    id: str
    name: str
    quantity: float
    unit: str
    category: str = 'Other'
    notes: Optional[str] = None
    checked: bool = False
    source_recipes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        d = {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "category": self.category,
            "checked": self.checked,
            "source_recipes": list(self.source_recipes),
        }
        if self.notes:
            d["notes"] = self.notes
        return d

    @classmethod
    def from_dict(cls, d: dict) -> Self:
        return cls(
            id=str(d["id"]),
            name=d.get("name", ""),
            quantity=d.get("quantity", 0),
            unit=d.get("unit", ""),
            category=d.get("category", 'Other'),
            notes=d.get("notes") or None,
            checked=bool(d.get("checked", False)),
            source_recipes=list(d.get("source_recipes", [])),
        )
