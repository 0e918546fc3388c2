"""Recipe cost calculator - Pure calculation logic."""

from __future__ import annotations
from typing import List

from pricing.models import Ingredient, Product, RecipeItem, Unit, find_ingredient
from services.utils import to_number

GRAMS_PER_KG = 1000.0

# Unit the recipe quantity is typed in, per ingredient pricing unit
RECIPE_UNIT_LABELS = {
    Unit.KG: "gram",
    Unit.GRAM: "gram",
    Unit.PIECE: "adet",
    Unit.TL: "TL",
}


class CostCalculator:
    """Turns a recipe and the ingredient price list into a unit cost."""

    @staticmethod
    def contribution(ingredient: Ingredient, quantity: float) -> float:
        """
        Cost of `quantity` of one ingredient.

        No rounding is applied: a gram of an expensive spice must keep
        its sub-kuruş precision until display time.
        """
        qty = to_number(quantity)
        unit = ingredient.pricing_unit
        if unit is Unit.TL:
            return qty
        price = to_number(ingredient.price)
        if unit is Unit.KG:
            return (price / GRAMS_PER_KG) * qty
        if unit in (Unit.GRAM, Unit.PIECE):
            return price * qty
        raise AssertionError(f"Unhandled unit: {unit!r}")

    @staticmethod
    def recipe_row_cost(item: RecipeItem, ingredients: List[Ingredient]) -> float:
        """Cost of a single recipe line; a deleted ingredient costs 0."""
        ingredient = find_ingredient(ingredients, item.ingredient_id)
        if ingredient is None:
            return 0.0
        return CostCalculator.contribution(ingredient, item.quantity)

    @staticmethod
    def recipe_cost(recipe: List[RecipeItem], ingredients: List[Ingredient]) -> float:
        """Sum of all recipe line costs."""
        return sum(
            (CostCalculator.recipe_row_cost(item, ingredients) for item in recipe),
            0.0,
        )

    @staticmethod
    def unit_cost(product: Product, ingredients: List[Ingredient]) -> float:
        """
        Cost to produce one unit of the product.

        A non-empty recipe always wins; manual_cost only applies while the
        recipe is empty.
        """
        if not product.recipe:
            return to_number(product.manual_cost)
        return CostCalculator.recipe_cost(product.recipe, ingredients)

    @staticmethod
    def recipe_unit_label(ingredient: Ingredient) -> str:
        """Unit label shown next to the recipe quantity input."""
        return RECIPE_UNIT_LABELS[ingredient.pricing_unit]
