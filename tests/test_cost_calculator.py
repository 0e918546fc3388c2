import pytest

from pricing.calculators import CostCalculator
from pricing.models import Ingredient, Product, RecipeItem, Unit


def test_kg_priced_ingredient_uses_grams():
    """100 per kg, 250 g in the recipe -> 25."""
    ingredient = Ingredient(id="un", name="Un", price=100, unit=Unit.KG)
    assert CostCalculator.contribution(ingredient, 250) == pytest.approx(25.0)


def test_kg_thousand_grams_cost_the_kg_price():
    ingredient = Ingredient(id="peynir", name="Peynir", price=387.5, unit=Unit.KG)
    assert CostCalculator.contribution(ingredient, 1000) == pytest.approx(387.5)


def test_gram_and_piece_multiply_price():
    gram = Ingredient(id="safran", name="Safran", price=0.8, unit=Unit.GRAM)
    piece = Ingredient(id="yumurta", name="Yumurta", price=4.5, unit=Unit.PIECE)
    assert CostCalculator.contribution(gram, 3) == pytest.approx(2.4)
    assert CostCalculator.contribution(piece, 2) == pytest.approx(9.0)


def test_tl_unit_takes_quantity_as_cost():
    ingredient = Ingredient(id="gaz", name="Gaz payı", price=999, unit=Unit.TL)
    assert CostCalculator.contribution(ingredient, 3.75) == pytest.approx(3.75)


def test_missing_price_or_unit_is_currency_direct():
    no_price = Ingredient(id="a", name="A", price=None, unit=Unit.KG)
    no_unit = Ingredient(id="b", name="B", price=50, unit=None)
    assert CostCalculator.contribution(no_price, 12) == pytest.approx(12)
    assert CostCalculator.contribution(no_unit, 7) == pytest.approx(7)


def test_bad_quantity_counts_as_zero():
    ingredient = Ingredient(id="un", name="Un", price=100, unit=Unit.KG)
    assert CostCalculator.contribution(ingredient, None) == 0.0
    assert CostCalculator.contribution(ingredient, float("nan")) == 0.0
    assert CostCalculator.contribution(ingredient, "abc") == 0.0


def test_negative_quantity_is_not_clamped():
    ingredient = Ingredient(id="un", name="Un", price=100, unit=Unit.KG)
    assert CostCalculator.contribution(ingredient, -100) == pytest.approx(-10.0)


def test_empty_recipe_uses_manual_cost():
    product = Product(id="p", name="P", recipe=[], manual_cost=42)
    assert CostCalculator.unit_cost(product, []) == pytest.approx(42)


def test_recipe_ignores_manual_cost():
    ingredients = [Ingredient(id="x", name="X", price=10, unit=Unit.PIECE)]
    product = Product(
        id="p", name="P", recipe=[RecipeItem("x", 1)], manual_cost=1000,
    )
    assert CostCalculator.unit_cost(product, ingredients) == pytest.approx(10)


def test_recipe_with_only_dangling_items_costs_zero():
    product = Product(id="p", name="P", recipe=[RecipeItem("gone", 5)], manual_cost=30)
    assert CostCalculator.unit_cost(product, []) == 0.0


def test_removing_ingredient_drops_only_its_contribution(document):
    product = document.products[0]
    full = CostCalculator.unit_cost(product, document.ingredients)
    kasar = next(i for i in document.ingredients if i.id == "kasar")
    without = [i for i in document.ingredients if i.id != "kasar"]

    expected_drop = CostCalculator.contribution(kasar, 80)
    assert CostCalculator.unit_cost(product, without) == pytest.approx(full - expected_drop)


def test_sample_recipe_cost(document):
    # 2 x 5 bread + 80 g of 400/kg cheese
    assert CostCalculator.unit_cost(document.products[0], document.ingredients) == pytest.approx(42.0)


def test_recipe_unit_labels():
    assert CostCalculator.recipe_unit_label(Ingredient("a", "A", 10, Unit.KG)) == "gram"
    assert CostCalculator.recipe_unit_label(Ingredient("b", "B", 10, Unit.GRAM)) == "gram"
    assert CostCalculator.recipe_unit_label(Ingredient("c", "C", 10, Unit.PIECE)) == "adet"
    assert CostCalculator.recipe_unit_label(Ingredient("d", "D", None, Unit.KG)) == "TL"
