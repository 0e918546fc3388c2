import math

from pricing.calculators import CostCalculator
from pricing.formatting import (
    PLACEHOLDER,
    format_currency,
    format_ingredient_amount,
    format_number,
    format_percent,
)
from pricing.models import Ingredient, Unit


def test_currency_turkish_separators():
    assert format_currency(1234.56) == "₺1.234,56"
    assert format_currency(1234567.891) == "₺1.234.567,89"
    assert format_currency(5) == "₺5,00"


def test_currency_negative():
    assert format_currency(-19.5) == "-₺19,50"
    assert format_currency(-0.001) == "₺0,00"


def test_non_finite_values_show_placeholder():
    assert format_currency(math.nan) == PLACEHOLDER
    assert format_currency(math.inf) == PLACEHOLDER
    assert format_currency(None) == PLACEHOLDER
    assert format_percent(math.nan) == PLACEHOLDER


def test_extra_decimals_only_when_needed():
    assert format_number(0.0125, 2, 4) == "0,0125"
    assert format_number(2.5, 2, 4) == "2,50"


def test_percent():
    assert format_percent(50) == "%50"
    assert format_percent(12.5) == "%12,5"


def test_ingredient_amounts_keep_sub_kurus_digits():
    ingredient = Ingredient(id="tuz", name="Tuz", price=2.4, unit=Unit.KG)
    row_cost = CostCalculator.contribution(ingredient, 1)

    assert format_currency(row_cost) == "₺0,00"
    assert format_ingredient_amount(row_cost) == "₺0,0024"
    assert format_ingredient_amount(0.1) == "₺0,10"
    assert format_ingredient_amount(None) == PLACEHOLDER
