"""Display formatting for lira amounts and percentages."""

from __future__ import annotations
from typing import Any

from services.utils import is_displayable

PLACEHOLDER = "…"
CURRENCY_SYMBOL = "₺"

INGREDIENT_DECIMALS = 4


def _group_thousands(integer_part: str) -> str:
    groups = []
    while len(integer_part) > 3:
        groups.insert(0, integer_part[-3:])
        integer_part = integer_part[:-3]
    groups.insert(0, integer_part)
    return ".".join(groups)


def format_number(value: Any, min_decimals: int = 2, max_decimals: int = 2) -> str:
    """
    Turkish number format: '.' groups thousands, ',' separates decimals.

    Trailing zeros beyond `min_decimals` are dropped, so
    format_number(0.0125, 2, 4) -> '0,0125' and format_number(2.5) -> '2,50'.
    """
    if not is_displayable(value):
        return PLACEHOLDER
    text = f"{abs(float(value)):.{max_decimals}f}"
    integer_part, _, decimals = text.partition(".")
    while len(decimals) > min_decimals and decimals.endswith("0"):
        decimals = decimals[:-1]
    sign = "-" if float(value) < 0 and (set(integer_part + decimals) - {"0"}) else ""
    out = _group_thousands(integer_part)
    if decimals:
        out = f"{out},{decimals}"
    return f"{sign}{out}"


def format_currency(amount: Any, max_decimals: int = 2) -> str:
    """'₺1.234,56'; NaN, infinities and None give the placeholder."""
    if not is_displayable(amount):
        return PLACEHOLDER
    text = format_number(amount, min_decimals=2, max_decimals=max(2, max_decimals))
    if text.startswith("-"):
        return f"-{CURRENCY_SYMBOL}{text[1:]}"
    return f"{CURRENCY_SYMBOL}{text}"


def format_percent(value: Any) -> str:
    """'%50', '%12,5'."""
    if not is_displayable(value):
        return PLACEHOLDER
    return f"%{format_number(value, min_decimals=0, max_decimals=2)}"


def format_ingredient_amount(amount: Any) -> str:
    """Ingredient prices and recipe line costs keep up to 4 decimals: '₺0,0024'."""
    return format_currency(amount, max_decimals=INGREDIENT_DECIMALS)
