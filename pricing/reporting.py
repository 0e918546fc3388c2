"""
Aggregation / Reporting
=======================

Display-ready views over an in-memory PricingDocument. Nothing here
mutates its inputs.

- group_by_category: category groups, then one "uncategorized" group
- margin_columns: per-channel margin columns, ascending
- pricing_rows / margin_comparison: the numbers behind the price tables
- price_breakdowns: base, KDV and commission steps per margin column
- recipe_breakdown: per-line recipe costs for the recipe editor

Values the engine cannot produce (a commission rate of 100 that slipped
past validation) come out as NaN so the UI can render a placeholder.
"""

from __future__ import annotations
import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pricing.calculators import CostCalculator, PriceCalculator
from pricing.formatting import format_number, format_percent
from pricing.models import (
    Category,
    Channel,
    Ingredient,
    Margin,
    PricingDocument,
    Product,
    RateConfig,
    RecipeItem,
    find_category,
    find_ingredient,
)
from services.errors import InvalidRateError

logger = logging.getLogger(__name__)

UNCATEGORIZED_LABEL = "Kategorisiz"


@dataclass
class ProductGroup:
    category: Optional[Category]
    products: List[Product] = field(default_factory=list)

    @property
    def title(self) -> str:
        return self.category.name if self.category else UNCATEGORIZED_LABEL

    @property
    def key(self) -> Optional[str]:
        """Category id; None for the uncategorized group."""
        return self.category.id if self.category else None


# ============================================================================
# GROUPING / ORDERING
# ============================================================================

def group_by_category(products: List[Product], categories: List[Category]) -> List[ProductGroup]:
    """
    Group products for display.

    One group per category that has members, in category list order, then
    a single uncategorized group. A product whose category was deleted
    lands in the uncategorized group. Within a group products are sorted
    by `order` (stable, so ties keep list order).
    """
    ordered = sorted(products, key=lambda p: p.order)

    by_category: Dict[str, List[Product]] = {}
    uncategorized: List[Product] = []
    for product in ordered:
        category = find_category(categories, product.category_id)
        if category is not None:
            by_category.setdefault(category.id, []).append(product)
        else:
            uncategorized.append(product)

    groups: List[ProductGroup] = []
    seen = set()
    for category in categories:
        members = by_category.get(category.id)
        if members and category.id not in seen:
            groups.append(ProductGroup(category=category, products=members))
            seen.add(category.id)

    if uncategorized:
        groups.append(ProductGroup(category=None, products=uncategorized))
    return groups


def margin_columns(margins: List[Margin], margin_type: Channel) -> List[Margin]:
    """Margins of one channel, ascending by value."""
    return sorted((m for m in margins if m.type is margin_type), key=lambda m: m.value)


def margin_labels(columns: List[Margin]) -> Dict[str, str]:
    """
    Column header per margin id, unique within `columns`.

    Values that collide at 2 decimals (12.5 and 12.501) are shown with all
    their digits; exact duplicates get the margin id appended.
    """
    labels = {m.id: format_percent(m.value) for m in columns}
    counts = Counter(labels.values())
    for m in columns:
        if counts[labels[m.id]] > 1:
            labels[m.id] = f"%{format_number(m.value, min_decimals=0, max_decimals=10)}"

    counts = Counter(labels.values())
    for m in columns:
        if counts[labels[m.id]] > 1:
            labels[m.id] = f"{labels[m.id]} ({m.id})"
    return labels


def sorted_ingredients(ingredients: List[Ingredient]) -> List[Ingredient]:
    """Ingredients in display order; ties keep insertion order."""
    return sorted(ingredients, key=lambda i: i.order)


# ============================================================================
# RECIPE
# ============================================================================

def recipe_row_cost(item: RecipeItem, ingredients: List[Ingredient]) -> float:
    """Single-line cost; identical to the term summed by the cost engine."""
    return CostCalculator.recipe_row_cost(item, ingredients)


def recipe_breakdown(product: Product, ingredients: List[Ingredient]) -> List[Dict[str, Any]]:
    """
    Recipe lines for display, in ingredient order.

    Lines pointing at deleted ingredients are left out; they contribute
    nothing to the cost either.
    """
    lines = []
    for item in product.recipe:
        ingredient = find_ingredient(ingredients, item.ingredient_id)
        if ingredient is None:
            continue
        lines.append(
            {
                "ingredient_id": ingredient.id,
                "name": ingredient.name,
                "quantity": item.quantity,
                "unit_label": CostCalculator.recipe_unit_label(ingredient),
                "price": ingredient.price,
                "unit": ingredient.unit.value if ingredient.unit else None,
                "order": ingredient.order,
                "cost": recipe_row_cost(item, ingredients),
            }
        )
    return sorted(lines, key=lambda line: line["order"])


# ============================================================================
# PRICE TABLES
# ============================================================================

def _safe(func, *args) -> float:
    """Run an engine call, mapping invalid rates and non-finite results to NaN."""
    try:
        value = func(*args)
    except InvalidRateError as e:
        logger.warning("Price not computable: %s", e)
        return math.nan
    if math.isinf(value):
        return math.nan
    return value


def pricing_rows(document: PricingDocument, channel: Channel) -> List[Dict[str, Any]]:
    """
    One row per product (grouped order) for a channel's price table.

    Returns:
        List of dicts: product, group (title), group_key, cost, list_price,
        net_settlement and `prices` mapping margin id -> selling price
    """
    columns = margin_columns(document.margins, channel)
    rows: List[Dict[str, Any]] = []
    for group in group_by_category(document.products, document.categories):
        for product in group.products:
            cost = CostCalculator.unit_cost(product, document.ingredients)
            list_price = product.list_price(channel)
            rows.append(
                {
                    "product_id": product.id,
                    "product": product.name,
                    "group": group.title,
                    "group_key": group.key,
                    "cost": cost,
                    "list_price": list_price,
                    "net_settlement": _safe(
                        PriceCalculator.net_settlement, list_price, channel, document.rates
                    ),
                    "prices": {
                        m.id: _safe(PriceCalculator.selling_price, cost, m.value, channel, document.rates)
                        for m in columns
                    },
                }
            )
    return rows


def margin_comparison(
    product: Product,
    cost: float,
    margins: List[Margin],
    rates: RateConfig,
) -> List[Dict[str, Any]]:
    """
    Per-margin comparison of margin prices against the declared prices.

    Each margin is priced on its own channel; the gap is margin price
    minus the product's declared price on that channel.
    """
    rows = []
    for channel in (Channel.STORE, Channel.ONLINE):
        for margin in margin_columns(margins, channel):
            price = _safe(PriceCalculator.selling_price, cost, margin.value, channel, rates)
            rows.append(
                {
                    "margin_id": margin.id,
                    "channel": channel.value,
                    "margin": margin.value,
                    "selling_price": price,
                    "list_price": product.list_price(channel),
                    "gap": PriceCalculator.price_gap(price, product.list_price(channel))
                    if not math.isnan(price)
                    else math.nan,
                }
            )
    return rows


BREAKDOWN_KEYS = (
    "base_price",
    "profit",
    "kdv_amount",
    "gross_price",
    "commission_amount",
    "selling_price",
)


def price_breakdowns(cost: float, margins: List[Margin], rates: RateConfig) -> List[Dict[str, Any]]:
    """
    Step-by-step selling price per margin column, store columns first.

    A channel whose commission makes the price undefined yields NaN steps.
    """
    rows = []
    for channel in (Channel.STORE, Channel.ONLINE):
        for margin in margin_columns(margins, channel):
            row: Dict[str, Any] = {
                "margin_id": margin.id,
                "channel": channel.value,
                "margin": margin.value,
                "commission_rate": rates.commission_rate(channel),
            }
            try:
                parts = PriceCalculator.breakdown(cost, margin.value, channel, rates)
            except InvalidRateError as e:
                logger.warning("Breakdown not computable: %s", e)
                parts = {key: math.nan for key in BREAKDOWN_KEYS}
            row.update({key: parts[key] for key in BREAKDOWN_KEYS})
            rows.append(row)
    return rows
