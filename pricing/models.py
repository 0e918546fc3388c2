"""
Domain Models
=============

Entities of the pricing document and their JSON (camelCase) mapping.

The persisted document keeps the shape the web client has always written:

{
  "products": [...],
  "ingredients": [...],
  "categories": [...],
  "margins": [...],
  "platformCommissionRate": 15,
  "kdvRate": 10,
  "bankCommissionRate": 2.5
}

`from_dict` constructors are tolerant: missing keys get defaults and
non-numeric values are normalised (see services.utils.numbers), so a
half-filled form row never poisons a later calculation with NaN.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from services.utils import parse_number, to_number


DEFAULT_PLATFORM_COMMISSION_RATE = 15.0
DEFAULT_KDV_RATE = 10.0
DEFAULT_BANK_COMMISSION_RATE = 2.5


# ============================================================================
# ENUMS
# ============================================================================

class Unit(str, Enum):
    """Unit an ingredient price is quoted in."""

    KG = "kg"        # price per kilogram, recipe quantity in grams
    GRAM = "gram"    # price per gram
    PIECE = "adet"   # price per piece
    TL = "TL"        # recipe quantity is itself a lira amount

    @classmethod
    def parse(cls, raw: Any) -> Optional["Unit"]:
        """Return the matching unit, or None for blank/unknown values."""
        if isinstance(raw, Unit):
            return raw
        text = str(raw or "").strip()
        for unit in cls:
            if text.lower() == unit.value.lower():
                return unit
        return None


class Channel(str, Enum):
    """Sales channel; also the `type` of a margin column."""

    STORE = "store"
    ONLINE = "online"

    @classmethod
    def parse(cls, raw: Any, default: Optional["Channel"] = None) -> "Channel":
        if isinstance(raw, Channel):
            return raw
        text = str(raw or "").strip().lower()
        for channel in cls:
            if channel.value == text:
                return channel
        if default is None:
            raise ValueError(f"Unknown channel: {raw!r}")
        return default


# ============================================================================
# ENTITIES
# ============================================================================

@dataclass
class Ingredient:
    id: str
    name: str
    price: Optional[float] = None
    unit: Optional[Unit] = None
    order: int = 0

    @property
    def pricing_unit(self) -> Unit:
        """
        The unit rule the cost engine applies.

        An ingredient without a price or without a unit is priced
        directly in lira: its recipe quantity is the cost.
        """
        if self.price is None or self.unit is None:
            return Unit.TL
        return self.unit

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Ingredient":
        return cls(
            id=str(raw.get("id", "")),
            name=str(raw.get("name", "")),
            price=parse_number(raw.get("price")),
            unit=Unit.parse(raw.get("unit")),
            order=int(to_number(raw.get("order"))),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"id": self.id, "name": self.name, "order": self.order}
        if self.price is not None:
            out["price"] = self.price
        if self.unit is not None:
            out["unit"] = self.unit.value
        return out


@dataclass
class RecipeItem:
    ingredient_id: str
    quantity: float = 0.0

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "RecipeItem":
        return cls(
            ingredient_id=str(raw.get("ingredientId", "")),
            quantity=to_number(raw.get("quantity")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"ingredientId": self.ingredient_id, "quantity": self.quantity}


@dataclass
class Product:
    id: str
    name: str
    recipe: List[RecipeItem] = field(default_factory=list)
    manual_cost: float = 0.0
    store_price: float = 0.0
    online_price: float = 0.0
    order: int = 0
    category_id: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Product":
        recipe = raw.get("recipe") or []
        return cls(
            id=str(raw.get("id", "")),
            name=str(raw.get("name", "")),
            recipe=[RecipeItem.from_dict(r) for r in recipe if isinstance(r, dict)],
            manual_cost=to_number(raw.get("manualCost")),
            store_price=to_number(raw.get("storePrice")),
            online_price=to_number(raw.get("onlinePrice")),
            order=int(to_number(raw.get("order"))),
            category_id=raw.get("categoryId") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "recipe": [r.to_dict() for r in self.recipe],
            "manualCost": self.manual_cost,
            "storePrice": self.store_price,
            "onlinePrice": self.online_price,
            "order": self.order,
        }
        if self.category_id:
            out["categoryId"] = self.category_id
        return out

    def list_price(self, channel: Channel) -> float:
        """The declared price for a channel."""
        return self.store_price if channel is Channel.STORE else self.online_price


@dataclass
class Category:
    id: str
    name: str
    color: str = ""

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Category":
        return cls(
            id=str(raw.get("id", "")),
            name=str(raw.get("name", "")),
            color=str(raw.get("color", "")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "color": self.color}


@dataclass
class Margin:
    id: str
    value: float
    type: Channel = Channel.STORE

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Margin":
        return cls(
            id=str(raw.get("id", "")),
            value=to_number(raw.get("value")),
            type=Channel.parse(raw.get("type"), default=Channel.STORE),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "value": self.value, "type": self.type.value}


@dataclass(frozen=True)
class RateConfig:
    """Process-wide rates, passed explicitly into the pricing engine."""

    platform_commission_rate: float = DEFAULT_PLATFORM_COMMISSION_RATE
    bank_commission_rate: float = DEFAULT_BANK_COMMISSION_RATE
    kdv_rate: float = DEFAULT_KDV_RATE

    def __post_init__(self) -> None:
        # NaN, infinite or non-numeric rates fall back to the defaults
        for name, default in (
            ("platform_commission_rate", DEFAULT_PLATFORM_COMMISSION_RATE),
            ("bank_commission_rate", DEFAULT_BANK_COMMISSION_RATE),
            ("kdv_rate", DEFAULT_KDV_RATE),
        ):
            object.__setattr__(self, name, to_number(getattr(self, name), default))

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "RateConfig":
        return cls(
            platform_commission_rate=to_number(
                raw.get("platformCommissionRate"), DEFAULT_PLATFORM_COMMISSION_RATE
            ),
            bank_commission_rate=to_number(
                raw.get("bankCommissionRate"), DEFAULT_BANK_COMMISSION_RATE
            ),
            kdv_rate=to_number(raw.get("kdvRate"), DEFAULT_KDV_RATE),
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "platformCommissionRate": self.platform_commission_rate,
            "kdvRate": self.kdv_rate,
            "bankCommissionRate": self.bank_commission_rate,
        }

    def commission_rate(self, channel: Channel) -> float:
        """Fee charged by the channel: bank for store, platform for online."""
        if channel is Channel.STORE:
            return self.bank_commission_rate
        return self.platform_commission_rate


@dataclass
class PricingDocument:
    products: List[Product] = field(default_factory=list)
    ingredients: List[Ingredient] = field(default_factory=list)
    categories: List[Category] = field(default_factory=list)
    margins: List[Margin] = field(default_factory=list)
    rates: RateConfig = field(default_factory=RateConfig)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "PricingDocument":
        def _dicts(key: str) -> List[Dict[str, Any]]:
            items = raw.get(key) or []
            if not isinstance(items, list):
                return []
            return [it for it in items if isinstance(it, dict)]

        return cls(
            products=[Product.from_dict(p) for p in _dicts("products")],
            ingredients=[Ingredient.from_dict(i) for i in _dicts("ingredients")],
            categories=[Category.from_dict(c) for c in _dicts("categories")],
            margins=[Margin.from_dict(m) for m in _dicts("margins")],
            rates=RateConfig.from_dict(raw),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "products": [p.to_dict() for p in self.products],
            "ingredients": [i.to_dict() for i in self.ingredients],
            "categories": [c.to_dict() for c in self.categories],
            "margins": [m.to_dict() for m in self.margins],
        }
        out.update(self.rates.to_dict())
        return out


def default_document() -> Dict[str, Any]:
    """The document written when no data file exists yet."""
    return PricingDocument().to_dict()


# ============================================================================
# WEAK-REFERENCE LOOKUPS
# ============================================================================

def find_ingredient(ingredients: List[Ingredient], ingredient_id: str) -> Optional[Ingredient]:
    """Resolve a recipe's ingredient reference; None if it was deleted."""
    for ingredient in ingredients:
        if ingredient.id == ingredient_id:
            return ingredient
    return None


def find_category(categories: List[Category], category_id: Optional[str]) -> Optional[Category]:
    """Resolve a product's category reference; None means uncategorized."""
    if not category_id:
        return None
    for category in categories:
        if category.id == category_id:
            return category
    return None
