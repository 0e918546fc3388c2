"""Repository layer for data access."""

from .category_repository import CategoryRepository
from .ingredient_repository import IngredientRepository
from .margin_repository import MarginRepository
from .product_repository import ProductRepository
from .rate_repository import RateRepository

__all__ = [
    "CategoryRepository",
    "IngredientRepository",
    "MarginRepository",
    "ProductRepository",
    "RateRepository",
]
