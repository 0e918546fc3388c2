"""Calculator modules for cost and price computations."""

from .cost_calculator import CostCalculator
from .price_calculator import PriceCalculator

__all__ = ["CostCalculator", "PriceCalculator"]
