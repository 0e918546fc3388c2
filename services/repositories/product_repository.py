"""Product repository - products, their recipes and display order."""

from __future__ import annotations
import logging
from typing import Any, Dict, Optional, Tuple

from ..errors import ValidationError
from ..utils import generate_unique_id, to_number
from .helpers import clone, existing_ids, find_index, items_of, move_to, next_order

logger = logging.getLogger(__name__)

NUMERIC_FIELDS = ("manualCost", "storePrice", "onlinePrice")
TEXT_FIELDS = ("name",)


class ProductRepository:
    """Manages product data operations."""

    @staticmethod
    def _locate(document: Dict[str, Any], product_id: str) -> Dict[str, Any]:
        products = items_of(document, "products")
        idx = find_index(products, product_id)
        if idx == -1:
            raise ValidationError(f"Product '{product_id}' not found.")
        return products[idx]

    @staticmethod
    def add(document: Dict[str, Any], payload: Dict[str, Any]) -> Tuple[Dict[str, Any], str]:
        """
        Add a product with an empty recipe at the end of the display order.

        Returns:
            (updated_document, product_id)
        """
        name = str(payload.get("name") or "").strip()
        if not name:
            raise ValidationError("Product name is required.")

        updated = clone(document)
        products = items_of(updated, "products")
        record: Dict[str, Any] = {
            "id": generate_unique_id(name, existing_ids(products)),
            "name": name,
            "recipe": [],
            "order": next_order(products),
        }
        for key in NUMERIC_FIELDS:
            record[key] = to_number(payload.get(key))

        category_id = payload.get("categoryId")
        if category_id and find_index(items_of(updated, "categories"), category_id) != -1:
            record["categoryId"] = category_id

        products.append(record)
        return updated, record["id"]

    @staticmethod
    def update(document: Dict[str, Any], product_id: str, field: str, value: Any) -> Dict[str, Any]:
        """
        Edit one field as typed into the product table.

        Numeric input that does not parse is stored as 0, never as NaN.
        A blank name raises ValidationError.
        """
        if field == "categoryId":
            return ProductRepository.set_category(document, product_id, value)
        if field not in TEXT_FIELDS + NUMERIC_FIELDS:
            raise ValidationError(f"Field '{field}' cannot be edited.")

        updated = clone(document)
        record = ProductRepository._locate(updated, product_id)
        if field in TEXT_FIELDS:
            text = str(value or "").strip()
            if not text:
                raise ValidationError("Product name is required.")
            record[field] = text
        else:
            record[field] = to_number(value)
        return updated

    @staticmethod
    def delete(document: Dict[str, Any], product_id: str) -> Dict[str, Any]:
        updated = clone(document)
        updated["products"] = [
            p for p in items_of(updated, "products")
            if not (isinstance(p, dict) and str(p.get("id", "")) == str(product_id))
        ]
        return updated

    @staticmethod
    def move(document: Dict[str, Any], product_id: str, new_index: int) -> Dict[str, Any]:
        """Move a product to a new position; every product is renumbered 0..n-1."""
        updated = clone(document)
        if not move_to(items_of(updated, "products"), product_id, new_index):
            logger.debug("Product %s not found, order unchanged", product_id)
        return updated

    @staticmethod
    def set_category(document: Dict[str, Any], product_id: str, category_id: Optional[str]) -> Dict[str, Any]:
        """Assign a category; None or an unknown id makes the product uncategorized."""
        updated = clone(document)
        record = ProductRepository._locate(updated, product_id)
        if category_id and find_index(items_of(updated, "categories"), category_id) != -1:
            record["categoryId"] = category_id
        else:
            record.pop("categoryId", None)
        return updated

    # ------------------------------------------------------------------
    # Recipe
    # ------------------------------------------------------------------

    @staticmethod
    def add_recipe_item(document: Dict[str, Any], product_id: str, ingredient_id: str) -> Dict[str, Any]:
        """Attach an ingredient with quantity 0; attaching it twice is a no-op."""
        updated = clone(document)
        if find_index(items_of(updated, "ingredients"), ingredient_id) == -1:
            raise ValidationError(f"Ingredient '{ingredient_id}' not found.")

        record = ProductRepository._locate(updated, product_id)
        recipe = record.setdefault("recipe", [])
        if any(r.get("ingredientId") == ingredient_id for r in recipe):
            return updated
        recipe.append({"ingredientId": ingredient_id, "quantity": 0})
        return updated

    @staticmethod
    def set_recipe_quantity(
        document: Dict[str, Any],
        product_id: str,
        ingredient_id: str,
        raw_quantity: Any,
    ) -> Dict[str, Any]:
        """Set a recipe line quantity; unparsable input becomes 0."""
        updated = clone(document)
        record = ProductRepository._locate(updated, product_id)
        for item in record.get("recipe") or []:
            if item.get("ingredientId") == ingredient_id:
                item["quantity"] = to_number(raw_quantity)
        return updated

    @staticmethod
    def remove_recipe_item(document: Dict[str, Any], product_id: str, ingredient_id: str) -> Dict[str, Any]:
        """
        Detach an ingredient from a recipe.

        Removing the last line resets manualCost to 0: the old manual figure
        predates the recipe and must be entered again.
        """
        updated = clone(document)
        record = ProductRepository._locate(updated, product_id)
        recipe = record.get("recipe") or []
        remaining = [r for r in recipe if r.get("ingredientId") != ingredient_id]
        if recipe and not remaining:
            record["manualCost"] = 0.0
        record["recipe"] = remaining
        return updated
