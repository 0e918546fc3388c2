"""Ingredient repository - handles all ingredient CRUD operations."""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Tuple

from pricing.models import Unit

from ..errors import ValidationError
from ..utils import generate_unique_id, parse_number
from .helpers import clone, existing_ids, find_index, items_of, move_to, next_order

logger = logging.getLogger(__name__)


class IngredientRepository:
    """Manages ingredient data operations."""

    @staticmethod
    def list_all(document: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Get all ingredients, in display order."""
        ingredients = document.get("ingredients", [])
        if not isinstance(ingredients, list):
            return []
        items = [i for i in ingredients if isinstance(i, dict)]
        return sorted(items, key=lambda i: parse_number(i.get("order")) or 0)

    @staticmethod
    def _clean_fields(payload: Dict[str, Any]) -> Dict[str, Any]:
        """Validate name/price/unit; only keys present in payload are returned."""
        out: Dict[str, Any] = {}
        if "name" in payload:
            name = str(payload.get("name") or "").strip()
            if not name:
                raise ValidationError("Ingredient name is required.")
            out["name"] = name
        if "price" in payload:
            price = parse_number(payload.get("price"))
            if price is not None and price < 0:
                raise ValidationError("Ingredient price cannot be negative.")
            out["price"] = price
        if "unit" in payload:
            raw_unit = payload.get("unit")
            unit = Unit.parse(raw_unit)
            if unit is None and str(raw_unit or "").strip():
                raise ValidationError(f"Unknown unit: {raw_unit!r}")
            out["unit"] = unit.value if unit else None
        return out

    @staticmethod
    def _apply(record: Dict[str, Any], fields: Dict[str, Any]) -> None:
        for key, value in fields.items():
            if value is None:
                record.pop(key, None)
            else:
                record[key] = value

    @staticmethod
    def add(document: Dict[str, Any], payload: Dict[str, Any]) -> Tuple[Dict[str, Any], str]:
        """
        Add an ingredient at the end of the display order.

        Returns:
            (updated_document, ingredient_id)
        """
        payload = {"name": "", **payload}
        fields = IngredientRepository._clean_fields(payload)

        updated = clone(document)
        ingredients = items_of(updated, "ingredients")
        record: Dict[str, Any] = {
            "id": generate_unique_id(fields["name"], existing_ids(ingredients)),
            "order": next_order(ingredients),
        }
        IngredientRepository._apply(record, fields)
        ingredients.append(record)
        return updated, record["id"]

    @staticmethod
    def update(document: Dict[str, Any], ingredient_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Edit name, price and/or unit of an existing ingredient."""
        fields = IngredientRepository._clean_fields(payload)

        updated = clone(document)
        ingredients = items_of(updated, "ingredients")
        idx = find_index(ingredients, ingredient_id)
        if idx == -1:
            raise ValidationError(f"Ingredient '{ingredient_id}' not found.")
        IngredientRepository._apply(ingredients[idx], fields)
        return updated

    @staticmethod
    def update_price(document: Dict[str, Any], ingredient_id: str, raw_price: Any) -> Tuple[Dict[str, Any], bool]:
        """
        Quick price edit from the recipe editor.

        Blank, unparsable or negative input leaves the document unchanged.

        Returns:
            (updated_document, changed)
        """
        price = parse_number(raw_price)
        updated = clone(document)
        ingredients = items_of(updated, "ingredients")
        idx = find_index(ingredients, ingredient_id)
        if price is None or price < 0 or idx == -1:
            return updated, False
        ingredients[idx]["price"] = price
        return updated, True

    @staticmethod
    def delete(document: Dict[str, Any], ingredient_id: str, prune_recipes: bool = False) -> Dict[str, Any]:
        """
        Delete an ingredient.

        Recipes keep their (now dangling) references unless prune_recipes
        is set; the cost engine counts dangling lines as zero either way.
        """
        updated = clone(document)
        updated["ingredients"] = [
            i for i in items_of(updated, "ingredients")
            if not (isinstance(i, dict) and str(i.get("id", "")) == str(ingredient_id))
        ]
        if prune_recipes:
            for product in items_of(updated, "products"):
                recipe = product.get("recipe") or []
                product["recipe"] = [
                    r for r in recipe
                    if isinstance(r, dict) and r.get("ingredientId") != ingredient_id
                ]
        return updated

    @staticmethod
    def move(document: Dict[str, Any], ingredient_id: str, new_index: int) -> Dict[str, Any]:
        """Move an ingredient to a new display position."""
        updated = clone(document)
        if not move_to(items_of(updated, "ingredients"), ingredient_id, new_index):
            logger.debug("Ingredient %s not found, order unchanged", ingredient_id)
        return updated
