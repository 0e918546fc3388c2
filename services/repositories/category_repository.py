"""Category repository - handles category CRUD operations."""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple

from ..errors import ValidationError
from ..utils import generate_unique_id
from .helpers import clone, existing_ids, find_index, items_of

CATEGORY_COLORS = ["#F87171", "#FBBF24", "#34D399", "#60A5FA", "#A78BFA"]


class CategoryRepository:
    """Manages category data operations."""

    @staticmethod
    def add(document: Dict[str, Any], name: str, color: Optional[str] = None) -> Tuple[Dict[str, Any], str]:
        """
        Add a category.

        Returns:
            (updated_document, category_id)
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name is required.")

        updated = clone(document)
        categories = items_of(updated, "categories")
        record = {
            "id": generate_unique_id(name, existing_ids(categories)),
            "name": name,
            "color": color or CATEGORY_COLORS[len(categories) % len(CATEGORY_COLORS)],
        }
        categories.append(record)
        return updated, record["id"]

    @staticmethod
    def update(document: Dict[str, Any], category_id: str, name: Optional[str] = None, color: Optional[str] = None) -> Dict[str, Any]:
        updated = clone(document)
        categories = items_of(updated, "categories")
        idx = find_index(categories, category_id)
        if idx == -1:
            raise ValidationError(f"Category '{category_id}' not found.")
        if name is not None:
            if not name.strip():
                raise ValidationError("Category name is required.")
            categories[idx]["name"] = name.strip()
        if color:
            categories[idx]["color"] = color
        return updated

    @staticmethod
    def delete(document: Dict[str, Any], category_id: str) -> Dict[str, Any]:
        """Delete a category; its products become uncategorized."""
        updated = clone(document)
        for product in items_of(updated, "products"):
            if isinstance(product, dict) and product.get("categoryId") == category_id:
                product.pop("categoryId", None)
        updated["categories"] = [
            c for c in items_of(updated, "categories")
            if not (isinstance(c, dict) and str(c.get("id", "")) == str(category_id))
        ]
        return updated
