"""Margin repository - the store and online margin columns."""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Tuple

from pricing.models import Channel

from ..utils import generate_unique_id, parse_number, to_number
from .helpers import clone, existing_ids, find_index, items_of

logger = logging.getLogger(__name__)


class MarginRepository:
    """
    Manages margin columns.

    A (value, type) pair exists at most once. Adding or editing into a
    duplicate, or to a value that is not a positive number, is a silent
    no-op: the caller gets an unchanged copy and `False`.
    """

    @staticmethod
    def list_all(document: Dict[str, Any], margin_type: Optional[Channel] = None) -> List[Dict[str, Any]]:
        """Margins (optionally of one type), ascending by value."""
        margins = [m for m in document.get("margins") or [] if isinstance(m, dict)]
        if margin_type is not None:
            margins = [m for m in margins if m.get("type") == margin_type.value]
        return sorted(margins, key=lambda m: to_number(m.get("value")))

    @staticmethod
    def _is_duplicate(margins: List[Dict[str, Any]], value: float, margin_type: Channel, skip_id: str = "") -> bool:
        return any(
            to_number(m.get("value")) == value
            and m.get("type") == margin_type.value
            and str(m.get("id")) != skip_id
            for m in margins
        )

    @staticmethod
    def add(document: Dict[str, Any], raw_value: Any, margin_type: Channel) -> Tuple[Dict[str, Any], bool]:
        """
        Add a margin column.

        Returns:
            (updated_document, added)
        """
        updated = clone(document)
        margins = items_of(updated, "margins")
        value = parse_number(raw_value)
        if value is None or value <= 0:
            return updated, False
        if MarginRepository._is_duplicate(margins, value, margin_type):
            logger.debug("Margin %s/%s already exists", margin_type.value, value)
            return updated, False

        margins.append(
            {
                "id": generate_unique_id(f"{margin_type.value} {value:g}", existing_ids(margins)),
                "value": value,
                "type": margin_type.value,
            }
        )
        return updated, True

    @staticmethod
    def update(document: Dict[str, Any], margin_id: str, raw_value: Any) -> Tuple[Dict[str, Any], bool]:
        """
        Change a margin's value, keeping its type.

        Returns:
            (updated_document, changed)
        """
        updated = clone(document)
        margins = items_of(updated, "margins")
        idx = find_index(margins, margin_id)
        value = parse_number(raw_value)
        if idx == -1 or value is None or value <= 0:
            return updated, False
        margin_type = Channel.parse(margins[idx].get("type"), default=Channel.STORE)
        if MarginRepository._is_duplicate(margins, value, margin_type, skip_id=str(margin_id)):
            return updated, False
        margins[idx]["value"] = value
        return updated, True

    @staticmethod
    def delete(document: Dict[str, Any], margin_id: str) -> Dict[str, Any]:
        updated = clone(document)
        updated["margins"] = [
            m for m in items_of(updated, "margins")
            if not (isinstance(m, dict) and str(m.get("id", "")) == str(margin_id))
        ]
        return updated
