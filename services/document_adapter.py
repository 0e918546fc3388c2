"""
Document Adapter
================

Normalizes the persisted pricing document.

This module provides:
- Format normalization for documents written by older clients
- Validation before a document overwrites the stored copy

Older documents may lack `categories` or `margins`, store margins as bare
numbers (`[25, 50]`) or lack the rate keys. After normalization every
consumer sees:

{
  "products": [...],
  "ingredients": [...],
  "categories": [...],
  "margins": [{"id", "value", "type"}],
  "platformCommissionRate": float,
  "kdvRate": float,
  "bankCommissionRate": float
}

Related Files:
- services/storage/: Load/save of the raw JSON
- pricing/models.py: Typed view of the normalized document
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List

from pricing.models import (
    DEFAULT_BANK_COMMISSION_RATE,
    DEFAULT_KDV_RATE,
    DEFAULT_PLATFORM_COMMISSION_RATE,
    Channel,
)

from .errors import DocumentError
from .utils import generate_unique_id, parse_number, to_number

logger = logging.getLogger(__name__)

LIST_KEYS = ("products", "ingredients", "categories", "margins")
RATE_DEFAULTS = {
    "platformCommissionRate": DEFAULT_PLATFORM_COMMISSION_RATE,
    "kdvRate": DEFAULT_KDV_RATE,
    "bankCommissionRate": DEFAULT_BANK_COMMISSION_RATE,
}
REQUIRED_KEYS = ("products", "ingredients") + tuple(RATE_DEFAULTS)


def normalize_document(document: Any) -> Dict[str, Any]:
    """
    Normalize a raw document to the current structure (in place when a dict).

    Args:
        document: Parsed JSON; anything that is not a dict becomes empty

    Returns:
        Normalized document
    """
    if not isinstance(document, dict):
        logger.warning("Document root is %s, starting from empty", type(document).__name__)
        document = {}

    for key in LIST_KEYS:
        if not isinstance(document.get(key), list):
            document[key] = []

    for key, default in RATE_DEFAULTS.items():
        document[key] = to_number(document.get(key), default)

    document["margins"] = _normalize_margins(document["margins"])
    return document


def _normalize_margins(raw_margins: List[Any]) -> List[Dict[str, Any]]:
    """Upgrade bare-number margins to store-type margin objects."""
    out: List[Dict[str, Any]] = []
    existing_ids = {str(m.get("id")) for m in raw_margins if isinstance(m, dict) and m.get("id")}
    for raw in raw_margins:
        if isinstance(raw, dict):
            margin = dict(raw)
        else:
            value = parse_number(raw)
            if value is None:
                continue
            margin = {"value": value, "type": Channel.STORE.value}
        margin["value"] = to_number(margin.get("value"))
        margin["type"] = Channel.parse(margin.get("type"), default=Channel.STORE).value
        if not margin.get("id"):
            margin["id"] = generate_unique_id(f"{margin['type']} {margin['value']:g}", existing_ids)
            existing_ids.add(margin["id"])
        out.append(margin)
    return out


def validate_document(document: Any) -> None:
    """
    Reject documents that must never overwrite the stored copy.

    Raises:
        DocumentError: if the root is not an object or a required key is missing
    """
    if not isinstance(document, dict):
        raise DocumentError("Invalid data structure received: root must be an object.")
    missing = [key for key in REQUIRED_KEYS if key not in document]
    if missing:
        raise DocumentError(f"Invalid data structure received: missing {', '.join(missing)}.")
