"""
Configuration manager - Facade for storage and repository layers.

Every user action follows the same cycle: load the whole document, apply
one repository operation, save the whole document.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from pricing.models import PricingDocument

from .storage import StorageManager


# ============================================================================
# Module-level storage instance (singleton pattern)
# ============================================================================
_storage: Optional[StorageManager] = None


def _get_storage() -> StorageManager:
    """Get or create storage manager instance."""
    global _storage
    if _storage is None:
        _storage = StorageManager()
    return _storage


def set_storage(storage: Optional[StorageManager]) -> None:
    """Swap the storage instance (tests, alternate data files)."""
    global _storage
    _storage = storage


# ============================================================================
# Public API - Load/Save
# ============================================================================

def load_document() -> Dict[str, Any]:
    """
    Load the pricing document from storage (Gist → Local fallback).

    Returns:
        Normalized document dict
    """
    return _get_storage().load()


def load_pricing_document() -> PricingDocument:
    """Load the document as typed models, ready for the pricing engine."""
    return PricingDocument.from_dict(load_document())


def save_document(data: Dict[str, Any]) -> Path:
    """
    Overwrite the stored document (Gist + Local).

    Returns:
        Path to local file
    """
    return _get_storage().save(data)


def mutate(operation: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """
    Load, apply one repository operation, save.

    `operation` receives the document as first argument and returns either
    the updated document or a tuple whose first element is the updated
    document (e.g. `(document, new_id)`). The operation's return value is
    passed back unchanged.
    """
    document = load_document()
    result = operation(document, *args, **kwargs)
    updated = result[0] if isinstance(result, tuple) else result
    save_document(updated)
    return result


def get_document_path() -> Path:
    """Get path to local document file."""
    return _get_storage().get_path()


def document_mtime() -> str:
    """Get last modification time of the local document."""
    return _get_storage().get_mtime()


def get_last_warning() -> Optional[str]:
    """Get last warning message (for UI display)."""
    return _get_storage().get_last_warning()
