"""Path utilities."""

from __future__ import annotations
from pathlib import Path

from .settings import DEFAULT_DATA_FILENAME, get_secret


def get_project_root() -> Path:
    """Directory holding app.py (two levels above this file)."""
    return Path(__file__).resolve().parents[2]


def get_data_dir() -> Path:
    return get_project_root() / "data"


def get_document_path() -> Path:
    """
    Where the pricing document lives locally.

    PRICING_DATA_PATH wins; otherwise data/app-data.json under the
    project root.
    """
    configured = get_secret("PRICING_DATA_PATH")
    if configured:
        return Path(configured).expanduser().resolve()
    return (get_data_dir() / DEFAULT_DATA_FILENAME).resolve()
