"""Configuration lookup: environment variables first, then Streamlit secrets."""

from __future__ import annotations
import os
from typing import Optional

DEFAULT_DATA_FILENAME = "app-data.json"


def get_secret(name: str) -> Optional[str]:
    """Get a setting from the environment or .streamlit/secrets.toml."""
    value = os.environ.get(name)
    if value:
        return value
    try:
        import streamlit as st
        value = st.secrets.get(name)
    except Exception:
        return None
    return str(value) if value else None


def is_flag_set(name: str) -> bool:
    """True if a setting holds one of the usual truthy spellings."""
    return (get_secret(name) or "").strip().lower() in ("1", "true", "yes", "on")
