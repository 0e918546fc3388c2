"""Process-wide logging configuration."""

from __future__ import annotations
import logging
from typing import Optional

from .settings import get_secret

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger once.

    The level comes from the argument, else LOG_LEVEL, else INFO.
    Streamlit reruns the script on every interaction, so repeated calls
    must not stack handlers.
    """
    level_name = (level or get_secret("LOG_LEVEL") or "INFO").upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    if any(getattr(h, "_pricing_app", False) for h in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._pricing_app = True  # type: ignore[attr-defined]
    root.addHandler(handler)
