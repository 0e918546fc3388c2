"""Shared helpers for the Streamlit pages."""

from __future__ import annotations
import logging
from typing import Any, Callable

import streamlit as st

from services import config_manager
from services.errors import PricingAppError

logger = logging.getLogger(__name__)


def run_action(operation: Callable[..., Any], *args: Any, rerun: bool = True, **kwargs: Any) -> Any:
    """
    Apply one repository operation through the facade and refresh the page.

    Validation and storage errors are shown to the user instead of
    crashing the script run.

    Returns:
        The operation's result, or None when it failed
    """
    try:
        result = config_manager.mutate(operation, *args, **kwargs)
    except PricingAppError as e:
        logger.info("Action %s rejected: %s", getattr(operation, "__qualname__", operation), e)
        st.error(str(e))
        return None

    warning = config_manager.get_last_warning()
    if warning:
        st.session_state["storage_warning"] = warning
    if rerun:
        st.rerun()
    return result


def show_storage_warning() -> None:
    """Surface the last storage fallback message once."""
    warning = st.session_state.pop("storage_warning", None)
    if warning:
        st.warning(warning)
