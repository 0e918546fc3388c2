"""Streamlit pages."""

from .ingredients_page import render_ingredients_page
from .products_page import render_products_page
from .settings_page import render_settings_page

__all__ = [
    "render_ingredients_page",
    "render_products_page",
    "render_settings_page",
]
