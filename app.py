"""
Streamlit entrypoint for the menu Pricing App.
- Sidebar radio picks the page: Products & Prices, Ingredients, Settings
- Every edit loads the whole document, applies one change, saves it back
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add project root to Python path FIRST
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import streamlit as st

from pricing.ui import render_ingredients_page, render_products_page, render_settings_page
from services.errors import DocumentError
from services.utils.logging_setup import configure_logging

configure_logging()

# -----------------------------------------------------------------------------
# Page setup
# -----------------------------------------------------------------------------
st.set_page_config(page_title="Pricing App", layout="wide")
st.title("🍽️ Maliyet & Fiyat Hesaplama")

PAGES = {
    "Ürünler & Fiyatlar": render_products_page,
    "Malzemeler": render_ingredients_page,
    "Ayarlar": render_settings_page,
}

choice = st.sidebar.radio(
    "Sayfalar",
    options=list(PAGES),
    index=0,
    key="page_choice",
)

if st.sidebar.button("🔄 Yenile", use_container_width=True):
    st.rerun()

# -----------------------------------------------------------------------------
# Router
# -----------------------------------------------------------------------------
try:
    PAGES[choice]()
except DocumentError as e:
    st.error(f"Veri dosyası okunamadı: {e}")
    st.stop()
