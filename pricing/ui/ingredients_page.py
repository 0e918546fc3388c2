"""Ingredients page: price list with units and display order."""

from __future__ import annotations

import streamlit as st

from pricing.calculators import CostCalculator
from pricing.formatting import format_ingredient_amount
from pricing.models import Ingredient, Unit
from pricing.reporting import sorted_ingredients
from services import config_manager
from services.repositories import IngredientRepository

from .common import run_action, show_storage_warning

UNIT_OPTIONS = [u.value for u in Unit]


def render_ingredients_page() -> None:
    st.subheader("Malzemeler")
    show_storage_warning()

    document = config_manager.load_pricing_document()
    ingredients = sorted_ingredients(document.ingredients)

    with st.form("add_ingredient_form", clear_on_submit=True):
        c1, c2, c3 = st.columns([3, 2, 2])
        with c1:
            name = st.text_input("Malzeme adı")
        with c2:
            price = st.text_input("Fiyat (₺)", placeholder="örn. 120,50")
        with c3:
            unit = st.selectbox("Birim", UNIT_OPTIONS)
        if st.form_submit_button("Ekle", type="primary"):
            run_action(IngredientRepository.add, {"name": name, "price": price, "unit": unit})

    if not ingredients:
        st.info("Henüz malzeme yok.")
        return

    st.markdown("---")
    for position, ingredient in enumerate(ingredients):
        _render_ingredient_row(ingredient, position, len(ingredients))


def _render_ingredient_row(ingredient: Ingredient, position: int, total: int) -> None:
    iid = ingredient.id
    c1, c2, c3, c4, c5 = st.columns([3, 2, 2, 2, 2])
    with c1:
        name = st.text_input("Ad", value=ingredient.name, key=f"ing_name_{iid}")
        st.caption(f"Tarif miktarı: {CostCalculator.recipe_unit_label(ingredient)}")
    with c2:
        price_text = "" if ingredient.price is None else f"{ingredient.price:g}"
        price = st.text_input("Fiyat", value=price_text, key=f"ing_price_{iid}")
        st.caption(format_ingredient_amount(ingredient.price))
    with c3:
        current = ingredient.unit.value if ingredient.unit else Unit.TL.value
        unit = st.selectbox(
            "Birim",
            UNIT_OPTIONS,
            index=UNIT_OPTIONS.index(current),
            key=f"ing_unit_{iid}",
        )
    with c4:
        st.markdown("&nbsp;")
        if st.button("Kaydet", key=f"ing_save_{iid}"):
            run_action(IngredientRepository.update, iid, {"name": name, "price": price, "unit": unit})
        u1, u2 = st.columns(2)
        with u1:
            if st.button("↑", key=f"ing_up_{iid}", disabled=position == 0):
                run_action(IngredientRepository.move, iid, position - 1)
        with u2:
            if st.button("↓", key=f"ing_down_{iid}", disabled=position >= total - 1):
                run_action(IngredientRepository.move, iid, position + 1)
    with c5:
        prune = st.checkbox("Tariflerden de çıkar", key=f"ing_prune_{iid}")
        if st.button("🗑️ Sil", key=f"ing_del_{iid}"):
            run_action(IngredientRepository.delete, iid, prune_recipes=prune)
