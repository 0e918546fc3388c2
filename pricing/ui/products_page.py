"""
Products & Prices Page
======================

Price tables per sales channel, grouped by category, and the per-product
recipe editor.

Layout:
- Store / Online tabs: one table per category group with cost, declared
  price, net settlement and one column per margin
- Product editor: name, category, declared prices, manual cost, recipe
  lines with quick ingredient price edits
- Price breakdown, margin comparison and smart margin suggestion for the
  selected product

Related Files:
- pricing/reporting.py: rows shown here
- pricing/calculators/: cost and price engine
- services/repositories/product_repository.py: edits
"""

from __future__ import annotations
import math
from typing import Dict, List, Optional

import pandas as pd
import streamlit as st

from pricing.calculators import CostCalculator, PriceCalculator
from pricing.exporters import CHANNEL_TITLES, export_to_excel, export_to_print
from pricing.formatting import PLACEHOLDER, format_currency, format_ingredient_amount, format_percent
from pricing.models import Channel, PricingDocument, Product
from pricing.reporting import (
    UNCATEGORIZED_LABEL,
    margin_columns,
    margin_comparison,
    margin_labels,
    price_breakdowns,
    pricing_rows,
    recipe_breakdown,
    sorted_ingredients,
)
from services import config_manager
from services.errors import InvalidRateError
from services.margin_suggestion import get_smart_suggestion
from services.repositories import IngredientRepository, MarginRepository, ProductRepository

from .common import run_action, show_storage_warning


# ============================================================================
# MAIN PAGE
# ============================================================================

def render_products_page() -> None:
    """Render the price tables and the product editor."""
    st.subheader("Ürünler & Fiyatlar")
    show_storage_warning()

    document = config_manager.load_pricing_document()

    c1, c2 = st.columns(2)
    with c1:
        export_to_excel(document)
    with c2:
        export_to_print(document)

    tabs = st.tabs([CHANNEL_TITLES[c] for c in Channel])
    for tab, channel in zip(tabs, Channel):
        with tab:
            _render_price_tables(document, channel)

    st.markdown("---")
    _render_add_product(document)

    if not document.products:
        st.info("Henüz ürün yok.")
        return

    product = _render_product_selection(document)
    if product is not None:
        _render_product_editor(document, product)


# ============================================================================
# PRICE TABLES
# ============================================================================

def _render_price_tables(document: PricingDocument, channel: Channel) -> None:
    rows = pricing_rows(document, channel)
    if not rows:
        st.caption("Gösterilecek ürün yok.")
        return

    columns = margin_columns(document.margins, channel)
    labels = margin_labels(columns)
    price_label = f"{CHANNEL_TITLES[channel]} Fiyatı"

    groups: Dict[Optional[str], List[dict]] = {}
    for row in rows:
        groups.setdefault(row["group_key"], []).append(row)

    for group_rows in groups.values():
        st.markdown(f"**{group_rows[0]['group']}**")
        table = []
        for row in group_rows:
            record = {
                "Ürün": row["product"],
                "Maliyet": format_currency(row["cost"]),
                price_label: format_currency(row["list_price"]),
                "Net Tutar": format_currency(row["net_settlement"]),
            }
            for margin in columns:
                record[labels[margin.id]] = format_currency(row["prices"][margin.id])
            table.append(record)
        st.dataframe(pd.DataFrame(table), use_container_width=True, hide_index=True)

    rate = document.rates.commission_rate(channel)
    st.caption(f"KDV {format_percent(document.rates.kdv_rate)} · Komisyon {format_percent(rate)}")


# ============================================================================
# PRODUCT LIST
# ============================================================================

def _render_add_product(document: PricingDocument) -> None:
    with st.expander("➕ Yeni ürün"):
        with st.form("add_product_form", clear_on_submit=True):
            name = st.text_input("Ürün adı")
            category_options = {UNCATEGORIZED_LABEL: None}
            category_options.update({c.name: c.id for c in document.categories})
            category = st.selectbox("Kategori", list(category_options))
            submitted = st.form_submit_button("Ekle", type="primary")
        if submitted:
            run_action(
                ProductRepository.add,
                {"name": name, "categoryId": category_options[category]},
            )


def product_options(document: PricingDocument) -> Dict[str, Product]:
    """Products by id, in display order."""
    return {p.id: p for p in sorted(document.products, key=lambda p: p.order)}


def kept_selection(options: Dict[str, Product], selected_id: Optional[str]) -> Optional[str]:
    """The selected id if that product still exists, else None."""
    return selected_id if selected_id in options else None


def _render_product_selection(document: PricingDocument) -> Optional[Product]:
    by_id = product_options(document)
    if kept_selection(by_id, st.session_state.get("selected_product_id")) is None:
        st.session_state.pop("selected_product_id", None)
    product_id = st.selectbox(
        "Ürün düzenle",
        list(by_id),
        format_func=lambda pid: by_id[pid].name or pid,
        key="selected_product_id",
    )
    return by_id.get(product_id)


# ============================================================================
# PRODUCT EDITOR
# ============================================================================

def _render_product_editor(document: PricingDocument, product: Product) -> None:
    pid = product.id
    cost = CostCalculator.unit_cost(product, document.ingredients)

    with st.form(f"product_form_{pid}"):
        c1, c2, c3 = st.columns(3)
        with c1:
            name = st.text_input("Ad", value=product.name)
        with c2:
            store_price = st.number_input(
                "Mağaza fiyatı (₺)", min_value=0.0, step=1.0,
                value=float(product.store_price), format="%.2f",
            )
        with c3:
            online_price = st.number_input(
                "Online fiyatı (₺)", min_value=0.0, step=1.0,
                value=float(product.online_price), format="%.2f",
            )
        manual_cost = None
        if not product.recipe:
            manual_cost = st.number_input(
                "Manuel maliyet (₺)", min_value=0.0, step=0.5,
                value=float(product.manual_cost), format="%.2f",
            )
        saved = st.form_submit_button("Kaydet", type="primary")

    if saved:
        run_action(_save_product_fields, pid, name, store_price, online_price, manual_cost)

    _render_category_select(document, product)
    _render_recipe_editor(document, product)

    m1, m2, m3 = st.columns(3)
    with m1:
        st.metric("Birim maliyet", format_currency(cost))
    for col, channel in ((m2, Channel.STORE), (m3, Channel.ONLINE)):
        with col:
            try:
                net = PriceCalculator.net_settlement(product.list_price(channel), channel, document.rates)
                st.metric(f"{CHANNEL_TITLES[channel]} net", format_currency(net))
            except InvalidRateError:
                st.metric(f"{CHANNEL_TITLES[channel]} net", PLACEHOLDER)

    _render_price_breakdown(document, cost)
    _render_margin_comparison(document, product, cost)
    _render_smart_suggestion(cost)

    st.markdown("---")
    d1, d2, d3 = st.columns(3)
    ordered_ids = [p.id for p in sorted(document.products, key=lambda p: p.order)]
    position = ordered_ids.index(pid)
    with d1:
        if st.button("↑ Yukarı", key=f"up_{pid}", disabled=position == 0):
            run_action(ProductRepository.move, pid, position - 1)
    with d2:
        if st.button("↓ Aşağı", key=f"down_{pid}", disabled=position >= len(document.products) - 1):
            run_action(ProductRepository.move, pid, position + 1)
    with d3:
        if st.button("🗑️ Ürünü sil", key=f"del_{pid}"):
            run_action(ProductRepository.delete, pid)


def _save_product_fields(document, product_id, name, store_price, online_price, manual_cost):
    updated = ProductRepository.update(document, product_id, "name", name)
    updated = ProductRepository.update(updated, product_id, "storePrice", store_price)
    updated = ProductRepository.update(updated, product_id, "onlinePrice", online_price)
    if manual_cost is not None:
        updated = ProductRepository.update(updated, product_id, "manualCost", manual_cost)
    return updated


def _render_category_select(document: PricingDocument, product: Product) -> None:
    options = {UNCATEGORIZED_LABEL: None}
    options.update({c.name: c.id for c in document.categories})
    labels = list(options)
    current = next((k for k, v in options.items() if v == product.category_id), UNCATEGORIZED_LABEL)
    choice = st.selectbox(
        "Kategori",
        labels,
        index=labels.index(current),
        key=f"category_{product.id}",
    )
    if options[choice] != product.category_id:
        run_action(ProductRepository.set_category, product.id, options[choice])


def _render_recipe_editor(document: PricingDocument, product: Product) -> None:
    pid = product.id
    with st.expander("🧾 Tarif", expanded=bool(product.recipe)):
        lines = recipe_breakdown(product, document.ingredients)
        for line in lines:
            iid = line["ingredient_id"]
            c1, c2, c3, c4, c5 = st.columns([3, 2, 2, 2, 1])
            with c1:
                st.markdown(f"**{line['name']}**")
                unit = line["unit"] or "TL"
                price = format_ingredient_amount(line["price"])
                st.caption(f"{price} / {unit}")
            with c2:
                qty = st.number_input(
                    f"Miktar ({line['unit_label']})",
                    value=float(line["quantity"]),
                    step=1.0,
                    key=f"qty_{pid}_{iid}",
                )
                if qty != line["quantity"]:
                    run_action(ProductRepository.set_recipe_quantity, pid, iid, qty)
            with c3:
                new_price = st.text_input(
                    "Hızlı fiyat",
                    value="",
                    placeholder="yeni fiyat",
                    key=f"qprice_{pid}_{iid}",
                )
                if new_price and st.button("Güncelle", key=f"qprice_btn_{pid}_{iid}"):
                    result = run_action(IngredientRepository.update_price, iid, new_price, rerun=False)
                    if result is not None and not result[1]:
                        st.warning("Geçersiz fiyat, değişiklik yapılmadı.")
                    elif result is not None:
                        st.rerun()
            with c4:
                st.metric("Tutar", format_ingredient_amount(line["cost"]))
            with c5:
                if st.button("✖", key=f"rm_{pid}_{iid}"):
                    run_action(ProductRepository.remove_recipe_item, pid, iid)

        used = {item.ingredient_id for item in product.recipe}
        available = [i for i in sorted_ingredients(document.ingredients) if i.id not in used]
        if available:
            a1, a2 = st.columns([4, 1])
            with a1:
                pick = st.selectbox(
                    "Malzeme ekle",
                    range(len(available)),
                    format_func=lambda i: available[i].name,
                    key=f"add_ing_{pid}",
                )
            with a2:
                st.markdown("&nbsp;")
                if st.button("Ekle", key=f"add_ing_btn_{pid}"):
                    run_action(ProductRepository.add_recipe_item, pid, available[pick].id)
        elif not document.ingredients:
            st.caption("Önce malzeme ekleyin.")


def _render_price_breakdown(document: PricingDocument, cost: float) -> None:
    rows = price_breakdowns(cost, document.margins, document.rates)
    if not rows:
        return
    with st.expander("🧮 Fiyat dökümü"):
        table = [
            {
                "Kanal": CHANNEL_TITLES[Channel.parse(r["channel"])],
                "Marj": format_percent(r["margin"]),
                "Maliyet + kâr": format_currency(r["base_price"]),
                "KDV": format_currency(r["kdv_amount"]),
                "KDV dahil": format_currency(r["gross_price"]),
                "Komisyon": format_currency(r["commission_amount"]),
                "Komisyon oranı": format_percent(r["commission_rate"]),
                "Satış fiyatı": format_currency(r["selling_price"]),
            }
            for r in rows
        ]
        st.dataframe(pd.DataFrame(table), use_container_width=True, hide_index=True)


def _render_margin_comparison(document: PricingDocument, product: Product, cost: float) -> None:
    rows = margin_comparison(product, cost, document.margins, document.rates)
    if not rows:
        return
    with st.expander("📊 Marj karşılaştırması"):
        table = [
            {
                "Kanal": CHANNEL_TITLES[Channel.parse(r["channel"])],
                "Marj": format_percent(r["margin"]),
                "Marj fiyatı": format_currency(r["selling_price"]),
                "Mevcut fiyat": format_currency(r["list_price"]),
                "Fark": format_currency(r["gap"]),
            }
            for r in rows
        ]
        st.dataframe(pd.DataFrame(table), use_container_width=True, hide_index=True)


def _render_smart_suggestion(cost: float) -> None:
    if not st.button("💡 Akıllı marj önerisi", key="smart_suggestion_btn"):
        return
    result = get_smart_suggestion(cost)
    if not result.success:
        st.error(result.error)
        return

    suggestion = result.suggestion
    st.success(f"Önerilen marj: {format_percent(suggestion)}")
    if suggestion is not None and not math.isnan(suggestion):
        added = run_action(MarginRepository.add, suggestion, Channel.STORE, rerun=False)
        if added is not None and added[1]:
            st.rerun()
        elif added is not None:
            st.caption("Bu marj zaten mevcut.")
