"""
Settings page: commission and KDV rates, margin columns, categories.
"""

from __future__ import annotations

import streamlit as st

from pricing.exporters import CHANNEL_TITLES
from pricing.formatting import format_percent
from pricing.models import Channel, PricingDocument
from services import config_manager
from services.repositories import CategoryRepository, MarginRepository, RateRepository

from .common import run_action, show_storage_warning


def render_settings_page() -> None:
    st.subheader("Ayarlar")
    show_storage_warning()

    document = config_manager.load_pricing_document()

    _render_rates(document)
    st.markdown("---")
    _render_margins(document)
    st.markdown("---")
    _render_categories(document)

    st.caption(f"Veri dosyası: {config_manager.get_document_path()} · {config_manager.document_mtime()}")


# ============================================================================
# RATES
# ============================================================================

def _render_rates(document: PricingDocument) -> None:
    st.markdown("### Oranlar (%)")
    rates = document.rates
    with st.form("rates_form"):
        c1, c2, c3 = st.columns(3)
        with c1:
            platform = st.text_input("Platform komisyonu", value=f"{rates.platform_commission_rate:g}")
        with c2:
            bank = st.text_input("Banka komisyonu", value=f"{rates.bank_commission_rate:g}")
        with c3:
            kdv = st.text_input("KDV", value=f"{rates.kdv_rate:g}")
        submitted = st.form_submit_button("Kaydet", type="primary")

    if submitted:
        run_action(
            RateRepository.update,
            platform_commission_rate=platform,
            bank_commission_rate=bank,
            kdv_rate=kdv,
        )

    st.caption("Mağaza satışları banka, online satışlar platform komisyonu öder.")


# ============================================================================
# MARGINS
# ============================================================================

def _render_margins(document: PricingDocument) -> None:
    st.markdown("### Marjlar")
    raw = document.to_dict()
    cols = st.columns(2)
    for col, channel in zip(cols, Channel):
        with col:
            st.markdown(f"**{CHANNEL_TITLES[channel]}**")
            for margin in MarginRepository.list_all(raw, channel):
                mid = margin["id"]
                m1, m2, m3 = st.columns([2, 1, 1])
                with m1:
                    value = st.text_input(
                        format_percent(margin["value"]),
                        value=f"{margin['value']:g}",
                        key=f"margin_{mid}",
                        label_visibility="collapsed",
                    )
                with m2:
                    if st.button("✔", key=f"margin_save_{mid}"):
                        result = run_action(MarginRepository.update, mid, value, rerun=False)
                        if result is not None and not result[1]:
                            st.warning("Marj pozitif ve benzersiz olmalı.")
                        elif result is not None:
                            st.rerun()
                with m3:
                    if st.button("✖", key=f"margin_del_{mid}"):
                        run_action(MarginRepository.delete, mid)

            with st.form(f"add_margin_{channel.value}", clear_on_submit=True):
                new_value = st.text_input("Yeni marj (%)", key=f"new_margin_{channel.value}")
                if st.form_submit_button("Ekle"):
                    result = run_action(MarginRepository.add, new_value, channel, rerun=False)
                    if result is not None and not result[1]:
                        st.warning("Marj pozitif ve benzersiz olmalı.")
                    elif result is not None:
                        st.rerun()


# ============================================================================
# CATEGORIES
# ============================================================================

def _render_categories(document: PricingDocument) -> None:
    st.markdown("### Kategoriler")
    for category in document.categories:
        cid = category.id
        c1, c2, c3, c4 = st.columns([3, 1, 1, 1])
        with c1:
            name = st.text_input("Ad", value=category.name, key=f"cat_name_{cid}", label_visibility="collapsed")
        with c2:
            color = st.color_picker("Renk", value=category.color or "#60A5FA", key=f"cat_color_{cid}", label_visibility="collapsed")
        with c3:
            if st.button("Kaydet", key=f"cat_save_{cid}"):
                run_action(CategoryRepository.update, cid, name=name, color=color)
        with c4:
            if st.button("🗑️", key=f"cat_del_{cid}"):
                run_action(CategoryRepository.delete, cid)

    with st.form("add_category_form", clear_on_submit=True):
        name = st.text_input("Yeni kategori")
        if st.form_submit_button("Ekle"):
            run_action(CategoryRepository.add, name)
