"""Excel export functionality."""

from __future__ import annotations
from datetime import datetime
from io import BytesIO

import pandas as pd
import streamlit as st

from pricing.models import PricingDocument

from .price_table import build_export_sheets


def build_excel_bytes(document: PricingDocument) -> bytes:
    """Workbook with one sheet per sales channel."""
    buf = BytesIO()
    with pd.ExcelWriter(buf, engine="xlsxwriter") as xw:
        money = xw.book.add_format({"num_format": "#,##0.00"})
        for sheet_name, df in build_export_sheets(document):
            df.to_excel(xw, index=False, sheet_name=sheet_name)
            ws = xw.sheets[sheet_name]
            ws.set_column(0, 1, 28)
            ws.set_column(2, max(2, len(df.columns) - 1), 14, money)
    return buf.getvalue()


def export_to_excel(document: PricingDocument) -> None:
    """Render Excel download button."""
    calc_id = datetime.now().strftime("%Y%m%d-%H%M%S")
    st.download_button(
        "Download Excel",
        data=build_excel_bytes(document),
        file_name=f"fiyatlar_{calc_id}.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        use_container_width=True,
    )
