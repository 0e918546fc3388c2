"""Print/HTML export functionality."""

from __future__ import annotations
from datetime import datetime
from html import escape
from typing import List, Tuple

import pandas as pd
import streamlit as st

from pricing.formatting import format_currency
from pricing.models import PricingDocument

from .price_table import build_export_sheets


def export_to_print(document: PricingDocument) -> None:
    """Render print button with HTML popup."""
    if st.button("Print", use_container_width=True):
        html = generate_print_html(build_export_sheets(document))
        st.components.v1.html(html, height=0)
        st.toast("Opening print dialog…", icon="🖨️")


def _table_html(df: pd.DataFrame) -> str:
    head = "".join(f"<th>{escape(str(c))}</th>" for c in df.columns)
    body = []
    for _, row in df.iterrows():
        cells = []
        for col in df.columns:
            value = row[col]
            if isinstance(value, str):
                cells.append(f"<td>{escape(value)}</td>")
            else:
                cells.append(f"<td style='text-align:right'>{format_currency(value)}</td>")
        body.append(f"<tr>{''.join(cells)}</tr>")
    return f"<table><thead><tr>{head}</tr></thead><tbody>{''.join(body)}</tbody></table>"


def generate_print_html(sheets: List[Tuple[str, pd.DataFrame]]) -> str:
    """Generate HTML for printing, one table per channel."""
    sections = "".join(
        f"<h2>{escape(title)}</h2>{_table_html(df)}" for title, df in sheets
    )

    return f"""
    <html>
      <head>
        <meta charset="utf-8" />
        <title>Fiyat Listesi</title>
        <style>
          body {{ font-family: Arial, sans-serif; padding: 18px; }}
          h1 {{ font-size: 18px; margin: 0 0 6px; }}
          h2 {{ font-size: 14px; margin: 16px 0 6px; }}
          .meta {{ color:#666; font-size: 12px; margin-bottom: 10px; }}
          table {{ width:100%; border-collapse:collapse; }}
          th, td {{ border:1px solid #ddd; padding:6px 8px; font-size:12px; }}
          th {{ background:#f5f5f5; text-align:left; }}
          @media print {{ @page {{ size: A4 landscape; margin: 12mm; }} }}
        </style>
      </head>
      <body>
        <h1>Fiyat Listesi</h1>
        <div class="meta">{datetime.now().strftime('%Y-%m-%d %H:%M')}</div>
        {sections}
        <script>window.onload = () => window.print();</script>
      </body>
    </html>
    """
