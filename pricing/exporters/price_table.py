"""Tabular view of the price tables, shared by the exporters and the UI."""

from __future__ import annotations
from typing import List, Tuple

import pandas as pd

from pricing.models import Channel, PricingDocument
from pricing.reporting import margin_columns, margin_labels, pricing_rows

CHANNEL_TITLES = {
    Channel.STORE: "Mağaza",
    Channel.ONLINE: "Online",
}


def build_price_table(document: PricingDocument, channel: Channel) -> pd.DataFrame:
    """
    One row per product, one column per margin of the channel.

    Values are unrounded floats; NaN marks a price that could not be
    computed.
    """
    columns = margin_columns(document.margins, channel)
    labels = margin_labels(columns)
    records = []
    for row in pricing_rows(document, channel):
        record = {
            "Kategori": row["group"],
            "Ürün": row["product"],
            "Maliyet": row["cost"],
            f"{CHANNEL_TITLES[channel]} Fiyatı": row["list_price"],
            "Net Tutar": row["net_settlement"],
        }
        for margin in columns:
            record[labels[margin.id]] = row["prices"][margin.id]
        records.append(record)

    fixed = ["Kategori", "Ürün", "Maliyet", f"{CHANNEL_TITLES[channel]} Fiyatı", "Net Tutar"]
    return pd.DataFrame(records, columns=fixed + [labels[m.id] for m in columns])


def build_export_sheets(document: PricingDocument) -> List[Tuple[str, pd.DataFrame]]:
    """(sheet_name, table) per channel."""
    return [(CHANNEL_TITLES[c], build_price_table(document, c)) for c in Channel]
