import math

import pytest

from pricing.exporters import build_export_sheets, build_price_table, generate_print_html
from pricing.models import Channel, Margin, PricingDocument, Product, RateConfig


def test_price_table_columns(document):
    df = build_price_table(document, Channel.STORE)
    assert list(df.columns) == ["Kategori", "Ürün", "Maliyet", "Mağaza Fiyatı", "Net Tutar", "%25", "%50"]
    assert list(df["Ürün"]) == ["Kaşarlı Tost", "Çay"]
    assert df.loc[0, "%50"] == pytest.approx(42 * 1.5 * 1.1 / 0.975)


def test_price_table_nan_for_bad_rate(raw_document):
    raw_document["platformCommissionRate"] = 100
    df = build_price_table(PricingDocument.from_dict(raw_document), Channel.ONLINE)
    assert math.isnan(df.loc[0, "%50"])


def test_empty_document_gives_empty_table():
    df = build_price_table(PricingDocument(), Channel.ONLINE)
    assert df.empty
    assert "Online Fiyatı" in df.columns


def test_one_sheet_per_channel(document):
    assert [name for name, _ in build_export_sheets(document)] == ["Mağaza", "Online"]


def test_print_html_escapes_names(raw_document):
    raw_document["products"][1]["name"] = "Çay <büyük>"
    html = generate_print_html(build_export_sheets(PricingDocument.from_dict(raw_document)))
    assert "Çay &lt;büyük&gt;" in html
    assert "₺120,00" in html


def test_close_margins_get_their_own_columns():
    document = PricingDocument(
        products=[Product("p", "P", manual_cost=100)],
        margins=[Margin("a", 12.5, Channel.STORE), Margin("b", 12.501, Channel.STORE)],
        rates=RateConfig(platform_commission_rate=0, bank_commission_rate=0, kdv_rate=0),
    )
    df = build_price_table(document, Channel.STORE)

    assert list(df.columns)[-2:] == ["%12,5", "%12,501"]
    assert df.loc[0, "%12,5"] == pytest.approx(112.5)
    assert df.loc[0, "%12,501"] == pytest.approx(112.501)

    html = generate_print_html(build_export_sheets(document))
    assert "<th>%12,5</th>" in html
    assert "<th>%12,501</th>" in html
