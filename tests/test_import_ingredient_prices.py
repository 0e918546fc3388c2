import pandas as pd

from tools.import_ingredient_prices import apply_price_sheet, detect_columns


def test_detect_columns_by_header():
    df = pd.DataFrame({"Birim": ["kg"], "Ad": ["Kaşar"], "Fiyat": [410]})
    assert detect_columns(df) == ("Ad", "Fiyat", "Birim")


def test_detect_columns_falls_back_to_position():
    df = pd.DataFrame({"x": ["Kaşar"], "y": [410]})
    assert detect_columns(df) == ("x", "y", None)


def test_apply_price_sheet(raw_document):
    df = pd.DataFrame(
        {
            "name": [" kaşar ", "Tost ekmeği", "Domates", "Paketleme", None],
            "price": [410, "6,5", 30, "yok", 1],
            "unit": ["kg", None, "kg", None, None],
        }
    )

    updated, report = apply_price_sheet(raw_document, df)

    prices = {i["id"]: i.get("price") for i in updated["ingredients"]}
    assert prices["kasar"] == 410
    assert prices["ekmek"] == 6.5
    assert report.updated == ["kaşar", "Tost ekmeği"]
    assert report.unknown == ["Domates"]
    assert report.skipped == ["Paketleme"]
    # input document is not modified
    assert raw_document["ingredients"][0]["price"] == 400


def test_invalid_unit_skips_row(raw_document):
    df = pd.DataFrame({"name": ["Kaşar"], "price": [410], "unit": ["litre"]})
    updated, report = apply_price_sheet(raw_document, df)
    assert report.skipped == ["Kaşar"]
    assert updated["ingredients"][0]["price"] == 400
