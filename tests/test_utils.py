import math

import pytest

from services.utils import (
    generate_unique_id,
    get_document_path,
    get_project_root,
    get_secret,
    is_displayable,
    is_flag_set,
    parse_number,
    slugify,
    to_number,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (12, 12.0),
        ("12,5", 12.5),
        (" 3.25 ", 3.25),
        ("", None),
        ("abc", None),
        (None, None),
        (True, None),
        (math.nan, None),
        (math.inf, None),
    ],
)
def test_parse_number(raw, expected):
    assert parse_number(raw) == expected


def test_to_number_default():
    assert to_number("x") == 0.0
    assert to_number(None, 15.0) == 15.0


def test_is_displayable():
    assert is_displayable(1.5)
    assert not is_displayable(math.nan)
    assert not is_displayable("1")


def test_slugify_folds_turkish_letters():
    assert slugify("Tavuk Dürüm") == "tavuk_durum"
    assert slugify("Çiğ Köfte") == "cig_kofte"
    assert slugify("store 12.5") == "store_12_5"
    assert slugify("!!!") == "item"


def test_generate_unique_id_adds_suffix():
    assert generate_unique_id("Çay", []) == "cay"
    assert generate_unique_id("Çay", ["cay"]) == "cay_2"
    assert generate_unique_id("Çay", ["cay", "cay_2"]) == "cay_3"


def test_document_path_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("PRICING_DATA_PATH", str(tmp_path / "menu.json"))
    assert get_document_path() == (tmp_path / "menu.json").resolve()


def test_document_path_default(monkeypatch):
    monkeypatch.delenv("PRICING_DATA_PATH", raising=False)
    path = get_document_path()
    assert path.name == "app-data.json"
    assert path.parent == get_project_root() / "data"


class _MissingSecrets:
    def get(self, name):
        raise FileNotFoundError("No secrets found")


def test_get_secret_without_secrets_file(monkeypatch):
    import streamlit

    monkeypatch.delenv("PRICING_TEST_SETTING", raising=False)
    monkeypatch.setattr(streamlit, "secrets", _MissingSecrets())
    assert get_secret("PRICING_TEST_SETTING") is None
    assert is_flag_set("PRICING_TEST_SETTING") is False


def test_environment_wins_over_secrets(monkeypatch):
    import streamlit

    monkeypatch.setenv("PRICING_TEST_SETTING", "yes")
    monkeypatch.setattr(streamlit, "secrets", _MissingSecrets())
    assert get_secret("PRICING_TEST_SETTING") == "yes"
    assert is_flag_set("PRICING_TEST_SETTING") is True
