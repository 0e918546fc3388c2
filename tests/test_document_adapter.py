import pytest

from services.document_adapter import normalize_document, validate_document
from services.errors import DocumentError


def test_non_dict_root_becomes_empty_document():
    document = normalize_document(["x"])
    assert document["products"] == []
    assert document["margins"] == []
    assert document["bankCommissionRate"] == 2.5


def test_missing_rates_get_defaults():
    document = normalize_document({"products": [], "ingredients": [], "kdvRate": "8"})
    assert document["kdvRate"] == 8
    assert document["platformCommissionRate"] == 15


def test_bare_number_margins_become_store_margins():
    document = normalize_document({"margins": [50, "abc", {"value": 50, "type": "online"}]})
    assert document["margins"] == [
        {"value": 50, "type": "store", "id": "store_50"},
        {"value": 50, "type": "online", "id": "online_50"},
    ]


def test_validate_document():
    validate_document(normalize_document({}))
    with pytest.raises(DocumentError):
        validate_document({"products": [], "ingredients": []})
    with pytest.raises(DocumentError):
        validate_document("products")
