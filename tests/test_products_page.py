from pricing.models import PricingDocument
from pricing.ui.products_page import kept_selection, product_options
from services.repositories import ProductRepository


def test_selection_follows_product_after_reorder(raw_document):
    before = product_options(PricingDocument.from_dict(raw_document))
    assert list(before) == ["tost", "cay"]

    moved = ProductRepository.move(raw_document, "cay", 0)
    after = product_options(PricingDocument.from_dict(moved))
    assert list(after) == ["cay", "tost"]
    assert after[kept_selection(after, "cay")].name == "Çay"


def test_selection_of_deleted_product_is_dropped(raw_document):
    remaining = ProductRepository.delete(raw_document, "cay")
    options = product_options(PricingDocument.from_dict(remaining))
    assert kept_selection(options, "cay") is None
    assert kept_selection(options, None) is None
    assert kept_selection(options, "tost") == "tost"
