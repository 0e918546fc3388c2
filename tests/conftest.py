import pytest

from pricing.models import PricingDocument
from services import config_manager
from services.storage import GistStorage, StorageManager


@pytest.fixture
def raw_document():
    """A small document in the persisted JSON shape."""
    return {
        "products": [
            {
                "id": "tost",
                "name": "Kaşarlı Tost",
                "recipe": [
                    {"ingredientId": "ekmek", "quantity": 2},
                    {"ingredientId": "kasar", "quantity": 80},
                ],
                "manualCost": 99,
                "storePrice": 120,
                "onlinePrice": 150,
                "order": 0,
                "categoryId": "sandvic",
            },
            {
                "id": "cay",
                "name": "Çay",
                "recipe": [],
                "manualCost": 4,
                "storePrice": 20,
                "onlinePrice": 25,
                "order": 1,
            },
        ],
        "ingredients": [
            {"id": "kasar", "name": "Kaşar", "price": 400, "unit": "kg", "order": 1},
            {"id": "ekmek", "name": "Tost ekmeği", "price": 5, "unit": "adet", "order": 0},
            {"id": "paket", "name": "Paketleme", "order": 2},
        ],
        "categories": [{"id": "sandvic", "name": "Sandviçler", "color": "#F87171"}],
        "margins": [
            {"id": "store_50", "value": 50, "type": "store"},
            {"id": "online_50", "value": 50, "type": "online"},
            {"id": "store_25", "value": 25, "type": "store"},
        ],
        "platformCommissionRate": 15,
        "kdvRate": 10,
        "bankCommissionRate": 2.5,
    }


@pytest.fixture
def document(raw_document):
    return PricingDocument.from_dict(raw_document)


@pytest.fixture
def offline_gist():
    gist = GistStorage(gist_id=None, token=None)
    gist.disable()
    return gist


@pytest.fixture
def storage(tmp_path, offline_gist):
    """Local-only storage in a temp dir, wired into the facade."""
    manager = StorageManager(local_path=tmp_path / "app-data.json", gist=offline_gist)
    config_manager.set_storage(manager)
    yield manager
    config_manager.set_storage(None)
