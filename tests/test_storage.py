import json

import pytest
import requests

from services.errors import DocumentError
from services.storage import GistError, GistStorage, LocalStorage, StorageManager


def test_missing_file_is_created_with_defaults(tmp_path, offline_gist):
    path = tmp_path / "data" / "app-data.json"
    manager = StorageManager(local_path=path, gist=offline_gist)

    document = manager.load()

    assert path.exists()
    assert document["products"] == []
    assert document["ingredients"] == []
    assert document["platformCommissionRate"] == 15
    assert document["kdvRate"] == 10
    assert document["bankCommissionRate"] == 2.5


def test_save_then_load(storage, raw_document):
    storage.save(raw_document)
    assert storage.load()["products"][0]["id"] == "tost"
    assert not storage.get_path().with_suffix(".json.tmp").exists()


def test_save_rejects_incomplete_document(storage):
    with pytest.raises(DocumentError):
        storage.save({"products": []})
    with pytest.raises(DocumentError):
        storage.save([])


def test_corrupt_file_raises(tmp_path):
    path = tmp_path / "app-data.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(DocumentError):
        LocalStorage(path).load()


def test_load_normalizes_legacy_margins(tmp_path, offline_gist):
    path = tmp_path / "app-data.json"
    path.write_text(json.dumps({"products": [], "ingredients": [], "margins": [30, 50]}), encoding="utf-8")

    document = StorageManager(local_path=path, gist=offline_gist).load()

    assert [m["type"] for m in document["margins"]] == ["store", "store"]
    assert [m["value"] for m in document["margins"]] == [30, 50]
    assert document["categories"] == []


class FailingGist(GistStorage):
    def __init__(self):
        super().__init__(gist_id="abc", token="t")
        self.calls = 0

    def is_available(self):
        return not self._disabled

    def load(self):
        self.calls += 1
        raise GistError("boom")

    def save(self, data):
        self.calls += 1
        raise GistError("boom")


def test_gist_failure_falls_back_to_local(tmp_path, raw_document):
    path = tmp_path / "app-data.json"
    gist = FailingGist()
    manager = StorageManager(local_path=path, gist=gist)

    manager.save(raw_document)
    assert "saved locally" in manager.get_last_warning()
    assert json.loads(path.read_text(encoding="utf-8"))["products"][0]["id"] == "tost"

    # disabled after the first failure
    assert manager.load()["products"][0]["id"] == "tost"
    assert gist.calls == 1


def test_gist_load_reads_file(monkeypatch):
    class FakeResponse:
        status_code = 200

        def raise_for_status(self):
            pass

        def json(self):
            return {"files": {"app-data.json": {"content": '{"products": [1]}'}}}

    monkeypatch.setattr("services.storage.gist_storage.requests.get", lambda *a, **kw: FakeResponse())
    gist = GistStorage(gist_id="abc", token="t", filename="app-data.json")
    assert gist.load() == {"products": [1]}


class HtmlErrorPage:
    status_code = 200

    def raise_for_status(self):
        pass

    def json(self):
        raise requests.exceptions.JSONDecodeError("Expecting value", "<html>", 0)


class ListBody:
    status_code = 200

    def raise_for_status(self):
        pass

    def json(self):
        return ["not", "a", "gist"]


@pytest.mark.parametrize("response", [HtmlErrorPage(), ListBody()])
def test_unreadable_gist_response_raises_gist_error(monkeypatch, response):
    monkeypatch.setattr("services.storage.gist_storage.requests.get", lambda *a, **kw: response)
    with pytest.raises(GistError):
        GistStorage(gist_id="abc", token="t").load()


@pytest.mark.parametrize("response", [HtmlErrorPage(), ListBody()])
def test_unreadable_gist_response_falls_back_to_local(monkeypatch, tmp_path, response):
    monkeypatch.delenv("DISABLE_GIST", raising=False)
    monkeypatch.setattr("services.storage.gist_storage.requests.get", lambda *a, **kw: response)
    manager = StorageManager(local_path=tmp_path / "app-data.json", gist=GistStorage(gist_id="abc", token="t"))

    document = manager.load()

    assert document["products"] == []
    assert document["platformCommissionRate"] == 15
    assert "local cache" in manager.get_last_warning()
