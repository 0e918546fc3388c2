import pytest
import requests

from services.errors import SuggestionError
from services.margin_suggestion import (
    ERROR_NON_POSITIVE_COST,
    ERROR_NOT_CONFIGURED,
    ERROR_SERVICE,
    MarginSuggestionClient,
    get_smart_suggestion,
)


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"HTTP {self.status}")

    def json(self):
        return self.payload


@pytest.fixture
def client():
    return MarginSuggestionClient(url="https://suggest.example/api", token="t")


def _post_returning(monkeypatch, response, calls=None):
    def fake_post(url, json=None, headers=None, timeout=None):
        if calls is not None:
            calls.append(json)
        return response

    monkeypatch.setattr("services.margin_suggestion.requests.post", fake_post)


def test_suggestion_is_returned(monkeypatch, client):
    calls = []
    _post_returning(monkeypatch, FakeResponse({"suggestedProfitMarginPercentage": 35}), calls)

    result = get_smart_suggestion(42.5, client)

    assert result.success is True
    assert result.suggestion == 35
    assert calls == [{"productCost": 42.5}]


@pytest.mark.parametrize("raw, expected", [(2, 5), (250, 100), ("40", 40)])
def test_suggestion_is_clamped(monkeypatch, client, raw, expected):
    _post_returning(monkeypatch, FakeResponse({"suggestedProfitMarginPercentage": raw}))
    assert client.suggest(10) == expected


@pytest.mark.parametrize("cost", [0, -3, None, "abc"])
def test_non_positive_cost_never_calls_service(monkeypatch, client, cost):
    def fail(*args, **kwargs):
        raise AssertionError("service must not be called")

    monkeypatch.setattr("services.margin_suggestion.requests.post", fail)
    result = get_smart_suggestion(cost, client)
    assert result.success is False
    assert result.error == ERROR_NON_POSITIVE_COST


def test_service_error_is_reported(monkeypatch, client):
    _post_returning(monkeypatch, FakeResponse({}, status=500))
    result = get_smart_suggestion(10, client)
    assert result.success is False
    assert result.error == ERROR_SERVICE


def test_missing_suggestion_raises(monkeypatch, client):
    _post_returning(monkeypatch, FakeResponse({"other": 1}))
    with pytest.raises(SuggestionError):
        client.suggest(10)


def test_unconfigured_client(monkeypatch):
    monkeypatch.delenv("MARGIN_SUGGESTION_URL", raising=False)
    client = MarginSuggestionClient(url=None)
    client.url = None
    result = get_smart_suggestion(10, client)
    assert result.error == ERROR_NOT_CONFIGURED
