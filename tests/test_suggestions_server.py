import pytest

from place_suggest.core.config import Settings
from place_suggest.jobs import suggestions_server
from place_suggest.jobs.suggestions import InvalidQueryError
from place_suggest.models import PlaceType, Suggestion
from place_suggest.vendors.wikipedia import WikipediaError, WikipediaTimeoutError

SUGGESTION = Suggestion(
    title="Eiffel Tower",
    snippet="wrought-iron lattice tower in Paris",
    confidence=0.61,
    place_type=PlaceType.BUILDING,
    place_confidence=0.3,
    country="France",
    thumbnail="https://img/eiffel.jpg",
    size=20,
    timestamp="2024-01-01T00:00:00Z",
)


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(suggestions_server, "get_settings", lambda: Settings())
    return suggestions_server.app.test_client()


def test_health_endpoint(client):
    response = client.get("/healthz")
    assert response.status_code == 200
    body = response.get_json()
    assert body["status"] == "ok"
    assert body["return_limit"] == 3


def test_suggestions_status(client):
    response = client.get("/search/suggestions")
    assert response.status_code == 200
    assert response.get_json()["success"] is True


def test_suggest_returns_envelope(client, monkeypatch):
    seen = {}

    def fake_search(query):
        seen["query"] = query
        return [SUGGESTION]

    monkeypatch.setattr(suggestions_server, "search_suggestions", fake_search)

    response = client.post("/search/suggestions", json={"query": "  eiffel tower "})

    assert response.status_code == 200
    body = response.get_json()
    assert body["success"] is True
    assert body["data"]["query"] == "eiffel tower"
    assert body["data"]["total_found"] == 1
    assert body["data"]["suggestions"][0] == SUGGESTION.to_dict()
    assert seen["query"] == "  eiffel tower "


def test_suggest_rejects_invalid_query(client):
    response = client.post("/search/suggestions", json={"query": "x"})
    assert response.status_code == 400
    body = response.get_json()
    assert body == {"success": False, "error": "Query must be at least 2 characters long", "code": "QUERY_TOO_SHORT"}

    response = client.post("/search/suggestions", data="not json")
    assert response.status_code == 400
    assert response.get_json()["code"] == "INVALID_INPUT"


@pytest.mark.parametrize(
    "error,status,code",
    [
        (WikipediaTimeoutError(), 408, "TIMEOUT"),
        (WikipediaError("Wikipedia API error: HTTP 502"), 503, "SERVICE_UNAVAILABLE"),
        (RuntimeError("boom"), 500, "INTERNAL_ERROR"),
        (InvalidQueryError("Invalid search query", "INVALID_INPUT"), 400, "INVALID_INPUT"),
    ],
)
def test_suggest_maps_errors(client, monkeypatch, error, status, code):
    def failing_search(query):
        raise error

    monkeypatch.setattr(suggestions_server, "search_suggestions", failing_search)

    response = client.post("/search/suggestions", json={"query": "eiffel tower"})
    assert response.status_code == status
    body = response.get_json()
    assert body["success"] is False
    assert body["code"] == code
