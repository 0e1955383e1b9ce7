"""Tests for rendered pages with a mocked backend"""

import httpx
import pytest
from fastapi.testclient import TestClient

from secondlife_web.main import app

RECOMMENDATIONS = {
    "recommendations": [
        {
            "item": {"id": 7, "title": "Téléphone", "category": "ELECTRONICS", "condition": "NEW"},
            "score": 85.0,
            "reasons": [{"type": "category", "score": 30.0, "description": "Catégorie préférée: ELECTRONICS"}],
        }
    ],
    "total": 1,
}

PREFERENCES = {
    "preferences": {
        "user_id": 1,
        "preferred_categories": ["ELECTRONICS"],
        "disliked_categories": [],
        "preferred_conditions": ["NEW"],
        "locale": None,
        "country": "France",
        "radius_km": None,
    }
}


@pytest.fixture
def backend():
    """Route backend calls to a handler set by each test"""

    state = {"handler": None, "requests": []}

    def dispatch(request):
        state["requests"].append(request)
        return state["handler"](request)

    app.state.backend_transport = httpx.MockTransport(dispatch)
    yield state
    app.state.backend_transport = None


@pytest.fixture
def client(backend):
    return TestClient(app)


def test_matching_page_renders_cards(client, backend):
    def handler(request):
        if request.url.path.endswith("/recommendations"):
            return httpx.Response(200, json=RECOMMENDATIONS)
        return httpx.Response(200, json=PREFERENCES)

    backend["handler"] = handler
    client.cookies.set("access_token", "token")

    response = client.get("/matching")

    assert response.status_code == 200
    assert "Téléphone" in response.text
    assert "85% · Excellent match" in response.text
    assert "+30 Catégorie préférée: ELECTRONICS" in response.text
    assert 'value="France"' in response.text


def test_matching_page_for_anonymous_visitor(client, backend):
    def handler(request):
        return httpx.Response(401, json={"detail": "Not authenticated"})

    backend["handler"] = handler

    response = client.get("/matching")

    assert response.status_code == 200
    assert "Aucune recommandation" in response.text
    assert [r.url.path for r in backend["requests"]] == ["/api/v1/matching/recommendations"]


def test_matching_page_shows_error_toast(client, backend):
    def handler(request):
        return httpx.Response(503, json={"detail": "unavailable"})

    backend["handler"] = handler

    response = client.get("/matching")

    assert response.status_code == 200
    assert "Impossible de charger les recommandations" in response.text


def test_save_preferences_redirects(client, backend):
    def handler(request):
        return httpx.Response(200, json=PREFERENCES)

    backend["handler"] = handler
    client.cookies.set("access_token", "token")

    response = client.post(
        "/matching/preferences",
        data={"preferred_categories": ["ELECTRONICS", "BOOKS"], "country": " France "},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/matching"
    sent = backend["requests"][0]
    assert sent.method == "POST"
    assert b'"country": "France"' in sent.content or b'"country":"France"' in sent.content


def test_items_page(client, backend):
    def handler(request):
        return httpx.Response(200, json={"items": [{"id": 1, "title": "Lampe", "category": "HOME", "condition": "GOOD"}], "total": 1})

    backend["handler"] = handler

    response = client.get("/items", params={"category": "HOME"})

    assert response.status_code == 200
    assert "Lampe" in response.text
    assert backend["requests"][0].url.params["category"] == "HOME"
