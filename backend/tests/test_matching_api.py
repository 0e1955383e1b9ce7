"""Tests for the matching endpoints"""

import pytest

RECOMMENDATIONS_URL = "/api/v1/matching/recommendations"
PREFERENCES_URL = "/api/v1/matching/preferences"


def create_item(client, headers, **overrides):
    payload = {
        "title": "Objet de test",
        "description": "En bon état",
        "category": "OTHER",
        "condition": "GOOD",
        "tags": [],
    }
    payload.update(overrides)
    response = client.post("/api/v1/items/", json=payload, headers=headers)
    assert response.status_code == 201
    return response.json()


def test_anonymous_recommendations_are_empty(client):
    response = client.get(RECOMMENDATIONS_URL)

    assert response.status_code == 200
    data = response.json()
    assert data["recommendations"] == []
    assert data["total"] == 0


def test_invalid_token_recommendations_are_empty(client):
    response = client.get(RECOMMENDATIONS_URL, headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 200
    assert response.json()["recommendations"] == []
    assert response.json()["total"] == 0


@pytest.mark.parametrize("limit", [0, 51])
def test_recommendations_limit_is_validated(client, limit):
    response = client.get(RECOMMENDATIONS_URL, params={"limit": limit})
    assert response.status_code == 422


def test_recommendations_rate_limited(client):
    for _ in range(10):
        assert client.get(RECOMMENDATIONS_URL).status_code == 200

    response = client.get(RECOMMENDATIONS_URL)
    assert response.status_code == 429


def test_get_preferences_requires_authentication(client):
    response = client.get(PREFERENCES_URL)
    assert response.status_code == 401


def test_get_preferences_defaults(client, make_user):
    user_id, headers = make_user("alice")

    response = client.get(PREFERENCES_URL, headers=headers)

    assert response.status_code == 200
    preferences = response.json()["preferences"]
    assert preferences["user_id"] == user_id
    assert preferences["preferred_categories"] == []
    assert preferences["disliked_categories"] == []
    assert preferences["preferred_conditions"] == []
    assert preferences["country"] is None


def test_save_and_read_preferences(client, make_user):
    _, headers = make_user("alice")

    response = client.post(
        PREFERENCES_URL,
        json={
            "preferred_categories": ["BOOKS", "ART"],
            "preferred_conditions": ["NEW"],
            "country": "France",
        },
        headers=headers
    )
    assert response.status_code == 200
    assert response.json()["preferences"]["preferred_categories"] == ["BOOKS", "ART"]

    response = client.get(PREFERENCES_URL, headers=headers)
    preferences = response.json()["preferences"]
    assert preferences["preferred_categories"] == ["BOOKS", "ART"]
    assert preferences["preferred_conditions"] == ["NEW"]
    assert preferences["country"] == "France"


def test_partial_preferences_update(client, make_user):
    _, headers = make_user("alice")

    client.post(PREFERENCES_URL, json={"preferred_categories": ["BOOKS"], "country": "France"}, headers=headers)
    response = client.post(PREFERENCES_URL, json={"disliked_categories": ["TOYS"]}, headers=headers)

    preferences = response.json()["preferences"]
    assert preferences["preferred_categories"] == ["BOOKS"]
    assert preferences["disliked_categories"] == ["TOYS"]
    assert preferences["country"] == "France"


def test_overlapping_preferences_rejected(client, make_user):
    _, headers = make_user("alice")

    response = client.post(
        PREFERENCES_URL,
        json={"preferred_categories": ["BOOKS"], "disliked_categories": ["BOOKS"]},
        headers=headers
    )
    assert response.status_code == 422


def test_unknown_category_rejected(client, make_user):
    _, headers = make_user("alice")

    response = client.post(PREFERENCES_URL, json={"preferred_categories": ["SPACESHIPS"]}, headers=headers)
    assert response.status_code == 422


def test_save_preferences_requires_authentication(client):
    response = client.post(PREFERENCES_URL, json={"preferred_categories": ["BOOKS"]})
    assert response.status_code == 401


def test_authenticated_recommendations(client, make_user):
    _, alice = make_user("alice", country="France")
    _, bob = make_user("bob", country="France")
    _, carol = make_user("carol", country="Belgique")

    own = create_item(client, alice, title="Mon grille-pain", category="ELECTRONICS", condition="NEW")
    phone = create_item(client, bob, title="Téléphone", category="ELECTRONICS", condition="NEW")
    novel = create_item(client, carol, title="Roman policier", category="BOOKS", condition="FAIR")
    toy = create_item(client, carol, title="Peluche", category="TOYS", condition="GOOD")

    client.post(
        PREFERENCES_URL,
        json={
            "preferred_categories": ["ELECTRONICS"],
            "disliked_categories": ["TOYS"],
            "preferred_conditions": ["NEW"],
        },
        headers=alice
    )

    response = client.get(RECOMMENDATIONS_URL, headers=alice)

    assert response.status_code == 200
    data = response.json()
    ids = [rec["item"]["id"] for rec in data["recommendations"]]
    assert ids == [phone["id"], novel["id"]]
    assert own["id"] not in ids
    assert toy["id"] not in ids
    assert data["total"] == 2

    top = data["recommendations"][0]
    assert 0 <= top["score"] <= 100
    assert top["score"] > data["recommendations"][1]["score"]
    reason_types = {reason["type"] for reason in top["reasons"]}
    assert {"category", "condition"} <= reason_types
    assert top["item"]["owner"]["username"] == "bob"

    assert data["user_preferences"]["preferred_categories"] == ["ELECTRONICS"]
    assert data["user_preferences"]["preferred_conditions"] == ["NEW"]


def test_recommendations_without_preferences(client, make_user):
    _, alice = make_user("alice")
    _, bob = make_user("bob")
    create_item(client, bob, title="Lampe", category="HOME")

    response = client.get(RECOMMENDATIONS_URL, headers=alice)

    data = response.json()
    assert data["total"] == 1
    assert data["user_preferences"] is None
    assert {r["type"] for r in data["recommendations"][0]["reasons"]} <= {"popularity", "recency"}


def test_recommendations_pagination(client, make_user):
    _, alice = make_user("alice")
    categories = ["CLOTHING", "ELECTRONICS", "BOOKS", "HOME", "TOOLS", "TOYS"]
    for i, category in enumerate(categories):
        _, owner = make_user(f"owner{i}")
        create_item(client, owner, title=f"Objet {i}", category=category)

    first = client.get(RECOMMENDATIONS_URL, params={"limit": 4}, headers=alice).json()
    second = client.get(RECOMMENDATIONS_URL, params={"limit": 4, "offset": 4}, headers=alice).json()

    assert first["total"] == second["total"] == 6
    assert len(first["recommendations"]) == 4
    assert len(second["recommendations"]) == 2
    first_ids = {rec["item"]["id"] for rec in first["recommendations"]}
    second_ids = {rec["item"]["id"] for rec in second["recommendations"]}
    assert not first_ids & second_ids
