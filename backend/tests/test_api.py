"""Tests for root and user endpoints"""

from datetime import timedelta

from secondlife.utils.auth import create_access_token


def test_root_endpoint(client):
    """Test root endpoint"""

    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["message"] == "SecondLife Exchange API"


def test_create_user(client):
    """Test creating a user"""

    response = client.post(
        "/api/v1/users/",
        json={
            "username": "testuser",
            "email": "test@example.com",
            "country": "France"
        }
    )

    assert response.status_code == 201
    data = response.json()
    assert data["username"] == "testuser"
    assert data["country"] == "France"
    assert "id" in data


def test_create_duplicate_user(client):
    """Duplicate username or email is rejected"""

    payload = {"username": "testuser", "email": "test@example.com"}
    assert client.post("/api/v1/users/", json=payload).status_code == 201

    response = client.post("/api/v1/users/", json=payload)
    assert response.status_code == 400


def test_create_user_invalid_email(client):
    response = client.post("/api/v1/users/", json={"username": "testuser", "email": "not-an-email"})
    assert response.status_code == 422


def test_get_user(client, make_user):
    user_id, _ = make_user("alice")

    response = client.get(f"/api/v1/users/{user_id}")
    assert response.status_code == 200
    assert response.json()["username"] == "alice"


def test_get_user_not_found(client):
    response = client.get("/api/v1/users/999")
    assert response.status_code == 404


def test_me_requires_authentication(client):
    response = client.get("/api/v1/users/me")
    assert response.status_code == 401


def test_me_and_update(client, make_user):
    _, headers = make_user("alice")

    response = client.get("/api/v1/users/me", headers=headers)
    assert response.status_code == 200
    assert response.json()["username"] == "alice"

    response = client.patch("/api/v1/users/me", json={"country": "Belgique"}, headers=headers)
    assert response.status_code == 200
    assert response.json()["country"] == "Belgique"


def test_expired_token_is_rejected(client, make_user):
    user_id, _ = make_user("alice")
    token = create_access_token({"sub": user_id}, expires_delta=timedelta(minutes=-5))

    response = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_token_for_unknown_user_is_rejected(client):
    token = create_access_token({"sub": 4242})

    response = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
