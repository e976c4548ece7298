from datetime import datetime, timedelta, timezone
from http import HTTPStatus

import jwt


def test_register_returns_confirmation(client):
    response = client.post("/api/register", json={"email": "alice@example.com", "password": "pw"})

    assert response.status_code == HTTPStatus.CREATED
    assert response.json() == {"message": "User registered"}


def test_register_missing_field(client):
    response = client.post("/api/register", json={"email": "alice@example.com"})

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.json()["message"] == "Email and password required"


def test_register_duplicate_email(client):
    payload = {"email": "alice@example.com", "password": "pw"}
    client.post("/api/register", json=payload)

    response = client.post("/api/register", json=payload)

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.json()["message"] == "Email already exists"


def test_login_returns_token_and_email(client):
    client.post("/api/register", json={"email": "alice@example.com", "password": "pw"})

    response = client.post("/api/login", json={"email": "alice@example.com", "password": "pw"})

    assert response.status_code == HTTPStatus.OK
    body = response.json()
    assert body["user"] == {"email": "alice@example.com"}
    assert body["token"]
    assert "password" not in response.text


def test_login_failures_share_one_message(client):
    client.post("/api/register", json={"email": "alice@example.com", "password": "pw"})

    unknown = client.post("/api/login", json={"email": "bob@example.com", "password": "pw"})
    wrong = client.post("/api/login", json={"email": "alice@example.com", "password": "nope"})

    assert unknown.status_code == wrong.status_code == HTTPStatus.UNAUTHORIZED
    assert unknown.json() == wrong.json()
    assert unknown.json()["message"] == "Invalid credentials"


def test_current_user(client, register_and_login):
    headers = register_and_login("alice@example.com", "pw")

    response = client.get("/api/user", headers=headers)

    assert response.status_code == HTTPStatus.OK
    assert response.json() == {"email": "alice@example.com"}


def test_protected_route_without_token(client):
    response = client.get("/api/user")

    assert response.status_code == HTTPStatus.UNAUTHORIZED
    assert response.json()["message"] == "Unauthorized"


def test_protected_route_with_bad_token(client):
    response = client.get("/api/user", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == HTTPStatus.UNAUTHORIZED
    assert response.json()["message"] == "Invalid token"


def test_token_for_unknown_user_returns_404(client, settings):
    token = jwt.encode(
        {"sub": "424242", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        settings.token_secret,
        algorithm="HS256",
    )

    response = client.get("/api/user", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == HTTPStatus.NOT_FOUND
    assert response.json()["message"] == "User not found"


def test_non_bearer_scheme_counts_as_missing_token(client, register_and_login):
    token = register_and_login()["Authorization"].split(" ", 1)[1]

    response = client.get("/api/user", headers={"Authorization": f"Token {token}"})

    assert response.status_code == HTTPStatus.UNAUTHORIZED
    assert response.json()["message"] == "Unauthorized"
