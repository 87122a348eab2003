"""Tests for the /auth identity endpoints."""

import jwt
import pytest

from identity.models import Profile

pytestmark = pytest.mark.django_db

PASSWORD = "An0ther-pass!"


def register(client, username="bob"):
    return client.post(
        "/auth/register",
        {"username": username, "email": f"{username}@example.com", "password": PASSWORD},
        format="json",
    )


def login(client, username="bob"):
    return client.post("/auth/login", {"username": username, "password": PASSWORD}, format="json")


class TestRegister:
    def test_creates_user_with_subject_id(self, anon_client, django_user_model):
        response = register(anon_client)

        assert response.status_code == 201
        user = django_user_model.objects.get(username="bob")
        assert response.json()["username"] == "bob"
        assert response.json()["userSub"] == str(Profile.objects.get(user=user).subject_id)

    def test_duplicate_username(self, anon_client):
        register(anon_client)

        response = register(anon_client)

        assert response.status_code == 400
        assert "username" in response.json()

    def test_email_is_required(self, anon_client):
        response = anon_client.post("/auth/register", {"username": "bob", "password": PASSWORD}, format="json")
        assert response.status_code == 400


class TestLogin:
    def test_token_carries_subject(self, anon_client):
        user_sub = register(anon_client).json()["userSub"]

        response = login(anon_client)

        assert response.status_code == 200
        body = response.json()
        assert body["userSub"] == user_sub
        claims = jwt.decode(body["access"], options={"verify_signature": False})
        assert claims["sub"] == user_sub
        assert claims["username"] == "bob"

    def test_wrong_password(self, anon_client):
        register(anon_client)

        response = anon_client.post("/auth/login", {"username": "bob", "password": "nope"}, format="json")

        assert response.status_code == 401

    def test_issued_token_opens_the_api(self, anon_client):
        register(anon_client)
        access = login(anon_client).json()["access"]
        anon_client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")

        assert anon_client.get("/projects").status_code == 200


class TestSession:
    def test_reports_identity(self, anon_client):
        user_sub = register(anon_client).json()["userSub"]
        anon_client.credentials(HTTP_AUTHORIZATION=f"Bearer {login(anon_client).json()['access']}")

        response = anon_client.get("/auth/session")

        assert response.status_code == 200
        assert response.json() == {"username": "bob", "email": "bob@example.com", "userSub": user_sub}

    def test_requires_token(self, anon_client):
        assert anon_client.get("/auth/session").status_code == 401


class TestLogout:
    def test_blacklists_refresh_token(self, anon_client):
        register(anon_client)
        tokens = login(anon_client).json()
        anon_client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        first = anon_client.post("/auth/logout", {"refresh_token": tokens["refresh"]}, format="json")
        second = anon_client.post("/auth/logout", {"refresh_token": tokens["refresh"]}, format="json")

        assert first.status_code == 200
        assert second.status_code == 400

    def test_refresh_rejected_after_logout(self, anon_client):
        register(anon_client)
        tokens = login(anon_client).json()
        anon_client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
        anon_client.post("/auth/logout", {"refresh": tokens["refresh"]}, format="json")

        response = anon_client.post("/auth/token/refresh", {"refresh": tokens["refresh"]}, format="json")

        assert response.status_code == 401
