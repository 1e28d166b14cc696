"""
API tests for /api/auth
"""
from datetime import datetime
from unittest.mock import patch

import pytest

from storefront.core.auth import decode_access_token, hash_password
from storefront.core.config import settings
from storefront.core.errors import ConflictError
from storefront.domain.user import User

CREATED = datetime(2024, 3, 1, 12, 0)


def make_user(**overrides):
    data = {'id': 7, 'name': 'Asha', 'email': 'asha@example.com', 'role': 'user', 'created_at': CREATED}
    data.update(overrides)
    return User(**data)


@pytest.fixture
def user_repo():
    with patch('storefront.api.auth.UserRepository') as mock_cls:
        yield mock_cls.return_value


class TestRegister:

    def test_creates_user_and_sets_cookie(self, client, user_repo):
        # Arrange
        user_repo.find_by_email.return_value = None
        user_repo.create.return_value = make_user()

        # Act
        response = client.post("/api/auth/register", json={
            "name": "Asha", "email": "Asha@Example.com", "password": "secret123",
        })

        # Assert
        assert response.status_code == 201
        assert response.json()["user"] == {"id": 7, "name": "Asha", "email": "asha@example.com", "role": "user"}

        cookie = response.headers["set-cookie"]
        assert "token=" in cookie
        assert "HttpOnly" in cookie
        assert "Path=/" in cookie
        assert f"Max-Age={7 * 24 * 60 * 60}" in cookie
        assert decode_access_token(response.cookies["token"])["id"] == 7

        kwargs = user_repo.create.call_args.kwargs
        assert kwargs["email"] == "asha@example.com"
        assert kwargs["password_hash"] != "secret123"

    def test_missing_fields(self, client, user_repo):
        response = client.post("/api/auth/register", json={"email": "asha@example.com"})

        assert response.status_code == 400
        assert response.json()["message"] == "Please provide name, email, and password"

    def test_short_password(self, client, user_repo):
        response = client.post("/api/auth/register", json={
            "name": "Asha", "email": "asha@example.com", "password": "12345",
        })

        assert response.status_code == 400
        assert response.json()["message"] == "Password must be at least 6 characters"
        user_repo.create.assert_not_called()

    def test_duplicate_email(self, client, user_repo):
        user_repo.find_by_email.return_value = make_user()

        response = client.post("/api/auth/register", json={
            "name": "Asha", "email": "asha@example.com", "password": "secret123",
        })

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "User with this email already exists"}

    def test_duplicate_email_race(self, client, user_repo):
        user_repo.find_by_email.return_value = None
        user_repo.create.side_effect = ConflictError("Record already exists")

        response = client.post("/api/auth/register", json={
            "name": "Asha", "email": "asha@example.com", "password": "secret123",
        })

        assert response.json()["message"] == "User with this email already exists"

    def test_invalid_email(self, client, user_repo):
        response = client.post("/api/auth/register", json={
            "name": "Asha", "email": "not-an-email", "password": "secret123",
        })

        assert response.status_code == 400
        assert response.json()["success"] is False


class TestLogin:

    @pytest.fixture
    def stored_user(self, user_repo):
        user = make_user(password_hash=hash_password("secret123"))
        user_repo.find_by_email.return_value = user
        return user

    def test_success(self, client, stored_user):
        response = client.post("/api/auth/login", json={"email": "asha@example.com", "password": "secret123"})

        assert response.status_code == 200
        assert response.json()["message"] == "Login successful"
        assert "password_hash" not in response.json()["user"]
        assert "token" in response.cookies

    def test_wrong_password(self, client, stored_user):
        response = client.post("/api/auth/login", json={"email": "asha@example.com", "password": "nope123"})

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Invalid email or password"}

    def test_unknown_email(self, client, user_repo):
        user_repo.find_by_email.return_value = None

        response = client.post("/api/auth/login", json={"email": "who@example.com", "password": "secret123"})

        assert response.status_code == 401

    def test_missing_fields(self, client, user_repo):
        response = client.post("/api/auth/login", json={"email": "asha@example.com"})

        assert response.status_code == 400
        assert response.json()["message"] == "Please provide email and password"

    def test_rate_limited(self, client, user_repo, monkeypatch):
        monkeypatch.setattr(settings, "AUTH_RATE_LIMIT", 2)
        user_repo.find_by_email.return_value = None
        body = {"email": "asha@example.com", "password": "secret123"}

        statuses = [client.post("/api/auth/login", json=body).status_code for _ in range(3)]

        assert statuses == [401, 401, 429]


class TestSession:

    def test_logout_expires_cookie(self, user_client):
        response = user_client.post("/api/auth/logout")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Logout successful"}
        cookie = response.headers["set-cookie"]
        assert cookie.startswith("token=")
        assert "Max-Age=0" in cookie

    def test_me(self, user_client, user_repo):
        user_repo.find_by_id.return_value = make_user()

        response = user_client.get("/api/auth/me")

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "asha@example.com"
        user_repo.find_by_id.assert_called_once_with(7)

    def test_me_deleted_user(self, user_client, user_repo):
        user_repo.find_by_id.return_value = None

        response = user_client.get("/api/auth/me")

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    def test_me_requires_login(self, client):
        response = client.get("/api/auth/me")

        assert response.status_code == 401
