"""
Tests for session tokens, password hashing, and the rate limiter
"""
import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

import pytest
from fastapi import HTTPException
from jose import jwt

from storefront.core.auth import (
    create_access_token,
    decode_access_token,
    get_current_user,
    hash_password,
    require_admin,
    verify_password,
    TokenUser,
)
from storefront.core.config import settings
from storefront.core.rate_limit import RateLimiter, auth_rate_limit


class TestPasswords:

    def test_hash_and_verify(self):
        hashed = hash_password("secret123")

        assert hashed != "secret123"
        assert verify_password("secret123", hashed)
        assert not verify_password("wrong-pass", hashed)


class TestTokens:

    def test_round_trip_payload(self):
        token = create_access_token(7, "asha@example.com", "Asha", "user")

        payload = decode_access_token(token)

        assert payload["id"] == 7
        assert payload["email"] == "asha@example.com"
        assert payload["role"] == "user"

    def test_expires_in_seven_days(self):
        token = create_access_token(7, "asha@example.com", "Asha", "user")

        exp = datetime.fromtimestamp(decode_access_token(token)["exp"], tz=timezone.utc)

        assert timedelta(days=6, hours=23) < exp - datetime.now(timezone.utc) <= timedelta(days=7)

    def test_wrong_secret_rejected(self):
        token = jwt.encode({"id": 7, "email": "x@example.com"}, "another-secret", algorithm="HS256")

        assert decode_access_token(token) is None

    def test_expired_token_rejected(self):
        token = jwt.encode(
            {"id": 7, "email": "x@example.com", "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )

        assert decode_access_token(token) is None


class TestCurrentUser:

    def test_missing_cookie(self):
        with pytest.raises(HTTPException) as exc_info:
            asyncio.run(get_current_user(None))

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Authentication required"

    def test_garbage_token(self):
        with pytest.raises(HTTPException) as exc_info:
            asyncio.run(get_current_user("not-a-jwt"))

        assert exc_info.value.detail == "Invalid or expired token"

    def test_token_without_id_rejected(self):
        token = jwt.encode({"email": "x@example.com"}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

        with pytest.raises(HTTPException):
            asyncio.run(get_current_user(token))

    def test_valid_token(self):
        token = create_access_token(1, "admin@store.com", "Admin", "admin")

        user = asyncio.run(get_current_user(token))

        assert user.id == 1
        assert user.is_admin

    def test_admin_required(self):
        shopper = TokenUser(id=7, email="asha@example.com", role="user")

        with pytest.raises(HTTPException) as exc_info:
            asyncio.run(require_admin(shopper))

        assert exc_info.value.status_code == 403
        assert exc_info.value.detail == "Admin access required"


class TestRateLimiter:

    def test_allows_up_to_limit_then_blocks(self):
        limiter = RateLimiter()

        results = [limiter.is_allowed("ip:1", max_requests=3)[0] for _ in range(4)]

        assert results == [True, True, True, False]

    def test_retry_after_reported(self):
        limiter = RateLimiter()
        limiter.is_allowed("ip:1", max_requests=1, window_seconds=30)

        allowed, remaining, retry_after = limiter.is_allowed("ip:1", max_requests=1, window_seconds=30)

        assert not allowed
        assert remaining == 0
        assert 0 < retry_after <= 31

    def test_window_slides(self):
        limiter = RateLimiter()
        with patch('storefront.core.rate_limit.time.time', return_value=1000.0):
            limiter.is_allowed("ip:1", max_requests=1, window_seconds=60)
        with patch('storefront.core.rate_limit.time.time', return_value=1061.0):
            allowed, _, _ = limiter.is_allowed("ip:1", max_requests=1, window_seconds=60)

        assert allowed

    def test_clients_counted_separately(self):
        limiter = RateLimiter()
        limiter.is_allowed("ip:1", max_requests=1)

        assert limiter.is_allowed("ip:2", max_requests=1)[0]

    def test_dependency_raises_429(self, monkeypatch):
        monkeypatch.setattr(settings, "AUTH_RATE_LIMIT", 1)
        request = MagicMock()
        request.url.path = "/api/auth/login"
        request.headers = {"X-Forwarded-For": "203.0.113.9, 10.0.0.1"}

        asyncio.run(auth_rate_limit(request))
        with pytest.raises(HTTPException) as exc_info:
            asyncio.run(auth_rate_limit(request))

        assert exc_info.value.status_code == 429
        assert "Retry-After" in exc_info.value.headers
