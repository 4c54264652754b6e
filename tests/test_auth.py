"""
Health Check Test Suite - Authentication
========================================

Author: Health Check Team
Version: 1.0.0
"""

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from healthcheck.api.auth import create_access_token, get_current_user, verify_token
from healthcheck.config import settings


class TestTokens:
    """Tests for token creation and verification."""

    def test_round_trip(self):
        """A fresh token verifies and keeps its claims."""
        token = create_access_token("user-1", email="a@example.com", company_name="Acme")
        payload = verify_token(token)
        assert payload["sub"] == "user-1"
        assert payload["email"] == "a@example.com"
        assert payload["company_name"] == "Acme"

    def test_expired_token(self):
        """Expired tokens are rejected with 401."""
        token = create_access_token("user-1", expires_minutes=-1)
        with pytest.raises(HTTPException) as exc:
            verify_token(token)
        assert exc.value.status_code == 401

    def test_wrong_secret(self):
        """Tokens signed with another key are rejected."""
        token = jwt.encode({"sub": "user-1"}, "not-the-secret", algorithm="HS256")
        with pytest.raises(HTTPException) as exc:
            verify_token(token)
        assert exc.value.status_code == 401

    def test_missing_subject(self):
        """A token without sub is rejected."""
        token = jwt.encode({"email": "x"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)
        with pytest.raises(HTTPException) as exc:
            verify_token(token)
        assert "subject" in exc.value.detail


class TestCurrentUser:
    """Tests for the get_current_user dependency."""

    @pytest.mark.asyncio
    async def test_no_credentials(self):
        """Missing header is 401."""
        with pytest.raises(HTTPException) as exc:
            await get_current_user(None)
        assert exc.value.status_code == 401

    @pytest.mark.asyncio
    async def test_valid_credentials(self):
        """Valid bearer token yields the user."""
        credentials = HTTPAuthorizationCredentials(
            scheme="Bearer",
            credentials=create_access_token("user-9", company_name="Acme"),
        )
        user = await get_current_user(credentials)
        assert user.user_id == "user-9"
        assert user.company_name == "Acme"
