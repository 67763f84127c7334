"""Unit tests for authentication functionality."""
from datetime import timedelta

import jwt
import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from school_registry.auth import (
    create_access_token,
    get_current_user,
    hash_password,
    require_admin,
    verify_password,
    verify_token,
)
from school_registry.settings import settings


class TestPasswords:
    """Test cases for password hashing."""

    def test_hash_is_not_plain_text(self):
        """Test password hashing produces a bcrypt hash."""
        hashed = hash_password("rahasia123")

        assert hashed != "rahasia123"
        assert hashed.startswith("$2")

    def test_verify_password(self):
        """Test password verification against a hash."""
        hashed = hash_password("rahasia123")

        assert verify_password("rahasia123", hashed) is True
        assert verify_password("salah123", hashed) is False

    def test_verify_against_non_bcrypt_value(self):
        """Test verification against a value that is not a hash."""
        assert verify_password("rahasia123", "rahasia123") is False


class TestTokens:
    """Test cases for JWT tokens."""

    def test_create_access_token(self):
        """Test JWT token creation."""
        token = create_access_token({"sub": "admin", "role": "ADMIN"})

        assert isinstance(token, str)
        assert len(token) > 0

    def test_verify_token_valid(self):
        """Test valid token verification."""
        token = create_access_token({"sub": "admin", "role": "ADMIN"}, timedelta(minutes=60))

        payload = verify_token(token)
        assert payload is not None
        assert payload["sub"] == "admin"
        assert payload["role"] == "ADMIN"

    def test_verify_token_invalid(self):
        """Test invalid token verification."""
        assert verify_token("invalid.jwt.token") is None

    def test_verify_token_expired(self):
        """Test expired token verification."""
        token = create_access_token({"sub": "admin", "role": "ADMIN"}, timedelta(seconds=-1))

        assert verify_token(token) is None

    def test_verify_token_wrong_secret(self):
        """Test token signed with another secret."""
        token = jwt.encode(
            {"sub": "admin", "role": "ADMIN"}, "another-secret", algorithm=settings.jwt_algorithm
        )

        assert verify_token(token) is None


class TestDependencies:
    """Test cases for the FastAPI auth dependencies."""

    @pytest.mark.asyncio
    async def test_current_user_from_token(self):
        """Test current user resolved from a bearer token."""
        token = create_access_token({"sub": "1234567890", "role": "SISWA"})
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)

        user = await get_current_user(credentials)
        assert user == {"username": "1234567890", "role": "SISWA"}

    @pytest.mark.asyncio
    async def test_missing_credentials(self):
        """Test request without credentials."""
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(None)
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_token_without_role(self):
        """Test token that carries no role."""
        token = create_access_token({"sub": "admin"})
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)

        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(credentials)
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_require_admin(self):
        """Test admin-only dependency."""
        admin = {"username": "admin", "role": "ADMIN"}
        assert await require_admin(admin) == admin

        with pytest.raises(HTTPException) as exc_info:
            await require_admin({"username": "1234567890", "role": "SISWA"})
        assert exc_info.value.status_code == 403
