"""Pydantic schemas for accounts and login."""
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserRole(str, Enum):
    """Account role."""

    ADMIN = "ADMIN"
    SISWA = "SISWA"


class AccountCreate(BaseModel):
    """Schema for creating an account."""

    username: str = Field(..., min_length=3, max_length=100, description="Nama pengguna")
    password: str = Field(..., min_length=6, max_length=72, description="Kata sandi")
    role: UserRole = Field(..., description="Peran akun")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        """Usernames are compared verbatim, so surrounding spaces are dropped."""
        v = v.strip()
        if len(v) < 3:
            raise ValueError("Nama pengguna minimal 3 karakter")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        """bcrypt only accepts up to 72 bytes of password."""
        if len(v.encode("utf-8")) > 72:
            raise ValueError("Kata sandi maksimal 72 byte")
        return v


class AccountResponse(BaseModel):
    """Account as returned to callers; the hash never leaves the service."""

    id: int
    username: str
    role: UserRole
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LoginRequest(BaseModel):
    """Schema for login request."""

    username: str
    password: str


class LoginResponse(BaseModel):
    """Schema for login response."""

    access_token: str
    token_type: str = "bearer"
    role: UserRole
