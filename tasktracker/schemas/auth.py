"""Authentication schemas.

Field rules (email shape, password complexity, name length) are enforced by
the credential store so every failure is reported together.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class UserRegister(BaseModel):
    """User registration request."""

    email: str | None = None
    password: str | None = None
    name: str | None = None


class UserLogin(BaseModel):
    """User login request.

    Fields are untyped so a malformed login fails like a wrong password.
    """

    email: Any = None
    password: Any = None


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    created_at: datetime


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    message: str
    token: str
    token_type: str = "bearer"  # noqa: S105
    user: UserResponse


class TokenClaimsResponse(BaseModel):
    """Claims carried by a valid token."""

    model_config = ConfigDict(from_attributes=True)

    user_id: int
    email: str
    name: str
    expires_at: datetime


class TokenValidationResponse(BaseModel):
    """Result of checking a bearer token."""

    valid: bool
    user: TokenClaimsResponse | None = None
    error: str | None = None
