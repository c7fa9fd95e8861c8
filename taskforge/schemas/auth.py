"""
Authentication schemas.

Request/response models for sign-up, sign-in, refresh and logout.
"""

from __future__ import annotations

from pydantic import EmailStr, Field, field_validator

from taskforge.schemas.common import CamelModel, RequestModel


# ---------------------------------------------------------------------------
# Sign up
# ---------------------------------------------------------------------------

class SignUpRequest(RequestModel):
    """Request body for POST /auth/signup."""

    email: EmailStr
    name: str | None = Field(default=None, min_length=1, max_length=35)
    password: str = Field(min_length=8, max_length=100)

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        return v.lower()


# ---------------------------------------------------------------------------
# Sign in
# ---------------------------------------------------------------------------

class SignInRequest(RequestModel):
    """Request body for POST /auth/signin."""

    email: EmailStr
    password: str = Field(min_length=8, max_length=100)

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        return v.lower()


class TokenResponse(CamelModel):
    """Response for sign-up, sign-in and token refresh."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Access token TTL in seconds")


# ---------------------------------------------------------------------------
# Refresh / Logout
# ---------------------------------------------------------------------------

class RefreshRequest(RequestModel):
    """Request body for POST /auth/refresh."""

    refresh_token: str


class LogoutRequest(RequestModel):
    """Request body for POST /auth/logout."""

    refresh_token: str
