"""Auth API schemas."""

import re

from pydantic import EmailStr, Field, field_validator

from app.schemas.common import CamelModel, CamelRequest

_DIGIT = re.compile(r"\d")


class RegisterRequest(CamelRequest):
    """Request body for public registration. New accounts always get the user role."""

    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, description="At least 6 characters, one digit")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def password_has_digit(cls, v: str) -> str:
        if not _DIGIT.search(v):
            raise ValueError("Password must contain a number")
        return v


class LoginRequest(CamelRequest):
    """Request body for login (email + password)."""

    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class RefreshRequest(CamelRequest):
    """Request body for token refresh. Missing token is a 400, not a schema error."""

    refresh_token: str | None = None


class UserOut(CamelModel):
    id: str
    username: str
    email: str
    role: str
    is_active: bool


class TokenPairOut(CamelModel):
    access_token: str
    refresh_token: str


class AuthData(TokenPairOut):
    """Register/login payload: the user plus a fresh token pair."""

    user: UserOut


class ProfileOut(CamelModel):
    """Identity claims from the caller's access token."""

    id: str
    email: str
    role: str
