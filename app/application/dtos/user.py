"""DTOs for user and auth use cases (no dependency on ORM)."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class UserResult:
    """User read-model (result of get_by_id, create_user, etc.). No password."""

    id: str
    username: str
    email: str
    role: str
    is_active: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "role": self.role,
            "is_active": self.is_active,
        }


@dataclass(frozen=True)
class TokenPair:
    """Access + refresh JWTs issued on register, login and refresh."""

    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class AuthResult:
    """Result of register/login: the user and a fresh token pair."""

    user: UserResult
    tokens: TokenPair


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried in a verified access token (id, email, role)."""

    id: str
    email: str
    role: str
