"""Authentication service: register, login, token refresh."""

from __future__ import annotations

import logging

from app.application.dtos.user import AuthResult, TokenClaims, TokenPair, UserResult
from app.application.interfaces.repositories import IUserRepository
from app.domain.enums import UserRole
from app.domain.exceptions import AuthenticationException, ConflictException
from app.infrastructure.security.jwt import (
    create_access_token,
    create_refresh_token,
    verify_access_token,
    verify_refresh_token,
)

logger = logging.getLogger(__name__)


def _claims_for(user: UserResult) -> dict[str, str]:
    return {"id": user.id, "email": user.email, "role": user.role}


def issue_tokens(user: UserResult) -> TokenPair:
    """Sign a fresh access/refresh pair for user."""
    claims = _claims_for(user)
    return TokenPair(
        access_token=create_access_token(claims),
        refresh_token=create_refresh_token(claims),
    )


def decode_access_token(token: str) -> TokenClaims:
    """Verify an access token and return its identity claims.

    Raises:
        TokenExpiredError: Token has expired.
        ValueError: Token is invalid.
    """
    payload = verify_access_token(token)
    return TokenClaims(id=str(payload["id"]), email=payload["email"], role=payload["role"])


class AuthService:
    """Registers users and issues JWT pairs. Self-registration always gets the user role."""

    def __init__(self, user_repo: IUserRepository) -> None:
        self.user_repo = user_repo

    async def register(self, username: str, email: str, password: str) -> AuthResult:
        """Create an account and sign it in.

        Raises:
            ConflictException: Email or username already in use.
        """
        if await self.user_repo.get_by_email(email) is not None:
            raise ConflictException("Email already registered", field="email")
        if await self.user_repo.get_by_username(username) is not None:
            raise ConflictException("Username already taken", field="username")
        user = await self.user_repo.create_user(
            username=username,
            email=email,
            password=password,
            role=UserRole.USER.value,
        )
        await self.user_repo.commit()
        logger.info("New user registered: %s", email)
        return AuthResult(user=user, tokens=issue_tokens(user))

    async def login(self, email: str, password: str) -> AuthResult:
        """Authenticate by email and password.

        Raises:
            AuthenticationException: Unknown email, inactive account or wrong password
                (same message for all three).
        """
        user = await self.user_repo.authenticate(email, password)
        if user is None:
            raise AuthenticationException("Invalid credentials")
        logger.info("User logged in: %s", email)
        return AuthResult(user=user, tokens=issue_tokens(user))

    async def refresh(self, refresh_token: str) -> TokenPair:
        """Exchange a valid refresh token of an active user for a new pair.

        Raises:
            AuthenticationException: Token invalid, expired, or user inactive/gone.
        """
        try:
            payload = verify_refresh_token(refresh_token)
        except ValueError:
            raise AuthenticationException("Invalid or expired refresh token") from None
        user = await self.user_repo.get_by_id(str(payload["id"]))
        if user is None or not user.is_active:
            raise AuthenticationException("Invalid or expired refresh token")
        return issue_tokens(user)
