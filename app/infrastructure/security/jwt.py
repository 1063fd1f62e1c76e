"""JWT token creation and verification for authentication.

Access and refresh tokens carry the same identity claims (id, email, role)
but are signed with different secrets from app.core.config, so one can
never be used in place of the other.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import ExpiredSignatureError, JWTError, jwt

from app.core.config import get_settings

_REQUIRED_CLAIMS = ("id", "email", "role")


class TokenExpiredError(ValueError):
    """Token signature is valid but exp has passed."""


def _encode(data: dict[str, Any], secret: str, expire: datetime) -> str:
    settings = get_settings()
    to_encode = data.copy()
    to_encode["exp"] = expire
    to_encode["iat"] = datetime.now(UTC)
    encoded = jwt.encode(to_encode, secret, algorithm=settings.jwt_algorithm)
    return cast(str, encoded)


def _decode(token: str, secret: str) -> dict[str, Any]:
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.jwt_algorithm],
            options={"require_exp": True},
        )
    except ExpiredSignatureError as e:
        raise TokenExpiredError("Token expired") from e
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    missing = [c for c in _REQUIRED_CLAIMS if c not in payload]
    if missing:
        raise ValueError(f"Token missing required claims: {', '.join(missing)}")
    return payload


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token with the given claims.

    Args:
        data: Claims to encode ({id, email, role}).
        expires_delta: Optional TTL; else uses settings.access_token_expire_minutes.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    delta = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    return _encode(data, settings.jwt_secret.get_secret_value(), datetime.now(UTC) + delta)


def create_refresh_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT refresh token (refresh secret, settings.refresh_token_expire_days)."""
    settings = get_settings()
    delta = expires_delta or timedelta(days=settings.refresh_token_expire_days)
    return _encode(
        data, settings.jwt_refresh_secret.get_secret_value(), datetime.now(UTC) + delta
    )


def verify_access_token(token: str) -> dict[str, Any]:
    """Verify and decode an access token. Returns the payload.

    Raises:
        TokenExpiredError: Token has expired.
        ValueError: Token is malformed, badly signed, or missing claims.
    """
    return _decode(token, get_settings().jwt_secret.get_secret_value())


def verify_refresh_token(token: str) -> dict[str, Any]:
    """Verify and decode a refresh token. Same errors as verify_access_token."""
    return _decode(token, get_settings().jwt_refresh_secret.get_secret_value())
