"""Security: JWT issuance/verification and password hashing."""

from app.infrastructure.security.jwt import (
    TokenExpiredError,
    create_access_token,
    create_refresh_token,
    verify_access_token,
    verify_refresh_token,
)
from app.infrastructure.security.password import (
    burn_password_check,
    get_password_hash,
    hash_password_async,
    verify_password,
    verify_password_async,
)

__all__ = [
    "TokenExpiredError",
    "burn_password_check",
    "create_access_token",
    "create_refresh_token",
    "get_password_hash",
    "hash_password_async",
    "verify_access_token",
    "verify_password",
    "verify_password_async",
    "verify_refresh_token",
]
