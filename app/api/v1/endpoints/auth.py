"""Auth API: register, login, token refresh and the caller's profile.

Register and login are rate limited with limit_auth. Tokens are issued
by AuthService; the profile endpoint echoes the verified access-token
claims.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    get_auth_service,
    get_auth_service_for_write,
    get_current_user,
)
from app.application.dtos.user import AuthResult, TokenClaims
from app.application.services import AuthService
from app.core.limiter import limit_auth
from app.domain.exceptions import ValidationException
from app.schemas.auth import (
    AuthData,
    LoginRequest,
    ProfileOut,
    RefreshRequest,
    RegisterRequest,
    TokenPairOut,
    UserOut,
)
from app.schemas.common import ApiResponse

router = APIRouter()


def _auth_data(result: AuthResult) -> AuthData:
    return AuthData(
        user=UserOut.model_validate(result.user),
        access_token=result.tokens.access_token,
        refresh_token=result.tokens.refresh_token,
    )


@router.post("/register", response_model=ApiResponse[AuthData], status_code=201)
@limit_auth
async def register(
    request: Request,
    body: RegisterRequest,
    auth_svc: Annotated[AuthService, Depends(get_auth_service_for_write)],
):
    """Register a new user (role user) and return it with a token pair."""
    result = await auth_svc.register(
        username=body.username, email=body.email, password=body.password
    )
    return ApiResponse(data=_auth_data(result), message="User registered successfully")


@router.post("/login", response_model=ApiResponse[AuthData])
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    auth_svc: Annotated[AuthService, Depends(get_auth_service)],
):
    """Authenticate with email and password; 401 on any mismatch."""
    result = await auth_svc.login(body.email, body.password)
    return ApiResponse(data=_auth_data(result), message="Login successful")


@router.post("/refresh", response_model=ApiResponse[TokenPairOut])
async def refresh_token(
    body: RefreshRequest,
    auth_svc: Annotated[AuthService, Depends(get_auth_service)],
):
    """Exchange a refresh token for a new access/refresh pair."""
    if not body.refresh_token:
        raise ValidationException("Refresh token required", field="refreshToken")
    tokens = await auth_svc.refresh(body.refresh_token)
    return ApiResponse(data=TokenPairOut.model_validate(tokens))


@router.get("/profile", response_model=ApiResponse[ProfileOut])
async def get_profile(
    current_user: Annotated[TokenClaims, Depends(get_current_user)],
):
    return ApiResponse(data=ProfileOut.model_validate(current_user))
