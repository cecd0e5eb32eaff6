"""
Authentication Handler

Handles registration, login, token refresh, logout and password reset.

ARCHITECTURE:
=============
    Handler → Service → Repository → Model
          ↘ Utils  ↗

Handlers should ONLY:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

Business logic belongs in the SERVICE layer, not here. Domain errors raised
by the service are turned into the error envelope by the exception
handlers, so nothing here catches them.

DEPENDENCY INJECTION:
=====================
Services are injected via FastAPI's Depends() mechanism, one instance per
request, sharing the request's database session.
"""

from fastapi import APIRouter, Depends, status

from studyhub.api.dependencies import CurrentUser
from studyhub.api.dependencies.services import get_auth_service
from studyhub.shared.models.user import User
from studyhub.shared.schemas.common import ApiResponse
from studyhub.shared.schemas.user import (
    AuthResponse,
    ForgotPasswordRequest,
    RefreshTokenRequest,
    ResetPasswordRequest,
    UserCreate,
    UserLogin,
    UserResponse,
)
from studyhub.shared.services.auth_service import AuthService, TokenPair


router = APIRouter()


def _auth_response(user: User, tokens: TokenPair) -> AuthResponse:
    return AuthResponse(
        user=UserResponse.model_validate(user),
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        token_type=tokens.token_type,
        expires_in=tokens.expires_in,
    )


@router.post(
    "/register",
    response_model=ApiResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED,
)
async def register(
    user_data: UserCreate,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new user.

    Creates a new user account and returns an access/refresh token pair.

    Raises:
        400: If email already registered
    """
    user, tokens = await auth_service.register_user(
        full_name=user_data.full_name,
        email=user_data.email,
        password=user_data.password,
    )
    return ApiResponse(message="User registered successfully", data=_auth_response(user, tokens))


@router.post("/login", response_model=ApiResponse[AuthResponse])
async def login(
    credentials: UserLogin,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate user and return tokens.

    Raises:
        401: If credentials are invalid
    """
    user, tokens = await auth_service.login_user(
        email=credentials.email,
        password=credentials.password,
    )
    return ApiResponse(message="Login successful", data=_auth_response(user, tokens))


@router.post("/refresh", response_model=ApiResponse[AuthResponse])
async def refresh(
    body: RefreshTokenRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Exchange a refresh token for a new pair. The old refresh token stops working.

    Raises:
        401: If the token is invalid, expired or already rotated
    """
    user, tokens = await auth_service.refresh_tokens(body.refresh_token)
    return ApiResponse(message="Token refreshed successfully", data=_auth_response(user, tokens))


@router.post("/logout", response_model=ApiResponse[None])
async def logout(
    current_user: CurrentUser,
    auth_service: AuthService = Depends(get_auth_service),
):
    await auth_service.logout_user(current_user)
    return ApiResponse(message="Logged out successfully")


@router.post("/forgot-password", response_model=ApiResponse[None])
async def forgot_password(
    body: ForgotPasswordRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Start a password reset.

    Always answers with the same success message, whether or not the email
    belongs to an account.
    """
    await auth_service.forgot_password(body.email)
    return ApiResponse(
        message="If an account exists with this email, a password reset link has been sent",
    )


@router.post("/reset-password", response_model=ApiResponse[None])
async def reset_password(
    body: ResetPasswordRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Set a new password using the emailed token.

    Raises:
        400: If the token is invalid or expired
    """
    await auth_service.reset_password(body.token, body.password)
    return ApiResponse(message="Password reset successfully")


@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_me(current_user: CurrentUser):
    return ApiResponse(
        message="User retrieved successfully",
        data=UserResponse.model_validate(current_user),
    )
