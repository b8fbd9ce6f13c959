"""Account API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import get_settings
from ..core.schemas.auth import (
    ForgotPasswordRequest,
    ForgotPasswordResponse,
    ResetPasswordRequest,
    SigninRequest,
    SignupRequest,
    SignupResponse,
    TokenResponse,
    UserResponse,
    UserUpdateRequest,
)
from ..core.schemas.common import MessageResponse
from ..core.services import AuthService
from ..database import get_db_session
from ..middleware.auth import get_access_token, get_current_user_id

router = APIRouter(tags=["accounts"])


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(request: SignupRequest, session: AsyncSession = Depends(get_db_session)):
    """Register a new user."""
    auth_service = AuthService(session)
    return await auth_service.signup(request)


@router.post("/signin", response_model=TokenResponse)
async def signin(request: SigninRequest, session: AsyncSession = Depends(get_db_session)):
    """Login user and get a JWT access token."""
    auth_service = AuthService(session)
    return await auth_service.signin(request)


@router.get("/me", response_model=UserResponse)
async def get_current_user(
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Get current user profile."""
    auth_service = AuthService(session)
    return await auth_service.get_current_user(current_user_id)


@router.put("/me", response_model=UserResponse)
async def update_profile(
    request: UserUpdateRequest,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Update user profile."""
    auth_service = AuthService(session)
    return await auth_service.update_user_profile(current_user_id, request)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    access_token: str = Depends(get_access_token),
    session: AsyncSession = Depends(get_db_session),
):
    """Revoke the current access token."""
    auth_service = AuthService(session)
    await auth_service.logout_user(access_token)
    return MessageResponse(message="Logged out successfully")


@router.post("/forgot-password", response_model=ForgotPasswordResponse)
async def forgot_password(
    request: ForgotPasswordRequest, session: AsyncSession = Depends(get_db_session)
):
    """Issue a password reset token.

    There is no mail delivery; the token is only returned when running in
    debug mode.
    """
    auth_service = AuthService(session)
    response = await auth_service.forgot_password(request.email)
    if not get_settings().debug:
        response.reset_token = None
    return response


@router.get("/verify-reset-token/{token}")
async def verify_reset_token(token: str, session: AsyncSession = Depends(get_db_session)):
    auth_service = AuthService(session)
    return {"valid": await auth_service.verify_reset_token(token)}


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    request: ResetPasswordRequest, session: AsyncSession = Depends(get_db_session)
):
    """Set a new password with a reset token."""
    auth_service = AuthService(session)
    await auth_service.reset_password(request)
    return MessageResponse(message="Password has been reset")
