"""Authentication service implementation."""

from datetime import datetime, timedelta, timezone
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ...security import (
    blacklist_token,
    create_access_token,
    hash_password,
    needs_update,
    verify_password,
)
from ...security.password import generate_reset_token, hash_reset_token
from ..exceptions import AuthenticationError, ConflictError, InvalidInputError, NotFoundError
from ..logging import get_logger
from ..models.user import AuthProvider
from ..repositories.user_repository import UserRepository
from ..schemas.auth import (
    ForgotPasswordResponse,
    ResetPasswordRequest,
    SigninRequest,
    SignupRequest,
    SignupResponse,
    TokenResponse,
    UserResponse,
    UserUpdateRequest,
)
from .interfaces import IAuthService

logger = get_logger("services.auth")

FORGOT_PASSWORD_MESSAGE = "If an account exists for that email, a reset link has been sent"
INVALID_RESET_TOKEN_MESSAGE = "Password reset token is invalid or has expired"


class AuthService(IAuthService):
    """Authentication service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)
        self.settings = get_settings()

    async def signup(self, request: SignupRequest) -> SignupResponse:
        """Register new user."""
        if await self.user_repo.is_email_taken(request.email):
            raise ConflictError("User already exists", details={"email": request.email})

        user = await self.user_repo.create_user(
            {
                "email": request.email,
                "password_hash": hash_password(request.password),
                "first_name": request.first_name,
                "last_name": request.last_name,
                "auth_provider": AuthProvider.LOCAL.value,
                "is_active": True,
            }
        )
        logger.info(f"User {user.id} signed up")
        return SignupResponse(message="User signed up", id=user.id)

    async def signin(self, request: SigninRequest) -> TokenResponse:
        """Login user and return a JWT access token."""
        user = await self.user_repo.get_by_email(request.email)
        # same error for unknown email and wrong password
        if not user or not user.can_login() or not verify_password(
            request.password, user.password_hash
        ):
            raise AuthenticationError("Invalid credentials")

        if needs_update(user.password_hash):
            user = await self.user_repo.update_user(
                user.id, {"password_hash": hash_password(request.password)}
            )

        access_token = create_access_token(data={"sub": str(user.id)})
        logger.info(f"User {user.id} signed in")

        return TokenResponse(
            access_token=access_token,
            token_type="bearer",
            expires_in=self.settings.access_token_expire_minutes * 60,
            user=UserResponse.model_validate(user),
        )

    async def get_current_user(self, user_id: UUID) -> UserResponse:
        """Get user by ID."""
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User")
        return UserResponse.model_validate(user)

    async def update_user_profile(self, user_id: UUID, request: UserUpdateRequest) -> UserResponse:
        """Update user profile."""
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User")

        update_data = request.model_dump(exclude_unset=True)
        if update_data:
            user = await self.user_repo.update_user(user_id, update_data)
        return UserResponse.model_validate(user)

    async def logout_user(self, access_token: str) -> bool:
        """Logout user with Redis token blacklisting."""
        revoked = await blacklist_token(access_token)
        if not revoked:
            logger.warning("Logout without revocation, token stays valid until it expires")
        return revoked

    async def forgot_password(self, email: str) -> ForgotPasswordResponse:
        """Store a hashed reset token; the reply never says whether the email exists."""
        user = await self.user_repo.get_by_email(email)
        if not user or not user.can_login():
            return ForgotPasswordResponse(message=FORGOT_PASSWORD_MESSAGE)

        token = generate_reset_token()
        expires = datetime.now(timezone.utc) + timedelta(
            minutes=self.settings.password_reset_expire_minutes
        )
        await self.user_repo.update_user(
            user.id,
            {"reset_password_token_hash": hash_reset_token(token), "reset_password_expires": expires},
        )
        logger.info(f"Password reset requested for user {user.id}")
        return ForgotPasswordResponse(message=FORGOT_PASSWORD_MESSAGE, reset_token=token)

    async def verify_reset_token(self, token: str) -> bool:
        token_hash = hash_reset_token(token)
        user = await self.user_repo.get_by_reset_token_hash(token_hash)
        return bool(user and user.has_valid_reset_token(token_hash))

    async def reset_password(self, request: ResetPasswordRequest) -> None:
        """Consume a reset token and set the new password."""
        token_hash = hash_reset_token(request.token)
        user = await self.user_repo.get_by_reset_token_hash(token_hash)
        if not user or not user.has_valid_reset_token(token_hash):
            raise InvalidInputError(INVALID_RESET_TOKEN_MESSAGE)

        # single use
        user.clear_reset_token()
        await self.user_repo.update_user(user.id, {"password_hash": hash_password(request.password)})
        logger.info(f"Password reset completed for user {user.id}")
