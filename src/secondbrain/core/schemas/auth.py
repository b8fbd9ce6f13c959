"""
Authentication and account schemas.

These schemas define the API contracts for signup, signin, profile and
password reset.
"""

import re
import uuid
from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, EmailStr, Field, field_validator

from .common import CamelModel

# 8-20 chars, one lower, one upper, one digit, one special
PASSWORD_PATTERN = re.compile(
    r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,20}$"
)
PASSWORD_RULES = (
    "Password must be 8-20 characters and contain at least one uppercase letter, "
    "one lowercase letter, one number and one special character (@$!%*?&)"
)


def _check_password(value: str) -> str:
    if not PASSWORD_PATTERN.match(value):
        raise ValueError(PASSWORD_RULES)
    return value


class SignupRequest(CamelModel):
    """User signup request schema."""

    email: EmailStr = Field(description="Account email")
    password: str = Field(description="Account password")
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password(v)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "ada@example.com",
                "password": "Secur3P@ss",
                "firstName": "Ada",
            }
        }
    )


class SignupResponse(CamelModel):
    message: str
    id: uuid.UUID


class SigninRequest(CamelModel):
    """User signin request schema."""

    email: EmailStr
    password: str = Field(min_length=1, max_length=128)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserResponse(CamelModel):
    """User information response schema."""

    id: uuid.UUID
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_picture: Optional[str] = None
    auth_provider: str
    is_email_verified: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


class TokenResponse(CamelModel):
    """JWT token response schema."""

    access_token: str = Field(description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(description="Token lifetime in seconds")
    user: UserResponse


class UserUpdateRequest(CamelModel):
    """Profile update request schema."""

    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    profile_picture: Optional[str] = Field(default=None, max_length=500)


class ForgotPasswordRequest(CamelModel):
    email: EmailStr


class ForgotPasswordResponse(CamelModel):
    message: str
    # only populated in debug mode, there is no email delivery
    reset_token: Optional[str] = None


class ResetPasswordRequest(CamelModel):
    """Password reset with a previously issued token."""

    token: str = Field(min_length=1, max_length=128)
    password: str

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password(v)
