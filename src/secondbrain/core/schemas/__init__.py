"""
Pydantic schemas for validating and documenting API requests and responses.

This package exposes the Pydantic models used across the application to
define input/output contracts for accounts, tags, content, brain sharing,
and common responses (error and health formats).
"""

from .auth import (
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
from .brain import ShareStatusResponse, ShareToggleRequest, ShareToggleResponse
from .common import CamelModel, ErrorResponse, HealthCheckResponse, MessageResponse
from .content import (
    ContentCreate,
    ContentResponse,
    ContentShareRequest,
    ContentUpdate,
    LinkValidationRequest,
    ShareAllResponse,
)
from .tags import TagCreate, TagResponse, TagUpdate

__all__ = [
    # Account schemas
    "SignupRequest",
    "SignupResponse",
    "SigninRequest",
    "TokenResponse",
    "UserResponse",
    "UserUpdateRequest",
    "ForgotPasswordRequest",
    "ForgotPasswordResponse",
    "ResetPasswordRequest",
    # Tag schemas
    "TagCreate",
    "TagUpdate",
    "TagResponse",
    # Content schemas
    "ContentCreate",
    "ContentUpdate",
    "ContentResponse",
    "ContentShareRequest",
    "ShareAllResponse",
    "LinkValidationRequest",
    # Brain schemas
    "ShareToggleRequest",
    "ShareToggleResponse",
    "ShareStatusResponse",
    # Common schemas
    "CamelModel",
    "ErrorResponse",
    "MessageResponse",
    "HealthCheckResponse",
]
