"""
Service interfaces for the Second Brain application.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from uuid import UUID

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
from ..schemas.brain import ShareStatusResponse, ShareToggleResponse
from ..schemas.common import HealthCheckResponse
from ..schemas.content import ContentCreate, ContentResponse, ContentUpdate, ShareAllResponse
from ..schemas.tags import TagCreate, TagResponse, TagUpdate


class IAuthService(ABC):
    """Account management."""

    @abstractmethod
    async def signup(self, request: SignupRequest) -> SignupResponse:
        """Register new user."""

    @abstractmethod
    async def signin(self, request: SigninRequest) -> TokenResponse:
        """Check credentials and issue an access token."""

    @abstractmethod
    async def get_current_user(self, user_id: UUID) -> UserResponse:
        """Get user by ID."""

    @abstractmethod
    async def update_user_profile(self, user_id: UUID, request: UserUpdateRequest) -> UserResponse:
        """Update user profile."""

    @abstractmethod
    async def logout_user(self, access_token: str) -> bool:
        """Revoke the access token."""

    @abstractmethod
    async def forgot_password(self, email: str) -> ForgotPasswordResponse:
        """Issue a password reset token if the account exists."""

    @abstractmethod
    async def verify_reset_token(self, token: str) -> bool:
        """Check a reset token without consuming it."""

    @abstractmethod
    async def reset_password(self, request: ResetPasswordRequest) -> None:
        """Consume a reset token and set the new password."""


class ITagService(ABC):
    """Tag catalog: global tags plus per-user tags."""

    @abstractmethod
    async def create_tag(self, user_id: UUID, request: TagCreate) -> TagResponse:
        """Create a personal tag."""

    @abstractmethod
    async def list_tags(self, user_id: UUID) -> List[TagResponse]:
        """Global tags plus the user's own."""

    @abstractmethod
    async def update_tag(self, tag_id: UUID, user_id: UUID, request: TagUpdate) -> TagResponse:
        """Rename an owned tag."""

    @abstractmethod
    async def delete_tag(self, tag_id: UUID, user_id: UUID) -> None:
        """Delete an owned tag."""


class IContentService(ABC):
    """Content CRUD and item-level sharing."""

    @abstractmethod
    async def create_content(self, user_id: UUID, request: ContentCreate) -> ContentResponse:
        """Create content owned by the user."""

    @abstractmethod
    async def list_content(self, user_id: UUID) -> List[ContentResponse]:
        """All of the user's content."""

    @abstractmethod
    async def get_content(self, content_id: UUID, user_id: UUID) -> ContentResponse:
        """Get owned content by ID."""

    @abstractmethod
    async def update_content(
        self, content_id: UUID, user_id: UUID, request: ContentUpdate
    ) -> ContentResponse:
        """Update owned content."""

    @abstractmethod
    async def delete_content(self, content_id: UUID, user_id: UUID) -> None:
        """Delete owned content."""

    @abstractmethod
    async def set_shared(self, content_id: UUID, user_id: UUID, is_shared: bool) -> ContentResponse:
        """Include or exclude one item from the public brain."""

    @abstractmethod
    async def share_all(self, user_id: UUID) -> ShareAllResponse:
        """Mark all of the user's content as shared."""

    @abstractmethod
    async def validate_links(self, links: List[str]) -> Dict[str, bool]:
        """Check that each URL answers."""


class IBrainService(ABC):
    """Per-user public brain link."""

    @abstractmethod
    async def toggle_sharing(
        self, user_id: UUID, base_url: str, is_public: Optional[bool] = None
    ) -> ShareToggleResponse:
        """Flip (or set) the brain's public state, creating the link on first use."""

    @abstractmethod
    async def get_status(self, user_id: UUID, base_url: str) -> ShareStatusResponse:
        """Current public state and link."""

    @abstractmethod
    async def resolve_brain(self, token: str) -> List[ContentResponse]:
        """Anonymous read of a public brain's shared content."""


class IHealthService(ABC):
    """Health monitoring."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status."""

    @abstractmethod
    async def check_database_health(self) -> Dict[str, Any]:
        """Check DB connection."""

    @abstractmethod
    async def check_redis_health(self) -> Dict[str, Any]:
        """Check Redis connection."""
