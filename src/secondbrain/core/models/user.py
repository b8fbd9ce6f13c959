"""
User model for authentication.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel, utcnow

if TYPE_CHECKING:
    from .content import Content
    from .share_link import ShareLink
    from .tag import Tag


class AuthProvider(str, Enum):
    """How the account signs in."""

    LOCAL = "local"
    GOOGLE = "google"


class User(BaseModel):
    """User account - local credentials or an external OAuth identity."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    # optional for OAuth users
    password_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    google_id: Mapped[Optional[str]] = mapped_column(String(255), unique=True, nullable=True)
    auth_provider: Mapped[str] = mapped_column(
        String(20), default=AuthProvider.LOCAL.value, nullable=False
    )

    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    profile_picture: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_email_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # password reset, token stored hashed
    reset_password_token_hash: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    reset_password_expires: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # Relations
    contents: Mapped[List["Content"]] = relationship(
        "Content",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    tags: Mapped[List["Tag"]] = relationship(
        "Tag",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    share_link: Mapped[Optional["ShareLink"]] = relationship(
        "ShareLink",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("auth_provider IN ('local', 'google')", name="ck_users_auth_provider"),
        Index("idx_users_active", "is_active"),
    )

    def __repr__(self) -> str:
        return f"<User(email='{self.email}')>"

    @property
    def display_name(self) -> str:
        """Get display name."""
        full = " ".join(p for p in (self.first_name, self.last_name) if p)
        return full or self.email

    def can_login(self) -> bool:
        """Check if user can login with a password."""
        return self.is_active and self.password_hash is not None

    def has_valid_reset_token(self, token_hash: str) -> bool:
        """Check a hashed reset token against the stored one and its expiry."""
        if not self.reset_password_token_hash or self.reset_password_expires is None:
            return False
        if self.reset_password_token_hash != token_hash:
            return False
        expires = self.reset_password_expires
        if expires.tzinfo is None:
            # SQLite drops tzinfo
            expires = expires.replace(tzinfo=timezone.utc)
        return utcnow() < expires

    def clear_reset_token(self) -> None:
        self.reset_password_token_hash = None
        self.reset_password_expires = None
