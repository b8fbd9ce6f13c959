# Public brain share link, one per user
import secrets
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel
from .types import GUID

if TYPE_CHECKING:
    from .user import User


class ShareLink(BaseModel):
    """Per-user (token, public flag) record gating anonymous brain access.

    The token never changes once created; revoking access means setting
    ``is_public`` to False.
    """

    __tablename__ = "share_links"

    token: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    is_public: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    user: Mapped["User"] = relationship("User", back_populates="share_link")

    def __repr__(self) -> str:
        token_preview = f"{self.token[:4]}..." if self.token else "None"
        return f"<ShareLink(user_id={self.user_id}, token={token_preview}, public={self.is_public})>"

    @classmethod
    def generate_token(cls, nbytes: int = 16) -> str:
        """Generate an unguessable hex token from the OS CSPRNG."""
        return secrets.token_hex(nbytes)

    @classmethod
    def create_for_user(cls, user_id: uuid.UUID, nbytes: int = 16) -> "ShareLink":
        """New link for a user, public from the start."""
        return cls(token=cls.generate_token(nbytes), user_id=user_id, is_public=True)
