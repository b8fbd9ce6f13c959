# Content model - a bookmarked link with notes and tags
import uuid
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel
from .tag import content_tags
from .types import GUID

if TYPE_CHECKING:
    from .tag import Tag
    from .user import User


class ContentType(str, Enum):
    """Kinds of content a user can save."""

    IMAGE = "image"
    VIDEO = "video"
    ARTICLE = "article"
    AUDIO = "audio"


class Content(BaseModel):
    """Bookmarked item owned by one user."""

    __tablename__ = "content"

    link: Mapped[str] = mapped_column(String(2048), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # markdown

    # item-level gate for the public brain
    is_shared: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    owner_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    owner: Mapped["User"] = relationship("User", back_populates="contents")

    tags: Mapped[List["Tag"]] = relationship(
        "Tag",
        secondary=content_tags,
        lazy="selectin",
        order_by="Tag.title",
        doc="Tags attached to this content",
    )

    __table_args__ = (
        CheckConstraint(
            "type IN ('image', 'video', 'article', 'audio')", name="ck_content_type"
        ),
        CheckConstraint("length(title) <= 200", name="ck_content_title_len"),
        Index("idx_content_owner_id", "owner_id"),
        Index("idx_content_owner_shared", "owner_id", "is_shared"),
        Index("idx_content_owner_created", "owner_id", "created_at"),
    )

    def __repr__(self) -> str:
        truncated = self.title if len(self.title) <= 30 else (self.title[:30] + "...")
        return f"<Content(title='{truncated}', owner_id={self.owner_id})>"

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        """Check if this content is owned by the specified user."""
        return self.owner_id == user_id

    @property
    def tag_titles(self) -> List[str]:
        return [tag.title for tag in self.tags]
