# Tag models for organizing content
import uuid
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    String,
    Table,
    event,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel
from .types import GUID

if TYPE_CHECKING:
    from .user import User


# Content <-> Tag association, rows go away with either side
content_tags = Table(
    "content_tags",
    BaseModel.metadata,
    Column("content_id", GUID(), ForeignKey("content.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", GUID(), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
    Index("idx_content_tags_tag_id", "tag_id"),
)


class Tag(BaseModel):
    """Label for content, either global or owned by one user."""

    __tablename__ = "tags"

    title: Mapped[str] = mapped_column(String(50), nullable=False)
    owner_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=True
    )
    is_global: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    owner: Mapped[Optional["User"]] = relationship("User", back_populates="tags")

    __table_args__ = (
        CheckConstraint("(owner_id IS NULL) = is_global", name="ck_tags_global_has_no_owner"),
        CheckConstraint("length(title) <= 50", name="ck_tags_title_len"),
        Index("idx_tags_owner_id", "owner_id"),
    )

    def __repr__(self) -> str:
        scope = "global" if self.is_global else f"owner_id={self.owner_id}"
        return f"<Tag(title='{self.title}', {scope})>"

    @classmethod
    def normalize_title(cls, title: str) -> str:
        """Collapse whitespace, case is kept as typed."""
        clean = " ".join(title.split())
        if not clean:
            raise ValueError("Tag title cannot be empty")
        return clean

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        return self.owner_id is not None and self.owner_id == user_id

    def is_visible_to(self, user_id: uuid.UUID) -> bool:
        """Global tags are visible to everyone, user tags to their owner."""
        return self.is_global or self.is_owned_by(user_id)


# Titles are unique per owner and among global tags, ignoring case
Index(
    "uq_tags_owner_title",
    Tag.owner_id,
    func.lower(Tag.title),
    unique=True,
    postgresql_where=text("owner_id IS NOT NULL"),
    sqlite_where=text("owner_id IS NOT NULL"),
)
Index(
    "uq_tags_global_title",
    func.lower(Tag.title),
    unique=True,
    postgresql_where=text("owner_id IS NULL"),
    sqlite_where=text("owner_id IS NULL"),
)


# Always normalise the title before INSERT/UPDATE
@event.listens_for(Tag, "before_insert", propagate=True)
def _normalize_tag_title_before_insert(mapper, connection, target: Tag):
    target.title = Tag.normalize_title(target.title)


@event.listens_for(Tag, "before_update", propagate=True)
def _normalize_tag_title_before_update(mapper, connection, target: Tag):
    target.title = Tag.normalize_title(target.title)
