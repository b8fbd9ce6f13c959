"""Content repository for database operations."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..models.base import utcnow
from ..models.content import Content
from ..models.tag import Tag


class ContentRepository:
    """Repository for content database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_content(self, content_data: dict, tags: Optional[List[Tag]] = None) -> Content:
        """Create new content with its tags."""
        content = Content(**content_data)
        content.tags = list(tags or [])
        self.session.add(content)
        await self.session.commit()
        await self.session.refresh(content, ["tags"])
        return content

    async def get_by_id(self, content_id: UUID) -> Optional[Content]:
        """Get content by ID with tags."""
        stmt = select(Content).options(selectinload(Content.tags)).where(Content.id == content_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_owner(self, user_id: UUID, shared_only: bool = False) -> List[Content]:
        """List a user's content, oldest first."""
        stmt = select(Content).options(selectinload(Content.tags)).where(Content.owner_id == user_id)
        if shared_only:
            stmt = stmt.where(Content.is_shared.is_(True))
        stmt = stmt.order_by(Content.created_at, Content.id)
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def update_content(
        self, content: Content, update_data: dict, tags: Optional[List[Tag]] = None
    ) -> Content:
        """Apply field updates; ``tags`` replaces the tag set when given."""
        for key, value in update_data.items():
            setattr(content, key, value)
        if tags is not None:
            content.tags = list(tags)

        await self.session.commit()
        await self.session.refresh(content, ["tags"])
        return content

    async def delete_content(self, content: Content) -> None:
        """Delete the content record (tag associations go with it)."""
        await self.session.delete(content)
        await self.session.commit()

    async def set_shared(self, content: Content, is_shared: bool) -> Content:
        content.is_shared = is_shared
        await self.session.commit()
        return content

    async def share_all(self, user_id: UUID) -> int:
        """Mark every content item of the user as shared; returns rows matched."""
        stmt = (
            update(Content)
            .where(and_(Content.owner_id == user_id, Content.is_shared.is_(False)))
            .values(is_shared=True, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount or 0
