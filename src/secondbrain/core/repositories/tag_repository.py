"""Tag repository for database operations."""

from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import and_, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.tag import Tag, content_tags


class TagRepository:
    """Repository for tag database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_tag(self, tag_data: dict) -> Tag:
        """Create new tag."""
        tag = Tag(**tag_data)
        self.session.add(tag)
        await self.session.commit()
        await self.session.refresh(tag)
        return tag

    async def get_by_id(self, tag_id: UUID) -> Optional[Tag]:
        stmt = select(Tag).where(Tag.id == tag_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_in_scope(
        self, title: str, user_id: Optional[UUID], exclude_id: Optional[UUID] = None
    ) -> Optional[Tag]:
        """Find a tag with this title, ignoring case, that is global or owned by ``user_id``."""
        scope = Tag.is_global.is_(True)
        if user_id is not None:
            scope = or_(Tag.owner_id == user_id, scope)

        stmt = select(Tag).where(and_(func.lower(Tag.title) == title.lower(), scope))
        if exclude_id is not None:
            stmt = stmt.where(Tag.id != exclude_id)
        result = await self.session.execute(stmt.limit(1))
        return result.scalars().first()

    async def list_visible(self, user_id: UUID) -> List[Tag]:
        """User's own tags plus all global tags."""
        stmt = (
            select(Tag)
            .where(or_(Tag.owner_id == user_id, Tag.is_global.is_(True)))
            .order_by(Tag.is_global.desc(), func.lower(Tag.title))
        )
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def get_visible_by_ids(self, user_id: UUID, tag_ids: Iterable[UUID]) -> List[Tag]:
        """Tags from ``tag_ids`` that ``user_id`` may attach to content."""
        ids = set(tag_ids)
        if not ids:
            return []
        stmt = select(Tag).where(
            and_(Tag.id.in_(ids), or_(Tag.owner_id == user_id, Tag.is_global.is_(True)))
        )
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def update_tag(self, tag: Tag, update_data: dict) -> Tag:
        for key, value in update_data.items():
            setattr(tag, key, value)
        await self.session.commit()
        await self.session.refresh(tag)
        return tag

    async def delete_tag(self, tag: Tag) -> None:
        """Delete tag and detach it from all content."""
        await self.session.execute(delete(content_tags).where(content_tags.c.tag_id == tag.id))
        await self.session.execute(delete(Tag).where(Tag.id == tag.id))
        await self.session.commit()

    async def list_global_titles(self) -> List[str]:
        stmt = select(Tag.title).where(Tag.is_global.is_(True))
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def is_owned_title(self, title: str) -> bool:
        """Whether any user owns a tag with this title, ignoring case."""
        stmt = select(Tag.id).where(
            and_(Tag.owner_id.is_not(None), func.lower(Tag.title) == title.lower())
        )
        result = await self.session.execute(stmt.limit(1))
        return result.first() is not None
