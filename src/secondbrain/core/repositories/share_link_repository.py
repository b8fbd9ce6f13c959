"""Share link repository for database operations."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import and_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.base import utcnow
from ..models.share_link import ShareLink

logger = logging.getLogger(__name__)


class ShareLinkRepository:
    """Repository for share link database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_token(self, token: str) -> Optional[ShareLink]:
        stmt = select(ShareLink).where(ShareLink.token == token)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_user(self, user_id: UUID) -> Optional[ShareLink]:
        stmt = select(ShareLink).where(ShareLink.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_for_user(self, user_id: UUID, nbytes: int = 16) -> tuple[ShareLink, bool]:
        """Insert a public link for the user.

        Returns ``(link, created)``. When a concurrent request inserted the
        user's link first, the unique index on ``user_id`` rejects ours and
        the existing record is returned with ``created=False``.
        """
        link = ShareLink.create_for_user(user_id, nbytes)
        self.session.add(link)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            existing = await self.get_by_user(user_id)
            if existing is None:
                # token collision, not a concurrent insert
                raise
            logger.info(f"Share link for user {user_id} created concurrently, reusing it")
            return existing, False

        await self.session.refresh(link)
        return link, True

    async def compare_and_set_public(self, link: ShareLink, expected: bool, value: bool) -> bool:
        """Set ``is_public`` to ``value`` only if it still equals ``expected``.

        Returns whether the row was changed. ``link`` is reloaded either way so
        it reflects the stored state.
        """
        stmt = (
            update(ShareLink)
            .where(and_(ShareLink.id == link.id, ShareLink.is_public.is_(expected)))
            .values(is_public=value, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        await self.session.refresh(link)
        return result.rowcount == 1
