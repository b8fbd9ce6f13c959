"""Tag service implementation."""

from typing import Iterable, List
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import ConflictError
from ..logging import get_logger
from ..models.tag import Tag
from ..policy import ensure_owner, ensure_tag_title_available
from ..repositories.tag_repository import TagRepository
from ..schemas.tags import TagCreate, TagResponse, TagUpdate
from .interfaces import ITagService

logger = get_logger("services.tags")


class TagService(ITagService):
    """Tag service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.tag_repo = TagRepository(session)

    async def create_tag(self, user_id: UUID, request: TagCreate) -> TagResponse:
        """Create a personal tag, unless the title exists globally or for this user."""
        title = Tag.normalize_title(request.title)
        ensure_tag_title_available(await self.tag_repo.find_in_scope(title, user_id), title)

        try:
            tag = await self.tag_repo.create_tag(
                {"title": title, "owner_id": user_id, "is_global": False}
            )
        except IntegrityError:
            # lost a race against an identical insert
            await self.session.rollback()
            raise ConflictError("Tag already exists", details={"title": title, "scope": "your"})

        logger.info(f"Tag '{title}' created for user {user_id}")
        return TagResponse.model_validate(tag)

    async def list_tags(self, user_id: UUID) -> List[TagResponse]:
        tags = await self.tag_repo.list_visible(user_id)
        return [TagResponse.model_validate(tag) for tag in tags]

    async def update_tag(self, tag_id: UUID, user_id: UUID, request: TagUpdate) -> TagResponse:
        """Rename an owned tag."""
        tag = ensure_owner(await self.tag_repo.get_by_id(tag_id), user_id, "Tag")
        title = Tag.normalize_title(request.title)

        if title != tag.title:
            existing = await self.tag_repo.find_in_scope(title, user_id, exclude_id=tag.id)
            ensure_tag_title_available(existing, title)
            try:
                tag = await self.tag_repo.update_tag(tag, {"title": title})
            except IntegrityError:
                await self.session.rollback()
                raise ConflictError(
                    "Tag already exists", details={"title": title, "scope": "your"}
                )

        return TagResponse.model_validate(tag)

    async def delete_tag(self, tag_id: UUID, user_id: UUID) -> None:
        """Delete an owned tag; content that referenced it just loses the tag."""
        tag = ensure_owner(await self.tag_repo.get_by_id(tag_id), user_id, "Tag")
        await self.tag_repo.delete_tag(tag)
        logger.info(f"Tag {tag_id} deleted by user {user_id}")

    async def seed_global_tags(self, titles: Iterable[str]) -> int:
        """Insert missing global tags, returns how many were added.

        Blank titles are ignored. A title some user already owns, in any case,
        is skipped and logged.
        """
        existing = {title.lower() for title in await self.tag_repo.list_global_titles()}
        added = 0
        for raw in titles:
            if not raw or not raw.strip():
                continue
            title = Tag.normalize_title(raw)
            if title.lower() in existing:
                continue
            if await self.tag_repo.is_owned_title(title):
                logger.warning(f"Global tag '{title}' not seeded, a user already owns it")
                continue
            await self.tag_repo.create_tag({"title": title, "owner_id": None, "is_global": True})
            existing.add(title.lower())
            added += 1

        if added:
            logger.info(f"Seeded {added} global tags")
        return added
