"""Brain sharing service implementation.

A user's brain is published through a single share link. The first toggle
creates the link in the public state; later toggles flip ``is_public`` on the
same record, so the token (and therefore the URL) never changes. Anonymous
readers resolve the token and see only items the owner marked as shared.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ..logging import get_logger, mask_token
from ..models.share_link import ShareLink
from ..policy import is_publicly_visible, resolve_public_link
from ..repositories.content_repository import ContentRepository
from ..repositories.share_link_repository import ShareLinkRepository
from ..schemas.brain import ShareStatusResponse, ShareToggleResponse
from ..schemas.content import ContentResponse
from .interfaces import IBrainService

logger = get_logger("services.brain")

SHARING_ENABLED = "Sharing enabled"
SHARING_DISABLED = "Sharing disabled"


class BrainService(IBrainService):
    """Brain sharing service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.link_repo = ShareLinkRepository(session)
        self.content_repo = ContentRepository(session)
        self.settings = get_settings()

    def build_link(self, base_url: str, token: str) -> str:
        """Public URL of a brain; ``public_base_url`` wins over the request's host."""
        base = (self.settings.public_base_url or base_url).rstrip("/")
        return f"{base}{self.settings.api_prefix}/brain/{token}"

    async def toggle_sharing(
        self, user_id: UUID, base_url: str, is_public: Optional[bool] = None
    ) -> ShareToggleResponse:
        """Flip the brain's public state, or set it when ``is_public`` is given.

        The flip is a compare-and-set on the stored state: when two toggles
        race, exactly one of them flips and the other reports the state it
        found after losing, so two concurrent toggles never cancel out.
        """
        link = await self.link_repo.get_by_user(user_id)

        if link is None:
            if is_public is False:
                # nothing to disable, and no link is created for it
                return self._response(None, base_url)
            link, created = await self.link_repo.create_for_user(
                user_id, self.settings.share_token_bytes
            )
            if created:
                logger.info(
                    "Share link created",
                    extra={"user_id": str(user_id), "token": mask_token(link.token)},
                )
                return self._response(link, base_url)
            if is_public is None:
                # a concurrent first toggle created it, that was our flip too
                return self._response(link, base_url)

        current = link.is_public
        target = (not current) if is_public is None else is_public
        if target == current:
            return self._response(link, base_url)

        changed = await self.link_repo.compare_and_set_public(link, current, target)
        state = "public" if link.is_public else "private"
        if changed:
            logger.info(
                "Share link toggled",
                extra={"user_id": str(user_id), "token": mask_token(link.token), "state": state},
            )
        else:
            logger.info(
                "Concurrent toggle lost, keeping current state",
                extra={"user_id": str(user_id), "token": mask_token(link.token), "state": state},
            )
        return self._response(link, base_url)

    async def get_status(self, user_id: UUID, base_url: str) -> ShareStatusResponse:
        """A user without a link reports private with no link."""
        link = await self.link_repo.get_by_user(user_id)
        if link is None or not link.is_public:
            return ShareStatusResponse(is_public=False, link=None)
        return ShareStatusResponse(is_public=True, link=self.build_link(base_url, link.token))

    async def resolve_brain(self, token: str) -> List[ContentResponse]:
        """Shared content of a public brain, oldest first.

        Absent and private tokens raise the same NotFoundError.
        """
        link = resolve_public_link(await self.link_repo.get_by_token(token))
        contents = await self.content_repo.list_by_owner(link.user_id, shared_only=True)
        return [
            ContentResponse.model_validate(content)
            for content in contents
            if is_publicly_visible(link, content)
        ]

    def _response(self, link: Optional[ShareLink], base_url: str) -> ShareToggleResponse:
        if link is not None and link.is_public:
            return ShareToggleResponse(
                message=SHARING_ENABLED,
                link=self.build_link(base_url, link.token),
                is_public=True,
            )
        return ShareToggleResponse(message=SHARING_DISABLED, link=None, is_public=False)
