"""Content service implementation."""

import asyncio
import ipaddress
import re
import socket
from typing import Dict, List, Optional
from urllib.parse import urlsplit
from uuid import UUID

import aiohttp
from sqlalchemy.ext.asyncio import AsyncSession

from ..logging import get_logger
from ..models.content import Content
from ..models.tag import Tag
from ..policy import ensure_owner, ensure_tags_resolved
from ..repositories.content_repository import ContentRepository
from ..repositories.tag_repository import TagRepository
from ..schemas.content import ContentCreate, ContentResponse, ContentUpdate, ShareAllResponse
from .interfaces import IContentService

logger = get_logger("services.content")

URL_PATTERN = re.compile(r"^https?://[^\s/$.?#].[^\s]*$", re.IGNORECASE)
LINK_CHECK_TIMEOUT = 5
BLOCKED_HOST_SUFFIXES = (".localhost", ".local", ".internal")


async def resolve_host(host: str) -> List[str]:
    """Addresses `host` resolves to, empty when it does not resolve."""
    loop = asyncio.get_running_loop()
    try:
        infos = await loop.getaddrinfo(host, None, type=socket.SOCK_STREAM)
    except socket.gaierror:
        return []
    return [info[4][0] for info in infos]


async def is_public_host(host: Optional[str]) -> bool:
    """True when every address of `host` is globally routable."""
    if not host:
        return False
    host = host.rstrip(".").lower()
    if host == "localhost" or host.endswith(BLOCKED_HOST_SUFFIXES):
        return False
    try:
        addresses = [ipaddress.ip_address(host)]
    except ValueError:
        addresses = [ipaddress.ip_address(a.split("%")[0]) for a in await resolve_host(host)]
    return bool(addresses) and all(addr.is_global for addr in addresses)


class ContentService(IContentService):
    """Content service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.content_repo = ContentRepository(session)
        self.tag_repo = TagRepository(session)

    async def create_content(self, user_id: UUID, request: ContentCreate) -> ContentResponse:
        """Create content owned by the user; every tag must be visible to them."""
        tags = await self._resolve_tags(user_id, request.tags)
        content = await self.content_repo.create_content(
            {
                "title": request.title,
                "link": request.link,
                "type": request.type.value,
                "notes": request.notes,
                "is_shared": request.is_shared,
                "owner_id": user_id,
            },
            tags,
        )
        logger.info(f"Content {content.id} created by user {user_id}")
        return self._to_response(content)

    async def list_content(self, user_id: UUID) -> List[ContentResponse]:
        contents = await self.content_repo.list_by_owner(user_id)
        return [self._to_response(content) for content in contents]

    async def get_content(self, content_id: UUID, user_id: UUID) -> ContentResponse:
        content = ensure_owner(await self.content_repo.get_by_id(content_id), user_id, "Content")
        return self._to_response(content)

    async def update_content(
        self, content_id: UUID, user_id: UUID, request: ContentUpdate
    ) -> ContentResponse:
        """Update owned content; ``tags`` replaces the whole tag set when sent."""
        content = ensure_owner(await self.content_repo.get_by_id(content_id), user_id, "Content")

        update_data = request.model_dump(exclude_unset=True, exclude={"tags"})
        # explicit nulls on required columns are ignored
        for field in ("title", "link", "type", "is_shared"):
            if field in update_data and update_data[field] is None:
                update_data.pop(field)
        if update_data.get("type") is not None:
            update_data["type"] = request.type.value

        tags: Optional[List[Tag]] = None
        if "tags" in request.model_fields_set and request.tags is not None:
            tags = await self._resolve_tags(user_id, request.tags)

        content = await self.content_repo.update_content(content, update_data, tags)
        return self._to_response(content)

    async def delete_content(self, content_id: UUID, user_id: UUID) -> None:
        """Delete owned content."""
        content = ensure_owner(await self.content_repo.get_by_id(content_id), user_id, "Content")
        await self.content_repo.delete_content(content)
        logger.info(f"Content {content_id} deleted by user {user_id}")

    async def set_shared(self, content_id: UUID, user_id: UUID, is_shared: bool) -> ContentResponse:
        content = ensure_owner(await self.content_repo.get_by_id(content_id), user_id, "Content")
        if content.is_shared != is_shared:
            content = await self.content_repo.set_shared(content, is_shared)
        return self._to_response(content)

    async def share_all(self, user_id: UUID) -> ShareAllResponse:
        """Mark every item as shared; items already shared are not counted."""
        updated = await self.content_repo.share_all(user_id)
        logger.info("Bulk share", extra={"user_id": str(user_id), "updated_count": updated})
        return ShareAllResponse(message="All content shared", updated_count=updated)

    async def validate_links(self, links: List[str]) -> Dict[str, bool]:
        """Check each public URL answers with a 2xx/3xx status."""
        timeout = aiohttp.ClientTimeout(total=LINK_CHECK_TIMEOUT)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            checks = await asyncio.gather(*(self._check_link(session, url) for url in links))
        return dict(zip(links, checks))

    async def _check_link(self, session, url: str) -> bool:
        if not URL_PATTERN.match(url):
            return False
        # only globally routable hosts are fetched
        if not await is_public_host(urlsplit(url).hostname):
            logger.warning(f"Link check refused for non-public host: {url}")
            return False
        try:
            # a redirect counts as reachable without following it
            async with session.get(url, allow_redirects=False) as resp:
                return resp.status < 400
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.debug(f"Link check failed for {url}: {e}")
            return False

    async def _resolve_tags(self, user_id: UUID, tag_ids: List[UUID]) -> List[Tag]:
        if not tag_ids:
            return []
        found = await self.tag_repo.get_visible_by_ids(user_id, tag_ids)
        return ensure_tags_resolved(tag_ids, found)

    @staticmethod
    def _to_response(content: Content) -> ContentResponse:
        return ContentResponse.model_validate(content)
