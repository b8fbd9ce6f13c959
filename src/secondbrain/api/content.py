"""Content API endpoints."""

from typing import Dict, List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.content import (
    ContentCreate,
    ContentResponse,
    ContentShareRequest,
    ContentUpdate,
    LinkValidationRequest,
    ShareAllResponse,
)
from ..core.services import ContentService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id

router = APIRouter(prefix="/content", tags=["content"])


@router.post("", response_model=ContentResponse, status_code=status.HTTP_201_CREATED)
async def create_content(
    request: ContentCreate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Create a new content item."""
    content_service = ContentService(session)
    return await content_service.create_content(current_user_id, request)


@router.get("", response_model=List[ContentResponse])
async def list_content(
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """List the user's content, oldest first."""
    content_service = ContentService(session)
    return await content_service.list_content(current_user_id)


@router.post("/share-all", response_model=ShareAllResponse)
async def share_all(
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Mark every content item as shared."""
    content_service = ContentService(session)
    return await content_service.share_all(current_user_id)


@router.post("/validate-links", response_model=Dict[str, bool])
async def validate_links(
    request: LinkValidationRequest,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Check that the given URLs are reachable."""
    content_service = ContentService(session)
    return await content_service.validate_links(request.links)


@router.get("/{content_id}", response_model=ContentResponse)
async def get_content(
    content_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    content_service = ContentService(session)
    return await content_service.get_content(content_id, current_user_id)


@router.put("/{content_id}", response_model=ContentResponse)
async def update_content(
    content_id: UUID,
    request: ContentUpdate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Update a content item (partial)."""
    content_service = ContentService(session)
    return await content_service.update_content(content_id, current_user_id, request)


@router.delete("/{content_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_content(
    content_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete a content item."""
    content_service = ContentService(session)
    await content_service.delete_content(content_id, current_user_id)


@router.patch("/{content_id}/share", response_model=ContentResponse)
async def set_content_shared(
    content_id: UUID,
    request: ContentShareRequest,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Include or exclude one item from the public brain."""
    content_service = ContentService(session)
    return await content_service.set_shared(content_id, current_user_id, request.is_shared)
