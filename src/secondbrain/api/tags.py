"""Tag API endpoints."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.tags import TagCreate, TagResponse, TagUpdate
from ..core.services import TagService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id

router = APIRouter(prefix="/tag", tags=["tags"])


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    request: TagCreate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Create a personal tag."""
    tag_service = TagService(session)
    return await tag_service.create_tag(current_user_id, request)


@router.get("", response_model=List[TagResponse])
async def list_tags(
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Global tags followed by the user's own tags."""
    tag_service = TagService(session)
    return await tag_service.list_tags(current_user_id)


@router.put("/{tag_id}", response_model=TagResponse)
async def update_tag(
    tag_id: UUID,
    request: TagUpdate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    tag_service = TagService(session)
    return await tag_service.update_tag(tag_id, current_user_id, request)


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    tag_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete a personal tag."""
    tag_service = TagService(session)
    await tag_service.delete_tag(tag_id, current_user_id)
