"""Brain sharing API endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.brain import ShareStatusResponse, ShareToggleRequest, ShareToggleResponse
from ..core.schemas.content import ContentResponse
from ..core.services import BrainService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id

router = APIRouter(prefix="/brain", tags=["brain"])


# /share and /status must be registered before /{token}
@router.post("/share", response_model=ShareToggleResponse)
async def toggle_sharing(
    request: Request,
    body: Optional[ShareToggleRequest] = Body(default=None),
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Toggle the public brain link, or set it with ``{"isPublic": bool}``."""
    brain_service = BrainService(session)
    is_public = body.is_public if body else None
    return await brain_service.toggle_sharing(
        current_user_id, str(request.base_url), is_public=is_public
    )


@router.get("/status", response_model=ShareStatusResponse)
async def sharing_status(
    request: Request,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    brain_service = BrainService(session)
    return await brain_service.get_status(current_user_id, str(request.base_url))


@router.get("/{token}", response_model=List[ContentResponse])
async def get_public_brain(token: str, session: AsyncSession = Depends(get_db_session)):
    """Anonymous read of a public brain."""
    brain_service = BrainService(session)
    return await brain_service.resolve_brain(token)
