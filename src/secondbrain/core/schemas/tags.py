"""
Tag schemas.
"""

import uuid
from typing import Optional

from pydantic import Field, field_validator

from .common import CamelModel


class TagCreate(CamelModel):
    """Tag creation request schema."""

    title: str = Field(min_length=1, max_length=50, description="Tag title")

    @field_validator("title")
    @classmethod
    def normalize_title(cls, v: str) -> str:
        """Collapse whitespace, same as the model does."""
        clean = " ".join(v.split())
        if not clean:
            raise ValueError("Tag title cannot be empty")
        return clean


class TagUpdate(TagCreate):
    """Tag rename request schema."""


class TagResponse(CamelModel):
    """Tag response schema."""

    id: uuid.UUID
    title: str
    owner_id: Optional[uuid.UUID] = None
    is_global: bool = False
