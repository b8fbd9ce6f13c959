"""
Content schemas.

These schemas define the API contracts for content CRUD, item-level sharing
and link validation.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field, HttpUrl, TypeAdapter, ValidationError, field_validator

from ..models.content import ContentType
from .common import CamelModel
from .tags import TagResponse


_URL_ADAPTER = TypeAdapter(HttpUrl)


def _check_link(v: Optional[str]) -> Optional[str]:
    """Must parse as an http(s) URL; the submitted string is kept unchanged."""
    if v is None:
        return v
    v = v.strip()
    try:
        _URL_ADAPTER.validate_python(v)
    except ValidationError:
        raise ValueError("Link must be a valid http(s) URL")
    return v


def _unique_tag_ids(v: Optional[List[uuid.UUID]]) -> Optional[List[uuid.UUID]]:
    if v is None:
        return v
    # a set of references, keep first occurrence order
    return list(dict.fromkeys(v))


class ContentCreate(CamelModel):
    """Content creation request schema."""

    title: str = Field(min_length=1, max_length=200, description="Content title")
    link: str = Field(max_length=2048, description="Bookmarked URL, stored as submitted")
    type: ContentType = Field(description="Content type")
    notes: Optional[str] = Field(default=None, description="Markdown notes")
    is_shared: bool = Field(default=False, description="Visible on the public brain")
    tags: List[uuid.UUID] = Field(default_factory=list, max_length=50, description="Tag ids")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip()

    @field_validator("link")
    @classmethod
    def validate_link(cls, v):
        return _check_link(v)

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, v):
        return _unique_tag_ids(v)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Post",
                "link": "https://x.com",
                "type": "article",
                "notes": "## Why\n\nWorth re-reading.",
                "isShared": False,
                "tags": ["123e4567-e89b-12d3-a456-426614174000"],
            }
        }
    )


class ContentUpdate(CamelModel):
    """Content update request schema, all fields optional."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    link: Optional[str] = Field(default=None, max_length=2048)
    type: Optional[ContentType] = None
    notes: Optional[str] = None
    is_shared: Optional[bool] = None
    tags: Optional[List[uuid.UUID]] = Field(default=None, max_length=50)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip() if v is not None else v

    @field_validator("link")
    @classmethod
    def validate_link(cls, v):
        return _check_link(v)

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, v):
        return _unique_tag_ids(v)


class ContentShareRequest(CamelModel):
    """Set one item's shared flag."""

    is_shared: bool


class ContentResponse(CamelModel):
    """Content response schema with populated tags."""

    id: uuid.UUID
    title: str
    link: str
    type: ContentType
    notes: Optional[str] = None
    is_shared: bool
    tags: List[TagResponse] = Field(default_factory=list)
    owner_id: uuid.UUID
    created_at: datetime
    updated_at: Optional[datetime] = None


class ShareAllResponse(CamelModel):
    message: str
    updated_count: int


class LinkValidationRequest(CamelModel):
    links: List[str] = Field(min_length=1, max_length=50)
