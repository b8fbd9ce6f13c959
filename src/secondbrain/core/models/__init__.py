"""
Database models for the Second Brain application.

SQLAlchemy ORM models defining the schema. All models are used through
async sessions and the repository layer.

Models included:
    - User: account with local credentials or an OAuth identity
    - Tag: global or user-owned label
    - Content: bookmarked link with notes, tags and a shared flag
    - ShareLink: per-user public brain link
"""

from .base import BaseModel
from .content import Content, ContentType
from .share_link import ShareLink
from .tag import Tag, content_tags
from .user import AuthProvider, User

__all__ = [
    "BaseModel",
    "User",
    "AuthProvider",
    "Tag",
    "content_tags",
    "Content",
    "ContentType",
    "ShareLink",
]
