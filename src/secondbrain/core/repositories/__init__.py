"""Repository layer for data access."""

from .content_repository import ContentRepository
from .share_link_repository import ShareLinkRepository
from .tag_repository import TagRepository
from .user_repository import UserRepository

__all__ = [
    "UserRepository",
    "TagRepository",
    "ContentRepository",
    "ShareLinkRepository",
]
