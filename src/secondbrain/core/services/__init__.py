"""
Service layer interfaces and implementations.

Services own the business rules (ownership, tag scope, brain sharing) and
raise the exceptions from ``core.exceptions``; routers stay thin.
"""

from .auth_service import AuthService
from .brain_service import BrainService
from .content_service import ContentService
from .health_service import HealthService
from .interfaces import (
    IAuthService,
    IBrainService,
    IContentService,
    IHealthService,
    ITagService,
)
from .tag_service import TagService

__all__ = [
    # Interfaces
    "IAuthService",
    "ITagService",
    "IContentService",
    "IBrainService",
    "IHealthService",
    # Implementations
    "AuthService",
    "TagService",
    "ContentService",
    "BrainService",
    "HealthService",
]
