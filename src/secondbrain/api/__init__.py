"""API routers for Second Brain."""

from .auth import router as auth_router
from .brain import router as brain_router
from .content import router as content_router
from .health import router as health_router
from .tags import router as tags_router

__all__ = ["auth_router", "tags_router", "content_router", "brain_router", "health_router"]
