"""
Brain sharing schemas.
"""

from typing import Optional

from pydantic import Field

from .common import CamelModel


class ShareToggleRequest(CamelModel):
    """Optional body for ``POST /brain/share``.

    Without ``is_public`` the link is flipped; with it the link is set to that
    state, so repeating the call does not undo it.
    """

    is_public: Optional[bool] = Field(default=None, description="Target state, flip when omitted")


class ShareToggleResponse(CamelModel):
    """Result of a sharing transition."""

    message: str
    link: Optional[str] = Field(default=None, description="Public URL while sharing is enabled")
    is_public: bool


class ShareStatusResponse(CamelModel):
    """Current brain sharing state."""

    is_public: bool
    link: Optional[str] = None
