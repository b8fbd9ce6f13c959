"""Authentication middleware."""

from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..core.exceptions import AuthenticationError
from ..security import get_user_id_from_token


class JWTBearer(HTTPBearer):
    """JWT Bearer token authentication.

    Missing or bad credentials raise AuthenticationError so every auth failure
    gets the same 401 error body.
    """

    def __init__(self):
        super().__init__(auto_error=False)

    async def credentials(self, request: Request) -> str:
        """Raw bearer token from the Authorization header."""
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)
        if not credentials or not credentials.credentials:
            raise AuthenticationError("Not authorized")
        if credentials.scheme.lower() != "bearer":
            raise AuthenticationError("Invalid authentication scheme")
        return credentials.credentials

    async def __call__(self, request: Request) -> UUID:
        token = await self.credentials(request)
        user_id = await get_user_id_from_token(token)
        if not user_id:
            raise AuthenticationError("Invalid or expired token")
        return user_id


jwt_bearer = JWTBearer()


# Dependency for getting current user ID from JWT
async def get_current_user_id(user_id: UUID = Depends(jwt_bearer)) -> UUID:
    """Get current authenticated user ID."""
    return user_id


async def get_access_token(
    request: Request, _user_id: UUID = Depends(get_current_user_id)
) -> str:
    """The caller's validated bearer token (for logout)."""
    return await jwt_bearer.credentials(request)
