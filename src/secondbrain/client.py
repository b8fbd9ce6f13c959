"""Async HTTP client for the Second Brain API.

Each client instance carries its own bearer token, so two clients (say, an
owner and an anonymous reader) can be used side by side::

    async with SecondBrainClient("http://localhost:8000") as owner:
        await owner.signin("ada@example.com", "Secur3P@ss")
        link = (await owner.toggle_sharing())["link"]
"""

from typing import Any, Dict, List, Optional, Type
from uuid import UUID

import httpx

from .config import get_settings
from .core.exceptions import (
    AuthenticationError,
    ConflictError,
    InternalError,
    InvalidInputError,
    NotFoundError,
    SecondBrainError,
    UnauthorizedError,
)

_ERRORS_BY_STATUS: Dict[int, Type[SecondBrainError]] = {
    401: AuthenticationError,
    403: UnauthorizedError,
    409: ConflictError,
    422: InvalidInputError,
}


class SecondBrainClient:
    """Thin wrapper around ``httpx.AsyncClient`` speaking the JSON API."""

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        api_prefix: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.token = token
        prefix = get_settings().api_prefix if api_prefix is None else api_prefix
        self._http = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}{prefix}", transport=transport, timeout=timeout
        )

    async def __aenter__(self) -> "SecondBrainClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        response = await self._http.request(method, path, headers=headers, **kwargs)

        if response.status_code >= 400:
            raise self._to_error(response)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    @staticmethod
    def _to_error(response: httpx.Response) -> SecondBrainError:
        try:
            body = response.json()
        except ValueError:
            body = {}
        message = body.get("message") or response.text or response.reason_phrase
        details = body.get("details")
        if response.status_code == 404:
            return NotFoundError(message=message, details=details)
        error_cls = _ERRORS_BY_STATUS.get(response.status_code, InternalError)
        return error_cls(message, details)

    # accounts

    async def signup(self, email: str, password: str, **profile) -> Dict[str, Any]:
        return await self._request(
            "POST", "/signup", json={"email": email, "password": password, **profile}
        )

    async def signin(self, email: str, password: str) -> Dict[str, Any]:
        """Sign in and keep the returned token on this client."""
        data = await self._request("POST", "/signin", json={"email": email, "password": password})
        self.token = data["accessToken"]
        return data

    async def me(self) -> Dict[str, Any]:
        return await self._request("GET", "/me")

    async def logout(self) -> None:
        await self._request("POST", "/logout")
        self.token = None

    # tags

    async def create_tag(self, title: str) -> Dict[str, Any]:
        return await self._request("POST", "/tag", json={"title": title})

    async def list_tags(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/tag")

    async def delete_tag(self, tag_id: UUID) -> None:
        await self._request("DELETE", f"/tag/{tag_id}")

    # content

    async def create_content(
        self,
        title: str,
        link: str,
        type: str,
        notes: Optional[str] = None,
        tags: Optional[List[UUID]] = None,
        is_shared: bool = False,
    ) -> Dict[str, Any]:
        payload = {
            "title": title,
            "link": link,
            "type": type,
            "notes": notes,
            "tags": [str(tag_id) for tag_id in tags or []],
            "isShared": is_shared,
        }
        return await self._request("POST", "/content", json=payload)

    async def list_content(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/content")

    async def update_content(self, content_id: UUID, **changes) -> Dict[str, Any]:
        return await self._request("PUT", f"/content/{content_id}", json=changes)

    async def delete_content(self, content_id: UUID) -> None:
        await self._request("DELETE", f"/content/{content_id}")

    async def set_content_shared(self, content_id: UUID, is_shared: bool) -> Dict[str, Any]:
        return await self._request(
            "PATCH", f"/content/{content_id}/share", json={"isShared": is_shared}
        )

    async def share_all(self) -> Dict[str, Any]:
        return await self._request("POST", "/content/share-all")

    # brain

    async def toggle_sharing(self, is_public: Optional[bool] = None) -> Dict[str, Any]:
        """Flip the brain link, or set it when ``is_public`` is given."""
        body = None if is_public is None else {"isPublic": is_public}
        return await self._request("POST", "/brain/share", json=body)

    async def sharing_status(self) -> Dict[str, Any]:
        return await self._request("GET", "/brain/status")

    async def get_brain(self, token: str) -> List[Dict[str, Any]]:
        """Read a public brain; needs no credential."""
        return await self._request("GET", f"/brain/{token}")
