"""
Uncovering History backend client.

Thin async wrapper over the remote REST API. Every call is a single
request/response cycle: no retries and no caching. Non-2xx answers raise
BackendError carrying the backend's own message text.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx

from historymap.core.exceptions import (
    BackendError,
    BackendNotConfiguredError,
    BackendUnavailableError,
)

logger = logging.getLogger(__name__)

# (form field, (filename, content, content type))
FilePart = Tuple[str, Tuple[str, bytes, str]]


class BackendClient:
    """Client for the points, types, auth, image and file endpoints of the backend."""

    def __init__(
        self,
        base_url: Optional[str],
        api_token: Optional[str] = None,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/") if base_url else None
        self.api_token = api_token
        self._client: Optional[httpx.AsyncClient] = None

        if self.base_url:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=timeout,
                transport=transport,
            )
            logger.info(f"Backend client configured for {self.base_url}")
        else:
            logger.warning(
                "Backend API URL not configured. "
                "Set BACKEND_API_URL in .env file."
            )

    @property
    def configured(self) -> bool:
        return self._client is not None

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()

    def _auth_headers(self, token: Optional[str] = None) -> Dict[str, str]:
        token = token or self.api_token
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    async def _send(
        self,
        method: str,
        path: str,
        *,
        token: Optional[str] = None,
        **kwargs: Any,
    ) -> httpx.Response:
        if self._client is None:
            raise BackendNotConfiguredError()

        headers = {**self._auth_headers(token), **kwargs.pop("headers", {})}
        try:
            response = await self._client.request(method, path, headers=headers, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning(f"Timeout on {method} {path}")
            raise BackendUnavailableError("Backend request timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"Backend request {method} {path} failed: {e}")
            raise BackendUnavailableError(str(e) or "Failed to fetch from backend") from e

        if response.is_error:
            message = response.text.strip()
            logger.warning(
                f"Backend returned {response.status_code} for {method} {path}",
                extra={"backend_status": response.status_code},
            )
            raise BackendError(response.status_code, message)

        return response

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise BackendError(502, "Invalid JSON response from backend") from e

    async def _json(self, method: str, path: str, **kwargs: Any) -> Any:
        return self._decode(await self._send(method, path, **kwargs))

    # Interest points

    async def list_points(self) -> List[Any]:
        data = await self._json("GET", "/api/interest-points")
        return data if isinstance(data, list) else []

    async def get_point(self, point_id: str) -> Any:
        return await self._json("GET", f"/api/interest-points/{point_id}")

    async def list_children(self, parent_id: str) -> List[Any]:
        data = await self._json("GET", f"/api/interest-points/parent/{parent_id}/with-depth")
        return data if isinstance(data, list) else []

    async def create_point(self, payload: Dict[str, Any]) -> Any:
        return await self._json("POST", "/api/interest-points", json=payload)

    async def update_point(self, point_id: str, payload: Dict[str, Any]) -> Any:
        return await self._json("PUT", f"/api/interest-points/{point_id}", json=payload)

    async def delete_point(self, point_id: str) -> Any:
        return await self._json("DELETE", f"/api/interest-points/{point_id}")

    # Categories

    async def list_types(self) -> List[Any]:
        data = await self._json("GET", "/api/types")
        return data if isinstance(data, list) else []

    # Authentication

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        data = await self._json(
            "POST", "/api/auth/login", json={"username": email, "password": password}
        )
        return data or {}

    async def register(self, payload: Dict[str, Any]) -> Any:
        return await self._json("POST", "/api/auth/register", json=payload)

    async def current_user(self, token: str) -> Any:
        return await self._json("GET", "/api/users/me", token=token)

    # Images and files

    async def upload_images(
        self,
        files: Sequence[FilePart],
        fields: Optional[Dict[str, str]] = None,
    ) -> Any:
        return await self._json(
            "POST", "/api/images/upload-multiple", data=fields or {}, files=list(files)
        )

    async def fetch_file(self, path: str) -> Tuple[bytes, str]:
        response = await self._send("GET", f"/files/{path.lstrip('/')}")
        content_type = response.headers.get("content-type") or "application/octet-stream"
        return response.content, content_type
