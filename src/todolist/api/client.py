"""API client for the todolist REST server."""

from __future__ import annotations

from typing import Any

import httpx

from todolist.models import NotFoundError, PersistError, TransportError
from todolist.utils.logger import get_logger


class APIClient:
    """HTTP client for the todolist API.

    Every response is expected to be a JSON envelope
    ``{success, data?, error?}``; :meth:`request` unwraps it.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self.logger = get_logger("api")

    def _get_headers(self) -> dict[str, str]:
        """Get HTTP headers."""
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                follow_redirects=True,
                headers=self._get_headers(),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make an HTTP request and return the decoded envelope.

        Failed calls are not retried.

        Raises:
            PersistError: Network failure, non-2xx status or ``success: false``
            NotFoundError: The server answered 404
            TransportError: The body is not a JSON envelope
        """
        client = await self._get_client()
        url = path if path.startswith("/") else f"/{path}"

        try:
            response = await client.request(method=method, url=url, json=json)
        except httpx.RequestError as e:
            self.logger.error("%s %s failed: %s", method, url, e)
            raise PersistError(f"Could not reach {self.base_url}") from e

        try:
            payload = response.json()
        except ValueError as e:
            self.logger.error(
                "%s %s returned a non-JSON body (status %s)",
                method,
                url,
                response.status_code,
            )
            raise TransportError(
                f"Unexpected response from server (status {response.status_code})"
            ) from e

        if not isinstance(payload, dict) or "success" not in payload:
            raise TransportError("Malformed response from server")

        if response.status_code == 404:
            raise NotFoundError(payload.get("error") or "Not found")

        if response.is_error or not payload["success"]:
            message = payload.get("error") or f"Request failed ({response.status_code})"
            self.logger.error("%s %s failed: %s", method, url, message)
            raise PersistError(message)

        return payload

    async def get(self, path: str) -> dict[str, Any]:
        """Make a GET request."""
        return await self.request("GET", path)

    async def post(self, path: str, *, json: dict[str, Any] | None = None) -> dict[str, Any]:
        """Make a POST request."""
        return await self.request("POST", path, json=json)

    async def put(self, path: str, *, json: dict[str, Any] | None = None) -> dict[str, Any]:
        """Make a PUT request."""
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> dict[str, Any]:
        """Make a DELETE request."""
        return await self.request("DELETE", path)


def get_client() -> APIClient:
    """Get an API client configured from the current settings."""
    from todolist.services.config_service import get_config_service

    api_config = get_config_service().config.api
    return APIClient(api_config.endpoint, timeout=api_config.timeout)
