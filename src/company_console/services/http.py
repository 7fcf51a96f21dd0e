"""
JSON-over-HTTP plumbing shared by the API-backed services.

Every call is a single request/response: the URL is the base URL plus a
resource path, a bearer token is attached when present, and failures are
translated into ServiceError subclasses after being logged. No retries.
"""

from typing import Any, Mapping

import httpx
from benedict import benedict

from company_console.lib import logs
from company_console.services.errors import ApiError, NetworkError, ServiceError

LOG = logs.logger(__file__)


class ApiClient:
    """
    Thin async JSON client around httpx.

    A fresh httpx.AsyncClient is opened per request so the client can be
    shared across event loops (Reflex workers, test loops).

    Attributes:
        base_url: API root without trailing slash.
    """

    def __init__(
        self,
        base_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: API root, e.g. "http://localhost:3001/api".
            transport: Optional transport override (tests use MockTransport).
        """
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    async def get(self, path: str, action: str, token: str | None = None, **kwargs) -> Any:
        return await self.request("GET", path, action, token=token, **kwargs)

    async def post(self, path: str, action: str, token: str | None = None, **kwargs) -> Any:
        return await self.request("POST", path, action, token=token, **kwargs)

    async def put(self, path: str, action: str, token: str | None = None, **kwargs) -> Any:
        return await self.request("PUT", path, action, token=token, **kwargs)

    async def delete(self, path: str, action: str, token: str | None = None, **kwargs) -> Any:
        return await self.request("DELETE", path, action, token=token, **kwargs)

    async def request(
        self,
        method: str,
        path: str,
        action: str,
        token: str | None = None,
        body: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """
        Issue a request and return the decoded JSON body.

        Args:
            method: HTTP method.
            path: Resource path appended to the base URL.
            action: Human readable action used in error messages
                ("fetch companies" -> "Failed to fetch companies: 500 ...").
            token: Optional bearer token.
            body: JSON-serializable request body.
            params: Optional query parameters.

        Returns:
            Decoded JSON, or None for an empty body.

        Raises:
            NetworkError: The request could not be sent.
            ApiError: The response status was not 2xx.
        """
        url = f"{self.base_url}{path}"
        LOG.debug("%s %s", method, url)
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.request(
                    method,
                    url,
                    headers=build_headers(token),
                    json=body,
                    params=params,
                )
        except httpx.RequestError as exc:
            LOG.error("Failed to %s: %s %s unreachable", action, method, url, exc_info=True)
            raise NetworkError(f"Failed to {action}: {exc}") from exc

        if not response.is_success:
            message = error_message(response, action)
            LOG.error("Failed to %s: %s %s -> %s", action, method, url, message)
            raise ApiError(message, response.status_code)

        return decode_body(response, action)


def build_headers(token: str | None) -> dict[str, str]:
    """Return JSON headers, with an Authorization header when token is set."""
    headers = {"Content-Type": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def error_message(response: httpx.Response, action: str) -> str:
    """Return the server-supplied message or a status-derived default."""
    fallback = f"Failed to {action}: {response.status_code} {response.reason_phrase}".rstrip()
    try:
        data = response.json()
    except ValueError:
        return fallback
    if not isinstance(data, dict):
        return fallback
    b = benedict(data)
    message = b.get("message") or b.get("error.message") or b.get("error")
    return message if isinstance(message, str) and message else fallback


def decode_body(response: httpx.Response, action: str) -> Any:
    """Decode a success body; empty bodies (204, DELETE) yield None."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise ServiceError(f"Failed to {action}: invalid JSON response") from exc


def unwrap_list(data: Any, key: str) -> list:
    """
    Return the list in a response that may be bare or wrapped.

    Accepts ``[...]``, ``{key: [...]}`` or ``{"data": {key: [...]}}``;
    anything else yields an empty list.
    """
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        b = benedict(data)
        items = b.get(key)
        if items is None:
            items = b.get(f"data.{key}")
        if isinstance(items, list):
            return items
    return []
