"""Document Client - Async HTTP access to the document server REST API.

The client owns an `httpx.AsyncClient`, builds resource URLs from the
configured base URL and API path, applies authentication, and translates
transport failures into the exceptions in `core.exceptions`.

Usage:
    async with DocumentClient(load_config()) as client:
        task = await client.workflows().fetch_task("42")
        await task.complete("validate", {"comment": "ok"})
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .config import ClientConfig
from .exceptions import (
    InvalidResponseError,
    RequestTimeoutError,
    ServerConnectionError,
    ServerHTTPError,
)
from .paths import join
from .request import Request
from .task import TASK_ENTITY_TYPE, Task
from .workflows import Workflows

logger = logging.getLogger(__name__)

TOKEN_HEADER = "X-Authentication-Token"
TASKS_ENTITY_TYPE = "tasks"


class DocumentClient:
    """Async client for the document server REST API."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            config: Client configuration. Uses defaults if None.
            transport: Optional httpx transport, e.g. `httpx.MockTransport`
                in tests.
        """
        self.config = config or ClientConfig()
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    async def __aenter__(self) -> DocumentClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    @property
    def api_url(self) -> str:
        """Absolute URL of the REST API root."""
        return f"{self.config.base_url.rstrip('/')}/{self.config.api_path.strip('/')}"

    def url_for(self, path: str) -> str:
        """Absolute URL for a resource path relative to the API root."""
        return f"{self.api_url}/{join(path).lstrip('/')}"

    def request(self, path: str) -> Request:
        """Start building a request for a resource path."""
        return Request(self, path)

    def workflows(self) -> Workflows:
        """Return the workflow task service bound to this client."""
        return Workflows(self)

    def _get_http(self) -> httpx.AsyncClient:
        if self._http is None:
            auth = self.config.auth
            headers = {"Accept": "application/json", **self.config.headers}
            basic_auth = None
            if auth.token:
                headers[TOKEN_HEADER] = auth.token
            elif auth.username is not None:
                basic_auth = httpx.BasicAuth(auth.username, auth.password or "")
            self._http = httpx.AsyncClient(
                auth=basic_auth,
                headers=headers,
                timeout=self.config.timeout,
                transport=self._transport,
            )
        return self._http

    async def http(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        body: Any = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
        resolve_with_full_response: bool = False,
    ) -> Any:
        """Send a request and decode the response.

        Args:
            method: HTTP method.
            path: Resource path relative to the API root.
            params: Query parameters. None values are not expected here;
                Request.query_params drops them.
            body: JSON-serializable payload, if any.
            headers: Extra headers for this request.
            timeout: Timeout override in seconds.
            resolve_with_full_response: Return the raw httpx.Response.

        Returns:
            The httpx.Response when resolve_with_full_response is set;
            otherwise None for an empty body, a Task or list of Tasks for
            task entities, decoded JSON for other JSON responses, or text.

        Raises:
            RequestTimeoutError: If the request times out.
            ServerConnectionError: If the server cannot be reached.
            ServerHTTPError: If the server returns a 4xx/5xx status.
            InvalidResponseError: If a JSON response cannot be decoded.
        """
        url = self.url_for(path)
        effective_timeout = timeout if timeout is not None else self.config.timeout
        logger.debug(f"{method} {url} params={params or {}}")

        try:
            response = await self._get_http().request(
                method,
                url,
                params=params or None,
                json=body,
                headers=headers or None,
                timeout=effective_timeout,
            )
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(url, effective_timeout) from e
        except httpx.RequestError as e:
            raise ServerConnectionError(url, e) from e

        logger.debug(f"{method} {url} -> {response.status_code}")
        if response.status_code >= 400:
            raise ServerHTTPError(response.status_code, url, response.text)

        if resolve_with_full_response:
            return response
        return self._decode(response, url)

    def _decode(self, response: httpx.Response, url: str) -> Any:
        if response.status_code == 204 or not response.content:
            return None

        content_type = response.headers.get("content-type", "")
        if "json" not in content_type:
            return response.text

        try:
            data = response.json()
        except ValueError as e:
            raise InvalidResponseError(url, e) from e

        if isinstance(data, dict):
            entity_type = data.get("entity-type")
            if entity_type == TASK_ENTITY_TYPE:
                return Task.from_payload(data, client=self)
            if entity_type == TASKS_ENTITY_TYPE:
                entries = data.get("entries", [])
                if isinstance(entries, list) and all(isinstance(entry, dict) for entry in entries):
                    return [Task.from_payload(entry, client=self) for entry in entries]
        return data
