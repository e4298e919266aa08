"""Request builder for a single REST resource path."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .client import DocumentClient


class Request:
    """Builds and sends one request against a resource path.

    Query parameters and headers accumulate across calls; the HTTP verb
    methods send the request and return the decoded response.

    Example:
        >>> await client.request("task/42/reassign").query_params(
        ...     {"actors": "user:alice", "comment": None}
        ... ).put()
    """

    def __init__(self, client: DocumentClient, path: str):
        self._client = client
        self.path = path
        self._query_params: dict[str, Any] = {}
        self._headers: dict[str, str] = {}
        self._timeout: float | None = None

    def query_params(self, params: Mapping[str, Any]) -> Request:
        """Add query parameters. Entries whose value is None are omitted."""
        self._query_params.update({key: value for key, value in params.items() if value is not None})
        return self

    def headers(self, headers: Mapping[str, str]) -> Request:
        """Add request headers."""
        self._headers.update(headers)
        return self

    def timeout(self, seconds: float) -> Request:
        """Override the client's default timeout for this request."""
        self._timeout = seconds
        return self

    @property
    def pending_query_params(self) -> dict[str, Any]:
        """Query parameters that will be sent."""
        return dict(self._query_params)

    async def get(self, options: dict[str, Any] | None = None) -> Any:
        return await self._execute("GET", options)

    async def post(self, options: dict[str, Any] | None = None) -> Any:
        return await self._execute("POST", options)

    async def put(self, options: dict[str, Any] | None = None) -> Any:
        """Send a PUT request.

        Args:
            options: Optional per-request options. Recognised keys are
                ``body`` (JSON payload), ``headers``, ``query_params``,
                ``timeout`` and ``resolve_with_full_response``.

        Returns:
            The decoded response; see DocumentClient.http.
        """
        return await self._execute("PUT", options)

    async def delete(self, options: dict[str, Any] | None = None) -> Any:
        return await self._execute("DELETE", options)

    async def _execute(self, method: str, options: dict[str, Any] | None) -> Any:
        options = options or {}
        if options.get("query_params"):
            self.query_params(options["query_params"])
        headers = {**self._headers, **(options.get("headers") or {})}
        timeout = options.get("timeout", self._timeout)
        return await self._client.http(
            method,
            self.path,
            params=self._query_params,
            body=options.get("body"),
            headers=headers,
            timeout=timeout,
            resolve_with_full_response=options.get("resolve_with_full_response", False),
        )
