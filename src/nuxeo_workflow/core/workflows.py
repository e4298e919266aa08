"""Workflows - Fetch workflow tasks from the server."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .exceptions import InvalidResponseError
from .paths import join
from .task import TASK_PATH, Task

if TYPE_CHECKING:
    from .client import DocumentClient

logger = logging.getLogger(__name__)


class Workflows:
    """Entry point for reading tasks.

    Tasks returned here are bound to the client, so they can be completed,
    reassigned or delegated directly.
    """

    def __init__(self, client: DocumentClient):
        self._client = client

    async def fetch_task(self, task_id: str, request_options: dict[str, Any] | None = None) -> Task:
        """Fetch a single task by id."""
        path = join(TASK_PATH, task_id)
        data = await self._fetch_json(path, {}, request_options)
        if not isinstance(data, dict):
            raise InvalidResponseError(self._client.url_for(path), _unexpected("a task", data))
        return Task.from_payload(data, client=self._client)

    async def fetch_tasks(
        self,
        actor_id: str | None = None,
        workflow_instance_id: str | None = None,
        workflow_model_name: str | None = None,
        request_options: dict[str, Any] | None = None,
    ) -> list[Task]:
        """Fetch open tasks, optionally filtered.

        Args:
            actor_id: Only tasks assigned to this user.
            workflow_instance_id: Only tasks of this workflow instance.
            workflow_model_name: Only tasks of this workflow model.
            request_options: Per-request options.

        Returns:
            The matching tasks.
        """
        entries = await self._fetch_entries(
            TASK_PATH,
            {
                "userId": actor_id,
                "workflowInstanceId": workflow_instance_id,
                "workflowModelName": workflow_model_name,
            },
            request_options,
        )
        return [Task.from_payload(entry, client=self._client) for entry in entries]

    async def fetch_document_tasks(
        self, document_id: str, request_options: dict[str, Any] | None = None
    ) -> list[Task]:
        """Fetch the open tasks attached to a document."""
        entries = await self._fetch_entries(join("id", document_id, "@task"), {}, request_options)
        return [
            Task.from_payload(entry, client=self._client, document_id=document_id)
            for entry in entries
        ]

    async def _fetch_entries(
        self,
        path: str,
        params: dict[str, Any],
        request_options: dict[str, Any] | None,
    ) -> list[dict[str, Any]]:
        data = await self._fetch_json(path, params, request_options)
        entries = data.get("entries", []) if isinstance(data, dict) else data
        if not isinstance(entries, list) or not all(isinstance(entry, dict) for entry in entries):
            raise InvalidResponseError(self._client.url_for(path), _unexpected("a task list", data))
        return entries

    async def _fetch_json(
        self,
        path: str,
        params: dict[str, Any],
        request_options: dict[str, Any] | None,
    ) -> Any:
        options = {**(request_options or {}), "resolve_with_full_response": True}
        logger.debug(f"Fetching {path}")
        response = await self._client.request(path).query_params(params).get(options)
        try:
            return response.json()
        except ValueError as e:
            raise InvalidResponseError(str(response.url), e) from e


def _unexpected(expected: str, data: Any) -> TypeError:
    return TypeError(f"expected {expected}, got {type(data).__name__}")
