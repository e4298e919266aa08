"""Task - Local mirror of a server-side workflow task.

A Task holds the state of a task fetched from the server and issues the
PUT requests that complete, reassign or delegate it. Remote operations
return the client's awaitable immediately; nothing is sent until it is
awaited, and the local object is never updated from the response.

Usage:
    task = Task.from_payload(payload, client=client)
    await task.variable("comment", "ok").complete("validate")
    await task.reassign(["user:alice"], {"comment": "on leave"})
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Awaitable, Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from .paths import join

if TYPE_CHECKING:
    from .client import DocumentClient

logger = logging.getLogger(__name__)

TASK_PATH = "task"
TASK_ENTITY_TYPE = "task"


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Return a deep copy of ``base`` with ``override`` merged on top.

    Nested mappings are merged recursively. Any other value from
    ``override``, lists included, replaces the one in ``base``; lists are
    not merged element by element.
    """
    merged = copy.deepcopy(dict(base))
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class Task(BaseModel):
    """A workflow task as returned by the server.

    Known server fields are exposed under snake_case names and are read and
    written under their server keys. Values are copied as given, never
    coerced or checked. Unknown keys, snake_case spellings included, are
    preserved in ``model_extra``.
    The owning client and the attached document id are private and never
    serialized.
    """

    model_config = ConfigDict(extra="allow")

    entity_type: Any = Field(default=None, alias="entity-type")
    id: Any = Field(default=None, frozen=True)
    name: Any = None
    workflow_instance_id: Any = Field(default=None, alias="workflowInstanceId")
    workflow_model_name: Any = Field(default=None, alias="workflowModelName")
    workflow_initiator: Any = Field(default=None, alias="workflowInitiator")
    workflow_title: Any = Field(default=None, alias="workflowTitle")
    workflow_life_cycle_state: Any = Field(default=None, alias="workflowLifeCycleState")
    graph_resource: Any = Field(default=None, alias="graphResource")
    state: Any = None
    directive: Any = None
    created: Any = None
    due_date: Any = Field(default=None, alias="dueDate")
    node_name: Any = Field(default=None, alias="nodeName")
    target_document_ids: Any = Field(default=None, alias="targetDocumentIds")
    actors: Any = None
    delegated_actors: Any = Field(default=None, alias="delegatedActors")
    comments: Any = None
    variables: Any = None
    task_info: Any = Field(default=None, alias="taskInfo")

    _client: Any = PrivateAttr(default=None)
    _document_id: str | None = PrivateAttr(default=None)

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        client: DocumentClient | None = None,
        document_id: str | None = None,
    ) -> Task:
        """Create a Task from a server payload.

        The payload is deep-copied, so later changes to it do not leak into
        the task.

        Args:
            payload: The task representation, typically decoded JSON.
            client: The client used for remote operations.
            document_id: The attached document id, if any.

        Returns:
            The new Task.
        """
        task = cls.model_validate(copy.deepcopy(dict(payload)))
        task._client = client
        task._document_id = document_id
        return task

    @property
    def client(self) -> DocumentClient | None:
        return self._client

    @property
    def document_id(self) -> str | None:
        return self._document_id

    def to_payload(self) -> dict[str, Any]:
        """Return the server-shaped representation, omitting unset fields."""
        return self.model_dump(by_alias=True, exclude_unset=True)

    def variable(self, name: str, value: Any) -> Task:
        """Set a task variable, overwriting any previous value.

        Raises:
            TypeError: If the task has no variables mapping.
        """
        self.variables[name] = value  # type: ignore[index]
        return self

    def complete(
        self,
        action: str,
        task_options: Mapping[str, Any] | None = None,
        request_options: dict[str, Any] | None = None,
    ) -> Awaitable[Any]:
        """Complete the task with the given action.

        Args:
            action: The action name, e.g. "validate" or "reject".
            task_options: Optional ``variables`` merged over the task's own
                variables, and an optional ``comment``.
            request_options: Per-request options. ``body`` is set on this
                dict.

        Returns:
            Awaitable resolving with the server's response (the completed task).
        """
        task_options = task_options or {}
        request_options = {} if request_options is None else request_options
        variables = deep_merge(self.variables or {}, task_options.get("variables") or {})
        request_options["body"] = {
            "variables": variables,
            "entity-type": TASK_ENTITY_TYPE,
            "id": self.id,
            "comment": task_options.get("comment"),
        }
        path = join(TASK_PATH, self.id, action)
        logger.debug(f"Completing task {self.id} with action {action}")
        return self._client.request(path).put(request_options)  # type: ignore[union-attr]

    def reassign(
        self,
        actors: str | list[str],
        task_options: Mapping[str, Any] | None = None,
        request_options: dict[str, Any] | None = None,
    ) -> Awaitable[Any]:
        """Reassign the task to the given actors.

        Returns:
            Awaitable resolving with the server's response, normally empty.
        """
        return self._transfer("reassign", "actors", actors, task_options, request_options)

    def delegate(
        self,
        actors: str | list[str],
        task_options: Mapping[str, Any] | None = None,
        request_options: dict[str, Any] | None = None,
    ) -> Awaitable[Any]:
        """Delegate the task to the given actors.

        Returns:
            Awaitable resolving with the server's response, normally empty.
        """
        return self._transfer("delegate", "delegatedActors", actors, task_options, request_options)

    def _transfer(
        self,
        operation: str,
        actors_param: str,
        actors: str | list[str],
        task_options: Mapping[str, Any] | None,
        request_options: dict[str, Any] | None,
    ) -> Awaitable[Any]:
        task_options = task_options or {}
        request_options = {} if request_options is None else request_options
        path = join(TASK_PATH, self.id, operation)
        logger.debug(f"Sending {operation} for task {self.id} to {actors}")
        return (
            self._client.request(path)  # type: ignore[union-attr]
            .query_params({actors_param: actors, "comment": task_options.get("comment")})
            .put(request_options)
        )
