"""Shared pytest fixtures for the test suite.

Fixtures are organized by:
- Filesystem fixtures
- Task payload fixtures
- Client fixtures (mocked collaborator and httpx.MockTransport-backed client)
"""

import json
import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from nuxeo_workflow.core.client import DocumentClient
from nuxeo_workflow.core.config import AuthConfig, ClientConfig

# =============================================================================
# Filesystem Fixtures
# =============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture(autouse=True)
def _clear_nuxeo_env(monkeypatch):
    """Keep NUXEO_* variables from the developer's shell out of the tests."""
    for name in (
        "NUXEO_URL",
        "NUXEO_API_PATH",
        "NUXEO_TIMEOUT",
        "NUXEO_USERNAME",
        "NUXEO_PASSWORD",
        "NUXEO_TOKEN",
    ):
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Task Payload Fixtures
# =============================================================================


@pytest.fixture
def task_payload() -> dict[str, Any]:
    """Provide a task payload shaped like the server's JSON."""
    return {
        "entity-type": "task",
        "id": "a7d5b0c1-task",
        "name": "wf.serialDocumentReview.DocumentValidation",
        "workflowInstanceId": "f3e2d1c0-wf",
        "workflowModelName": "SerialDocumentReview",
        "workflowInitiator": "Administrator",
        "workflowTitle": "wf.serialDocumentReview.SerialDocumentReview",
        "workflowLifeCycleState": "running",
        "graphResource": "http://localhost:8080/nuxeo/api/v1/workflow/f3e2d1c0-wf/graph",
        "state": "opened",
        "directive": "wf.serialDocumentReview.AcceptReject",
        "created": "2024-05-02T10:15:00.000Z",
        "dueDate": "2024-05-05T10:15:00.000Z",
        "nodeName": "Task5f4",
        "targetDocumentIds": [{"id": "doc-1"}],
        "actors": [{"id": "Administrator"}],
        "delegatedActors": [],
        "comments": [],
        "variables": {"comment": "", "validationOrReview": "validation"},
        "taskInfo": {"allowTaskReassignment": True, "taskActions": [{"name": "validate"}]},
        "contextParameters": {"breadcrumb": ["Workspaces", "Report"]},
    }


# =============================================================================
# Client Fixtures
# =============================================================================


@pytest.fixture
def mock_client() -> MagicMock:
    """Provide a stand-in for DocumentClient that records requests.

    ``mock_client.request.return_value`` is the request builder;
    ``query_params`` chains and ``put`` is an AsyncMock.
    """
    client = MagicMock()
    request = client.request.return_value
    request.query_params.return_value = request
    request.put = AsyncMock(return_value={"entity-type": "task"})
    return client


@pytest.fixture
def client_config() -> ClientConfig:
    """Provide a config pointing at a fake server with basic auth."""
    return ClientConfig(
        base_url="http://nuxeo.test/nuxeo",
        auth=AuthConfig(username="Administrator", password="secret"),
    )


@pytest.fixture
def make_client(client_config) -> Callable[[Callable[[httpx.Request], httpx.Response]], DocumentClient]:
    """Provide a factory building a DocumentClient over httpx.MockTransport."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> DocumentClient:
        return DocumentClient(client_config, transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def json_response() -> Callable[..., httpx.Response]:
    """Provide a builder for JSON responses with the server's content type."""

    def build(data: Any, status_code: int = 200) -> httpx.Response:
        return httpx.Response(
            status_code,
            content=json.dumps(data).encode(),
            headers={"content-type": "application/json"},
        )

    return build


@pytest.fixture
def cli_runner():
    """Provide a Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
