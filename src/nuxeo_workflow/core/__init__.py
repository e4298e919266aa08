"""Core module - exports key classes and exceptions."""

from nuxeo_workflow.core.exceptions import (
    NuxeoClientError,
    RequestTimeoutError,
    ServerConnectionError,
    ServerHTTPError,
    InvalidResponseError,
    ConfigError,
)

from nuxeo_workflow.core.config import (
    AuthConfig,
    ClientConfig,
    load_config,
)

from nuxeo_workflow.core.paths import join

from nuxeo_workflow.core.task import Task

from nuxeo_workflow.core.request import Request

from nuxeo_workflow.core.workflows import Workflows

from nuxeo_workflow.core.client import DocumentClient

__all__ = [
    # Exceptions
    "NuxeoClientError",
    "RequestTimeoutError",
    "ServerConnectionError",
    "ServerHTTPError",
    "InvalidResponseError",
    "ConfigError",
    # Configuration
    "AuthConfig",
    "ClientConfig",
    "load_config",
    # Client
    "DocumentClient",
    "Request",
    "Workflows",
    "join",
    # Entities
    "Task",
]
