"""Nuxeo Workflow - async client for document server workflow tasks."""

__version__ = "0.1.0"

from nuxeo_workflow.core import (
    ClientConfig,
    DocumentClient,
    NuxeoClientError,
    Task,
    Workflows,
    load_config,
)

__all__ = [
    "__version__",
    "ClientConfig",
    "DocumentClient",
    "NuxeoClientError",
    "Task",
    "Workflows",
    "load_config",
]
