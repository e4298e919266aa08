"""Configuration Model - Pydantic models for the document server client.

Configuration is loaded from `~/.nuxeo-workflow/config.json` (or an explicit
path). Environment variables override specific settings.

Environment Variable Mapping:
| Config Key     | Environment Variable |
|----------------|----------------------|
| base_url       | NUXEO_URL            |
| api_path       | NUXEO_API_PATH       |
| timeout        | NUXEO_TIMEOUT        |
| auth.username  | NUXEO_USERNAME       |
| auth.password  | NUXEO_PASSWORD       |
| auth.token     | NUXEO_TOKEN          |
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".nuxeo-workflow" / "config.json"

# =============================================================================
# Configuration Sub-Models
# =============================================================================


class AuthConfig(BaseModel):
    """Authentication settings.

    A token takes precedence over basic auth when both are set.
    """

    username: str | None = Field(
        default=None,
        description="Basic auth user. Overridden by NUXEO_USERNAME.",
    )
    password: str | None = Field(
        default=None,
        description="Basic auth password. Overridden by NUXEO_PASSWORD.",
    )
    token: str | None = Field(
        default=None,
        description="Authentication token sent as X-Authentication-Token. Overridden by NUXEO_TOKEN.",
    )


# =============================================================================
# Main Configuration Model
# =============================================================================


class ClientConfig(BaseModel):
    """Root configuration for the document server client.

    Example config.json:
    ```json
    {
      "version": "1.0",
      "base_url": "http://localhost:8080/nuxeo",
      "api_path": "api/v1",
      "timeout": 30.0,
      "headers": {},
      "auth": {"username": "Administrator", "password": null, "token": null}
    }
    ```
    """

    version: str = Field(default="1.0", description="Configuration schema version.")
    base_url: str = Field(
        default="http://localhost:8080/nuxeo",
        description="Server root URL. Overridden by NUXEO_URL.",
    )
    api_path: str = Field(
        default="api/v1",
        description="REST API prefix appended to base_url. Overridden by NUXEO_API_PATH.",
    )
    timeout: float = Field(
        default=30.0,
        gt=0,
        description="Default request timeout in seconds. Overridden by NUXEO_TIMEOUT.",
    )
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Extra headers sent with every request.",
    )
    auth: AuthConfig = Field(default_factory=AuthConfig, description="Authentication settings.")


# =============================================================================
# Loading
# =============================================================================

_ENV_OVERRIDES: dict[str, tuple[str, ...]] = {
    "NUXEO_URL": ("base_url",),
    "NUXEO_API_PATH": ("api_path",),
    "NUXEO_TIMEOUT": ("timeout",),
    "NUXEO_USERNAME": ("auth", "username"),
    "NUXEO_PASSWORD": ("auth", "password"),
    "NUXEO_TOKEN": ("auth", "token"),
}


def apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides to raw config data.

    Args:
        data: Raw configuration dictionary (modified in place).

    Returns:
        The same dictionary, for chaining.
    """
    for env_var, keys in _ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value is None:
            continue
        target = data
        for key in keys[:-1]:
            target = target.setdefault(key, {})
        target[keys[-1]] = value
        logger.debug(f"Config key {'.'.join(keys)} overridden by {env_var}")
    return data


def load_config(path: Path | None = None) -> ClientConfig:
    """Load configuration from a JSON file and the environment.

    A missing file is not an error: defaults are used.

    Args:
        path: Config file path. Defaults to DEFAULT_CONFIG_PATH.

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If the file cannot be read, is not valid JSON, or does
            not match the schema.
    """
    config_path = path or DEFAULT_CONFIG_PATH
    data: dict[str, Any] = {}

    if config_path.exists():
        try:
            data = json.loads(config_path.read_text())
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"Config file {config_path} contains invalid JSON",
                f"JSON parse error at line {e.lineno}, column {e.colno}: {e.msg}",
            ) from e
        except OSError as e:
            raise ConfigError(f"Cannot read config file {config_path}", str(e)) from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {config_path} must contain a JSON object")
    else:
        logger.debug(f"No config file at {config_path}, using defaults")

    apply_env_overrides(data)

    try:
        return ClientConfig(**data)
    except ValidationError as e:
        fields = [
            f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
            for error in e.errors()
        ]
        raise ConfigError("Configuration has invalid structure", "; ".join(fields)) from e


def generate_default_config_json(indent: int = 2) -> str:
    """Generate the default configuration as a formatted JSON string."""
    return ClientConfig().model_dump_json(indent=indent)
