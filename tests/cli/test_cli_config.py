"""Tests for CLI app configuration and the config command group."""

import json
from unittest.mock import patch

from nuxeo_workflow import __version__
from nuxeo_workflow.cli import app


class TestCLIAppConfiguration:
    """Tests for CLI app configuration."""

    def test_app_name(self):
        assert app.info.name == "nuxeo-tasks"

    def test_app_commands_registered(self, cli_runner):
        result = cli_runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("show", "list", "complete", "reassign", "delegate", "config"):
            assert command in result.output

    def test_version(self, cli_runner):
        result = cli_runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestConfigCommands:
    """Tests for `config init` and `config show`."""

    def test_init_writes_default_config(self, cli_runner, temp_dir):
        path = temp_dir / "nested" / "config.json"

        result = cli_runner.invoke(app, ["--config", str(path), "config", "init"])

        assert result.exit_code == 0
        assert json.loads(path.read_text())["base_url"] == "http://localhost:8080/nuxeo"

    def test_init_refuses_to_overwrite(self, cli_runner, temp_dir):
        path = temp_dir / "config.json"
        path.write_text("{}")

        result = cli_runner.invoke(app, ["--config", str(path), "config", "init"])

        assert result.exit_code == 1
        assert path.read_text() == "{}"

    def test_init_force_overwrites(self, cli_runner, temp_dir):
        path = temp_dir / "config.json"
        path.write_text("{}")

        result = cli_runner.invoke(app, ["--config", str(path), "config", "init", "--force"])

        assert result.exit_code == 0
        assert "api_path" in json.loads(path.read_text())

    def test_init_uses_default_path(self, cli_runner, temp_dir):
        path = temp_dir / "default.json"
        with patch("nuxeo_workflow.cli_commands.config.DEFAULT_CONFIG_PATH", path):
            result = cli_runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        assert path.exists()

    def test_show_masks_secrets(self, cli_runner, temp_dir):
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"auth": {"username": "bob", "password": "hunter2"}}))

        result = cli_runner.invoke(app, ["--config", str(path), "config", "show"])

        assert result.exit_code == 0
        assert "bob" in result.output
        assert "hunter2" not in result.output
        assert "********" in result.output

    def test_show_reports_invalid_config(self, cli_runner, temp_dir):
        path = temp_dir / "config.json"
        path.write_text("{broken")

        result = cli_runner.invoke(app, ["--config", str(path), "config", "show"])

        assert result.exit_code == 1
        assert "Error" in result.output
