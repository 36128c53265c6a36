"""Tests for the tessera CLI."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import uvicorn
from click.testing import CliRunner

from tessera import __version__
from tessera.cli import cli
from tessera.context import AppContext
from tessera.resolver import build_resolver
from tests._fakes import FakeJiraBackend

_JIRA_VARS = ("JIRA_URL", "JIRA_PERSONAL_TOKEN", "JIRA_USERNAME", "JIRA_PASSWORD")


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def no_jira_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in _JIRA_VARS:
        monkeypatch.delenv(var, raising=False)


class TestVersion:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestFieldsList:
    def test_text(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["fields", "list"])
        assert result.exit_code == 0
        assert "jira://issue/fields" in result.output
        assert "jira://agile/fields" in result.output

    def test_json(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["fields", "list", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data) == 4
        assert {r["mime_type"] for r in data} == {"application/json"}


class TestFieldsShow:
    def test_text(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["fields", "show", "issue"])
        assert result.exit_code == 0
        assert result.output.startswith("jira://issue/fields")
        assert "status.statusCategory.key" in result.output

    def test_json(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["fields", "show", "user", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["entity_type"] == "user"
        assert data["path_index"]["displayName"] == "displayName"

    def test_unknown_entity(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["fields", "show", "widget"])
        assert result.exit_code == 1
        assert "Unknown entity type: widget" in result.output

    def test_unknown_entity_json(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["fields", "show", "widget", "--json"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"].startswith("Unknown entity type: widget")

    def test_dynamic(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch, app_ctx: AppContext) -> None:
        backend = FakeJiraBackend()
        hybrid = AppContext(
            resolver=build_resolver(backend, enable_dynamic=True),
            client=backend,
            logger=app_ctx.logger,
            config=app_ctx.config,
        )
        calls: list[dict[str, Any]] = []

        def fake_load(config_file: Path | None, **kwargs: Any) -> AppContext:
            calls.append(kwargs)
            return hybrid

        monkeypatch.setattr("tessera.cli_commands.fields.load_cli_context", fake_load)
        result = runner.invoke(cli, ["fields", "show", "issue", "--dynamic"])
        assert result.exit_code == 0
        line = next(ln for ln in result.output.splitlines() if ln.startswith("customfield_10008: Story Points"))
        assert line.endswith("[dynamic]")
        assert calls[0]["enable_dynamic"] is True
        assert backend.closed is True

    def test_dynamic_without_config(self, runner: CliRunner, no_jira_env: None) -> None:
        result = runner.invoke(cli, ["fields", "show", "issue", "--dynamic"])
        assert result.exit_code == 1
        assert "JIRA_URL is required" in result.output


class TestFieldsValidate:
    def test_all_valid(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["fields", "validate", "issue", "status.name", "customfield_10008"])
        assert result.exit_code == 0
        assert "ok       status.name" in result.output
        assert "ok       customfield_10008" in result.output

    def test_invalid_with_suggestion(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["fields", "validate", "issue", "status.nmae"])
        assert result.exit_code == 1
        assert "invalid  status.nmae  (did you mean: status.name" in result.output

    def test_json(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["fields", "validate", "project", "key", "bogus", "--json"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["valid_paths"] == ["key"]
        assert data["invalid_paths"] == ["bogus"]

    def test_unknown_entity(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["fields", "validate", "widget", "a"])
        assert result.exit_code == 1
        assert "Unknown entity type: widget" in result.output

    def test_paths_required(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["fields", "validate", "issue"])
        assert result.exit_code == 2


class TestServe:
    def test_http_mode(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch, app_ctx: AppContext) -> None:
        seen: dict[str, Any] = {}

        def fake_run(app: Any, **kwargs: Any) -> None:
            seen["app"] = app
            seen.update(kwargs)

        monkeypatch.setattr("tessera.cli_commands.server.load_cli_context", lambda config_file: app_ctx)
        monkeypatch.setattr(uvicorn, "run", fake_run)
        result = runner.invoke(cli, ["serve", "--http", "--port", "9001"])
        assert result.exit_code == 0
        assert seen["host"] == "127.0.0.1"
        assert seen["port"] == 9001
        assert seen["log_level"] == "warning"
        assert "http://127.0.0.1:9001/mcp" in result.output

    def test_http_mode_bad_config(self, runner: CliRunner, no_jira_env: None) -> None:
        result = runner.invoke(cli, ["serve", "--http"])
        assert result.exit_code == 1
        assert "JIRA_URL is required" in result.output
