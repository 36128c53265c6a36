"""Shared pytest fixtures for tessera tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tessera.config import ServerConfig
from tessera.context import AppContext
from tessera.resolver import StaticFieldResolver
from tests._fakes import FakeClock, FakeFieldClient, FakeJiraBackend


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def field_client() -> FakeFieldClient:
    return FakeFieldClient()


@pytest.fixture
def static_resolver() -> StaticFieldResolver:
    return StaticFieldResolver()


@pytest.fixture
def backend() -> FakeJiraBackend:
    return FakeJiraBackend()


@pytest.fixture
def server_config(tmp_path: Path) -> ServerConfig:
    return ServerConfig(
        jira_url="https://jira.test",
        personal_token="tok-1234567890",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def app_ctx(static_resolver: StaticFieldResolver, backend: FakeJiraBackend, server_config: ServerConfig) -> AppContext:
    """AppContext over the static catalogs and an in-memory backend."""
    return AppContext(
        resolver=static_resolver,
        client=backend,
        logger=logging.getLogger("tessera.test"),
        config=server_config,
    )


@pytest.fixture
def env() -> dict[str, str]:
    """Minimal valid environment for load_config."""
    return {"JIRA_URL": "https://jira.test", "JIRA_PERSONAL_TOKEN": "tok-1234567890"}
