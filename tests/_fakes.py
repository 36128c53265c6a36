"""Test doubles shared across the suite.

Importable by any conftest.py or test file (``from tests._fakes import ...``).
"""

from __future__ import annotations

import asyncio
from typing import Any

from tessera.client import NotFoundError, UpstreamFetchError

CUSTOM_FIELDS: list[dict[str, Any]] = [
    {"id": "customfield_10008", "name": "Story Points", "custom": True, "schema": {"type": "number"}},
    {"id": "customfield_10014", "name": "Epic Link", "custom": True, "schema": {"type": "string"}},
    {"id": "customfield_10020", "name": "Sprint", "custom": True, "schema": {"type": "array"}},
]

SYSTEM_FIELDS: list[dict[str, Any]] = [
    {
        "id": "status",
        "name": "Status",
        "custom": False,
        "schema": {"type": "status"},
        "searchable": True,
        "clauseNames": ["status"],
    },
    {"id": "summary", "name": "Summary", "custom": False, "schema": {"type": "string"}, "searchable": True},
]


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeFieldClient:
    """Backend double exposing only ``list_fields``.

    ``gate`` (when set) blocks every call until released; ``error`` makes
    every call raise it.
    """

    def __init__(
        self,
        fields: list[dict[str, Any]] | None = None,
        *,
        error: Exception | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.fields = fields if fields is not None else SYSTEM_FIELDS + CUSTOM_FIELDS
        self.error = error
        self.gate = gate
        self.calls = 0

    async def list_fields(self) -> list[dict[str, Any]]:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return [dict(f) if isinstance(f, dict) else f for f in self.fields]


SAMPLE_ISSUE: dict[str, Any] = {
    "id": "10001",
    "key": "PROJ-1",
    "self": "https://jira.test/rest/api/2/issue/10001",
    "fields": {
        "summary": "Fix login",
        "status": {"name": "In Progress", "id": "3", "statusCategory": {"key": "indeterminate", "name": "In Progress"}},
        "assignee": {"displayName": "Ada", "emailAddress": "ada@test", "active": True},
        "components": [{"name": "auth", "id": "1"}, {"name": "ui", "id": "2"}],
        "customfield_10008": 5,
    },
}

SAMPLE_PROJECT: dict[str, Any] = {
    "id": "10000",
    "key": "PROJ",
    "name": "Project",
    "lead": {"displayName": "Ada", "name": "ada"},
    "projectTypeKey": "software",
}

SAMPLE_USER: dict[str, Any] = {
    "name": "ada",
    "displayName": "Ada Lovelace",
    "emailAddress": "ada@test",
    "active": True,
    "timeZone": "Europe/London",
}

SAMPLE_BOARD: dict[str, Any] = {
    "id": 7,
    "name": "PROJ board",
    "type": "scrum",
    "location": {"projectKey": "PROJ", "name": "Project"},
}

SAMPLE_SPRINT: dict[str, Any] = {
    "id": 42,
    "name": "Sprint 42",
    "state": "active",
    "goal": "Ship it",
    "originBoardId": 7,
}

SAMPLE_WORKLOG: dict[str, Any] = {
    "id": "900",
    "author": {"displayName": "Ada"},
    "timeSpent": "1h",
    "timeSpentSeconds": 3600,
    "started": "2024-05-01T09:00:00.000+0000",
}

SAMPLE_ATTACHMENT: dict[str, Any] = {
    "id": "500",
    "filename": "trace.log",
    "size": 2048,
    "mimeType": "text/plain",
    "content": "https://jira.test/secure/attachment/500/trace.log",
}

SAMPLE_VERSION: dict[str, Any] = {
    "id": "10100",
    "name": "1.0",
    "released": True,
    "archived": False,
    "releaseDate": "2024-06-01",
}

SAMPLE_SERVER_INFO: dict[str, Any] = {
    "baseUrl": "https://jira.test",
    "version": "9.12.0",
    "versionNumbers": [9, 12, 0],
    "deploymentType": "Server",
    "buildNumber": 912000,
    "buildDate": "2024-01-01T00:00:00.000+0000",
    "scmInfo": "abc123",
    "serverTitle": "Test Jira",
}


class FakeJiraBackend(FakeFieldClient):
    """In-memory stand-in for JiraClient used by tool handler tests.

    Records ``(method, args)`` in ``requests``. Keys listed in ``missing``
    raise NotFoundError; ``failure`` (when set) is raised by every
    non-field call.
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.requests: list[tuple[str, dict[str, Any]]] = []
        self.missing: set[str] = set()
        self.failure: UpstreamFetchError | None = None
        self.closed = False

    def _record(self, method: str, key: str | None = None, **args: Any) -> None:
        self.requests.append((method, args))
        if self.failure is not None:
            raise self.failure
        if key is not None and key in self.missing:
            msg = f"Jira API error 404: {key} does not exist"
            raise NotFoundError(msg, status_code=404)

    async def search_fields(self, query: str | None = None) -> list[dict[str, Any]]:
        fields = await self.list_fields()
        if not query:
            return fields
        needle = query.lower()
        return [f for f in fields if needle in f["name"].lower() or needle in f["id"].lower()]

    async def get_issue(self, issue_key: str, fields: list[str] | None = None) -> dict[str, Any]:
        self._record("get_issue", issue_key, issue_key=issue_key, fields=fields)
        return {**SAMPLE_ISSUE, "key": issue_key}

    async def search_issues(
        self, jql: str, *, start_at: int = 0, max_results: int = 50, fields: list[str] | None = None
    ) -> dict[str, Any]:
        self._record("search_issues", jql=jql, start_at=start_at, max_results=max_results, fields=fields)
        return {"issues": [SAMPLE_ISSUE], "total": 3, "startAt": start_at, "maxResults": max_results}

    async def get_issue_transitions(self, issue_key: str) -> list[dict[str, Any]]:
        self._record("get_issue_transitions", issue_key, issue_key=issue_key)
        return [{"id": "31", "name": "Done", "to": {"name": "Done"}}]

    async def get_issue_worklogs(self, issue_key: str) -> list[dict[str, Any]]:
        self._record("get_issue_worklogs", issue_key, issue_key=issue_key)
        return [SAMPLE_WORKLOG]

    async def get_issue_attachments(self, issue_key: str) -> list[dict[str, Any]]:
        self._record("get_issue_attachments", issue_key, issue_key=issue_key)
        return [SAMPLE_ATTACHMENT]

    async def get_all_projects(self, *, include_archived: bool = False) -> list[dict[str, Any]]:
        self._record("get_all_projects", include_archived=include_archived)
        return [SAMPLE_PROJECT]

    async def get_project(self, project_key: str) -> dict[str, Any]:
        self._record("get_project", project_key, project_key=project_key)
        return SAMPLE_PROJECT

    async def get_project_issues(
        self, project_key: str, *, start_at: int = 0, max_results: int = 50, fields: list[str] | None = None
    ) -> dict[str, Any]:
        self._record(
            "get_project_issues",
            project_key,
            project_key=project_key,
            start_at=start_at,
            max_results=max_results,
            fields=fields,
        )
        return {"issues": [SAMPLE_ISSUE], "total": 1, "startAt": start_at, "maxResults": max_results}

    async def get_project_versions(self, project_key: str) -> list[dict[str, Any]]:
        self._record("get_project_versions", project_key, project_key=project_key)
        return [SAMPLE_VERSION]

    async def get_current_user(self) -> dict[str, Any]:
        self._record("get_current_user")
        return SAMPLE_USER

    async def get_user(self, username: str) -> dict[str, Any]:
        self._record("get_user", username, username=username)
        return SAMPLE_USER

    async def get_agile_boards(self, project_key: str | None = None) -> list[dict[str, Any]]:
        self._record("get_agile_boards", project_key=project_key)
        return [SAMPLE_BOARD]

    async def get_sprint(self, sprint_id: int) -> dict[str, Any]:
        self._record("get_sprint", str(sprint_id), sprint_id=sprint_id)
        return SAMPLE_SPRINT

    async def get_board_issues(
        self, board_id: int, *, start_at: int = 0, max_results: int = 50, fields: list[str] | None = None
    ) -> dict[str, Any]:
        self._record(
            "get_board_issues",
            str(board_id),
            board_id=board_id,
            start_at=start_at,
            max_results=max_results,
            fields=fields,
        )
        return {"issues": [SAMPLE_ISSUE], "total": 60, "startAt": start_at, "maxResults": max_results}

    async def get_board_sprints(self, board_id: int) -> list[dict[str, Any]]:
        self._record("get_board_sprints", str(board_id), board_id=board_id)
        return [SAMPLE_SPRINT]

    async def get_sprint_issues(
        self, sprint_id: int, *, start_at: int = 0, max_results: int = 50, fields: list[str] | None = None
    ) -> dict[str, Any]:
        self._record(
            "get_sprint_issues",
            str(sprint_id),
            sprint_id=sprint_id,
            start_at=start_at,
            max_results=max_results,
            fields=fields,
        )
        return {"issues": [SAMPLE_ISSUE], "total": 1, "startAt": start_at, "maxResults": max_results}

    async def get_server_info(self) -> dict[str, Any]:
        self._record("get_server_info")
        return {"version": "9.12.0", "deploymentType": "Server"}

    async def get_system_info(self) -> dict[str, Any]:
        self._record("get_system_info")
        return SAMPLE_SERVER_INFO

    async def aclose(self) -> None:
        self.closed = True
