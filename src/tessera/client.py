# src/tessera/client.py
"""Async HTTP client for the Jira REST API v2 and Agile API 1.0.

Thin pass-through over httpx: authentication, retries with exponential
backoff, and error mapping. Callers get decoded JSON back unchanged.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any
from urllib.parse import quote

import httpx

from tessera.config import ServerConfig
from tessera.types.core import RawFieldDescriptor

logger = logging.getLogger(__name__)

API_PREFIX = "/rest/api/2"
AGILE_PREFIX = "/rest/agile/1.0"
DEFAULT_MAX_RETRIES = 3
DEFAULT_BACKOFF_SECONDS = 1.0
DEFAULT_PAGE_SIZE = 50
SYSTEM_INFO_REQUIRED_KEYS = (
    "baseUrl",
    "version",
    "versionNumbers",
    "deploymentType",
    "buildNumber",
    "buildDate",
    "scmInfo",
)


class UpstreamFetchError(Exception):
    """Backend call failed: transport error, HTTP error status, or bad payload."""

    def __init__(self, message: str, *, status_code: int | None = None, retryable: bool = False) -> None:
        self.status_code = status_code
        self.retryable = retryable
        super().__init__(message)


class AuthenticationError(UpstreamFetchError):
    """Credentials rejected (401) or access denied (403)."""


class NotFoundError(UpstreamFetchError):
    """The requested entity does not exist or is not visible (404)."""


def _segment(value: str | int) -> str:
    return quote(str(value), safe="")


def _jql_value(value: str) -> str:
    """Quote a JQL operand that contains whitespace or a dash."""
    if any(ch.isspace() or ch == "-" for ch in value):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return value


class JiraClient:
    """Async client bound to one Jira site.

    Retries 429, 5xx, timeouts and transport errors up to ``max_retries``
    attempts in total, honouring ``Retry-After`` when present. Other 4xx
    responses fail immediately.
    """

    def __init__(
        self,
        base_url: str,
        *,
        personal_token: str | None = None,
        username: str | None = None,
        password: str | None = None,
        timeout: float = 30.0,
        verify: bool = True,
        max_retries: int = DEFAULT_MAX_RETRIES,
        backoff_seconds: float = DEFAULT_BACKOFF_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        if max_retries < 1:
            msg = f"max_retries must be >= 1, got {max_retries}"
            raise ValueError(msg)
        headers = {"Accept": "application/json"}
        auth: httpx.Auth | None = None
        if personal_token:
            headers["Authorization"] = f"Bearer {personal_token}"
        elif username and password:
            auth = httpx.BasicAuth(username, password)
        self._base_url = base_url.rstrip("/")
        self._max_retries = max_retries
        self._backoff = backoff_seconds
        self._sleep = sleep
        self._http = httpx.AsyncClient(
            base_url=self._base_url,
            headers=headers,
            auth=auth,
            timeout=timeout,
            verify=verify,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: ServerConfig, **kwargs: Any) -> JiraClient:
        return cls(
            config.jira_url,
            personal_token=config.personal_token,
            username=config.username,
            password=config.password,
            timeout=config.timeout_seconds,
            verify=config.ssl_verify,
            **kwargs,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> JiraClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # -- Transport ----------------------------------------------------------

    @staticmethod
    def _parse_retry_after(response: httpx.Response) -> float | None:
        value = response.headers.get("Retry-After")
        if not value:
            return None
        try:
            return max(float(value), 0.0)
        except ValueError:
            return None

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return response.text[:200] if response.text else "Unknown error"
        if isinstance(data, dict):
            messages = data.get("errorMessages")
            if isinstance(messages, list) and messages:
                return "; ".join(str(m) for m in messages)
            errors = data.get("errors")
            if isinstance(errors, dict) and errors:
                return "; ".join(f"{k}: {v}" for k, v in errors.items())
            if "message" in data:
                return str(data["message"])
        return response.text[:200]

    def _raise_for_status(self, response: httpx.Response) -> None:
        status = response.status_code
        if status < 400:
            return
        detail = self._error_message(response)
        message = f"Jira API error {status}: {detail}"
        if status in (401, 403):
            raise AuthenticationError(message, status_code=status)
        if status == 404:
            raise NotFoundError(message, status_code=status)
        raise UpstreamFetchError(message, status_code=status, retryable=status == 429 or status >= 500)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        attempt = 0
        while True:
            wait = self._backoff * (2**attempt)
            try:
                response = await self._http.request(method, path, params=params, json=json)
            except httpx.TimeoutException as exc:
                error = UpstreamFetchError(f"Request to {path} timed out: {exc}", retryable=True)
            except httpx.RequestError as exc:
                error = UpstreamFetchError(f"Request to {path} failed: {exc}", retryable=True)
            else:
                try:
                    self._raise_for_status(response)
                except UpstreamFetchError as exc:
                    if not exc.retryable:
                        raise
                    error = exc
                    retry_after = self._parse_retry_after(response)
                    if retry_after is not None:
                        wait = retry_after
                else:
                    try:
                        return response.json()
                    except ValueError:
                        msg = f"Jira API returned a non-JSON body for {method} {path}"
                        raise UpstreamFetchError(msg, status_code=response.status_code) from None

            attempt += 1
            if attempt >= self._max_retries:
                raise error
            logger.warning(
                "Jira request failed, retrying in %ss (attempt %d/%d): %s",
                wait,
                attempt,
                self._max_retries,
                error,
                extra={"context": {"method": method, "path": path, "status_code": error.status_code}},
            )
            await self._sleep(wait)

    async def _get(self, path: str, **params: Any) -> Any:
        return await self._request("GET", path, params={k: v for k, v in params.items() if v is not None} or None)

    # -- Fields -------------------------------------------------------------

    async def list_fields(self) -> list[RawFieldDescriptor]:
        """Enumerate every system and custom field defined on the site."""
        data = await self._get(f"{API_PREFIX}/field")
        if not isinstance(data, list):
            msg = f"Expected a list of fields, got {type(data).__name__}"
            raise UpstreamFetchError(msg)
        return data

    async def search_fields(self, query: str | None = None) -> list[RawFieldDescriptor]:
        """List fields whose name or id contains *query* (case-insensitive)."""
        fields = await self.list_fields()
        needle = (query or "").strip().lower()
        if not needle:
            return fields
        return [
            f
            for f in fields
            if needle in str(f.get("name", "")).lower() or needle in str(f.get("id", "")).lower()
        ]

    # -- Issues -------------------------------------------------------------

    async def get_issue(self, issue_key: str, fields: list[str] | None = None) -> dict[str, Any]:
        return await self._get(
            f"{API_PREFIX}/issue/{_segment(issue_key)}",
            fields=",".join(fields) if fields is not None else None,
        )

    async def search_issues(
        self,
        jql: str,
        *,
        start_at: int = 0,
        max_results: int = DEFAULT_PAGE_SIZE,
        fields: list[str] | None = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"jql": jql, "startAt": start_at, "maxResults": max_results}
        if fields is not None:
            body["fields"] = fields
        return await self._request("POST", f"{API_PREFIX}/search", json=body)

    async def get_issue_transitions(self, issue_key: str) -> list[dict[str, Any]]:
        data = await self._get(f"{API_PREFIX}/issue/{_segment(issue_key)}/transitions")
        if not isinstance(data, dict):
            return []
        transitions = data.get("transitions", [])
        return transitions if isinstance(transitions, list) else []

    async def get_issue_worklogs(self, issue_key: str) -> list[dict[str, Any]]:
        data = await self._get(f"{API_PREFIX}/issue/{_segment(issue_key)}/worklog")
        if not isinstance(data, dict):
            return []
        worklogs = data.get("worklogs", [])
        return worklogs if isinstance(worklogs, list) else []

    async def get_issue_attachments(self, issue_key: str) -> list[dict[str, Any]]:
        """Attachment metadata for an issue; content is not downloaded."""
        issue = await self.get_issue(issue_key, fields=["attachment"])
        fields = issue.get("fields") if isinstance(issue, dict) else None
        attachments = fields.get("attachment", []) if isinstance(fields, dict) else []
        return attachments if isinstance(attachments, list) else []

    # -- Projects -----------------------------------------------------------

    async def get_all_projects(self, *, include_archived: bool = False) -> list[dict[str, Any]]:
        data = await self._get(f"{API_PREFIX}/project", includeArchived="true" if include_archived else None)
        return data if isinstance(data, list) else []

    async def get_project(self, project_key: str) -> dict[str, Any]:
        return await self._get(f"{API_PREFIX}/project/{_segment(project_key)}")

    async def get_project_issues(
        self,
        project_key: str,
        *,
        start_at: int = 0,
        max_results: int = DEFAULT_PAGE_SIZE,
        fields: list[str] | None = None,
    ) -> dict[str, Any]:
        jql = f"project = {_jql_value(project_key)}"
        return await self.search_issues(jql, start_at=start_at, max_results=max_results, fields=fields)

    async def get_project_versions(self, project_key: str) -> list[dict[str, Any]]:
        data = await self._get(f"{API_PREFIX}/project/{_segment(project_key)}/versions")
        return data if isinstance(data, list) else []

    # -- Users --------------------------------------------------------------

    async def get_current_user(self) -> dict[str, Any]:
        return await self._get(f"{API_PREFIX}/myself")

    async def get_user(self, username: str) -> dict[str, Any]:
        """Look a user up by username or email address."""
        data = await self._get(f"{API_PREFIX}/user/search", username=username)
        if not isinstance(data, list) or not data:
            msg = f"User not found: {username}"
            raise NotFoundError(msg, status_code=404)
        return data[0]

    # -- Agile --------------------------------------------------------------

    async def get_agile_boards(self, project_key: str | None = None) -> list[dict[str, Any]]:
        data = await self._get(f"{AGILE_PREFIX}/board", projectKeyOrId=project_key)
        if not isinstance(data, dict):
            return []
        values = data.get("values", [])
        return values if isinstance(values, list) else []

    async def get_board_issues(
        self,
        board_id: int,
        *,
        start_at: int = 0,
        max_results: int = DEFAULT_PAGE_SIZE,
        fields: list[str] | None = None,
    ) -> dict[str, Any]:
        return await self._get(
            f"{AGILE_PREFIX}/board/{_segment(board_id)}/issue",
            startAt=start_at,
            maxResults=max_results,
            fields=",".join(fields) if fields is not None else None,
        )

    async def get_board_sprints(self, board_id: int) -> list[dict[str, Any]]:
        data = await self._get(f"{AGILE_PREFIX}/board/{_segment(board_id)}/sprint")
        if not isinstance(data, dict):
            return []
        values = data.get("values", [])
        return values if isinstance(values, list) else []

    async def get_sprint(self, sprint_id: int) -> dict[str, Any]:
        return await self._get(f"{AGILE_PREFIX}/sprint/{_segment(sprint_id)}")

    async def get_sprint_issues(
        self,
        sprint_id: int,
        *,
        start_at: int = 0,
        max_results: int = DEFAULT_PAGE_SIZE,
        fields: list[str] | None = None,
    ) -> dict[str, Any]:
        return await self.search_issues(
            f"sprint = {sprint_id}", start_at=start_at, max_results=max_results, fields=fields
        )

    # -- System -------------------------------------------------------------

    async def get_server_info(self) -> dict[str, Any]:
        return await self._get(f"{API_PREFIX}/serverInfo")

    async def get_system_info(self) -> dict[str, Any]:
        """Full ``serverInfo`` payload, rejected when core build details are absent."""
        data = await self.get_server_info()
        missing = [k for k in SYSTEM_INFO_REQUIRED_KEYS if not isinstance(data, dict) or k not in data]
        if missing:
            msg = f"Incomplete system information from Jira: missing {', '.join(missing)}"
            raise UpstreamFetchError(msg, status_code=500)
        return data
