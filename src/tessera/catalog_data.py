# src/tessera/catalog_data.py
"""Built-in field catalogs for the backend entity types.

Logic lives in catalog.py; this file is pure data.

Each catalog is a JSON-compatible dict with an ``entity_type``, a
``version`` and a ``fields`` mapping of field id -> field dict. A field dict
carries ``name``, ``description``, ``type`` (object/string/array),
``access_paths`` (list of {path, description, type, frequency}),
``examples`` and ``common_usage``.

Array element paths use ``name[].child`` notation. Within one catalog no
access path may appear under two fields (checked at build time).
"""

from __future__ import annotations

from typing import Any

CATALOG_VERSION = "1.0.0"

# ---------------------------------------------------------------------------
# Issue -- core issue fields returned by GET /rest/api/2/issue/{key}
# ---------------------------------------------------------------------------

_ISSUE_CATALOG: dict[str, Any] = {
    "entity_type": "issue",
    "version": CATALOG_VERSION,
    "fields": {
        "status": {
            "name": "Status",
            "description": "Current issue status and its category information",
            "type": "object",
            "access_paths": [
                {"path": "status.name", "description": "Status name (e.g. 'In Progress', 'Done')", "type": "string", "frequency": "high"},
                {"path": "status.statusCategory.key", "description": "Status category key (new, indeterminate, done)", "type": "string", "frequency": "high"},
                {"path": "status.statusCategory.name", "description": "Status category display name", "type": "string", "frequency": "medium"},
                {"path": "status.statusCategory.id", "description": "Status category numeric id", "type": "number", "frequency": "low"},
                {"path": "status.statusCategory.colorName", "description": "Status category colour", "type": "string", "frequency": "low"},
                {"path": "status.statusCategory.self", "description": "Status category REST URL", "type": "string", "frequency": "low"},
                {"path": "status.id", "description": "Status id", "type": "string", "frequency": "medium"},
                {"path": "status.description", "description": "Status description", "type": "string", "frequency": "low"},
                {"path": "status.iconUrl", "description": "Status icon URL", "type": "string", "frequency": "low"},
                {"path": "status.self", "description": "Status REST URL", "type": "string", "frequency": "low"},
                {"path": "status.scope", "description": "Status scope (team-managed projects)", "type": "object", "frequency": "low"},
            ],
            "examples": ["status.name", "status.statusCategory.key"],
            "common_usage": [
                ["status.name", "status.statusCategory.key"],
                ["status.name", "status.id"],
                ["status.statusCategory.key"],
            ],
        },
        "assignee": {
            "name": "Assignee",
            "description": "Issue assignee user information",
            "type": "object",
            "access_paths": [
                {"path": "assignee.displayName", "description": "Assignee display name", "type": "string", "frequency": "high"},
                {"path": "assignee.emailAddress", "description": "Assignee email address", "type": "string", "frequency": "high"},
                {"path": "assignee.active", "description": "Whether the assignee account is active", "type": "boolean", "frequency": "medium"},
                {"path": "assignee.name", "description": "Assignee username", "type": "string", "frequency": "medium"},
                {"path": "assignee.key", "description": "Assignee user key", "type": "string", "frequency": "medium"},
                {"path": "assignee.accountId", "description": "Assignee account id", "type": "string", "frequency": "medium"},
                {"path": "assignee.self", "description": "Assignee REST URL", "type": "string", "frequency": "low"},
                {"path": "assignee.avatarUrls.48x48", "description": "Large avatar URL", "type": "string", "frequency": "low"},
                {"path": "assignee.avatarUrls.32x32", "description": "Medium avatar URL", "type": "string", "frequency": "low"},
                {"path": "assignee.avatarUrls.24x24", "description": "Small avatar URL", "type": "string", "frequency": "low"},
                {"path": "assignee.avatarUrls.16x16", "description": "Extra small avatar URL", "type": "string", "frequency": "low"},
                {"path": "assignee.timeZone", "description": "Assignee time zone", "type": "string", "frequency": "low"},
            ],
            "examples": ["assignee.displayName", "assignee.emailAddress"],
            "common_usage": [
                ["assignee.displayName", "assignee.emailAddress"],
                ["assignee.displayName", "assignee.active"],
                ["assignee.name", "assignee.key"],
            ],
        },
        "reporter": {
            "name": "Reporter",
            "description": "User who reported the issue",
            "type": "object",
            "access_paths": [
                {"path": "reporter.displayName", "description": "Reporter display name", "type": "string", "frequency": "high"},
                {"path": "reporter.emailAddress", "description": "Reporter email address", "type": "string", "frequency": "high"},
                {"path": "reporter.active", "description": "Whether the reporter account is active", "type": "boolean", "frequency": "medium"},
                {"path": "reporter.name", "description": "Reporter username", "type": "string", "frequency": "medium"},
                {"path": "reporter.key", "description": "Reporter user key", "type": "string", "frequency": "medium"},
                {"path": "reporter.accountId", "description": "Reporter account id", "type": "string", "frequency": "medium"},
                {"path": "reporter.self", "description": "Reporter REST URL", "type": "string", "frequency": "low"},
                {"path": "reporter.avatarUrls.48x48", "description": "Large avatar URL", "type": "string", "frequency": "low"},
            ],
            "examples": ["reporter.displayName"],
            "common_usage": [["reporter.displayName"], ["reporter.displayName", "reporter.emailAddress"]],
        },
        "project": {
            "name": "Project",
            "description": "Project information and metadata",
            "type": "object",
            "access_paths": [
                {"path": "project.name", "description": "Project name", "type": "string", "frequency": "high"},
                {"path": "project.key", "description": "Project key (e.g. 'PROJ')", "type": "string", "frequency": "high"},
                {"path": "project.id", "description": "Project id", "type": "string", "frequency": "medium"},
                {"path": "project.description", "description": "Project description", "type": "string", "frequency": "medium"},
                {"path": "project.lead.displayName", "description": "Project lead display name", "type": "string", "frequency": "medium"},
                {"path": "project.lead.emailAddress", "description": "Project lead email address", "type": "string", "frequency": "medium"},
                {"path": "project.projectCategory.name", "description": "Project category name", "type": "string", "frequency": "medium"},
                {"path": "project.projectCategory.id", "description": "Project category id", "type": "string", "frequency": "low"},
                {"path": "project.projectCategory.description", "description": "Project category description", "type": "string", "frequency": "low"},
                {"path": "project.projectCategory.self", "description": "Project category REST URL", "type": "string", "frequency": "low"},
                {"path": "project.projectTypeKey", "description": "Project type (software, business, ...)", "type": "string", "frequency": "medium"},
                {"path": "project.simplified", "description": "Whether the project is team-managed", "type": "boolean", "frequency": "low"},
                {"path": "project.style", "description": "Project style (classic, next-gen)", "type": "string", "frequency": "low"},
                {"path": "project.url", "description": "Project home page URL", "type": "string", "frequency": "low"},
                {"path": "project.self", "description": "Project REST URL", "type": "string", "frequency": "low"},
            ],
            "examples": ["project.name", "project.key"],
            "common_usage": [
                ["project.name", "project.key"],
                ["project.key", "project.id"],
                ["project.name", "project.projectCategory.name"],
            ],
        },
        "priority": {
            "name": "Priority",
            "description": "Issue priority level",
            "type": "object",
            "access_paths": [
                {"path": "priority.name", "description": "Priority name (e.g. 'High')", "type": "string", "frequency": "high"},
                {"path": "priority.id", "description": "Priority id", "type": "string", "frequency": "medium"},
                {"path": "priority.description", "description": "Priority description", "type": "string", "frequency": "low"},
                {"path": "priority.iconUrl", "description": "Priority icon URL", "type": "string", "frequency": "low"},
            ],
            "examples": ["priority.name"],
            "common_usage": [["priority.name"], ["priority.name", "priority.id"]],
        },
        "issuetype": {
            "name": "Issue Type",
            "description": "Issue type classification",
            "type": "object",
            "access_paths": [
                {"path": "issuetype.name", "description": "Issue type name (e.g. 'Bug', 'Story')", "type": "string", "frequency": "high"},
                {"path": "issuetype.id", "description": "Issue type id", "type": "string", "frequency": "medium"},
                {"path": "issuetype.subtask", "description": "Whether this is a sub-task type", "type": "boolean", "frequency": "medium"},
                {"path": "issuetype.description", "description": "Issue type description", "type": "string", "frequency": "low"},
                {"path": "issuetype.iconUrl", "description": "Issue type icon URL", "type": "string", "frequency": "low"},
                {"path": "issuetype.avatarId", "description": "Issue type avatar id", "type": "number", "frequency": "low"},
            ],
            "examples": ["issuetype.name"],
            "common_usage": [
                ["issuetype.name"],
                ["issuetype.name", "issuetype.subtask"],
                ["issuetype.id", "issuetype.name"],
            ],
        },
        "resolution": {
            "name": "Resolution",
            "description": "Issue resolution information",
            "type": "object",
            "access_paths": [
                {"path": "resolution.name", "description": "Resolution name (e.g. 'Fixed')", "type": "string", "frequency": "high"},
                {"path": "resolution.id", "description": "Resolution id", "type": "string", "frequency": "medium"},
                {"path": "resolution.description", "description": "Resolution description", "type": "string", "frequency": "low"},
                {"path": "resolution.self", "description": "Resolution REST URL", "type": "string", "frequency": "low"},
            ],
            "examples": ["resolution.name"],
            "common_usage": [["resolution.name"]],
        },
        "summary": {
            "name": "Summary",
            "description": "Issue summary/title",
            "type": "string",
            "access_paths": [
                {"path": "summary", "description": "Issue summary text", "type": "string", "frequency": "high"},
            ],
            "examples": ["summary"],
            "common_usage": [["summary"]],
        },
        "description": {
            "name": "Description",
            "description": "Issue description content",
            "type": "string",
            "access_paths": [
                {"path": "description", "description": "Issue description text", "type": "string", "frequency": "high"},
            ],
            "examples": ["description"],
            "common_usage": [["description"]],
        },
        "created": {
            "name": "Created",
            "description": "Issue creation timestamp",
            "type": "string",
            "access_paths": [
                {"path": "created", "description": "ISO-8601 creation timestamp", "type": "string", "frequency": "high"},
            ],
            "examples": ["created"],
            "common_usage": [["created"]],
        },
        "updated": {
            "name": "Updated",
            "description": "Issue last update timestamp",
            "type": "string",
            "access_paths": [
                {"path": "updated", "description": "ISO-8601 last update timestamp", "type": "string", "frequency": "high"},
            ],
            "examples": ["updated"],
            "common_usage": [["updated"]],
        },
        "labels": {
            "name": "Labels",
            "description": "Issue labels array",
            "type": "array",
            "access_paths": [
                {"path": "labels", "description": "All labels attached to the issue", "type": "string[]", "frequency": "high"},
            ],
            "examples": ["labels"],
            "common_usage": [["labels"]],
        },
        "components": {
            "name": "Components",
            "description": "Issue components array",
            "type": "array",
            "access_paths": [
                {"path": "components[].name", "description": "Component names", "type": "string", "frequency": "high"},
                {"path": "components[].id", "description": "Component ids", "type": "string", "frequency": "medium"},
                {"path": "components[].description", "description": "Component descriptions", "type": "string", "frequency": "low"},
                {"path": "components[].self", "description": "Component REST URLs", "type": "string", "frequency": "low"},
            ],
            "examples": ["components[].name"],
            "common_usage": [["components[].name"]],
        },
        "fixVersions": {
            "name": "Fix Versions",
            "description": "Issue fix versions array",
            "type": "array",
            "access_paths": [
                {"path": "fixVersions[].name", "description": "Fix version names", "type": "string", "frequency": "high"},
                {"path": "fixVersions[].id", "description": "Fix version ids", "type": "string", "frequency": "medium"},
                {"path": "fixVersions[].description", "description": "Fix version descriptions", "type": "string", "frequency": "low"},
                {"path": "fixVersions[].releaseDate", "description": "Fix version release dates", "type": "string", "frequency": "medium"},
                {"path": "fixVersions[].released", "description": "Whether each fix version is released", "type": "boolean", "frequency": "medium"},
            ],
            "examples": ["fixVersions[].name"],
            "common_usage": [["fixVersions[].name", "fixVersions[].released"]],
        },
    },
}

# ---------------------------------------------------------------------------
# Project -- GET /rest/api/2/project/{key}
# ---------------------------------------------------------------------------

_PROJECT_CATALOG: dict[str, Any] = {
    "entity_type": "project",
    "version": CATALOG_VERSION,
    "fields": {
        "key": {
            "name": "Project Key",
            "description": "Unique project key identifier",
            "type": "string",
            "access_paths": [
                {"path": "key", "description": "Project key (e.g. 'PROJ')", "type": "string", "frequency": "high"},
            ],
            "examples": ["key"],
            "common_usage": [["key"]],
        },
        "name": {
            "name": "Project Name",
            "description": "Human-readable project name",
            "type": "string",
            "access_paths": [
                {"path": "name", "description": "Project display name", "type": "string", "frequency": "high"},
            ],
            "examples": ["name"],
            "common_usage": [["name"]],
        },
        "id": {
            "name": "Project ID",
            "description": "Numeric project identifier",
            "type": "string",
            "access_paths": [
                {"path": "id", "description": "Project id", "type": "string", "frequency": "medium"},
            ],
            "examples": ["id"],
            "common_usage": [["id"]],
        },
        "description": {
            "name": "Description",
            "description": "Project description text",
            "type": "string",
            "access_paths": [
                {"path": "description", "description": "Project description", "type": "string", "frequency": "medium"},
            ],
            "examples": ["description"],
            "common_usage": [["description"]],
        },
        "lead": {
            "name": "Project Lead",
            "description": "Project lead user information",
            "type": "object",
            "access_paths": [
                {"path": "lead.displayName", "description": "Lead display name", "type": "string", "frequency": "high"},
                {"path": "lead.emailAddress", "description": "Lead email address", "type": "string", "frequency": "high"},
                {"path": "lead.name", "description": "Lead username", "type": "string", "frequency": "medium"},
                {"path": "lead.key", "description": "Lead user key", "type": "string", "frequency": "medium"},
                {"path": "lead.accountId", "description": "Lead account id", "type": "string", "frequency": "medium"},
                {"path": "lead.active", "description": "Whether the lead account is active", "type": "boolean", "frequency": "medium"},
                {"path": "lead.self", "description": "Lead REST URL", "type": "string", "frequency": "low"},
                {"path": "lead.avatarUrls.48x48", "description": "Large avatar URL", "type": "string", "frequency": "low"},
                {"path": "lead.avatarUrls.32x32", "description": "Medium avatar URL", "type": "string", "frequency": "low"},
                {"path": "lead.avatarUrls.24x24", "description": "Small avatar URL", "type": "string", "frequency": "low"},
                {"path": "lead.avatarUrls.16x16", "description": "Extra small avatar URL", "type": "string", "frequency": "low"},
                {"path": "lead.timeZone", "description": "Lead time zone", "type": "string", "frequency": "low"},
            ],
            "examples": ["lead.displayName", "lead.emailAddress"],
            "common_usage": [
                ["lead.displayName", "lead.emailAddress"],
                ["lead.displayName", "lead.active"],
            ],
        },
        "projectCategory": {
            "name": "Project Category",
            "description": "Category the project is filed under",
            "type": "object",
            "access_paths": [
                {"path": "projectCategory.name", "description": "Category name", "type": "string", "frequency": "medium"},
                {"path": "projectCategory.id", "description": "Category id", "type": "string", "frequency": "low"},
                {"path": "projectCategory.description", "description": "Category description", "type": "string", "frequency": "low"},
                {"path": "projectCategory.self", "description": "Category REST URL", "type": "string", "frequency": "low"},
            ],
            "examples": ["projectCategory.name"],
            "common_usage": [["projectCategory.name"]],
        },
        "projectTypeKey": {
            "name": "Project Type",
            "description": "Project type key",
            "type": "string",
            "access_paths": [
                {"path": "projectTypeKey", "description": "Project type (software, business, ...)", "type": "string", "frequency": "medium"},
            ],
            "examples": ["projectTypeKey"],
            "common_usage": [["projectTypeKey"]],
        },
        "components": {
            "name": "Components",
            "description": "Components defined in the project",
            "type": "array",
            "access_paths": [
                {"path": "components[].name", "description": "Component names", "type": "string", "frequency": "high"},
                {"path": "components[].id", "description": "Component ids", "type": "string", "frequency": "medium"},
                {"path": "components[].description", "description": "Component descriptions", "type": "string", "frequency": "low"},
                {"path": "components[].lead.displayName", "description": "Component lead display names", "type": "string", "frequency": "medium"},
                {"path": "components[].lead.emailAddress", "description": "Component lead email addresses", "type": "string", "frequency": "low"},
                {"path": "components[].assigneeType", "description": "Default assignee type", "type": "string", "frequency": "low"},
                {"path": "components[].realAssigneeType", "description": "Effective assignee type", "type": "string", "frequency": "low"},
                {"path": "components[].self", "description": "Component REST URLs", "type": "string", "frequency": "low"},
            ],
            "examples": ["components[].name"],
            "common_usage": [["components[].name", "components[].lead.displayName"]],
        },
        "versions": {
            "name": "Versions",
            "description": "Versions (releases) defined in the project",
            "type": "array",
            "access_paths": [
                {"path": "versions[].name", "description": "Version names", "type": "string", "frequency": "high"},
                {"path": "versions[].id", "description": "Version ids", "type": "string", "frequency": "medium"},
                {"path": "versions[].description", "description": "Version descriptions", "type": "string", "frequency": "low"},
                {"path": "versions[].releaseDate", "description": "Version release dates", "type": "string", "frequency": "medium"},
                {"path": "versions[].released", "description": "Whether each version is released", "type": "boolean", "frequency": "medium"},
                {"path": "versions[].archived", "description": "Whether each version is archived", "type": "boolean", "frequency": "low"},
                {"path": "versions[].startDate", "description": "Version start dates", "type": "string", "frequency": "low"},
                {"path": "versions[].self", "description": "Version REST URLs", "type": "string", "frequency": "low"},
            ],
            "examples": ["versions[].name"],
            "common_usage": [["versions[].name", "versions[].released"], ["versions[].name", "versions[].releaseDate"]],
        },
        "url": {
            "name": "Project URL",
            "description": "Project home page URL",
            "type": "string",
            "access_paths": [
                {"path": "url", "description": "Project home page URL", "type": "string", "frequency": "low"},
            ],
            "examples": ["url"],
            "common_usage": [["url"]],
        },
        "self": {
            "name": "Self",
            "description": "Project REST URL",
            "type": "string",
            "access_paths": [
                {"path": "self", "description": "Project REST URL", "type": "string", "frequency": "low"},
            ],
            "examples": ["self"],
            "common_usage": [["self"]],
        },
        "style": {
            "name": "Style",
            "description": "Project style",
            "type": "string",
            "access_paths": [
                {"path": "style", "description": "Project style (classic, next-gen)", "type": "string", "frequency": "low"},
            ],
            "examples": ["style"],
            "common_usage": [["style"]],
        },
    },
}

# ---------------------------------------------------------------------------
# User -- GET /rest/api/2/user and /rest/api/2/myself
# ---------------------------------------------------------------------------

_USER_CATALOG: dict[str, Any] = {
    "entity_type": "user",
    "version": CATALOG_VERSION,
    "fields": {
        "displayName": {
            "name": "Display Name",
            "description": "User display name",
            "type": "string",
            "access_paths": [
                {"path": "displayName", "description": "Full display name", "type": "string", "frequency": "high"},
            ],
            "examples": ["displayName"],
            "common_usage": [["displayName"], ["displayName", "emailAddress"]],
        },
        "emailAddress": {
            "name": "Email Address",
            "description": "User email address",
            "type": "string",
            "access_paths": [
                {"path": "emailAddress", "description": "Primary email address", "type": "string", "frequency": "high"},
            ],
            "examples": ["emailAddress"],
            "common_usage": [["emailAddress"]],
        },
        "name": {
            "name": "Username",
            "description": "Login username",
            "type": "string",
            "access_paths": [
                {"path": "name", "description": "Username", "type": "string", "frequency": "high"},
            ],
            "examples": ["name"],
            "common_usage": [["name", "key"]],
        },
        "key": {
            "name": "User Key",
            "description": "Stable user key",
            "type": "string",
            "access_paths": [
                {"path": "key", "description": "User key", "type": "string", "frequency": "medium"},
            ],
            "examples": ["key"],
            "common_usage": [["key"]],
        },
        "accountId": {
            "name": "Account ID",
            "description": "Account identifier (cloud deployments)",
            "type": "string",
            "access_paths": [
                {"path": "accountId", "description": "Account id", "type": "string", "frequency": "medium"},
            ],
            "examples": ["accountId"],
            "common_usage": [["accountId"]],
        },
        "active": {
            "name": "Active",
            "description": "Whether the account is active",
            "type": "string",
            "access_paths": [
                {"path": "active", "description": "Account active flag", "type": "boolean", "frequency": "high"},
            ],
            "examples": ["active"],
            "common_usage": [["displayName", "active"]],
        },
        "timeZone": {
            "name": "Time Zone",
            "description": "User time zone",
            "type": "string",
            "access_paths": [
                {"path": "timeZone", "description": "IANA time zone name", "type": "string", "frequency": "medium"},
            ],
            "examples": ["timeZone"],
            "common_usage": [["timeZone"]],
        },
        "locale": {
            "name": "Locale",
            "description": "User locale",
            "type": "string",
            "access_paths": [
                {"path": "locale", "description": "Locale code (e.g. 'en_US')", "type": "string", "frequency": "low"},
            ],
            "examples": ["locale"],
            "common_usage": [["locale"]],
        },
        "avatarUrls": {
            "name": "Avatar URLs",
            "description": "User avatar images in several sizes",
            "type": "object",
            "access_paths": [
                {"path": "avatarUrls.48x48", "description": "Large avatar URL", "type": "string", "frequency": "medium"},
                {"path": "avatarUrls.32x32", "description": "Medium avatar URL", "type": "string", "frequency": "medium"},
                {"path": "avatarUrls.24x24", "description": "Small avatar URL", "type": "string", "frequency": "medium"},
                {"path": "avatarUrls.16x16", "description": "Extra small avatar URL", "type": "string", "frequency": "medium"},
            ],
            "examples": ["avatarUrls.48x48"],
            "common_usage": [["avatarUrls.48x48"]],
        },
        "groups": {
            "name": "Groups",
            "description": "Groups the user belongs to",
            "type": "object",
            "access_paths": [
                {"path": "groups.size", "description": "Number of groups", "type": "number", "frequency": "medium"},
                {"path": "groups.items[].name", "description": "Group names", "type": "string", "frequency": "high"},
                {"path": "groups.items[].self", "description": "Group REST URLs", "type": "string", "frequency": "low"},
            ],
            "examples": ["groups.items[].name"],
            "common_usage": [["groups.size", "groups.items[].name"]],
        },
        "applicationRoles": {
            "name": "Application Roles",
            "description": "Application roles granted to the user",
            "type": "object",
            "access_paths": [
                {"path": "applicationRoles.size", "description": "Number of application roles", "type": "number", "frequency": "medium"},
                {"path": "applicationRoles.items[].key", "description": "Role keys", "type": "string", "frequency": "medium"},
                {"path": "applicationRoles.items[].name", "description": "Role names", "type": "string", "frequency": "high"},
                {"path": "applicationRoles.items[].defaultGroups", "description": "Default groups of each role", "type": "string[]", "frequency": "low"},
                {"path": "applicationRoles.items[].selectedByDefault", "description": "Whether each role is selected by default", "type": "boolean", "frequency": "low"},
                {"path": "applicationRoles.items[].defined", "description": "Whether each role is defined", "type": "boolean", "frequency": "low"},
                {"path": "applicationRoles.items[].numberOfSeats", "description": "Licensed seats per role", "type": "number", "frequency": "low"},
                {"path": "applicationRoles.items[].remainingSeats", "description": "Remaining seats per role", "type": "number", "frequency": "low"},
                {"path": "applicationRoles.items[].userCount", "description": "Users holding each role", "type": "number", "frequency": "low"},
                {"path": "applicationRoles.items[].userCountDescription", "description": "User count description", "type": "string", "frequency": "low"},
                {"path": "applicationRoles.items[].hasUnlimitedSeats", "description": "Whether each role has unlimited seats", "type": "boolean", "frequency": "low"},
            ],
            "examples": ["applicationRoles.items[].name"],
            "common_usage": [["applicationRoles.items[].name", "applicationRoles.items[].key"]],
        },
        "self": {
            "name": "Self",
            "description": "User REST URL",
            "type": "string",
            "access_paths": [
                {"path": "self", "description": "User REST URL", "type": "string", "frequency": "low"},
            ],
            "examples": ["self"],
            "common_usage": [["self"]],
        },
    },
}

# ---------------------------------------------------------------------------
# Agile -- boards, sprints and epics from /rest/agile/1.0
# ---------------------------------------------------------------------------

_AGILE_CATALOG: dict[str, Any] = {
    "entity_type": "agile",
    "version": CATALOG_VERSION,
    "fields": {
        "board": {
            "name": "Board",
            "description": "Scrum or kanban board",
            "type": "object",
            "access_paths": [
                {"path": "board.id", "description": "Board id", "type": "number", "frequency": "high"},
                {"path": "board.name", "description": "Board name", "type": "string", "frequency": "high"},
                {"path": "board.type", "description": "Board type (scrum, kanban)", "type": "string", "frequency": "high"},
                {"path": "board.location.type", "description": "Location type (project, user)", "type": "string", "frequency": "medium"},
                {"path": "board.location.key", "description": "Location key", "type": "string", "frequency": "medium"},
                {"path": "board.location.id", "description": "Location id", "type": "string", "frequency": "low"},
                {"path": "board.location.name", "description": "Location name", "type": "string", "frequency": "medium"},
                {"path": "board.location.displayName", "description": "Location display name", "type": "string", "frequency": "medium"},
                {"path": "board.location.projectId", "description": "Owning project id", "type": "number", "frequency": "medium"},
                {"path": "board.location.projectName", "description": "Owning project name", "type": "string", "frequency": "medium"},
                {"path": "board.location.projectKey", "description": "Owning project key", "type": "string", "frequency": "high"},
                {"path": "board.location.projectTypeKey", "description": "Owning project type", "type": "string", "frequency": "low"},
                {"path": "board.location.avatarURI", "description": "Location avatar URI", "type": "string", "frequency": "low"},
                {"path": "board.self", "description": "Board REST URL", "type": "string", "frequency": "low"},
            ],
            "examples": ["board.name", "board.type"],
            "common_usage": [
                ["board.name", "board.type"],
                ["board.name", "board.location.key"],
                ["board.id", "board.name"],
                ["board.type", "board.location.type"],
            ],
        },
        "sprint": {
            "name": "Sprint",
            "description": "Time-boxed iteration on a scrum board",
            "type": "object",
            "access_paths": [
                {"path": "sprint.id", "description": "Sprint id", "type": "number", "frequency": "high"},
                {"path": "sprint.name", "description": "Sprint name", "type": "string", "frequency": "high"},
                {"path": "sprint.state", "description": "Sprint state (future, active, closed)", "type": "string", "frequency": "high"},
                {"path": "sprint.startDate", "description": "Sprint start date", "type": "string", "frequency": "high"},
                {"path": "sprint.endDate", "description": "Sprint end date", "type": "string", "frequency": "high"},
                {"path": "sprint.completeDate", "description": "Sprint completion date", "type": "string", "frequency": "medium"},
                {"path": "sprint.originBoardId", "description": "Board the sprint was created on", "type": "number", "frequency": "medium"},
                {"path": "sprint.goal", "description": "Sprint goal", "type": "string", "frequency": "medium"},
                {"path": "sprint.self", "description": "Sprint REST URL", "type": "string", "frequency": "low"},
            ],
            "examples": ["sprint.name", "sprint.state"],
            "common_usage": [
                ["sprint.name", "sprint.state"],
                ["sprint.name", "sprint.startDate", "sprint.endDate"],
                ["sprint.state", "sprint.startDate"],
                ["sprint.id", "sprint.name"],
                ["sprint.name", "sprint.goal"],
            ],
        },
        "epic": {
            "name": "Epic",
            "description": "Epic grouping related issues",
            "type": "object",
            "access_paths": [
                {"path": "epic.id", "description": "Epic id", "type": "number", "frequency": "medium"},
                {"path": "epic.key", "description": "Epic issue key", "type": "string", "frequency": "high"},
                {"path": "epic.name", "description": "Epic name", "type": "string", "frequency": "high"},
                {"path": "epic.summary", "description": "Epic summary", "type": "string", "frequency": "medium"},
                {"path": "epic.color.key", "description": "Epic colour key", "type": "string", "frequency": "low"},
                {"path": "epic.done", "description": "Whether the epic is done", "type": "boolean", "frequency": "medium"},
                {"path": "epic.self", "description": "Epic REST URL", "type": "string", "frequency": "low"},
            ],
            "examples": ["epic.key", "epic.name"],
            "common_usage": [
                ["epic.key", "epic.name"],
                ["epic.name", "epic.done"],
                ["epic.key", "epic.summary"],
                ["epic.key", "epic.name", "epic.done"],
            ],
        },
    },
}

# ---------------------------------------------------------------------------
# Registry of all built-in catalogs
# ---------------------------------------------------------------------------

BUILT_IN_CATALOGS: dict[str, dict[str, Any]] = {
    "issue": _ISSUE_CATALOG,
    "project": _PROJECT_CATALOG,
    "user": _USER_CATALOG,
    "agile": _AGILE_CATALOG,
}
