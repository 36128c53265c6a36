# src/tessera/config.py
"""Server configuration -- environment variables over an optional JSON file.

``load_config`` resolves every setting once at startup and validates it;
anything invalid raises ConfigurationError before a client or resolver is
built.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

AuthMode = Literal["bearer", "basic"]

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_CACHE_TTL_SECONDS = 3600
DEFAULT_CACHE_MAX_SIZE = 100
DEFAULT_LOG_DIR = Path.home() / ".tessera"

# Environment variable -> ServerConfig attribute
ENV_VARS: dict[str, str] = {
    "JIRA_URL": "jira_url",
    "JIRA_PERSONAL_TOKEN": "personal_token",
    "JIRA_USERNAME": "username",
    "JIRA_PASSWORD": "password",
    "JIRA_TIMEOUT": "timeout_seconds",
    "JIRA_SSL_VERIFY": "ssl_verify",
    "ENABLE_DYNAMIC_FIELDS": "enable_dynamic_fields",
    "DYNAMIC_FIELD_CACHE_TTL": "cache_ttl_seconds",
    "DYNAMIC_FIELD_CACHE_MAX_SIZE": "cache_max_size",
    "TESSERA_LOG_DIR": "log_dir",
}

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})
_LOOPBACK_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})
_PLACEHOLDER_MARKERS = ("your_token", "your_username", "your_password", "replace_me", "example")
_MIN_TOKEN_LENGTH = 10
_MIN_PASSWORD_LENGTH = 8


class ConfigurationError(ValueError):
    """Raised for invalid configuration or construction arguments."""


@dataclass(frozen=True)
class ServerConfig:
    jira_url: str
    personal_token: str | None = field(default=None, repr=False)
    username: str | None = None
    password: str | None = field(default=None, repr=False)
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    ssl_verify: bool = True
    enable_dynamic_fields: bool = False
    cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS
    cache_max_size: int = DEFAULT_CACHE_MAX_SIZE
    log_dir: Path = DEFAULT_LOG_DIR

    @property
    def auth_mode(self) -> AuthMode:
        return "bearer" if self.personal_token else "basic"

    def redacted(self) -> dict[str, Any]:
        """Settings safe to log: credentials are replaced by presence flags."""
        return {
            "jira_url": self.jira_url,
            "auth_mode": self.auth_mode,
            "timeout_seconds": self.timeout_seconds,
            "ssl_verify": self.ssl_verify,
            "enable_dynamic_fields": self.enable_dynamic_fields,
            "cache_ttl_seconds": self.cache_ttl_seconds,
            "cache_max_size": self.cache_max_size,
            "log_dir": str(self.log_dir),
        }


# ---------------------------------------------------------------------------
# Value parsing
# ---------------------------------------------------------------------------


def parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    msg = f"{name} must be a boolean (one of {sorted(_TRUE_VALUES | _FALSE_VALUES)}), got {value!r}"
    raise ConfigurationError(msg)


def _parse_positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        msg = f"{name} must be a positive integer, got {value!r}"
        raise ConfigurationError(msg)
    try:
        number = int(str(value).strip()) if not isinstance(value, int) else value
    except ValueError:
        msg = f"{name} must be a positive integer, got {value!r}"
        raise ConfigurationError(msg) from None
    if number <= 0:
        msg = f"{name} must be a positive integer, got {number}"
        raise ConfigurationError(msg)
    return number


def _parse_positive_float(name: str, value: Any) -> float:
    if isinstance(value, bool):
        msg = f"{name} must be a positive number, got {value!r}"
        raise ConfigurationError(msg)
    try:
        number = float(value)
    except (TypeError, ValueError):
        msg = f"{name} must be a positive number, got {value!r}"
        raise ConfigurationError(msg) from None
    if number <= 0:
        msg = f"{name} must be a positive number, got {number}"
        raise ConfigurationError(msg)
    return number


def _clean_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_jira_url(url: str | None) -> str:
    """Return the normalised base URL (no trailing slash) or raise."""
    if not url:
        msg = "JIRA_URL is required"
        raise ConfigurationError(msg)
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https"):
        msg = f"JIRA_URL must be an http(s) URL, got {url!r}"
        raise ConfigurationError(msg)
    if not parts.hostname:
        msg = f"JIRA_URL must have a valid hostname, got {url!r}"
        raise ConfigurationError(msg)
    if parts.scheme != "https" and parts.hostname not in _LOOPBACK_HOSTS:
        msg = f"JIRA_URL must use HTTPS for non-local hosts, got {parts.scheme}://{parts.hostname}"
        raise ConfigurationError(msg)
    return url.rstrip("/")


def _looks_like_placeholder(value: str) -> bool:
    lowered = value.lower()
    return any(marker in lowered for marker in _PLACEHOLDER_MARKERS)


def validate_credentials(token: str | None, username: str | None, password: str | None) -> None:
    """Require a usable bearer token or a username/password pair."""
    if token:
        if len(token) < _MIN_TOKEN_LENGTH:
            msg = f"JIRA_PERSONAL_TOKEN is too short (minimum {_MIN_TOKEN_LENGTH} characters)"
            raise ConfigurationError(msg)
        if _looks_like_placeholder(token):
            msg = "JIRA_PERSONAL_TOKEN appears to be a placeholder value"
            raise ConfigurationError(msg)
        return
    if not (username and password):
        msg = "Either JIRA_PERSONAL_TOKEN or both JIRA_USERNAME and JIRA_PASSWORD must be set"
        raise ConfigurationError(msg)
    if len(password) < _MIN_PASSWORD_LENGTH:
        msg = f"JIRA_PASSWORD is too short (minimum {_MIN_PASSWORD_LENGTH} characters)"
        raise ConfigurationError(msg)
    if _looks_like_placeholder(username):
        msg = "JIRA_USERNAME appears to be a placeholder value"
        raise ConfigurationError(msg)
    if _looks_like_placeholder(password) or password.lower() == "password":
        msg = "JIRA_PASSWORD appears to be a placeholder or weak value"
        raise ConfigurationError(msg)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def read_config_file(path: Path) -> dict[str, Any]:
    """Read a JSON config file whose keys are ServerConfig attribute names."""
    try:
        data = json.loads(path.read_text())
    except FileNotFoundError:
        msg = f"Config file not found: {path}"
        raise ConfigurationError(msg) from None
    except (json.JSONDecodeError, OSError) as exc:
        msg = f"Failed to read config file {path}: {exc}"
        raise ConfigurationError(msg) from exc
    if not isinstance(data, dict):
        msg = f"Config file {path} must contain a JSON object"
        raise ConfigurationError(msg)
    known = set(ENV_VARS.values())
    unknown = sorted(set(data) - known)
    if unknown:
        logger.warning("Ignoring unknown keys in %s: %s", path, ", ".join(unknown))
    return {k: v for k, v in data.items() if k in known}


def load_config(env: Mapping[str, str] | None = None, config_file: Path | None = None) -> ServerConfig:
    """Resolve ServerConfig from *config_file* overlaid by *env* (default ``os.environ``).

    Raises:
        ConfigurationError: Missing or invalid settings.
    """
    source = os.environ if env is None else env
    raw: dict[str, Any] = read_config_file(config_file) if config_file is not None else {}
    for var, attr in ENV_VARS.items():
        value = source.get(var)
        if value is not None and value.strip() != "":
            raw[attr] = value

    jira_url = validate_jira_url(_clean_str(raw.get("jira_url")))
    token = _clean_str(raw.get("personal_token"))
    username = _clean_str(raw.get("username"))
    password = _clean_str(raw.get("password"))
    validate_credentials(token, username, password)

    config = ServerConfig(
        jira_url=jira_url,
        personal_token=token,
        username=None if token else username,
        password=None if token else password,
        timeout_seconds=(
            _parse_positive_float("JIRA_TIMEOUT", raw["timeout_seconds"])
            if "timeout_seconds" in raw
            else DEFAULT_TIMEOUT_SECONDS
        ),
        ssl_verify=parse_bool("JIRA_SSL_VERIFY", raw["ssl_verify"]) if "ssl_verify" in raw else True,
        enable_dynamic_fields=(
            parse_bool("ENABLE_DYNAMIC_FIELDS", raw["enable_dynamic_fields"])
            if "enable_dynamic_fields" in raw
            else False
        ),
        cache_ttl_seconds=(
            _parse_positive_int("DYNAMIC_FIELD_CACHE_TTL", raw["cache_ttl_seconds"])
            if "cache_ttl_seconds" in raw
            else DEFAULT_CACHE_TTL_SECONDS
        ),
        cache_max_size=(
            _parse_positive_int("DYNAMIC_FIELD_CACHE_MAX_SIZE", raw["cache_max_size"])
            if "cache_max_size" in raw
            else DEFAULT_CACHE_MAX_SIZE
        ),
        log_dir=Path(raw["log_dir"]).expanduser() if raw.get("log_dir") else DEFAULT_LOG_DIR,
    )
    logger.debug("Loaded configuration", extra={"context": config.redacted()})
    return config
