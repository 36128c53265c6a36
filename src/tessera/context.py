"""Application context shared by the MCP server, tool handlers, and CLI.

Created once at startup by ``build_context`` and passed explicitly; there
are no module-level registries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from tessera.client import JiraClient
from tessera.config import ServerConfig
from tessera.logging import setup_logging
from tessera.resolver import FieldResolver, build_resolver


@dataclass
class AppContext:
    resolver: FieldResolver
    client: Any
    logger: logging.Logger
    config: ServerConfig | None = None

    async def aclose(self) -> None:
        close = getattr(self.client, "aclose", None)
        if close is not None:
            await close()


def build_context(config: ServerConfig, *, client: Any = None, log: bool = True) -> AppContext:
    """Wire client, resolver and logger from *config*.

    Raises:
        ConfigurationError: Invalid resolver settings.
    """
    backend = client if client is not None else JiraClient.from_config(config)
    resolver = build_resolver(
        backend,
        enable_dynamic=config.enable_dynamic_fields,
        cache_ttl_seconds=config.cache_ttl_seconds,
        cache_max_size=config.cache_max_size,
    )
    logger = setup_logging(config.log_dir) if log else logging.getLogger("tessera")
    logger.info("context_ready", extra={"context": config.redacted()})
    return AppContext(resolver=resolver, client=backend, logger=logger, config=config)
