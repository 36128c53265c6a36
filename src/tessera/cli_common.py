"""Shared CLI helpers.

Provides ``load_cli_context()`` and ``fail()`` so that ``cli.py`` and the
``cli_commands/*.py`` modules can use them without circular imports.
"""

from __future__ import annotations

import dataclasses
import json as json_mod
import sys
from pathlib import Path
from typing import NoReturn

import click

from tessera.config import ConfigurationError, load_config
from tessera.context import AppContext, build_context


def fail(message: str, *, as_json: bool = False) -> NoReturn:
    """Report *message* and exit with status 1."""
    if as_json:
        click.echo(json_mod.dumps({"error": message}))
    else:
        click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def load_cli_context(
    config_file: Path | None,
    *,
    enable_dynamic: bool | None = None,
    log: bool = True,
    as_json: bool = False,
) -> AppContext:
    """Load configuration and build an AppContext, exiting on bad config.

    *enable_dynamic* overrides the configured discovery mode when not None.
    """
    try:
        config = load_config(config_file=config_file)
        if enable_dynamic is not None:
            config = dataclasses.replace(config, enable_dynamic_fields=enable_dynamic)
        return build_context(config, log=log)
    except ConfigurationError as exc:
        fail(str(exc), as_json=as_json)
