"""CLI commands for browsing and checking the field catalogs."""

from __future__ import annotations

import asyncio
import json as json_mod
import sys
from pathlib import Path

import click

from tessera.catalog import InvalidResourceURIError, UnknownResourceError, resource_uri_for
from tessera.cli_common import fail, load_cli_context
from tessera.fields import ResourceDefinition
from tessera.resolver import StaticFieldResolver


@click.group()
def fields() -> None:
    """Inspect field catalogs and validate field paths."""


@fields.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def fields_list(as_json: bool) -> None:
    """List the available field resources."""
    resources = StaticFieldResolver().list_resources()
    if as_json:
        click.echo(json_mod.dumps(resources, indent=2))
        return
    for res in resources:
        click.echo(f"{res['uri']:<24} {res['description']}")


def _print_definition(definition: ResourceDefinition) -> None:
    click.echo(f"{definition.uri}  ({definition.total_fields} fields, {len(definition.path_index)} paths)")
    for fid, fd in definition.fields.items():
        marker = " [dynamic]" if fd.source == "dynamic" else ""
        click.echo(f"\n{fid}: {fd.name} ({fd.type}){marker}")
        for ap in fd.access_paths:
            click.echo(f"  {ap.path:<40} {ap.type:<8} {ap.frequency}")


async def _read_dynamic(config_file: Path | None, entity: str, as_json: bool) -> ResourceDefinition:
    ctx = load_cli_context(config_file, enable_dynamic=True, log=False, as_json=as_json)
    try:
        return await ctx.resolver.read_resource(resource_uri_for(entity), force_refresh=True)
    finally:
        await ctx.aclose()


@fields.command("show")
@click.argument("entity")
@click.option("--dynamic", is_flag=True, help="Include custom fields discovered from the server")
@click.option("--config", "config_file", type=click.Path(path_type=Path), default=None, help="JSON config file")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def fields_show(entity: str, dynamic: bool, config_file: Path | None, as_json: bool) -> None:
    """Show every field and access path of ENTITY (issue, project, user, agile)."""
    resolver = StaticFieldResolver()
    if resolver.get_definition(entity) is None:
        fail(f"Unknown entity type: {entity}. Supported types: {', '.join(resolver.entity_types)}", as_json=as_json)

    if dynamic:
        try:
            definition = asyncio.run(_read_dynamic(config_file, entity, as_json))
        except (InvalidResourceURIError, UnknownResourceError) as exc:
            fail(str(exc), as_json=as_json)
    else:
        definition = resolver.get_definition(entity)

    if as_json:
        click.echo(json_mod.dumps(definition.to_dict(), indent=2))
        return
    _print_definition(definition)


@fields.command("validate")
@click.argument("entity")
@click.argument("paths", nargs=-1, required=True)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def fields_validate(entity: str, paths: tuple[str, ...], as_json: bool) -> None:
    """Validate dot-notation PATHS against ENTITY's catalog.

    Exits 1 when any path is invalid.
    """
    result = StaticFieldResolver().validate_field_paths(entity, list(paths))
    if as_json:
        click.echo(json_mod.dumps(result, indent=2))
    else:
        if "error" in result:
            click.echo(f"Error: {result['error']}", err=True)
        for path in result["valid_paths"]:
            click.echo(f"  ok       {path}")
        suggestions = result.get("suggestions", {})
        for path in result["invalid_paths"]:
            hint = f"  (did you mean: {', '.join(suggestions[path])})" if path in suggestions else ""
            click.echo(f"  invalid  {path}{hint}")
    if not result["is_valid"]:
        sys.exit(1)


def register(cli: click.Group) -> None:
    """Register the fields group with the CLI."""
    cli.add_command(fields)
