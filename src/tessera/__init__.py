"""Tessera: Jira field catalog, path validation and projection over MCP."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("tessera")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

from tessera.projection import extract_top_level_fields, filter_fields
from tessera.resolver import FieldResolver, build_resolver

__all__ = ["FieldResolver", "__version__", "build_resolver", "extract_top_level_fields", "filter_fields"]
