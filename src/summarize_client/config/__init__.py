"""Configuration for the summarize client.

Key components:
- Configuration: mutable record held by each client, with lazily probed
  binary path and CLI version
- SummarizeSettings: pydantic-settings schema for ``SUMMARIZE_CLIENT_*``
  environment variables
- resolve_configuration / get_configuration / configure / reset_configuration /
  config_scope: process-wide default and scoped overrides
"""

from .probe import detect_cli_version, extract_version, locate_binary, parse_version
from .schema import SummarizeSettings
from .scope import (
    config_scope,
    configure,
    get_configuration,
    reset_configuration,
    resolve_configuration,
    set_configuration,
)
from .types import Configuration, LazyValue

__all__ = [  # noqa: RUF022
    # Types
    "Configuration",
    "LazyValue",
    "SummarizeSettings",
    # Lifecycle
    "resolve_configuration",
    "get_configuration",
    "set_configuration",
    "configure",
    "reset_configuration",
    "config_scope",
    # Probes
    "locate_binary",
    "detect_cli_version",
    "extract_version",
    "parse_version",
]
