"""Configuration introspection utilities for debugging and validation.

This module reports the effective configuration, the binary it resolves to,
the detected CLI version, and whether invocations would pass their
preconditions.
"""

import json
import sys
from typing import Any

from summarize_client.constants import MINIMUM_CLI_VERSION
from summarize_client.exceptions import SummarizeError

from .scope import resolve_configuration
from .types import Configuration

# ruff: noqa: T201


def check_environment(config: Configuration | None = None) -> list[str]:
    """Return the precondition failures for ``config`` (empty when runnable)."""
    # Import here to avoid a circular import with the client module
    from summarize_client.client import SummarizeClient

    try:
        config = config or resolve_configuration()
        SummarizeClient(config).validate()
    except SummarizeError as e:
        return [str(e)]
    return []


def get_config_info(config: Configuration | None = None) -> dict[str, Any]:
    """Get structured configuration information for programmatic use."""
    try:
        config = config or resolve_configuration()
    except SummarizeError as e:
        return {
            "status": "invalid",
            "error": str(e),
            "config": None,
            "cli": None,
            "problems": [str(e)],
        }

    problems = check_environment(config)
    return {
        "status": "ok" if not problems else "unusable",
        "config": {
            "default_model": config.default_model,
            "default_cli": config.default_cli,
            "default_length": _jsonable(config.default_length),
            "default_language": config.default_language,
            "timeout": _jsonable(config.timeout),
            "retries": config.retries,
            "env": sorted(config.env),
            "inherit_env": config.inherit_env,
            "skip_version_check": config.skip_version_check,
        },
        "cli": {
            "binary_path": config.binary_path,
            "version": config.cli_version,
            "minimum_version": MINIMUM_CLI_VERSION,
        },
        "problems": problems,
    }


def print_config_debug(config: Configuration | None = None) -> None:
    """Print the effective configuration and precondition results."""
    info = get_config_info(config)
    if info["config"] is None:
        print(f"❌ Configuration Error: {info['error']}", file=sys.stderr)
        sys.exit(1)

    print("=== Effective Configuration ===")
    for field, value in info["config"].items():
        print(f"  {field}: {value}")

    print("\n=== summarize CLI ===")
    cli = info["cli"]
    print(f"  binary_path: {cli['binary_path']}")
    print(f"  version: {cli['version'] or '[UNDETECTED]'}")
    print(f"  minimum_version: {cli['minimum_version']}")

    print("\n=== Validation Results ===")
    if info["problems"]:
        for problem in info["problems"]:
            print(f"❌ {problem}")
    else:
        print("✅ summarize CLI is ready")


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, bool | int | float):
        return value
    return str(value)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for configuration introspection."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Inspect summarize-client configuration",
        prog="python -m summarize_client.config",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON instead of human-readable format",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Just check if the CLI is usable (exit code 0=usable, 1=not usable)",
    )

    args = parser.parse_args(argv)

    if args.check:
        info = get_config_info()
        sys.exit(0 if info["status"] == "ok" else 1)

    if args.json:
        print(json.dumps(get_config_info(), indent=2))
    else:
        print_config_debug()


if __name__ == "__main__":
    main()
