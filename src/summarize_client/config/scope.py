"""Configuration resolution and the process-wide default.

Clients normally receive an explicit `Configuration`. For scripts and
notebooks a default instance is kept here and created lazily from the
environment. `config_scope()` swaps in a different configuration for the
duration of a block without touching the default, which keeps tests isolated.
"""

from collections.abc import Generator
from contextlib import contextmanager
import contextvars
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from summarize_client.exceptions import ConfigurationError

from .schema import SummarizeSettings
from .types import Configuration

_default_configuration: Configuration | None = None

# Context variable for scoped configuration
_scoped_configuration: contextvars.ContextVar[Configuration] = contextvars.ContextVar(
    "summarize_client_configuration"
)


def resolve_configuration(
    *, use_env_file: str | Path | None = None, **overrides: Any
) -> Configuration:
    """Build a validated `Configuration`.

    Precedence: programmatic overrides > environment (``SUMMARIZE_CLIENT_*``)
    > ``.env`` file (only when ``use_env_file`` is given) > defaults.

    Raises:
        ConfigurationError: If any value fails validation.
    """
    # Explicit None means "not provided" so the environment still applies
    programmatic = {key: value for key, value in overrides.items() if value is not None}
    try:
        settings = SummarizeSettings(_env_file=use_env_file, **programmatic)  # type: ignore[call-arg]
    except ValidationError as e:
        raise ConfigurationError(f"Invalid summarize configuration: {e}") from e
    return Configuration.from_settings(settings)


def get_configuration() -> Configuration:
    """Return the active configuration: the scoped one if any, else the default."""
    global _default_configuration
    try:
        return _scoped_configuration.get()
    except LookupError:
        pass
    if _default_configuration is None:
        _default_configuration = resolve_configuration()
    return _default_configuration


def set_configuration(config: Configuration) -> None:
    """Replace the process-wide default configuration."""
    global _default_configuration
    _default_configuration = config


def configure(**fields: Any) -> Configuration:
    """Assign fields on the active configuration and return it.

    Example:
        configure(default_model="openai/gpt-5-mini", env={"OPENAI_API_KEY": key})
    """
    config = get_configuration()
    for name, value in fields.items():
        if name not in Configuration.FIELDS:
            raise ConfigurationError(f"Unknown configuration field: {name!r}")
        setattr(config, name, value)
    return config


def reset_configuration() -> Configuration:
    """Discard the default configuration and rebuild it from the environment."""
    global _default_configuration
    _default_configuration = resolve_configuration()
    return _default_configuration


@contextmanager
def config_scope(config: Configuration) -> Generator[Configuration, None, None]:
    """Temporarily make ``config`` the active configuration.

    Thread and async safe; only code running in the current context sees it.

    Example:
        with config_scope(Configuration(binary_path="/opt/summarize")):
            summarize_client.call("https://example.com")
    """
    token = _scoped_configuration.set(config)
    try:
        yield config
    finally:
        _scoped_configuration.reset(token)
