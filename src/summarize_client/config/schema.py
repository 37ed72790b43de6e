"""Configuration schema and validation using Pydantic.

This module defines the settings schema that validates and coerces
configuration values from the environment, an optional ``.env`` file, and
programmatic overrides into the types `Configuration` expects.
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from summarize_client.constants import AUTO_MODEL, ENV_PREFIX


class SummarizeSettings(BaseSettings):
    """Pydantic settings schema for the summarize client.

    Reads ``SUMMARIZE_CLIENT_*`` environment variables. The prefix is distinct
    from anything the CLI itself reads, so the same process environment can be
    passed through to the subprocess untouched.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=None,  # Only used when explicitly requested
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    binary_path: str | None = Field(
        default=None,
        description="Path to the summarize executable; probed when unset",
    )

    default_model: str = Field(
        default=AUTO_MODEL,
        description="Model passed as --model unless the call overrides it",
        min_length=1,
    )

    default_cli: str | None = Field(default=None, description="Default --cli")
    default_length: str | int | None = Field(
        default=None, description="Default --length"
    )
    default_language: str | None = Field(default=None, description="Default --lang")

    timeout: str | int | float | None = Field(
        default=None,
        description="Forwarded as --timeout; the CLI enforces it",
    )

    retries: int | None = Field(
        default=None,
        description="Forwarded as --retries; the CLI performs retries",
        ge=0,
    )

    env: dict[str, str] = Field(
        default_factory=dict,
        description="Extra environment variables for the subprocess",
    )

    inherit_env: bool = Field(
        default=True,
        description="Pass the ambient process environment to the subprocess",
    )

    skip_version_check: bool = Field(
        default=False,
        description="Disable the minimum CLI version gate",
    )

    @field_validator("binary_path", "default_cli", "default_language", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """Treat empty strings from the environment as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("env", mode="before")
    @classmethod
    def stringify_env(cls, v: Any) -> Any:
        """Environment values are always strings once they reach a process."""
        if isinstance(v, dict):
            return {str(key): str(value) for key, value in v.items()}
        return v

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary of configuration fields."""
        return {
            "binary_path": self.binary_path,
            "default_model": self.default_model,
            "default_cli": self.default_cli,
            "default_length": self.default_length,
            "default_language": self.default_language,
            "timeout": self.timeout,
            "retries": self.retries,
            "env": dict(self.env),
            "inherit_env": self.inherit_env,
            "skip_version_check": self.skip_version_check,
        }
