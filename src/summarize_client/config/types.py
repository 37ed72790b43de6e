"""Core configuration data types for the summarize client.

`Configuration` is an ordinary mutable record. Each client holds one; the
process-wide default in `summarize_client.config.scope` is only a
convenience. The two values that require probing the host (binary path and
installed CLI version) live in `LazyValue` caches that resolve on first read
and can be invalidated explicitly.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import os
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from summarize_client.constants import AUTO_MODEL

from .probe import detect_cli_version, locate_binary

if TYPE_CHECKING:
    from .schema import SummarizeSettings

T = TypeVar("T")


class _Unresolved:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<unresolved>"


UNRESOLVED: Any = _Unresolved()


class LazyValue(Generic[T]):
    """Two-state cache: unresolved, or resolved to a value (``None`` included).

    Resolution is not locked. Racing readers may each run the resolver; the
    last write wins, which is fine for idempotent probes.
    """

    __slots__ = ("_resolver", "_value")

    def __init__(self, resolver: Callable[[], T]):
        self._resolver = resolver
        self._value: T | _Unresolved = UNRESOLVED

    @property
    def resolved(self) -> bool:
        return not isinstance(self._value, _Unresolved)

    def get(self) -> T:
        value = self._value
        if isinstance(value, _Unresolved):
            value = self._resolver()
            self._value = value
        return value

    def set(self, value: T) -> None:
        self._value = value

    def invalidate(self) -> None:
        self._value = UNRESOLVED

    def __repr__(self) -> str:
        return f"LazyValue({self._value!r})"


class Configuration:
    """Settings shared by every invocation a client makes.

    Attributes:
        default_model: Seeds ``model`` unless it is ``"auto"``.
        default_cli, default_length, default_language, timeout, retries:
            Seed the matching option when not ``None``.
        env: Extra environment variables for the subprocess.
        inherit_env: When True the subprocess also sees the ambient
            environment, with ``env`` layered on top.
        skip_version_check: Disable the minimum-version gate.
    """

    FIELDS = frozenset(
        {
            "binary_path",
            "default_model",
            "default_cli",
            "default_length",
            "default_language",
            "timeout",
            "retries",
            "env",
            "inherit_env",
            "skip_version_check",
            "cli_version",
        }
    )

    def __init__(
        self,
        *,
        binary_path: str | None = None,
        default_model: str = AUTO_MODEL,
        default_cli: str | None = None,
        default_length: Any = None,
        default_language: str | None = None,
        timeout: Any = None,
        retries: int | None = None,
        env: Mapping[str, Any] | None = None,
        inherit_env: bool = True,
        skip_version_check: bool = False,
        cli_version: str | None | _Unresolved = UNRESOLVED,
    ):
        self.default_model = default_model
        self.default_cli = default_cli
        self.default_length = default_length
        self.default_language = default_language
        self.timeout = timeout
        self.retries = retries
        self.env: dict[str, Any] = dict(env or {})
        self.inherit_env = inherit_env
        self.skip_version_check = skip_version_check

        self._binary_path: LazyValue[str] = LazyValue(self._locate_binary)
        self._cli_version: LazyValue[str | None] = LazyValue(self._detect_version)
        if binary_path is not None:
            self._binary_path.set(binary_path)
        if not isinstance(cli_version, _Unresolved):
            self._cli_version.set(cli_version)

    @classmethod
    def from_settings(cls, settings: SummarizeSettings) -> Configuration:
        return cls(**settings.to_dict())

    # --- Probed values ---

    @property
    def binary_path(self) -> str:
        return self._binary_path.get()

    @binary_path.setter
    def binary_path(self, value: str) -> None:
        self._binary_path.set(value)
        # A different binary may report a different version
        self._cli_version.invalidate()

    @property
    def cli_version(self) -> str | None:
        """Installed CLI version, or None when it cannot be detected."""
        return self._cli_version.get()

    @cli_version.setter
    def cli_version(self, value: str | None) -> None:
        self._cli_version.set(value)

    def invalidate_binary_path(self) -> None:
        self._binary_path.invalidate()
        self._cli_version.invalidate()

    def invalidate_cli_version(self) -> None:
        self._cli_version.invalidate()

    def invalidate_caches(self) -> None:
        self.invalidate_binary_path()

    def _locate_binary(self) -> str:
        return locate_binary()

    def _detect_version(self) -> str | None:
        return detect_cli_version(self.binary_path, env=self.command_env())

    # --- Subprocess environment ---

    def command_env(self) -> dict[str, str]:
        """Environment mapping handed to the subprocess."""
        env: dict[str, str] = dict(os.environ) if self.inherit_env else {}
        env.update({str(key): str(value) for key, value in self.env.items()})
        return env

    # --- Introspection ---

    def to_dict(self) -> dict[str, Any]:
        """Plain dictionary view; probed values appear only once resolved."""
        return {
            "binary_path": self.binary_path if self._binary_path.resolved else None,
            "default_model": self.default_model,
            "default_cli": self.default_cli,
            "default_length": self.default_length,
            "default_language": self.default_language,
            "timeout": self.timeout,
            "retries": self.retries,
            "env": sorted(self.env),
            "inherit_env": self.inherit_env,
            "skip_version_check": self.skip_version_check,
            "cli_version": self.cli_version if self._cli_version.resolved else None,
        }

    def __repr__(self) -> str:
        # Environment values may hold credentials; only show the names.
        fields = ", ".join(f"{key}={value!r}" for key, value in self.to_dict().items())
        return f"Configuration({fields})"
