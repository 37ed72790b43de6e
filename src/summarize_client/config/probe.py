"""Probes that inspect the host for the summarize binary and its version.

Both probes are pure functions of the filesystem and the environment, so
concurrent callers may run them redundantly without coordination.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import logging
import os
from pathlib import Path
import re
import shutil
import subprocess

from summarize_client.constants import (
    DEFAULT_BINARY_NAME,
    FALLBACK_INSTALL_DIRS,
    OUTPUT_DECODE_ERRORS,
    OUTPUT_ENCODING,
    VERSION_FLAG,
    VERSION_PROBE_TIMEOUT,
)

log = logging.getLogger(__name__)

_SEMVER_RE = re.compile(r"(\d+)\.(\d+)\.(\d+)")


def is_executable_file(path: str | os.PathLike[str]) -> bool:
    """Return True when ``path`` is a regular file the current user may execute."""
    return os.path.isfile(path) and os.access(path, os.X_OK)


def locate_binary(
    name: str = DEFAULT_BINARY_NAME,
    fallback_dirs: Iterable[str] = FALLBACK_INSTALL_DIRS,
) -> str:
    """Find the summarize executable.

    Tries the PATH lookup first, then each fallback install directory. When
    nothing is found the bare command name is returned so the process launcher
    can still resolve it at spawn time.
    """
    candidates: list[str] = []
    found = shutil.which(name)
    if found:
        candidates.append(found)
    candidates.extend(str(Path(directory) / name) for directory in fallback_dirs)

    for candidate in candidates:
        if is_executable_file(candidate):
            log.debug("Resolved summarize binary to %s", candidate)
            return candidate

    log.debug("summarize binary not found on disk; deferring to PATH lookup")
    return name


def extract_version(output: str | None) -> str | None:
    """Return the first ``MAJOR.MINOR.PATCH`` substring, without any suffix."""
    if not output:
        return None
    match = _SEMVER_RE.search(output.strip())
    return match.group(0) if match else None


def parse_version(version: str) -> tuple[int, int, int] | None:
    """Parse a version string into a comparable triple.

    Pre-release and build suffixes are ignored: ``"1.2.3-beta.1"`` parses as
    ``(1, 2, 3)``.
    """
    match = _SEMVER_RE.search(version)
    if match is None:
        return None
    major, minor, patch = (int(part) for part in match.groups())
    return major, minor, patch


def detect_cli_version(
    binary_path: str,
    env: Mapping[str, str] | None = None,
    timeout: float = VERSION_PROBE_TIMEOUT,
) -> str | None:
    """Ask the binary for its version.

    Returns None when the binary cannot be launched, times out, prints
    nothing, or prints nothing version-shaped.
    """
    try:
        proc = subprocess.run(
            [binary_path, VERSION_FLAG],
            stdin=subprocess.DEVNULL,
            capture_output=True,
            encoding=OUTPUT_ENCODING,
            errors=OUTPUT_DECODE_ERRORS,
            env=dict(env) if env is not None else None,
            timeout=timeout,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        log.debug("Could not detect summarize version via %s: %s", binary_path, e)
        return None

    output = (proc.stdout or "").strip()
    if not output:
        return None
    version = extract_version(output)
    log.debug("Detected summarize version %s from %r", version, output)
    return version
