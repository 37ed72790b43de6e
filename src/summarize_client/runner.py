"""Subprocess execution for the summarize CLI.

The client talks to processes only through the `CommandRunner` protocol, so
tests can substitute a fake and callers can wrap execution (sandboxing,
remote hosts) without touching argument construction or error handling.

`SubprocessRunner` never writes to the child's stdin: it is attached to
``/dev/null``, which the child sees as an immediately closed stream. In
streaming mode stderr is drained on a background thread while stdout is read
line by line, so a chatty child cannot block on a full pipe.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
import dataclasses
import logging
import subprocess
import threading
from types import TracebackType
from typing import Protocol, Self, runtime_checkable

from .constants import EXIT_SUCCESS, OUTPUT_DECODE_ERRORS, OUTPUT_ENCODING

log = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class ProcessOutput:
    """Fully captured outcome of a buffered run."""

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == EXIT_SUCCESS


@runtime_checkable
class OutputStream(Protocol):
    """Line iterator over a running process.

    ``returncode`` and ``stderr`` are only meaningful once iteration finished.
    """

    returncode: int | None
    stderr: str

    def __iter__(self) -> Iterator[str]: ...  # noqa: D105
    def __enter__(self) -> Self: ...  # noqa: D105
    def __exit__(  # noqa: D105
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool | None: ...


@runtime_checkable
class CommandRunner(Protocol):
    """Duck-typed protocol for process launchers."""

    def run(self, args: Sequence[str], env: Mapping[str, str]) -> ProcessOutput: ...  # noqa: D102
    def stream(self, args: Sequence[str], env: Mapping[str, str]) -> OutputStream: ...  # noqa: D102


class LineStream:
    """Lazy, finite, single-use iterator over a child's stdout lines.

    The process is the backing resource: exhausting the iterator waits for it
    and collects stderr; closing early (``break``, an exception in the
    consumer, or leaving the ``with`` block) kills it.
    """

    def __init__(self, proc: subprocess.Popen[str]):
        self._proc = proc
        self._stderr_parts: list[str] = []
        self._stderr_reader = threading.Thread(
            target=self._drain_stderr,
            name="summarize-stderr",
            daemon=True,
        )
        self._stderr_reader.start()
        self._started = False
        self._finished = False
        self.returncode: int | None = None
        self.stderr = ""

    def _drain_stderr(self) -> None:
        stream = self._proc.stderr
        if stream is None:
            return
        for chunk in iter(lambda: stream.read(4096), ""):
            self._stderr_parts.append(chunk)

    def __iter__(self) -> Iterator[str]:
        if self._started:
            raise RuntimeError("LineStream can only be iterated once")
        self._started = True
        return self._lines()

    def _lines(self) -> Iterator[str]:
        stdout = self._proc.stdout
        exhausted = False
        try:
            if stdout is not None:
                yield from stdout
            exhausted = True
        finally:
            self._finish(killed=not exhausted)

    def _finish(self, *, killed: bool) -> None:
        if self._finished:
            return
        self._finished = True
        if killed and self._proc.poll() is None:
            log.debug("Killing summarize process %s before completion", self._proc.pid)
            self._proc.kill()
        if self._proc.stdout is not None:
            self._proc.stdout.close()
        self.returncode = self._proc.wait()
        self._stderr_reader.join()
        if self._proc.stderr is not None:
            self._proc.stderr.close()
        self.stderr = "".join(self._stderr_parts)

    def close(self) -> None:
        """Stop the process if it is still running and release its pipes."""
        self._finish(killed=True)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool | None:
        self.close()
        return None


class SubprocessRunner:
    """Launch the CLI with `subprocess`."""

    def run(self, args: Sequence[str], env: Mapping[str, str]) -> ProcessOutput:
        """Run to completion, capturing stdout and stderr."""
        argv = [str(arg) for arg in args]
        proc = subprocess.run(
            argv,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            encoding=OUTPUT_ENCODING,
            errors=OUTPUT_DECODE_ERRORS,
            env=dict(env),
            check=False,
        )
        return ProcessOutput(
            args=tuple(argv),
            returncode=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )

    def stream(self, args: Sequence[str], env: Mapping[str, str]) -> LineStream:
        """Start the CLI and return an iterator over its stdout lines."""
        proc = subprocess.Popen(
            [str(arg) for arg in args],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            encoding=OUTPUT_ENCODING,
            errors=OUTPUT_DECODE_ERRORS,
            env=dict(env),
            bufsize=1,  # Line buffered
        )
        return LineStream(proc)
