"""Test doubles and helpers shared across the suite."""

from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
import sys
import textwrap

from summarize_client.runner import ProcessOutput


def write_executable(path: Path, source: str) -> Path:
    """Write a Python script runnable as ``path`` and mark it executable."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"#!{sys.executable}\n{textwrap.dedent(source)}", encoding="utf-8")
    path.chmod(0o755)
    return path


@dataclass
class Invocation:
    """Record of a runner invocation for test assertions."""

    mode: str  # "run" or "stream"
    args: list[str]
    env: dict[str, str]


class FakeOutputStream:
    """In-memory stand-in for `summarize_client.runner.LineStream`."""

    def __init__(self, lines: Sequence[str], returncode: int, stderr: str):
        self._lines = list(lines)
        self._final_returncode = returncode
        self._final_stderr = stderr
        self.returncode: int | None = None
        self.stderr = ""
        self.closed = False
        self.consumed = 0

    def __iter__(self) -> Iterator[str]:
        for line in self._lines:
            self.consumed += 1
            yield line
        self.returncode = self._final_returncode
        self.stderr = self._final_stderr

    def __enter__(self) -> "FakeOutputStream":
        return self

    def __exit__(self, exc_type, exc_value, exc_tb) -> None:
        self.closed = True


@dataclass
class FakeRunner:
    """Runner that returns pre-configured output instead of spawning processes.

    Usage:
        runner = FakeRunner(stdout='{"summary": "ok"}')
        client = SummarizeClient(config, runner=runner)
        client.call("https://example.com")
        assert runner.last.args[1] == "https://example.com"
    """

    stdout: str = ""
    stderr: str = ""
    returncode: int = 0
    lines: list[str] = field(default_factory=list)
    # Called with the argument vector while the "process" runs
    on_invoke: Callable[[list[str]], None] | None = None
    invocations: list[Invocation] = field(default_factory=list)
    streams: list[FakeOutputStream] = field(default_factory=list)

    def _record(self, mode: str, args: Sequence[str], env: Mapping[str, str]) -> list[str]:
        argv = list(args)
        self.invocations.append(Invocation(mode=mode, args=argv, env=dict(env)))
        if self.on_invoke is not None:
            self.on_invoke(argv)
        return argv

    def run(self, args: Sequence[str], env: Mapping[str, str]) -> ProcessOutput:
        argv = self._record("run", args, env)
        return ProcessOutput(
            args=tuple(argv),
            returncode=self.returncode,
            stdout=self.stdout,
            stderr=self.stderr,
        )

    def stream(self, args: Sequence[str], env: Mapping[str, str]) -> FakeOutputStream:
        self._record("stream", args, env)
        output = FakeOutputStream(self.lines, self.returncode, self.stderr)
        self.streams.append(output)
        return output

    @property
    def last(self) -> Invocation:
        return self.invocations[-1]
