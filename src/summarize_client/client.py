"""Invocation client for the summarize CLI.

`SummarizeClient` turns Python calls into ``summarize`` process invocations:

1. Merge call-site options over the configuration's defaults.
2. Build the argument vector for either buffered JSON mode or streaming mode.
3. Check preconditions (executable binary, minimum CLI version).
4. Run the process and turn its outcome into a `SummarizeResult`, the
   streamed text, or an exception from `summarize_client.exceptions`.

Nothing is retried here. ``timeout`` and ``retries`` are forwarded to the CLI,
which enforces them itself.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
import json
import logging
import os
import signal
from typing import Any

from .config import Configuration, get_configuration
from .config.probe import is_executable_file, parse_version
from .constants import (
    AUTO_MODEL,
    DEFAULT_BINARY_NAME,
    EXIT_INTERRUPTED,
    EXIT_SUCCESS,
    EXIT_TERMINATED,
    MINIMUM_CLI_VERSION,
    OUTPUT_PREVIEW_CHARS,
)
from .exceptions import (
    BinaryNotFoundError,
    CommandError,
    CommandInterruptedError,
    CommandTerminatedError,
    SummarizationError,
    SummarizeError,
    VersionMismatchError,
)
from .files import temporary_text_file
from .options import SummarizeOptions, encode_options
from .result import SummarizeResult
from .runner import CommandRunner, SubprocessRunner
from .telemetry import TelemetryContext, TelemetryContextProtocol

log = logging.getLogger(__name__)

InputTarget = str | os.PathLike[str]
OptionsArg = SummarizeOptions | Mapping[str, Any] | None
ChunkCallback = Callable[[str], object]


def classify_exit(exit_code: int, stderr: str | None) -> SummarizeError:
    """Map a non-zero exit status to the matching exception instance.

    Accepts both shell-style codes (130, 143) and the negative codes
    `subprocess` reports when the child was killed by the signal directly.
    """
    stderr_text = (stderr or "").strip()
    if exit_code in (EXIT_INTERRUPTED, -signal.SIGINT):
        return CommandInterruptedError(exit_code, stderr_text)
    if exit_code in (EXIT_TERMINATED, -signal.SIGTERM):
        return CommandTerminatedError(exit_code, stderr_text)
    return CommandError(exit_code, stderr_text)


class SummarizeClient:
    """Runs the summarize CLI for URLs, files, and raw text.

    Example:
        client = SummarizeClient(Configuration(default_length="short"))
        result = client.call("https://example.com", language="es")
        print(result.summary, result.total_tokens)

        for line in client.stream("/path/to/talk.mp4"):
            print(line, end="")
    """

    def __init__(
        self,
        config: Configuration | None = None,
        *,
        runner: CommandRunner | None = None,
        telemetry: TelemetryContextProtocol | None = None,
    ):
        """Initialize the client.

        Args:
            config: Configuration to use. Defaults to the active process-wide
                configuration at construction time.
            runner: Process launcher; `SubprocessRunner` when omitted.
            telemetry: Telemetry context; a no-op context when omitted.
        """
        self.config = config if config is not None else get_configuration()
        self.runner: CommandRunner = runner or SubprocessRunner()
        self._tele = telemetry or TelemetryContext()

    # --- Public operations ---

    def call(
        self,
        input: InputTarget,  # noqa: A002
        options: OptionsArg = None,
        *,
        on_chunk: ChunkCallback | None = None,
        **option_fields: Any,
    ) -> SummarizeResult | str:
        """Summarize a URL or file path.

        Without ``on_chunk`` the CLI runs in JSON mode and a `SummarizeResult`
        is returned. With ``on_chunk`` the CLI streams; each output line is
        passed to the callback as it arrives and the concatenated text is
        returned. A streamed call can still fail after delivering output.
        """
        with self._tele("summarize.call", streaming=on_chunk is not None):
            if on_chunk is not None:
                return self._stream_to_callback(input, options, option_fields, on_chunk)
            return self._run_json(input, options, option_fields, extract=False)

    def from_text(
        self,
        text: str,
        options: OptionsArg = None,
        *,
        on_chunk: ChunkCallback | None = None,
        **option_fields: Any,
    ) -> SummarizeResult | str:
        """Summarize raw text by handing the CLI a temporary file.

        The file exists only for the duration of the call.
        """
        with self._tele("summarize.from_text", characters=len(text)):
            with temporary_text_file(text) as path:
                return self.call(path, options, on_chunk=on_chunk, **option_fields)

    def extract(
        self,
        input: InputTarget,  # noqa: A002
        options: OptionsArg = None,
        **option_fields: Any,
    ) -> SummarizeResult:
        """Extract content without summarizing it (``--extract``)."""
        with self._tele("summarize.extract"):
            return self._run_json(input, options, option_fields, extract=True)

    def stream(
        self,
        input: InputTarget,  # noqa: A002
        options: OptionsArg = None,
        **option_fields: Any,
    ) -> Iterator[str]:
        """Stream output lines as the CLI produces them.

        Preconditions are checked before this returns. The process starts on
        the first ``next()``, so an iterator closed or dropped before that
        never launches one. The iterator raises the classified error after the
        last line if the process exited non-zero; closing it early stops the
        process.
        """
        args = self.build_args(
            input, self._combine(options, option_fields), streaming=True
        )
        self.validate()
        return self._iter_stream(args, self.command_env())

    # --- Invocation building ---

    def resolve_options(self, options: OptionsArg = None) -> SummarizeOptions:
        """Merge call-site options over configuration defaults.

        Defaults only fill options the call site left unset. A mapping key
        given as ``None`` counts as set and suppresses the default.
        """
        defaults: dict[str, Any] = {}
        config = self.config
        if config.default_model and config.default_model != AUTO_MODEL:
            defaults["model"] = config.default_model
        if config.default_cli is not None:
            defaults["cli"] = config.default_cli
        if config.default_length is not None:
            defaults["length"] = config.default_length
        if config.default_language is not None:
            defaults["language"] = config.default_language
        if config.timeout is not None:
            defaults["timeout"] = config.timeout
        if config.retries is not None:
            defaults["retries"] = config.retries

        merged = SummarizeOptions.from_mapping(defaults)
        if options is None:
            return merged
        return merged.with_overrides(options)

    def build_args(
        self,
        input: InputTarget,  # noqa: A002
        options: OptionsArg = None,
        *,
        extract: bool = False,
        streaming: bool = False,
    ) -> list[str]:
        """Return the full argument vector, binary path first."""
        args = [self.config.binary_path, os.fspath(input)]
        if streaming:
            args += ["--stream", "on"]
        else:
            args += ["--json", "--stream", "off"]
            if extract:
                args.append("--extract")
            args += ["--metrics", "on"]
        args.extend(encode_options(self.resolve_options(options)))
        return args

    def command_env(self) -> dict[str, str]:
        return self.config.command_env()

    # --- Preconditions ---

    def validate(self) -> None:
        """Check that the binary is runnable and recent enough.

        Raises:
            BinaryNotFoundError: If a configured path is not an executable file.
            VersionMismatchError: If the detected version is below the minimum.
        """
        self._validate_binary()
        self._validate_version()

    def _validate_binary(self) -> None:
        path = self.config.binary_path
        if path == DEFAULT_BINARY_NAME:
            return  # rely on PATH
        if is_executable_file(path):
            return
        raise BinaryNotFoundError(path)

    def _validate_version(self) -> None:
        if self.config.skip_version_check:
            return

        installed = self.config.cli_version
        if not installed:
            return  # can't detect, nothing to compare

        installed_parts = parse_version(installed)
        required_parts = parse_version(MINIMUM_CLI_VERSION)
        if installed_parts is None or required_parts is None:
            log.warning(
                "Skipping version check: could not parse summarize version %r",
                installed,
            )
            return
        if installed_parts < required_parts:
            raise VersionMismatchError(installed, MINIMUM_CLI_VERSION)

    # --- Execution ---

    def _combine(
        self, options: OptionsArg, option_fields: Mapping[str, Any]
    ) -> dict[str, Any]:
        # Explicitly passed keys, None included
        if isinstance(options, SummarizeOptions):
            combined = options.specified()
        else:
            combined = dict(options or {})
        combined.update(option_fields)
        return combined

    def _run_json(
        self,
        input: InputTarget,  # noqa: A002
        options: OptionsArg,
        option_fields: Mapping[str, Any],
        *,
        extract: bool,
    ) -> SummarizeResult:
        args = self.build_args(
            input, self._combine(options, option_fields), extract=extract
        )
        self.validate()
        log.debug("Running summarize: %s", args)

        output = self.runner.run(args, self.command_env())
        self._tele.metric("exit_code", output.returncode)
        if not output.success:
            raise classify_exit(output.returncode, output.stderr)

        try:
            result = SummarizeResult.from_json(output.stdout)
        except json.JSONDecodeError as e:
            preview = output.stdout[:OUTPUT_PREVIEW_CHARS]
            raise SummarizationError(
                f"Failed to parse JSON output: {e}\nOutput: {preview}",
                output_preview=preview,
            ) from e
        if not isinstance(result.raw, Mapping):
            preview = output.stdout[:OUTPUT_PREVIEW_CHARS]
            raise SummarizationError(
                "Failed to parse JSON output: expected an object, "
                f"got {type(result.raw).__name__}\nOutput: {preview}",
                output_preview=preview,
            )

        self._tele.metric("tokens.total", result.total_tokens)
        self._tele.metric("tokens.prompt", result.prompt_tokens)
        self._tele.metric("tokens.completion", result.completion_tokens)
        return result

    def _stream_to_callback(
        self,
        input: InputTarget,  # noqa: A002
        options: OptionsArg,
        option_fields: Mapping[str, Any],
        on_chunk: ChunkCallback,
    ) -> str:
        chunks: list[str] = []
        for line in self.stream(input, options, **option_fields):
            chunks.append(line)
            on_chunk(line)
        return "".join(chunks)

    def _iter_stream(self, args: list[str], env: dict[str, str]) -> Iterator[str]:
        log.debug("Streaming summarize: %s", args)
        output = self.runner.stream(args, env)
        with output:
            yield from output
        exit_code = output.returncode
        self._tele.metric("exit_code", exit_code)
        if exit_code is not None and exit_code != EXIT_SUCCESS:
            raise classify_exit(exit_code, output.stderr)
