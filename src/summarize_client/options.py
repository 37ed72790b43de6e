"""Per-call options and their command-line encoding.

`SummarizeOptions` is the closed set of options the client knows how to
forward to the summarize CLI. Encoding is pure: every declared valued option
that is set becomes ``[flag, value]`` and every boolean option that is true
becomes ``[flag]``, in declaration order. Flags the table does not know yet can
be forwarded verbatim through ``extra_args``.
"""

from __future__ import annotations

from collections.abc import Mapping
import dataclasses
from enum import Enum
import logging
from typing import Any, Self

log = logging.getLogger(__name__)


class Length(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"
    XL = "xl"
    XXL = "xxl"
    S = "s"
    M = "m"
    L = "l"


class VideoMode(str, Enum):
    AUTO = "auto"
    TRANSCRIPT = "transcript"
    UNDERSTAND = "understand"


class OutputFormat(str, Enum):
    TEXT = "text"
    MD = "md"


class MarkdownMode(str, Enum):
    OFF = "off"
    AUTO = "auto"
    LLM = "llm"
    READABILITY = "readability"


class MetricsMode(str, Enum):
    OFF = "off"
    ON = "on"
    DETAILED = "detailed"


# Emission order is part of the contract: callers assert on exact argv.
VALUED_OPTIONS: tuple[tuple[str, str], ...] = (
    ("model", "--model"),
    ("cli", "--cli"),
    ("length", "--length"),
    ("language", "--lang"),
    ("timeout", "--timeout"),
    ("retries", "--retries"),
    ("prompt", "--prompt"),
    ("prompt_file", "--prompt-file"),
    ("format", "--format"),
    ("video_mode", "--video-mode"),
    ("markdown_mode", "--markdown-mode"),
    ("max_output_tokens", "--max-output-tokens"),
    ("max_extract_characters", "--max-extract-characters"),
    ("youtube", "--youtube"),
    ("transcriber", "--transcriber"),
    ("firecrawl", "--firecrawl"),
    ("preprocess", "--preprocess"),
    ("theme", "--theme"),
    ("metrics", "--metrics"),
    ("slides_dir", "--slides-dir"),
    ("slides_max", "--slides-max"),
)

BOOLEAN_OPTIONS: tuple[tuple[str, str], ...] = (
    ("force_summary", "--force-summary"),
    ("timestamps", "--timestamps"),
    ("no_cache", "--no-cache"),
    ("no_media_cache", "--no-media-cache"),
    ("verbose", "--verbose"),
    ("debug", "--debug"),
    ("no_color", "--no-color"),
    ("plain", "--plain"),
    ("slides", "--slides"),
    ("slides_debug", "--slides-debug"),
    ("slides_ocr", "--slides-ocr"),
)

_BOOLEAN_NAMES = frozenset(name for name, _ in BOOLEAN_OPTIONS)

OPTION_NAMES = frozenset(
    [name for name, _ in VALUED_OPTIONS]
    + [name for name, _ in BOOLEAN_OPTIONS]
    + ["extra_args"]
)


def _field_values(mapping: Mapping[str, Any] | None) -> dict[str, Any]:
    """Keep the option keys of ``mapping`` as dataclass field values."""
    values: dict[str, Any] = {}
    for key, value in (mapping or {}).items():
        if key not in OPTION_NAMES:
            log.debug("Ignoring unknown summarize option %r", key)
        elif key == "extra_args":
            if isinstance(value, str):
                value = (value,)
            values[key] = tuple(value or ())
        elif key in _BOOLEAN_NAMES:
            values[key] = bool(value)
        else:
            values[key] = value
    return values


def _stringify(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclasses.dataclass(frozen=True, slots=True)
class SummarizeOptions:
    """Options forwarded to a single summarize invocation.

    Valued options left as ``None`` and boolean options left ``False`` are not
    emitted. Values are only stringified, never validated; the CLI owns
    validation.
    """

    # --- Valued options ---
    model: str | None = None
    cli: str | None = None
    length: Length | str | int | None = None
    language: str | None = None
    timeout: str | int | float | None = None
    retries: int | None = None
    prompt: str | None = None
    prompt_file: str | None = None
    format: OutputFormat | str | None = None
    video_mode: VideoMode | str | None = None
    markdown_mode: MarkdownMode | str | None = None
    max_output_tokens: int | str | None = None
    max_extract_characters: int | str | None = None
    youtube: str | None = None
    transcriber: str | None = None
    firecrawl: str | None = None
    preprocess: str | None = None
    theme: str | None = None
    metrics: MetricsMode | str | None = None
    slides_dir: str | None = None
    slides_max: int | None = None

    # --- Boolean flags ---
    force_summary: bool = False
    timestamps: bool = False
    no_cache: bool = False
    no_media_cache: bool = False
    verbose: bool = False
    debug: bool = False
    no_color: bool = False
    plain: bool = False
    slides: bool = False
    slides_debug: bool = False
    slides_ocr: bool = False

    # Raw flags appended after everything above
    extra_args: tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> Self:
        """Build options from a mapping, ignoring names that are not options."""
        return cls(**_field_values(mapping))

    def specified(self) -> dict[str, Any]:
        """Return only the options the caller actually set."""
        values: dict[str, Any] = {}
        for name, _ in VALUED_OPTIONS:
            value = getattr(self, name)
            if value is not None:
                values[name] = value
        for name, _ in BOOLEAN_OPTIONS:
            if getattr(self, name):
                values[name] = True
        if self.extra_args:
            values["extra_args"] = self.extra_args
        return values

    def with_overrides(self, overrides: SummarizeOptions | Mapping[str, Any]) -> Self:
        """Overlay ``overrides`` on top of these options.

        A `SummarizeOptions` contributes only the values it sets. A mapping
        contributes every key it holds, so an explicit ``None`` (or ``False``)
        clears the option.
        """
        if isinstance(overrides, SummarizeOptions):
            return dataclasses.replace(self, **overrides.specified())
        return dataclasses.replace(self, **_field_values(overrides))

    def to_args(self) -> list[str]:
        return encode_options(self)


def encode_options(options: SummarizeOptions | Mapping[str, Any] | None) -> list[str]:
    """Encode options into CLI tokens in declaration order.

    Accepts either a `SummarizeOptions` or a plain mapping keyed by option
    name. Unknown mapping keys contribute nothing.
    """
    if options is None:
        return []
    if isinstance(options, SummarizeOptions):
        lookup = options.specified()
    else:
        lookup = _field_values(options)

    args: list[str] = []
    for name, flag in VALUED_OPTIONS:
        value = lookup.get(name)
        if value is None:
            continue
        args.extend((flag, _stringify(value)))

    for name, flag in BOOLEAN_OPTIONS:
        if lookup.get(name):
            args.append(flag)

    args.extend(str(arg) for arg in lookup.get("extra_args", ()))
    return args
