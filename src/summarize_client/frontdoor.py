"""Convenience helpers for one-off calls.

Each helper builds a `SummarizeClient` over the active configuration (the
process-wide default, or whatever `config_scope()` installed) and forwards the
call. For repeated use, or for isolation between components, construct a
`SummarizeClient` with an explicit `Configuration` instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from summarize_client.client import SummarizeClient

if TYPE_CHECKING:  # pragma: no cover - typing only
    from collections.abc import Iterator

    from summarize_client.client import ChunkCallback, InputTarget, OptionsArg
    from summarize_client.result import SummarizeResult


def call(
    input: InputTarget,  # noqa: A002
    options: OptionsArg = None,
    *,
    on_chunk: ChunkCallback | None = None,
    **option_fields: Any,
) -> SummarizeResult | str:
    """Summarize a URL or file path.

    Example:
        ```python
        import summarize_client

        result = summarize_client.call("https://example.com", length="short")
        print(result.summary)

        # Stream instead of waiting for JSON
        summarize_client.call("https://example.com", on_chunk=print)
        ```
    """
    return SummarizeClient().call(input, options, on_chunk=on_chunk, **option_fields)


def from_text(
    text: str,
    options: OptionsArg = None,
    *,
    on_chunk: ChunkCallback | None = None,
    **option_fields: Any,
) -> SummarizeResult | str:
    """Summarize raw text.

    Example:
        ```python
        result = summarize_client.from_text("Long article text...", length="medium")
        ```
    """
    return SummarizeClient().from_text(
        text, options, on_chunk=on_chunk, **option_fields
    )


def extract(
    input: InputTarget,  # noqa: A002
    options: OptionsArg = None,
    **option_fields: Any,
) -> SummarizeResult:
    """Extract content without summarization.

    Example:
        ```python
        result = summarize_client.extract("https://example.com", format="md")
        print(result.content)
        ```
    """
    return SummarizeClient().extract(input, options, **option_fields)


def stream(
    input: InputTarget,  # noqa: A002
    options: OptionsArg = None,
    **option_fields: Any,
) -> Iterator[str]:
    """Iterate over output lines as the CLI produces them."""
    return SummarizeClient().stream(input, options, **option_fields)
