"""Structured view over the CLI's ``--json`` payload."""

from __future__ import annotations

from collections.abc import Mapping
import dataclasses
import json
from typing import Any


def _as_number(value: Any) -> int | float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return 0
    return value


@dataclasses.dataclass(frozen=True, slots=True)
class SummarizeResult:
    """A parsed summarize response.

    Every accessor is null-safe: a missing key, or an intermediate node that
    is not an object, yields ``None``.
    """

    raw: Mapping[str, Any]

    @classmethod
    def from_json(cls, text: str) -> SummarizeResult:
        """Parse CLI stdout. Raises `json.JSONDecodeError` on malformed input."""
        return cls(json.loads(text))

    def _dig(self, *keys: str) -> Any:
        node: Any = self.raw
        for key in keys:
            if not isinstance(node, Mapping):
                return None
            node = node.get(key)
        return node

    # --- Summary ---

    @property
    def summary(self) -> str | None:
        return self._dig("summary")

    @property
    def prompt(self) -> str | None:
        return self._dig("prompt")

    @property
    def slides(self) -> Any:
        return self._dig("slides")

    # --- Extracted content ---

    @property
    def title(self) -> str | None:
        return self._dig("extracted", "title")

    @property
    def description(self) -> str | None:
        return self._dig("extracted", "description")

    @property
    def site_name(self) -> str | None:
        return self._dig("extracted", "siteName")

    @property
    def content(self) -> str | None:
        return self._dig("extracted", "content")

    @property
    def content_length(self) -> int | None:
        return self._dig("extracted", "contentLength")

    @property
    def media_type(self) -> str | None:
        return self._dig("extracted", "mediaType")

    @property
    def source(self) -> str | None:
        return self._dig("extracted", "source")

    @property
    def input_kind(self) -> str | None:
        return self._dig("input", "kind")

    # --- LLM ---

    @property
    def model(self) -> str | None:
        return self._dig("llm", "model")

    @property
    def provider(self) -> str | None:
        return self._dig("llm", "provider")

    # --- Metrics ---

    @property
    def metrics(self) -> Mapping[str, Any] | None:
        return self._dig("metrics")

    @property
    def llm_metrics(self) -> list[Mapping[str, Any]]:
        """Per-model-call metrics; empty when the CLI reported none."""
        calls = self._dig("metrics", "llm")
        if not isinstance(calls, list):
            return []
        return [call for call in calls if isinstance(call, Mapping)]

    def _sum_tokens(self, key: str) -> int | float:
        return sum(_as_number(call.get(key)) for call in self.llm_metrics)

    @property
    def total_tokens(self) -> int | float:
        return self._sum_tokens("totalTokens")

    @property
    def prompt_tokens(self) -> int | float:
        return self._sum_tokens("promptTokens")

    @property
    def completion_tokens(self) -> int | float:
        return self._sum_tokens("completionTokens")

    # --- Classification ---

    @property
    def success(self) -> bool:
        """True when the CLI produced a summary."""
        return self.summary is not None

    @property
    def extract_only(self) -> bool:
        """True when there is extracted content but no summary."""
        return self.summary is None and self.content is not None

    def to_dict(self) -> dict[str, Any]:
        return dict(self.raw)
