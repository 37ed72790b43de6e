"""Unit tests for the result projection over ``--json`` payloads."""

import json

import pytest

from summarize_client.result import SummarizeResult


@pytest.fixture
def result(summary_payload) -> SummarizeResult:
    return SummarizeResult(summary_payload)


@pytest.fixture
def extract_result(extract_payload) -> SummarizeResult:
    return SummarizeResult(extract_payload)


class TestSummaryAccessors:
    @pytest.mark.unit
    def test_summary_fields(self, result):
        assert result.summary.startswith("## Key Points")
        assert result.prompt == "Summarize the following content..."
        assert result.input_kind == "url"
        assert result.success is True
        assert result.extract_only is False

    @pytest.mark.unit
    def test_extracted_fields(self, result):
        assert result.title == "Test Article"
        assert result.description == "A test article for testing"
        assert result.site_name == "Example"
        assert result.content == "This is the full extracted content of the article."
        assert result.content_length == 50
        assert result.media_type == "text/html"
        assert result.source == "readability"

    @pytest.mark.unit
    def test_llm_fields(self, result):
        assert result.model == "gpt-5-mini"
        assert result.provider == "openai"


class TestTokenMetrics:
    @pytest.mark.unit
    def test_single_call(self, result):
        assert result.total_tokens == 1550
        assert result.prompt_tokens == 1200
        assert result.completion_tokens == 350

    @pytest.mark.unit
    def test_sums_across_calls_and_defaults_missing_to_zero(self):
        result = SummarizeResult(
            {
                "metrics": {
                    "llm": [
                        {"promptTokens": 100, "completionTokens": 20, "totalTokens": 120},
                        {"promptTokens": 50},
                        {"totalTokens": None},
                        "not-a-call",
                    ]
                }
            }
        )
        assert result.prompt_tokens == 150
        assert result.completion_tokens == 20
        assert result.total_tokens == 120
        assert len(result.llm_metrics) == 3

    @pytest.mark.unit
    def test_no_metrics(self):
        result = SummarizeResult({"summary": "s"})
        assert result.metrics is None
        assert result.llm_metrics == []
        assert result.total_tokens == 0


class TestExtractOnly:
    @pytest.mark.unit
    def test_classification(self, extract_result):
        assert extract_result.success is False
        assert extract_result.extract_only is True
        assert "extracted markdown content" in extract_result.content

    @pytest.mark.unit
    def test_null_llm_block_is_safe(self, extract_result):
        assert extract_result.model is None
        assert extract_result.provider is None

    @pytest.mark.unit
    def test_neither_summary_nor_content(self):
        result = SummarizeResult({"extracted": {"title": "only a title"}})
        assert result.success is False
        assert result.extract_only is False


class TestNullSafety:
    @pytest.mark.unit
    def test_absent_paths_are_none(self):
        result = SummarizeResult({})
        assert result.summary is None
        assert result.title is None
        assert result.slides is None
        assert result.input_kind is None

    @pytest.mark.unit
    def test_non_object_intermediate_is_none(self):
        result = SummarizeResult({"extracted": "oops", "llm": ["x"]})
        assert result.title is None
        assert result.model is None


class TestConversion:
    @pytest.mark.unit
    def test_to_dict_returns_payload(self, result, summary_payload):
        assert result.to_dict() == summary_payload

    @pytest.mark.unit
    def test_from_json(self, summary_payload):
        result = SummarizeResult.from_json(json.dumps(summary_payload))
        assert result.summary == summary_payload["summary"]

    @pytest.mark.unit
    def test_from_json_rejects_malformed_input(self):
        with pytest.raises(json.JSONDecodeError):
            SummarizeResult.from_json("not json")

    @pytest.mark.unit
    def test_slides_passthrough(self):
        slides = [{"index": 1, "timestamp": 12.5}]
        assert SummarizeResult({"slides": slides}).slides == slides
