"""Tests for the LLM-backed summarizer and its prompt."""

import json

import pytest

from repro_platform.runtime.prompts import SUMMARY_TOOL, get_summary_prompt
from repro_platform.runtime.summarizer import (
    LLMSummarizer,
    parse_summary_text,
    strip_code_fences,
)

ENTRIES = [
    "Performance for EWE-1 (2024-01-01 to 2024-12-31): Litters: 1, Offspring: 2, "
    "Avg Offspring/Litter: 2.00, Weaning Survival: 100.00%",
]


class TestStripCodeFences:

    def test_json_fence(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence(self):
        assert strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_no_fence(self):
        assert strip_code_fences('  {"a": 1} ') == '{"a": 1}'


def test_parse_summary_text_rejects_prose():
    with pytest.raises(json.JSONDecodeError):
        parse_summary_text("All mothers performed well.")


def test_prompt_lists_report_details():
    prompt = get_summary_prompt("spring", "2024-12-31T10:00:00", ["EWE-1", "EWE-2"], ENTRIES)
    assert "Report Name: spring" in prompt
    assert "Generated Date: 2024-12-31T10:00:00" in prompt
    assert "Target Mothers: EWE-1, EWE-2" in prompt
    assert "  1. Performance for EWE-1" in prompt
    for key in SUMMARY_TOOL["input_schema"]["required"]:
        assert f'"{key}"' in prompt


class TestLLMSummarizer:

    @pytest.mark.asyncio
    async def test_returns_tool_input(self, mock_llm_client, mock_tool_call_result, sample_summary):
        mock_llm_client.call_tool.return_value = mock_tool_call_result(sample_summary)
        summarizer = LLMSummarizer(mock_llm_client, model="sonnet")

        result = await summarizer.summarize(
            report_name="spring", generated_at="2024-12-31", targets=["EWE-1"], entries=ENTRIES
        )

        assert result == sample_summary
        kwargs = mock_llm_client.call_tool.call_args.kwargs
        assert kwargs["model"] == "claude-sonnet-4-5-20250929"
        assert kwargs["tool_schema"] is SUMMARY_TOOL
        assert "Report Name: spring" in kwargs["prompt"]

    @pytest.mark.asyncio
    async def test_falls_back_to_raw_text(self, mock_llm_client, mock_text_only_result):
        mock_llm_client.call_tool.return_value = mock_text_only_result('```json\n{"a": 1}\n```')
        summarizer = LLMSummarizer(mock_llm_client, model="haiku")

        result = await summarizer.summarize(
            report_name="spring", generated_at="", targets=[], entries=ENTRIES
        )

        assert result == '```json\n{"a": 1}\n```'

    def test_from_env_requires_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with pytest.raises(ValueError):
            LLMSummarizer.from_env(model="gpt-4o")

    def test_from_env_builds_provider_client(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "k")
        summarizer = LLMSummarizer.from_env(model="haiku")
        assert summarizer.model_cfg["provider"] == "anthropic"
