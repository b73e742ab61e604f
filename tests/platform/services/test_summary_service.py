"""Tests for the report summary cache."""

import asyncio
import json

import pytest

from repro_platform.errors import (
    InvalidStateError,
    NotFoundError,
    SummaryValidationError,
    UpstreamError,
)
from repro_platform.persistence import ReportStore
from repro_platform.services.entity_service import add_mother, record_litter
from repro_platform.services.report_service import delete_report, generate_report, get_report
from repro_platform.services.summary_service import (
    get_summary,
    regenerate_summary,
    validate_summary,
)


@pytest.fixture
def report_conn(db_conn):
    add_mother(db_conn, "EWE-1")
    generate_report(db_conn, "EWE-1", "2024-01-01", "2024-12-31", "spring")
    return db_conn


class TestValidateSummary:

    def test_accepts_dict(self, sample_summary):
        assert json.loads(validate_summary(sample_summary)) == sample_summary

    def test_accepts_fenced_json_text(self, sample_summary):
        text = "```json\n" + json.dumps(sample_summary) + "\n```"
        assert json.loads(validate_summary(text)) == sample_summary

    def test_rejects_plain_prose(self):
        with pytest.raises(SummaryValidationError) as exc_info:
            validate_summary("EWE-1 is doing great.")
        assert exc_info.value.raw_output == "EWE-1 is doing great."

    def test_rejects_missing_key(self, sample_summary):
        del sample_summary["insights"]
        with pytest.raises(SummaryValidationError):
            validate_summary(sample_summary)

    def test_rejects_extra_key(self, sample_summary):
        sample_summary["verdict"] = "ok"
        with pytest.raises(SummaryValidationError):
            validate_summary(sample_summary)

    def test_rejects_non_string_items(self, sample_summary):
        sample_summary["highPerformers"] = ["EWE-1", 2]
        with pytest.raises(SummaryValidationError):
            validate_summary(sample_summary)

    def test_rejects_non_string_insights(self, sample_summary):
        sample_summary["insights"] = ["not", "a", "string"]
        with pytest.raises(SummaryValidationError):
            validate_summary(sample_summary)

    def test_rejects_json_array(self):
        with pytest.raises(SummaryValidationError):
            validate_summary("[]")


class TestGetSummary:

    @pytest.mark.asyncio
    async def test_generates_and_caches(self, report_conn, fake_summarizer, sample_summary):
        summary = await get_summary(report_conn, "spring", fake_summarizer)
        assert json.loads(summary) == sample_summary
        assert get_report(report_conn, "spring").summary == summary

        again = await get_summary(report_conn, "spring", fake_summarizer)
        assert again == summary
        assert len(fake_summarizer.calls) == 1

    @pytest.mark.asyncio
    async def test_passes_report_to_summarizer(self, report_conn, fake_summarizer):
        await get_summary(report_conn, "spring", fake_summarizer)
        call = fake_summarizer.calls[0]
        assert call["report_name"] == "spring"
        assert call["targets"] == ["EWE-1"]
        assert call["entries"][0].startswith("Performance for EWE-1")
        assert call["generated_at"]

    @pytest.mark.asyncio
    async def test_unknown_report(self, db_conn, fake_summarizer):
        with pytest.raises(NotFoundError):
            await get_summary(db_conn, "spring", fake_summarizer)
        assert fake_summarizer.calls == []

    @pytest.mark.asyncio
    async def test_invalid_output_is_not_cached(self, report_conn, make_summarizer):
        summarizer = make_summarizer(output={"highPerformers": []})
        with pytest.raises(SummaryValidationError):
            await get_summary(report_conn, "spring", summarizer)
        assert get_report(report_conn, "spring").summary == ""

    @pytest.mark.asyncio
    async def test_collaborator_error_is_upstream(self, report_conn, make_summarizer):
        summarizer = make_summarizer(error=ConnectionError("network down"))
        with pytest.raises(UpstreamError, match="network down"):
            await get_summary(report_conn, "spring", summarizer)

    @pytest.mark.asyncio
    async def test_missing_summarizer_is_upstream(self, report_conn):
        with pytest.raises(UpstreamError):
            await get_summary(report_conn, "spring", None)

    @pytest.mark.asyncio
    async def test_timeout_is_upstream(self, report_conn, monkeypatch, sample_summary):
        monkeypatch.setattr(
            "repro_platform.services.summary_service.summary_timeout_seconds", lambda: 0.05
        )

        class SlowSummarizer:
            async def summarize(self, **kwargs):
                await asyncio.sleep(5)
                return sample_summary

        with pytest.raises(UpstreamError, match="timed out"):
            await get_summary(report_conn, "spring", SlowSummarizer())
        assert get_report(report_conn, "spring").summary == ""

    @pytest.mark.asyncio
    async def test_new_entry_forces_fresh_summary(self, report_conn, fake_summarizer):
        await get_summary(report_conn, "spring", fake_summarizer)
        record_litter(report_conn, "EWE-1", None, "2024-05-01", 1)
        generate_report(report_conn, "EWE-1", "2024-01-01", "2024-12-31", "spring")
        await get_summary(report_conn, "spring", fake_summarizer)
        assert len(fake_summarizer.calls) == 2
        assert len(fake_summarizer.calls[1]["entries"]) == 2

    @pytest.mark.asyncio
    async def test_append_during_summarization_is_not_cached(self, report_conn, sample_summary):

        class AppendingSummarizer:
            def __init__(self):
                self.calls = []

            async def summarize(self, *, report_name, generated_at, targets, entries):
                self.calls.append(list(entries))
                if len(self.calls) == 1:
                    record_litter(report_conn, "EWE-1", None, "2024-05-01", 1)
                    generate_report(report_conn, "EWE-1", "2024-01-01", "2024-12-31", "spring")
                return sample_summary

        summarizer = AppendingSummarizer()
        with pytest.raises(InvalidStateError, match="gained entries"):
            await get_summary(report_conn, "spring", summarizer)
        assert get_report(report_conn, "spring").summary == ""

        summary = await get_summary(report_conn, "spring", summarizer)
        assert len(summarizer.calls) == 2
        assert len(summarizer.calls[1]) == 2
        assert get_report(report_conn, "spring").summary == summary

    @pytest.mark.asyncio
    async def test_report_deleted_during_summarization(self, report_conn, sample_summary):

        class DeletingSummarizer:
            async def summarize(self, **kwargs):
                delete_report(report_conn, "spring")
                return sample_summary

        with pytest.raises(NotFoundError):
            await get_summary(report_conn, "spring", DeletingSummarizer())


class TestRegenerateSummary:

    @pytest.mark.asyncio
    async def test_always_invokes(self, report_conn, fake_summarizer):
        await get_summary(report_conn, "spring", fake_summarizer)
        await regenerate_summary(report_conn, "spring", fake_summarizer)
        assert len(fake_summarizer.calls) == 2

    @pytest.mark.asyncio
    async def test_overwrites_cache(self, report_conn, make_summarizer, sample_summary):
        ReportStore.set_summary(report_conn, "spring", '{"old": true}')
        summary = await regenerate_summary(report_conn, "spring", make_summarizer(output=sample_summary))
        assert get_report(report_conn, "spring").summary == summary

    @pytest.mark.asyncio
    async def test_failure_keeps_previous_summary(self, report_conn, make_summarizer):
        ReportStore.set_summary(report_conn, "spring", '{"old": true}')
        with pytest.raises(UpstreamError):
            await regenerate_summary(report_conn, "spring", make_summarizer(error=RuntimeError("500")))
        with pytest.raises(SummaryValidationError):
            await regenerate_summary(report_conn, "spring", make_summarizer(output="nope"))
        assert get_report(report_conn, "spring").summary == '{"old": true}'

    @pytest.mark.asyncio
    async def test_unknown_report(self, db_conn, fake_summarizer):
        with pytest.raises(NotFoundError):
            await regenerate_summary(db_conn, "spring", fake_summarizer)
