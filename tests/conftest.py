"""
Shared fixtures for repro-tracker tests.
"""

import pytest
from unittest.mock import AsyncMock

from repro_platform.facade import ReproductionTracker
from repro_platform.persistence import LitterStore, MotherStore, OffspringStore, connect
from repro_platform.runtime.llm.base import ToolCallResult


@pytest.fixture
def sample_summary():
    """A summary payload with the exact shape summarizers must return."""
    return {
        "highPerformers": ["EWE-1"],
        "lowPerformers": ["EWE-2"],
        "concerningTrends": [],
        "averagePerformers": [],
        "potentialRecordErrors": [],
        "insights": "EWE-1 weaned every lamb; EWE-2 lost half of hers before weaning.",
    }


@pytest.fixture
def mock_llm_client():
    """Create a mock LLMClient with ``call_tool`` as an AsyncMock.

    Usage:
        mock_llm_client.call_tool.return_value = ToolCallResult(tool_input={...})
    """
    client = AsyncMock()
    client.call_tool = AsyncMock()
    return client


@pytest.fixture
def mock_tool_call_result():
    """Build a ToolCallResult carrying a tool call."""
    def _make(tool_input: dict):
        return ToolCallResult(tool_input=tool_input)
    return _make


@pytest.fixture
def mock_text_only_result():
    """Build a ToolCallResult where the model answered in text instead of calling the tool."""
    def _make(text: str):
        return ToolCallResult(tool_input={}, raw_text=text)
    return _make


class FakeSummarizer:
    """Summarizer double that records calls and returns canned output."""

    def __init__(self, output=None, error: Exception | None = None):
        self.output = output
        self.error = error
        self.calls: list[dict] = []

    async def summarize(self, *, report_name, generated_at, targets, entries):
        self.calls.append({
            "report_name": report_name,
            "generated_at": generated_at,
            "targets": list(targets),
            "entries": list(entries),
        })
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def fake_summarizer(sample_summary):
    return FakeSummarizer(output=sample_summary)


@pytest.fixture
def make_summarizer():
    """Factory for FakeSummarizer instances with custom output or errors."""
    def _make(output=None, error: Exception | None = None):
        return FakeSummarizer(output=output, error=error)
    return _make


@pytest.fixture
def db_conn():
    """Create an in-memory SQLite connection with the repro-tracker schema."""
    conn = connect(":memory:")
    yield conn
    conn.close()


@pytest.fixture
def db_path(tmp_path):
    """Path of a file-backed database, for tests that need several connections."""
    path = str(tmp_path / "tracker.db")
    connect(path).close()
    return path


@pytest.fixture
def seeded_conn(db_conn):
    """In-memory DB with mother EWE-1, litter EWE-1-1 and two unweaned lambs."""
    MotherStore.create(db_conn, "EWE-1")
    MotherStore.claim_litter_number(db_conn, "EWE-1")
    LitterStore.create(db_conn, "EWE-1-1", "EWE-1", "RAM-1", "2024-03-01", 2)
    OffspringStore.create(db_conn, "L1", "EWE-1-1", "female")
    OffspringStore.create(db_conn, "L2", "EWE-1-1", "male")
    return db_conn


@pytest.fixture
def tracker(fake_summarizer):
    t = ReproductionTracker.in_memory(summarizer=fake_summarizer)
    yield t
    t.close()