"""Platform-owned summary cache service.

A report's summary is produced by an external summarizer at most once and then
served from the ``report.summary`` column until it is regenerated or the report
gains a new entry.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sqlite3

from pydantic import ValidationError

from contracts.v1 import SummaryContract, canonical_summary_json
from repro_platform.errors import (
    InvalidStateError,
    NotFoundError,
    SummaryValidationError,
    UpstreamError,
)
from repro_platform.persistence import ReportStore
from repro_platform.runtime.config import summary_timeout_seconds
from repro_platform.runtime.summarizer import Summarizer, parse_summary_text

logger = logging.getLogger(__name__)


def validate_summary(output) -> str:
    """Check summarizer output against ``SummaryContract``; return canonical JSON.

    Raises ``SummaryValidationError`` for non-JSON text or a wrong shape.
    """
    raw = output if isinstance(output, str) else repr(output)
    if isinstance(output, str):
        try:
            output = parse_summary_text(output)
        except json.JSONDecodeError as e:
            raise SummaryValidationError(
                f"Summarizer response is not valid JSON: {e.msg}", raw_output=raw
            ) from e
    if not isinstance(output, dict):
        raise SummaryValidationError(
            "Summarizer response must be a JSON object.", raw_output=raw
        )
    try:
        summary = SummaryContract.model_validate(output)
    except ValidationError as e:
        raise SummaryValidationError(
            f"Summarizer response does not match the expected structure "
            f"({e.error_count()} problem(s)).",
            raw_output=raw,
        ) from e
    return canonical_summary_json(summary)


async def _invoke(summarizer: Summarizer | None, report: dict) -> str:
    if summarizer is None:
        raise UpstreamError("No summarizer is configured.")

    timeout = summary_timeout_seconds()
    try:
        output = await asyncio.wait_for(
            summarizer.summarize(
                report_name=report["name"],
                generated_at=report.get("generated_at") or "",
                targets=list(report.get("targets") or []),
                entries=list(report["entries"]),
            ),
            timeout=timeout,
        )
    except asyncio.TimeoutError as e:
        logger.warning("Summarizer timed out after %ss for report '%s'", timeout, report["name"])
        raise UpstreamError(f"Summarizer timed out after {timeout} seconds.") from e
    except (ValueError, ImportError, OSError) as e:
        logger.warning("Summarizer unavailable for report '%s': %s", report["name"], e)
        raise UpstreamError(f"Summarizer unavailable: {e}") from e
    except Exception as e:
        # Provider SDK errors (network, auth, rate limit) have no common base.
        logger.warning("Summarizer call failed for report '%s': %s", report["name"], e)
        raise UpstreamError(f"Summarizer call failed: {e}") from e

    try:
        return validate_summary(output)
    except SummaryValidationError:
        logger.warning("Invalid summary for report '%s'", report["name"])
        raise


def _load_report(conn: sqlite3.Connection, name: str) -> dict:
    report = ReportStore.get(conn, name)
    if report is None:
        raise NotFoundError(f"Report with name '{name}' not found.")
    return report


async def get_summary(
    conn: sqlite3.Connection, name: str, summarizer: Summarizer | None
) -> str:
    """Return the cached summary, generating and storing it if absent."""
    report = _load_report(conn, name)
    if report["summary"]:
        return report["summary"]
    return await _generate_and_store(conn, report, summarizer)


async def regenerate_summary(
    conn: sqlite3.Connection, name: str, summarizer: Summarizer | None
) -> str:
    """Always call the summarizer; on failure the previous summary is kept."""
    report = _load_report(conn, name)
    return await _generate_and_store(conn, report, summarizer)


async def _generate_and_store(
    conn: sqlite3.Connection, report: dict, summarizer: Summarizer | None
) -> str:
    summary = await _invoke(summarizer, report)
    name = report["name"]
    stored = ReportStore.set_summary(
        conn,
        name,
        summary,
        expected_entry_count=len(report["entries"]),
        expected_generated_at=report["generated_at"],
    )
    if not stored:
        if not ReportStore.exists(conn, name):
            # Deleted or renamed while the summarizer was running.
            raise NotFoundError(f"Report with name '{name}' not found.")
        logger.warning("Report '%s' changed during summarization; summary discarded", name)
        raise InvalidStateError(
            f"Report '{name}' gained entries while its summary was being generated; "
            f"request the summary again."
        )
    logger.info("Stored summary for report '%s'", name)
    return summary
