"""Platform-owned report service.

Derives performance metrics for a mother over a date range and appends them to
named reports. Appending is idempotent: an entry whose text is already present
in the report is never duplicated.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import date

from repro_platform.errors import AlreadyExistsError, InvalidArgumentError, NotFoundError
from repro_platform.models import PerformanceMetrics, Report
from repro_platform.persistence import (
    LitterStore,
    MotherStore,
    OffspringStore,
    ReportStore,
    transaction,
)
from repro_platform.services.entity_service import parse_date

logger = logging.getLogger(__name__)


def compute_metrics(
    conn: sqlite3.Connection, mother_id: str, start_date: date, end_date: date
) -> PerformanceMetrics:
    """Count litters, actual offspring and weaned offspring in ``[start, end]``."""
    litters = LitterStore.list_by_mother(
        conn, mother_id, start_date.isoformat(), end_date.isoformat()
    )
    offspring_count, weaned_count = OffspringStore.count_for_litters(
        conn, [l["id"] for l in litters]
    )
    return PerformanceMetrics(
        mother_id=mother_id,
        start_date=start_date,
        end_date=end_date,
        litter_count=len(litters),
        offspring_count=offspring_count,
        weaned_count=weaned_count,
    )


def format_entry(metrics: PerformanceMetrics) -> str:
    """Render metrics as the canonical report entry line."""
    avg = metrics.avg_offspring_per_litter
    rate = metrics.weaning_rate
    avg_text = f"{avg:.2f}" if avg is not None else "N/A"
    rate_text = f"{rate:.2f}%" if rate is not None else "N/A"
    return (
        f"Performance for {metrics.mother_id} "
        f"({metrics.start_date.isoformat()} to {metrics.end_date.isoformat()}): "
        f"Litters: {metrics.litter_count}, "
        f"Offspring: {metrics.offspring_count}, "
        f"Avg Offspring/Litter: {avg_text}, "
        f"Weaning Survival: {rate_text}"
    )


def generate_report(
    conn: sqlite3.Connection,
    target_mother_id: str,
    start_date: date | str,
    end_date: date | str,
    report_name: str,
) -> list[str]:
    """Append the mother's performance entry to ``report_name``.

    The report is created on first use. The metric reads, the presence check
    and the append run in one immediate transaction, and a real append clears
    the report's cached summary. Returns the report's full entry list.
    """
    if not report_name or not report_name.strip():
        raise InvalidArgumentError("Report name must not be empty.")
    start = parse_date(start_date, field="start date")
    end = parse_date(end_date, field="end date")
    if start > end:
        raise InvalidArgumentError(
            f"Start date {start.isoformat()} is after end date {end.isoformat()}."
        )

    with transaction(conn):
        if not MotherStore.exists(conn, target_mother_id):
            raise NotFoundError(f"Mother with ID '{target_mother_id}' not found.")

        entry = format_entry(compute_metrics(conn, target_mother_id, start, end))

        report_id, created = ReportStore.ensure_exists(conn, report_name)
        if created:
            logger.info("Created report '%s'", report_name)

        appended = ReportStore.append_entry(conn, report_id, entry)
        ReportStore.add_target(conn, report_id, target_mother_id)
        if appended:
            ReportStore.clear_summary(conn, report_id)
            ReportStore.touch(conn, report_id)
        else:
            logger.debug("Entry already present in report '%s'; nothing appended", report_name)

        return ReportStore.list_entries(conn, report_id)


def rename_report(conn: sqlite3.Connection, old_name: str, new_name: str) -> str:
    if not new_name or not new_name.strip():
        raise InvalidArgumentError("Report name must not be empty.")
    with transaction(conn):
        if not ReportStore.exists(conn, old_name):
            raise NotFoundError(f"Report with name '{old_name}' not found.")
        if new_name != old_name and ReportStore.exists(conn, new_name):
            raise AlreadyExistsError(f"Report with name '{new_name}' already exists.")
        ReportStore.rename(conn, old_name, new_name)
    return new_name


def delete_report(conn: sqlite3.Connection, name: str) -> str:
    """Delete a report together with its entries and cached summary."""
    if not ReportStore.delete(conn, name):
        raise NotFoundError(f"Report with name '{name}' not found.")
    return name


def get_report(conn: sqlite3.Connection, name: str) -> Report:
    data = ReportStore.get(conn, name)
    if data is None:
        raise NotFoundError(f"Report with name '{name}' not found.")
    return Report.from_dict(data)


def view_report(conn: sqlite3.Connection, name: str) -> list[str]:
    return get_report(conn, name).entries


def list_reports(conn: sqlite3.Connection) -> list[dict]:
    """Return report headers (name, targets, generated_at, entry_count)."""
    return [
        {
            "name": r["name"],
            "targets": r["targets"],
            "generated_at": r["generated_at"],
            "entry_count": r["entry_count"],
            "has_summary": bool(r["summary"]),
        }
        for r in ReportStore.list_all(conn)
    ]
