"""Platform-owned report store."""

import json
import sqlite3
from datetime import datetime
from typing import Optional


class ReportStore:
    """CRUD operations for named reports and their append-only entries."""

    @staticmethod
    def get_id(conn: sqlite3.Connection, name: str) -> Optional[int]:
        row = conn.execute("SELECT id FROM report WHERE name = ?", (name,)).fetchone()
        return row["id"] if row else None

    @staticmethod
    def exists(conn: sqlite3.Connection, name: str) -> bool:
        return ReportStore.get_id(conn, name) is not None

    @staticmethod
    def get(conn: sqlite3.Connection, name: str) -> Optional[dict]:
        """Load a report with its entries in append order, or None."""
        row = conn.execute("SELECT * FROM report WHERE name = ?", (name,)).fetchone()
        if row is None:
            return None
        d = ReportStore._row_to_dict(row)
        d["entries"] = ReportStore.list_entries(conn, d["id"])
        return d

    @staticmethod
    def ensure_exists(conn: sqlite3.Connection, name: str) -> tuple[int, bool]:
        """Return ``(report_id, created)``, creating an empty report if needed."""
        now = datetime.now().isoformat()
        cursor = conn.execute(
            "INSERT OR IGNORE INTO report (name, generated_at) VALUES (?, ?)",
            (name, now),
        )
        created = cursor.rowcount > 0
        report_id = ReportStore.get_id(conn, name)
        assert report_id is not None
        return report_id, created

    @staticmethod
    def append_entry(conn: sqlite3.Connection, report_id: int, text: str) -> bool:
        """Append an entry unless an identical one exists. Returns True if appended."""
        now = datetime.now().isoformat()
        cursor = conn.execute(
            "INSERT OR IGNORE INTO report_entry (report_id, text, created_at) VALUES (?, ?, ?)",
            (report_id, text, now),
        )
        return cursor.rowcount > 0

    @staticmethod
    def list_entries(conn: sqlite3.Connection, report_id: int) -> list[str]:
        rows = conn.execute(
            "SELECT text FROM report_entry WHERE report_id = ? ORDER BY id",
            (report_id,),
        ).fetchall()
        return [r["text"] for r in rows]

    @staticmethod
    def add_target(conn: sqlite3.Connection, report_id: int, mother_id: str) -> None:
        """Record a target mother on the report if it is not already listed."""
        row = conn.execute("SELECT targets FROM report WHERE id = ?", (report_id,)).fetchone()
        targets = ReportStore._load_targets(row["targets"])
        if mother_id in targets:
            return
        targets.append(mother_id)
        conn.execute(
            "UPDATE report SET targets = ? WHERE id = ?",
            (json.dumps(targets), report_id),
        )

    @staticmethod
    def touch(conn: sqlite3.Connection, report_id: int) -> None:
        """Stamp the report's generation time."""
        conn.execute(
            "UPDATE report SET generated_at = ? WHERE id = ?",
            (datetime.now().isoformat(), report_id),
        )

    @staticmethod
    def set_summary(
        conn: sqlite3.Connection,
        name: str,
        summary: str,
        *,
        expected_entry_count: Optional[int] = None,
        expected_generated_at: Optional[str] = None,
    ) -> bool:
        """Store a report's summary. Returns False if no row was updated.

        With the ``expected_*`` arguments the write is a compare-and-set: it
        only happens while the report still has that many entries and that
        generation stamp.
        """
        sql = "UPDATE report SET summary = ? WHERE name = ?"
        params: list = [summary, name]
        if expected_entry_count is not None:
            sql += " AND (SELECT COUNT(*) FROM report_entry WHERE report_id = report.id) = ?"
            params.append(expected_entry_count)
        if expected_generated_at is not None:
            sql += " AND generated_at = ?"
            params.append(expected_generated_at)
        cursor = conn.execute(sql, params)
        return cursor.rowcount > 0

    @staticmethod
    def clear_summary(conn: sqlite3.Connection, report_id: int) -> None:
        conn.execute("UPDATE report SET summary = '' WHERE id = ?", (report_id,))

    @staticmethod
    def rename(conn: sqlite3.Connection, old_name: str, new_name: str) -> bool:
        cursor = conn.execute(
            "UPDATE report SET name = ? WHERE name = ?", (new_name, old_name)
        )
        return cursor.rowcount > 0

    @staticmethod
    def delete(conn: sqlite3.Connection, name: str) -> bool:
        """Delete a report, its entries and its cached summary."""
        cursor = conn.execute("DELETE FROM report WHERE name = ?", (name,))
        return cursor.rowcount > 0

    @staticmethod
    def list_all(conn: sqlite3.Connection) -> list[dict]:
        """List reports (without entries), oldest first."""
        rows = conn.execute(
            """SELECT r.*, COUNT(e.id) AS entry_count
               FROM report r LEFT JOIN report_entry e ON e.report_id = r.id
               GROUP BY r.id ORDER BY r.id"""
        ).fetchall()
        return [ReportStore._row_to_dict(r) for r in rows]

    @staticmethod
    def _load_targets(raw) -> list[str]:
        if isinstance(raw, str):
            try:
                loaded = json.loads(raw)
            except (json.JSONDecodeError, TypeError):
                return []
            return loaded if isinstance(loaded, list) else []
        return []

    @staticmethod
    def _row_to_dict(row: sqlite3.Row) -> dict:
        """Convert a report row to a plain dict, deserialising JSON columns."""
        d = dict(row)
        d["targets"] = ReportStore._load_targets(d.get("targets"))
        d["summary"] = d.get("summary") or ""
        return d


__all__ = ["ReportStore"]
