"""Platform-owned litter store."""

import sqlite3
from typing import Optional

from repro_platform.models import UNKNOWN_FATHER_ID


def _father_key(father_id: str | None) -> str:
    return father_id or UNKNOWN_FATHER_ID


class LitterStore:
    """CRUD operations for litters."""

    UPDATABLE_FIELDS = ("mother_id", "father_id", "birth_date", "reported_litter_size", "notes")

    @staticmethod
    def exists(conn: sqlite3.Connection, litter_id: str) -> bool:
        row = conn.execute(
            "SELECT 1 FROM litter WHERE id = ?", (litter_id,)
        ).fetchone()
        return row is not None

    @staticmethod
    def get(conn: sqlite3.Connection, litter_id: str) -> Optional[dict]:
        """Load a litter by id, or None."""
        row = conn.execute(
            "SELECT * FROM litter WHERE id = ?", (litter_id,)
        ).fetchone()
        return LitterStore._row_to_dict(row) if row else None

    @staticmethod
    def find_by_triple(conn: sqlite3.Connection, mother_id: str,
                       father_id: str | None, birth_date: str) -> Optional[dict]:
        """Return the litter recorded for the exact (mother, father, birth date)."""
        row = conn.execute(
            "SELECT * FROM litter WHERE mother_id = ? AND father_id = ? AND birth_date = ?",
            (mother_id, _father_key(father_id), birth_date),
        ).fetchone()
        return LitterStore._row_to_dict(row) if row else None

    @staticmethod
    def create(conn: sqlite3.Connection, litter_id: str, mother_id: str,
               father_id: str | None, birth_date: str,
               reported_litter_size: int, notes: str = "") -> None:
        """Insert a new litter row."""
        conn.execute(
            """INSERT INTO litter
               (id, mother_id, father_id, birth_date, reported_litter_size, notes)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (litter_id, mother_id, _father_key(father_id), birth_date,
             reported_litter_size, notes),
        )

    @staticmethod
    def update(conn: sqlite3.Connection, litter_id: str, **fields) -> None:
        """Update specific fields of a litter."""
        if not fields:
            return

        set_clauses = []
        values = []
        for key, value in fields.items():
            if key not in LitterStore.UPDATABLE_FIELDS:
                raise ValueError(f"Litter field '{key}' cannot be updated")
            set_clauses.append(f"{key} = ?")
            values.append(_father_key(value) if key == "father_id" else value)

        values.append(litter_id)
        sql = f"UPDATE litter SET {', '.join(set_clauses)} WHERE id = ?"
        conn.execute(sql, values)

    @staticmethod
    def delete(conn: sqlite3.Connection, litter_id: str) -> bool:
        """Delete a litter; its offspring go with it (ON DELETE CASCADE)."""
        cursor = conn.execute("DELETE FROM litter WHERE id = ?", (litter_id,))
        return cursor.rowcount > 0

    @staticmethod
    def list_by_mother(conn: sqlite3.Connection, mother_id: str,
                       start_date: str | None = None,
                       end_date: str | None = None) -> list[dict]:
        """List a mother's litters, optionally restricted to an inclusive date range."""
        sql = "SELECT * FROM litter WHERE mother_id = ?"
        params: list = [mother_id]
        if start_date is not None:
            sql += " AND birth_date >= ?"
            params.append(start_date)
        if end_date is not None:
            sql += " AND birth_date <= ?"
            params.append(end_date)
        sql += " ORDER BY birth_date, id"
        rows = conn.execute(sql, params).fetchall()
        return [LitterStore._row_to_dict(r) for r in rows]

    @staticmethod
    def _row_to_dict(row: sqlite3.Row) -> dict:
        """Convert a litter row to a plain dict, mapping the father sentinel to None."""
        d = dict(row)
        if d.get("father_id") == UNKNOWN_FATHER_ID:
            d["father_id"] = None
        return d


__all__ = ["LitterStore"]
