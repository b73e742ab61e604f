"""Platform-owned mother store."""

import sqlite3
from datetime import datetime
from typing import Optional


class MotherStore:
    """CRUD operations for registered mothers."""

    @staticmethod
    def exists(conn: sqlite3.Connection, mother_id: str) -> bool:
        """Return True if the mother is registered."""
        row = conn.execute(
            "SELECT 1 FROM mother WHERE id = ?", (mother_id,)
        ).fetchone()
        return row is not None

    @staticmethod
    def get(conn: sqlite3.Connection, mother_id: str) -> Optional[dict]:
        """Load a mother by id, or None."""
        row = conn.execute(
            "SELECT * FROM mother WHERE id = ?", (mother_id,)
        ).fetchone()
        return dict(row) if row else None

    @staticmethod
    def create(conn: sqlite3.Connection, mother_id: str) -> bool:
        """Register a mother. Returns False if the id was already taken."""
        now = datetime.now().isoformat()
        cursor = conn.execute(
            "INSERT OR IGNORE INTO mother (id, created_at) VALUES (?, ?)",
            (mother_id, now),
        )
        return cursor.rowcount > 0

    @staticmethod
    def delete(conn: sqlite3.Connection, mother_id: str) -> bool:
        """Remove a mother. Litters referencing it are left untouched."""
        cursor = conn.execute("DELETE FROM mother WHERE id = ?", (mother_id,))
        return cursor.rowcount > 0

    @staticmethod
    def list_all(conn: sqlite3.Connection) -> list[dict]:
        """List all mothers ordered by id."""
        rows = conn.execute("SELECT * FROM mother ORDER BY id").fetchall()
        return [dict(r) for r in rows]

    @staticmethod
    def claim_litter_number(conn: sqlite3.Connection, mother_id: str) -> int:
        """Return the mother's next litter number and advance the counter."""
        row = conn.execute(
            "SELECT next_litter_number FROM mother WHERE id = ?", (mother_id,)
        ).fetchone()
        number = row["next_litter_number"] if row else 1
        conn.execute(
            "UPDATE mother SET next_litter_number = ? WHERE id = ?",
            (number + 1, mother_id),
        )
        return number


__all__ = ["MotherStore"]
