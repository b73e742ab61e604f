"""Platform-owned offspring store."""

import sqlite3
from typing import Optional


class OffspringStore:
    """CRUD operations and conditional lifecycle writes for offspring."""

    # Lifecycle flags are only written through mark_weaned / mark_dead.
    UPDATABLE_FIELDS = ("litter_id", "sex", "notes")

    @staticmethod
    def exists(conn: sqlite3.Connection, offspring_id: str) -> bool:
        row = conn.execute(
            "SELECT 1 FROM offspring WHERE id = ?", (offspring_id,)
        ).fetchone()
        return row is not None

    @staticmethod
    def get(conn: sqlite3.Connection, offspring_id: str) -> Optional[dict]:
        """Load a single offspring by id, or None."""
        row = conn.execute(
            "SELECT * FROM offspring WHERE id = ?", (offspring_id,)
        ).fetchone()
        return OffspringStore._row_to_dict(row) if row else None

    @staticmethod
    def create(conn: sqlite3.Connection, offspring_id: str, litter_id: str,
               sex: str, notes: str = "") -> bool:
        """Insert an alive, unweaned offspring. Returns False if the id is taken."""
        cursor = conn.execute(
            """INSERT OR IGNORE INTO offspring (id, litter_id, sex, notes)
               VALUES (?, ?, ?, ?)""",
            (offspring_id, litter_id, sex, notes),
        )
        return cursor.rowcount > 0

    @staticmethod
    def update(conn: sqlite3.Connection, offspring_id: str, **fields) -> None:
        """Update specific descriptive fields of an offspring."""
        if not fields:
            return

        set_clauses = []
        values = []
        for key, value in fields.items():
            if key not in OffspringStore.UPDATABLE_FIELDS:
                raise ValueError(f"Offspring field '{key}' cannot be updated")
            set_clauses.append(f"{key} = ?")
            values.append(value)

        values.append(offspring_id)
        sql = f"UPDATE offspring SET {', '.join(set_clauses)} WHERE id = ?"
        conn.execute(sql, values)

    @staticmethod
    def rename(conn: sqlite3.Connection, old_id: str, new_id: str) -> None:
        conn.execute("UPDATE offspring SET id = ? WHERE id = ?", (new_id, old_id))

    @staticmethod
    def delete(conn: sqlite3.Connection, offspring_id: str) -> bool:
        cursor = conn.execute("DELETE FROM offspring WHERE id = ?", (offspring_id,))
        return cursor.rowcount > 0

    @staticmethod
    def mark_weaned(conn: sqlite3.Connection, offspring_id: str) -> bool:
        """Set ``survived_till_weaning`` if and only if the offspring is alive.

        The alive check and the write are one statement. Returns False when no
        alive offspring with this id exists.
        """
        cursor = conn.execute(
            "UPDATE offspring SET survived_till_weaning = 1 WHERE id = ? AND is_alive = 1",
            (offspring_id,),
        )
        return cursor.rowcount > 0

    @staticmethod
    def mark_dead(conn: sqlite3.Connection, offspring_id: str) -> bool:
        """Clear ``is_alive`` if and only if the offspring is currently alive."""
        cursor = conn.execute(
            "UPDATE offspring SET is_alive = 0 WHERE id = ? AND is_alive = 1",
            (offspring_id,),
        )
        return cursor.rowcount > 0

    @staticmethod
    def list_by_litter(conn: sqlite3.Connection, litter_id: str) -> list[dict]:
        rows = conn.execute(
            "SELECT * FROM offspring WHERE litter_id = ? ORDER BY id",
            (litter_id,),
        ).fetchall()
        return [OffspringStore._row_to_dict(r) for r in rows]

    @staticmethod
    def count_for_litters(conn: sqlite3.Connection,
                          litter_ids: list[str]) -> tuple[int, int]:
        """Return ``(offspring_count, weaned_count)`` across the given litters."""
        if not litter_ids:
            return 0, 0
        placeholders = ", ".join("?" for _ in litter_ids)
        row = conn.execute(
            f"""SELECT COUNT(*) AS total,
                       COALESCE(SUM(survived_till_weaning), 0) AS weaned
                FROM offspring WHERE litter_id IN ({placeholders})""",
            litter_ids,
        ).fetchone()
        return row["total"], row["weaned"]

    @staticmethod
    def _row_to_dict(row: sqlite3.Row) -> dict:
        d = dict(row)
        d["is_alive"] = bool(d["is_alive"])
        d["survived_till_weaning"] = bool(d["survived_till_weaning"])
        return d


__all__ = ["OffspringStore"]
