"""Platform-owned SQLite database primitives."""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from repro_platform.runtime.config import DB_BUSY_TIMEOUT_SECONDS, DB_FILE

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 2


def get_db_path(project_path: Path) -> Path:
    """Return the path to the project's SQLite database."""
    return project_path / DB_FILE


def connect(database: str) -> sqlite3.Connection:
    """Open a connection in autocommit mode and ensure the schema exists.

    Statements outside :func:`transaction` commit individually, so a single
    conditional ``UPDATE`` is atomic on its own. Multi-statement units must
    run inside :func:`transaction`.
    """
    conn = sqlite3.connect(
        database,
        timeout=DB_BUSY_TIMEOUT_SECONDS,
        isolation_level=None,
        check_same_thread=False,
    )
    conn.row_factory = sqlite3.Row
    if database != ":memory:":
        conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    init_db(conn)
    return conn


def get_connection(project_path: Path) -> sqlite3.Connection:
    """Open (or create) the project database and ensure the schema exists.

    Returns a ``sqlite3.Connection`` with WAL mode and foreign keys enabled.
    The caller is responsible for closing the connection.
    """
    project_path.mkdir(parents=True, exist_ok=True)
    return connect(str(get_db_path(project_path)))


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Run a block as one write transaction.

    ``BEGIN IMMEDIATE`` takes the write lock up front, so reads performed in
    the block cannot be invalidated by another writer before the block commits.
    """
    conn.execute("BEGIN IMMEDIATE")
    try:
        yield conn
    except BaseException:
        conn.execute("ROLLBACK")
        raise
    conn.execute("COMMIT")


def init_db(conn: sqlite3.Connection) -> None:
    """Create tables if they don't exist and apply migrations."""
    conn.executescript(_SCHEMA_SQL)

    row = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()
    current = row[0] if row[0] is not None else 0

    needs_report_targets = not _table_has_column(conn, "report", "targets")
    if current < 2 or needs_report_targets:
        _migrate_add_report_targets(conn)

    if current < SCHEMA_VERSION:
        conn.execute(
            "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
            (SCHEMA_VERSION,),
        )


def _table_has_column(conn: sqlite3.Connection, table: str, column: str) -> bool:
    """Return True if *table* contains *column*."""
    cols = conn.execute(f"PRAGMA table_info({table})").fetchall()
    return any(c[1] == column for c in cols)


def _migrate_add_report_targets(conn: sqlite3.Connection) -> None:
    """Add ``report.targets`` when missing."""
    if _table_has_column(conn, "report", "targets"):
        return

    logger.info("Applying DB migration: add report.targets")
    conn.execute("ALTER TABLE report ADD COLUMN targets TEXT DEFAULT '[]'")
    conn.execute("UPDATE report SET targets = '[]' WHERE targets IS NULL")


_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY
);

CREATE TABLE IF NOT EXISTS mother (
    id TEXT PRIMARY KEY,
    next_litter_number INTEGER NOT NULL DEFAULT 1,
    created_at TEXT NOT NULL
);

-- No FK on mother_id: removing a mother leaves its litters dangling.
CREATE TABLE IF NOT EXISTS litter (
    id TEXT PRIMARY KEY,
    mother_id TEXT NOT NULL,
    father_id TEXT NOT NULL,
    birth_date TEXT NOT NULL,
    reported_litter_size INTEGER NOT NULL DEFAULT 0,
    notes TEXT DEFAULT '',
    UNIQUE (mother_id, father_id, birth_date)
);

CREATE INDEX IF NOT EXISTS idx_litter_mother_birth ON litter(mother_id, birth_date);

CREATE TABLE IF NOT EXISTS offspring (
    id TEXT PRIMARY KEY,
    litter_id TEXT NOT NULL REFERENCES litter(id) ON DELETE CASCADE,
    sex TEXT NOT NULL,
    is_alive INTEGER NOT NULL DEFAULT 1,
    survived_till_weaning INTEGER NOT NULL DEFAULT 0,
    notes TEXT DEFAULT ''
);

CREATE INDEX IF NOT EXISTS idx_offspring_litter ON offspring(litter_id);

CREATE TABLE IF NOT EXISTS report (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE,
    summary TEXT DEFAULT '',
    targets TEXT DEFAULT '[]',
    generated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS report_entry (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    report_id INTEGER NOT NULL REFERENCES report(id) ON DELETE CASCADE,
    text TEXT NOT NULL,
    created_at TEXT NOT NULL,
    UNIQUE (report_id, text)
);

CREATE INDEX IF NOT EXISTS idx_report_entry_report ON report_entry(report_id);
"""


__all__ = [
    "SCHEMA_VERSION",
    "connect",
    "get_db_path",
    "get_connection",
    "init_db",
    "transaction",
]
