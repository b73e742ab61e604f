"""Result-or-error boundary over the tracker services.

``ReproductionTracker`` owns one database connection and an optional
summarizer. Every public operation returns an ``OperationResult``: domain
failures and database errors are reported in ``result.error`` and never raised.
"""

from __future__ import annotations

import functools
import logging
import sqlite3
from pathlib import Path
from typing import Any

from repro_platform import services
from repro_platform.errors import InvalidArgumentError, OperationResult, ReproError, StorageError
from repro_platform.persistence import connect, get_connection
from repro_platform.runtime.summarizer import Summarizer

logger = logging.getLogger(__name__)

_LITTER_FIELDS = frozenset({"mother_id", "father_id", "birth_date", "reported_litter_size", "notes"})
_OFFSPRING_FIELDS = frozenset({"new_offspring_id", "litter_id", "sex", "notes"})


def _check_fields(fields: dict, allowed: frozenset, what: str) -> None:
    unknown = sorted(set(fields) - allowed)
    if unknown:
        raise InvalidArgumentError(f"Unknown {what} field(s): {', '.join(unknown)}.")


def _failure(func, exc: Exception) -> OperationResult:
    if isinstance(exc, sqlite3.Error):
        logger.warning("%s failed in the database: %s", func.__name__, exc)
        return OperationResult.failure(StorageError(f"Database error: {exc}"))
    logger.debug("%s failed: %s (%s)", func.__name__, exc.message, exc.kind.value)
    return OperationResult.failure(exc)


def _as_result(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> OperationResult:
        try:
            return OperationResult.success(func(*args, **kwargs))
        except (ReproError, sqlite3.Error) as e:
            return _failure(func, e)
    return wrapper


def _as_async_result(func):
    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> OperationResult:
        try:
            return OperationResult.success(await func(*args, **kwargs))
        except (ReproError, sqlite3.Error) as e:
            return _failure(func, e)
    return wrapper


class ReproductionTracker:
    """Mothers, litters, offspring, reports and report summaries."""

    def __init__(self, conn: sqlite3.Connection, summarizer: Summarizer | None = None):
        self.conn = conn
        self.summarizer = summarizer

    @classmethod
    def open(cls, project_path: Path, summarizer: Summarizer | None = None) -> "ReproductionTracker":
        """Open (or create) the tracker database under ``project_path``."""
        return cls(get_connection(project_path), summarizer)

    @classmethod
    def in_memory(cls, summarizer: Summarizer | None = None) -> "ReproductionTracker":
        return cls(connect(":memory:"), summarizer)

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "ReproductionTracker":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # --- Mothers -------------------------------------------------------

    @_as_result
    def add_mother(self, mother_id: str) -> str:
        return services.add_mother(self.conn, mother_id)

    @_as_result
    def remove_mother(self, mother_id: str) -> str:
        return services.remove_mother(self.conn, mother_id)

    @_as_result
    def list_mothers(self) -> list[dict]:
        return [m.to_dict() for m in services.list_mothers(self.conn)]

    # --- Litters -------------------------------------------------------

    @_as_result
    def record_litter(self, mother_id: str, father_id: str | None, birth_date,
                      reported_litter_size: int, notes: str | None = None,
                      *, auto_register_mother: bool = False) -> str:
        return services.record_litter(
            self.conn, mother_id, father_id, birth_date, reported_litter_size, notes,
            auto_register_mother=auto_register_mother,
        )

    @_as_result
    def update_litter(self, litter_id: str, **fields: Any) -> str:
        _check_fields(fields, _LITTER_FIELDS, "litter")
        return services.update_litter(self.conn, litter_id, **fields)

    @_as_result
    def delete_litter(self, litter_id: str) -> str:
        return services.delete_litter(self.conn, litter_id)

    @_as_result
    def list_litters(self, mother_id: str) -> list[dict]:
        return [l.to_dict() for l in services.list_litters(self.conn, mother_id)]

    # --- Offspring -----------------------------------------------------

    @_as_result
    def record_offspring(self, litter_id: str, offspring_id: str, sex: str,
                         notes: str | None = None) -> str:
        return services.record_offspring(self.conn, litter_id, offspring_id, sex, notes)

    @_as_result
    def update_offspring(self, offspring_id: str, **fields: Any) -> str:
        _check_fields(fields, _OFFSPRING_FIELDS, "offspring")
        return services.update_offspring(self.conn, offspring_id, **fields)

    @_as_result
    def delete_offspring(self, offspring_id: str) -> str:
        return services.delete_offspring(self.conn, offspring_id)

    @_as_result
    def get_offspring(self, offspring_id: str) -> dict:
        return services.get_offspring(self.conn, offspring_id).to_dict()

    @_as_result
    def list_offspring(self, litter_id: str) -> list[dict]:
        return [o.to_dict() for o in services.list_offspring(self.conn, litter_id)]

    @_as_result
    def record_weaning(self, offspring_id: str) -> str:
        return services.record_weaning(self.conn, offspring_id)

    @_as_result
    def record_death(self, offspring_id: str) -> str:
        return services.record_death(self.conn, offspring_id)

    # --- Reports -------------------------------------------------------

    @_as_result
    def generate_report(self, target_mother_id: str, start_date, end_date,
                        report_name: str) -> list[str]:
        return services.generate_report(
            self.conn, target_mother_id, start_date, end_date, report_name
        )

    @_as_result
    def rename_report(self, old_name: str, new_name: str) -> str:
        return services.rename_report(self.conn, old_name, new_name)

    @_as_result
    def delete_report(self, name: str) -> str:
        return services.delete_report(self.conn, name)

    @_as_result
    def view_report(self, name: str) -> list[str]:
        return services.view_report(self.conn, name)

    @_as_result
    def get_report(self, name: str) -> dict:
        return services.get_report(self.conn, name).to_dict()

    @_as_result
    def list_reports(self) -> list[dict]:
        return services.list_reports(self.conn)

    # --- Summaries -----------------------------------------------------

    @_as_async_result
    async def get_summary(self, name: str) -> str:
        return await services.get_summary(self.conn, name, self.summarizer)

    @_as_async_result
    async def regenerate_summary(self, name: str) -> str:
        return await services.regenerate_summary(self.conn, name, self.summarizer)
