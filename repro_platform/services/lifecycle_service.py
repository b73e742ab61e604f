"""Platform-owned lifecycle service for offspring weaning and death."""

from __future__ import annotations

import logging
import sqlite3
from typing import Callable

from repro_platform.errors import InvalidStateError, NotFoundError
from repro_platform.lifecycle import can_die, can_wean, offspring_state
from repro_platform.models import Offspring
from repro_platform.persistence import OffspringStore

logger = logging.getLogger(__name__)


def _require_transition(
    conn: sqlite3.Connection,
    offspring_id: str,
    action: str,
    allowed: Callable[[Offspring], bool],
) -> None:
    """Raise unless the offspring exists and its state accepts ``action``."""
    row = OffspringStore.get(conn, offspring_id)
    if row is None:
        raise NotFoundError(f"Offspring with ID '{offspring_id}' not found.")
    offspring = Offspring.from_dict(row)
    if not allowed(offspring):
        logger.debug(
            "Rejected %s for offspring '%s' in state %s",
            action, offspring_id, offspring_state(offspring),
        )
        raise InvalidStateError(
            f"Offspring '{offspring_id}' is not alive; {action} cannot be recorded."
        )


def record_weaning(conn: sqlite3.Connection, offspring_id: str) -> str:
    """Mark an alive offspring as having survived till weaning.

    Repeating the call on an already weaned, alive offspring succeeds without
    change. Dead offspring reject it whether or not they were weaned.
    """
    _require_transition(conn, offspring_id, "weaning", can_wean)
    if not OffspringStore.mark_weaned(conn, offspring_id):
        # Died or was deleted after the check.
        _require_transition(conn, offspring_id, "weaning", can_wean)
    return offspring_id


def record_death(conn: sqlite3.Connection, offspring_id: str) -> str:
    """Mark an alive offspring as dead, leaving its weaning flag as it was."""
    _require_transition(conn, offspring_id, "death", can_die)
    if not OffspringStore.mark_dead(conn, offspring_id):
        # A concurrent death won the conditional write.
        _require_transition(conn, offspring_id, "death", can_die)
    return offspring_id
