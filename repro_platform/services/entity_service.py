"""Platform-owned registration service for mothers, litters and offspring.

Every operation checks its preconditions before writing anything, and raises a
``ReproError`` subclass when one fails.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import date, datetime

from repro_platform.errors import AlreadyExistsError, InvalidArgumentError, NotFoundError
from repro_platform.models import VALID_SEXES, Litter, Mother, Offspring
from repro_platform.persistence import LitterStore, MotherStore, OffspringStore, transaction

logger = logging.getLogger(__name__)

_UNSET = object()


def parse_date(value: date | datetime | str, *, field: str = "date") -> date:
    """Coerce a date, datetime or full ISO string to a ``date``."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            try:
                return datetime.fromisoformat(text).date()
            except ValueError as e:
                raise InvalidArgumentError(f"Invalid {field} provided: {value!r}") from e
    raise InvalidArgumentError(f"Invalid {field} provided: {value!r}")


def _validate_litter_size(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidArgumentError(
            f"Reported litter size must be a non-negative integer, got {value!r}."
        )
    return value


def _validate_sex(value: str) -> str:
    sex = (value or "").strip().lower()
    if sex not in VALID_SEXES:
        valid = ", ".join(VALID_SEXES)
        raise InvalidArgumentError(f"Invalid sex '{value}'. Valid values: {valid}")
    return sex


def _require_mother(conn: sqlite3.Connection, mother_id: str) -> None:
    if not MotherStore.exists(conn, mother_id):
        raise NotFoundError(f"Mother with ID '{mother_id}' not found.")


def _require_litter(conn: sqlite3.Connection, litter_id: str) -> dict:
    litter = LitterStore.get(conn, litter_id)
    if litter is None:
        raise NotFoundError(f"Litter with ID '{litter_id}' not found.")
    return litter


def _require_offspring(conn: sqlite3.Connection, offspring_id: str) -> dict:
    offspring = OffspringStore.get(conn, offspring_id)
    if offspring is None:
        raise NotFoundError(f"Offspring with ID '{offspring_id}' not found.")
    return offspring


# ---------------------------------------------------------------------------
# Mothers
# ---------------------------------------------------------------------------

def add_mother(conn: sqlite3.Connection, mother_id: str) -> str:
    if not mother_id or not mother_id.strip():
        raise InvalidArgumentError("Mother ID must not be empty.")
    if not MotherStore.create(conn, mother_id):
        raise AlreadyExistsError(f"Mother with ID '{mother_id}' already exists.")
    return mother_id


def remove_mother(conn: sqlite3.Connection, mother_id: str) -> str:
    """Unregister a mother. Her litters keep their (now dangling) reference."""
    if not MotherStore.delete(conn, mother_id):
        raise NotFoundError(f"Mother with ID '{mother_id}' not found.")
    return mother_id


def mother_exists(conn: sqlite3.Connection, mother_id: str) -> bool:
    """Answer the identity question "is this mother registered"."""
    return MotherStore.exists(conn, mother_id)


def list_mothers(conn: sqlite3.Connection) -> list[Mother]:
    return [Mother.from_dict(m) for m in MotherStore.list_all(conn)]


# ---------------------------------------------------------------------------
# Litters
# ---------------------------------------------------------------------------

def _next_litter_id(conn: sqlite3.Connection, mother_id: str) -> str:
    # Skip numbers still held by litters that outlived a removed mother.
    while True:
        number = MotherStore.claim_litter_number(conn, mother_id)
        litter_id = f"{mother_id}-{number}"
        if not LitterStore.exists(conn, litter_id):
            return litter_id


def record_litter(
    conn: sqlite3.Connection,
    mother_id: str,
    father_id: str | None,
    birth_date: date | str,
    reported_litter_size: int,
    notes: str | None = None,
    *,
    auto_register_mother: bool = False,
) -> str:
    """Record a birth event and return the new litter id (``"<mother>-<n>"``)."""
    birth = parse_date(birth_date, field="birth date")
    size = _validate_litter_size(reported_litter_size)

    with transaction(conn):
        if not MotherStore.exists(conn, mother_id):
            if not auto_register_mother:
                raise NotFoundError(f"Mother with ID '{mother_id}' not found.")
            MotherStore.create(conn, mother_id)
            logger.info("Auto-registered mother '%s' while recording a litter.", mother_id)

        if LitterStore.find_by_triple(conn, mother_id, father_id, birth.isoformat()):
            raise AlreadyExistsError(
                f"A litter for mother '{mother_id}' with father "
                f"'{father_id or 'unknown'}' born on {birth.isoformat()} already exists."
            )

        litter_id = _next_litter_id(conn, mother_id)
        LitterStore.create(
            conn, litter_id, mother_id, father_id, birth.isoformat(), size, notes or ""
        )
    return litter_id


def update_litter(
    conn: sqlite3.Connection,
    litter_id: str,
    *,
    mother_id=_UNSET,
    father_id=_UNSET,
    birth_date=_UNSET,
    reported_litter_size=_UNSET,
    notes=_UNSET,
) -> str:
    """Apply only the supplied fields to a litter."""
    fields: dict = {}
    if mother_id is not _UNSET:
        fields["mother_id"] = mother_id
    if father_id is not _UNSET:
        fields["father_id"] = father_id
    if birth_date is not _UNSET:
        fields["birth_date"] = parse_date(birth_date, field="birth date").isoformat()
    if reported_litter_size is not _UNSET:
        fields["reported_litter_size"] = _validate_litter_size(reported_litter_size)
    if notes is not _UNSET:
        fields["notes"] = notes or ""

    with transaction(conn):
        current = _require_litter(conn, litter_id)
        if "mother_id" in fields and fields["mother_id"] != current["mother_id"]:
            _require_mother(conn, fields["mother_id"])

        merged = {**current, **fields}
        if any(k in fields for k in ("mother_id", "father_id", "birth_date")):
            clash = LitterStore.find_by_triple(
                conn, merged["mother_id"], merged["father_id"], merged["birth_date"]
            )
            if clash and clash["id"] != litter_id:
                raise AlreadyExistsError(
                    f"Litter '{clash['id']}' already records this mother, father and birth date."
                )

        LitterStore.update(conn, litter_id, **fields)
    return litter_id


def delete_litter(conn: sqlite3.Connection, litter_id: str) -> str:
    """Delete a litter together with the offspring recorded under it."""
    if not LitterStore.delete(conn, litter_id):
        raise NotFoundError(f"Litter with ID '{litter_id}' not found.")
    return litter_id


def get_litter(conn: sqlite3.Connection, litter_id: str) -> Litter:
    return Litter.from_dict(_require_litter(conn, litter_id))


def list_litters(conn: sqlite3.Connection, mother_id: str) -> list[Litter]:
    _require_mother(conn, mother_id)
    return [Litter.from_dict(l) for l in LitterStore.list_by_mother(conn, mother_id)]


# ---------------------------------------------------------------------------
# Offspring
# ---------------------------------------------------------------------------

def record_offspring(
    conn: sqlite3.Connection,
    litter_id: str,
    offspring_id: str,
    sex: str,
    notes: str | None = None,
) -> str:
    """Record an alive, unweaned offspring under an existing litter."""
    if not offspring_id or not offspring_id.strip():
        raise InvalidArgumentError("Offspring ID must not be empty.")
    sex = _validate_sex(sex)

    with transaction(conn):
        _require_litter(conn, litter_id)
        if not OffspringStore.create(conn, offspring_id, litter_id, sex, notes or ""):
            raise AlreadyExistsError(f"Offspring with ID '{offspring_id}' already exists.")
    return offspring_id


def update_offspring(
    conn: sqlite3.Connection,
    offspring_id: str,
    *,
    new_offspring_id: str | None = None,
    litter_id=_UNSET,
    sex=_UNSET,
    notes=_UNSET,
) -> str:
    """Apply only the supplied descriptive fields; returns the final offspring id.

    Lifecycle flags are not editable here; use the lifecycle service.
    """
    fields: dict = {}
    if litter_id is not _UNSET:
        fields["litter_id"] = litter_id
    if sex is not _UNSET:
        fields["sex"] = _validate_sex(sex)
    if notes is not _UNSET:
        fields["notes"] = notes or ""

    with transaction(conn):
        current = _require_offspring(conn, offspring_id)
        if "litter_id" in fields and fields["litter_id"] != current["litter_id"]:
            _require_litter(conn, fields["litter_id"])

        final_id = offspring_id
        if new_offspring_id and new_offspring_id != offspring_id:
            if OffspringStore.exists(conn, new_offspring_id):
                raise AlreadyExistsError(
                    f"Offspring with ID '{new_offspring_id}' already exists."
                )
            OffspringStore.rename(conn, offspring_id, new_offspring_id)
            final_id = new_offspring_id

        OffspringStore.update(conn, final_id, **fields)
    return final_id


def delete_offspring(conn: sqlite3.Connection, offspring_id: str) -> str:
    if not OffspringStore.delete(conn, offspring_id):
        raise NotFoundError(f"Offspring with ID '{offspring_id}' not found.")
    return offspring_id


def get_offspring(conn: sqlite3.Connection, offspring_id: str) -> Offspring:
    return Offspring.from_dict(_require_offspring(conn, offspring_id))


def list_offspring(conn: sqlite3.Connection, litter_id: str) -> list[Offspring]:
    _require_litter(conn, litter_id)
    return [Offspring.from_dict(o) for o in OffspringStore.list_by_litter(conn, litter_id)]
