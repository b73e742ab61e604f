"""Typed records for mothers, litters, offspring and reports.

Foreign keys are plain identifier values resolved through the stores, never
live object references.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

UNKNOWN_FATHER_ID = "UNKNOWN_FATHER"

VALID_SEXES = ("male", "female", "neutered")


@dataclass(slots=True)
class Mother:
    id: str
    next_litter_number: int = 1
    created_at: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Mother":
        return cls(
            id=data["id"],
            next_litter_number=data.get("next_litter_number", 1),
            created_at=data.get("created_at", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "next_litter_number": self.next_litter_number,
            "created_at": self.created_at,
        }


@dataclass(slots=True)
class Litter:
    id: str
    mother_id: str
    birth_date: date
    father_id: str | None = None
    reported_litter_size: int = 0
    notes: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Litter":
        father_id = data.get("father_id")
        birth_date = data["birth_date"]
        if isinstance(birth_date, str):
            birth_date = date.fromisoformat(birth_date)
        return cls(
            id=data["id"],
            mother_id=data["mother_id"],
            birth_date=birth_date,
            father_id=None if father_id in (None, UNKNOWN_FATHER_ID) else father_id,
            reported_litter_size=data.get("reported_litter_size", 0),
            notes=data.get("notes") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "mother_id": self.mother_id,
            "father_id": self.father_id,
            "birth_date": self.birth_date.isoformat(),
            "reported_litter_size": self.reported_litter_size,
            "notes": self.notes,
        }


@dataclass(slots=True)
class Offspring:
    id: str
    litter_id: str
    sex: str
    is_alive: bool = True
    survived_till_weaning: bool = False
    notes: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Offspring":
        return cls(
            id=data["id"],
            litter_id=data["litter_id"],
            sex=data["sex"],
            is_alive=bool(data.get("is_alive", True)),
            survived_till_weaning=bool(data.get("survived_till_weaning", False)),
            notes=data.get("notes") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "litter_id": self.litter_id,
            "sex": self.sex,
            "is_alive": self.is_alive,
            "survived_till_weaning": self.survived_till_weaning,
            "notes": self.notes,
        }


@dataclass(slots=True)
class Report:
    name: str
    entries: list[str] = field(default_factory=list)
    summary: str = ""
    targets: list[str] = field(default_factory=list)
    generated_at: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Report":
        return cls(
            name=data["name"],
            entries=list(data.get("entries", [])),
            summary=data.get("summary") or "",
            targets=list(data.get("targets", [])),
            generated_at=data.get("generated_at", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "entries": self.entries,
            "summary": self.summary,
            "targets": self.targets,
            "generated_at": self.generated_at,
        }


@dataclass(frozen=True)
class PerformanceMetrics:
    """Counts behind one report entry."""

    mother_id: str
    start_date: date
    end_date: date
    litter_count: int
    offspring_count: int
    weaned_count: int

    @property
    def weaning_rate(self) -> float | None:
        if self.offspring_count == 0:
            return None
        return round(self.weaned_count / self.offspring_count * 100, 2)

    @property
    def avg_offspring_per_litter(self) -> float | None:
        if self.litter_count == 0:
            return None
        return self.offspring_count / self.litter_count
