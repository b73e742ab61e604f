"""Pydantic contracts for the v1 tracker operations."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class _StrictModel(BaseModel):
    """Base model that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


Sex = Literal["male", "female", "neutered"]


class RecordLitterRequest(_StrictModel):
    mother_id: str = Field(min_length=1)
    father_id: str | None = None
    birth_date: date
    reported_litter_size: int = Field(ge=0)
    notes: str | None = None
    auto_register_mother: bool = False


class LitterUpdate(_StrictModel):
    """Partial litter update: only fields explicitly set are applied."""

    mother_id: str | None = Field(default=None, min_length=1)
    father_id: str | None = None
    birth_date: date | None = None
    reported_litter_size: int | None = Field(default=None, ge=0)
    notes: str | None = None


class RecordOffspringRequest(_StrictModel):
    litter_id: str = Field(min_length=1)
    offspring_id: str = Field(min_length=1)
    sex: Sex
    notes: str | None = None


class OffspringUpdate(_StrictModel):
    """Partial offspring update. Lifecycle flags are not part of this contract."""

    new_offspring_id: str | None = Field(default=None, min_length=1)
    litter_id: str | None = Field(default=None, min_length=1)
    sex: Sex | None = None
    notes: str | None = None


class GenerateReportRequest(_StrictModel):
    target_mother_id: str = Field(min_length=1)
    start_date: date
    end_date: date
    report_name: str = Field(min_length=1)


class SummaryContract(_StrictModel):
    """Exact shape a summarizer must return.

    Strict mode: no coercion, so ``"insights": 3`` or a non-string list item
    fails validation instead of being converted.
    """

    model_config = ConfigDict(extra="forbid", strict=True)

    highPerformers: list[str]
    lowPerformers: list[str]
    concerningTrends: list[str]
    averagePerformers: list[str]
    potentialRecordErrors: list[str]
    insights: str
