"""Adapters between v1 contracts and service call arguments."""

from __future__ import annotations

import json
from typing import Any

from .schemas import (
    GenerateReportRequest,
    LitterUpdate,
    OffspringUpdate,
    RecordLitterRequest,
    RecordOffspringRequest,
    SummaryContract,
)


def _set_fields(model) -> dict[str, Any]:
    # exclude_unset keeps "not supplied" distinct from an explicit None.
    return model.model_dump(exclude_unset=True)


def adapt_record_litter_request(req: RecordLitterRequest) -> dict[str, Any]:
    return {
        "mother_id": req.mother_id,
        "father_id": req.father_id,
        "birth_date": req.birth_date,
        "reported_litter_size": req.reported_litter_size,
        "notes": req.notes,
        "auto_register_mother": req.auto_register_mother,
    }


def adapt_litter_update(req: LitterUpdate) -> dict[str, Any]:
    """Return only the litter fields the caller supplied."""
    return _set_fields(req)


def adapt_record_offspring_request(req: RecordOffspringRequest) -> dict[str, Any]:
    return req.model_dump()


def adapt_offspring_update(req: OffspringUpdate) -> dict[str, Any]:
    """Return only the offspring fields the caller supplied."""
    return _set_fields(req)


def adapt_generate_report_request(req: GenerateReportRequest) -> dict[str, Any]:
    return req.model_dump()


def canonical_summary_json(summary: SummaryContract) -> str:
    """Serialise a validated summary in the fixed key order used for caching."""
    return json.dumps(summary.model_dump(), ensure_ascii=False)
