"""v1 contract schemas and adapters."""

__version__ = "1.0.0"

from .adapters import (
    adapt_generate_report_request,
    adapt_litter_update,
    adapt_offspring_update,
    adapt_record_litter_request,
    adapt_record_offspring_request,
    canonical_summary_json,
)
from .schemas import (
    GenerateReportRequest,
    LitterUpdate,
    OffspringUpdate,
    RecordLitterRequest,
    RecordOffspringRequest,
    SummaryContract,
)

__all__ = [
    "__version__",
    "GenerateReportRequest",
    "LitterUpdate",
    "OffspringUpdate",
    "RecordLitterRequest",
    "RecordOffspringRequest",
    "SummaryContract",
    "adapt_generate_report_request",
    "adapt_litter_update",
    "adapt_offspring_update",
    "adapt_record_litter_request",
    "adapt_record_offspring_request",
    "canonical_summary_json",
]
