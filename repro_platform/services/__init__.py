"""Platform-owned services for reproduction tracking.

Each function takes an open ``sqlite3.Connection`` as its first argument and
raises ``repro_platform.errors.ReproError`` subclasses on failed preconditions.
"""

from .entity_service import (
    add_mother,
    delete_litter,
    delete_offspring,
    get_litter,
    get_offspring,
    list_litters,
    list_mothers,
    list_offspring,
    mother_exists,
    parse_date,
    record_litter,
    record_offspring,
    remove_mother,
    update_litter,
    update_offspring,
)
from .lifecycle_service import record_death, record_weaning
from .report_service import (
    compute_metrics,
    delete_report,
    format_entry,
    generate_report,
    get_report,
    list_reports,
    rename_report,
    view_report,
)
from .summary_service import get_summary, regenerate_summary, validate_summary
