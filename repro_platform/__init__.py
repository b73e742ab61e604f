"""Reproduction tracking for breeding animals: litters, offspring and reports."""

__version__ = "1.0.0"

from .errors import (
    AlreadyExistsError,
    ErrorKind,
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
    OperationError,
    OperationResult,
    ReproError,
    SummaryValidationError,
    UpstreamError,
    StorageError,
)
from .facade import ReproductionTracker
from .models import Litter, Mother, Offspring, PerformanceMetrics, Report

__all__ = [
    "__version__",
    "AlreadyExistsError",
    "ErrorKind",
    "InvalidArgumentError",
    "InvalidStateError",
    "NotFoundError",
    "OperationError",
    "OperationResult",
    "ReproError",
    "SummaryValidationError",
    "UpstreamError",
    "StorageError",
    "ReproductionTracker",
    "Litter",
    "Mother",
    "Offspring",
    "PerformanceMetrics",
    "Report",
]
