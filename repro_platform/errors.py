"""Error kinds and the result-or-error contract for tracker operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    INVALID_STATE = "invalid_state"
    INVALID_ARGUMENT = "invalid_argument"
    VALIDATION_ERROR = "validation_error"
    UPSTREAM_FAILURE = "upstream_failure"
    STORAGE_FAILURE = "storage_failure"


class ReproError(Exception):
    """Base class for precondition and collaborator failures.

    Raised inside services and stores; the facade turns it into a failed
    ``OperationResult`` so callers never see it.
    """

    kind: ErrorKind = ErrorKind.INVALID_STATE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ReproError):
    kind = ErrorKind.NOT_FOUND


class AlreadyExistsError(ReproError):
    kind = ErrorKind.ALREADY_EXISTS


class InvalidStateError(ReproError):
    kind = ErrorKind.INVALID_STATE


class InvalidArgumentError(ReproError):
    kind = ErrorKind.INVALID_ARGUMENT


class SummaryValidationError(ReproError):
    """Raised when the summarizer returns a payload of the wrong shape."""

    kind = ErrorKind.VALIDATION_ERROR

    def __init__(self, message: str, raw_output: str = ""):
        super().__init__(message)
        self.raw_output = raw_output


class UpstreamError(ReproError):
    """Raised when the summarizer is unreachable, unconfigured or times out."""

    kind = ErrorKind.UPSTREAM_FAILURE


class StorageError(ReproError):
    """Raised when the database rejects or cannot complete an operation."""

    kind = ErrorKind.STORAGE_FAILURE


@dataclass(frozen=True)
class OperationError:
    kind: ErrorKind
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "message": self.message}


@dataclass(frozen=True)
class OperationResult:
    ok: bool
    value: Any = None
    error: OperationError | None = None

    @classmethod
    def success(cls, value: Any = None) -> "OperationResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, exc: ReproError) -> "OperationResult":
        return cls(ok=False, error=OperationError(kind=exc.kind, message=exc.message))

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"ok": True, "value": self.value}
        assert self.error is not None
        return {"ok": False, "error": self.error.to_dict()}


__all__ = [
    "ErrorKind",
    "ReproError",
    "NotFoundError",
    "AlreadyExistsError",
    "InvalidStateError",
    "InvalidArgumentError",
    "SummaryValidationError",
    "UpstreamError",
    "StorageError",
    "OperationError",
    "OperationResult",
]
