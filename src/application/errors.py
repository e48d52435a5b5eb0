from __future__ import annotations

from typing import Any, Mapping


class AppError(Exception):
    code = "app_error"
    status_code = 400

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(AppError):
    code = "not_found"
    status_code = 404


class ValidationError(AppError):
    code = "validation_error"
    status_code = 422


class ConflictError(AppError):
    code = "conflict"
    status_code = 409


class InvalidStateError(AppError):
    code = "invalid_state"
    status_code = 409


class PreconditionError(AppError):
    code = "precondition_failed"
    status_code = 409


class PartialFailure(AppError):
    code = "partial_failure"
    status_code = 500


class InfrastructureError(AppError):
    code = "infrastructure_error"
    status_code = 500


class StorageError(InfrastructureError):
    """Backend unreachable or failing; the caller may retry."""

    code = "storage_error"
    status_code = 503

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message, details={"retryable": True, **(details or {})})
