"""
Application error taxonomy.

Every error surfaced to an HTTP caller is an AppError carrying a stable code,
a message, optional details and the operation ID of the request that raised it.
"""

from contextlib import contextmanager
from enum import Enum
from typing import Any, Iterator
from uuid import uuid4


class ErrorCode(str, Enum):
    """Stable error codes returned to API clients."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_EDUCATION_CATEGORY = "INVALID_EDUCATION_CATEGORY"
    BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"
    CONFLICT = "CONFLICT"
    NOT_FOUND = "NOT_FOUND"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATAVERSE_SERVICE_ERROR = "DATAVERSE_SERVICE_ERROR"


HTTP_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.INVALID_EDUCATION_CATEGORY: 400,
    ErrorCode.BUSINESS_RULE_VIOLATION: 422,
    ErrorCode.CONFLICT: 409,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.ACCOUNT_NOT_FOUND: 404,
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.PERMISSION_DENIED: 403,
    ErrorCode.INTERNAL_ERROR: 500,
    ErrorCode.DATAVERSE_SERVICE_ERROR: 502,
}


class AppError(Exception):
    """Base exception for all application errors."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        operation_id: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.operation_id = operation_id

    @property
    def status_code(self) -> int:
        return HTTP_STATUS_BY_CODE[self.code]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON error responses."""
        return {
            "code": self.code.value,
            "message": self.message,
            "operation_id": self.operation_id,
            "details": self.details,
        }


class ValidationError(AppError):
    """Bad, missing or mismatched field value."""
    code = ErrorCode.VALIDATION_ERROR


class InvalidEducationCategoryError(ValidationError):
    """Education record carries a category outside the known set."""
    code = ErrorCode.INVALID_EDUCATION_CATEGORY


class BusinessRuleViolationError(AppError):
    """One or more creation-gate business rules failed."""
    code = ErrorCode.BUSINESS_RULE_VIOLATION

    def __init__(
        self,
        message: str,
        errors: list[str],
        details: dict[str, Any] | None = None,
        operation_id: str | None = None,
    ):
        super().__init__(message, {**(details or {}), "errors": errors}, operation_id)
        self.errors = errors


class ConflictError(AppError):
    """Record already exists."""
    code = ErrorCode.CONFLICT


class NotFoundError(AppError):
    """Referenced record could not be resolved."""
    code = ErrorCode.NOT_FOUND


class AccountNotFoundError(NotFoundError):
    """Account could not be resolved from its business ID."""
    code = ErrorCode.ACCOUNT_NOT_FOUND


class UnauthorizedError(AppError):
    """Missing or invalid credentials."""
    code = ErrorCode.UNAUTHORIZED


class PermissionDeniedError(AppError):
    """Caller's privilege is below the level the operation requires."""
    code = ErrorCode.PERMISSION_DENIED


class InternalError(AppError):
    """Unexpected failure inside the application."""
    code = ErrorCode.INTERNAL_ERROR


class DataverseServiceError(AppError):
    """Failure talking to the Dataverse Web API."""
    code = ErrorCode.DATAVERSE_SERVICE_ERROR

    def __init__(
        self,
        message: str,
        status: int | None = None,
        details: dict[str, Any] | None = None,
        operation_id: str | None = None,
    ):
        super().__init__(message, details, operation_id)
        self.status = status


class DataverseNotFoundError(DataverseServiceError):
    """Dataverse answered 404 for a single-record request."""
    pass


def new_operation_id(operation: str) -> str:
    """Generate a traceable operation ID, e.g. register_membership_category_3f2a9c1b07de."""
    return f"{operation}_{uuid4().hex[:12]}"


@contextmanager
def operation_scope(operation_id: str) -> Iterator[str]:
    """Stamp the operation ID on any AppError escaping the block."""
    try:
        yield operation_id
    except AppError as exc:
        if exc.operation_id is None:
            exc.operation_id = operation_id
        raise
