"""Pre-declared errors for failures that recur across services.

Templates are immutable descriptions, not exceptions. Each use builds a new
ClassifiedError, so nothing raised in one request is shared with another::

    raise USER_NOT_FOUND.with_detail(f"id={user_id}")
    raise NO_PERMISSION.error()
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Final, Mapping

from api_errors.core.codes import ErrorCode
from api_errors.core.errors import (
    CATEGORY_STATUS,
    ClassifiedError,
    ErrorCategory,
    new_authorization_error,
    new_connection_error,
    new_database_error,
    new_not_found_error,
    new_rate_limit_error,
    new_validation_error,
)


@dataclass(frozen=True)
class ErrorTemplate:
    """Category, code and message of a recurring failure."""

    category: ErrorCategory
    code: str
    message: str

    @property
    def http_status(self) -> int:
        return CATEGORY_STATUS[self.category]

    def error(self) -> ClassifiedError:
        """Return a new error with no detail or cause."""
        return ClassifiedError(self.category, self.code, self.message)

    def with_detail(self, detail: str) -> ClassifiedError:
        return self.error().with_detail(detail)

    def with_cause(self, cause: BaseException | None) -> ClassifiedError:
        return self.error().with_cause(cause)


def _template(category: ErrorCategory, code: ErrorCode, message: str) -> ErrorTemplate:
    return ErrorTemplate(category, str(code), message)


USER_NOT_FOUND: Final = _template(
    ErrorCategory.NOT_FOUND, ErrorCode.USER_NOT_FOUND, "User not found"
)
RESOURCE_NOT_FOUND: Final = _template(
    ErrorCategory.NOT_FOUND, ErrorCode.RESOURCE_NOT_FOUND, "Resource not found"
)
FILE_NOT_FOUND: Final = _template(
    ErrorCategory.NOT_FOUND, ErrorCode.FILE_NOT_FOUND, "File not found"
)
ENDPOINT_NOT_FOUND: Final = _template(
    ErrorCategory.NOT_FOUND, ErrorCode.ENDPOINT_NOT_FOUND, "Endpoint not found"
)

EMAIL_EXISTS: Final = _template(
    ErrorCategory.CONFLICT, ErrorCode.EMAIL_EXISTS, "This email is already in use"
)
RESOURCE_EXISTS: Final = _template(
    ErrorCategory.CONFLICT, ErrorCode.RESOURCE_EXISTS, "Resource already exists"
)

INVALID_TOKEN: Final = _template(
    ErrorCategory.AUTHENTICATION, ErrorCode.INVALID_TOKEN, "Invalid access token"
)
TOKEN_EXPIRED: Final = _template(
    ErrorCategory.AUTHENTICATION, ErrorCode.TOKEN_EXPIRED, "Access token expired"
)
INVALID_CREDENTIALS: Final = _template(
    ErrorCategory.AUTHENTICATION, ErrorCode.INVALID_CREDENTIALS, "Invalid credentials"
)
AUTHENTICATION_REQUIRED: Final = _template(
    ErrorCategory.AUTHENTICATION, ErrorCode.AUTHENTICATION_REQUIRED, "Authentication required"
)
NO_PERMISSION: Final = _template(
    ErrorCategory.AUTHORIZATION,
    ErrorCode.NO_PERMISSION,
    "You do not have permission to perform this action",
)

DB_UNAVAILABLE: Final = _template(
    ErrorCategory.CONNECTION, ErrorCode.DB_UNAVAILABLE, "Database unavailable"
)
DB_TIMEOUT: Final = _template(
    ErrorCategory.DATABASE, ErrorCode.DB_TIMEOUT, "Database operation timed out"
)
DB_CONSTRAINT_VIOLATION: Final = _template(
    ErrorCategory.DATABASE, ErrorCode.DB_CONSTRAINT_VIOLATION, "Database constraint violated"
)
CONNECTION_TIMEOUT: Final = _template(
    ErrorCategory.CONNECTION, ErrorCode.CONNECTION_TIMEOUT, "Connection timed out"
)
SERVICE_UNAVAILABLE: Final = _template(
    ErrorCategory.CONNECTION, ErrorCode.SERVICE_UNAVAILABLE, "Service unavailable"
)

RATE_LIMIT_EXCEEDED: Final = _template(
    ErrorCategory.RATE_LIMIT, ErrorCode.RATE_LIMIT, "Request limit exceeded"
)

FILE_TOO_LARGE: Final = _template(
    ErrorCategory.FILE, ErrorCode.FILE_TOO_LARGE, "File exceeds the maximum size"
)
FILE_TYPE_NOT_ALLOWED: Final = _template(
    ErrorCategory.FILE, ErrorCode.FILE_TYPE_NOT_ALLOWED, "File type not allowed"
)

_TEMPLATES: Final[Mapping[str, ErrorTemplate]] = MappingProxyType(
    {
        template.code: template
        for template in (
            USER_NOT_FOUND,
            RESOURCE_NOT_FOUND,
            FILE_NOT_FOUND,
            ENDPOINT_NOT_FOUND,
            EMAIL_EXISTS,
            RESOURCE_EXISTS,
            INVALID_TOKEN,
            TOKEN_EXPIRED,
            INVALID_CREDENTIALS,
            AUTHENTICATION_REQUIRED,
            NO_PERMISSION,
            DB_UNAVAILABLE,
            DB_TIMEOUT,
            DB_CONSTRAINT_VIOLATION,
            CONNECTION_TIMEOUT,
            SERVICE_UNAVAILABLE,
            RATE_LIMIT_EXCEEDED,
            FILE_TOO_LARGE,
            FILE_TYPE_NOT_ALLOWED,
        )
    }
)


def get_template(code: ErrorCode | str) -> ErrorTemplate:
    """Return the pre-declared template registered under ``code``.

    Raises:
        KeyError: if no template uses that code.
    """
    return _TEMPLATES[str(code)]


def templates() -> list[ErrorTemplate]:
    return list(_TEMPLATES.values())


# Contextual constructors: a fixed code plus a detail naming what failed.


def resource_not_found(resource: str, identifier: str) -> ClassifiedError:
    return new_not_found_error(ErrorCode.RESOURCE_NOT_FOUND, resource).with_detail(
        f"Identifier: {identifier}"
    )


def field_validation_error(field: str, reason: str) -> ClassifiedError:
    return new_validation_error(
        ErrorCode.FIELD_VALIDATION_ERROR, "Field validation failed"
    ).with_detail(f"Field: {field}, Reason: {reason}")


def service_connection_error(service: str, detail: str) -> ClassifiedError:
    return new_connection_error(
        ErrorCode.SERVICE_CONNECTION_ERROR, f"Could not connect to {service}"
    ).with_detail(detail)


def database_operation_error(
    operation: str,
    table: str,
    cause: BaseException | None,
) -> ClassifiedError:
    """Database failure naming the table; the detail wins over the cause's text."""
    return (
        new_database_error(ErrorCode.DB_OPERATION_ERROR, f"Database {operation} failed")
        .with_detail(f"Table: {table}")
        .with_cause(cause)
    )


def operation_permission_error(operation: str, resource: str) -> ClassifiedError:
    return new_authorization_error(
        ErrorCode.OPERATION_NOT_AUTHORIZED, "Operation not authorized"
    ).with_detail(f"Operation: {operation}, Resource: {resource}")


def limit_exceeded_error(kind: str, limit: int, current: int) -> ClassifiedError:
    return new_rate_limit_error(
        ErrorCode.LIMIT_EXCEEDED, f"{kind} limit exceeded"
    ).with_detail(f"Limit: {limit}, Current: {current}")


__all__ = [
    "AUTHENTICATION_REQUIRED",
    "CONNECTION_TIMEOUT",
    "DB_CONSTRAINT_VIOLATION",
    "DB_TIMEOUT",
    "DB_UNAVAILABLE",
    "EMAIL_EXISTS",
    "ENDPOINT_NOT_FOUND",
    "ErrorTemplate",
    "FILE_NOT_FOUND",
    "FILE_TOO_LARGE",
    "FILE_TYPE_NOT_ALLOWED",
    "INVALID_CREDENTIALS",
    "INVALID_TOKEN",
    "NO_PERMISSION",
    "RATE_LIMIT_EXCEEDED",
    "RESOURCE_EXISTS",
    "RESOURCE_NOT_FOUND",
    "SERVICE_UNAVAILABLE",
    "TOKEN_EXPIRED",
    "USER_NOT_FOUND",
    "database_operation_error",
    "field_validation_error",
    "get_template",
    "limit_exceeded_error",
    "operation_permission_error",
    "resource_not_found",
    "service_connection_error",
    "templates",
]
