"""Error taxonomy, constructors and classification queries for the public API."""

from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType
from typing import Final, Mapping

from fastapi import status

from api_errors.core.codes import ErrorCode


class ErrorCategory(StrEnum):
    """Closed set of failure categories; each one is bound to a single HTTP status."""

    VALIDATION = "VALIDATION_ERROR"
    DATABASE = "DATABASE_ERROR"
    CONNECTION = "CONNECTION_ERROR"
    NOT_FOUND = "NOT_FOUND_ERROR"
    AUTHENTICATION = "AUTHENTICATION_ERROR"
    AUTHORIZATION = "AUTHORIZATION_ERROR"
    CONFLICT = "CONFLICT_ERROR"
    INTERNAL = "INTERNAL_ERROR"
    RATE_LIMIT = "RATE_LIMIT_ERROR"
    METHOD_NOT_ALLOWED = "METHOD_ERROR"
    FILE = "FILE_ERROR"


CATEGORY_STATUS: Final[Mapping[ErrorCategory, int]] = MappingProxyType(
    {
        ErrorCategory.VALIDATION: status.HTTP_400_BAD_REQUEST,
        ErrorCategory.DATABASE: status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorCategory.CONNECTION: status.HTTP_503_SERVICE_UNAVAILABLE,
        ErrorCategory.NOT_FOUND: status.HTTP_404_NOT_FOUND,
        ErrorCategory.AUTHENTICATION: status.HTTP_401_UNAUTHORIZED,
        ErrorCategory.AUTHORIZATION: status.HTTP_403_FORBIDDEN,
        ErrorCategory.CONFLICT: status.HTTP_409_CONFLICT,
        ErrorCategory.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorCategory.RATE_LIMIT: status.HTTP_429_TOO_MANY_REQUESTS,
        ErrorCategory.METHOD_NOT_ALLOWED: status.HTTP_405_METHOD_NOT_ALLOWED,
        ErrorCategory.FILE: status.HTTP_400_BAD_REQUEST,
    }
)

FALLBACK_STATUS: Final[int] = status.HTTP_500_INTERNAL_SERVER_ERROR
UNKNOWN_CATEGORY: Final[str] = "UNKNOWN_ERROR"
UNKNOWN_CODE: Final[str] = "UNKNOWN_CODE"


class ClassifiedError(Exception):
    """Structured failure that is rendered in the public API.

    ``category`` and ``code`` are fixed once constructed and ``http_status`` is
    derived from the category. ``detail`` and ``cause`` are attached through
    :meth:`with_detail` and :meth:`with_cause`, which return a new error and
    leave the receiver untouched.
    """

    def __init__(self, category: ErrorCategory, code: ErrorCode | str, message: str) -> None:
        super().__init__(message)
        self._category = ErrorCategory(category)
        self._code = str(code)
        self._message = message
        self._detail: str | None = None
        self._cause: BaseException | None = None

    @property
    def category(self) -> ErrorCategory:
        return self._category

    @property
    def code(self) -> str:
        return self._code

    @property
    def message(self) -> str:
        return self._message

    @property
    def detail(self) -> str | None:
        return self._detail

    @property
    def cause(self) -> BaseException | None:
        return self._cause

    @property
    def http_status(self) -> int:
        return CATEGORY_STATUS[self._category]

    def with_detail(self, detail: str) -> ClassifiedError:
        """Return a copy carrying ``detail``, replacing any previous value."""
        return self._copy(detail=detail, cause=self._cause)

    def with_cause(self, cause: BaseException | None) -> ClassifiedError:
        """Return a copy wrapping ``cause``.

        When no detail has been set yet the cause's message becomes the detail;
        an explicit detail is never overwritten.
        """
        detail = self._detail
        if detail is None and cause is not None:
            detail = str(cause)
        return self._copy(detail=detail, cause=cause)

    def _copy(self, *, detail: str | None, cause: BaseException | None) -> ClassifiedError:
        clone = ClassifiedError(self._category, self._code, self._message)
        clone._detail = detail
        clone._cause = cause
        clone.__cause__ = cause
        return clone

    def __reduce__(self) -> tuple[object, ...]:
        return (
            _restore,
            (self._category, self._code, self._message, self._detail, self._cause),
        )

    def __str__(self) -> str:
        head = f"[{self._category}] {self._code}: {self._message}"
        if self._detail:
            return f"{head} - {self._detail}"
        return head

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(category={self._category.name}, "
            f"code={self._code!r}, message={self._message!r}, detail={self._detail!r})"
        )


def _restore(
    category: ErrorCategory,
    code: str,
    message: str,
    detail: str | None,
    cause: BaseException | None,
) -> ClassifiedError:
    return ClassifiedError(category, code, message)._copy(detail=detail, cause=cause)


def _new(category: ErrorCategory, code: str, message: str) -> ClassifiedError:
    return ClassifiedError(category, code, message)


def new_validation_error(code: str, message: str) -> ClassifiedError:
    """400: the request input is invalid."""
    return _new(ErrorCategory.VALIDATION, code, message)


def new_database_error(code: str, message: str) -> ClassifiedError:
    """500: a data-access operation failed."""
    return _new(ErrorCategory.DATABASE, code, message)


def new_connection_error(code: str, message: str) -> ClassifiedError:
    """503: a dependency could not be reached."""
    return _new(ErrorCategory.CONNECTION, code, message)


def new_not_found_error(code: str, resource_name: str) -> ClassifiedError:
    """404 with the message ``"<resource_name> not found"``."""
    return _new(ErrorCategory.NOT_FOUND, code, f"{resource_name} not found")


def new_authentication_error(code: str, message: str) -> ClassifiedError:
    """401: the caller is not authenticated."""
    return _new(ErrorCategory.AUTHENTICATION, code, message)


def new_authorization_error(code: str, message: str) -> ClassifiedError:
    """403: the caller lacks permission."""
    return _new(ErrorCategory.AUTHORIZATION, code, message)


def new_conflict_error(code: str, message: str) -> ClassifiedError:
    """409: the resource already exists or is in a conflicting state."""
    return _new(ErrorCategory.CONFLICT, code, message)


def new_internal_error(code: str, message: str) -> ClassifiedError:
    """500: unexpected server-side failure."""
    return _new(ErrorCategory.INTERNAL, code, message)


def new_rate_limit_error(code: str, message: str) -> ClassifiedError:
    """429: the caller exceeded a request quota."""
    return _new(ErrorCategory.RATE_LIMIT, code, message)


def new_method_not_allowed_error(code: str, expected_method: str) -> ClassifiedError:
    """405 naming the method the endpoint accepts."""
    return _new(
        ErrorCategory.METHOD_NOT_ALLOWED,
        code,
        f"Method not allowed; expected: {expected_method}",
    )


def new_file_error(code: str, message: str) -> ClassifiedError:
    """400: an uploaded or referenced file is unusable."""
    return _new(ErrorCategory.FILE, code, message)


# Wrappers return None when there is nothing to wrap so call sites can write
# ``return wrap_database_error(code, run_query())`` without branching.


def _wrap(
    category: ErrorCategory,
    code: str,
    message: str,
    err: BaseException | None,
) -> ClassifiedError | None:
    if err is None:
        return None
    return _new(category, code, message).with_cause(err)


def wrap_database_error(code: str, err: BaseException | None) -> ClassifiedError | None:
    return _wrap(ErrorCategory.DATABASE, code, "Database operation failed", err)


def wrap_connection_error(code: str, err: BaseException | None) -> ClassifiedError | None:
    return _wrap(ErrorCategory.CONNECTION, code, "Connection failure", err)


def wrap_internal_error(code: str, err: BaseException | None) -> ClassifiedError | None:
    return _wrap(ErrorCategory.INTERNAL, code, "Internal server error", err)


def wrap_format_error(code: str, err: BaseException | None) -> ClassifiedError | None:
    return _wrap(ErrorCategory.VALIDATION, code, "Invalid data format", err)


def is_category(err: object, category: ErrorCategory) -> bool:
    """Return True only for a ClassifiedError of the given category."""
    return isinstance(err, ClassifiedError) and err.category is category


def is_validation_error(err: object) -> bool:
    return is_category(err, ErrorCategory.VALIDATION)


def is_database_error(err: object) -> bool:
    return is_category(err, ErrorCategory.DATABASE)


def is_connection_error(err: object) -> bool:
    return is_category(err, ErrorCategory.CONNECTION)


def is_not_found_error(err: object) -> bool:
    return is_category(err, ErrorCategory.NOT_FOUND)


def is_authentication_error(err: object) -> bool:
    return is_category(err, ErrorCategory.AUTHENTICATION)


def is_authorization_error(err: object) -> bool:
    return is_category(err, ErrorCategory.AUTHORIZATION)


def is_conflict_error(err: object) -> bool:
    return is_category(err, ErrorCategory.CONFLICT)


def is_internal_error(err: object) -> bool:
    return is_category(err, ErrorCategory.INTERNAL)


def is_rate_limit_error(err: object) -> bool:
    return is_category(err, ErrorCategory.RATE_LIMIT)


def is_method_not_allowed_error(err: object) -> bool:
    return is_category(err, ErrorCategory.METHOD_NOT_ALLOWED)


def is_file_error(err: object) -> bool:
    return is_category(err, ErrorCategory.FILE)


def classify(err: BaseException | None) -> ClassifiedError | None:
    """Convert any error into a ClassifiedError.

    Already classified errors pass through unchanged and ``None`` stays ``None``.
    Everything else becomes an internal error wrapping the original exception.
    """
    if err is None:
        return None
    if isinstance(err, ClassifiedError):
        return err
    return new_internal_error(ErrorCode.UNKNOWN_ERROR, "Unclassified error").with_cause(err)


def status_of(err: object) -> int:
    """HTTP status for ``err``; 500 for anything that is not classified."""
    if isinstance(err, ClassifiedError):
        return err.http_status
    return FALLBACK_STATUS


def category_of(err: object) -> str:
    if isinstance(err, ClassifiedError):
        return str(err.category)
    return UNKNOWN_CATEGORY


def code_of(err: object) -> str:
    if isinstance(err, ClassifiedError):
        return err.code
    return UNKNOWN_CODE


__all__ = [
    "CATEGORY_STATUS",
    "ClassifiedError",
    "ErrorCategory",
    "FALLBACK_STATUS",
    "category_of",
    "classify",
    "code_of",
    "is_authentication_error",
    "is_authorization_error",
    "is_category",
    "is_conflict_error",
    "is_connection_error",
    "is_database_error",
    "is_file_error",
    "is_internal_error",
    "is_method_not_allowed_error",
    "is_not_found_error",
    "is_rate_limit_error",
    "is_validation_error",
    "new_authentication_error",
    "new_authorization_error",
    "new_conflict_error",
    "new_connection_error",
    "new_database_error",
    "new_file_error",
    "new_internal_error",
    "new_method_not_allowed_error",
    "new_not_found_error",
    "new_rate_limit_error",
    "new_validation_error",
    "status_of",
    "wrap_connection_error",
    "wrap_database_error",
    "wrap_format_error",
    "wrap_internal_error",
]
