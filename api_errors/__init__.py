"""
Standardized error classification for HTTP APIs.

Failures are described by a ClassifiedError carrying a category, a stable
code, a message, optional detail and the HTTP status bound to the category.
The ``api`` subpackage wires the model into FastAPI; ``validators`` reports
input problems through it.
"""

from importlib.metadata import PackageNotFoundError, version

from api_errors.core.catalog import (
    ErrorTemplate,
    database_operation_error,
    field_validation_error,
    limit_exceeded_error,
    operation_permission_error,
    resource_not_found,
    service_connection_error,
)
from api_errors.core.codes import ErrorCode
from api_errors.core.errors import (
    CATEGORY_STATUS,
    ClassifiedError,
    ErrorCategory,
    category_of,
    classify,
    code_of,
    is_authentication_error,
    is_authorization_error,
    is_category,
    is_conflict_error,
    is_connection_error,
    is_database_error,
    is_file_error,
    is_internal_error,
    is_method_not_allowed_error,
    is_not_found_error,
    is_rate_limit_error,
    is_validation_error,
    new_authentication_error,
    new_authorization_error,
    new_conflict_error,
    new_connection_error,
    new_database_error,
    new_file_error,
    new_internal_error,
    new_method_not_allowed_error,
    new_not_found_error,
    new_rate_limit_error,
    new_validation_error,
    status_of,
    wrap_connection_error,
    wrap_database_error,
    wrap_format_error,
    wrap_internal_error,
)
from api_errors.core.wire import build_error_payload, to_wire_form

try:
    __version__ = version("api-errors")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "CATEGORY_STATUS",
    "ClassifiedError",
    "ErrorCategory",
    "ErrorCode",
    "ErrorTemplate",
    "build_error_payload",
    "category_of",
    "classify",
    "code_of",
    "database_operation_error",
    "field_validation_error",
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
    "limit_exceeded_error",
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
    "operation_permission_error",
    "resource_not_found",
    "service_connection_error",
    "status_of",
    "to_wire_form",
    "wrap_connection_error",
    "wrap_database_error",
    "wrap_format_error",
    "wrap_internal_error",
]
