"""FastAPI reporting boundary: every failure leaves as a classified JSON body."""

from __future__ import annotations

import logging
from contextvars import Token
from http import HTTPStatus
from typing import Awaitable, Callable, Mapping, Sequence, cast

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from api_errors.core.codes import ErrorCode
from api_errors.core.config import settings
from api_errors.core.errors import ClassifiedError, ErrorCategory, classify
from api_errors.core.logging import (
    REQUEST_ID_HEADER,
    bind_request_id,
    get_request_id,
    reset_request_id,
)
from api_errors.core.metrics import record_error
from api_errors.core.wire import to_wire_form

ExceptionHandlerCallable = Callable[[Request, Exception], Awaitable[Response]]

JSON_MEDIA_TYPE = "application/json"

logger = logging.getLogger("api_errors.errors")

_STATUS_CATEGORY: dict[int, ErrorCategory] = {
    status.HTTP_400_BAD_REQUEST: ErrorCategory.VALIDATION,
    status.HTTP_401_UNAUTHORIZED: ErrorCategory.AUTHENTICATION,
    status.HTTP_403_FORBIDDEN: ErrorCategory.AUTHORIZATION,
    status.HTTP_404_NOT_FOUND: ErrorCategory.NOT_FOUND,
    status.HTTP_405_METHOD_NOT_ALLOWED: ErrorCategory.METHOD_NOT_ALLOWED,
    status.HTTP_409_CONFLICT: ErrorCategory.CONFLICT,
    status.HTTP_429_TOO_MANY_REQUESTS: ErrorCategory.RATE_LIMIT,
    status.HTTP_503_SERVICE_UNAVAILABLE: ErrorCategory.CONNECTION,
}


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the classified-error handlers to the FastAPI app."""

    app.add_exception_handler(
        ClassifiedError,
        cast(ExceptionHandlerCallable, classified_error_handler),
    )
    app.add_exception_handler(
        RequestValidationError,
        cast(ExceptionHandlerCallable, request_validation_exception_handler),
    )
    app.add_exception_handler(
        StarletteHTTPException,
        cast(ExceptionHandlerCallable, http_exception_handler),
    )
    app.add_exception_handler(
        Exception,
        cast(ExceptionHandlerCallable, unexpected_exception_handler),
    )


async def classified_error_handler(request: Request, exc: ClassifiedError) -> Response:
    return _respond(exc, request)


async def request_validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> Response:
    err = ClassifiedError(
        ErrorCategory.VALIDATION,
        ErrorCode.REQUEST_VALIDATION_FAILED,
        "Request validation failed",
    )
    detail = _format_validation_errors(exc)
    if detail:
        err = err.with_detail(detail)
    return _respond(err, request)


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> Response:
    err = classify_http_exception(exc)
    response = _respond(err, request)
    for key, value in (exc.headers or {}).items():
        response.headers.setdefault(key, value)
    return response


async def unexpected_exception_handler(request: Request, exc: Exception) -> Response:
    return _respond(exc, request)


def error_response(err: BaseException | None) -> Response | None:
    """Build the HTTP response for ``err``, or ``None`` when there is no error."""
    if err is None:
        return None
    return _respond(err)


def classify_http_exception(exc: StarletteHTTPException) -> ClassifiedError:
    """Map a framework HTTPException onto the category for its status."""
    detail = exc.detail
    if isinstance(detail, Mapping):
        code = str(detail.get("code") or _default_code(exc.status_code))
        message = str(detail.get("message") or _phrase(exc.status_code))
        extra = detail.get("detail")
    else:
        code = _default_code(exc.status_code)
        message = str(detail or _phrase(exc.status_code))
        extra = None

    err = ClassifiedError(_category_for_status(exc.status_code), code, message)
    if extra:
        err = err.with_detail(str(extra))
    elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        allowed = (exc.headers or {}).get("Allow")
        if allowed:
            err = err.with_detail(f"expected: {allowed}")
    return err


def _respond(err: BaseException, request: Request | None = None) -> Response:
    classified = cast(ClassifiedError, classify(err))
    request_id = _request_id(request)

    # Crash handlers run outside RequestIDMiddleware, after it reset the id.
    token: Token[str | None] | None = None
    if request_id is not None and get_request_id() != request_id:
        token = bind_request_id(request_id)
    try:
        _report(classified, original=err)
    finally:
        if token is not None:
            reset_request_id(token)

    response = Response(
        content=to_wire_form(classified),
        status_code=classified.http_status,
        media_type=JSON_MEDIA_TYPE,
    )
    if request_id is not None:
        response.headers[REQUEST_ID_HEADER] = request_id
    return response


def _request_id(request: Request | None) -> str | None:
    if request is None:
        return get_request_id()
    return getattr(request.state, "request_id", None) or get_request_id()


def _report(err: ClassifiedError, *, original: BaseException) -> None:
    record_error(err)
    extra = {
        "error_category": str(err.category),
        "error_code": err.code,
        "http_status": err.http_status,
    }

    if err.http_status >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        failure = err.cause if err.cause is not None else original
        logger.error(
            "Server error reported: %s",
            err,
            extra=extra,
            exc_info=(type(failure), failure, failure.__traceback__),
        )
        return

    level = logging.WARNING if settings.log_client_errors else logging.INFO
    logger.log(level, "Client error reported: %s", err, extra=extra)


def _format_validation_errors(exc: RequestValidationError) -> str:
    messages: list[str] = []
    for error in exc.errors():
        field = _format_error_location(error.get("loc") or ())
        messages.append(f"{field}: {error.get('msg', 'Invalid value')}")
    return "; ".join(messages)


def _format_error_location(location: Sequence[object]) -> str:
    filtered = [str(part) for part in location if part not in {"body", "query", "path"}]
    if not filtered:
        filtered = [str(part) for part in location]
    return ".".join(filtered) if filtered else "_schema"


def _category_for_status(status_code: int) -> ErrorCategory:
    category = _STATUS_CATEGORY.get(status_code)
    if category is not None:
        return category
    if 400 <= status_code < 500:
        return ErrorCategory.VALIDATION
    return ErrorCategory.INTERNAL


def _default_code(status_code: int) -> str:
    if status_code == status.HTTP_404_NOT_FOUND:
        return ErrorCode.ENDPOINT_NOT_FOUND
    if status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return ErrorCode.METHOD_NOT_ALLOWED
    if status_code == status.HTTP_429_TOO_MANY_REQUESTS:
        return ErrorCode.RATE_LIMIT
    return ErrorCode.HTTP_ERROR


def _phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "HTTP error"


__all__ = [
    "classified_error_handler",
    "classify_http_exception",
    "error_response",
    "http_exception_handler",
    "register_exception_handlers",
    "request_validation_exception_handler",
    "unexpected_exception_handler",
]
