"""JSON logging for reported errors and request correlation helpers.

Records emitted by the reporting boundary carry ``error_category``,
``error_code`` and ``http_status`` extras; the formatter groups them under a
single ``error`` object so log queries can filter on ``error.category``.
"""

from __future__ import annotations

import json
import logging
import sys
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from typing import Any, Final

from api_errors.core.config import settings

REQUEST_ID_CTX: Final[ContextVar[str | None]] = ContextVar("request_id", default=None)
REQUEST_ID_HEADER: Final = "X-Request-ID"

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_STANDARD_ATTRS: Final[frozenset[str]] = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime", "request_id", "taskName"}

ERROR_FIELDS: Final[dict[str, str]] = {
    "error_category": "category",
    "error_code": "code",
    "http_status": "status",
}

_LOGGING_CONFIGURED: bool = False


class JsonLogFormatter(logging.Formatter):
    """Render each record as a single line of JSON."""

    def __init__(self, service: str | None = None) -> None:
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if self.service:
            entry["service"] = self.service

        request_id = get_request_id()
        if request_id:
            entry["request_id"] = request_id

        error: dict[str, Any] = {}
        for key, value in record.__dict__.items():
            if key in _STANDARD_ATTRS or key.startswith("_") or value is None:
                continue
            if key in ERROR_FIELDS:
                error[ERROR_FIELDS[key]] = _jsonable(value)
            else:
                entry[key] = _jsonable(value)
        if error:
            entry["error"] = error

        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info).replace("\n", " | ")
        if record.stack_info:
            entry["stack"] = self.formatStack(record.stack_info).replace("\n", " | ")

        return json.dumps(entry, ensure_ascii=True, separators=(",", ":"))


def _jsonable(value: object) -> object:
    if isinstance(value, (str, int, float, bool)):
        return value
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


def configure_logging(level_name: str | None = None) -> None:
    """Send JSON lines to stdout from the root logger; only the first call applies.

    ``level_name`` defaults to ``LOG_LEVEL``.
    """
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(JsonLogFormatter(service=settings.project_name))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(_resolve_level(level_name or settings.log_level))

    logging.captureWarnings(True)
    _LOGGING_CONFIGURED = True


def _resolve_level(level_name: str) -> int:
    return logging.getLevelNamesMapping().get(level_name.strip().upper(), logging.INFO)


def bind_request_id(request_id: str) -> Token[str | None]:
    """Bind a request_id to the current context."""
    return REQUEST_ID_CTX.set(request_id)


def get_request_id() -> str | None:
    return REQUEST_ID_CTX.get()


def reset_request_id(token: Token[str | None]) -> None:
    REQUEST_ID_CTX.reset(token)


__all__ = [
    "ERROR_FIELDS",
    "JsonLogFormatter",
    "REQUEST_ID_HEADER",
    "bind_request_id",
    "configure_logging",
    "get_request_id",
    "reset_request_id",
]
