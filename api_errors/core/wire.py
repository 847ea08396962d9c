"""Serialization of classified errors into the public JSON body."""

from __future__ import annotations

import json
import logging
from typing import Any

from api_errors.core.errors import ClassifiedError, classify
from api_errors.schemas.error import ErrorBody

logger = logging.getLogger("api_errors.wire")

EMPTY_PAYLOAD = b"{}"


def build_error_payload(err: BaseException | None) -> dict[str, Any]:
    """Return the public body for ``err`` as a plain dict.

    Unclassified exceptions are classified first. ``detail`` is left out when
    empty and the wrapped cause is never included.
    """
    classified = classify(err)
    if classified is None:
        return {}
    return _to_body(classified).model_dump(mode="json", exclude_none=True)


def to_wire_form(err: BaseException | None) -> bytes:
    """Encode ``err`` as compact JSON bytes; never raises."""
    classified = classify(err)
    if classified is None:
        return EMPTY_PAYLOAD
    try:
        return _to_body(classified).model_dump_json(exclude_none=True).encode("utf-8")
    except ValueError:
        logger.warning(
            "Falling back to best-effort error payload",
            extra={"error_code": classified.code},
            exc_info=True,
        )
    return _best_effort(classified)


def _to_body(err: ClassifiedError) -> ErrorBody:
    return ErrorBody(
        category=err.category,
        code=err.code,
        message=err.message,
        http_status=err.http_status,
        detail=err.detail or None,
    )


def _best_effort(err: ClassifiedError) -> bytes:
    payload: dict[str, Any] = {
        "error": True,
        "category": str(err.category),
        "code": err.code,
        "message": err.message,
        "http_status": err.http_status,
    }
    if err.detail:
        payload["detail"] = err.detail
    try:
        # ASCII escapes survive strings pydantic refuses to encode (e.g. lone surrogates).
        return json.dumps(payload, ensure_ascii=True, separators=(",", ":")).encode("ascii")
    except (TypeError, ValueError):
        logger.error("Unable to encode error payload", extra={"error_code": err.code})
        return EMPTY_PAYLOAD


__all__ = ["EMPTY_PAYLOAD", "build_error_payload", "to_wire_form"]
