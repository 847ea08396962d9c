"""Response body returned to API clients for every failed request."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from api_errors.core.errors import ErrorCategory


class ErrorBody(BaseModel):
    """Public error contract. The wrapped cause is deliberately absent."""

    error: bool = True
    category: ErrorCategory
    code: str
    message: str
    http_status: int = Field(ge=100, le=599)
    detail: str | None = None

    model_config = ConfigDict(frozen=True, use_enum_values=True)
