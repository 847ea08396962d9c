"""Public exports for Pydantic schemas."""

from __future__ import annotations

from .error import ErrorBody

__all__ = ["ErrorBody"]
