"""Input validators reporting failures as validation-category errors."""

from __future__ import annotations

from .documents import validate_cep, validate_cnpj, validate_cpf, validate_phone
from .fields import (
    validate_email,
    validate_id,
    validate_length,
    validate_password,
    validate_positive,
    validate_range,
    validate_required,
    validate_uuid,
)

__all__ = [
    "validate_cep",
    "validate_cnpj",
    "validate_cpf",
    "validate_email",
    "validate_id",
    "validate_length",
    "validate_password",
    "validate_phone",
    "validate_positive",
    "validate_range",
    "validate_required",
    "validate_uuid",
]
