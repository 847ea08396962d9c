"""Validators for common request fields (email, password, identifiers, ranges)."""

from __future__ import annotations

import re
from email.errors import HeaderParseError
from email.headerregistry import Address
from typing import Final

from api_errors.core.codes import ErrorCode
from api_errors.core.config import settings
from api_errors.core.errors import ClassifiedError, new_validation_error

_UUID_PATTERN: Final = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.ASCII | re.IGNORECASE,
)
PASSWORD_SYMBOLS: Final = frozenset("!@#$%^&*()_+-=[]{};':\"\\|,.<>/?")


def validate_email(email: str) -> ClassifiedError | None:
    """Check a bare address such as ``user@example.com``; the limit counts UTF-8 bytes."""
    if email == "":
        return new_validation_error(ErrorCode.EMAIL_VAZIO, "Email não pode estar vazio")

    max_length = settings.email_max_length
    size = len(email.encode("utf-8"))
    if size > max_length:
        return new_validation_error(
            ErrorCode.EMAIL_MUITO_LONGO,
            f"Email muito longo (máximo {max_length} caracteres)",
        ).with_detail(f"Tamanho: {size}")

    if not _is_mail_address(email):
        return new_validation_error(
            ErrorCode.EMAIL_FORMATO_INVALIDO, "Formato de email inválido"
        ).with_detail(f"Email fornecido: {email}")

    return None


def _is_mail_address(value: str) -> bool:
    """Accept a single RFC 5322 addr-spec that makes up the whole input."""
    local, at, domain = value.rpartition("@")
    if not (at and local and domain):
        return False
    try:
        address = Address(addr_spec=value)
    except (ValueError, HeaderParseError):
        return False
    # Comments and folding whitespace are dropped by the parser.
    return address.addr_spec == value


def validate_password(password: str, min_length: int | None = None) -> ClassifiedError | None:
    """Check a password against the policy, reporting the first rule it breaks.

    Rules are checked in order: length, uppercase, lowercase, digit, symbol.
    ``min_length`` of ``None`` or ``0`` falls back to ``PASSWORD_MIN_LENGTH``.
    """
    if password == "":
        return new_validation_error(ErrorCode.SENHA_VAZIA, "Senha não pode estar vazia")

    required = min_length or settings.password_min_length
    if len(password) < required:
        return new_validation_error(
            ErrorCode.SENHA_MUITO_CURTA,
            f"Senha deve ter pelo menos {required} caracteres",
        ).with_detail(f"Tamanho atual: {len(password)}")

    if not any("A" <= char <= "Z" for char in password):
        return new_validation_error(
            ErrorCode.SENHA_SEM_MAIUSCULA, "Senha deve conter pelo menos uma letra maiúscula"
        )
    if not any("a" <= char <= "z" for char in password):
        return new_validation_error(
            ErrorCode.SENHA_SEM_MINUSCULA, "Senha deve conter pelo menos uma letra minúscula"
        )
    if not any("0" <= char <= "9" for char in password):
        return new_validation_error(
            ErrorCode.SENHA_SEM_NUMERO, "Senha deve conter pelo menos um número"
        )
    if PASSWORD_SYMBOLS.isdisjoint(password):
        return new_validation_error(
            ErrorCode.SENHA_SEM_ESPECIAL, "Senha deve conter pelo menos um caractere especial"
        )

    return None


def validate_uuid(value: str) -> ClassifiedError | None:
    if value == "":
        return new_validation_error(ErrorCode.UUID_VAZIO, "UUID não pode estar vazio")

    if not _UUID_PATTERN.fullmatch(value):
        return new_validation_error(
            ErrorCode.UUID_FORMATO_INVALIDO, "Formato de UUID inválido"
        ).with_detail(
            f"UUID fornecido: {value} - Formato esperado: xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx"
        )

    return None


def validate_id(value: int, resource_name: str) -> ClassifiedError | None:
    if value <= 0:
        return new_validation_error(
            ErrorCode.ID_INVALIDO, "ID deve ser maior que zero"
        ).with_detail(f"Recurso: {resource_name}, ID fornecido: {value}")
    return None


def validate_required(value: str, field_name: str) -> ClassifiedError | None:
    if not value.strip():
        return new_validation_error(
            ErrorCode.CAMPO_OBRIGATORIO, "Campo obrigatório não informado"
        ).with_detail(f"Campo: {field_name}")
    return None


def validate_length(
    value: str,
    field_name: str,
    min_length: int,
    max_length: int,
) -> ClassifiedError | None:
    """Bound the length of ``value``; a ``max_length`` of zero or less means no upper bound."""
    size = len(value)
    if size < min_length:
        return new_validation_error(
            ErrorCode.CAMPO_MUITO_CURTO, "Campo muito curto"
        ).with_detail(
            f"Campo: {field_name}, tamanho mínimo: {min_length}, tamanho atual: {size}"
        )
    if max_length > 0 and size > max_length:
        return new_validation_error(
            ErrorCode.CAMPO_MUITO_LONGO, "Campo muito longo"
        ).with_detail(
            f"Campo: {field_name}, tamanho máximo: {max_length}, tamanho atual: {size}"
        )
    return None


def validate_positive(number: float, field_name: str) -> ClassifiedError | None:
    if number <= 0:
        return new_validation_error(
            ErrorCode.NUMERO_DEVE_SER_POSITIVO, "Número deve ser positivo"
        ).with_detail(f"Campo: {field_name}, valor fornecido: {number:g}")
    return None


def validate_range(
    number: float,
    minimum: float,
    maximum: float,
    field_name: str,
) -> ClassifiedError | None:
    if number < minimum:
        return new_validation_error(
            ErrorCode.NUMERO_ABAIXO_MINIMO, "Número abaixo do valor mínimo"
        ).with_detail(f"Campo: {field_name}, mínimo: {minimum:g}, valor: {number:g}")
    if number > maximum:
        return new_validation_error(
            ErrorCode.NUMERO_ACIMA_MAXIMO, "Número acima do valor máximo"
        ).with_detail(f"Campo: {field_name}, máximo: {maximum:g}, valor: {number:g}")
    return None


__all__ = [
    "PASSWORD_SYMBOLS",
    "validate_email",
    "validate_id",
    "validate_length",
    "validate_password",
    "validate_positive",
    "validate_range",
    "validate_required",
    "validate_uuid",
]
