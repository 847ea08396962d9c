"""Validators for Brazilian documents and contact data.

Each validator returns ``None`` when the input is valid and a validation
``ClassifiedError`` otherwise; nothing is raised.
"""

from __future__ import annotations

import re
from typing import Final, Sequence

from api_errors.core.codes import ErrorCode
from api_errors.core.errors import ClassifiedError, new_validation_error

_NON_DIGITS: Final = re.compile(r"\D", re.ASCII)
_PHONE_PATTERN: Final = re.compile(r"^(\(\d{2}\)\s?|\d{2}\s?)?9?\d{4}-?\d{4}$", re.ASCII)
_CEP_PATTERN: Final = re.compile(r"^\d{5}-?\d{3}$", re.ASCII)

_CPF_LENGTH: Final = 11
_CNPJ_LENGTH: Final = 14
_CNPJ_FIRST_WEIGHTS: Final = (5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
_CNPJ_SECOND_WEIGHTS: Final = (6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)


def _digits(value: str) -> str:
    return _NON_DIGITS.sub("", value)


def _check_digit(digits: str, weights: Sequence[int]) -> int:
    total = sum(int(digit) * weight for digit, weight in zip(digits, weights))
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def validate_cpf(cpf: str) -> ClassifiedError | None:
    """Validate a CPF, formatted (``123.456.789-09``) or bare."""
    if cpf == "":
        return new_validation_error(ErrorCode.CPF_VAZIO, "CPF não pode estar vazio")

    digits = _digits(cpf)
    if len(digits) != _CPF_LENGTH:
        return new_validation_error(
            ErrorCode.CPF_TAMANHO_INVALIDO, "CPF deve ter 11 dígitos"
        ).with_detail(f"CPF fornecido: {cpf}")

    if len(set(digits)) == 1:
        return new_validation_error(
            ErrorCode.CPF_DIGITOS_IGUAIS, "CPF não pode ter todos os dígitos iguais"
        ).with_detail(f"CPF fornecido: {cpf}")

    first = _check_digit(digits[:9], range(10, 1, -1))
    second = _check_digit(digits[:10], range(11, 1, -1))
    if digits[9:] != f"{first}{second}":
        return new_validation_error(
            ErrorCode.CPF_INVALIDO, "CPF inválido - dígitos verificadores incorretos"
        ).with_detail(f"CPF fornecido: {cpf}")

    return None


def validate_cnpj(cnpj: str) -> ClassifiedError | None:
    """Validate a CNPJ, formatted (``11.222.333/0001-81``) or bare."""
    if cnpj == "":
        return new_validation_error(ErrorCode.CNPJ_VAZIO, "CNPJ não pode estar vazio")

    digits = _digits(cnpj)
    if len(digits) != _CNPJ_LENGTH:
        return new_validation_error(
            ErrorCode.CNPJ_TAMANHO_INVALIDO, "CNPJ deve ter 14 dígitos"
        ).with_detail(f"CNPJ fornecido: {cnpj}")

    if len(set(digits)) == 1:
        return new_validation_error(
            ErrorCode.CNPJ_DIGITOS_IGUAIS, "CNPJ não pode ter todos os dígitos iguais"
        ).with_detail(f"CNPJ fornecido: {cnpj}")

    first = _check_digit(digits[:12], _CNPJ_FIRST_WEIGHTS)
    second = _check_digit(digits[:13], _CNPJ_SECOND_WEIGHTS)
    if digits[12:] != f"{first}{second}":
        return new_validation_error(
            ErrorCode.CNPJ_INVALIDO, "CNPJ inválido - dígitos verificadores incorretos"
        ).with_detail(f"CNPJ fornecido: {cnpj}")

    return None


def validate_phone(phone: str) -> ClassifiedError | None:
    """Validate a Brazilian phone number with area code, e.g. ``(11) 99999-9999``."""
    if phone == "":
        return new_validation_error(ErrorCode.TELEFONE_VAZIO, "Telefone não pode estar vazio")

    if not _PHONE_PATTERN.fullmatch(phone):
        return new_validation_error(
            ErrorCode.TELEFONE_FORMATO_INVALIDO, "Formato de telefone inválido"
        ).with_detail(
            f"Telefone fornecido: {phone} - Formato esperado: (11) 99999-9999 ou 11999999999"
        )

    if len(_digits(phone)) not in (10, 11):
        return new_validation_error(
            ErrorCode.TELEFONE_TAMANHO_INVALIDO, "Telefone deve ter 10 ou 11 dígitos"
        ).with_detail(f"Telefone fornecido: {phone}")

    return None


def validate_cep(cep: str) -> ClassifiedError | None:
    if cep == "":
        return new_validation_error(ErrorCode.CEP_VAZIO, "CEP não pode estar vazio")

    if not _CEP_PATTERN.fullmatch(cep):
        return new_validation_error(
            ErrorCode.CEP_FORMATO_INVALIDO, "Formato de CEP inválido"
        ).with_detail(f"CEP fornecido: {cep} - Formato esperado: 12345-678 ou 12345678")

    return None


__all__ = ["validate_cep", "validate_cnpj", "validate_cpf", "validate_phone"]
