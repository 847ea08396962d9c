"""Stable error codes that clients can branch on."""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    """Codes emitted by the bundled validators, catalog and HTTP boundary.

    Constructors accept any string; applications add their own codes freely.
    """

    # Fallback for unclassified failures
    UNKNOWN_ERROR = "UNKNOWN_ERROR"

    # CPF
    CPF_VAZIO = "CPF_VAZIO"
    CPF_TAMANHO_INVALIDO = "CPF_TAMANHO_INVALIDO"
    CPF_DIGITOS_IGUAIS = "CPF_DIGITOS_IGUAIS"
    CPF_INVALIDO = "CPF_INVALIDO"

    # CNPJ
    CNPJ_VAZIO = "CNPJ_VAZIO"
    CNPJ_TAMANHO_INVALIDO = "CNPJ_TAMANHO_INVALIDO"
    CNPJ_DIGITOS_IGUAIS = "CNPJ_DIGITOS_IGUAIS"
    CNPJ_INVALIDO = "CNPJ_INVALIDO"

    # Email
    EMAIL_VAZIO = "EMAIL_VAZIO"
    EMAIL_MUITO_LONGO = "EMAIL_MUITO_LONGO"
    EMAIL_FORMATO_INVALIDO = "EMAIL_FORMATO_INVALIDO"

    # Phone
    TELEFONE_VAZIO = "TELEFONE_VAZIO"
    TELEFONE_FORMATO_INVALIDO = "TELEFONE_FORMATO_INVALIDO"
    TELEFONE_TAMANHO_INVALIDO = "TELEFONE_TAMANHO_INVALIDO"

    # CEP
    CEP_VAZIO = "CEP_VAZIO"
    CEP_FORMATO_INVALIDO = "CEP_FORMATO_INVALIDO"

    # Password
    SENHA_VAZIA = "SENHA_VAZIA"
    SENHA_MUITO_CURTA = "SENHA_MUITO_CURTA"
    SENHA_SEM_MAIUSCULA = "SENHA_SEM_MAIUSCULA"
    SENHA_SEM_MINUSCULA = "SENHA_SEM_MINUSCULA"
    SENHA_SEM_NUMERO = "SENHA_SEM_NUMERO"
    SENHA_SEM_ESPECIAL = "SENHA_SEM_ESPECIAL"

    # UUID
    UUID_VAZIO = "UUID_VAZIO"
    UUID_FORMATO_INVALIDO = "UUID_FORMATO_INVALIDO"

    # Generic fields
    ID_INVALIDO = "ID_INVALIDO"
    CAMPO_OBRIGATORIO = "CAMPO_OBRIGATORIO"
    CAMPO_MUITO_CURTO = "CAMPO_MUITO_CURTO"
    CAMPO_MUITO_LONGO = "CAMPO_MUITO_LONGO"
    NUMERO_DEVE_SER_POSITIVO = "NUMERO_DEVE_SER_POSITIVO"
    NUMERO_ABAIXO_MINIMO = "NUMERO_ABAIXO_MINIMO"
    NUMERO_ACIMA_MAXIMO = "NUMERO_ACIMA_MAXIMO"
    FIELD_VALIDATION_ERROR = "FIELD_VALIDATION_ERROR"

    # Resources
    USER_NOT_FOUND = "USER_NOT_FOUND"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    ENDPOINT_NOT_FOUND = "ENDPOINT_NOT_FOUND"

    # Conflicts
    EMAIL_EXISTS = "EMAIL_EXISTS"
    RESOURCE_EXISTS = "RESOURCE_EXISTS"

    # Authentication & authorization
    INVALID_TOKEN = "INVALID_TOKEN"  # noqa: S105
    TOKEN_EXPIRED = "TOKEN_EXPIRED"  # noqa: S105
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"
    NO_PERMISSION = "NO_PERMISSION"
    OPERATION_NOT_AUTHORIZED = "OPERATION_NOT_AUTHORIZED"

    # Database & connectivity
    DB_UNAVAILABLE = "DB_UNAVAILABLE"
    DB_TIMEOUT = "DB_TIMEOUT"
    DB_CONSTRAINT_VIOLATION = "DB_CONSTRAINT_VIOLATION"
    CONNECTION_TIMEOUT = "CONNECTION_TIMEOUT"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    SERVICE_CONNECTION_ERROR = "SERVICE_CONNECTION_ERROR"
    DB_OPERATION_ERROR = "DB_OPERATION_ERROR"

    # Files
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    FILE_TYPE_NOT_ALLOWED = "FILE_TYPE_NOT_ALLOWED"

    # Transport
    RATE_LIMIT = "RATE_LIMIT"
    LIMIT_EXCEEDED = "LIMIT_EXCEEDED"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    REQUEST_VALIDATION_FAILED = "REQUEST_VALIDATION_FAILED"
    HTTP_ERROR = "HTTP_ERROR"


__all__ = ["ErrorCode"]
