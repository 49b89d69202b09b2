# conversa_api/core/exceptions.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    BAD_REQUEST = (400, "Requisição inválida")
    VALIDATION = (400, "Erro de validação")
    UNAUTHORIZED = (401, "Não autorizado")
    FORBIDDEN = (403, "Acesso negado")
    NOT_FOUND = (404, "Recurso não encontrado")
    CONFLICT = (409, "Recurso já existe")
    INTERNAL = (500, "Erro interno do servidor")

    def __init__(self, status_code: int, default_message: str) -> None:
        self.status_code = status_code
        self.default_message = default_message


@dataclass(frozen=True)
class FieldError:
    campo: str
    mensagem: str

    def to_dict(self) -> dict[str, str]:
        return {"campo": self.campo, "mensagem": self.mensagem}


class AppError(Exception):
    def __init__(
        self,
        message: str | None = None,
        *,
        kind: ErrorKind = ErrorKind.BAD_REQUEST,
        errors: list[FieldError] | None = None,
    ) -> None:
        super().__init__(message or kind.default_message)
        self.kind = kind
        self.errors = errors

    @property
    def message(self) -> str:
        return str(self)

    @property
    def status_code(self) -> int:
        return self.kind.status_code


class BadRequestError(AppError):
    def __init__(self, message: str | None = None, errors: list[FieldError] | None = None) -> None:
        super().__init__(message, kind=ErrorKind.BAD_REQUEST, errors=errors)


class ValidationError(AppError):
    def __init__(self, message: str | None = None, errors: list[FieldError] | None = None) -> None:
        super().__init__(message, kind=ErrorKind.VALIDATION, errors=errors or [])


class NotFoundError(AppError):
    def __init__(self, message: str | None = None) -> None:
        super().__init__(message, kind=ErrorKind.NOT_FOUND)


class ConflictError(AppError):
    def __init__(self, message: str | None = None) -> None:
        super().__init__(message, kind=ErrorKind.CONFLICT)


class UnauthorizedError(AppError):
    def __init__(self, message: str | None = None) -> None:
        super().__init__(message, kind=ErrorKind.UNAUTHORIZED)


class ForbiddenError(AppError):
    def __init__(self, message: str | None = None) -> None:
        super().__init__(message, kind=ErrorKind.FORBIDDEN)
