# conversa_api/api/schemas/_validation.py
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from conversa_api.core.exceptions import FieldError, ValidationError

TSchema = TypeVar("TSchema", bound=BaseModel)

# mensagens genéricas por tipo de erro do pydantic
_DEFAULT_MESSAGES = {
    "missing": "Campo obrigatório",
    "string_type": "Deve ser um texto",
    "int_type": "Deve ser um número inteiro",
    "int_parsing": "Deve ser um número inteiro",
    "list_type": "Deve ser uma lista",
    "bool_type": "Deve ser verdadeiro ou falso",
    "value_error": "Valor inválido",
    "enum": "Valor não permitido",
    "literal_error": "Valor não permitido",
    "greater_than_equal": "Valor abaixo do mínimo permitido",
    "less_than_equal": "Valor acima do máximo permitido",
    "greater_than": "Valor abaixo do mínimo permitido",
    "string_too_short": "Texto muito curto",
    "string_too_long": "Texto muito longo",
    "too_short": "Lista com poucos itens",
    "extra_forbidden": "Campo não permitido",
}


def _field_name(loc: tuple) -> str:
    parts = [str(p) for p in loc]
    return ".".join(parts) if parts else "body"


def _message_for(schema: type[BaseModel], field: str, error: dict) -> str:
    custom: dict = getattr(schema, "error_messages", {}) or {}
    top = field.split(".")[0]
    err_type = error.get("type", "")

    for key in ((field, err_type), (top, err_type), field, top):
        if key in custom:
            return custom[key]

    if err_type == "value_error":
        # erros de model_validator: a mensagem já vem em português
        ctx = error.get("ctx") or {}
        if "error" in ctx:
            return str(ctx["error"])

    return _DEFAULT_MESSAGES.get(err_type, error.get("msg", "Valor inválido"))


def field_errors_from(schema: type[BaseModel], exc: PydanticValidationError) -> list[FieldError]:
    out: list[FieldError] = []
    for err in exc.errors():
        field = _field_name(err.get("loc", ()))
        out.append(FieldError(campo=field, mensagem=_message_for(schema, field, err)))
    return out


def validate_payload(schema: type[TSchema], data: Any) -> TSchema:
    """Valida `data` contra `schema`, convertendo os erros no envelope da API."""
    try:
        return schema.model_validate(data if data is not None else {})
    except PydanticValidationError as exc:
        raise ValidationError("Erro de validação", errors=field_errors_from(schema, exc)) from exc
