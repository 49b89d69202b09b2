# conversa_api/api/middlewares/auth_middleware.py
from functools import wraps
from typing import Any, Callable, TypeVar

from flask import g, request

from conversa_api.core.exceptions import UnauthorizedError
from conversa_api.infrastructure.security.jwt_provider import JwtProvider

F = TypeVar("F", bound=Callable[..., Any])


def _get_bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    if not auth.strip():
        raise UnauthorizedError("Token não fornecido")

    scheme, _, token = auth.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError("Token inválido")
    return token.strip()


def require_auth(fn: F) -> F:
    """Exige `Authorization: Bearer <token>`; preenche g.auth e g.user_id."""

    @wraps(fn)
    def wrapper(*args, **kwargs):
        user_id, claims = JwtProvider().decode_access(_get_bearer_token())
        g.auth = claims
        g.user_id = user_id
        return fn(*args, **kwargs)

    return wrapper  # type: ignore[return-value]
