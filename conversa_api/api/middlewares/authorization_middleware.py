# conversa_api/api/middlewares/authorization_middleware.py
from functools import wraps
from typing import Any, Callable, TypeVar

from flask import g

from conversa_api.api.middlewares.auth_middleware import require_auth
from conversa_api.core.enums import PermissionAction
from conversa_api.infrastructure.database.session import db_session
from conversa_api.repositories.permission_repository import PermissionRepository
from conversa_api.repositories.role_permission_repository import RolePermissionRepository
from conversa_api.repositories.user_repository import UserRepository
from conversa_api.repositories.user_role_repository import UserRoleRepository
from conversa_api.services.authorization_service import AuthorizationService, PermissionCheck

F = TypeVar("F", bound=Callable[..., Any])


def _build_service(session) -> AuthorizationService:
    return AuthorizationService(
        user_repo=UserRepository(session),
        user_role_repo=UserRoleRepository(session),
        permission_repo=PermissionRepository(session),
        role_permission_repo=RolePermissionRepository(session),
    )


def _guard(check: Callable[[AuthorizationService, int], None]) -> Callable[[F], F]:
    """Decorator que autentica e roda `check` contra o banco antes da rota."""

    def decorator(fn: F) -> F:
        @wraps(fn)
        def wrapper(*args, **kwargs):
            with db_session() as session:
                check(_build_service(session), g.user_id)
            return fn(*args, **kwargs)

        return require_auth(wrapper)  # type: ignore[return-value]

    return decorator


def has_permission(name: str, action: PermissionAction | str) -> Callable[[F], F]:
    return _guard(lambda svc, user_id: svc.ensure_permission(user_id, name, action))


def has_all_permissions(*checks: tuple[str, PermissionAction | str]) -> Callable[[F], F]:
    pairs = [PermissionCheck(name, action) for name, action in checks]
    return _guard(lambda svc, user_id: svc.ensure_all_permissions(user_id, pairs))


def has_any_permission(*checks: tuple[str, PermissionAction | str]) -> Callable[[F], F]:
    pairs = [PermissionCheck(name, action) for name, action in checks]
    return _guard(lambda svc, user_id: svc.ensure_any_permission(user_id, pairs))


def has_role(role_name: str) -> Callable[[F], F]:
    return _guard(lambda svc, user_id: svc.ensure_role(user_id, role_name))


def has_any_role(*role_names: str) -> Callable[[F], F]:
    return _guard(lambda svc, user_id: svc.ensure_any_role(user_id, list(role_names)))


def has_all_roles(*role_names: str) -> Callable[[F], F]:
    return _guard(lambda svc, user_id: svc.ensure_all_roles(user_id, list(role_names)))
