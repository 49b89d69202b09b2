# conversa_api/services/authorization_service.py
"""
Checagens de papel/permissão.

Tudo é avaliado contra o banco a cada requisição (nada é guardado no token),
então revogar um papel ou permissão vale já na próxima requisição.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from conversa_api.core.enums import PermissionAction
from conversa_api.core.exceptions import ForbiddenError, UnauthorizedError
from conversa_api.core.logging import get_logger
from conversa_api.infrastructure.database.models.role_model import RoleModel
from conversa_api.repositories.permission_repository import PermissionRepository
from conversa_api.repositories.role_permission_repository import RolePermissionRepository
from conversa_api.repositories.user_repository import UserRepository
from conversa_api.repositories.user_role_repository import UserRoleRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class PermissionCheck:
    name: str
    action: PermissionAction | str

    @property
    def action_value(self) -> str:
        return self.action.value if isinstance(self.action, PermissionAction) else str(self.action)

    @property
    def key(self) -> str:
        return f"{self.name}:{self.action_value}"


def _keys(checks: Iterable[PermissionCheck]) -> str:
    return ", ".join(c.key for c in checks)


class AuthorizationService:
    def __init__(
        self,
        *,
        user_repo: UserRepository,
        user_role_repo: UserRoleRepository,
        permission_repo: PermissionRepository,
        role_permission_repo: RolePermissionRepository,
    ) -> None:
        self._user_repo = user_repo
        self._user_role_repo = user_role_repo
        self._permission_repo = permission_repo
        self._role_permission_repo = role_permission_repo

    # -------------------------
    # Helpers
    # -------------------------

    def _load_roles(self, user_id: int | None) -> list[RoleModel]:
        if not user_id:
            raise UnauthorizedError("Usuário não autenticado")

        if self._user_repo.get_by_id(int(user_id)) is None:
            raise UnauthorizedError("Usuário não encontrado")

        return self._user_role_repo.list_roles_of_user(int(user_id))

    def _require_role_ids(self, user_id: int | None) -> list[int]:
        roles = self._load_roles(user_id)
        if not roles:
            logger.info("permission_denied", user_id=user_id, reason="no_roles")
            raise ForbiddenError("Usuário não possui nenhum papel atribuído")
        return [r.id for r in roles]

    # -------------------------
    # Permissões
    # -------------------------

    def ensure_permission(self, user_id: int | None, name: str, action: PermissionAction | str) -> None:
        check = PermissionCheck(name, action)
        role_ids = self._require_role_ids(user_id)

        permission = self._permission_repo.find_by_name_and_action(check.name, check.action_value)
        if permission is None:
            # erro de configuração, exposto como acesso negado
            raise ForbiddenError(f"Permissão {check.key} não encontrada no sistema")

        if not self._role_permission_repo.any_granted(role_ids=role_ids, permission_id=permission.id):
            logger.info("permission_denied", user_id=user_id, permission=check.key)
            raise ForbiddenError("Usuário não tem permissão para realizar esta ação")

    def ensure_all_permissions(self, user_id: int | None, checks: list[PermissionCheck]) -> None:
        role_ids = self._require_role_ids(user_id)

        requested = list(dict.fromkeys(checks))
        found = self._permission_repo.find_many_by_pairs([(c.name, c.action_value) for c in requested])
        found_by_key = {f"{p.name}:{p.action}": p for p in found}

        missing = [c for c in requested if c.key not in found_by_key]
        if missing:
            raise ForbiddenError(f"Permissões não encontradas no sistema: {_keys(missing)}")

        granted = self._role_permission_repo.granted_permission_ids(
            role_ids=role_ids, permission_ids=[p.id for p in found]
        )
        not_granted = [c for c in requested if found_by_key[c.key].id not in granted]
        if not_granted:
            logger.info("permission_denied", user_id=user_id, missing=_keys(not_granted))
            raise ForbiddenError(f"Usuário não possui as seguintes permissões: {_keys(not_granted)}")

    def ensure_any_permission(self, user_id: int | None, checks: list[PermissionCheck]) -> None:
        role_ids = self._require_role_ids(user_id)

        found = self._permission_repo.find_many_by_pairs([(c.name, c.action_value) for c in checks])
        if not found:
            raise ForbiddenError(f"Nenhuma das permissões especificadas foi encontrada: {_keys(checks)}")

        granted = self._role_permission_repo.granted_permission_ids(
            role_ids=role_ids, permission_ids=[p.id for p in found]
        )
        if not granted:
            available = ", ".join(f"{p.name}:{p.action}" for p in found)
            logger.info("permission_denied", user_id=user_id, any_of=available)
            raise ForbiddenError(f"Usuário não possui nenhuma das seguintes permissões: {available}")

    # -------------------------
    # Papéis
    # -------------------------

    def ensure_role(self, user_id: int | None, role_name: str) -> None:
        names = {r.name for r in self._load_roles(user_id)}
        if role_name not in names:
            raise ForbiddenError("Você não possui acesso a este recurso.")

    def ensure_any_role(self, user_id: int | None, role_names: list[str]) -> None:
        names = {r.name for r in self._load_roles(user_id)}
        if not any(n in names for n in role_names):
            raise ForbiddenError("Você não possui acesso a este recurso.")

    def ensure_all_roles(self, user_id: int | None, role_names: list[str]) -> None:
        names = {r.name for r in self._load_roles(user_id)}
        if not all(n in names for n in role_names):
            raise ForbiddenError("Você não possui todas as permissões necessárias para este recurso.")
