# conversa_api/services/role_permission_service.py

from conversa_api.core.exceptions import NotFoundError
from conversa_api.core.logging import get_logger
from conversa_api.infrastructure.database.models.permission_model import PermissionModel
from conversa_api.repositories.permission_repository import PermissionRepository
from conversa_api.repositories.role_permission_repository import RolePermissionRepository
from conversa_api.repositories.role_repository import RoleRepository

logger = get_logger(__name__)


class RolePermissionService:
    def __init__(
        self,
        *,
        role_repo: RoleRepository,
        permission_repo: PermissionRepository,
        role_permission_repo: RolePermissionRepository,
    ) -> None:
        self._role_repo = role_repo
        self._permission_repo = permission_repo
        self._repo = role_permission_repo

    def _ensure_role(self, role_id: int) -> None:
        if self._role_repo.get_by_id(role_id) is None:
            raise NotFoundError("Papel não encontrado")

    def attach(self, *, role_id: int, permission_id: int) -> None:
        self._ensure_role(role_id)
        if self._permission_repo.get_by_id(permission_id) is None:
            raise NotFoundError("Permissão não encontrada")

        self._repo.attach(role_id=role_id, permission_id=permission_id)
        logger.info("role_permission_attached", role_id=role_id, permission_id=permission_id)

    def detach(self, *, role_id: int, permission_id: int) -> None:
        removed = self._repo.detach(role_id=role_id, permission_id=permission_id)
        logger.info("role_permission_detached", role_id=role_id, permission_id=permission_id, removed=removed)

    def all(self, role_id: int) -> list[PermissionModel]:
        self._ensure_role(role_id)
        return self._repo.list_permissions_of_role(role_id)
