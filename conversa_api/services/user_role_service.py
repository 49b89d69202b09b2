# conversa_api/services/user_role_service.py

from conversa_api.core.exceptions import NotFoundError
from conversa_api.core.logging import get_logger
from conversa_api.infrastructure.database.models.role_model import RoleModel
from conversa_api.repositories.role_repository import RoleRepository
from conversa_api.repositories.user_repository import UserRepository
from conversa_api.repositories.user_role_repository import UserRoleRepository

logger = get_logger(__name__)


class UserRoleService:
    def __init__(
        self,
        *,
        user_repo: UserRepository,
        role_repo: RoleRepository,
        user_role_repo: UserRoleRepository,
    ) -> None:
        self._user_repo = user_repo
        self._role_repo = role_repo
        self._repo = user_role_repo

    def _ensure_user(self, user_id: int) -> None:
        if self._user_repo.get_by_id(user_id) is None:
            raise NotFoundError("Usuário não encontrado")

    def assign(self, *, user_id: int, role_id: int) -> None:
        self._ensure_user(user_id)
        if self._role_repo.get_by_id(role_id) is None:
            raise NotFoundError("Papel não encontrado")

        self._repo.assign(user_id=user_id, role_id=role_id)
        logger.info("user_role_assigned", user_id=user_id, role_id=role_id)

    def revoke(self, *, user_id: int, role_id: int) -> None:
        if not self._repo.revoke(user_id=user_id, role_id=role_id):
            raise NotFoundError("Usuário não possui este papel")
        logger.info("user_role_revoked", user_id=user_id, role_id=role_id)

    def roles_of(self, user_id: int) -> list[RoleModel]:
        self._ensure_user(user_id)
        return self._repo.list_roles_of_user(user_id)
