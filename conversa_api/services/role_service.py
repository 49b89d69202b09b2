# conversa_api/services/role_service.py

from conversa_api.core.exceptions import ConflictError, NotFoundError
from conversa_api.core.logging import get_logger
from conversa_api.infrastructure.database.models.role_model import RoleModel
from conversa_api.repositories.role_repository import RoleRepository

logger = get_logger(__name__)


class RoleService:
    def __init__(self, role_repo: RoleRepository) -> None:
        self._repo = role_repo

    def create(self, *, name: str, description: str) -> RoleModel:
        name = name.strip()
        if self._repo.get_by_name(name) is not None:
            raise ConflictError("Papel já existe")

        role = self._repo.add(RoleModel(name=name, description=description.strip()))
        logger.info("role_created", role_id=role.id, name=name)
        return role

    def index(self) -> list[RoleModel]:
        return self._repo.list_all()

    def show(self, role_id: int) -> RoleModel:
        role = self._repo.get_by_id(role_id)
        if role is None:
            raise NotFoundError("Papel não encontrado")
        return role

    def update(self, role_id: int, *, name: str | None = None, description: str | None = None) -> RoleModel:
        role = self.show(role_id)

        if name is not None and name.strip() != role.name:
            if self._repo.get_by_name(name.strip()) is not None:
                raise ConflictError("Papel já existe")
            role.name = name.strip()

        if description is not None:
            role.description = description.strip()
        return role

    def delete(self, role_id: int) -> None:
        role = self.show(role_id)
        self._repo.delete(role)
        logger.info("role_deleted", role_id=role_id)
