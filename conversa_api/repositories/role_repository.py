# conversa_api/repositories/role_repository.py

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from conversa_api.core.base_repository import BaseRepository
from conversa_api.infrastructure.database.models.role_model import RoleModel
from conversa_api.infrastructure.database.models.role_permission_model import RolePermissionModel
from conversa_api.infrastructure.database.models.user_role_model import UserRoleModel


class RoleRepository(BaseRepository[RoleModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def get_by_id(self, role_id: int) -> RoleModel | None:
        return self._session.get(RoleModel, role_id)

    def get_by_name(self, name: str) -> RoleModel | None:
        stmt = select(RoleModel).where(RoleModel.name == name)
        return self._session.execute(stmt).scalar_one_or_none()

    def list_all(self) -> list[RoleModel]:
        stmt = select(RoleModel).order_by(RoleModel.id.asc())
        return list(self._session.execute(stmt).scalars().all())

    def delete(self, role: RoleModel) -> None:
        # vínculos primeiro: não dependemos do ON DELETE CASCADE do banco
        self._session.execute(delete(RolePermissionModel).where(RolePermissionModel.role_id == role.id))
        self._session.execute(delete(UserRoleModel).where(UserRoleModel.role_id == role.id))
        self._session.delete(role)
        self._session.flush()
