# conversa_api/repositories/user_role_repository.py

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from conversa_api.core.base_repository import BaseRepository
from conversa_api.infrastructure.database.models.role_model import RoleModel
from conversa_api.infrastructure.database.models.user_role_model import UserRoleModel


class UserRoleRepository(BaseRepository[UserRoleModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def list_roles_of_user(self, user_id: int) -> list[RoleModel]:
        stmt = (
            select(RoleModel)
            .join(UserRoleModel, UserRoleModel.role_id == RoleModel.id)
            .where(UserRoleModel.user_id == user_id)
            .order_by(RoleModel.id.asc())
        )
        return list(self._session.execute(stmt).scalars().all())

    def assign(self, *, user_id: int, role_id: int) -> UserRoleModel:
        existing = self._session.get(UserRoleModel, (user_id, role_id))
        if existing is not None:
            return existing
        return self.add(UserRoleModel(user_id=user_id, role_id=role_id))

    def revoke(self, *, user_id: int, role_id: int) -> bool:
        stmt = delete(UserRoleModel).where(
            UserRoleModel.user_id == user_id,
            UserRoleModel.role_id == role_id,
        )
        res = self._session.execute(stmt)
        return (res.rowcount or 0) > 0
