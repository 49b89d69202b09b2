# conversa_api/repositories/role_permission_repository.py

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from conversa_api.core.base_repository import BaseRepository
from conversa_api.infrastructure.database.models.permission_model import PermissionModel
from conversa_api.infrastructure.database.models.role_permission_model import RolePermissionModel


class RolePermissionRepository(BaseRepository[RolePermissionModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def get(self, *, role_id: int, permission_id: int) -> RolePermissionModel | None:
        return self._session.get(RolePermissionModel, (role_id, permission_id))

    def attach(self, *, role_id: int, permission_id: int) -> RolePermissionModel:
        existing = self.get(role_id=role_id, permission_id=permission_id)
        if existing is not None:
            return existing
        return self.add(RolePermissionModel(role_id=role_id, permission_id=permission_id))

    def detach(self, *, role_id: int, permission_id: int) -> bool:
        stmt = delete(RolePermissionModel).where(
            RolePermissionModel.role_id == role_id,
            RolePermissionModel.permission_id == permission_id,
        )
        res = self._session.execute(stmt)
        return (res.rowcount or 0) > 0

    def any_granted(self, *, role_ids: list[int], permission_id: int) -> bool:
        if not role_ids:
            return False
        stmt = (
            select(RolePermissionModel.role_id)
            .where(
                RolePermissionModel.role_id.in_(role_ids),
                RolePermissionModel.permission_id == permission_id,
            )
            .limit(1)
        )
        return self._session.execute(stmt).first() is not None

    def granted_permission_ids(self, *, role_ids: list[int], permission_ids: list[int]) -> set[int]:
        """Ids de permissão (dentre `permission_ids`) concedidos por algum dos papéis."""
        if not role_ids or not permission_ids:
            return set()
        stmt = select(RolePermissionModel.permission_id).where(
            RolePermissionModel.role_id.in_(role_ids),
            RolePermissionModel.permission_id.in_(permission_ids),
        )
        return set(self._session.execute(stmt).scalars().all())

    def list_permissions_of_role(self, role_id: int) -> list[PermissionModel]:
        stmt = (
            select(PermissionModel)
            .join(RolePermissionModel, RolePermissionModel.permission_id == PermissionModel.id)
            .where(RolePermissionModel.role_id == role_id)
            .order_by(PermissionModel.name.asc(), PermissionModel.action.asc())
        )
        return list(self._session.execute(stmt).scalars().all())
