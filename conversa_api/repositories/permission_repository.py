# conversa_api/repositories/permission_repository.py

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.orm import Session

from conversa_api.core.base_repository import BaseRepository
from conversa_api.core.pagination import Page, PaginationParams, paginate
from conversa_api.infrastructure.database.models.permission_model import PermissionModel
from conversa_api.infrastructure.database.models.role_permission_model import RolePermissionModel


class PermissionRepository(BaseRepository[PermissionModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def get_by_id(self, permission_id: int) -> PermissionModel | None:
        return self._session.get(PermissionModel, permission_id)

    def find_by_name_and_action(self, name: str, action: str) -> PermissionModel | None:
        stmt = select(PermissionModel).where(
            PermissionModel.name == name,
            PermissionModel.action == action,
        )
        return self._session.execute(stmt).scalar_one_or_none()

    def find_many_by_pairs(self, pairs: list[tuple[str, str]]) -> list[PermissionModel]:
        if not pairs:
            return []
        conditions = [
            and_(PermissionModel.name == name, PermissionModel.action == action)
            for name, action in pairs
        ]
        stmt = select(PermissionModel).where(or_(*conditions))
        return list(self._session.execute(stmt).scalars().all())

    def list_paginated(self, params: PaginationParams) -> Page:
        stmt = select(PermissionModel)
        if params.has_search:
            stmt = stmt.where(PermissionModel.name.ilike(f"%{params.search.strip()}%"))

        order_column = PermissionModel.name if params.order_by == "name" else PermissionModel.created_at
        return paginate(self._session, stmt, params, order_column)

    def delete(self, permission: PermissionModel) -> None:
        self._session.execute(
            delete(RolePermissionModel).where(RolePermissionModel.permission_id == permission.id)
        )
        self._session.delete(permission)
        self._session.flush()
