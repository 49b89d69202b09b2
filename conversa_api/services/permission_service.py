# conversa_api/services/permission_service.py

from conversa_api.core.exceptions import ConflictError, NotFoundError
from conversa_api.core.logging import get_logger
from conversa_api.core.pagination import Page, PaginationParams
from conversa_api.infrastructure.database.models.permission_model import PermissionModel
from conversa_api.repositories.permission_repository import PermissionRepository

logger = get_logger(__name__)


class PermissionService:
    def __init__(self, permission_repo: PermissionRepository) -> None:
        self._repo = permission_repo

    def _ensure_unique(self, name: str, action: str, *, ignore_id: int | None = None) -> None:
        existing = self._repo.find_by_name_and_action(name, action)
        if existing is not None and existing.id != ignore_id:
            raise ConflictError(f"Permissão {name}:{action} já existe")

    def create(self, *, name: str, action: str, description: str | None = None) -> PermissionModel:
        name = name.strip()
        self._ensure_unique(name, action)

        permission = self._repo.add(
            PermissionModel(name=name, action=action, description=(description or "").strip())
        )
        logger.info("permission_created", permission_id=permission.id, permission=f"{name}:{action}")
        return permission

    def list(self, params: PaginationParams) -> Page:
        return self._repo.list_paginated(params)

    def show(self, permission_id: int) -> PermissionModel:
        permission = self._repo.get_by_id(permission_id)
        if permission is None:
            raise NotFoundError("Permissão não encontrada")
        return permission

    def update(
        self,
        permission_id: int,
        *,
        name: str | None = None,
        action: str | None = None,
        description: str | None = None,
    ) -> PermissionModel:
        permission = self.show(permission_id)

        new_name = name.strip() if name is not None else permission.name
        new_action = action if action is not None else permission.action
        if (new_name, new_action) != (permission.name, permission.action):
            self._ensure_unique(new_name, new_action, ignore_id=permission.id)

        permission.name = new_name
        permission.action = new_action
        if description is not None:
            permission.description = description.strip()
        return permission

    def delete(self, permission_id: int) -> None:
        permission = self.show(permission_id)
        self._repo.delete(permission)
        logger.info("permission_deleted", permission_id=permission_id)
