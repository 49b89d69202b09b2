# conversa_api/api/resources/role_resource.py
from conversa_api.api.schemas.permission_schema import PermissionResponse
from conversa_api.api.schemas.role_schema import RoleResponse
from conversa_api.infrastructure.database.models.permission_model import PermissionModel
from conversa_api.infrastructure.database.models.role_model import RoleModel


class RoleResource:
    @staticmethod
    def to_response(role: RoleModel) -> dict:
        return RoleResponse(
            id=role.id,
            name=role.name,
            description=role.description,
            created_at=role.created_at,
            updated_at=role.updated_at,
        ).to_json()

    @classmethod
    def collection_to_response(cls, roles: list[RoleModel]) -> list[dict]:
        return [cls.to_response(r) for r in roles]


class PermissionResource:
    @staticmethod
    def to_response(permission: PermissionModel) -> dict:
        return PermissionResponse(
            id=permission.id,
            name=permission.name,
            action=permission.action,
            description=permission.description,
            created_at=permission.created_at,
            updated_at=permission.updated_at,
        ).to_json()

    @classmethod
    def collection_to_response(cls, permissions: list[PermissionModel]) -> list[dict]:
        return [cls.to_response(p) for p in permissions]
