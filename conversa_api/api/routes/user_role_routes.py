# conversa_api/api/routes/user_role_routes.py
from flask import Blueprint, jsonify, request

from conversa_api.api.middlewares.authorization_middleware import has_permission
from conversa_api.api.resources.role_resource import RoleResource
from conversa_api.api.schemas._validation import validate_payload
from conversa_api.api.schemas.role_schema import AssignRoleRequest
from conversa_api.core.enums import PermissionAction
from conversa_api.infrastructure.database.session import db_session
from conversa_api.repositories.role_repository import RoleRepository
from conversa_api.repositories.user_repository import UserRepository
from conversa_api.repositories.user_role_repository import UserRoleRepository
from conversa_api.services.user_role_service import UserRoleService

bp_user_roles = Blueprint("user_roles", __name__, url_prefix="/users")


def _build_service(session) -> UserRoleService:
    return UserRoleService(
        user_repo=UserRepository(session),
        role_repo=RoleRepository(session),
        user_role_repo=UserRoleRepository(session),
    )


@bp_user_roles.get("/<int:user_id>/roles")
@has_permission("role", PermissionAction.READ)
def list_user_roles(user_id: int):
    with db_session() as session:
        data = RoleResource.collection_to_response(_build_service(session).roles_of(user_id))

    return jsonify({"message": "Papéis do usuário listados com sucesso.", "data": data}), 200


@bp_user_roles.post("/<int:user_id>/roles")
@has_permission("role", PermissionAction.UPDATE)
def assign_role(user_id: int):
    payload = validate_payload(AssignRoleRequest, request.get_json(silent=True))

    with db_session() as session:
        _build_service(session).assign(user_id=user_id, role_id=payload.role_id)

    return jsonify({"message": "Papel atribuído ao usuário com sucesso."}), 200


@bp_user_roles.delete("/<int:user_id>/roles/<int:role_id>")
@has_permission("role", PermissionAction.UPDATE)
def revoke_role(user_id: int, role_id: int):
    with db_session() as session:
        _build_service(session).revoke(user_id=user_id, role_id=role_id)

    return jsonify({"message": "Papel removido do usuário com sucesso."}), 200
