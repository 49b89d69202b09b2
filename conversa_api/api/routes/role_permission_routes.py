# conversa_api/api/routes/role_permission_routes.py
from flask import Blueprint, jsonify, request

from conversa_api.api.middlewares.authorization_middleware import has_permission
from conversa_api.api.resources.role_resource import PermissionResource
from conversa_api.api.schemas._validation import validate_payload
from conversa_api.api.schemas.role_schema import RolePermissionRequest
from conversa_api.core.enums import PermissionAction
from conversa_api.infrastructure.database.session import db_session
from conversa_api.repositories.permission_repository import PermissionRepository
from conversa_api.repositories.role_permission_repository import RolePermissionRepository
from conversa_api.repositories.role_repository import RoleRepository
from conversa_api.services.role_permission_service import RolePermissionService

bp_role_perm = Blueprint("roles_permissions", __name__, url_prefix="/roles-permissions")


def _build_service(session) -> RolePermissionService:
    return RolePermissionService(
        role_repo=RoleRepository(session),
        permission_repo=PermissionRepository(session),
        role_permission_repo=RolePermissionRepository(session),
    )


@bp_role_perm.get("/<int:role_id>/all")
@has_permission("role", PermissionAction.READ)
def list_role_permissions(role_id: int):
    with db_session() as session:
        data = PermissionResource.collection_to_response(_build_service(session).all(role_id))

    return jsonify({"message": "Permissões do papel listadas com sucesso.", "data": data}), 200


@bp_role_perm.post("/attach")
@has_permission("role", PermissionAction.UPDATE)
def attach():
    payload = validate_payload(RolePermissionRequest, request.get_json(silent=True))

    with db_session() as session:
        _build_service(session).attach(role_id=payload.role_id, permission_id=payload.permission_id)

    return jsonify({"message": "Permissão vinculada ao papel com sucesso."}), 200


@bp_role_perm.post("/detach")
@has_permission("role", PermissionAction.UPDATE)
def detach():
    payload = validate_payload(RolePermissionRequest, request.get_json(silent=True))

    with db_session() as session:
        _build_service(session).detach(role_id=payload.role_id, permission_id=payload.permission_id)

    return jsonify({"message": "Permissão desvinculada do papel com sucesso."}), 200
