# conversa_api/api/routes/role_routes.py
from flask import Blueprint, jsonify, request

from conversa_api.api.middlewares.authorization_middleware import has_permission
from conversa_api.api.resources.role_resource import RoleResource
from conversa_api.api.schemas._validation import validate_payload
from conversa_api.api.schemas.role_schema import CreateRoleRequest, UpdateRoleRequest
from conversa_api.core.enums import PermissionAction
from conversa_api.infrastructure.database.session import db_session
from conversa_api.repositories.role_repository import RoleRepository
from conversa_api.services.role_service import RoleService

bp_roles = Blueprint("roles", __name__, url_prefix="/roles")


def _build_service(session) -> RoleService:
    return RoleService(RoleRepository(session))


@bp_roles.post("")
@has_permission("role", PermissionAction.CREATE)
def create_role():
    payload = validate_payload(CreateRoleRequest, request.get_json(silent=True))

    with db_session() as session:
        role = _build_service(session).create(name=payload.name, description=payload.description)
        data = RoleResource.to_response(role)

    return jsonify({"message": "Papel criado com sucesso.", "data": data}), 201


@bp_roles.get("")
@bp_roles.get("/all")
@has_permission("role", PermissionAction.READ)
def list_roles():
    with db_session() as session:
        data = RoleResource.collection_to_response(_build_service(session).index())

    return jsonify({"message": "Papéis listados com sucesso.", "data": data}), 200


@bp_roles.get("/<int:role_id>")
@has_permission("role", PermissionAction.READ)
def get_role(role_id: int):
    with db_session() as session:
        data = RoleResource.to_response(_build_service(session).show(role_id))

    return jsonify({"message": "Papel encontrado com sucesso.", "data": data}), 200


@bp_roles.put("/<int:role_id>")
@has_permission("role", PermissionAction.UPDATE)
def update_role(role_id: int):
    payload = validate_payload(UpdateRoleRequest, request.get_json(silent=True))

    with db_session() as session:
        role = _build_service(session).update(role_id, name=payload.name, description=payload.description)
        data = RoleResource.to_response(role)

    return jsonify({"message": "Papel atualizado com sucesso.", "data": data}), 200


@bp_roles.delete("/<int:role_id>")
@has_permission("role", PermissionAction.DELETE)
def delete_role(role_id: int):
    with db_session() as session:
        _build_service(session).delete(role_id)

    return jsonify({"message": "Papel deletado com sucesso."}), 200
