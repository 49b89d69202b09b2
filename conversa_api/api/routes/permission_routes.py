# conversa_api/api/routes/permission_routes.py
from flask import Blueprint, jsonify, request

from conversa_api.api.middlewares.authorization_middleware import has_permission
from conversa_api.api.resources.pagination_resource import PaginationResource
from conversa_api.api.resources.role_resource import PermissionResource
from conversa_api.api.schemas._validation import validate_payload
from conversa_api.api.schemas.pagination_schema import PaginationQuery
from conversa_api.api.schemas.permission_schema import CreatePermissionRequest, UpdatePermissionRequest
from conversa_api.core.enums import PermissionAction
from conversa_api.infrastructure.database.session import db_session
from conversa_api.repositories.permission_repository import PermissionRepository
from conversa_api.services.permission_service import PermissionService

bp_perm = Blueprint("permissions", __name__, url_prefix="/permissions")


def _build_service(session) -> PermissionService:
    return PermissionService(PermissionRepository(session))


@bp_perm.post("")
@has_permission("permission", PermissionAction.CREATE)
def create_permission():
    payload = validate_payload(CreatePermissionRequest, request.get_json(silent=True))

    with db_session() as session:
        permission = _build_service(session).create(
            name=payload.name, action=payload.action.value, description=payload.description
        )
        data = PermissionResource.to_response(permission)

    return jsonify({"message": "Permissão criada com sucesso.", "data": data}), 201


@bp_perm.get("")
@has_permission("permission", PermissionAction.READ)
def list_permissions():
    query = validate_payload(PaginationQuery, request.args.to_dict())

    with db_session() as session:
        page = _build_service(session).list(query.to_params())
        body = PaginationResource.from_page(page, PermissionResource.to_response)

    return jsonify({"message": "Permissões listadas com sucesso.", **body}), 200


@bp_perm.get("/<int:permission_id>")
@has_permission("permission", PermissionAction.READ)
def get_permission(permission_id: int):
    with db_session() as session:
        data = PermissionResource.to_response(_build_service(session).show(permission_id))

    return jsonify({"message": "Permissão encontrada com sucesso.", "data": data}), 200


@bp_perm.put("/<int:permission_id>")
@has_permission("permission", PermissionAction.UPDATE)
def update_permission(permission_id: int):
    payload = validate_payload(UpdatePermissionRequest, request.get_json(silent=True))

    with db_session() as session:
        permission = _build_service(session).update(
            permission_id,
            name=payload.name,
            action=payload.action.value if payload.action is not None else None,
            description=payload.description,
        )
        data = PermissionResource.to_response(permission)

    return jsonify({"message": "Permissão atualizada com sucesso.", "data": data}), 200


@bp_perm.delete("/<int:permission_id>")
@has_permission("permission", PermissionAction.DELETE)
def delete_permission(permission_id: int):
    with db_session() as session:
        _build_service(session).delete(permission_id)

    return jsonify({"message": "Permissão deletada com sucesso."}), 200
