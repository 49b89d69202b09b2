# conversa_api/api/routes/conversation_routes.py
from __future__ import annotations

from flask import Blueprint, g, jsonify, request

from conversa_api.api.middlewares.auth_middleware import require_auth
from conversa_api.api.resources.conversation_resource import ConversationResource, ParticipantResource
from conversa_api.api.resources.pagination_resource import PaginationResource
from conversa_api.api.schemas._validation import validate_payload
from conversa_api.api.schemas.conversation_schema import (
    AddParticipantsRequest,
    CreateConversationRequest,
    UpdateConversationRequest,
)
from conversa_api.api.schemas.pagination_schema import PaginationQuery
from conversa_api.infrastructure.database.session import db_session
from conversa_api.infrastructure.realtime.socketio_conversation_notifier import SocketIOConversationNotifier
from conversa_api.repositories.conversation_participant_repository import ConversationParticipantRepository
from conversa_api.repositories.conversation_repository import ConversationRepository
from conversa_api.repositories.user_repository import UserRepository
from conversa_api.services.conversation_service import ConversationService

bp_conv = Blueprint("conversations", __name__, url_prefix="/conversations")


# -------------------------
# Helpers
# -------------------------

def _build_service(session) -> ConversationService:
    return ConversationService(
        conv_repo=ConversationRepository(session),
        part_repo=ConversationParticipantRepository(session),
        user_repo=UserRepository(session),
        notifier=SocketIOConversationNotifier(),
    )


def _build_resource(session) -> ConversationResource:
    return ConversationResource(user_loader=UserRepository(session).get_by_id)


# -------------------------
# Rotas (consulta)
# -------------------------

@bp_conv.get("")
@require_auth
def list_conversations():
    query = validate_payload(PaginationQuery, request.args.to_dict())

    with db_session() as session:
        page = _build_service(session).index(user_id=g.user_id, params=query.to_params())
        body = PaginationResource.from_page(page, _build_resource(session).row_to_response)

    return jsonify({"message": "Conversas listadas com sucesso.", **body}), 200


@bp_conv.get("/<int:conversation_id>")
@require_auth
def get_conversation(conversation_id: int):
    with db_session() as session:
        row = _build_service(session).show(user_id=g.user_id, conversation_id=conversation_id)
        data = _build_resource(session).row_to_response(row)

    return jsonify({"message": "Conversa encontrada com sucesso.", "data": data}), 200


@bp_conv.get("/<int:conversation_id>/participants")
@require_auth
def get_participants(conversation_id: int):
    with db_session() as session:
        rows = _build_service(session).get_participants(user_id=g.user_id, conversation_id=conversation_id)
        data = ParticipantResource.collection_to_response(rows)

    return jsonify({"message": "Participantes listados com sucesso.", "data": data}), 200


# -------------------------
# Rotas (mutação)
# -------------------------

@bp_conv.post("")
@require_auth
def create_conversation():
    payload = validate_payload(CreateConversationRequest, request.get_json(silent=True))

    with db_session() as session:
        row = _build_service(session).create(user_id=g.user_id, title=payload.title)
        data = _build_resource(session).row_to_response(row)

    return jsonify({"message": "Conversa criada com sucesso.", "data": data}), 201


@bp_conv.put("/<int:conversation_id>")
@require_auth
def update_conversation(conversation_id: int):
    payload = validate_payload(UpdateConversationRequest, request.get_json(silent=True))

    with db_session() as session:
        row = _build_service(session).update(
            user_id=g.user_id, conversation_id=conversation_id, title=payload.title
        )
        data = _build_resource(session).row_to_response(row)

    return jsonify({"message": "Conversa atualizada com sucesso.", "data": data}), 200


@bp_conv.delete("/<int:conversation_id>")
@require_auth
def delete_conversation(conversation_id: int):
    with db_session() as session:
        _build_service(session).delete(user_id=g.user_id, conversation_id=conversation_id)

    return jsonify({"message": "Conversa deletada com sucesso."}), 200


@bp_conv.post("/<int:conversation_id>/participants")
@require_auth
def add_participants(conversation_id: int):
    payload = validate_payload(AddParticipantsRequest, request.get_json(silent=True))

    with db_session() as session:
        rows = _build_service(session).add_participants(
            user_id=g.user_id, conversation_id=conversation_id, user_ids=payload.user_ids
        )
        data = ParticipantResource.collection_to_response(rows)

    return jsonify({"message": "Participantes adicionados com sucesso.", "data": data}), 201


@bp_conv.delete("/<int:conversation_id>/participants/<int:user_id>")
@require_auth
def remove_participant(conversation_id: int, user_id: int):
    with db_session() as session:
        _build_service(session).remove_participant(
            user_id=g.user_id, conversation_id=conversation_id, participant_user_id=user_id
        )

    return jsonify({"message": "Participante removido com sucesso."}), 200
