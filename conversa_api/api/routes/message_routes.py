# conversa_api/api/routes/message_routes.py
from __future__ import annotations

from flask import Blueprint, g, jsonify, request

from conversa_api.api.middlewares.auth_middleware import require_auth
from conversa_api.api.resources.message_resource import MessageResource
from conversa_api.api.resources.pagination_resource import PaginationResource
from conversa_api.api.schemas._validation import validate_payload
from conversa_api.api.schemas.message_schema import (
    CreateMessageRequest,
    MarkAsReadRequest,
    UnreadCountResponse,
    UpdateMessageRequest,
)
from conversa_api.api.schemas.pagination_schema import PaginationQuery
from conversa_api.infrastructure.database.session import db_session
from conversa_api.infrastructure.realtime.socketio_message_notifier import SocketIOMessageNotifier
from conversa_api.repositories.conversation_participant_repository import ConversationParticipantRepository
from conversa_api.repositories.conversation_repository import ConversationRepository
from conversa_api.repositories.message_attachment_repository import MessageAttachmentRepository
from conversa_api.repositories.message_repository import MessageRepository
from conversa_api.services.message_service import AttachmentInput, MessageService

# montado em /conversations/<int:conversation_id>/messages
bp_msg = Blueprint("messages", __name__)


def _build_service(session) -> MessageService:
    return MessageService(
        conv_repo=ConversationRepository(session),
        part_repo=ConversationParticipantRepository(session),
        msg_repo=MessageRepository(session),
        attachment_repo=MessageAttachmentRepository(session),
        notifier=SocketIOMessageNotifier(),
    )


@bp_msg.get("")
@require_auth
def list_messages(conversation_id: int):
    query = validate_payload(PaginationQuery, request.args.to_dict())

    with db_session() as session:
        page = _build_service(session).list_messages(
            user_id=g.user_id, conversation_id=conversation_id, params=query.to_params()
        )
        body = PaginationResource.from_page(page, MessageResource.to_response)

    return jsonify({"message": "Mensagens listadas com sucesso.", **body}), 200


# antes de /<int:message_id>
@bp_msg.get("/unread-count")
@require_auth
def unread_count(conversation_id: int):
    with db_session() as session:
        result = _build_service(session).get_unread_count(user_id=g.user_id, conversation_id=conversation_id)

    data = UnreadCountResponse(unread_count=result["unreadCount"]).to_json()
    return jsonify({"message": "Contagem de mensagens não lidas obtida com sucesso.", "data": data}), 200


@bp_msg.post("/mark-as-read")
@require_auth
def mark_as_read(conversation_id: int):
    payload = validate_payload(MarkAsReadRequest, request.get_json(silent=True))

    with db_session() as session:
        updated = _build_service(session).mark_as_read(
            user_id=g.user_id, conversation_id=conversation_id, message_ids=payload.message_ids
        )

    return jsonify({"message": "Mensagens marcadas como lidas.", "data": {"updated": updated}}), 200


@bp_msg.get("/<int:message_id>")
@require_auth
def get_message(conversation_id: int, message_id: int):
    with db_session() as session:
        view = _build_service(session).get_message(
            user_id=g.user_id, conversation_id=conversation_id, message_id=message_id
        )
        data = MessageResource.to_response(view)

    return jsonify({"message": "Mensagem encontrada com sucesso.", "data": data}), 200


@bp_msg.post("")
@require_auth
def create_message(conversation_id: int):
    payload = validate_payload(CreateMessageRequest, request.get_json(silent=True))

    attachments = [
        AttachmentInput(file_url=a.file_url, file_type=a.file_type, file_size=a.file_size)
        for a in payload.attachments
    ]

    with db_session() as session:
        view = _build_service(session).create_message(
            user_id=g.user_id,
            conversation_id=conversation_id,
            content=payload.content,
            message_type=payload.message_type.value,
            attachments=attachments,
        )
        data = MessageResource.to_response(view)

    return jsonify({"message": "Mensagem criada com sucesso.", "data": data}), 201


@bp_msg.put("/<int:message_id>")
@require_auth
def update_message(conversation_id: int, message_id: int):
    payload = validate_payload(UpdateMessageRequest, request.get_json(silent=True))

    with db_session() as session:
        view = _build_service(session).update_message(
            user_id=g.user_id,
            conversation_id=conversation_id,
            message_id=message_id,
            content=payload.content,
        )
        data = MessageResource.to_response(view)

    return jsonify({"message": "Mensagem atualizada com sucesso.", "data": data}), 200


@bp_msg.delete("/<int:message_id>")
@require_auth
def delete_message(conversation_id: int, message_id: int):
    with db_session() as session:
        _build_service(session).delete_message(
            user_id=g.user_id, conversation_id=conversation_id, message_id=message_id
        )

    return jsonify({"message": "Mensagem deletada com sucesso."}), 200
