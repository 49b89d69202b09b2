# conversa_api/api/realtime/socket_handlers.py
from __future__ import annotations

from flask import request
from flask_socketio import disconnect, emit, join_room, leave_room

from conversa_api.infrastructure.security.jwt_provider import JwtProvider
from conversa_api.core.exceptions import UnauthorizedError
from conversa_api.core.interfaces.message_notifier import NullMessageNotifier
from conversa_api.core.logging import get_logger
from conversa_api.infrastructure.database.session import db_session
from conversa_api.infrastructure.realtime.socketio_server import conversation_room, socketio, user_room
from conversa_api.repositories.conversation_participant_repository import ConversationParticipantRepository
from conversa_api.repositories.conversation_repository import ConversationRepository
from conversa_api.repositories.message_attachment_repository import MessageAttachmentRepository
from conversa_api.repositories.message_repository import MessageRepository
from conversa_api.services.message_service import MessageService

logger = get_logger(__name__)


def _get_bearer_token() -> str | None:
    # 1) Authorization: Bearer <token>
    auth = request.headers.get("Authorization", "")
    if auth.lower().startswith("bearer "):
        return auth.split(" ", 1)[1].strip()

    # 2) querystring ?token=...
    token = request.args.get("token")
    if token:
        return str(token).strip()

    return None


def _conversation_id(data) -> int | None:
    try:
        return int((data or {}).get("conversation_id"))
    except (TypeError, ValueError):
        return None


def _has_access(user_id: int, conversation_id: int) -> bool:
    with db_session() as session:
        service = MessageService(
            conv_repo=ConversationRepository(session),
            part_repo=ConversationParticipantRepository(session),
            msg_repo=MessageRepository(session),
            attachment_repo=MessageAttachmentRepository(session),
            notifier=NullMessageNotifier(),
        )
        return service.verify_conversation_access(user_id=user_id, conversation_id=conversation_id)


def register_socket_handlers() -> None:
    @socketio.on("connect")
    def on_connect(auth=None):
        token = _get_bearer_token()
        if not token and isinstance(auth, dict):
            token = auth.get("token")
        if not token:
            return disconnect()

        try:
            user_id, _claims = JwtProvider().decode_access(token)
        except UnauthorizedError:
            logger.info("socket_auth_failed")
            return disconnect()

        request.environ["auth_user_id"] = user_id
        # sala pessoal: eventos conversation:new
        join_room(user_room(user_id))

    @socketio.on("conversation:join")
    def on_join(data: dict):
        user_id = request.environ.get("auth_user_id")
        conversation_id = _conversation_id(data)
        if user_id is None or conversation_id is None:
            return

        if not _has_access(user_id, conversation_id):
            emit("conversation:error", {"conversation_id": conversation_id, "message": "Você não tem acesso a esta conversa"})
            return

        join_room(conversation_room(conversation_id))
        emit("conversation:joined", {"conversation_id": conversation_id})

    @socketio.on("conversation:leave")
    def on_leave(data: dict):
        conversation_id = _conversation_id(data)
        if conversation_id is None:
            return

        leave_room(conversation_room(conversation_id))
        emit("conversation:left", {"conversation_id": conversation_id})
