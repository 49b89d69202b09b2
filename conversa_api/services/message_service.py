# conversa_api/services/message_service.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from conversa_api.core.enums import MessageType
from conversa_api.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from conversa_api.core.interfaces.message_notifier import MessageCreatedEvent, MessageNotifier, MessagesReadEvent
from conversa_api.core.logging import get_logger
from conversa_api.core.pagination import Page, PaginationParams
from conversa_api.infrastructure.database.models.message_attachment_model import MessageAttachmentModel
from conversa_api.infrastructure.database.models.message_model import MessageModel
from conversa_api.repositories.conversation_participant_repository import ConversationParticipantRepository
from conversa_api.repositories.conversation_repository import ConversationRepository
from conversa_api.repositories.message_attachment_repository import MessageAttachmentRepository
from conversa_api.repositories.message_repository import MessageRepository

logger = get_logger(__name__)

NO_ACCESS = "Você não tem acesso a esta conversa"
MESSAGE_NOT_FOUND = "Mensagem não encontrada"


@dataclass(frozen=True)
class AttachmentInput:
    file_url: str
    file_type: str
    file_size: int


@dataclass(frozen=True)
class MessageView:
    message: MessageModel
    sender: Any
    attachments: list[MessageAttachmentModel]


def _iso(dt: datetime | None) -> str | None:
    if not dt:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()


class MessageService:
    """
    Mensagens de uma conversa.

    Diferente da gestão da conversa (só o criador), qualquer participante
    pode listar, ler e enviar mensagens.
    """

    def __init__(
        self,
        *,
        conv_repo: ConversationRepository,
        part_repo: ConversationParticipantRepository,
        msg_repo: MessageRepository,
        attachment_repo: MessageAttachmentRepository,
        notifier: MessageNotifier,
    ) -> None:
        self._conv_repo = conv_repo
        self._part_repo = part_repo
        self._msg_repo = msg_repo
        self._attachment_repo = attachment_repo
        self._notifier = notifier

    # -------------------------
    # Acesso
    # -------------------------

    def verify_conversation_access(self, *, user_id: int, conversation_id: int) -> bool:
        conv = self._conv_repo.get_by_id(conversation_id)
        if conv is None:
            return False
        if conv.created_by == user_id:
            return True
        return self._part_repo.is_participant(conversation_id=conversation_id, user_id=user_id)

    def _require_access(self, *, user_id: int, conversation_id: int) -> None:
        if not self.verify_conversation_access(user_id=user_id, conversation_id=conversation_id):
            logger.info("conversation_access_denied", conversation_id=conversation_id, user_id=user_id)
            raise ForbiddenError(NO_ACCESS)

    def _get_message_or_404(self, *, conversation_id: int, message_id: int) -> MessageModel:
        msg = self._msg_repo.find_by_id_and_conversation(message_id=message_id, conversation_id=conversation_id)
        if msg is None:
            raise NotFoundError(MESSAGE_NOT_FOUND)
        return msg

    def _view(self, row) -> MessageView:
        msg, sender = row
        attachments = self._attachment_repo.list_by_message_ids([msg.id]).get(msg.id, [])
        return MessageView(message=msg, sender=sender, attachments=attachments)

    # -------------------------
    # Consulta
    # -------------------------

    def list_messages(self, *, user_id: int, conversation_id: int, params: PaginationParams) -> Page:
        self._require_access(user_id=user_id, conversation_id=conversation_id)

        page = self._msg_repo.list_rows_by_conversation(conversation_id=conversation_id, params=params)

        ids = [msg.id for msg, _ in page.data]
        grouped = self._attachment_repo.list_by_message_ids(ids)
        views = [
            MessageView(message=msg, sender=sender, attachments=grouped.get(msg.id, []))
            for msg, sender in page.data
        ]
        return Page(data=views, pagination=page.pagination)

    def get_message(self, *, user_id: int, conversation_id: int, message_id: int) -> MessageView:
        self._require_access(user_id=user_id, conversation_id=conversation_id)

        row = self._msg_repo.get_row_by_id_and_conversation(message_id=message_id, conversation_id=conversation_id)
        if row is None:
            raise NotFoundError(MESSAGE_NOT_FOUND)
        return self._view(row)

    def get_unread_count(self, *, user_id: int, conversation_id: int) -> dict[str, int]:
        self._require_access(user_id=user_id, conversation_id=conversation_id)
        # conta as mensagens enviadas pelo próprio usuário ainda não lidas
        count = self._msg_repo.count_unread_sent_by(conversation_id=conversation_id, user_id=user_id)
        return {"unreadCount": count}

    # -------------------------
    # Mutação
    # -------------------------

    def create_message(
        self,
        *,
        user_id: int,
        conversation_id: int,
        content: str | None,
        message_type: str = MessageType.TEXT.value,
        attachments: list[AttachmentInput] | None = None,
    ) -> MessageView:
        self._require_access(user_id=user_id, conversation_id=conversation_id)

        msg = self._msg_repo.add(
            MessageModel(
                conversation_id=conversation_id,
                sender_id=user_id,
                content=content,
                message_type=MessageType(message_type).value,
            )
        )

        if attachments:
            self._attachment_repo.add_many(
                [
                    MessageAttachmentModel(
                        message_id=msg.id,
                        file_url=a.file_url,
                        file_type=a.file_type,
                        file_size=a.file_size,
                    )
                    for a in attachments
                ]
            )

        row = self._msg_repo.get_row_by_id_and_conversation(message_id=msg.id, conversation_id=conversation_id)
        view = self._view(row)

        logger.info("message_created", conversation_id=conversation_id, message_id=msg.id, user_id=user_id)
        self._notifier.notify_message_created(
            MessageCreatedEvent(
                conversation_id=conversation_id,
                message_id=int(msg.id),
                sender_id=int(user_id),
                content=msg.content,
                message_type=str(msg.message_type),
                created_at_iso=_iso(msg.created_at) or "",
                message={
                    "id": int(msg.id),
                    "conversation_id": conversation_id,
                    "sender_id": int(user_id),
                    "content": msg.content,
                    "message_type": str(msg.message_type),
                    "attachments": [
                        {"file_url": a.file_url, "file_type": a.file_type, "file_size": a.file_size}
                        for a in view.attachments
                    ],
                    "created_at": _iso(msg.created_at),
                },
            )
        )
        return view

    def update_message(self, *, user_id: int, conversation_id: int, message_id: int, content: str) -> MessageView:
        self._require_access(user_id=user_id, conversation_id=conversation_id)

        msg = self._get_message_or_404(conversation_id=conversation_id, message_id=message_id)
        if msg.sender_id != user_id:
            raise ForbiddenError("Você só pode editar suas próprias mensagens")

        self._msg_repo.update_content(msg, content=content)
        row = self._msg_repo.get_row_by_id_and_conversation(message_id=message_id, conversation_id=conversation_id)
        return self._view(row)

    def delete_message(self, *, user_id: int, conversation_id: int, message_id: int) -> None:
        self._require_access(user_id=user_id, conversation_id=conversation_id)

        msg = self._get_message_or_404(conversation_id=conversation_id, message_id=message_id)
        conv = self._conv_repo.get_by_id(conversation_id)

        is_sender = msg.sender_id == user_id
        is_creator = conv is not None and conv.created_by == user_id
        if not (is_sender or is_creator):
            raise ForbiddenError("Você não tem permissão para deletar esta mensagem")

        self._msg_repo.delete(message_id)
        logger.info("message_deleted", conversation_id=conversation_id, message_id=message_id, user_id=user_id)

    def mark_as_read(self, *, user_id: int, conversation_id: int, message_ids: list[int]) -> int:
        self._require_access(user_id=user_id, conversation_id=conversation_id)

        ids = list(dict.fromkeys(int(i) for i in message_ids))

        # valida todos antes de alterar qualquer um
        for message_id in ids:
            found = self._msg_repo.find_by_id_and_conversation(message_id=message_id, conversation_id=conversation_id)
            if found is None:
                raise BadRequestError(f"Mensagem {message_id} não encontrada nesta conversa")

        updated = self._msg_repo.mark_as_read(ids)
        logger.info("messages_marked_read", conversation_id=conversation_id, user_id=user_id, count=updated)

        self._notifier.notify_messages_read(
            MessagesReadEvent(
                conversation_id=conversation_id,
                user_id=user_id,
                message_ids=tuple(ids),
                read_at_iso=_iso(datetime.now(timezone.utc)) or "",
            )
        )
        return updated
