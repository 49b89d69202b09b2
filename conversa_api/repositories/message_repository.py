# conversa_api/repositories/message_repository.py

from datetime import datetime, timezone

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session, aliased

from conversa_api.core.base_repository import BaseRepository
from conversa_api.core.pagination import Page, PaginationParams, paginate
from conversa_api.infrastructure.database.models.message_attachment_model import MessageAttachmentModel
from conversa_api.infrastructure.database.models.message_model import MessageModel
from conversa_api.infrastructure.database.models.user_model import UserModel


class MessageRepository(BaseRepository[MessageModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def list_rows_by_conversation(self, *, conversation_id: int, params: PaginationParams) -> Page:
        sender = aliased(UserModel)
        stmt = (
            select(MessageModel, sender)
            .join(sender, sender.id == MessageModel.sender_id)
            .where(MessageModel.conversation_id == conversation_id)
        )
        return paginate(self._session, stmt, params, MessageModel.created_at)  # Page[(msg, sender)]

    def get_row_by_id_and_conversation(self, *, message_id: int, conversation_id: int):
        sender = aliased(UserModel)
        stmt = (
            select(MessageModel, sender)
            .join(sender, sender.id == MessageModel.sender_id)
            .where(MessageModel.id == message_id, MessageModel.conversation_id == conversation_id)
        )
        return self._session.execute(stmt).first()  # (msg, sender) | None

    def find_by_id_and_conversation(self, *, message_id: int, conversation_id: int) -> MessageModel | None:
        stmt = select(MessageModel).where(
            MessageModel.id == message_id,
            MessageModel.conversation_id == conversation_id,
        )
        return self._session.execute(stmt).scalar_one_or_none()

    def update_content(self, message: MessageModel, *, content: str) -> MessageModel:
        message.content = content
        message.updated_at = datetime.now(timezone.utc)
        self._session.flush()
        return message

    def delete(self, message_id: int) -> None:
        self._session.execute(delete(MessageAttachmentModel).where(MessageAttachmentModel.message_id == message_id))
        self._session.execute(delete(MessageModel).where(MessageModel.id == message_id))

    def mark_as_read(self, message_ids: list[int]) -> int:
        if not message_ids:
            return 0
        stmt = (
            update(MessageModel)
            .where(MessageModel.id.in_(message_ids))
            .values(read_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session="fetch")
        )
        res = self._session.execute(stmt)
        return int(res.rowcount or 0)

    def count_unread_sent_by(self, *, conversation_id: int, user_id: int) -> int:
        stmt = select(func.count(MessageModel.id)).where(
            MessageModel.conversation_id == conversation_id,
            MessageModel.sender_id == user_id,
            MessageModel.read_at.is_(None),
        )
        return int(self._session.execute(stmt).scalar_one())
