# conversa_api/repositories/message_attachment_repository.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from conversa_api.core.base_repository import BaseRepository
from conversa_api.infrastructure.database.models.message_attachment_model import MessageAttachmentModel


class MessageAttachmentRepository(BaseRepository[MessageAttachmentModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def add_many(self, attachments: list[MessageAttachmentModel]) -> None:
        self._session.add_all(attachments)
        self._session.flush()

    def list_by_message_ids(self, message_ids: list[int]) -> dict[int, list[MessageAttachmentModel]]:
        if not message_ids:
            return {}

        stmt = (
            select(MessageAttachmentModel)
            .where(MessageAttachmentModel.message_id.in_(message_ids))
            .order_by(MessageAttachmentModel.id.asc())
        )
        rows = list(self._session.execute(stmt).scalars().all())

        grouped: dict[int, list[MessageAttachmentModel]] = {}
        for a in rows:
            grouped.setdefault(a.message_id, []).append(a)
        return grouped
