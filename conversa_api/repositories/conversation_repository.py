# conversa_api/repositories/conversation_repository.py
from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.orm import Session, aliased

from conversa_api.core.base_repository import BaseRepository
from conversa_api.core.pagination import Page, PaginationParams, paginate
from conversa_api.infrastructure.database.models.conversation_model import ConversationModel
from conversa_api.infrastructure.database.models.user_model import UserModel


class ConversationRepository(BaseRepository[ConversationModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def _base_rows_stmt(self):
        creator = aliased(UserModel)
        stmt = (
            select(ConversationModel, creator)
            .join(creator, creator.id == ConversationModel.created_by)
            .where(ConversationModel.deleted_at.is_(None))
        )
        return stmt

    def index(self, *, user_id: int, params: PaginationParams) -> Page:
        """Conversas criadas por `user_id` -> Page[(conv, creator)]."""
        stmt = self._base_rows_stmt().where(ConversationModel.created_by == user_id)

        if params.has_search:
            stmt = stmt.where(ConversationModel.title.ilike(f"%{params.search.strip()}%"))

        order_column = ConversationModel.title if params.order_by == "title" else ConversationModel.created_at
        return paginate(self._session, stmt, params, order_column)

    def get_by_id(self, conversation_id: int) -> ConversationModel | None:
        stmt = select(ConversationModel).where(
            ConversationModel.id == conversation_id,
            ConversationModel.deleted_at.is_(None),
        )
        return self._session.execute(stmt).scalar_one_or_none()

    def get_row_by_id_and_user(self, *, conversation_id: int, user_id: int):
        stmt = self._base_rows_stmt().where(
            ConversationModel.id == conversation_id,
            ConversationModel.created_by == user_id,
        )
        return self._session.execute(stmt).first()  # (conv, creator) | None

    def get_by_id_and_user(self, *, conversation_id: int, user_id: int) -> ConversationModel | None:
        row = self.get_row_by_id_and_user(conversation_id=conversation_id, user_id=user_id)
        return row[0] if row is not None else None

    def update_fields(self, *, conversation_id: int, user_id: int, title: str | None) -> bool:
        values = {}
        if title is not None:
            values["title"] = title.strip()

        if not values:
            return True  # nada a alterar

        values["updated_at"] = datetime.now(timezone.utc)
        stmt = (
            update(ConversationModel)
            .where(
                ConversationModel.id == conversation_id,
                ConversationModel.created_by == user_id,
                ConversationModel.deleted_at.is_(None),
            )
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )
        res = self._session.execute(stmt)
        return (res.rowcount or 0) > 0

    def soft_delete(self, conversation_id: int) -> bool:
        stmt = (
            update(ConversationModel)
            .where(ConversationModel.id == conversation_id, ConversationModel.deleted_at.is_(None))
            .values(deleted_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session="fetch")
        )
        res = self._session.execute(stmt)
        return (res.rowcount or 0) > 0
