# conversa_api/repositories/conversation_participant_repository.py

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from conversa_api.core.base_repository import BaseRepository
from conversa_api.infrastructure.database.models.conversation_participant_model import ConversationParticipantModel
from conversa_api.infrastructure.database.models.user_model import UserModel


class ConversationParticipantRepository(BaseRepository[ConversationParticipantModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def get(self, *, conversation_id: int, user_id: int) -> ConversationParticipantModel | None:
        stmt = select(ConversationParticipantModel).where(
            ConversationParticipantModel.conversation_id == conversation_id,
            ConversationParticipantModel.user_id == user_id,
        )
        return self._session.execute(stmt).scalars().first()

    def is_participant(self, *, conversation_id: int, user_id: int) -> bool:
        return self.get(conversation_id=conversation_id, user_id=user_id) is not None

    def existing_user_ids(self, *, conversation_id: int, user_ids: list[int]) -> list[int]:
        if not user_ids:
            return []
        stmt = select(ConversationParticipantModel.user_id).where(
            ConversationParticipantModel.conversation_id == conversation_id,
            ConversationParticipantModel.user_id.in_(user_ids),
        )
        return list(self._session.execute(stmt).scalars().all())

    def add_many(self, *, conversation_id: int, user_ids: list[int]) -> list[ConversationParticipantModel]:
        models = [ConversationParticipantModel(conversation_id=conversation_id, user_id=uid) for uid in user_ids]
        self._session.add_all(models)
        self._session.flush()
        return models

    def remove(self, *, conversation_id: int, user_id: int) -> bool:
        stmt = delete(ConversationParticipantModel).where(
            ConversationParticipantModel.conversation_id == conversation_id,
            ConversationParticipantModel.user_id == user_id,
        )
        res = self._session.execute(stmt)
        return (res.rowcount or 0) > 0

    def list_rows(self, conversation_id: int):
        stmt = (
            select(ConversationParticipantModel, UserModel)
            .join(UserModel, UserModel.id == ConversationParticipantModel.user_id)
            .where(ConversationParticipantModel.conversation_id == conversation_id)
            .order_by(ConversationParticipantModel.id.asc())
        )
        return list(self._session.execute(stmt).all())  # [(participant, user)]
