# conversa_api/repositories/user_repository.py

from sqlalchemy import select
from sqlalchemy.orm import Session

from conversa_api.core.base_repository import BaseRepository
from conversa_api.infrastructure.database.models.user_model import UserModel


class UserRepository(BaseRepository[UserModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def get_by_email(self, email: str) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.email == email)
        return self._session.execute(stmt).scalar_one_or_none()

    def get_by_id(self, user_id: int) -> UserModel | None:
        return self._session.get(UserModel, user_id)

    def list_by_ids(self, user_ids: list[int]) -> list[UserModel]:
        if not user_ids:
            return []
        stmt = select(UserModel).where(UserModel.id.in_(user_ids))
        return list(self._session.execute(stmt).scalars().all())

    def update_password(self, user: UserModel, password_hash: str) -> UserModel:
        user.password = password_hash
        self._session.flush()
        return user
