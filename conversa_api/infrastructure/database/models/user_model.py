# conversa_api/infrastructure/database/models/user_model.py

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from conversa_api.infrastructure.database.base_model import BaseModel
from conversa_api.infrastructure.database.models._mixins import TimestampMixin


class UserModel(TimestampMixin, BaseModel):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    # hash bcrypt (nunca serializado)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
