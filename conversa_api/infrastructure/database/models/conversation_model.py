# conversa_api/infrastructure/database/models/conversation_model.py

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from conversa_api.infrastructure.database.base_model import BaseModel
from conversa_api.infrastructure.database.models._mixins import TimestampMixin


class ConversationModel(TimestampMixin, BaseModel):
    __tablename__ = "conversations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    created_by: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False
    )

    # soft delete: preenchido => conversa (e suas mensagens) invisível
    deleted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=True)
