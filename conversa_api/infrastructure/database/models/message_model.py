# conversa_api/infrastructure/database/models/message_model.py

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from conversa_api.core.enums import MessageType
from conversa_api.infrastructure.database.base_model import BaseModel
from conversa_api.infrastructure.database.models._mixins import utcnow


class MessageModel(BaseModel):
    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    conversation_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("conversations.id", ondelete="CASCADE"), nullable=False
    )

    sender_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False
    )

    # pode ser NULL quando a mensagem só tem anexos
    content: Mapped[str] = mapped_column(Text, nullable=True)

    # text | file | mixed
    message_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=MessageType.TEXT.value
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )

    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=True)

    # confirmação de leitura
    read_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=True)
