# conversa_api/api/schemas/message_schema.py
from datetime import datetime

from pydantic import Field, field_serializer, model_validator

from conversa_api.api.schemas._base import CamelModel, RequestModel
from conversa_api.api.schemas._datetime_serializer import serialize_dt
from conversa_api.api.schemas.auth_schema import UserBasicResponse
from conversa_api.core.enums import MessageType

_CONTENT_REQUIRED = "Conteúdo da mensagem é obrigatório"
_CONTENT_TOO_LONG = "Conteúdo da mensagem deve ter no máximo 5000 caracteres"


class AttachmentInput(CamelModel):
    file_url: str = Field(min_length=1, max_length=500)
    file_type: str = Field(min_length=1, max_length=100)
    file_size: int = Field(ge=0)


class CreateMessageRequest(RequestModel):
    content: str | None = Field(default=None, min_length=1, max_length=5000)
    message_type: MessageType = MessageType.TEXT
    attachments: list[AttachmentInput] = Field(default_factory=list)

    error_messages = {
        ("content", "string_too_short"): _CONTENT_REQUIRED,
        ("content", "string_too_long"): _CONTENT_TOO_LONG,
        "messageType": "Tipo de mensagem inválido (text, file ou mixed)",
        "attachments": "Anexo inválido",
    }

    @model_validator(mode="after")
    def _require_content_or_attachments(self):
        # mensagem só de anexos pode vir sem texto
        if not self.content and not self.attachments:
            raise ValueError(_CONTENT_REQUIRED)
        return self


class UpdateMessageRequest(RequestModel):
    content: str = Field(min_length=1, max_length=5000)

    error_messages = {
        ("content", "missing"): _CONTENT_REQUIRED,
        ("content", "string_too_short"): _CONTENT_REQUIRED,
        ("content", "string_too_long"): _CONTENT_TOO_LONG,
    }


class MarkAsReadRequest(RequestModel):
    message_ids: list[int] = Field(min_length=1)

    error_messages = {
        ("messageIds", "missing"): "Pelo menos uma mensagem deve ser informada",
        ("messageIds", "too_short"): "Pelo menos uma mensagem deve ser informada",
        "messageIds": "ID da mensagem é obrigatório",
    }


class AttachmentResponse(CamelModel):
    id: int
    file_url: str
    file_type: str
    file_size: int
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime):
        return serialize_dt(value)


class MessageResponse(CamelModel):
    id: int
    conversation_id: int
    content: str | None
    message_type: str
    created_at: datetime
    updated_at: datetime | None = None
    read_at: datetime | None = None
    sender: UserBasicResponse
    attachments: list[AttachmentResponse] = Field(default_factory=list)

    @field_serializer("created_at", "updated_at", "read_at")
    def serialize_dates(self, value: datetime | None):
        return serialize_dt(value)


class UnreadCountResponse(CamelModel):
    unread_count: int
