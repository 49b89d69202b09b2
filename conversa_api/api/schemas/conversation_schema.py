# conversa_api/api/schemas/conversation_schema.py
from datetime import datetime

from pydantic import Field, field_serializer

from conversa_api.api.schemas._base import CamelModel, RequestModel
from conversa_api.api.schemas._datetime_serializer import serialize_dt
from conversa_api.api.schemas.auth_schema import UserBasicResponse

_TITLE_REQUIRED = "Título é obrigatório"


class CreateConversationRequest(RequestModel):
    title: str = Field(min_length=1, max_length=255)

    error_messages = {
        ("title", "missing"): _TITLE_REQUIRED,
        ("title", "string_too_short"): _TITLE_REQUIRED,
        ("title", "string_too_long"): "O título deve ter no máximo 255 caracteres",
    }


class UpdateConversationRequest(RequestModel):
    title: str = Field(min_length=1, max_length=255)

    error_messages = CreateConversationRequest.error_messages


class AddParticipantsRequest(RequestModel):
    user_ids: list[int] = Field(min_length=1)

    error_messages = {
        ("userIds", "missing"): "Pelo menos um usuário deve ser informado",
        ("userIds", "too_short"): "Pelo menos um usuário deve ser informado",
        "userIds": "ID do usuário é obrigatório",
    }


class ConversationResponse(CamelModel):
    id: int
    title: str
    created_by: UserBasicResponse | None
    created_at: datetime
    updated_at: datetime | None

    @field_serializer("created_at", "updated_at")
    def serialize_dates(self, value: datetime | None):
        return serialize_dt(value)


class ParticipantResponse(CamelModel):
    id: int
    conversation_id: int
    user: UserBasicResponse
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime):
        return serialize_dt(value)
