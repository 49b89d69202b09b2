# conversa_api/api/schemas/permission_schema.py
from datetime import datetime

from pydantic import Field, field_serializer

from conversa_api.api.schemas._base import CamelModel, RequestModel
from conversa_api.api.schemas._datetime_serializer import serialize_dt
from conversa_api.core.enums import PermissionAction

_ACTION_INVALID = "Ação inválida (create, read, update ou delete)"


class CreatePermissionRequest(RequestModel):
    name: str = Field(min_length=1, max_length=255)
    action: PermissionAction
    description: str | None = Field(default=None, max_length=255)

    error_messages = {
        "name": "Nome da permissão é obrigatório",
        "action": _ACTION_INVALID,
        "description": "A descrição deve ter no máximo 255 caracteres",
    }


class UpdatePermissionRequest(RequestModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    action: PermissionAction | None = None
    description: str | None = Field(default=None, max_length=255)

    error_messages = CreatePermissionRequest.error_messages


class PermissionResponse(CamelModel):
    id: int
    name: str
    action: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_serializer("created_at", "updated_at")
    def serialize_dates(self, value: datetime | None):
        return serialize_dt(value)
