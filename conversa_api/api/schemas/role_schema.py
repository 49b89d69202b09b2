# conversa_api/api/schemas/role_schema.py
from datetime import datetime

from pydantic import Field, field_serializer

from conversa_api.api.schemas._base import CamelModel, RequestModel
from conversa_api.api.schemas._datetime_serializer import serialize_dt


class CreateRoleRequest(RequestModel):
    name: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1, max_length=255)

    error_messages = {
        "name": "Nome do papel é obrigatório",
        "description": "Descrição do papel é obrigatória",
    }


class UpdateRoleRequest(RequestModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1, max_length=255)

    error_messages = CreateRoleRequest.error_messages


class RolePermissionRequest(RequestModel):
    role_id: int = Field(gt=0)
    permission_id: int = Field(gt=0)

    error_messages = {
        "roleId": "ID do papel é obrigatório",
        "permissionId": "ID da permissão é obrigatório",
    }


class AssignRoleRequest(RequestModel):
    role_id: int = Field(gt=0)

    error_messages = {"roleId": "ID do papel é obrigatório"}


class RoleResponse(CamelModel):
    id: int
    name: str
    description: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_serializer("created_at", "updated_at")
    def serialize_dates(self, value: datetime | None):
        return serialize_dt(value)
