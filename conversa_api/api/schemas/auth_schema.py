# conversa_api/api/schemas/auth_schema.py
from datetime import datetime

from pydantic import EmailStr, Field, field_serializer, model_validator

from conversa_api.api.schemas._base import CamelModel, RequestModel
from conversa_api.api.schemas._datetime_serializer import serialize_dt

_PASSWORD_MIN = "A senha deve ter no mínimo 6 caracteres"


class RegisterRequest(RequestModel):
    name: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6, max_length=200)

    error_messages = {
        ("name", "missing"): "Nome é obrigatório",
        ("name", "string_too_short"): "O nome deve ter no mínimo 3 caracteres",
        ("email", "missing"): "Email é obrigatório",
        "email": "Email inválido",
        ("password", "missing"): "Senha é obrigatória",
        "password": _PASSWORD_MIN,
    }


class LoginRequest(RequestModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=200)

    error_messages = {
        ("email", "missing"): "Email é obrigatório",
        "email": "Email inválido",
        ("password", "missing"): "Senha é obrigatória",
        "password": _PASSWORD_MIN,
    }


class ResetPasswordRequest(RequestModel):
    email: EmailStr

    error_messages = {
        ("email", "missing"): "Email é obrigatório",
        "email": "Email inválido",
    }


class ChangePasswordRequest(RequestModel):
    current_password: str = Field(min_length=6, max_length=200)
    new_password: str = Field(min_length=6, max_length=200)

    error_messages = {
        ("currentPassword", "missing"): "Senha atual é obrigatória",
        "currentPassword": _PASSWORD_MIN,
        ("newPassword", "missing"): "Nova senha é obrigatória",
        "newPassword": "A nova senha deve ter no mínimo 6 caracteres",
    }


class UpdateProfileRequest(RequestModel):
    name: str | None = Field(default=None, min_length=3, max_length=50)
    current_password: str | None = Field(default=None, min_length=6, max_length=200)
    new_password: str | None = Field(default=None, min_length=6, max_length=200)

    error_messages = {
        "name": "O nome deve ter no mínimo 3 caracteres",
        "currentPassword": _PASSWORD_MIN,
        "newPassword": "A nova senha deve ter no mínimo 6 caracteres",
    }

    @model_validator(mode="after")
    def _check_fields(self):
        if bool(self.current_password) != bool(self.new_password):
            raise ValueError("Para alterar a senha, tanto a senha atual quanto a nova senha são obrigatórias")
        if not self.name and not self.new_password:
            raise ValueError("Pelo menos um campo deve ser fornecido para atualização")
        return self


class UserResponse(CamelModel):
    id: int
    name: str
    email: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_serializer("created_at", "updated_at")
    def serialize_dates(self, value: datetime | None):
        return serialize_dt(value)


class UserBasicResponse(CamelModel):
    id: int
    name: str
    email: str


class TokenResponse(CamelModel):
    access_token: str
    expires_in: int  # minutos
    token_type: str = "Bearer"


class LoginResponse(CamelModel):
    token: TokenResponse
    user: UserResponse


class ResetPasswordResponse(CamelModel):
    new_password: str
    user: UserResponse
