# conversa_api/api/resources/user_resource.py
from conversa_api.api.schemas.auth_schema import UserBasicResponse, UserResponse
from conversa_api.infrastructure.database.models.user_model import UserModel


class UserResource:
    # a senha (hash) nunca sai daqui
    @staticmethod
    def to_model(user: UserModel) -> UserResponse:
        return UserResponse(
            id=user.id,
            name=user.name,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    @staticmethod
    def to_basic_model(user: UserModel) -> UserBasicResponse:
        return UserBasicResponse(id=user.id, name=user.name, email=user.email)

    @classmethod
    def to_response(cls, user: UserModel) -> dict:
        return cls.to_model(user).to_json()

    @classmethod
    def to_response_basic(cls, user: UserModel) -> dict:
        return cls.to_basic_model(user).to_json()
