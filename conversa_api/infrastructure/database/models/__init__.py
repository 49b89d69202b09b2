# conversa_api/infrastructure/database/models/__init__.py
# importa todos os models para registrar as tabelas no metadata
from conversa_api.infrastructure.database.models.user_model import UserModel
from conversa_api.infrastructure.database.models.role_model import RoleModel
from conversa_api.infrastructure.database.models.permission_model import PermissionModel
from conversa_api.infrastructure.database.models.role_permission_model import RolePermissionModel
from conversa_api.infrastructure.database.models.user_role_model import UserRoleModel
from conversa_api.infrastructure.database.models.conversation_model import ConversationModel
from conversa_api.infrastructure.database.models.conversation_participant_model import (
    ConversationParticipantModel,
)
from conversa_api.infrastructure.database.models.message_model import MessageModel
from conversa_api.infrastructure.database.models.message_attachment_model import MessageAttachmentModel

__all__ = [
    "UserModel",
    "RoleModel",
    "PermissionModel",
    "RolePermissionModel",
    "UserRoleModel",
    "ConversationModel",
    "ConversationParticipantModel",
    "MessageModel",
    "MessageAttachmentModel",
]
