# conversa_api/api/resources/conversation_resource.py
from typing import Callable, Optional

from conversa_api.api.resources.user_resource import UserResource
from conversa_api.api.schemas.conversation_schema import ConversationResponse, ParticipantResponse
from conversa_api.core.relations import Relation, relation_of, resolve_relation
from conversa_api.infrastructure.database.models.conversation_model import ConversationModel
from conversa_api.infrastructure.database.models.conversation_participant_model import ConversationParticipantModel
from conversa_api.infrastructure.database.models.user_model import UserModel

UserLoader = Callable[[int], Optional[UserModel]]


def _no_loader(_user_id: int) -> None:
    return None


class ConversationResource:
    """
    Conversa -> DTO.

    O criador pode chegar já carregado (linha (conv, creator) de um join)
    ou só como FK; nesse caso `user_loader` busca o usuário.
    """

    def __init__(self, user_loader: UserLoader | None = None) -> None:
        self._user_loader = user_loader or _no_loader

    def to_response(self, conv: ConversationModel, created_by: Relation = None) -> dict:
        if created_by is None:
            created_by = relation_of(None, conv.created_by)

        creator = resolve_relation(created_by, self._user_loader, UserResource.to_basic_model)

        return ConversationResponse(
            id=conv.id,
            title=conv.title,
            created_by=creator,
            created_at=conv.created_at,
            updated_at=conv.updated_at,
        ).to_json()

    def row_to_response(self, row) -> dict:
        conv, creator = row
        return self.to_response(conv, relation_of(creator, conv.created_by))

    def collection_to_response(self, rows) -> list[dict]:
        return [self.row_to_response(r) for r in rows]


class ParticipantResource:
    @staticmethod
    def to_response(participant: ConversationParticipantModel, user: UserModel) -> dict:
        return ParticipantResponse(
            id=participant.id,
            conversation_id=participant.conversation_id,
            user=UserResource.to_basic_model(user),
            created_at=participant.created_at,
        ).to_json()

    @classmethod
    def collection_to_response(cls, rows) -> list[dict]:
        return [cls.to_response(p, u) for p, u in rows]
