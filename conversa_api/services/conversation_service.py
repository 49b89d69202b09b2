# conversa_api/services/conversation_service.py
from __future__ import annotations

from datetime import timezone
from typing import Any

from conversa_api.core.exceptions import BadRequestError, NotFoundError
from conversa_api.core.interfaces.conversation_notifier import ConversationNotifier, ConversationCreatedEvent
from conversa_api.core.logging import get_logger
from conversa_api.core.pagination import Page, PaginationParams
from conversa_api.infrastructure.database.models.conversation_model import ConversationModel
from conversa_api.repositories.conversation_participant_repository import ConversationParticipantRepository
from conversa_api.repositories.conversation_repository import ConversationRepository
from conversa_api.repositories.user_repository import UserRepository

logger = get_logger(__name__)

CONVERSATION_NOT_FOUND = "Conversa não encontrada"


class ConversationService:
    """
    Gestão de conversas.

    Operações de gestão (show/update/delete/participantes) exigem ser o
    criador; quem não é recebe "não encontrada", sem revelar que a conversa
    existe.
    """

    def __init__(
        self,
        *,
        conv_repo: ConversationRepository,
        part_repo: ConversationParticipantRepository,
        user_repo: UserRepository,
        notifier: ConversationNotifier,
    ) -> None:
        self._repo = conv_repo
        self._part_repo = part_repo
        self._user_repo = user_repo
        self._notifier = notifier

    def _iso(self, dt) -> str | None:
        if not dt:
            return None
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc).isoformat()

    def _get_owned_row_or_404(self, *, conversation_id: int, user_id: int):
        row = self._repo.get_row_by_id_and_user(conversation_id=conversation_id, user_id=user_id)
        if row is None:
            raise NotFoundError(CONVERSATION_NOT_FOUND)
        return row  # (conv, creator)

    def _pack_event_payload(self, conv: ConversationModel) -> dict[str, Any]:
        return {
            "id": int(conv.id),
            "title": str(conv.title),
            "created_by": int(conv.created_by),
            "created_at": self._iso(conv.created_at),
        }

    # -------------------------
    # Consulta
    # -------------------------

    def index(self, *, user_id: int, params: PaginationParams) -> Page:
        return self._repo.index(user_id=user_id, params=params)

    def show(self, *, user_id: int, conversation_id: int):
        return self._get_owned_row_or_404(conversation_id=conversation_id, user_id=user_id)

    # -------------------------
    # Mutação
    # -------------------------

    def create(self, *, user_id: int, title: str):
        conv = self._repo.add(ConversationModel(title=title.strip(), created_by=user_id))
        logger.info("conversation_created", conversation_id=conv.id, user_id=user_id)

        self._notifier.notify_conversation_created(
            ConversationCreatedEvent(
                conversation_id=int(conv.id),
                title=str(conv.title),
                created_by=int(conv.created_by),
                created_at_iso=self._iso(conv.created_at) or "",
                conversation=self._pack_event_payload(conv),
            )
        )
        return self._get_owned_row_or_404(conversation_id=conv.id, user_id=user_id)

    def update(self, *, user_id: int, conversation_id: int, title: str | None):
        self._get_owned_row_or_404(conversation_id=conversation_id, user_id=user_id)

        ok = self._repo.update_fields(conversation_id=conversation_id, user_id=user_id, title=title)
        if not ok:
            raise NotFoundError(CONVERSATION_NOT_FOUND)

        return self._get_owned_row_or_404(conversation_id=conversation_id, user_id=user_id)

    def delete(self, *, user_id: int, conversation_id: int) -> None:
        self._get_owned_row_or_404(conversation_id=conversation_id, user_id=user_id)

        if not self._repo.soft_delete(conversation_id):
            raise NotFoundError(CONVERSATION_NOT_FOUND)
        logger.info("conversation_deleted", conversation_id=conversation_id, user_id=user_id)

    # -------------------------
    # Participantes
    # -------------------------

    def add_participants(self, *, user_id: int, conversation_id: int, user_ids: list[int]):
        self._get_owned_row_or_404(conversation_id=conversation_id, user_id=user_id)

        requested = list(dict.fromkeys(int(u) for u in user_ids))

        existing = self._part_repo.existing_user_ids(conversation_id=conversation_id, user_ids=requested)
        if existing:
            # tudo ou nada: nenhum participante é adicionado
            ids = ", ".join(str(u) for u in sorted(existing))
            raise BadRequestError(f"Usuários já são participantes desta conversa: {ids}")

        found = {u.id for u in self._user_repo.list_by_ids(requested)}
        unknown = [u for u in requested if u not in found]
        if unknown:
            raise NotFoundError(f"Usuários não encontrados: {', '.join(str(u) for u in unknown)}")

        self._part_repo.add_many(conversation_id=conversation_id, user_ids=requested)
        logger.info("participants_added", conversation_id=conversation_id, user_ids=requested)
        return self._part_repo.list_rows(conversation_id)

    def remove_participant(self, *, user_id: int, conversation_id: int, participant_user_id: int) -> None:
        self._get_owned_row_or_404(conversation_id=conversation_id, user_id=user_id)

        if not self._part_repo.remove(conversation_id=conversation_id, user_id=participant_user_id):
            raise NotFoundError("Participante não encontrado")
        logger.info("participant_removed", conversation_id=conversation_id, user_id=participant_user_id)

    def get_participants(self, *, user_id: int, conversation_id: int):
        self._get_owned_row_or_404(conversation_id=conversation_id, user_id=user_id)
        return self._part_repo.list_rows(conversation_id)  # [(participant, user)]
