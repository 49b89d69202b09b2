# conversa_api/core/interfaces/conversation_notifier.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class ConversationCreatedEvent:
    conversation_id: int
    title: str
    created_by: int
    created_at_iso: str

    conversation: dict[str, Any] | None = None


class ConversationNotifier(Protocol):
    def notify_conversation_created(self, event: ConversationCreatedEvent) -> None:
        ...


class NullConversationNotifier:
    def notify_conversation_created(self, event: ConversationCreatedEvent) -> None:
        return None
