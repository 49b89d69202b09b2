# conversa_api/core/interfaces/message_notifier.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class MessageCreatedEvent:
    conversation_id: int
    message_id: int
    sender_id: int
    content: str | None
    message_type: str
    created_at_iso: str

    message: dict[str, Any] | None = None


@dataclass(frozen=True)
class MessagesReadEvent:
    conversation_id: int
    user_id: int
    message_ids: tuple[int, ...]
    read_at_iso: str


class MessageNotifier(Protocol):
    def notify_message_created(self, event: MessageCreatedEvent) -> None:
        ...

    def notify_messages_read(self, event: MessagesReadEvent) -> None:
        ...


class NullMessageNotifier:
    def notify_message_created(self, event: MessageCreatedEvent) -> None:
        return None

    def notify_messages_read(self, event: MessagesReadEvent) -> None:
        return None
