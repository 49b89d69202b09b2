# conversa_api/infrastructure/realtime/socketio_conversation_notifier.py
from __future__ import annotations

from typing import Any

from conversa_api.core.interfaces.conversation_notifier import ConversationCreatedEvent
from conversa_api.infrastructure.realtime.socketio_server import socketio, user_room


class SocketIOConversationNotifier:
    event_name = "conversation:new"

    @staticmethod
    def _payload(event: ConversationCreatedEvent) -> dict[str, Any]:
        body: dict[str, Any] = {
            "conversation_id": event.conversation_id,
            "title": event.title,
            "created_by": event.created_by,
            "created_at": event.created_at_iso,
        }
        if event.conversation is not None:
            body["conversation"] = event.conversation
        return body

    def notify_conversation_created(self, event: ConversationCreatedEvent) -> None:
        # conversa recém-criada só tem o criador; participantes entram depois
        socketio.emit(self.event_name, self._payload(event), room=user_room(event.created_by))
