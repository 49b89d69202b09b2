# conversa_api/infrastructure/realtime/socketio_message_notifier.py
from __future__ import annotations

from conversa_api.core.interfaces.message_notifier import (
    MessageCreatedEvent,
    MessageNotifier,
    MessagesReadEvent,
)
from conversa_api.infrastructure.realtime.socketio_server import conversation_room, socketio


class SocketIOMessageNotifier(MessageNotifier):
    def notify_message_created(self, event: MessageCreatedEvent) -> None:
        payload = {
            "conversation_id": event.conversation_id,
            "message_id": event.message_id,
            "sender_id": event.sender_id,
            "content": event.content,
            "message_type": event.message_type,
            "created_at": event.created_at_iso,
        }

        if event.message is not None:
            payload["message"] = event.message

        socketio.emit("message:new", payload, room=conversation_room(event.conversation_id))

    def notify_messages_read(self, event: MessagesReadEvent) -> None:
        socketio.emit(
            "message:read",
            {
                "conversation_id": event.conversation_id,
                "user_id": event.user_id,
                "message_ids": list(event.message_ids),
                "read_at": event.read_at_iso,
            },
            room=conversation_room(event.conversation_id),
        )
