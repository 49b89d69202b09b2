# conversa_api/api/resources/message_resource.py
from conversa_api.api.resources.user_resource import UserResource
from conversa_api.api.schemas.message_schema import AttachmentResponse, MessageResponse
from conversa_api.services.message_service import MessageView


class MessageResource:
    @staticmethod
    def to_response(view: MessageView) -> dict:
        msg = view.message
        return MessageResponse(
            id=msg.id,
            conversation_id=msg.conversation_id,
            content=msg.content,
            message_type=msg.message_type,
            created_at=msg.created_at,
            updated_at=msg.updated_at,
            read_at=msg.read_at,
            sender=UserResource.to_basic_model(view.sender),
            attachments=[
                AttachmentResponse(
                    id=a.id,
                    file_url=a.file_url,
                    file_type=a.file_type,
                    file_size=a.file_size,
                    created_at=a.created_at,
                )
                for a in view.attachments
            ],
        ).to_json()

    @classmethod
    def collection_to_response(cls, views: list[MessageView]) -> list[dict]:
        return [cls.to_response(v) for v in views]
