"""
ConversationService / MessageService isolados do HTTP, com notifiers em memória.
"""
import pytest

from conversa_api.core.exceptions import BadRequestError, NotFoundError
from conversa_api.core.interfaces.conversation_notifier import NullConversationNotifier
from conversa_api.core.pagination import PaginationParams
from conversa_api.infrastructure.database.session import db_session
from conversa_api.repositories.conversation_participant_repository import ConversationParticipantRepository
from conversa_api.repositories.conversation_repository import ConversationRepository
from conversa_api.repositories.message_attachment_repository import MessageAttachmentRepository
from conversa_api.repositories.message_repository import MessageRepository
from conversa_api.repositories.user_repository import UserRepository
from conversa_api.services.conversation_service import ConversationService
from conversa_api.services.message_service import AttachmentInput, MessageService


class RecordingConversationNotifier:
    def __init__(self):
        self.events = []

    def notify_conversation_created(self, event):
        self.events.append(event)


class RecordingMessageNotifier:
    def __init__(self):
        self.created = []
        self.read = []

    def notify_message_created(self, event):
        self.created.append(event)

    def notify_messages_read(self, event):
        self.read.append(event)


def _conversation_service(session, notifier=None) -> ConversationService:
    return ConversationService(
        conv_repo=ConversationRepository(session),
        part_repo=ConversationParticipantRepository(session),
        user_repo=UserRepository(session),
        notifier=notifier or NullConversationNotifier(),
    )


def _message_service(session, notifier) -> MessageService:
    return MessageService(
        conv_repo=ConversationRepository(session),
        part_repo=ConversationParticipantRepository(session),
        msg_repo=MessageRepository(session),
        attachment_repo=MessageAttachmentRepository(session),
        notifier=notifier,
    )


def test_create_notifies_creator(make_user):
    user = make_user()
    notifier = RecordingConversationNotifier()

    with db_session() as session:
        conv, creator = _conversation_service(session, notifier).create(user_id=user.id, title="  Planejamento  ")

    assert conv.title == "Planejamento"
    assert creator.id == user.id
    assert len(notifier.events) == 1
    assert notifier.events[0].created_by == user.id
    assert notifier.events[0].conversation["title"] == "Planejamento"


def test_add_participants_is_all_or_nothing(make_user, make_conversation, add_participant):
    owner = make_user()
    already = make_user()
    fresh = make_user()
    conv = make_conversation(owner)
    add_participant(conv, already)

    with pytest.raises(BadRequestError):
        with db_session() as session:
            _conversation_service(session).add_participants(
                user_id=owner.id, conversation_id=conv.id, user_ids=[fresh.id, already.id]
            )

    with db_session() as session:
        ids = [u.id for _, u in _conversation_service(session).get_participants(user_id=owner.id, conversation_id=conv.id)]
    assert ids == [already.id]


def test_index_is_scoped_to_creator(make_user, make_conversation):
    owner = make_user()
    other = make_user()
    make_conversation(owner, title="Minha")
    make_conversation(other, title="Alheia")

    with db_session() as session:
        page = _conversation_service(session).index(user_id=owner.id, params=PaginationParams())
        titles = [conv.title for conv, _ in page.data]

    assert titles == ["Minha"]
    assert page.pagination.total == 1


def test_remove_participant_from_foreign_conversation(make_user, make_conversation):
    owner = make_user()
    stranger = make_user()
    conv = make_conversation(owner)

    with pytest.raises(NotFoundError, match="Conversa não encontrada"):
        with db_session() as session:
            _conversation_service(session).remove_participant(
                user_id=stranger.id, conversation_id=conv.id, participant_user_id=owner.id
            )


def test_message_events(make_user, make_conversation):
    owner = make_user()
    conv = make_conversation(owner)
    notifier = RecordingMessageNotifier()

    with db_session() as session:
        service = _message_service(session, notifier)
        view = service.create_message(
            user_id=owner.id,
            conversation_id=conv.id,
            content="com anexo",
            message_type="mixed",
            attachments=[AttachmentInput(file_url="https://cdn.example.com/f.png", file_type="image/png", file_size=10)],
        )
        updated = service.mark_as_read(user_id=owner.id, conversation_id=conv.id, message_ids=[view.message.id])

    assert updated == 1
    assert [a.file_type for a in view.attachments] == ["image/png"]
    assert notifier.created[0].message_type == "mixed"
    assert notifier.created[0].message["attachments"][0]["file_url"] == "https://cdn.example.com/f.png"
    assert notifier.read[0].message_ids == (view.message.id,)


def test_verify_conversation_access(make_user, make_conversation, add_participant):
    owner = make_user()
    member = make_user()
    stranger = make_user()
    conv = make_conversation(owner)
    add_participant(conv, member)

    with db_session() as session:
        service = _message_service(session, RecordingMessageNotifier())
        assert service.verify_conversation_access(user_id=owner.id, conversation_id=conv.id)
        assert service.verify_conversation_access(user_id=member.id, conversation_id=conv.id)
        assert not service.verify_conversation_access(user_id=stranger.id, conversation_id=conv.id)
        assert not service.verify_conversation_access(user_id=owner.id, conversation_id=9999)
