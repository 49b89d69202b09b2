"""
Fixtures comuns.

O banco é um SQLite em memória (uma única conexão compartilhada); as
tabelas são criadas e removidas a cada teste. As variáveis de ambiente
precisam existir antes do primeiro import de `conversa_api`.
"""
import itertools
import os

os.environ["DB_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"

import pytest  # noqa: E402

from conversa_api.core.enums import PermissionAction  # noqa: E402
from conversa_api.infrastructure.database.base_model import BaseModel  # noqa: E402
from conversa_api.infrastructure.database.models.conversation_model import ConversationModel  # noqa: E402
from conversa_api.infrastructure.database.models.message_model import MessageModel  # noqa: E402
from conversa_api.infrastructure.database.models.permission_model import PermissionModel  # noqa: E402
from conversa_api.infrastructure.database.models.role_model import RoleModel  # noqa: E402
from conversa_api.infrastructure.database.models.user_model import UserModel  # noqa: E402
from conversa_api.infrastructure.database.session import db_session, get_engine  # noqa: E402
from conversa_api.infrastructure.security.jwt_provider import JwtProvider  # noqa: E402
from conversa_api.infrastructure.security.password_hasher import PasswordHasher  # noqa: E402
from conversa_api.main import create_app  # noqa: E402
from conversa_api.repositories.conversation_participant_repository import (  # noqa: E402
    ConversationParticipantRepository,
)
from conversa_api.repositories.permission_repository import PermissionRepository  # noqa: E402
from conversa_api.repositories.role_permission_repository import RolePermissionRepository  # noqa: E402
from conversa_api.repositories.role_repository import RoleRepository  # noqa: E402
from conversa_api.repositories.user_role_repository import UserRoleRepository  # noqa: E402

DEFAULT_PASSWORD = "senha123"


@pytest.fixture(scope="session")
def app():
    return create_app()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture(autouse=True)
def _database():
    engine = get_engine()
    BaseModel.metadata.create_all(engine)
    yield
    BaseModel.metadata.drop_all(engine)


@pytest.fixture
def make_user():
    hasher = PasswordHasher()
    counter = itertools.count(1)

    def _make(name: str | None = None, email: str | None = None, password: str = DEFAULT_PASSWORD) -> UserModel:
        n = next(counter)
        with db_session() as session:
            user = UserModel(
                name=name or f"Usuário {n}",
                email=email or f"usuario{n}@example.com",
                password=hasher.hash_password(password),
            )
            session.add(user)
            session.flush()
        return user

    return _make


@pytest.fixture
def auth_headers():
    def _headers(user: UserModel) -> dict:
        token = JwtProvider().issue_access_token(subject=str(user.id))
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def make_conversation():
    def _make(creator: UserModel, title: str = "Conversa de teste") -> ConversationModel:
        with db_session() as session:
            conv = ConversationModel(title=title, created_by=creator.id)
            session.add(conv)
            session.flush()
        return conv

    return _make


@pytest.fixture
def add_participant():
    def _add(conv: ConversationModel, user: UserModel) -> None:
        with db_session() as session:
            ConversationParticipantRepository(session).add_many(conversation_id=conv.id, user_ids=[user.id])

    return _add


@pytest.fixture
def make_message():
    def _make(conv: ConversationModel, sender: UserModel, content: str = "Olá!") -> MessageModel:
        with db_session() as session:
            msg = MessageModel(conversation_id=conv.id, sender_id=sender.id, content=content)
            session.add(msg)
            session.flush()
        return msg

    return _make


@pytest.fixture
def grant():
    """Concede (name, action) ao usuário através de um papel próprio dele."""

    def _grant(user: UserModel, *pairs: tuple[str, PermissionAction | str], role_name: str | None = None) -> RoleModel:
        with db_session() as session:
            role_repo = RoleRepository(session)
            perm_repo = PermissionRepository(session)
            link_repo = RolePermissionRepository(session)

            name = role_name or f"papel-{user.id}"
            role = role_repo.get_by_name(name) or role_repo.add(RoleModel(name=name, description=name))
            UserRoleRepository(session).assign(user_id=user.id, role_id=role.id)

            for perm_name, action in pairs:
                action_value = action.value if isinstance(action, PermissionAction) else action
                permission = perm_repo.find_by_name_and_action(perm_name, action_value) or perm_repo.add(
                    PermissionModel(name=perm_name, action=action_value, description="")
                )
                link_repo.attach(role_id=role.id, permission_id=permission.id)
        return role

    return _grant


@pytest.fixture
def make_permission():
    def _make(name: str, action: PermissionAction | str) -> PermissionModel:
        action_value = action.value if isinstance(action, PermissionAction) else action
        with db_session() as session:
            permission = PermissionRepository(session).add(
                PermissionModel(name=name, action=action_value, description="")
            )
        return permission

    return _make
