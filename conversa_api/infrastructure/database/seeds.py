# conversa_api/infrastructure/database/seeds.py
"""
Dados iniciais: papéis, permissões CRUD, vínculos e usuários padrão.

Todas as funções são idempotentes (podem rodar várias vezes).
"""
from __future__ import annotations

from sqlalchemy.orm import Session

from conversa_api.core.enums import PermissionAction
from conversa_api.core.logging import get_logger
from conversa_api.infrastructure.database.models.permission_model import PermissionModel
from conversa_api.infrastructure.database.models.role_model import RoleModel
from conversa_api.infrastructure.database.models.user_model import UserModel
from conversa_api.infrastructure.security.password_hasher import PasswordHasher
from conversa_api.repositories.permission_repository import PermissionRepository
from conversa_api.repositories.role_permission_repository import RolePermissionRepository
from conversa_api.repositories.role_repository import RoleRepository
from conversa_api.repositories.user_repository import UserRepository
from conversa_api.repositories.user_role_repository import UserRoleRepository

logger = get_logger(__name__)

ROLES = {
    "admin": "Administrador do sistema",
    "user": "Usuário padrão",
    "guest": "Convidado (somente leitura)",
}

RESOURCES = ("user", "role", "permission", "conversation", "message")

USER_GRANTS = (("user", PermissionAction.READ), ("user", PermissionAction.UPDATE), ("role", PermissionAction.READ))
GUEST_GRANTS = (("user", PermissionAction.READ),)

DEFAULT_USERS = (
    ("Admin User", "admin@example.com", "admin123", "admin"),
    ("Regular User", "user@example.com", "user123", "user"),
)


def seed_roles(session: Session) -> dict[str, RoleModel]:
    repo = RoleRepository(session)
    out: dict[str, RoleModel] = {}
    for name, description in ROLES.items():
        role = repo.get_by_name(name)
        if role is None:
            role = repo.add(RoleModel(name=name, description=description))
        out[name] = role
    return out


def seed_permissions(session: Session) -> dict[tuple[str, str], PermissionModel]:
    repo = PermissionRepository(session)
    out: dict[tuple[str, str], PermissionModel] = {}
    for resource in RESOURCES:
        for action in PermissionAction:
            permission = repo.find_by_name_and_action(resource, action.value)
            if permission is None:
                permission = repo.add(
                    PermissionModel(name=resource, action=action.value, description=f"{action.value} {resource}")
                )
            out[(resource, action.value)] = permission
    return out


def seed_role_permissions(
    session: Session,
    roles: dict[str, RoleModel],
    permissions: dict[tuple[str, str], PermissionModel],
) -> None:
    repo = RolePermissionRepository(session)

    for permission in permissions.values():
        repo.attach(role_id=roles["admin"].id, permission_id=permission.id)

    for role_name, grants in (("user", USER_GRANTS), ("guest", GUEST_GRANTS)):
        for resource, action in grants:
            repo.attach(role_id=roles[role_name].id, permission_id=permissions[(resource, action.value)].id)


def seed_users(session: Session, roles: dict[str, RoleModel]) -> None:
    user_repo = UserRepository(session)
    user_role_repo = UserRoleRepository(session)
    hasher = PasswordHasher()

    for name, email, password, role_name in DEFAULT_USERS:
        user = user_repo.get_by_email(email)
        if user is None:
            user = user_repo.add(UserModel(name=name, email=email, password=hasher.hash_password(password)))
        user_role_repo.assign(user_id=user.id, role_id=roles[role_name].id)


def run_all_seeds(session: Session) -> None:
    logger.info("seeding_started")
    roles = seed_roles(session)
    permissions = seed_permissions(session)
    seed_role_permissions(session, roles, permissions)
    seed_users(session, roles)
    logger.info("seeding_finished", roles=len(roles), permissions=len(permissions))
