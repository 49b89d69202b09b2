# conversa_api/services/auth_service.py
from __future__ import annotations

from dataclasses import dataclass

from conversa_api.core.exceptions import BadRequestError, ConflictError, NotFoundError, UnauthorizedError
from conversa_api.core.logging import get_logger
from conversa_api.infrastructure.database.models.user_model import UserModel
from conversa_api.infrastructure.security.jwt_provider import JwtProvider
from conversa_api.infrastructure.security.password_hasher import PasswordHasher
from conversa_api.repositories.user_repository import UserRepository

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Credenciais inválidas"


@dataclass(frozen=True)
class LoginResult:
    user: UserModel
    access_token: str
    expires_in: int  # minutos


@dataclass(frozen=True)
class ResetPasswordResult:
    user: UserModel
    new_password: str


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    def __init__(
        self,
        *,
        user_repo: UserRepository,
        hasher: PasswordHasher,
        jwt_provider: JwtProvider,
    ) -> None:
        self._user_repo = user_repo
        self._hasher = hasher
        self._jwt = jwt_provider

    def register(self, *, name: str, email: str, password: str) -> UserModel:
        email = _normalize_email(email)
        if self._user_repo.get_by_email(email) is not None:
            raise ConflictError("Email já está em uso")

        user = self._user_repo.add(
            UserModel(
                name=name.strip(),
                email=email,
                password=self._hasher.hash_password(password),
            )
        )
        logger.info("user_registered", user_id=user.id)
        return user

    def login(self, *, email: str, password: str) -> LoginResult:
        user = self._user_repo.get_by_email(_normalize_email(email))

        # mesma mensagem para email desconhecido e senha errada
        if user is None or not self._hasher.verify_password(password, user.password):
            logger.info("login_failed", reason="invalid_credentials")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        token = self._jwt.issue_access_token(subject=str(user.id))
        logger.info("login_succeeded", user_id=user.id)
        return LoginResult(user=user, access_token=token, expires_in=self._jwt.access_minutes)

    def me(self, user_id: int) -> UserModel:
        user = self._user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("Usuário não encontrado")
        return user

    def reset_password(self, *, email: str) -> ResetPasswordResult:
        user = self._user_repo.get_by_email(_normalize_email(email))
        if user is None:
            raise NotFoundError("Usuário não encontrado")

        new_password = self._hasher.generate_password()
        self._user_repo.update_password(user, self._hasher.hash_password(new_password))

        # a senha em texto puro só existe nesta resposta
        logger.warning("password_reset", user_id=user.id)
        return ResetPasswordResult(user=user, new_password=new_password)

    def change_password(self, *, user_id: int, current_password: str, new_password: str) -> UserModel:
        user = self.me(user_id)

        if not self._hasher.verify_password(current_password, user.password):
            raise UnauthorizedError("Senha atual incorreta")

        self._user_repo.update_password(user, self._hasher.hash_password(new_password))
        logger.info("password_changed", user_id=user.id)
        return user

    def update_profile(
        self,
        *,
        user_id: int,
        name: str | None = None,
        current_password: str | None = None,
        new_password: str | None = None,
    ) -> UserModel:
        if bool(current_password) != bool(new_password):
            raise BadRequestError(
                "Para alterar a senha, tanto a senha atual quanto a nova senha são obrigatórias"
            )
        if not name and not new_password:
            raise BadRequestError("Pelo menos um campo deve ser fornecido para atualização")

        if new_password:
            user = self.change_password(
                user_id=user_id, current_password=current_password, new_password=new_password
            )
        else:
            user = self.me(user_id)

        if name:
            user.name = name.strip()
        return user
