# conversa_api/infrastructure/security/password_hasher.py
import secrets
import string

from passlib.context import CryptContext

from conversa_api.config.settings import settings

_ALPHABET = string.ascii_letters + string.digits


class PasswordHasher:
    def __init__(self, *, rounds: int | None = None) -> None:
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds or settings.password_hash_rounds,
        )

    def hash_password(self, password: str) -> str:
        return self._context.hash(password)

    def verify_password(self, password: str, password_hash: str) -> bool:
        try:
            return self._context.verify(password, password_hash)
        except ValueError:
            # hash malformado no banco
            return False

    @staticmethod
    def generate_password(length: int | None = None) -> str:
        size = length or settings.reset_password_length
        return "".join(secrets.choice(_ALPHABET) for _ in range(size))
