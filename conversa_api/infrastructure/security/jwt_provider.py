# conversa_api/infrastructure/security/jwt_provider.py

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt

from conversa_api.config.settings import settings
from conversa_api.core.exceptions import UnauthorizedError

ACCESS = "access"
INVALID_TOKEN = "Token inválido"


class JwtProvider:
    """Emite e valida tokens HS256; `sub` é o id numérico do usuário."""

    def __init__(self) -> None:
        self._secret = settings.jwt_secret
        self._issuer = settings.jwt_issuer
        self._audience = settings.jwt_audience
        self._algorithm = "HS256"

    @property
    def access_minutes(self) -> int:
        return settings.jwt_access_minutes

    def issue_token(self, *, subject: str, payload: dict, minutes: int, token_type: str) -> str:
        now = datetime.now(tz=timezone.utc)

        claims = {
            **payload,
            "iss": self._issuer,
            "aud": self._audience,
            "sub": str(subject),
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(minutes=minutes)).timestamp()),
            "jti": uuid4().hex,
            "typ": token_type,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def issue_access_token(self, *, subject: str, payload: dict | None = None, minutes: int = 0) -> str:
        ttl = minutes if minutes and minutes > 0 else self.access_minutes
        return self.issue_token(subject=subject, payload=payload or {}, minutes=ttl, token_type=ACCESS)

    def decode(self, token: str) -> dict:
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
                options={"require": ["exp", "iat", "sub", "typ"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise UnauthorizedError("Token expirado") from e
        except jwt.InvalidTokenError as e:
            raise UnauthorizedError(INVALID_TOKEN) from e

    def decode_access(self, token: str) -> tuple[int, dict]:
        """Valida um access token e devolve (user_id, claims)."""
        claims = self.decode(token)
        if claims.get("typ") != ACCESS:
            raise UnauthorizedError(INVALID_TOKEN)

        sub = str(claims["sub"])
        if not sub.isdigit():
            raise UnauthorizedError(INVALID_TOKEN)
        return int(sub), claims
