# conversa_api/config/settings.py
import os
from urllib.parse import quote_plus
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    # 🔵 Banco principal (PostgreSQL)
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "conversa"
    db_user: str = "postgres"
    db_password: str = ""
    db_ssl: bool = False

    # URL completa do SQLAlchemy (ex.: sqlite em testes); tem prioridade
    db_url: str | None = None

    environment: str = "development"
    debug: bool = True

    api_prefix: str = "/api/v1"
    cors_origins_raw: str = os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://localhost:5173,http://127.0.0.1:5173",
    )

    jwt_secret: str = os.getenv("JWT_SECRET", "dev-secret-change-me")
    jwt_access_minutes: int = int(os.getenv("JWT_ACCESS_MINUTES", "60"))
    jwt_issuer: str = os.getenv("JWT_ISSUER", "conversa-api")
    jwt_audience: str = os.getenv("JWT_AUDIENCE", "conversa-front")

    password_hash_rounds: int = 10
    reset_password_length: int = 8

    pagination_default_per_page: int = 10
    pagination_max_per_page: int = 100

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("db_host", "db_name", "db_user", "db_password", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            return v.strip().strip('"').strip("'")
        return v

    @property
    def database_url(self) -> str:
        if self.db_url:
            return self.db_url

        user = quote_plus(self.db_user)
        password = quote_plus(self.db_password)
        url = f"postgresql+psycopg2://{user}:{password}@{self.db_host}:{self.db_port}/{self.db_name}"
        if self.db_ssl:
            url += "?sslmode=require"
        return url

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins_raw.split(",") if o.strip()]


settings = Settings()
