# conversa_api/infrastructure/database/session.py

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from conversa_api.config.settings import settings


def _build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        # sqlite (execução local / testes): uma única conexão compartilhada
        engine = create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, _record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(
        url,
        echo=settings.debug,
        pool_pre_ping=True,
    )


_engine = _build_engine(settings.database_url)

_SessionLocal = sessionmaker(
    bind=_engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
)


def get_engine() -> Engine:
    return _engine


@contextmanager
def db_session() -> Iterator[Session]:
    session: Session = _SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
