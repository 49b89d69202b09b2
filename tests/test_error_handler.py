"""
Envelope de erro central, exercitado com um app Flask mínimo.
"""
import pytest
from flask import Flask
from pydantic import BaseModel

from conversa_api.api.middlewares.error_handler import register_error_handlers
from conversa_api.core.exceptions import (
    AppError,
    ConflictError,
    ErrorKind,
    FieldError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from conversa_api.infrastructure.database.models.user_model import UserModel
from conversa_api.infrastructure.database.session import db_session


class _Payload(BaseModel):
    quantidade: int


@pytest.fixture
def error_client():
    app = Flask("error-handler-test")
    register_error_handlers(app)

    @app.get("/not-found")
    def not_found():
        raise NotFoundError("Conversa não encontrada")

    @app.get("/forbidden")
    def forbidden():
        raise ForbiddenError()

    @app.get("/validation")
    def validation():
        raise ValidationError("Erro de validação", errors=[FieldError("title", "Título é obrigatório")])

    @app.get("/internal")
    def internal():
        raise AppError("falhou", kind=ErrorKind.INTERNAL)

    @app.get("/pydantic")
    def pydantic_error():
        _Payload.model_validate({"quantidade": "muitos"})

    @app.get("/duplicate")
    def duplicate():
        with db_session() as session:
            session.add(UserModel(name="A", email="same@example.com", password="x"))
            session.flush()
            session.add(UserModel(name="B", email="same@example.com", password="x"))
            session.flush()

    @app.get("/boom")
    def boom():
        raise RuntimeError("quebrou")

    return app.test_client()


def test_app_error_envelope(error_client):
    resp = error_client.get("/not-found")

    assert resp.status_code == 404
    assert resp.get_json() == {"status": "erro", "message": "Conversa não encontrada"}


def test_default_message_comes_from_kind(error_client):
    resp = error_client.get("/forbidden")

    assert resp.status_code == 403
    assert resp.get_json()["message"] == ErrorKind.FORBIDDEN.default_message


def test_validation_errors_are_listed(error_client):
    resp = error_client.get("/validation")

    assert resp.status_code == 400
    assert resp.get_json()["errors"] == [{"campo": "title", "mensagem": "Título é obrigatório"}]


def test_internal_app_error_has_stack_outside_production(error_client):
    resp = error_client.get("/internal")

    assert resp.status_code == 500
    assert "stack" in resp.get_json()


def test_escaped_pydantic_error(error_client):
    resp = error_client.get("/pydantic")

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["message"] == "Erro de validação"
    assert body["errors"][0]["campo"] == "quantidade"


def test_unique_violation_becomes_conflict(error_client):
    resp = error_client.get("/duplicate")

    assert resp.status_code == 409
    assert resp.get_json()["message"] == "email já está em uso"


def test_unknown_route(error_client):
    resp = error_client.get("/nao-existe")

    assert resp.status_code == 404
    assert resp.get_json() == {"status": "erro", "message": "Rota não encontrada"}


def test_unexpected_error_is_500(error_client):
    resp = error_client.get("/boom")

    assert resp.status_code == 500
    body = resp.get_json()
    assert body["message"] == "Erro interno do servidor"
    assert body["error"] == "quebrou"
    assert "stack" in body


def test_conflict_error_status():
    assert ConflictError("x").status_code == 409
