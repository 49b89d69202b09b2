# conversa_api/api/middlewares/error_handler.py
import re
import traceback

from flask import Flask, jsonify
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

from conversa_api.config.settings import settings
from conversa_api.core.exceptions import AppError, ErrorKind, FieldError
from conversa_api.core.logging import get_logger

logger = get_logger(__name__)

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"

# postgres: 'Key (email)=(a@b.com) already exists.'
_PG_KEY_RE = re.compile(r"Key \(([^)]+)\)=")
# sqlite: 'UNIQUE constraint failed: users.email'
_SQLITE_UNIQUE_RE = re.compile(r"UNIQUE constraint failed: ([\w.]+)")


def _error_body(kind: ErrorKind, message: str, errors: list[FieldError] | None = None, err: Exception | None = None):
    body: dict = {"status": "erro", "message": message}
    if errors:
        body["errors"] = [e.to_dict() for e in errors]
    if err is not None and not settings.is_production:
        body["stack"] = "".join(traceback.format_exception(type(err), err, err.__traceback__))
    return body


def _integrity_to_app_error(err: IntegrityError) -> AppError | None:
    orig = err.orig
    pgcode = getattr(orig, "pgcode", None)
    text = str(orig)

    diag = getattr(orig, "diag", None)
    detail = getattr(diag, "message_detail", None) or text

    if pgcode == UNIQUE_VIOLATION or "UNIQUE constraint failed" in text:
        m = _PG_KEY_RE.search(detail) or _SQLITE_UNIQUE_RE.search(text)
        campo = m.group(1).split(".")[-1] if m else "registro"
        message = f"{campo} já está em uso"
        return AppError(message, kind=ErrorKind.CONFLICT, errors=[FieldError(campo, message)])

    if pgcode == FOREIGN_KEY_VIOLATION or "FOREIGN KEY constraint failed" in text:
        m = _PG_KEY_RE.search(detail)
        campo = m.group(1) if m else "registro relacionado"
        message = f"{campo} não existe"
        return AppError(message, kind=ErrorKind.CONFLICT, errors=[FieldError(campo, message)])

    return None


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AppError)
    def handle_app_error(err: AppError):
        kind = err.kind

        if kind is ErrorKind.INTERNAL:
            logger.error("app_error", message=err.message)
        elif kind in (ErrorKind.UNAUTHORIZED, ErrorKind.FORBIDDEN):
            logger.info("access_denied", status=kind.status_code, message=err.message)

        # stack só faz sentido para erros internos
        trace_for = err if kind is ErrorKind.INTERNAL else None
        return jsonify(_error_body(kind, err.message, err.errors, trace_for)), kind.status_code

    @app.errorhandler(PydanticValidationError)
    def handle_pydantic_error(err: PydanticValidationError):
        errors = [
            FieldError(campo=".".join(str(p) for p in e.get("loc", ())) or "body", mensagem=e.get("msg", ""))
            for e in err.errors()
        ]
        kind = ErrorKind.VALIDATION
        return jsonify(_error_body(kind, kind.default_message, errors)), kind.status_code

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        app_error = _integrity_to_app_error(err)
        if app_error is None:
            logger.exception("integrity_error")
            kind = ErrorKind.INTERNAL
            return jsonify(_error_body(kind, kind.default_message, None, err)), kind.status_code

        logger.info("integrity_conflict", message=app_error.message)
        return jsonify(_error_body(app_error.kind, app_error.message, app_error.errors)), app_error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        code = err.code or 500
        message = "Rota não encontrada" if code == 404 else (err.description or err.name)
        return jsonify({"status": "erro", "message": message}), code

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        logger.exception("unhandled_error", error=str(err))

        kind = ErrorKind.INTERNAL
        body = _error_body(kind, kind.default_message, None, err)
        if not settings.is_production:
            body["error"] = str(err)
        return jsonify(body), kind.status_code
