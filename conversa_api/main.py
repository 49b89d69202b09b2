# conversa_api/main.py
from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from conversa_api.api.middlewares.error_handler import register_error_handlers
from conversa_api.api.realtime.socket_handlers import register_socket_handlers
from conversa_api.api.routes import register_routes
from conversa_api.cli import register_cli
from conversa_api.config.flask_config import configure_app
from conversa_api.config.settings import settings
from conversa_api.core.logging import configure_logging
from conversa_api.infrastructure.realtime.socketio_server import socketio

import conversa_api.infrastructure.database.models  # noqa: F401

_socket_handlers_registered = False


def create_app() -> Flask:
    global _socket_handlers_registered

    configure_logging()

    app = Flask(__name__)

    # CORS aplicado cedo (antes das rotas lidarem com OPTIONS)
    CORS(
        app,
        resources={rf"{settings.api_prefix}/*": {"origins": settings.cors_origins}},
        allow_headers=["Content-Type", "Authorization"],
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    )

    configure_app(app)

    register_routes(app, api_prefix=settings.api_prefix)
    register_error_handlers(app)
    register_cli(app)

    socketio.init_app(app)
    # o servidor socketio é global: handlers só uma vez por processo
    if not _socket_handlers_registered:
        register_socket_handlers()
        _socket_handlers_registered = True

    return app


if __name__ == "__main__":
    app = create_app()
    socketio.run(app, host="0.0.0.0", port=5000, debug=settings.debug, allow_unsafe_werkzeug=True)
