from flask import Flask

from conversa_api.config.settings import settings


def configure_app(app: Flask) -> None:
    app.config["ENV"] = settings.environment
    app.config["DEBUG"] = settings.debug
    app.config["TESTING"] = settings.environment.lower() == "test"
    app.json.sort_keys = False
