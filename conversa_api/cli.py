# conversa_api/cli.py
import click
from flask import Flask

from conversa_api.infrastructure.database.base_model import BaseModel
from conversa_api.infrastructure.database.seeds import run_all_seeds
from conversa_api.infrastructure.database.session import db_session, get_engine

import conversa_api.infrastructure.database.models  # noqa: F401


def register_cli(app: Flask) -> None:
    @app.cli.command("init-db")
    def init_db():
        """Cria as tabelas que ainda não existem."""
        BaseModel.metadata.create_all(get_engine())
        click.echo("Tabelas criadas.")

    @app.cli.command("seed")
    def seed():
        """Popula papéis, permissões e usuários padrão."""
        with db_session() as session:
            run_all_seeds(session)
        click.echo("Seeds executados.")
