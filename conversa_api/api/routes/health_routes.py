# conversa_api/api/routes/health_routes.py
from datetime import datetime, timezone

from flask import Blueprint, jsonify
from sqlalchemy import text

from conversa_api.config.settings import settings
from conversa_api.infrastructure.database.session import db_session

bp_health = Blueprint("health", __name__, url_prefix="/health")


def _status(**extra) -> dict:
    return {
        "status": "ok",
        "environment": settings.environment,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        **extra,
    }


@bp_health.get("")
def health():
    return jsonify(_status()), 200


@bp_health.get("/db")
def health_db():
    with db_session() as session:
        session.execute(text("SELECT 1"))
    return jsonify(_status(database="ok")), 200
