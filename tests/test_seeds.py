from sqlalchemy import func, select

from conversa_api.infrastructure.database.models.permission_model import PermissionModel
from conversa_api.infrastructure.database.models.role_model import RoleModel
from conversa_api.infrastructure.database.models.user_model import UserModel
from conversa_api.infrastructure.database.session import db_session


def _count(model) -> int:
    with db_session() as session:
        return int(session.execute(select(func.count()).select_from(model)).scalar_one())


def test_seed_command_is_idempotent(app):
    runner = app.test_cli_runner()

    first = runner.invoke(args=["seed"])
    second = runner.invoke(args=["seed"])

    assert first.exit_code == 0, first.output
    assert second.exit_code == 0, second.output
    assert _count(RoleModel) == 3
    assert _count(PermissionModel) == 20
    assert _count(UserModel) == 2


def test_seeded_admin_can_log_in_and_manage_roles(app, client):
    app.test_cli_runner().invoke(args=["seed"])

    login = client.post("/api/v1/auth/login", json={"email": "admin@example.com", "password": "admin123"})
    assert login.status_code == 200
    token = login.get_json()["data"]["token"]["accessToken"]

    resp = client.get("/api/v1/roles", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert {r["name"] for r in resp.get_json()["data"]} == {"admin", "user", "guest"}
