"""
Papéis, permissões e vínculos, todos protegidos por permissão.
"""
from conversa_api.core.enums import PermissionAction

API = "/api/v1"

ADMIN_GRANTS = (
    ("role", PermissionAction.CREATE),
    ("role", PermissionAction.READ),
    ("role", PermissionAction.UPDATE),
    ("role", PermissionAction.DELETE),
    ("permission", PermissionAction.CREATE),
    ("permission", PermissionAction.READ),
    ("permission", PermissionAction.UPDATE),
    ("permission", PermissionAction.DELETE),
)


def _admin(make_user, grant):
    admin = make_user(name="Admin")
    grant(admin, *ADMIN_GRANTS, role_name="admin")
    return admin


def test_user_without_roles_is_forbidden(client, make_user, make_permission, auth_headers):
    make_permission("role", PermissionAction.READ)
    user = make_user()

    resp = client.get(f"{API}/roles", headers=auth_headers(user))

    assert resp.status_code == 403
    assert resp.get_json()["message"] == "Usuário não possui nenhum papel atribuído"


def test_user_without_permission_is_forbidden(client, make_user, grant, make_permission, auth_headers):
    make_permission("role", PermissionAction.CREATE)
    user = make_user()
    grant(user, ("role", PermissionAction.READ))

    resp = client.post(f"{API}/roles", json={"name": "editor", "description": "Editor"}, headers=auth_headers(user))

    assert resp.status_code == 403
    assert resp.get_json()["message"] == "Usuário não tem permissão para realizar esta ação"


def test_missing_permission_row_is_forbidden(client, make_user, grant, auth_headers):
    user = make_user()
    grant(user, ("role", PermissionAction.READ))

    resp = client.delete(f"{API}/roles/1", headers=auth_headers(user))

    assert resp.status_code == 403
    assert resp.get_json()["message"] == "Permissão role:delete não encontrada no sistema"


def test_role_crud(client, make_user, grant, auth_headers):
    headers = auth_headers(_admin(make_user, grant))

    created = client.post(f"{API}/roles", json={"name": "editor", "description": "Editor"}, headers=headers)
    assert created.status_code == 201
    role_id = created.get_json()["data"]["id"]

    duplicate = client.post(f"{API}/roles", json={"name": "editor", "description": "Outro"}, headers=headers)
    assert duplicate.status_code == 409

    listed = client.get(f"{API}/roles/all", headers=headers).get_json()["data"]
    assert {"admin", "editor"} <= {r["name"] for r in listed}

    updated = client.put(f"{API}/roles/{role_id}", json={"description": "Edita coisas"}, headers=headers)
    assert updated.get_json()["data"]["description"] == "Edita coisas"

    assert client.delete(f"{API}/roles/{role_id}", headers=headers).status_code == 200
    missing = client.get(f"{API}/roles/{role_id}", headers=headers)
    assert missing.status_code == 404
    assert missing.get_json()["message"] == "Papel não encontrado"


def test_permission_crud_and_listing(client, make_user, grant, auth_headers):
    headers = auth_headers(_admin(make_user, grant))

    created = client.post(
        f"{API}/permissions", json={"name": "conversation", "action": "read"}, headers=headers
    )
    assert created.status_code == 201
    permission_id = created.get_json()["data"]["id"]

    duplicate = client.post(f"{API}/permissions", json={"name": "conversation", "action": "read"}, headers=headers)
    assert duplicate.status_code == 409
    assert duplicate.get_json()["message"] == "Permissão conversation:read já existe"

    invalid = client.post(f"{API}/permissions", json={"name": "conversation", "action": "fly"}, headers=headers)
    assert invalid.status_code == 400
    assert invalid.get_json()["errors"][0]["campo"] == "action"

    page = client.get(f"{API}/permissions?search=conver", headers=headers).get_json()
    assert [p["id"] for p in page["data"]] == [permission_id]
    assert page["pagination"]["total"] == 1

    updated = client.put(f"{API}/permissions/{permission_id}", json={"action": "update"}, headers=headers)
    assert updated.get_json()["data"]["action"] == "update"

    assert client.delete(f"{API}/permissions/{permission_id}", headers=headers).status_code == 200
    assert client.get(f"{API}/permissions/{permission_id}", headers=headers).status_code == 404


def test_attach_and_detach_takes_effect_on_next_request(client, make_user, grant, auth_headers):
    admin = _admin(make_user, grant)
    user = make_user()
    user_role = grant(user, role_name="leitor")
    headers = auth_headers(admin)

    permissions = client.get(f"{API}/permissions?per_page=100", headers=headers).get_json()["data"]
    role_read = next(p for p in permissions if p["name"] == "role" and p["action"] == "read")

    assert client.get(f"{API}/roles", headers=auth_headers(user)).status_code == 403

    attach = {"roleId": user_role.id, "permissionId": role_read["id"]}
    assert client.post(f"{API}/roles-permissions/attach", json=attach, headers=headers).status_code == 200
    # idempotente
    assert client.post(f"{API}/roles-permissions/attach", json=attach, headers=headers).status_code == 200

    attached = client.get(f"{API}/roles-permissions/{user_role.id}/all", headers=headers).get_json()["data"]
    assert [p["id"] for p in attached] == [role_read["id"]]

    assert client.get(f"{API}/roles", headers=auth_headers(user)).status_code == 200

    assert client.post(f"{API}/roles-permissions/detach", json=attach, headers=headers).status_code == 200
    assert client.get(f"{API}/roles", headers=auth_headers(user)).status_code == 403


def test_attach_unknown_role(client, make_user, grant, auth_headers):
    headers = auth_headers(_admin(make_user, grant))

    resp = client.post(f"{API}/roles-permissions/attach", json={"roleId": 999, "permissionId": 1}, headers=headers)

    assert resp.status_code == 404


def test_assign_and_revoke_user_roles(client, make_user, grant, auth_headers):
    admin = _admin(make_user, grant)
    headers = auth_headers(admin)
    user = make_user()

    role = client.post(f"{API}/roles", json={"name": "suporte", "description": "Suporte"}, headers=headers)
    role_id = role.get_json()["data"]["id"]

    assert client.post(f"{API}/users/{user.id}/roles", json={"roleId": role_id}, headers=headers).status_code == 200
    roles = client.get(f"{API}/users/{user.id}/roles", headers=headers).get_json()["data"]
    assert [r["name"] for r in roles] == ["suporte"]

    assert client.delete(f"{API}/users/{user.id}/roles/{role_id}", headers=headers).status_code == 200
    again = client.delete(f"{API}/users/{user.id}/roles/{role_id}", headers=headers)
    assert again.status_code == 404
    assert again.get_json()["message"] == "Usuário não possui este papel"


def test_deleting_role_removes_its_links(client, make_user, grant, auth_headers):
    admin = _admin(make_user, grant)
    headers = auth_headers(admin)
    user = make_user()
    role = grant(user, ("role", PermissionAction.READ), role_name="temporario")

    assert client.get(f"{API}/roles", headers=auth_headers(user)).status_code == 200
    assert client.delete(f"{API}/roles/{role.id}", headers=headers).status_code == 200

    resp = client.get(f"{API}/roles", headers=auth_headers(user))
    assert resp.status_code == 403
    assert resp.get_json()["message"] == "Usuário não possui nenhum papel atribuído"
