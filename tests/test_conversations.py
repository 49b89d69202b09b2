"""
Conversas: CRUD restrito ao criador, paginação e participantes.
"""
API = "/api/v1/conversations"


def test_create_conversation(client, make_user, auth_headers):
    user_a = make_user()

    resp = client.post(API, json={"title": "Conversa de teste"}, headers=auth_headers(user_a))

    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["title"] == "Conversa de teste"
    assert data["createdBy"]["id"] == user_a.id
    assert data["createdBy"]["email"] == user_a.email
    assert "password" not in data["createdBy"]


def test_create_conversation_requires_title(client, make_user, auth_headers):
    resp = client.post(API, json={"title": ""}, headers=auth_headers(make_user()))

    assert resp.status_code == 400
    assert resp.get_json()["errors"] == [{"campo": "title", "mensagem": "Título é obrigatório"}]


def test_create_conversation_requires_auth(client):
    resp = client.post(API, json={"title": "x"})

    assert resp.status_code == 401


def test_non_participant_gets_404_then_participant_reads_messages(client, make_user, auth_headers):
    user_a = make_user()
    user_b = make_user()

    created = client.post(API, json={"title": "Conversa de teste"}, headers=auth_headers(user_a))
    conv_id = created.get_json()["data"]["id"]

    assert client.get(f"{API}/{conv_id}", headers=auth_headers(user_b)).status_code == 404

    added = client.post(
        f"{API}/{conv_id}/participants", json={"userIds": [user_b.id]}, headers=auth_headers(user_a)
    )
    assert added.status_code == 201

    messages = client.get(f"{API}/{conv_id}/messages", headers=auth_headers(user_b))
    assert messages.status_code == 200


def test_index_lists_only_own_conversations_with_pagination(client, make_user, make_conversation, auth_headers):
    user_a = make_user()
    user_b = make_user()
    for i in range(3):
        make_conversation(user_a, title=f"A{i}")
    make_conversation(user_b, title="B0")

    resp = client.get(f"{API}?per_page=2&page=1", headers=auth_headers(user_a))

    assert resp.status_code == 200
    body = resp.get_json()
    assert len(body["data"]) == 2
    assert body["pagination"] == {
        "total": 3,
        "page": 1,
        "per_page": 2,
        "total_pages": 2,
        "has_next_page": True,
        "has_previous_page": False,
    }


def test_index_search_and_order_by_title(client, make_user, make_conversation, auth_headers):
    user = make_user()
    make_conversation(user, title="Projeto beta")
    make_conversation(user, title="Projeto alfa")
    make_conversation(user, title="Outro assunto")

    resp = client.get(
        f"{API}?search=projeto&order_by=title&order_direction=asc", headers=auth_headers(user)
    )

    titles = [c["title"] for c in resp.get_json()["data"]]
    assert titles == ["Projeto alfa", "Projeto beta"]


def test_index_rejects_invalid_pagination(client, make_user, auth_headers):
    resp = client.get(f"{API}?page=0&order_direction=up", headers=auth_headers(make_user()))

    assert resp.status_code == 400
    campos = {e["campo"] for e in resp.get_json()["errors"]}
    assert campos == {"page", "order_direction"}


def test_update_and_delete_are_creator_only(client, make_user, make_conversation, add_participant, auth_headers):
    owner = make_user()
    participant = make_user()
    conv = make_conversation(owner)
    add_participant(conv, participant)

    update = client.put(f"{API}/{conv.id}", json={"title": "Novo"}, headers=auth_headers(participant))
    delete = client.delete(f"{API}/{conv.id}", headers=auth_headers(participant))
    assert update.status_code == 404
    assert update.get_json()["message"] == "Conversa não encontrada"
    assert delete.status_code == 404

    update = client.put(f"{API}/{conv.id}", json={"title": "Novo"}, headers=auth_headers(owner))
    assert update.status_code == 200
    assert update.get_json()["data"]["title"] == "Novo"


def test_deleted_conversation_disappears(client, make_user, make_conversation, make_message, auth_headers):
    owner = make_user()
    conv = make_conversation(owner)
    make_message(conv, owner)

    assert client.delete(f"{API}/{conv.id}", headers=auth_headers(owner)).status_code == 200

    assert client.get(f"{API}/{conv.id}", headers=auth_headers(owner)).status_code == 404
    assert client.get(API, headers=auth_headers(owner)).get_json()["pagination"]["total"] == 0
    # mensagens somem junto
    assert client.get(f"{API}/{conv.id}/messages", headers=auth_headers(owner)).status_code == 403


def test_add_participants_twice_is_rejected_without_duplicates(client, make_user, make_conversation, auth_headers):
    owner = make_user()
    user_b = make_user()
    user_c = make_user()
    conv = make_conversation(owner)

    first = client.post(f"{API}/{conv.id}/participants", json={"userIds": [user_b.id]}, headers=auth_headers(owner))
    assert first.status_code == 201

    second = client.post(
        f"{API}/{conv.id}/participants", json={"userIds": [user_b.id, user_c.id]}, headers=auth_headers(owner)
    )
    assert second.status_code == 400
    assert second.get_json()["message"] == f"Usuários já são participantes desta conversa: {user_b.id}"

    participants = client.get(f"{API}/{conv.id}/participants", headers=auth_headers(owner)).get_json()["data"]
    assert [p["user"]["id"] for p in participants] == [user_b.id]


def test_add_unknown_participant(client, make_user, make_conversation, auth_headers):
    owner = make_user()
    conv = make_conversation(owner)

    resp = client.post(f"{API}/{conv.id}/participants", json={"userIds": [4242]}, headers=auth_headers(owner))

    assert resp.status_code == 404


def test_add_participants_requires_ids(client, make_user, make_conversation, auth_headers):
    owner = make_user()
    conv = make_conversation(owner)

    resp = client.post(f"{API}/{conv.id}/participants", json={"userIds": []}, headers=auth_headers(owner))

    assert resp.status_code == 400
    assert resp.get_json()["errors"][0]["mensagem"] == "Pelo menos um usuário deve ser informado"


def test_remove_participant(client, make_user, make_conversation, add_participant, auth_headers):
    owner = make_user()
    member = make_user()
    conv = make_conversation(owner)
    add_participant(conv, member)

    removed = client.delete(f"{API}/{conv.id}/participants/{member.id}", headers=auth_headers(owner))
    assert removed.status_code == 200

    again = client.delete(f"{API}/{conv.id}/participants/{member.id}", headers=auth_headers(owner))
    assert again.status_code == 404
    assert again.get_json()["message"] == "Participante não encontrado"

    assert client.get(f"{API}/{conv.id}/messages", headers=auth_headers(member)).status_code == 403
