"""
Mensagens: acesso por criador ou participante, regras de edição/remoção,
confirmação de leitura e contagem de não lidas.
"""
import pytest


def _url(conversation_id: int, suffix: str = "") -> str:
    return f"/api/v1/conversations/{conversation_id}/messages{suffix}"


@pytest.fixture
def scenario(make_user, make_conversation, add_participant):
    owner = make_user(name="Dona")
    member = make_user(name="Membro")
    outsider = make_user(name="Fora")
    conv = make_conversation(owner)
    add_participant(conv, member)
    return owner, member, outsider, conv


def test_participant_can_send_and_list(client, scenario, auth_headers):
    owner, member, _, conv = scenario

    created = client.post(_url(conv.id), json={"content": "Olá, como você está?"}, headers=auth_headers(member))

    assert created.status_code == 201
    data = created.get_json()["data"]
    assert data["sender"]["id"] == member.id
    assert data["messageType"] == "text"
    assert data["readAt"] is None
    assert data["attachments"] == []

    listed = client.get(_url(conv.id), headers=auth_headers(owner))
    assert listed.status_code == 200
    assert [m["id"] for m in listed.get_json()["data"]] == [data["id"]]


def test_outsider_is_forbidden(client, scenario, make_message, auth_headers):
    owner, _, outsider, conv = scenario
    msg = make_message(conv, owner)

    for resp in (
        client.get(_url(conv.id), headers=auth_headers(outsider)),
        client.post(_url(conv.id), json={"content": "oi"}, headers=auth_headers(outsider)),
        client.get(_url(conv.id, f"/{msg.id}"), headers=auth_headers(outsider)),
        client.get(_url(conv.id, "/unread-count"), headers=auth_headers(outsider)),
    ):
        assert resp.status_code == 403
        assert resp.get_json()["message"] == "Você não tem acesso a esta conversa"


def test_message_with_attachments(client, scenario, auth_headers):
    owner, _, _, conv = scenario

    resp = client.post(
        _url(conv.id),
        json={
            "messageType": "file",
            "attachments": [{"fileUrl": "https://cdn.example.com/a.pdf", "fileType": "application/pdf", "fileSize": 1024}],
        },
        headers=auth_headers(owner),
    )

    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["content"] is None
    assert data["messageType"] == "file"
    assert data["attachments"][0]["fileUrl"] == "https://cdn.example.com/a.pdf"
    assert data["attachments"][0]["fileSize"] == 1024


def test_message_without_content_or_attachments_is_invalid(client, scenario, auth_headers):
    owner, _, _, conv = scenario

    resp = client.post(_url(conv.id), json={}, headers=auth_headers(owner))

    assert resp.status_code == 400
    assert resp.get_json()["errors"][0]["mensagem"] == "Conteúdo da mensagem é obrigatório"


def test_message_content_too_long(client, scenario, auth_headers):
    owner, _, _, conv = scenario

    resp = client.post(_url(conv.id), json={"content": "x" * 5001}, headers=auth_headers(owner))

    assert resp.status_code == 400
    assert resp.get_json()["errors"][0]["mensagem"] == "Conteúdo da mensagem deve ter no máximo 5000 caracteres"


def test_get_unknown_message(client, scenario, auth_headers):
    owner, _, _, conv = scenario

    resp = client.get(_url(conv.id, "/999"), headers=auth_headers(owner))

    assert resp.status_code == 404
    assert resp.get_json()["message"] == "Mensagem não encontrada"


def test_only_sender_can_edit(client, scenario, make_message, auth_headers):
    owner, member, _, conv = scenario
    msg = make_message(conv, member, content="original")

    by_owner = client.put(_url(conv.id, f"/{msg.id}"), json={"content": "editada"}, headers=auth_headers(owner))
    assert by_owner.status_code == 403
    assert by_owner.get_json()["message"] == "Você só pode editar suas próprias mensagens"

    by_sender = client.put(_url(conv.id, f"/{msg.id}"), json={"content": "editada"}, headers=auth_headers(member))
    assert by_sender.status_code == 200
    assert by_sender.get_json()["data"]["content"] == "editada"
    assert by_sender.get_json()["data"]["updatedAt"] is not None


def test_delete_by_sender_or_creator_only(client, make_user, scenario, add_participant, make_message, auth_headers):
    owner, member, _, conv = scenario
    other = make_user()
    add_participant(conv, other)

    msg_1 = make_message(conv, member)
    msg_2 = make_message(conv, member)

    by_other = client.delete(_url(conv.id, f"/{msg_1.id}"), headers=auth_headers(other))
    assert by_other.status_code == 403
    assert by_other.get_json()["message"] == "Você não tem permissão para deletar esta mensagem"

    assert client.delete(_url(conv.id, f"/{msg_1.id}"), headers=auth_headers(member)).status_code == 200
    assert client.delete(_url(conv.id, f"/{msg_2.id}"), headers=auth_headers(owner)).status_code == 200

    assert client.get(_url(conv.id), headers=auth_headers(owner)).get_json()["data"] == []


def test_mark_as_read_rejects_message_from_other_conversation(
    client, make_user, make_conversation, make_message, auth_headers
):
    owner = make_user()
    conv_1 = make_conversation(owner, title="Primeira")
    conv_2 = make_conversation(owner, title="Segunda")
    own_msg = make_message(conv_1, owner)
    foreign_msg = make_message(conv_2, owner)

    resp = client.post(
        _url(conv_1.id, "/mark-as-read"),
        json={"messageIds": [own_msg.id, foreign_msg.id]},
        headers=auth_headers(owner),
    )

    assert resp.status_code == 400
    assert "não encontrada nesta conversa" in resp.get_json()["message"]

    # nada foi marcado
    read_at = client.get(_url(conv_1.id, f"/{own_msg.id}"), headers=auth_headers(owner)).get_json()["data"]["readAt"]
    assert read_at is None


def test_mark_as_read_is_idempotent(client, scenario, make_message, auth_headers):
    owner, member, _, conv = scenario
    msg = make_message(conv, owner)

    for _ in range(2):
        resp = client.post(_url(conv.id, "/mark-as-read"), json={"messageIds": [msg.id]}, headers=auth_headers(member))
        assert resp.status_code == 200

    shown = client.get(_url(conv.id, f"/{msg.id}"), headers=auth_headers(member)).get_json()["data"]
    assert shown["readAt"] is not None


def test_unread_count_counts_own_sent_messages(client, scenario, make_message, auth_headers):
    owner, member, _, conv = scenario
    sent_by_owner = [make_message(conv, owner) for _ in range(3)]
    make_message(conv, member)

    client.post(
        _url(conv.id, "/mark-as-read"), json={"messageIds": [sent_by_owner[0].id]}, headers=auth_headers(member)
    )

    owner_count = client.get(_url(conv.id, "/unread-count"), headers=auth_headers(owner))
    member_count = client.get(_url(conv.id, "/unread-count"), headers=auth_headers(member))

    assert owner_count.get_json()["data"] == {"unreadCount": 2}
    assert member_count.get_json()["data"] == {"unreadCount": 1}


def test_list_messages_pagination(client, scenario, make_message, auth_headers):
    owner, _, _, conv = scenario
    for i in range(5):
        make_message(conv, owner, content=f"m{i}")

    resp = client.get(_url(conv.id, "?per_page=2&page=3"), headers=auth_headers(owner))

    body = resp.get_json()
    assert len(body["data"]) == 1
    assert body["pagination"]["total"] == 5
    assert body["pagination"]["total_pages"] == 3
    assert body["pagination"]["has_next_page"] is False
    assert body["pagination"]["has_previous_page"] is True
