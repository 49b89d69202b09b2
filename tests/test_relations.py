from dataclasses import dataclass

import pytest

from conversa_api.core.relations import Ref, Resolved, relation_of, resolve_relation, resolve_relations


@dataclass
class User:
    id: int
    name: str


USERS = {1: User(1, "Ana"), 2: User(2, "Bia")}


class CountingLoader:
    def __init__(self):
        self.calls = []

    def __call__(self, user_id):
        self.calls.append(user_id)
        return USERS.get(user_id)


def _name(user: User) -> str:
    return user.name


def test_resolved_does_not_hit_loader():
    loader = CountingLoader()

    assert resolve_relation(Resolved(USERS[1]), loader, _name) == "Ana"
    assert loader.calls == []


def test_ref_is_loaded():
    loader = CountingLoader()

    assert resolve_relation(Ref(2), loader, _name) == "Bia"
    assert loader.calls == [2]


def test_missing_ref_and_none():
    loader = CountingLoader()

    assert resolve_relation(Ref(99), loader, _name) is None
    assert resolve_relation(None, loader, _name) is None


def test_invalid_relation_type():
    with pytest.raises(TypeError):
        resolve_relation(1, CountingLoader(), _name)


def test_resolve_relations_skips_missing():
    values = [Ref(1), Resolved(USERS[2]), Ref(42)]

    assert resolve_relations(values, CountingLoader(), _name) == ["Ana", "Bia"]
    assert resolve_relations(None, CountingLoader(), _name) == []


def test_relation_of_prefers_loaded_entity():
    assert relation_of(USERS[1], 1) == Resolved(USERS[1])
    assert relation_of(None, 2) == Ref(2)
    assert relation_of(None, None) is None
