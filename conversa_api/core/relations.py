# conversa_api/core/relations.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ref:
    """Relação ainda não carregada: só a chave estrangeira."""

    id: int


@dataclass(frozen=True)
class Resolved(Generic[T]):
    """Relação já carregada (ex.: veio de um join)."""

    entity: T


Relation = Union[Ref, Resolved[T], None]
Loader = Callable[[int], Optional[T]]
Transformer = Callable[[T], Any]


def resolve_relation(value: Relation, loader: Loader, transform: Transformer) -> Any | None:
    if value is None:
        return None

    if isinstance(value, Resolved):
        return transform(value.entity)

    if isinstance(value, Ref):
        entity = loader(value.id)
        return transform(entity) if entity is not None else None

    raise TypeError(f"Relação inválida: {type(value).__name__}")


def resolve_relations(values: list[Relation] | None, loader: Loader, transform: Transformer) -> list[Any]:
    if not values:
        return []
    resolved = (resolve_relation(v, loader, transform) for v in values)
    return [r for r in resolved if r is not None]


def relation_of(entity: T | None, fk: int | None) -> Relation:
    """Monta a relação a partir do que estiver disponível (entidade carregada vence)."""
    if entity is not None:
        return Resolved(entity)
    if fk is not None:
        return Ref(int(fk))
    return None
