# conversa_api/core/pagination.py
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from conversa_api.config.settings import settings

T = TypeVar("T")

ORDER_DIRECTIONS = ("asc", "desc")


@dataclass(frozen=True)
class PaginationParams:
    page: int = 1
    per_page: int = field(default_factory=lambda: settings.pagination_default_per_page)
    offset: int | None = None
    search: str = ""
    order_by: str = "created_at"
    order_direction: str = "desc"

    @property
    def effective_offset(self) -> int:
        # offset explícito (inclusive 0) tem prioridade sobre a página
        if self.offset is not None:
            return self.offset
        return (self.page - 1) * self.per_page

    @property
    def has_search(self) -> bool:
        return bool(self.search and self.search.strip())

    @property
    def ascending(self) -> bool:
        return self.order_direction == "asc"


@dataclass(frozen=True)
class PaginationMeta:
    total: int
    page: int
    per_page: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def build(cls, *, total: int, page: int, per_page: int) -> "PaginationMeta":
        total_pages = math.ceil(total / per_page) if per_page > 0 else 0
        return cls(
            total=total,
            page=page,
            per_page=per_page,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_previous_page=page > 1,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "page": self.page,
            "per_page": self.per_page,
            "total_pages": self.total_pages,
            "has_next_page": self.has_next_page,
            "has_previous_page": self.has_previous_page,
        }


@dataclass(frozen=True)
class Page(Generic[T]):
    data: list[T]
    pagination: PaginationMeta


def paginate(session: Session, stmt: Select, params: PaginationParams, order_column) -> Page:
    """
    Executa `stmt` paginado.

    O total é calculado com count(*) sobre o mesmo statement filtrado,
    depois a página é buscada com limit/offset/order_by.
    """
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = int(session.execute(count_stmt).scalar_one())

    order = order_column.asc() if params.ascending else order_column.desc()
    page_stmt = stmt.order_by(order).limit(params.per_page).offset(params.effective_offset)
    result = session.execute(page_stmt)

    # select(Model) -> entidades; select(Model, Other) -> tuplas
    if len(page_stmt.column_descriptions) == 1:
        rows = list(result.scalars().all())
    else:
        rows = [tuple(r) for r in result.all()]

    meta = PaginationMeta.build(total=total, page=params.page, per_page=params.per_page)
    return Page(data=rows, pagination=meta)
