# conversa_api/api/schemas/pagination_schema.py
from typing import ClassVar, Literal

from pydantic import BaseModel, Field

from conversa_api.config.settings import settings
from conversa_api.core.pagination import PaginationParams


class PaginationQuery(BaseModel):
    # query string fica em snake_case (page, per_page, order_by, ...)
    page: int = Field(default=1, ge=1)
    per_page: int = Field(
        default=settings.pagination_default_per_page,
        ge=1,
        le=settings.pagination_max_per_page,
    )
    offset: int | None = Field(default=None, ge=0)
    search: str = ""
    order_by: str = "created_at"
    order_direction: Literal["asc", "desc"] = "desc"

    error_messages: ClassVar[dict] = {
        "page": "A página deve ser um número inteiro maior ou igual a 1",
        "per_page": f"per_page deve estar entre 1 e {settings.pagination_max_per_page}",
        "offset": "O offset deve ser um número inteiro maior ou igual a 0",
        "order_direction": "A direção da ordenação deve ser asc ou desc",
    }

    def to_params(self) -> PaginationParams:
        return PaginationParams(
            page=self.page,
            per_page=self.per_page,
            offset=self.offset,
            search=self.search,
            order_by=self.order_by,
            order_direction=self.order_direction,
        )
