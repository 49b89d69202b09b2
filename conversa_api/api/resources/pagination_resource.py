# conversa_api/api/resources/pagination_resource.py
from typing import Any, Callable

from conversa_api.core.pagination import Page, PaginationMeta


class PaginationResource:
    @staticmethod
    def to_response(data: list[Any], pagination: PaginationMeta) -> dict:
        return {"data": data, "pagination": pagination.to_dict()}

    @classmethod
    def from_page(cls, page: Page, transform: Callable[[Any], Any]) -> dict:
        return cls.to_response([transform(item) for item in page.data], page.pagination)
