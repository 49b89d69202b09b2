# conversa_api/api/schemas/_base.py
from typing import ClassVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Modelo com nomes camelCase no JSON (entrada e saída)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)


class RequestModel(CamelModel):
    # mensagens em português por campo (wire name) ou (campo, tipo do erro)
    error_messages: ClassVar[dict] = {}
