from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from conversa_api.infrastructure.database.base_model import BaseModel
from conversa_api.infrastructure.database.models._mixins import TimestampMixin


class PermissionModel(TimestampMixin, BaseModel):
    __tablename__ = "permissions"
    __table_args__ = (UniqueConstraint("name", "action"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    # create | read | update | delete
    action: Mapped[str] = mapped_column(String(20), nullable=False)
