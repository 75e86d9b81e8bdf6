from __future__ import annotations

from typing import Any

from sqlalchemy import BigInteger, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.crm.models import Base

NAME_MAX_LENGTH = 40

# 64-bit ids; SQLite only autoincrements a column declared INTEGER.
IdType = BigInteger().with_variant(Integer, "sqlite")
ID_MIN = -(2**63)
ID_MAX = 2**63 - 1


class Customer(Base):
    __tablename__ = "customers"
    __table_args__ = (
        Index("idx_customers_name", "name"),
    )

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)

    def __init__(self, name: str | None = None, **kwargs: Any) -> None:
        super().__init__(name=name, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}

    def __repr__(self) -> str:
        return f"Customer(id={self.id!r}, name={self.name!r})"
