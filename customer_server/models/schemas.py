from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Customer(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    address: str
    paid: bool
    id: int

    def __str__(self) -> str:
        return f"Customer(id={self.id}, name='{self.name}', address='{self.address}', paid={self.paid})"
