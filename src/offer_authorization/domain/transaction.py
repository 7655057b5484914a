"""Commerce transactions owned by an agent and negotiated with a seller."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field

from .base import ValueObject


class TransactionType(str, Enum):
    PLACE_ORDER = "PlaceOrder"
    MONEY_TRANSFER = "MoneyTransfer"


class TransactionStatus(str, Enum):
    IN_PROGRESS = "InProgress"
    CONFIRMED = "Confirmed"
    EXPIRED = "Expired"
    CANCELED = "Canceled"


class Agent(ValueObject):
    id: str
    type_of: str = "Person"
    name: str | None = None


class Seller(ValueObject):
    """Counterparty snapshot; ``payment_accepted`` lists accepted voucher types."""

    id: str
    type_of: str = "Corporation"
    name: str | None = None
    payment_accepted: list[str] = Field(default_factory=list)

    def accepts(self, payment_method: str) -> bool:
        return payment_method in self.payment_accepted

    def as_agent(self) -> Agent:
        return Agent(id=self.id, type_of=self.type_of, name=self.name)


class TransactionRef(ValueObject):
    """Back-reference from an action to its owning transaction."""

    type_of: TransactionType = TransactionType.PLACE_ORDER
    id: str


class Transaction(ValueObject):
    id: str
    type_of: TransactionType = TransactionType.PLACE_ORDER
    status: TransactionStatus = TransactionStatus.IN_PROGRESS
    project_id: str
    agent: Agent
    seller: Seller
    expires: datetime
    start_date: datetime | None = None

    @property
    def ref(self) -> TransactionRef:
        return TransactionRef(type_of=self.type_of, id=self.id)
