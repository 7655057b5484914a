"""Number publishers for transaction numbers and payment-card accounts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime


@runtime_checkable
class ITransactionNumberPublisher(Protocol):
    """Issue unique numbers identifying remote reserve/register transactions."""

    async def publish(self, project_id: str, now: datetime) -> str: ...


@runtime_checkable
class IAccountNumberPublisher(Protocol):
    """Issue unique payment-card account numbers."""

    async def publish(self, project_id: str, now: datetime) -> str: ...
