"""Money transfer / point deposit authorization."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..domain.action import AccountLocation, AuthorizeObject, ObjectType
from ..domain.base import ValueObject
from ..domain.event import OfferedThrough, ProviderIdentifier
from ..domain.offer import MonetaryAmount
from ..instrumentation import fire
from ..primitives.exceptions import ArgumentError
from .lifecycle import price_of_amount

if TYPE_CHECKING:
    from ..domain.action import AuthorizeAction
    from ..domain.transaction import TransactionRef
    from .lifecycle import ActionLifecycleManager


class MoneyTransferSelection(ValueObject):
    """Amount to hold and the account that receives it."""

    amount: MonetaryAmount
    to_location: AccountLocation
    description: str | None = None
    offered_through: OfferedThrough | None = None


class MoneyTransferService:
    def __init__(self, lifecycle: ActionLifecycleManager) -> None:
        self._lifecycle = lifecycle

    async def authorize(
        self,
        *,
        project_id: str,
        transaction_ref: TransactionRef,
        agent_id: str,
        selection: MoneyTransferSelection,
    ) -> AuthorizeAction:
        """Hold ``selection.amount``; the action price equals the amount."""

        async def handler() -> AuthorizeAction:
            transaction = await self._lifecycle.load_owned(
                project_id, transaction_ref, agent_id
            )
            if selection.amount.value <= 0:
                raise ArgumentError("amount", "Amount must be positive")
            variant = self._lifecycle.dispatcher.select(
                selection.offered_through,
                ObjectType.MONEY_TRANSFER,
                fallback=ProviderIdentifier.ACCOUNT_DEPOSIT,
            )
            object_ = AuthorizeObject(
                type_of=ObjectType.MONEY_TRANSFER,
                amount=selection.amount,
                to_location=selection.to_location,
                description=selection.description,
            )
            return await self._lifecycle.authorize(
                transaction, object_, variant, price_of=price_of_amount
            )

        attributes = {
            "object_type": ObjectType.MONEY_TRANSFER.value,
            "project_id": project_id,
            "transaction_id": transaction_ref.id,
        }
        action: AuthorizeAction = await fire(
            "authorization.authorize", attributes, handler
        )
        return action

    async def void(
        self, *, project_id: str, transaction_ref: TransactionRef, agent_id: str
    ) -> list[AuthorizeAction]:
        """Void every money transfer authorized within the transaction."""
        return await self._lifecycle.cancel_all_by_purpose(
            project_id=project_id,
            transaction_ref=transaction_ref,
            agent_id=agent_id,
            object_type=ObjectType.MONEY_TRANSFER,
        )
