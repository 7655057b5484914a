"""Account deposit back-end for money transfers and point deposits."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar

from ..domain.action import ObjectType, PendingTransaction
from ..domain.event import ProviderIdentifier
from ..primitives.exceptions import ArgumentNullError, ServiceUnavailableError
from .base import HoldRequest, ProviderResponse, ProviderVariant

if TYPE_CHECKING:
    from ..config import ProviderSettings
    from ..domain.action import AuthorizeAction
    from ..ports.clients import IDepositClient

logger = logging.getLogger("offer_authorization.providers.deposit")

PENDING_TYPE = "Deposit"


class DepositVariant(ProviderVariant):
    """Open a deposit transaction, then put the amount on hold for the account."""

    identifier: ClassVar[ProviderIdentifier] = ProviderIdentifier.ACCOUNT_DEPOSIT
    object_types: ClassVar[frozenset[ObjectType]] = frozenset(
        {ObjectType.MONEY_TRANSFER}
    )

    def __init__(self, settings: ProviderSettings, client: IDepositClient) -> None:
        super().__init__(settings)
        self._client = client

    async def start(self, request: HoldRequest) -> PendingTransaction:
        transaction = request.transaction
        params: dict[str, Any] = {
            "project": {"id": request.project_id},
            "expires": self.hold_expires(transaction).isoformat(),
            "agent": transaction.agent.model_dump(mode="json"),
            "recipient": transaction.seller.as_agent().model_dump(mode="json"),
            "purpose": transaction.ref.model_dump(mode="json"),
        }
        response = await self._call(self._client.start(params))
        return PendingTransaction(
            id=str(response["id"]),
            type_of=PENDING_TYPE,
            transaction_number=response.get("transaction_number"),
        )

    async def add_or_confirm_hold(
        self, pending: PendingTransaction | None, request: HoldRequest
    ) -> ProviderResponse:
        if pending is None or pending.id is None:
            raise ServiceUnavailableError("Deposit transaction was not opened")
        amount = request.object.amount
        to_location = request.object.to_location
        if amount is None:
            raise ArgumentNullError("amount")
        if to_location is None:
            raise ArgumentNullError("to_location")
        params: dict[str, Any] = {
            "object": {
                "amount": amount.model_dump(mode="json"),
                "to_location": to_location.model_dump(mode="json"),
                "description": request.object.description,
            }
        }
        response = await self._call(self._client.add_deposit(pending.id, params))
        logger.info(
            "Deposit %s holds %d %s for %s",
            pending.id,
            amount.value,
            amount.currency,
            to_location.account_number,
        )
        return ProviderResponse(request_body=params, response_body=response)

    async def release(self, action: AuthorizeAction) -> None:
        pending = action.object.pending_transaction
        if pending is None or pending.id is None:
            logger.info("Action %s holds no deposit transaction", action.id)
            return
        await self._release_ignoring_gone(
            self._client.cancel(pending.id), f"Deposit transaction {pending.id}"
        )
