"""Service registration back-end for payment cards and program memberships."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar

from ..domain.action import ObjectType, PendingTransaction
from ..domain.base import utc_now
from ..domain.event import ProviderIdentifier
from ..domain.offer import AcceptedOfferProjection
from ..primitives.exceptions import ServiceUnavailableError
from .base import HoldRequest, ProviderResponse, ProviderVariant

if TYPE_CHECKING:
    from ..config import ProviderSettings
    from ..domain.action import AuthorizeAction
    from ..ports.numbering import ITransactionNumberPublisher
    from ..ports.clients import IRegistrationClient

logger = logging.getLogger("offer_authorization.providers.service_registration")

PENDING_TYPE = "RegisterService"


class ServiceRegistrationVariant(ProviderVariant):
    """
    Register-service hold.

    :meth:`start` only publishes the transaction number; the remote
    register transaction is opened with the offers in
    :meth:`add_or_confirm_hold`, and voided by that number.
    """

    identifier: ClassVar[ProviderIdentifier] = ProviderIdentifier.SERVICE_REGISTRATION
    object_types: ClassVar[frozenset[ObjectType]] = frozenset(
        {ObjectType.PAYMENT_CARD, ObjectType.PROGRAM_MEMBERSHIP}
    )

    def __init__(
        self,
        settings: ProviderSettings,
        client: IRegistrationClient,
        transaction_numbers: ITransactionNumberPublisher,
    ) -> None:
        super().__init__(settings)
        self._client = client
        self._transaction_numbers = transaction_numbers

    async def start(self, request: HoldRequest) -> PendingTransaction:
        number = await self._transaction_numbers.publish(request.project_id, utc_now())
        return PendingTransaction(type_of=PENDING_TYPE, transaction_number=number)

    async def add_or_confirm_hold(
        self, pending: PendingTransaction | None, request: HoldRequest
    ) -> ProviderResponse:
        if pending is None or pending.transaction_number is None:
            raise ServiceUnavailableError("Register transaction number missing")
        transaction = request.transaction
        product = request.object.product
        params: dict[str, Any] = {
            "project": {"id": request.project_id},
            "transaction_number": pending.transaction_number,
            "expires": self.hold_expires(transaction).isoformat(),
            "agent": transaction.seller.as_agent().model_dump(mode="json"),
            "recipient": transaction.agent.model_dump(mode="json"),
            "object": [
                {
                    "id": offer.id,
                    "item_offered": {
                        "id": product.id if product is not None else None,
                        "service_output": (
                            offer.item_offered.service_output.model_dump(mode="json")
                            if offer.item_offered.service_output is not None
                            else None
                        ),
                        "membership_for": offer.item_offered.membership_for,
                    },
                }
                for offer in request.object.accepted_offer
            ],
        }
        response = await self._call(self._client.start(params))
        logger.info(
            "Register transaction %s opened with %d offers",
            pending.transaction_number,
            len(request.object.accepted_offer),
        )
        return ProviderResponse(
            request_body=params,
            response_body=response,
            accepted_offers=[
                AcceptedOfferProjection.from_accepted(
                    offer,
                    reservation_id=(
                        offer.item_offered.service_output.identifier
                        if offer.item_offered.service_output is not None
                        else None
                    ),
                )
                for offer in request.object.accepted_offer
            ],
        )

    async def release(self, action: AuthorizeAction) -> None:
        pending = action.object.pending_transaction
        if pending is None or pending.transaction_number is None:
            logger.info("Action %s holds no register transaction", action.id)
            return
        await self._release_ignoring_gone(
            self._client.cancel(pending.transaction_number),
            f"Register transaction {pending.transaction_number}",
        )
