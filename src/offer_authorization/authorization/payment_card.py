"""Payment card registration authorization."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..domain.action import AuthorizeObject, ObjectType
from ..domain.base import utc_now
from ..domain.event import ProductType, ProviderIdentifier
from ..domain.offer import ServiceOutput
from ..instrumentation import fire
from ..primitives.exceptions import ArgumentError
from ..validation.offers import SellerContext

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..domain.action import AuthorizeAction
    from ..domain.event import Product
    from ..domain.offer import AcceptedOffer, OfferSelection
    from ..domain.transaction import TransactionRef
    from ..ports.catalog import IProductCatalog
    from ..ports.numbering import IAccountNumberPublisher
    from ..validation.offers import OfferValidator
    from .lifecycle import ActionLifecycleManager

logger = logging.getLogger("offer_authorization.payment_card")


class PaymentCardService:
    """Issue payment card numbers and hold their registration."""

    def __init__(
        self,
        lifecycle: ActionLifecycleManager,
        catalog: IProductCatalog,
        validator: OfferValidator,
        account_numbers: IAccountNumberPublisher,
    ) -> None:
        self._lifecycle = lifecycle
        self._catalog = catalog
        self._validator = validator
        self._account_numbers = account_numbers

    async def authorize(
        self,
        *,
        project_id: str,
        transaction_ref: TransactionRef,
        agent_id: str,
        product_id: str,
        selections: Sequence[OfferSelection],
    ) -> AuthorizeAction:
        async def handler() -> AuthorizeAction:
            transaction = await self._lifecycle.load_owned(
                project_id, transaction_ref, agent_id
            )
            product = await self._catalog.find_product(product_id)
            if product.product_type != ProductType.PAYMENT_CARD:
                raise ArgumentError("product", f"{product.id} is not a payment card")

            offers = await self._catalog.search_available_offers(
                product_id, transaction.seller.id
            )
            accepted = await self._validator.validate(
                selections, offers, SellerContext(seller=transaction.seller)
            )
            variant = self._lifecycle.dispatcher.select(
                product.offered_through,
                ObjectType.PAYMENT_CARD,
                fallback=ProviderIdentifier.SERVICE_REGISTRATION,
            )
            issued = [await self._issue(project_id, product, o) for o in accepted]
            object_ = AuthorizeObject(
                type_of=ObjectType.PAYMENT_CARD,
                product=product.snapshot(),
                accepted_offer=issued,
            )
            return await self._lifecycle.authorize(transaction, object_, variant)

        attributes = {
            "object_type": ObjectType.PAYMENT_CARD.value,
            "project_id": project_id,
            "transaction_id": transaction_ref.id,
            "product_id": product_id,
        }
        action: AuthorizeAction = await fire(
            "authorization.authorize", attributes, handler
        )
        return action

    async def _issue(
        self, project_id: str, product: Product, offer: AcceptedOffer
    ) -> AcceptedOffer:
        """Write a freshly published card number into the offer's service output."""
        number = await self._account_numbers.publish(project_id, utc_now())
        output = offer.item_offered.service_output or ServiceOutput(
            type_of=product.service_type or ProductType.PAYMENT_CARD.value
        )
        item_offered = offer.item_offered.model_copy(
            update={
                "type_of": product.product_type.value,
                "service_output": output.model_copy(update={"identifier": number}),
            }
        )
        logger.debug("Card number %s issued for offer %s", number, offer.id)
        return offer.model_copy(update={"item_offered": item_offered})
