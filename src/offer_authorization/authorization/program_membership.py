"""Program membership enrollment authorization."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..domain.action import AuthorizeObject, ObjectType
from ..domain.event import ProductType, ProviderIdentifier
from ..domain.offer import ServiceOutput
from ..instrumentation import fire
from ..primitives.exceptions import ArgumentError, ArgumentNullError
from ..validation.offers import SellerContext

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..domain.action import AuthorizeAction
    from ..domain.event import Product
    from ..domain.offer import AcceptedOffer, OfferSelection
    from ..domain.transaction import TransactionRef
    from ..ports.catalog import IProductCatalog
    from ..validation.offers import OfferValidator
    from .lifecycle import ActionLifecycleManager


class ProgramMembershipService:
    """Enroll the customer in a membership program.

    Membership offers are addressed by their ``identifier`` code.
    """

    def __init__(
        self,
        lifecycle: ActionLifecycleManager,
        catalog: IProductCatalog,
        validator: OfferValidator,
    ) -> None:
        self._lifecycle = lifecycle
        self._catalog = catalog
        self._validator = validator

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
            if product.product_type != ProductType.MEMBERSHIP_SERVICE:
                raise ArgumentError("product", f"{product.id} is not a membership")
            if not product.membership_for:
                raise ArgumentNullError("item_offered.membership_for.id")

            offers = await self._catalog.search_available_offers(
                product_id, transaction.seller.id
            )
            accepted = await self._validator.validate(
                selections,
                offers,
                SellerContext(seller=transaction.seller),
                match_on_identifier=True,
            )
            variant = self._lifecycle.dispatcher.select(
                product.offered_through,
                ObjectType.PROGRAM_MEMBERSHIP,
                fallback=ProviderIdentifier.SERVICE_REGISTRATION,
            )
            object_ = AuthorizeObject(
                type_of=ObjectType.PROGRAM_MEMBERSHIP,
                product=product.snapshot(),
                accepted_offer=[_enroll(product, o) for o in accepted],
            )
            return await self._lifecycle.authorize(transaction, object_, variant)

        attributes = {
            "object_type": ObjectType.PROGRAM_MEMBERSHIP.value,
            "project_id": project_id,
            "transaction_id": transaction_ref.id,
            "product_id": product_id,
        }
        action: AuthorizeAction = await fire(
            "authorization.authorize", attributes, handler
        )
        return action


def _enroll(product: Product, offer: AcceptedOffer) -> AcceptedOffer:
    item_offered = offer.item_offered.model_copy(
        update={
            "type_of": ObjectType.PROGRAM_MEMBERSHIP.value,
            "membership_for": product.membership_for,
            "service_output": ServiceOutput(
                type_of=ObjectType.PROGRAM_MEMBERSHIP.value, name=product.name
            ),
        }
    )
    return offer.model_copy(update={"item_offered": item_offered})
