"""Offer validation: caller selections -> fully-priced accepted offers."""

from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING

from pydantic import Field

from ..domain.base import ValueObject
from ..domain.event import ItemAvailability, SeatSection
from ..domain.offer import AcceptedOffer
from ..domain.transaction import Seller
from ..primitives.exceptions import (
    AlreadyInUseError,
    ArgumentError,
    ArgumentNullError,
    EntityNotFoundError,
)
from .redemption import redeem

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..domain.offer import Offer, OfferSelection
    from ..domain.price import CompoundPriceSpecification
    from ..ports.clients import IRedemptionVerifier

logger = logging.getLogger("offer_authorization.validation")


class SellerContext(ValueObject):
    """Who sells, for which event, with which live seat state.

    ``seat_sections`` is optional: when empty, seat surcharges and seat
    availability are left to the provider's own check at hold time.
    ``check_availability`` is off when re-pricing seats this caller
    already holds.
    """

    seller: Seller
    event_id: str | None = None
    seat_sections: list[SeatSection] = Field(default_factory=list)
    check_availability: bool = True


class OfferValidator:
    """Resolve selections against a catalog and price them."""

    def __init__(self, redemption_verifier: IRedemptionVerifier | None = None) -> None:
        self._verifier = redemption_verifier

    async def validate(
        self,
        selections: Sequence[OfferSelection],
        catalog: Sequence[Offer],
        context: SellerContext,
        *,
        match_on_identifier: bool = False,
    ) -> list[AcceptedOffer]:
        """Return one accepted offer per selection.

        Raises:
            ArgumentNullError: no selection given.
            EntityNotFoundError: an offer, section or seat is not in the catalog.
            AlreadyInUseError: a selected seat is out of stock.
            ArgumentError: voucher prerequisites or bundling quantity violated.
        """
        if not selections:
            raise ArgumentNullError("offers")

        index = {
            (offer.identifier if match_on_identifier else offer.id): offer
            for offer in catalog
        }
        accepted: list[AcceptedOffer] = []
        for selection in selections:
            offer = index.get(selection.offer_id)
            if offer is None:
                raise EntityNotFoundError("Offer", selection.offer_id)
            accepted_offer = self._accept(selection, offer, context)
            accepted.append(
                await redeem(
                    accepted_offer,
                    seller=context.seller,
                    event_id=context.event_id,
                    verifier=self._verifier,
                )
            )

        check_eligible_quantity(accepted)
        logger.debug("Validated %d offers", len(accepted))
        return accepted

    def _accept(
        self, selection: OfferSelection, offer: Offer, context: SellerContext
    ) -> AcceptedOffer:
        return AcceptedOffer(
            id=offer.id,
            identifier=offer.identifier,
            name=offer.name,
            price_currency=offer.price_currency,
            price_specification=self._with_seat_charges(
                offer.price_specification, selection, context
            ),
            # caller properties first, catalog second; never overwritten
            additional_property=[
                *selection.additional_property,
                *offer.additional_property,
            ],
            item_offered=selection.item_offered or offer.item_offered,
            ticketed_seat=selection.ticketed_seat,
            redemption=selection.redemption,
        )

    def _with_seat_charges(
        self,
        spec: CompoundPriceSpecification,
        selection: OfferSelection,
        context: SellerContext,
    ) -> CompoundPriceSpecification:
        seat_ref = selection.ticketed_seat
        if seat_ref is None or not context.seat_sections:
            return spec

        section = next(
            (
                s
                for s in context.seat_sections
                if s.branch_code == seat_ref.seat_section
            ),
            None,
        )
        if section is None:
            raise EntityNotFoundError("SeatSection", seat_ref.seat_section)
        seat = section.find_seat(seat_ref.seat_number)
        if seat is None:
            raise EntityNotFoundError("Seat", seat_ref.seat_number)
        if (
            context.check_availability
            and seat.availability == ItemAvailability.OUT_OF_STOCK
        ):
            raise AlreadyInUseError(
                "Seat",
                ["ticketed_seat"],
                f"Seat {seat_ref.seat_section}-{seat_ref.seat_number} "
                "is already reserved",
            )
        if not seat.price_component:
            return spec
        return spec.with_components([*spec.price_component, *seat.price_component])


def check_eligible_quantity(accepted_offers: Sequence[AcceptedOffer]) -> None:
    """Enforce bundling multiples and eligible min/max per offer id."""
    counts = Counter(offer.id for offer in accepted_offers)
    specs = {offer.id: offer.price_specification for offer in accepted_offers}

    for offer_id, count in counts.items():
        unit = specs[offer_id].unit_component()
        if unit is None:
            continue
        if count % unit.bundle_size != 0:
            raise ArgumentError(
                offer_id,
                f"Offer {offer_id} must be selected in multiples of "
                f"{unit.bundle_size}, got {count}",
            )
        eligible = unit.eligible_quantity
        if eligible is None:
            continue
        if eligible.min_value is not None and count < eligible.min_value:
            raise ArgumentError(
                offer_id,
                f"Offer {offer_id} requires at least {eligible.min_value} items",
            )
        if eligible.max_value is not None and count > eligible.max_value:
            raise ArgumentError(
                offer_id,
                f"Offer {offer_id} allows at most {eligible.max_value} items",
            )
