"""Catalog offers, caller selections and accepted (priced) offers."""

from __future__ import annotations

from pydantic import Field

from .base import ValueObject
from .price import DEFAULT_CURRENCY, CompoundPriceSpecification

EXTRA_PROPERTY_NAME = "extra"


class PropertyValue(ValueObject):
    name: str
    value: str


class TicketedSeat(ValueObject):
    seat_section: str
    seat_number: str
    seat_row: str = ""
    type_of: str = "Seat"

    @property
    def key(self) -> tuple[str, str]:
        return (self.seat_section, self.seat_number)


class RedemptionCredential(ValueObject):
    """Pre-purchased voucher presented with an offer selection."""

    voucher_type: str
    identifier: str | None = None
    access_code: str | None = None


class ServiceOutput(ValueObject):
    """What a registered service issues: a card number, a membership."""

    type_of: str
    identifier: str | None = None
    name: str | None = None


class MonetaryAmount(ValueObject):
    value: int
    currency: str = DEFAULT_CURRENCY


class ItemOffered(ValueObject):
    type_of: str = "EventReservation"
    service_output: ServiceOutput | None = None
    membership_for: str | None = None


class Offer(ValueObject):
    """A currently sellable offer as returned by an offer catalog."""

    id: str
    identifier: str | None = None
    name: str | None = None
    price_currency: str = DEFAULT_CURRENCY
    price_specification: CompoundPriceSpecification
    additional_property: list[PropertyValue] = Field(default_factory=list)
    item_offered: ItemOffered = Field(default_factory=ItemOffered)


class OfferSelection(ValueObject):
    """One requested item: which offer, for which seat, with what extras.

    ``offer_id`` is matched against ``Offer.id``, or ``Offer.identifier``
    for products whose offers are addressed by code.
    """

    offer_id: str
    ticketed_seat: TicketedSeat | None = None
    additional_property: list[PropertyValue] = Field(default_factory=list)
    redemption: RedemptionCredential | None = None
    item_offered: ItemOffered | None = None


class AcceptedOffer(ValueObject):
    """A validated, fully-priced selection ready for a provider hold."""

    id: str
    identifier: str | None = None
    name: str | None = None
    price_currency: str = DEFAULT_CURRENCY
    price_specification: CompoundPriceSpecification
    additional_property: list[PropertyValue] = Field(default_factory=list)
    item_offered: ItemOffered = Field(default_factory=ItemOffered)
    ticketed_seat: TicketedSeat | None = None
    redemption: RedemptionCredential | None = None

    @property
    def is_extra(self) -> bool:
        """Extra reservations are held remotely but never copied to orders."""
        return any(
            p.name == EXTRA_PROPERTY_NAME and p.value == "1"
            for p in self.additional_property
        )


class AcceptedOfferProjection(ValueObject):
    """Provider-confirmed view of an accepted offer, ready for an order."""

    offer_id: str
    identifier: str | None = None
    name: str | None = None
    price_currency: str = DEFAULT_CURRENCY
    price_specification: CompoundPriceSpecification
    additional_property: list[PropertyValue] = Field(default_factory=list)
    item_offered: ItemOffered = Field(default_factory=ItemOffered)
    ticketed_seat: TicketedSeat | None = None
    reservation_id: str | None = None

    @classmethod
    def from_accepted(
        cls, offer: AcceptedOffer, *, reservation_id: str | None = None
    ) -> AcceptedOfferProjection:
        return cls(
            offer_id=offer.id,
            identifier=offer.identifier,
            name=offer.name,
            price_currency=offer.price_currency,
            price_specification=offer.price_specification.without_accounting(),
            additional_property=list(offer.additional_property),
            item_offered=offer.item_offered,
            ticketed_seat=offer.ticketed_seat,
            reservation_id=reservation_id,
        )
