"""Catalog entities: events, seats, products and their provider metadata."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field

from .base import ValueObject
from .price import PriceComponent


class ProviderIdentifier(str, Enum):
    """Remote back-ends able to hold and release offers.

    * ``RESERVATION`` - primary seat reservation platform; the default when
      an event declares no provider.
    * ``BOX_OFFICE`` - legacy box-office system with no separate
      reservation transaction; the hold is a single temporary reservation.
    * ``SERVICE_REGISTRATION`` - service registration (payment cards,
      program memberships).
    * ``ACCOUNT_DEPOSIT`` - account deposit holds (money transfers, points).
    """

    RESERVATION = "Reservation"
    BOX_OFFICE = "BoxOffice"
    SERVICE_REGISTRATION = "ServiceRegistration"
    ACCOUNT_DEPOSIT = "AccountDeposit"


class OfferedThrough(ValueObject):
    """Provider metadata carried on an event, product or action."""

    type_of: str = "WebAPI"
    identifier: ProviderIdentifier | None = None


class ItemAvailability(str, Enum):
    IN_STOCK = "InStock"
    LIMITED_AVAILABILITY = "LimitedAvailability"
    OUT_OF_STOCK = "OutOfStock"


class Seat(ValueObject):
    """A physical seat with its live availability and own surcharges."""

    seat_number: str
    availability: ItemAvailability = ItemAvailability.IN_STOCK
    price_component: list[PriceComponent] = Field(default_factory=list)


class SeatSection(ValueObject):
    branch_code: str
    name: str | None = None
    seats: list[Seat] = Field(default_factory=list)

    def find_seat(self, seat_number: str) -> Seat | None:
        for seat in self.seats:
            if seat.seat_number == seat_number:
                return seat
        return None


class Place(ValueObject):
    branch_code: str
    name: str | None = None


class EventSnapshot(ValueObject):
    """Minimal copy of an event embedded in an action to avoid later drift."""

    id: str
    type_of: str = "ScreeningEvent"
    name: str | None = None
    start_date: datetime
    end_date: datetime | None = None
    location: Place | None = None
    offered_through: OfferedThrough | None = None
    provider_codes: dict[str, str] = Field(default_factory=dict)


class Event(ValueObject):
    """Full catalog event as returned by an event catalog."""

    id: str
    project_id: str
    type_of: str = "ScreeningEvent"
    name: str | None = None
    door_time: datetime | None = None
    start_date: datetime
    end_date: datetime | None = None
    location: Place | None = None
    super_event: dict[str, Any] = Field(default_factory=dict)
    offered_through: OfferedThrough | None = None
    provider_codes: dict[str, str] = Field(default_factory=dict)

    def snapshot(self) -> EventSnapshot:
        return EventSnapshot(
            id=self.id,
            type_of=self.type_of,
            name=self.name,
            start_date=self.start_date,
            end_date=self.end_date,
            location=self.location,
            offered_through=self.offered_through,
            provider_codes=dict(self.provider_codes),
        )


class ProductType(str, Enum):
    PAYMENT_CARD = "PaymentCard"
    MEMBERSHIP_SERVICE = "MembershipService"


class ProductSnapshot(ValueObject):
    id: str
    product_type: ProductType
    name: str | None = None
    service_type: str | None = None


class Product(ValueObject):
    """A registrable service product (payment card, membership program)."""

    id: str
    project_id: str
    product_type: ProductType
    name: str | None = None
    service_type: str | None = None
    membership_for: str | None = None
    offered_through: OfferedThrough | None = None

    def snapshot(self) -> ProductSnapshot:
        return ProductSnapshot(
            id=self.id,
            product_type=self.product_type,
            name=self.name,
            service_type=self.service_type,
        )
