"""Domain records: transactions, offers, prices and authorize actions."""

from __future__ import annotations

from .action import (
    CANCELABLE_STATUSES,
    AccountLocation,
    ActionError,
    ActionStatus,
    AuthorizeAction,
    AuthorizeObject,
    AuthorizeResult,
    ObjectType,
    PendingTransaction,
)
from .base import ValueObject, utc_now
from .event import (
    Event,
    EventSnapshot,
    ItemAvailability,
    OfferedThrough,
    Place,
    Product,
    ProductSnapshot,
    ProductType,
    ProviderIdentifier,
    Seat,
    SeatSection,
)
from .offer import (
    AcceptedOffer,
    AcceptedOfferProjection,
    ItemOffered,
    MonetaryAmount,
    Offer,
    OfferSelection,
    PropertyValue,
    RedemptionCredential,
    ServiceOutput,
    TicketedSeat,
)
from .price import (
    DEFAULT_CURRENCY,
    CategoryChargeSpecification,
    CompoundPriceSpecification,
    PriceComponent,
    QuantitativeValue,
    UnitPriceSpecification,
    VideoFormatChargeSpecification,
    VoucherChargeSpecification,
)
from .transaction import (
    Agent,
    Seller,
    Transaction,
    TransactionRef,
    TransactionStatus,
    TransactionType,
)

__all__ = [
    "CANCELABLE_STATUSES",
    "DEFAULT_CURRENCY",
    "AcceptedOffer",
    "AcceptedOfferProjection",
    "AccountLocation",
    "ActionError",
    "ActionStatus",
    "Agent",
    "AuthorizeAction",
    "AuthorizeObject",
    "AuthorizeResult",
    "CategoryChargeSpecification",
    "CompoundPriceSpecification",
    "Event",
    "EventSnapshot",
    "ItemAvailability",
    "ItemOffered",
    "MonetaryAmount",
    "ObjectType",
    "Offer",
    "OfferSelection",
    "OfferedThrough",
    "PendingTransaction",
    "Place",
    "PriceComponent",
    "Product",
    "ProductSnapshot",
    "ProductType",
    "PropertyValue",
    "ProviderIdentifier",
    "QuantitativeValue",
    "RedemptionCredential",
    "Seat",
    "SeatSection",
    "Seller",
    "ServiceOutput",
    "TicketedSeat",
    "Transaction",
    "TransactionRef",
    "TransactionStatus",
    "TransactionType",
    "UnitPriceSpecification",
    "ValueObject",
    "VideoFormatChargeSpecification",
    "VoucherChargeSpecification",
    "utc_now",
]
