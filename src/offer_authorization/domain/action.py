"""AuthorizeAction: the provisional-grant record managed by the engine."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import Field

from .base import ValueObject, utc_now
from .event import EventSnapshot, OfferedThrough, ProductSnapshot, ProviderIdentifier
from .offer import AcceptedOffer, AcceptedOfferProjection, MonetaryAmount
from .price import DEFAULT_CURRENCY
from .transaction import Agent, TransactionRef


class ActionStatus(str, Enum):
    """Lifecycle states of an authorize action.

    ``Started`` moves to ``Completed`` or ``Failed``; any terminal action may
    later be voided to ``Canceled``.
    """

    STARTED = "Started"
    COMPLETED = "Completed"
    FAILED = "Failed"
    CANCELED = "Canceled"


CANCELABLE_STATUSES: frozenset[ActionStatus] = frozenset(
    {ActionStatus.COMPLETED, ActionStatus.FAILED, ActionStatus.CANCELED}
)


class ObjectType(str, Enum):
    SEAT_RESERVATION = "SeatReservation"
    PAYMENT_CARD = "PaymentCard"
    MONEY_TRANSFER = "MoneyTransfer"
    PROGRAM_MEMBERSHIP = "ProgramMembership"


class PendingTransaction(ValueObject):
    """Opaque reference to a hold opened inside a remote provider."""

    id: str | None = None
    type_of: str
    transaction_number: str | None = None


class AccountLocation(ValueObject):
    type_of: str = "Account"
    account_type: str = "Point"
    account_number: str


class AuthorizeObject(ValueObject):
    """Offer-specific request payload of an action."""

    type_of: ObjectType
    accepted_offer: list[AcceptedOffer] = Field(default_factory=list)
    event: EventSnapshot | None = None
    product: ProductSnapshot | None = None
    amount: MonetaryAmount | None = None
    to_location: AccountLocation | None = None
    description: str | None = None
    pending_transaction: PendingTransaction | None = None

    @property
    def price_currency(self) -> str:
        if self.amount is not None:
            return self.amount.currency
        if self.accepted_offer:
            return self.accepted_offer[0].price_currency
        return DEFAULT_CURRENCY


class AuthorizeResult(ValueObject):
    """Outcome of a completed action, retained verbatim for audit."""

    price: int
    price_currency: str = DEFAULT_CURRENCY
    request_body: dict[str, Any] = Field(default_factory=dict)
    response_body: dict[str, Any] = Field(default_factory=dict)
    accepted_offers: list[AcceptedOfferProjection] = Field(default_factory=list)


class ActionError(ValueObject):
    name: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, error: BaseException) -> ActionError:
        details = {
            key: value
            for key in ("status_code", "argument_name", "entity_name", "provider")
            if (value := getattr(error, key, None)) not in (None, "")
        }
        return cls(name=type(error).__name__, message=str(error), details=details)


class AuthorizeAction(ValueObject):
    """Authorization of one set of offers within a transaction.

    ``agent`` is the seller, ``recipient`` the customer and ``purpose`` the
    owning transaction. ``instrument`` records which provider holds the
    offers so that voiding reaches the same back-end.
    """

    # ── Identity ────────────────────────────────────────────────────
    id: str
    type_of: Literal["AuthorizeAction"] = "AuthorizeAction"
    project_id: str
    action_status: ActionStatus = ActionStatus.STARTED

    # ── Participants ────────────────────────────────────────────────
    agent: Agent
    recipient: Agent
    purpose: TransactionRef
    instrument: OfferedThrough

    # ── Payload and outcome ─────────────────────────────────────────
    object: AuthorizeObject
    result: AuthorizeResult | None = None
    error: ActionError | None = None

    # ── Timestamps ──────────────────────────────────────────────────
    start_date: datetime = Field(default_factory=utc_now)
    end_date: datetime | None = None
    canceled_at: datetime | None = None

    @property
    def provider(self) -> ProviderIdentifier | None:
        return self.instrument.identifier

    def belongs_to(self, purpose: TransactionRef) -> bool:
        return self.purpose == purpose

    def completed(
        self, result: AuthorizeResult, at: datetime | None = None
    ) -> AuthorizeAction:
        return self.model_copy(
            update={
                "action_status": ActionStatus.COMPLETED,
                "result": result,
                "end_date": at or utc_now(),
            }
        )

    def given_up(
        self, error: ActionError, at: datetime | None = None
    ) -> AuthorizeAction:
        return self.model_copy(
            update={
                "action_status": ActionStatus.FAILED,
                "error": error,
                "end_date": at or utc_now(),
            }
        )

    def canceled(self, at: datetime | None = None) -> AuthorizeAction:
        return self.model_copy(
            update={
                "action_status": ActionStatus.CANCELED,
                "canceled_at": at or utc_now(),
            }
        )

    def with_offers(
        self, accepted_offer: list[AcceptedOffer], result: AuthorizeResult
    ) -> AuthorizeAction:
        """Return a new state carrying amended offers and a re-priced result."""
        return self.model_copy(
            update={
                "object": self.object.model_copy(
                    update={"accepted_offer": list(accepted_offer)}
                ),
                "result": result,
            }
        )
