"""Builders for action records and results."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..domain.action import AuthorizeAction, AuthorizeResult
from ..domain.event import OfferedThrough
from ..domain.offer import AcceptedOfferProjection

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from ..domain.action import AuthorizeObject
    from ..domain.event import ProviderIdentifier
    from ..domain.offer import AcceptedOffer
    from ..domain.transaction import Transaction
    from ..providers.base import ProviderResponse


def build_action(
    *,
    action_id: str,
    transaction: Transaction,
    object_: AuthorizeObject,
    provider: ProviderIdentifier,
    now: datetime,
) -> AuthorizeAction:
    """New ``Started`` action: seller as agent, customer as recipient."""
    return AuthorizeAction(
        id=action_id,
        project_id=transaction.project_id,
        agent=transaction.seller.as_agent(),
        recipient=transaction.agent,
        purpose=transaction.ref,
        instrument=OfferedThrough(identifier=provider),
        object=object_,
        start_date=now,
    )


def build_result(
    *, price: int, object_: AuthorizeObject, response: ProviderResponse
) -> AuthorizeResult:
    return AuthorizeResult(
        price=price,
        price_currency=object_.price_currency,
        request_body=response.request_body,
        response_body=response.response_body,
        accepted_offers=response.accepted_offers,
    )


def reprice_result(
    result: AuthorizeResult, accepted: Sequence[AcceptedOffer], price: int
) -> AuthorizeResult:
    """Re-project amended offers onto the reservations already held.

    Seats are unchanged by an amendment, so each new offer keeps the
    reservation id recorded for its seat. Provider bodies stay untouched.
    """
    reservation_by_seat = {
        p.ticketed_seat.key: p.reservation_id
        for p in result.accepted_offers
        if p.ticketed_seat is not None
    }
    projections = [
        AcceptedOfferProjection.from_accepted(
            offer,
            reservation_id=(
                reservation_by_seat.get(offer.ticketed_seat.key)
                if offer.ticketed_seat is not None
                else None
            ),
        )
        for offer in accepted
        if not offer.is_extra
    ]
    return result.model_copy(update={"price": price, "accepted_offers": projections})
