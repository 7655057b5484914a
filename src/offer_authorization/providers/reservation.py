"""Primary seat reservation platform."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar

from ..domain.action import ObjectType, PendingTransaction
from ..domain.base import utc_now
from ..domain.event import ProviderIdentifier
from ..domain.offer import EXTRA_PROPERTY_NAME, AcceptedOfferProjection
from ..primitives.exceptions import ServiceUnavailableError
from .base import HoldRequest, ProviderResponse, ProviderVariant

if TYPE_CHECKING:
    from ..config import ProviderSettings
    from ..domain.action import AuthorizeAction
    from ..domain.offer import AcceptedOffer
    from ..ports.numbering import ITransactionNumberPublisher
    from ..ports.clients import IReservationClient

logger = logging.getLogger("offer_authorization.providers.reservation")

PENDING_TYPE = "Reserve"


class ReservationVariant(ProviderVariant):
    """Two-step hold: open a reserve transaction, then attach seats."""

    identifier: ClassVar[ProviderIdentifier] = ProviderIdentifier.RESERVATION
    object_types: ClassVar[frozenset[ObjectType]] = frozenset(
        {ObjectType.SEAT_RESERVATION}
    )

    def __init__(
        self,
        settings: ProviderSettings,
        client: IReservationClient,
        transaction_numbers: ITransactionNumberPublisher,
    ) -> None:
        super().__init__(settings)
        self._client = client
        self._transaction_numbers = transaction_numbers

    async def start(self, request: HoldRequest) -> PendingTransaction:
        event = request.object.event
        if event is None:
            raise ServiceUnavailableError("Seat reservation requires an event")
        transaction = request.transaction
        number = await self._transaction_numbers.publish(request.project_id, utc_now())
        params: dict[str, Any] = {
            "project": {"id": request.project_id},
            "transaction_number": number,
            "expires": self.hold_expires(transaction).isoformat(),
            "agent": transaction.seller.as_agent().model_dump(mode="json"),
            "object": {"reservation_for": {"id": event.id}},
        }
        response = await self._call(self._client.start(params))
        logger.info("Reserve transaction %s opened for event %s", number, event.id)
        return PendingTransaction(
            id=str(response["id"]), type_of=PENDING_TYPE, transaction_number=number
        )

    async def add_or_confirm_hold(
        self, pending: PendingTransaction | None, request: HoldRequest
    ) -> ProviderResponse:
        if pending is None or pending.id is None:
            raise ServiceUnavailableError("Reserve transaction was not opened")
        event = request.object.event
        accepted = request.object.accepted_offer
        params: dict[str, Any] = {
            "object": {
                "reservation_for": {"id": event.id if event is not None else None},
                "accepted_offer": [
                    {
                        "id": offer.id,
                        "ticketed_seat": (
                            offer.ticketed_seat.model_dump(mode="json")
                            if offer.ticketed_seat is not None
                            else None
                        ),
                        "additional_property": [
                            p.model_dump(mode="json") for p in offer.additional_property
                        ],
                    }
                    for offer in accepted
                ],
            }
        }
        response = await self._call(self._client.add_reservations(pending.id, params))
        return ProviderResponse(
            request_body=params,
            response_body=response,
            accepted_offers=project_reservations(accepted, response),
        )

    async def release(self, action: AuthorizeAction) -> None:
        pending = action.object.pending_transaction
        if pending is None or pending.transaction_number is None:
            logger.info("Action %s holds no reserve transaction", action.id)
            return
        await self._release_ignoring_gone(
            self._client.cancel(pending.transaction_number),
            f"Reserve transaction {pending.transaction_number}",
        )


def _is_extra(reservation: dict[str, Any]) -> bool:
    return any(
        p.get("name") == EXTRA_PROPERTY_NAME and p.get("value") == "1"
        for p in reservation.get("additional_property") or []
    )


def project_reservations(
    accepted: list[AcceptedOffer], response: dict[str, Any]
) -> list[AcceptedOfferProjection]:
    """Build the order-ready projection from the reservations actually made.

    Each reservation is matched to the accepted offer for the same seat (or,
    for seatless offers, the same offer id). Extra reservations are held
    remotely but left out of the projection.
    """
    by_seat = {o.ticketed_seat.key: o for o in accepted if o.ticketed_seat is not None}
    seatless = [o for o in accepted if o.ticketed_seat is None]

    projections: list[AcceptedOfferProjection] = []
    for reservation in response.get("reservations") or []:
        seat = reservation.get("ticketed_seat") or {}
        if seat:
            offer = by_seat.get((seat.get("seat_section"), seat.get("seat_number")))
        else:
            offer = next(
                (o for o in seatless if o.id == reservation.get("offer_id")), None
            )
            if offer is not None:
                seatless.remove(offer)
        if offer is None:
            logger.warning("Reservation %s matches no accepted offer", reservation)
            continue
        if offer.is_extra or _is_extra(reservation):
            continue
        projections.append(
            AcceptedOfferProjection.from_accepted(
                offer, reservation_id=reservation.get("id")
            )
        )
    return projections
