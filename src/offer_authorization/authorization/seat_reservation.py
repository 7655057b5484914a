"""Seat reservation authorization: authorize, cancel and change offers."""

from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING

from ..domain.action import ActionStatus, AuthorizeObject, ObjectType
from ..instrumentation import fire
from ..pricing.calculator import compute_amount
from ..primitives.exceptions import ArgumentError, EntityNotFoundError
from ..validation.offers import SellerContext
from .factory import reprice_result

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ..domain.action import AuthorizeAction
    from ..domain.offer import AcceptedOffer, OfferSelection, TicketedSeat
    from ..domain.transaction import Transaction, TransactionRef
    from ..ports.catalog import IEventCatalog
    from ..validation.offers import OfferValidator
    from .lifecycle import ActionLifecycleManager

logger = logging.getLogger("offer_authorization.seat_reservation")


def _seat_multiset(
    seats: Iterable[TicketedSeat | None],
) -> Counter[tuple[str, str] | None]:
    return Counter(seat.key if seat is not None else None for seat in seats)


class SeatReservationService:
    """Authorize seats of an event on the provider the event declares."""

    def __init__(
        self,
        lifecycle: ActionLifecycleManager,
        catalog: IEventCatalog,
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
        event_id: str,
        selections: Sequence[OfferSelection],
    ) -> AuthorizeAction:
        async def handler() -> AuthorizeAction:
            transaction = await self._lifecycle.load_owned(
                project_id, transaction_ref, agent_id
            )
            event = await self._catalog.find_event(event_id)
            accepted = await self._validate(transaction, event_id, selections)
            variant = self._lifecycle.dispatcher.select(
                event.offered_through, ObjectType.SEAT_RESERVATION
            )
            object_ = AuthorizeObject(
                type_of=ObjectType.SEAT_RESERVATION,
                event=event.snapshot(),
                accepted_offer=accepted,
            )
            return await self._lifecycle.authorize(transaction, object_, variant)

        attributes = {
            "object_type": ObjectType.SEAT_RESERVATION.value,
            "project_id": project_id,
            "transaction_id": transaction_ref.id,
            "event_id": event_id,
        }
        action: AuthorizeAction = await fire(
            "authorization.authorize", attributes, handler
        )
        return action

    async def cancel(
        self,
        *,
        project_id: str,
        action_id: str,
        transaction_ref: TransactionRef,
        agent_id: str,
    ) -> AuthorizeAction:
        return await self._lifecycle.cancel(
            project_id=project_id,
            action_id=action_id,
            transaction_ref=transaction_ref,
            agent_id=agent_id,
        )

    async def change_offers(
        self,
        *,
        project_id: str,
        action_id: str,
        transaction_ref: TransactionRef,
        agent_id: str,
        event_id: str,
        selections: Sequence[OfferSelection],
    ) -> AuthorizeAction:
        """Change ticket types or prices on the seats already held.

        The remote hold is not touched: the new selections must name exactly
        the same seats (as a multiset) as the completed action.
        """

        async def handler() -> AuthorizeAction:
            transaction = await self._lifecycle.load_owned(
                project_id, transaction_ref, agent_id
            )
            action = await self._lifecycle.actions.find_by_id(action_id)
            if (
                not action.belongs_to(transaction.ref)
                or action.action_status != ActionStatus.COMPLETED
                or action.object.type_of != ObjectType.SEAT_RESERVATION
                or action.result is None
            ):
                raise EntityNotFoundError("AuthorizeAction", action_id)

            event = action.object.event
            if event is None or event.id != event_id:
                raise ArgumentError(
                    "event.id", "Event does not match the authorization"
                )

            held = _seat_multiset(o.ticketed_seat for o in action.object.accepted_offer)
            requested = _seat_multiset(s.ticketed_seat for s in selections)
            if held != requested:
                raise ArgumentError("offers", "Seats do not match the authorized seats")

            accepted = await self._validate(
                transaction, event_id, selections, check_availability=False
            )
            price = compute_amount(accepted)
            amended = action.with_offers(
                accepted, reprice_result(action.result, accepted, price)
            )
            updated = await self._lifecycle.actions.update_offers(amended)
            logger.info("Offers of action %s changed, price %d", action.id, price)
            return updated

        attributes = {
            "object_type": ObjectType.SEAT_RESERVATION.value,
            "project_id": project_id,
            "action_id": action_id,
            "transaction_id": transaction_ref.id,
        }
        action: AuthorizeAction = await fire(
            "authorization.change_offers", attributes, handler
        )
        return action

    async def _validate(
        self,
        transaction: Transaction,
        event_id: str,
        selections: Sequence[OfferSelection],
        *,
        check_availability: bool = True,
    ) -> list[AcceptedOffer]:
        offers = await self._catalog.search_available_offers(
            event_id, transaction.seller.id
        )
        seat_sections = await self._catalog.search_seat_sections(event_id)
        return await self._validator.validate(
            selections,
            offers,
            SellerContext(
                seller=transaction.seller,
                event_id=event_id,
                seat_sections=seat_sections,
                check_availability=check_availability,
            ),
        )
