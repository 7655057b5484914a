"""Legacy box-office back-end: live availability check plus temporary hold."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar

from ..domain.action import ObjectType
from ..domain.event import ProviderIdentifier
from ..domain.offer import AcceptedOfferProjection
from ..primitives.exceptions import AlreadyInUseError, ArgumentNullError
from .base import HoldRequest, ProviderResponse, ProviderVariant

if TYPE_CHECKING:
    from ..config import ProviderSettings
    from ..domain.action import AuthorizeAction, PendingTransaction
    from ..ports.clients import IBoxOfficeClient

logger = logging.getLogger("offer_authorization.providers.box_office")


class BoxOfficeVariant(ProviderVariant):
    """
    Single-call hold for a back-end with no reserve transaction concept.

    The temporary reservation number lives only in the action result, so a
    never-completed action has nothing to release.
    """

    identifier: ClassVar[ProviderIdentifier] = ProviderIdentifier.BOX_OFFICE
    object_types: ClassVar[frozenset[ObjectType]] = frozenset(
        {ObjectType.SEAT_RESERVATION}
    )
    requires_start: ClassVar[bool] = False

    def __init__(self, settings: ProviderSettings, client: IBoxOfficeClient) -> None:
        super().__init__(settings)
        self._client = client

    async def add_or_confirm_hold(
        self, pending: PendingTransaction | None, request: HoldRequest
    ) -> ProviderResponse:
        event = request.object.event
        if event is None:
            raise ArgumentNullError("event")
        accepted = request.object.accepted_offer
        seats = [
            o.ticketed_seat.model_dump(include={"seat_section", "seat_number"})
            for o in accepted
            if o.ticketed_seat is not None
        ]
        if not seats:
            raise ArgumentNullError("ticketed_seat")

        codes = dict(event.provider_codes)
        state = await self._call(self._client.search_seat_state(codes))
        free = {
            (s.get("seat_section"), s.get("seat_number"))
            for s in state.get("free_seats") or []
        }
        taken = [s for s in seats if (s["seat_section"], s["seat_number"]) not in free]
        if taken:
            raise AlreadyInUseError(
                "offers",
                ["ticketed_seat"],
                "Seats already reserved: "
                + ", ".join(f"{s['seat_section']}-{s['seat_number']}" for s in taken),
            )

        params: dict[str, Any] = {**codes, "seats": seats}
        response = await self._call(self._client.reserve_temporarily(params))
        tmp_reserve_num = str(response.get("tmp_reserve_num", ""))
        logger.info(
            "Temporary hold %s placed for %d seats", tmp_reserve_num, len(seats)
        )
        return ProviderResponse(
            request_body=params,
            response_body=response,
            accepted_offers=[
                AcceptedOfferProjection.from_accepted(o, reservation_id=tmp_reserve_num)
                for o in accepted
                if not o.is_extra
            ],
        )

    async def release(self, action: AuthorizeAction) -> None:
        result = action.result
        if result is None or not result.response_body.get("tmp_reserve_num"):
            logger.info("Action %s holds no temporary reservation", action.id)
            return
        params = {
            key: value for key, value in result.request_body.items() if key != "seats"
        }
        params["tmp_reserve_num"] = result.response_body["tmp_reserve_num"]
        await self._release_ignoring_gone(
            self._client.delete_temporary_reservation(params),
            f"Temporary reservation {params['tmp_reserve_num']}",
        )
