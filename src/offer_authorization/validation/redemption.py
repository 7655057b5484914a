"""Voucher redemption for offers carrying a voucher charge component."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..domain.price import QuantitativeValue, UnitPriceSpecification
from ..primitives.exceptions import (
    ArgumentError,
    ArgumentNullError,
    DomainError,
    NotFoundError,
    ProviderRequestError,
    ServiceUnavailableError,
)

if TYPE_CHECKING:
    from ..domain.offer import AcceptedOffer
    from ..domain.transaction import Seller
    from ..ports.clients import IRedemptionVerifier

logger = logging.getLogger("offer_authorization.redemption")


async def redeem(
    offer: AcceptedOffer,
    *,
    seller: Seller,
    event_id: str | None,
    verifier: IRedemptionVerifier | None,
) -> AcceptedOffer:
    """Verify the voucher of ``offer`` and fix its price to the verified charge.

    Offers without a voucher charge component are returned unchanged.
    On success the price components become exactly one zero-price unit
    component and the verified voucher charge.
    """
    spec = offer.price_specification
    voucher = spec.voucher_component()
    if voucher is None:
        return offer

    credential = offer.redemption
    if credential is None or not credential.identifier or not credential.access_code:
        raise ArgumentError(
            "redemption",
            f"Offer {offer.id} requires a voucher identifier and access code",
        )
    if not seller.accepts(voucher.voucher_type):
        raise ArgumentError(
            "redemption",
            f"Seller {seller.id} does not accept voucher type {voucher.voucher_type}",
        )
    if event_id is None:
        raise ArgumentNullError("event.id")
    if verifier is None:
        raise ServiceUnavailableError("No redemption verifier is configured")

    try:
        verification = await verifier.verify(credential, event_id, seller.id)
    except ProviderRequestError as e:
        if not e.is_server_error:
            raise NotFoundError(
                f"Voucher {credential.identifier} not found or unavailable"
            ) from e
        raise ServiceUnavailableError(str(e)) from e
    except DomainError:
        raise
    except Exception as e:
        logger.exception("Voucher verification failed for %s", credential.identifier)
        raise ServiceUnavailableError(str(e)) from e

    if not verification.usable:
        raise ArgumentError(
            "redemption",
            verification.reason or f"Voucher {credential.identifier} is not usable",
        )
    if verification.voucher_type != voucher.voucher_type:
        raise ArgumentError(
            "redemption",
            f"Voucher {credential.identifier} is not a {voucher.voucher_type}",
        )

    unit = spec.unit_component()
    charge = voucher.model_copy(
        update={
            "price": (
                verification.charge_price
                if verification.charge_price is not None
                else voucher.price
            )
        }
    )
    zero_unit = UnitPriceSpecification(
        name=unit.name if unit is not None else None,
        price=0,
        price_currency=spec.price_currency,
        reference_quantity=QuantitativeValue(value=1),
    )
    return offer.model_copy(
        update={"price_specification": spec.with_components([zero_unit, charge])}
    )
