"""Tests for compute_amount."""

from __future__ import annotations

from conftest import unit_price

from offer_authorization.domain import (
    AcceptedOffer,
    CategoryChargeSpecification,
    CompoundPriceSpecification,
    VideoFormatChargeSpecification,
)
from offer_authorization.pricing import compute_amount


def accepted(offer_id: str, *components) -> AcceptedOffer:
    return AcceptedOffer(
        id=offer_id,
        price_specification=CompoundPriceSpecification(
            price_component=list(components)
        ),
    )


def test_empty_is_zero() -> None:
    assert compute_amount([]) == 0


def test_sums_independent_offers() -> None:
    offers = [accepted("adult", unit_price(1000)), accepted("child", unit_price(1500))]

    assert compute_amount(offers) == 2500


def test_bundle_counted_once_per_bundle() -> None:
    """Four seats of a 2-seat bundle at 1800 cost two bundles."""
    offers = [accepted("pair", unit_price(1800, per=2)) for _ in range(4)]

    assert compute_amount(offers) == 3600


def test_surcharges_are_not_bundled() -> None:
    offers = [
        accepted(
            "pair",
            unit_price(1800, per=2),
            CategoryChargeSpecification(price=300, category_code="Premium"),
        )
        for _ in range(2)
    ]

    assert compute_amount(offers) == 1800 + 2 * 300


def test_add_on_unit_ignored_for_bundling() -> None:
    """The bundling unit is the one not tied to an add-on."""
    offers = [
        accepted(
            "pair",
            unit_price(200, per=1, applies_to_add_on=["popcorn"]),
            unit_price(1800, per=2),
            VideoFormatChargeSpecification(price=400, video_format="IMAX"),
        )
        for _ in range(2)
    ]

    assert compute_amount(offers) == 2 * 200 + 1800 + 2 * 400


def test_offers_without_unit_component_are_summed() -> None:
    offers = [accepted("fee", CategoryChargeSpecification(price=100))]

    assert compute_amount(offers) == 100
