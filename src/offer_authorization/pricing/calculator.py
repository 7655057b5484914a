"""Charge amount of a set of accepted offers."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..domain.offer import AcceptedOffer


def compute_amount(accepted_offers: Sequence[AcceptedOffer]) -> int:
    """Sum every price component, then reconcile bundle pricing.

    A unit component priced "P per N items" appears once per physical item,
    so a naive sum counts P for each of the N rows. For every offer id the
    surplus ``P * (N - 1) * (count / N)`` is subtracted.

    Input must already satisfy the bundling multiple; this function does
    not validate it.
    """
    amount = sum(offer.price_specification.total for offer in accepted_offers)

    counts = Counter(offer.id for offer in accepted_offers)
    first_by_id: dict[str, AcceptedOffer] = {}
    for offer in accepted_offers:
        first_by_id.setdefault(offer.id, offer)

    for offer_id, count in counts.items():
        unit = first_by_id[offer_id].price_specification.unit_component()
        if unit is None:
            continue
        bundle_size = unit.bundle_size
        if bundle_size > 1:
            amount -= unit.price * (bundle_size - 1) * (count // bundle_size)

    return amount
