"""Offer validation."""

from __future__ import annotations

from .offers import OfferValidator, SellerContext, check_eligible_quantity
from .redemption import redeem

__all__ = ["OfferValidator", "SellerContext", "check_eligible_quantity", "redeem"]
