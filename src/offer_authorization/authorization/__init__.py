"""Authorization entry points per offer kind."""

from __future__ import annotations

from .lifecycle import ActionLifecycleManager, price_of_amount, price_of_offers
from .money_transfer import MoneyTransferSelection, MoneyTransferService
from .payment_card import PaymentCardService
from .program_membership import ProgramMembershipService
from .seat_reservation import SeatReservationService

__all__ = [
    "ActionLifecycleManager",
    "MoneyTransferSelection",
    "MoneyTransferService",
    "PaymentCardService",
    "ProgramMembershipService",
    "SeatReservationService",
    "price_of_amount",
    "price_of_offers",
]
