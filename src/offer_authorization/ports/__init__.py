"""Collaborator protocols consumed by the engine."""

from __future__ import annotations

from .catalog import IEventCatalog, IProductCatalog
from .numbering import IAccountNumberPublisher, ITransactionNumberPublisher
from .clients import (
    IBoxOfficeClient,
    IDepositClient,
    IRedemptionVerifier,
    IRegistrationClient,
    IReservationClient,
    VerificationResult,
)
from .stores import IActionStore, ITransactionStore

__all__ = [
    "IAccountNumberPublisher",
    "IActionStore",
    "IBoxOfficeClient",
    "IDepositClient",
    "IEventCatalog",
    "IProductCatalog",
    "IRedemptionVerifier",
    "IRegistrationClient",
    "IReservationClient",
    "ITransactionNumberPublisher",
    "ITransactionStore",
    "VerificationResult",
]
