"""Remote provider variants, error classification and dispatch."""

from __future__ import annotations

from .base import HoldRequest, ProviderResponse, ProviderVariant
from .box_office import BoxOfficeVariant
from .deposit import DepositVariant
from .dispatcher import ProviderDispatcher
from .errors import classify_status, handle_provider_error, is_already_released
from .http import (
    BoxOfficeHTTPClient,
    DepositHTTPClient,
    ProviderHTTPClient,
    RegistrationHTTPClient,
    ReservationHTTPClient,
    VoucherHTTPVerifier,
)
from .reservation import ReservationVariant, project_reservations
from .service_registration import ServiceRegistrationVariant

__all__ = [
    "BoxOfficeHTTPClient",
    "BoxOfficeVariant",
    "DepositHTTPClient",
    "DepositVariant",
    "HoldRequest",
    "ProviderDispatcher",
    "ProviderHTTPClient",
    "ProviderResponse",
    "ProviderVariant",
    "RegistrationHTTPClient",
    "ReservationHTTPClient",
    "ReservationVariant",
    "ServiceRegistrationVariant",
    "VoucherHTTPVerifier",
    "classify_status",
    "handle_provider_error",
    "is_already_released",
    "project_reservations",
]
