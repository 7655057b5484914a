"""Remote provider client protocols.

Clients speak JSON documents and raise ``ProviderRequestError`` for any
non-success response; provider variants translate between domain records
and these documents and classify the errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from ..domain.offer import RedemptionCredential


@runtime_checkable
class IReservationClient(Protocol):
    """Primary seat reservation platform."""

    async def start(self, params: dict[str, Any]) -> dict[str, Any]:
        """Open a reserve transaction; returns at least ``id``."""
        ...

    async def add_reservations(
        self, transaction_id: str, params: dict[str, Any]
    ) -> dict[str, Any]:
        """Attach seats; returns ``{"reservations": [...]}``."""
        ...

    async def cancel(self, transaction_number: str) -> None: ...


@runtime_checkable
class IBoxOfficeClient(Protocol):
    """Legacy box office: availability check and hold in one flow."""

    async def search_seat_state(self, params: dict[str, Any]) -> dict[str, Any]: ...

    async def reserve_temporarily(self, params: dict[str, Any]) -> dict[str, Any]:
        """Place a temporary hold; returns ``{"tmp_reserve_num": ...}``."""
        ...

    async def delete_temporary_reservation(self, params: dict[str, Any]) -> None: ...


@runtime_checkable
class IRegistrationClient(Protocol):
    """Service registration (payment cards, memberships)."""

    async def start(self, params: dict[str, Any]) -> dict[str, Any]: ...

    async def cancel(self, transaction_number: str) -> None: ...


@runtime_checkable
class IDepositClient(Protocol):
    """Account deposit holds (money transfers, points)."""

    async def start(self, params: dict[str, Any]) -> dict[str, Any]: ...

    async def add_deposit(
        self, transaction_id: str, params: dict[str, Any]
    ) -> dict[str, Any]: ...

    async def cancel(self, transaction_id: str) -> None: ...


class VerificationResult(BaseModel):
    """Outcome of a voucher check."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    identifier: str
    voucher_type: str
    usable: bool = True
    charge_price: int | None = None
    reason: str | None = None


@runtime_checkable
class IRedemptionVerifier(Protocol):
    """Voucher / pre-purchased ticket verification."""

    async def verify(
        self,
        credential: RedemptionCredential,
        event_id: str,
        seller_id: str,
    ) -> VerificationResult:
        """Raise ``ProviderRequestError`` if the credential is rejected."""
        ...
