"""JSON-over-HTTP clients for the remote provider protocols.

Paths follow this package's provider convention:

* reservation: ``POST /transactions/reserve/start``,
  ``POST /transactions/reserve/{id}/reservations``,
  ``PUT /transactions/reserve/{number}/cancel``
* box office: ``GET /seats/state``, ``POST /reservations/temporary``,
  ``POST /reservations/temporary/delete``
* registration: ``POST /transactions/register-service/start``,
  ``PUT /transactions/register-service/{number}/cancel``
* deposit: ``POST /transactions/deposit/start``,
  ``PUT /transactions/deposit/{id}/hold``, ``PUT /transactions/deposit/{id}/cancel``
* vouchers: ``POST /vouchers/verify``

Non-success responses raise ``ProviderRequestError``; release calls are
retried on transport errors because they are idempotent.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..ports.clients import VerificationResult
from ..primitives.exceptions import ProviderRequestError

if TYPE_CHECKING:
    from ..config import ProviderSettings
    from ..domain.offer import RedemptionCredential

logger = logging.getLogger("offer_authorization.providers.http")

idempotent_retry = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.2, max=2),
    retry=retry_if_exception_type(httpx.TransportError),
    reraise=True,
)


class ProviderHTTPClient:
    """Shared request handling: auth headers, deadlines, error decoding."""

    provider = "provider"

    def __init__(
        self,
        settings: ProviderSettings,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=settings.endpoint, timeout=settings.timeout
        )

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        secret = self._settings.client_secret.get_secret_value()
        if secret:
            headers["Authorization"] = f"Bearer {secret}"
        if self._settings.client_id:
            headers["X-Client-Id"] = self._settings.client_id
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        url = f"{self._settings.endpoint.rstrip('/')}{path}"
        response = await self._client.request(
            method,
            url,
            json=json,
            params=params,
            headers=self._headers(),
            timeout=self._settings.timeout,
        )
        if response.is_error:
            raise self._decode_error(response)
        if not response.content:
            return {}
        body: dict[str, Any] = response.json()
        return body

    def _decode_error(self, response: httpx.Response) -> ProviderRequestError:
        detail: dict[str, Any] = {}
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            error = payload.get("error")
            detail = error if isinstance(error, dict) else payload
        message = str(detail.get("message") or response.text or response.reason_phrase)
        logger.warning(
            "%s responded %d to %s %s: %s",
            self.provider,
            response.status_code,
            response.request.method,
            response.request.url.path,
            message,
        )
        return ProviderRequestError(
            message,
            status_code=response.status_code,
            provider=self.provider,
            argument_name=detail.get("argument_name"),
            entity_name=detail.get("entity_name"),
            field_names=list(detail.get("field_names") or []),
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class ReservationHTTPClient(ProviderHTTPClient):
    provider = "reservation"

    async def start(self, params: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/transactions/reserve/start", json=params)

    async def add_reservations(
        self, transaction_id: str, params: dict[str, Any]
    ) -> dict[str, Any]:
        return await self._request(
            "POST", f"/transactions/reserve/{transaction_id}/reservations", json=params
        )

    @idempotent_retry
    async def cancel(self, transaction_number: str) -> None:
        await self._request("PUT", f"/transactions/reserve/{transaction_number}/cancel")


class BoxOfficeHTTPClient(ProviderHTTPClient):
    provider = "box_office"

    async def search_seat_state(self, params: dict[str, Any]) -> dict[str, Any]:
        return await self._request("GET", "/seats/state", params=params)

    async def reserve_temporarily(self, params: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/reservations/temporary", json=params)

    @idempotent_retry
    async def delete_temporary_reservation(self, params: dict[str, Any]) -> None:
        await self._request("POST", "/reservations/temporary/delete", json=params)


class RegistrationHTTPClient(ProviderHTTPClient):
    provider = "service_registration"

    async def start(self, params: dict[str, Any]) -> dict[str, Any]:
        return await self._request(
            "POST", "/transactions/register-service/start", json=params
        )

    @idempotent_retry
    async def cancel(self, transaction_number: str) -> None:
        await self._request(
            "PUT", f"/transactions/register-service/{transaction_number}/cancel"
        )


class DepositHTTPClient(ProviderHTTPClient):
    provider = "deposit"

    async def start(self, params: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/transactions/deposit/start", json=params)

    async def add_deposit(
        self, transaction_id: str, params: dict[str, Any]
    ) -> dict[str, Any]:
        return await self._request(
            "PUT", f"/transactions/deposit/{transaction_id}/hold", json=params
        )

    @idempotent_retry
    async def cancel(self, transaction_id: str) -> None:
        await self._request("PUT", f"/transactions/deposit/{transaction_id}/cancel")


class VoucherHTTPVerifier(ProviderHTTPClient):
    provider = "voucher"

    async def verify(
        self,
        credential: RedemptionCredential,
        event_id: str,
        seller_id: str,
    ) -> VerificationResult:
        body = await self._request(
            "POST",
            "/vouchers/verify",
            json={
                "voucher_type": credential.voucher_type,
                "identifier": credential.identifier,
                "access_code": credential.access_code,
                "event": {"id": event_id},
                "seller": {"id": seller_id},
            },
        )
        return VerificationResult.model_validate(body)
