"""Selection of the provider variant serving an event, product or action."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..domain.event import ProviderIdentifier
from ..primitives.exceptions import ServiceUnavailableError
from .box_office import BoxOfficeVariant
from .deposit import DepositVariant
from .http import (
    BoxOfficeHTTPClient,
    DepositHTTPClient,
    RegistrationHTTPClient,
    ReservationHTTPClient,
)
from .reservation import ReservationVariant
from .service_registration import ServiceRegistrationVariant

if TYPE_CHECKING:
    from collections.abc import Iterable

    import httpx

    from ..config import ProjectSettings
    from ..domain.action import ObjectType
    from ..domain.event import OfferedThrough
    from ..ports.numbering import ITransactionNumberPublisher
    from .base import ProviderVariant

logger = logging.getLogger("offer_authorization.providers")


class ProviderDispatcher:
    """
    Sealed set of provider variants configured for one project.

    Variants are chosen once per authorization from the explicit provider
    identifier on the event or product; the chosen identifier is recorded on
    the action so voiding reaches the same variant. A missing identifier
    falls back to ``default`` (the primary reservation platform unless
    configured otherwise) and is logged.
    """

    def __init__(
        self,
        variants: Iterable[ProviderVariant],
        *,
        default: ProviderIdentifier = ProviderIdentifier.RESERVATION,
    ) -> None:
        self._variants: dict[ProviderIdentifier, ProviderVariant] = {
            variant.identifier: variant for variant in variants
        }
        self._default = default

    @property
    def default(self) -> ProviderIdentifier:
        return self._default

    def resolve(
        self,
        offered_through: OfferedThrough | None,
        *,
        fallback: ProviderIdentifier | None = None,
    ) -> ProviderIdentifier:
        """Return the declared provider identifier, or the documented default."""
        if offered_through is not None and offered_through.identifier is not None:
            return offered_through.identifier
        identifier = fallback or self._default
        logger.warning(
            "No provider identifier declared; defaulting to %s", identifier.value
        )
        return identifier

    def get(self, identifier: ProviderIdentifier) -> ProviderVariant:
        variant = self._variants.get(identifier)
        if variant is None:
            raise ServiceUnavailableError(
                f"Provider {identifier.value} is not configured"
            )
        return variant

    def select(
        self,
        offered_through: OfferedThrough | None,
        object_type: ObjectType,
        *,
        fallback: ProviderIdentifier | None = None,
    ) -> ProviderVariant:
        """Pick the variant serving ``object_type`` for the given metadata."""
        variant = self.get(self.resolve(offered_through, fallback=fallback))
        if object_type not in variant.object_types:
            raise ServiceUnavailableError(
                f"Provider {variant.identifier.value} cannot hold {object_type.value}"
            )
        return variant

    @classmethod
    def from_project_settings(
        cls,
        project: ProjectSettings,
        *,
        transaction_numbers: ITransactionNumberPublisher,
        http_client: httpx.AsyncClient | None = None,
    ) -> ProviderDispatcher:
        """Build HTTP-backed variants for every provider configured on ``project``."""
        variants: list[ProviderVariant] = []
        for identifier, settings in project.providers.items():
            if identifier is ProviderIdentifier.RESERVATION:
                variants.append(
                    ReservationVariant(
                        settings,
                        ReservationHTTPClient(settings, client=http_client),
                        transaction_numbers,
                    )
                )
            elif identifier is ProviderIdentifier.BOX_OFFICE:
                variants.append(
                    BoxOfficeVariant(
                        settings, BoxOfficeHTTPClient(settings, client=http_client)
                    )
                )
            elif identifier is ProviderIdentifier.SERVICE_REGISTRATION:
                variants.append(
                    ServiceRegistrationVariant(
                        settings,
                        RegistrationHTTPClient(settings, client=http_client),
                        transaction_numbers,
                    )
                )
            elif identifier is ProviderIdentifier.ACCOUNT_DEPOSIT:
                variants.append(
                    DepositVariant(
                        settings, DepositHTTPClient(settings, client=http_client)
                    )
                )
        return cls(variants, default=project.default_provider)
