"""Domain and infrastructure exceptions for offer-authorization."""

from __future__ import annotations

SERVER_ERROR_THRESHOLD = 500


class OfferAuthorizationError(Exception):
    """Root exception for the entire offer-authorization engine."""


class DomainError(OfferAuthorizationError):
    """Base class for all errors surfaced as-is to the caller."""


class ForbiddenError(DomainError):
    """Raised when the caller is not allowed to act on a resource."""


class NotFoundError(DomainError):
    """Raised when a transaction, action, offer or credential is not found."""


class EntityNotFoundError(NotFoundError):
    """Raised when a specific entity cannot be found by ID."""

    def __init__(self, entity_type: str, entity_id: object) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id={entity_id!r} not found")


class ArgumentError(DomainError):
    """Raised when a request is structurally invalid.

    ``argument_name`` names the offending field or offer identifier.
    """

    def __init__(self, argument_name: str, message: str | None = None) -> None:
        self.argument_name = argument_name
        super().__init__(message or f"Invalid argument: {argument_name}")


class ArgumentNullError(ArgumentError):
    """Raised when a required argument is missing."""

    def __init__(self, argument_name: str, message: str | None = None) -> None:
        super().__init__(
            argument_name, message or f"Missing argument: {argument_name}"
        )


class AlreadyInUseError(DomainError):
    """Raised when the physical resource behind an offer is already taken."""

    def __init__(
        self,
        entity_name: str,
        field_names: list[str] | None = None,
        message: str | None = None,
    ) -> None:
        self.entity_name = entity_name
        self.field_names = field_names or []
        super().__init__(message or f"{entity_name} already in use")


class InfrastructureError(OfferAuthorizationError):
    """Base class for all infrastructure-related errors."""


class ServiceUnavailableError(InfrastructureError):
    """Raised when a remote provider fails, times out or is misconfigured.

    Safe to retry later with a new authorize call.
    """


class RateLimitExceededError(ServiceUnavailableError):
    """Raised when a remote provider throttles the caller."""


class PersistenceError(InfrastructureError):
    """Base class for all persistence-related errors."""


class ProviderRequestError(OfferAuthorizationError):
    """Transport-level failure reported by a remote provider client.

    Never surfaced to callers: provider variants classify it into the
    domain taxonomy.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        provider: str = "",
        argument_name: str | None = None,
        entity_name: str | None = None,
        field_names: list[str] | None = None,
    ) -> None:
        self.status_code = status_code
        self.provider = provider
        self.argument_name = argument_name
        self.entity_name = entity_name
        self.field_names = field_names or []
        super().__init__(message)

    @property
    def is_server_error(self) -> bool:
        return self.status_code >= SERVER_ERROR_THRESHOLD
