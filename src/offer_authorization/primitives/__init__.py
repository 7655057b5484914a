"""Primitives: exception taxonomy and identifier generation."""

from __future__ import annotations

from .exceptions import (
    AlreadyInUseError,
    ArgumentError,
    ArgumentNullError,
    DomainError,
    EntityNotFoundError,
    ForbiddenError,
    InfrastructureError,
    NotFoundError,
    OfferAuthorizationError,
    PersistenceError,
    ProviderRequestError,
    RateLimitExceededError,
    ServiceUnavailableError,
)
from .id_generator import IIDGenerator, SequentialIDGenerator, UUID4Generator

__all__ = [
    "AlreadyInUseError",
    "ArgumentError",
    "ArgumentNullError",
    "DomainError",
    "EntityNotFoundError",
    "ForbiddenError",
    "IIDGenerator",
    "InfrastructureError",
    "NotFoundError",
    "OfferAuthorizationError",
    "PersistenceError",
    "ProviderRequestError",
    "RateLimitExceededError",
    "SequentialIDGenerator",
    "ServiceUnavailableError",
    "UUID4Generator",
]
