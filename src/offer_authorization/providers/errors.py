"""Classification of remote provider failures into the domain taxonomy.

Every provider variant classifies through :func:`handle_provider_error` so
that the same remote failure surfaces the same way whichever back-end
raised it.
"""

from __future__ import annotations

import asyncio
import logging
from http import HTTPStatus

import httpx

from ..primitives.exceptions import (
    AlreadyInUseError,
    ArgumentError,
    ForbiddenError,
    NotFoundError,
    OfferAuthorizationError,
    ProviderRequestError,
    RateLimitExceededError,
    ServiceUnavailableError,
)

logger = logging.getLogger("offer_authorization.providers")


def classify_status(error: ProviderRequestError) -> OfferAuthorizationError:
    """Map a provider status code onto the error taxonomy."""
    code = error.status_code
    message = str(error)
    argument = error.argument_name or error.provider or "request"
    if error.is_server_error:
        return ServiceUnavailableError(message)
    if code == HTTPStatus.BAD_REQUEST:
        return ArgumentError(argument, message)
    if code in (HTTPStatus.UNAUTHORIZED, HTTPStatus.FORBIDDEN):
        return ForbiddenError(message)
    if code == HTTPStatus.NOT_FOUND:
        return NotFoundError(message)
    if code == HTTPStatus.CONFLICT:
        return AlreadyInUseError(
            error.entity_name or error.provider or "resource",
            error.field_names,
            message,
        )
    if code == HTTPStatus.TOO_MANY_REQUESTS:
        return RateLimitExceededError(message)
    return ArgumentError(argument, message)


def handle_provider_error(
    error: BaseException,
    *,
    already_reserved_message: str | None = None,
) -> OfferAuthorizationError:
    """Return the domain error to raise for ``error``.

    Errors already in the domain taxonomy pass through; a message matching
    the provider's "already reserved" sentinel becomes ``AlreadyInUseError``;
    timeouts, transport failures and anything unexpected become
    ``ServiceUnavailableError``.
    """
    if isinstance(error, ProviderRequestError):
        if already_reserved_message and already_reserved_message in str(error):
            return AlreadyInUseError(
                error.entity_name or "offers", error.field_names, str(error)
            )
        return classify_status(error)
    if isinstance(error, OfferAuthorizationError):
        return error
    if isinstance(error, (asyncio.TimeoutError, httpx.TimeoutException)):
        return ServiceUnavailableError("Provider did not respond in time")
    if isinstance(error, httpx.HTTPError):
        return ServiceUnavailableError(f"Provider unreachable: {error}")
    logger.warning("Unexpected provider failure: %r", error)
    return ServiceUnavailableError(str(error) or type(error).__name__)


def is_already_released(error: BaseException) -> bool:
    """Whether a release failure means the hold no longer exists remotely."""
    return isinstance(error, ProviderRequestError) and error.status_code in (
        HTTPStatus.NOT_FOUND,
        HTTPStatus.GONE,
        HTTPStatus.CONFLICT,
    )
