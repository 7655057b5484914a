"""Provider variant contract shared by every remote back-end."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from pydantic import Field

from ..domain.action import AuthorizeObject
from ..domain.base import ValueObject
from ..domain.offer import AcceptedOfferProjection
from ..domain.transaction import Transaction
from .errors import handle_provider_error, is_already_released

if TYPE_CHECKING:
    from collections.abc import Awaitable
    from datetime import datetime

    from ..config import ProviderSettings
    from ..domain.action import AuthorizeAction, ObjectType, PendingTransaction
    from ..domain.event import ProviderIdentifier
    from ..primitives.exceptions import OfferAuthorizationError

logger = logging.getLogger("offer_authorization.providers")

T = TypeVar("T")


class HoldRequest(ValueObject):
    """Everything a variant needs to open and fill a hold."""

    project_id: str
    transaction: Transaction
    object: AuthorizeObject


class ProviderResponse(ValueObject):
    """Provider's canonical record of what was actually held.

    ``request_body`` and ``response_body`` are kept verbatim in the action
    result for audit and replay.
    """

    request_body: dict[str, Any] = Field(default_factory=dict)
    response_body: dict[str, Any] = Field(default_factory=dict)
    accepted_offers: list[AcceptedOfferProjection] = Field(default_factory=list)


class ProviderVariant(ABC):
    """
    One remote back-end able to hold and release offers.

    Lifecycle per authorization:

    1. :meth:`start` opens a time-boxed hold, before the action exists.
       Variants with ``requires_start = False`` skip it and the action
       carries no pending transaction.
    2. :meth:`add_or_confirm_hold` attaches the concrete items.
    3. :meth:`release` voids the hold; it must tolerate holds that are
       already released or were never fully created.

    Every remote call is bounded by the provider's configured timeout.
    """

    identifier: ClassVar[ProviderIdentifier]
    object_types: ClassVar[frozenset[ObjectType]]
    requires_start: ClassVar[bool] = True

    def __init__(self, settings: ProviderSettings) -> None:
        self._settings = settings

    @property
    def settings(self) -> ProviderSettings:
        return self._settings

    def hold_expires(self, transaction: Transaction) -> datetime:
        """Hold expiry: the transaction's own expiry plus the configured extension."""
        return transaction.expires + self._settings.hold_extension

    async def start(self, request: HoldRequest) -> PendingTransaction | None:
        return None

    @abstractmethod
    async def add_or_confirm_hold(
        self, pending: PendingTransaction | None, request: HoldRequest
    ) -> ProviderResponse: ...

    @abstractmethod
    async def release(self, action: AuthorizeAction) -> None: ...

    def classify_error(self, error: BaseException) -> OfferAuthorizationError:
        return handle_provider_error(
            error, already_reserved_message=self._settings.already_reserved_message
        )

    async def _call(self, awaitable: Awaitable[T]) -> T:
        return await asyncio.wait_for(awaitable, timeout=self._settings.timeout)

    async def _release_ignoring_gone(
        self, awaitable: Awaitable[Any], description: str
    ) -> None:
        try:
            await self._call(awaitable)
        except Exception as e:
            if is_already_released(e):
                logger.warning("%s already released: %s", description, e)
                return
            raise
        logger.info("%s released", description)
