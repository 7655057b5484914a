"""Store protocols for transactions and authorize actions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Collection

    from ..domain.action import (
        ActionError,
        ActionStatus,
        AuthorizeAction,
        AuthorizeResult,
        ObjectType,
    )
    from ..domain.transaction import Transaction, TransactionRef


@runtime_checkable
class ITransactionStore(Protocol):
    """Read-only access to transactions, owned by upstream workflows."""

    async def find_in_progress_by_id(self, ref: TransactionRef) -> Transaction:
        """Load a transaction whose status is ``InProgress``.

        The status is part of the query; a transaction in any other state
        raises ``NotFoundError`` exactly like a missing one.
        """
        ...


@runtime_checkable
class IActionStore(Protocol):
    """
    Persistence of authorize actions.

    Every transition is a single-record conditional update (update only if
    the record is still in the expected status), which is the only
    concurrency control applied to actions. A failed precondition raises
    ``NotFoundError``.
    """

    async def start(self, action: AuthorizeAction) -> AuthorizeAction:
        """Insert a new action in status ``Started``."""
        ...

    async def complete(
        self, action_id: str, result: AuthorizeResult
    ) -> AuthorizeAction:
        """``Started`` -> ``Completed`` with ``result``."""
        ...

    async def give_up(self, action_id: str, error: ActionError) -> AuthorizeAction:
        """``Started`` -> ``Failed`` with ``error``."""
        ...

    async def cancel(
        self, action_id: str, purpose: TransactionRef
    ) -> AuthorizeAction:
        """``Completed | Failed | Canceled`` -> ``Canceled`` within ``purpose``."""
        ...

    async def update_offers(self, action: AuthorizeAction) -> AuthorizeAction:
        """Persist amended offers of a ``Completed`` action within its purpose."""
        ...

    async def find_by_id(self, action_id: str) -> AuthorizeAction: ...

    async def search_by_purpose(
        self,
        purpose: TransactionRef,
        *,
        object_type: ObjectType | None = None,
        statuses: Collection[ActionStatus] | None = None,
    ) -> list[AuthorizeAction]: ...
