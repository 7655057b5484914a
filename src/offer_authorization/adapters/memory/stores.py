"""Dict-backed transaction and action stores for tests and embedding."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...domain.action import CANCELABLE_STATUSES, ActionStatus
from ...domain.base import utc_now
from ...domain.transaction import TransactionStatus
from ...primitives.exceptions import EntityNotFoundError

if TYPE_CHECKING:
    from collections.abc import Collection

    from ...domain.action import (
        ActionError,
        AuthorizeAction,
        AuthorizeResult,
        ObjectType,
    )
    from ...domain.transaction import Transaction, TransactionRef


class InMemoryTransactionStore:
    """Transactions keyed by ``(type, id)``."""

    def __init__(self) -> None:
        self._store: dict[tuple[str, str], Transaction] = {}

    def add(self, transaction: Transaction) -> None:
        self._store[(transaction.type_of.value, transaction.id)] = transaction

    async def find_in_progress_by_id(self, ref: TransactionRef) -> Transaction:
        transaction = self._store.get((ref.type_of.value, ref.id))
        if transaction is None or transaction.status != TransactionStatus.IN_PROGRESS:
            raise EntityNotFoundError("Transaction", ref.id)
        return transaction

    def clear(self) -> None:
        self._store.clear()


class InMemoryActionStore:
    """Actions keyed by id; status preconditions emulate conditional updates."""

    def __init__(self) -> None:
        self._store: dict[str, AuthorizeAction] = {}

    def _expect(
        self,
        action_id: str,
        statuses: Collection[ActionStatus],
        purpose: TransactionRef | None = None,
    ) -> AuthorizeAction:
        action = self._store.get(action_id)
        if (
            action is None
            or action.action_status not in statuses
            or (purpose is not None and not action.belongs_to(purpose))
        ):
            raise EntityNotFoundError("AuthorizeAction", action_id)
        return action

    async def start(self, action: AuthorizeAction) -> AuthorizeAction:
        started = action.model_copy(update={"action_status": ActionStatus.STARTED})
        self._store[started.id] = started
        return started

    async def complete(
        self, action_id: str, result: AuthorizeResult
    ) -> AuthorizeAction:
        action = self._expect(action_id, {ActionStatus.STARTED})
        self._store[action_id] = action.completed(result, utc_now())
        return self._store[action_id]

    async def give_up(self, action_id: str, error: ActionError) -> AuthorizeAction:
        action = self._expect(action_id, {ActionStatus.STARTED})
        self._store[action_id] = action.given_up(error, utc_now())
        return self._store[action_id]

    async def cancel(
        self, action_id: str, purpose: TransactionRef
    ) -> AuthorizeAction:
        action = self._expect(action_id, CANCELABLE_STATUSES, purpose)
        self._store[action_id] = action.canceled(utc_now())
        return self._store[action_id]

    async def update_offers(self, action: AuthorizeAction) -> AuthorizeAction:
        current = self._expect(action.id, {ActionStatus.COMPLETED}, action.purpose)
        self._store[action.id] = current.model_copy(
            update={"object": action.object, "result": action.result}
        )
        return self._store[action.id]

    async def find_by_id(self, action_id: str) -> AuthorizeAction:
        action = self._store.get(action_id)
        if action is None:
            raise EntityNotFoundError("AuthorizeAction", action_id)
        return action

    async def search_by_purpose(
        self,
        purpose: TransactionRef,
        *,
        object_type: ObjectType | None = None,
        statuses: Collection[ActionStatus] | None = None,
    ) -> list[AuthorizeAction]:
        return [
            action
            for action in self._store.values()
            if action.belongs_to(purpose)
            and (object_type is None or action.object.type_of == object_type)
            and (statuses is None or action.action_status in statuses)
        ]

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)
