"""Transaction ownership guard."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .primitives.exceptions import ForbiddenError

if TYPE_CHECKING:
    from .domain.transaction import Transaction, TransactionRef
    from .ports.stores import ITransactionStore

logger = logging.getLogger("offer_authorization.guard")


class TransactionGuard:
    """Load an in-progress transaction on behalf of its owning agent.

    Runs on every authorize, cancel and change call; nothing is cached
    between calls.
    """

    def __init__(self, transactions: ITransactionStore) -> None:
        self._transactions = transactions

    async def load_owned(self, ref: TransactionRef, agent_id: str) -> Transaction:
        transaction = await self._transactions.find_in_progress_by_id(ref)
        if transaction.agent.id != agent_id:
            logger.warning(
                "Agent %s denied access to %s %s", agent_id, ref.type_of.value, ref.id
            )
            raise ForbiddenError("Transaction not yours")
        return transaction
