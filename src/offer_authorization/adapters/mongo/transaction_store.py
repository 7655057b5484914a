"""Mongo transaction store (read side)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ...domain.transaction import Transaction, TransactionStatus
from ...primitives.exceptions import EntityNotFoundError
from .serialization import model_from_doc, model_to_doc

if TYPE_CHECKING:
    from ...domain.transaction import TransactionRef
    from .database import AuthorizationDatabase


class MongoTransactionStore:
    def __init__(self, database: AuthorizationDatabase) -> None:
        self._database = database

    def _collection(self) -> Any:
        return self._database.transactions

    async def find_in_progress_by_id(self, ref: TransactionRef) -> Transaction:
        doc = await self._collection().find_one(
            {
                "_id": ref.id,
                "type_of": ref.type_of.value,
                "status": TransactionStatus.IN_PROGRESS.value,
            }
        )
        if doc is None:
            raise EntityNotFoundError("Transaction", ref.id)
        return model_from_doc(Transaction, doc)

    async def save(self, transaction: Transaction) -> None:
        """Upsert a transaction; owned by upstream workflows and test setup."""
        doc = model_to_doc(transaction)
        await self._collection().replace_one({"_id": doc["_id"]}, doc, upsert=True)
