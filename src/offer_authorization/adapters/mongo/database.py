"""AuthorizationDatabase: the Mongo collections behind the stores."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pymongo import ASCENDING
from pymongo.errors import ConfigurationError

from .exceptions import MongoConnectionError

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

logger = logging.getLogger("offer_authorization.mongo")


class AuthorizationDatabase:
    """
    The ``actions`` and ``transactions`` collections of one database.

    Both stores read their collection from here, and :meth:`bootstrap`
    creates the indexes their filters rely on: actions are looked up by
    owning transaction and status, transactions by id and status.
    """

    def __init__(
        self,
        client: AsyncIOMotorClient[Any],
        name: str = "offer_authorization",
        *,
        actions: str = "actions",
        transactions: str = "transactions",
    ) -> None:
        self._client = client
        self._database = client.get_database(name)
        self._actions = actions
        self._transactions = transactions

    @classmethod
    def from_url(
        cls,
        url: str,
        name: str = "offer_authorization",
        *,
        server_selection_timeout_ms: int = 5000,
    ) -> AuthorizationDatabase:
        """Open a Motor client for ``url``; the first query connects."""
        from motor.motor_asyncio import AsyncIOMotorClient

        try:
            client: AsyncIOMotorClient[Any] = AsyncIOMotorClient(
                url, serverSelectionTimeoutMS=server_selection_timeout_ms
            )
        except ConfigurationError as e:
            raise MongoConnectionError(f"Invalid MongoDB URL: {e}") from e
        return cls(client, name)

    @property
    def actions(self) -> AsyncIOMotorCollection[Any]:
        return self._database.get_collection(self._actions)

    @property
    def transactions(self) -> AsyncIOMotorCollection[Any]:
        return self._database.get_collection(self._transactions)

    async def bootstrap(self) -> None:
        """Create the store indexes. Safe to run on every start."""
        await self.actions.create_index(
            [("purpose.id", ASCENDING), ("purpose.type_of", ASCENDING)],
            name="purpose",
        )
        await self.actions.create_index(
            [("action_status", ASCENDING)], name="action_status"
        )
        await self.transactions.create_index([("status", ASCENDING)], name="status")
        logger.info(
            "Indexes ready on %s.%s and %s.%s",
            self._database.name,
            self._actions,
            self._database.name,
            self._transactions,
        )

    def close(self) -> None:
        self._client.close()
