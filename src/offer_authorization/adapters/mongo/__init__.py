"""MongoDB adapters (Motor)."""

from __future__ import annotations

from .action_store import MongoActionStore
from .database import AuthorizationDatabase
from .exceptions import MongoConnectionError, MongoPersistenceError
from .serialization import model_from_doc, model_to_doc
from .transaction_store import MongoTransactionStore

__all__ = [
    "AuthorizationDatabase",
    "MongoActionStore",
    "MongoConnectionError",
    "MongoPersistenceError",
    "MongoTransactionStore",
    "model_from_doc",
    "model_to_doc",
]
