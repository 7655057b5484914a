"""In-memory adapters."""

from __future__ import annotations

from .catalog import InMemoryEventCatalog, InMemoryProductCatalog
from .numbering import InMemoryNumberPublisher
from .stores import InMemoryActionStore, InMemoryTransactionStore

__all__ = [
    "InMemoryActionStore",
    "InMemoryEventCatalog",
    "InMemoryNumberPublisher",
    "InMemoryProductCatalog",
    "InMemoryTransactionStore",
]
