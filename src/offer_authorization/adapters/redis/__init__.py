"""Redis adapters."""

from __future__ import annotations

from .numbering import (
    RedisAccountNumberPublisher,
    RedisNumberPublisher,
    RedisTransactionNumberPublisher,
)

__all__ = [
    "RedisAccountNumberPublisher",
    "RedisNumberPublisher",
    "RedisTransactionNumberPublisher",
]
