"""Identifier generators for authorize actions."""

from __future__ import annotations

import uuid
from typing import Protocol, runtime_checkable


@runtime_checkable
class IIDGenerator(Protocol):
    """Protocol for generating unique record identifiers."""

    def next_id(self) -> str: ...


class UUID4Generator:
    """Generate random UUID4 identifiers as hex strings."""

    def next_id(self) -> str:
        return uuid.uuid4().hex


class SequentialIDGenerator:
    """Deterministic generator for tests: ``<prefix>-1``, ``<prefix>-2`` ..."""

    def __init__(self, prefix: str = "action") -> None:
        self._prefix = prefix
        self._counter = 0

    def next_id(self) -> str:
        self._counter += 1
        return f"{self._prefix}-{self._counter}"
