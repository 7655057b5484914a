"""Immutable record base classes."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ValueObject(BaseModel):
    """Base class for immutable records.

    Every record handled by the engine is frozen: state transitions build a
    new value with ``model_copy`` instead of patching a loaded structure.
    Unknown keys coming from stores or catalogs are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)
