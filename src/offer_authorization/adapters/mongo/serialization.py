"""Pydantic record <-> Mongo document mapping (``id`` <-> ``_id``)."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel

from .exceptions import MongoPersistenceError

TModel = TypeVar("TModel", bound=BaseModel)


def model_to_doc(model: BaseModel, *, id_field: str = "id") -> dict[str, Any]:
    """JSON-mode dump with ``id_field`` stored as ``_id``."""
    try:
        data = model.model_dump(mode="json")
    except Exception as e:
        raise MongoPersistenceError(str(e)) from e
    if id_field in data:
        data["_id"] = data.pop(id_field)
    return data


def model_from_doc(
    cls: type[TModel], doc: dict[str, Any], *, id_field: str = "id"
) -> TModel:
    if not isinstance(doc, dict):
        raise MongoPersistenceError("Document must be a dict")
    data = dict(doc)
    if "_id" in data:
        data[id_field] = data.pop("_id")
    try:
        return cls.model_validate(data)
    except Exception as e:
        raise MongoPersistenceError(str(e)) from e


def dump(model: BaseModel) -> dict[str, Any]:
    """JSON-mode dump of an embedded record."""
    return model.model_dump(mode="json")
