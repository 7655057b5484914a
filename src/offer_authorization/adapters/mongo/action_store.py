"""Mongo action store: every transition is a conditional ``find_one_and_update``."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pymongo import ASCENDING, ReturnDocument

from ...domain.action import CANCELABLE_STATUSES, ActionStatus, AuthorizeAction
from ...domain.base import utc_now
from ...primitives.exceptions import EntityNotFoundError
from .serialization import dump, model_from_doc, model_to_doc

if TYPE_CHECKING:
    from collections.abc import Collection

    from ...domain.action import ActionError, AuthorizeResult, ObjectType
    from ...domain.transaction import TransactionRef
    from .database import AuthorizationDatabase

logger = logging.getLogger("offer_authorization.mongo_actions")


def _purpose_filter(purpose: TransactionRef) -> dict[str, Any]:
    return {"purpose.type_of": purpose.type_of.value, "purpose.id": purpose.id}


def _status_filter(statuses: Collection[ActionStatus]) -> dict[str, Any]:
    return {"action_status": {"$in": sorted(s.value for s in statuses)}}


class MongoActionStore:
    """
    Authorize actions in one collection.

    The expected status (and, where relevant, the owning transaction) is
    part of each update filter, so a transition either applies atomically to
    a record still in that state or raises ``EntityNotFoundError``.
    """

    def __init__(self, database: AuthorizationDatabase) -> None:
        self._database = database

    def _collection(self) -> Any:
        return self._database.actions

    async def _transition(
        self, action_id: str, filter_: dict[str, Any], update: dict[str, Any]
    ) -> AuthorizeAction:
        doc = await self._collection().find_one_and_update(
            {"_id": action_id, **filter_},
            {"$set": update},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            logger.debug("Conditional update of action %s matched nothing", action_id)
            raise EntityNotFoundError("AuthorizeAction", action_id)
        return model_from_doc(AuthorizeAction, doc)

    async def start(self, action: AuthorizeAction) -> AuthorizeAction:
        started = action.model_copy(update={"action_status": ActionStatus.STARTED})
        await self._collection().insert_one(model_to_doc(started))
        return started

    async def complete(
        self, action_id: str, result: AuthorizeResult
    ) -> AuthorizeAction:
        return await self._transition(
            action_id,
            _status_filter({ActionStatus.STARTED}),
            {
                "action_status": ActionStatus.COMPLETED.value,
                "result": dump(result),
                "end_date": utc_now().isoformat(),
            },
        )

    async def give_up(self, action_id: str, error: ActionError) -> AuthorizeAction:
        return await self._transition(
            action_id,
            _status_filter({ActionStatus.STARTED}),
            {
                "action_status": ActionStatus.FAILED.value,
                "error": dump(error),
                "end_date": utc_now().isoformat(),
            },
        )

    async def cancel(
        self, action_id: str, purpose: TransactionRef
    ) -> AuthorizeAction:
        return await self._transition(
            action_id,
            {**_status_filter(CANCELABLE_STATUSES), **_purpose_filter(purpose)},
            {
                "action_status": ActionStatus.CANCELED.value,
                "canceled_at": utc_now().isoformat(),
            },
        )

    async def update_offers(self, action: AuthorizeAction) -> AuthorizeAction:
        return await self._transition(
            action.id,
            {
                **_status_filter({ActionStatus.COMPLETED}),
                **_purpose_filter(action.purpose),
            },
            {
                "object": dump(action.object),
                "result": dump(action.result) if action.result is not None else None,
            },
        )

    async def find_by_id(self, action_id: str) -> AuthorizeAction:
        doc = await self._collection().find_one({"_id": action_id})
        if doc is None:
            raise EntityNotFoundError("AuthorizeAction", action_id)
        return model_from_doc(AuthorizeAction, doc)

    async def search_by_purpose(
        self,
        purpose: TransactionRef,
        *,
        object_type: ObjectType | None = None,
        statuses: Collection[ActionStatus] | None = None,
    ) -> list[AuthorizeAction]:
        query = _purpose_filter(purpose)
        if object_type is not None:
            query["object.type_of"] = object_type.value
        if statuses is not None:
            query.update(_status_filter(statuses))
        cursor = self._collection().find(query).sort("start_date", ASCENDING)
        return [model_from_doc(AuthorizeAction, doc) async for doc in cursor]
