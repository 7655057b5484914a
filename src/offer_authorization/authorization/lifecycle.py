"""Action lifecycle: the authorize saga and its compensation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NoReturn

from ..domain.action import CANCELABLE_STATUSES, ActionError
from ..domain.base import utc_now
from ..guard import TransactionGuard
from ..instrumentation import fire
from ..pricing.calculator import compute_amount
from ..primitives.exceptions import EntityNotFoundError, ServiceUnavailableError
from ..primitives.id_generator import UUID4Generator
from ..providers.base import HoldRequest
from .factory import build_action, build_result

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..domain.action import AuthorizeAction, AuthorizeObject, ObjectType
    from ..domain.transaction import Transaction, TransactionRef
    from ..ports.stores import IActionStore, ITransactionStore
    from ..primitives.id_generator import IIDGenerator
    from ..providers.base import ProviderVariant
    from ..providers.dispatcher import ProviderDispatcher

logger = logging.getLogger("offer_authorization.lifecycle")


def price_of_offers(object_: AuthorizeObject) -> int:
    return compute_amount(object_.accepted_offer)


def price_of_amount(object_: AuthorizeObject) -> int:
    return object_.amount.value if object_.amount is not None else 0


class ActionLifecycleManager:
    """
    Saga coordinator for authorize actions.

    Authorize: open the remote hold if the variant needs it, record the
    action as ``Started``, fill the hold, then complete with the computed
    price. Any failure after the action exists is recorded with a
    best-effort give-up before the classified error is raised; the
    transaction stays in progress so the caller can retry with a new
    action.

    Cancel: the local record becomes ``Canceled`` first, then the variant
    recorded on the action releases the remote hold. A release failure is
    raised as ``ServiceUnavailableError`` without restoring the local state.
    """

    def __init__(
        self,
        *,
        transactions: ITransactionStore,
        actions: IActionStore,
        dispatcher: ProviderDispatcher,
        id_generator: IIDGenerator | None = None,
    ) -> None:
        self.guard = TransactionGuard(transactions)
        self.actions = actions
        self.dispatcher = dispatcher
        self._id_generator = id_generator or UUID4Generator()

    async def load_owned(
        self, project_id: str, ref: TransactionRef, agent_id: str
    ) -> Transaction:
        """Guarded load scoped to ``project_id``."""
        transaction = await self.guard.load_owned(ref, agent_id)
        if transaction.project_id != project_id:
            raise EntityNotFoundError("Transaction", ref.id)
        return transaction

    # ── Authorize ──────────────────────────────────────────────────

    async def authorize(
        self,
        transaction: Transaction,
        object_: AuthorizeObject,
        variant: ProviderVariant,
        *,
        price_of: Callable[[AuthorizeObject], int] = price_of_offers,
    ) -> AuthorizeAction:
        request = HoldRequest(
            project_id=transaction.project_id, transaction=transaction, object=object_
        )

        pending = None
        if variant.requires_start:
            try:
                pending = await variant.start(request)
            except Exception as error:
                logger.warning(
                    "Opening hold on %s failed: %s", variant.identifier.value, error
                )
                self._raise_classified(variant, error)
            object_ = object_.model_copy(update={"pending_transaction": pending})
            request = request.model_copy(update={"object": object_})

        action = await self.actions.start(
            build_action(
                action_id=self._id_generator.next_id(),
                transaction=transaction,
                object_=object_,
                provider=variant.identifier,
                now=utc_now(),
            )
        )
        logger.info(
            "Action %s started: %s on %s for %s",
            action.id,
            object_.type_of.value,
            variant.identifier.value,
            transaction.id,
        )

        try:
            response = await variant.add_or_confirm_hold(pending, request)
        except Exception as error:
            await self._give_up(action, error)
            self._raise_classified(variant, error)

        result = build_result(
            price=price_of(object_), object_=object_, response=response
        )
        completed = await self.actions.complete(action.id, result)
        logger.info("Action %s completed at price %d", action.id, result.price)
        return completed

    async def _give_up(self, action: AuthorizeAction, error: Exception) -> None:
        try:
            await self.actions.give_up(action.id, ActionError.from_exception(error))
        except Exception:  # noqa: BLE001
            logger.warning(
                "Could not record failure of action %s", action.id, exc_info=True
            )
        else:
            logger.info("Action %s failed: %s", action.id, error)

    @staticmethod
    def _raise_classified(variant: ProviderVariant, error: Exception) -> NoReturn:
        classified = variant.classify_error(error)
        if classified is error:
            raise error
        raise classified from error

    # ── Cancel ─────────────────────────────────────────────────────

    async def cancel(
        self,
        *,
        project_id: str,
        action_id: str,
        transaction_ref: TransactionRef,
        agent_id: str,
    ) -> AuthorizeAction:
        """Void one action of the caller's transaction."""

        async def handler() -> AuthorizeAction:
            transaction = await self.load_owned(project_id, transaction_ref, agent_id)
            action = await self.actions.cancel(action_id, transaction.ref)
            logger.info("Action %s canceled", action.id)
            await self._release(action)
            return action

        attributes = {
            "project_id": project_id,
            "action_id": action_id,
            "transaction_id": transaction_ref.id,
        }
        result: AuthorizeAction = await fire(
            "authorization.cancel", attributes, handler
        )
        return result

    async def cancel_all_by_purpose(
        self,
        *,
        project_id: str,
        transaction_ref: TransactionRef,
        agent_id: str,
        object_type: ObjectType,
    ) -> list[AuthorizeAction]:
        """
        Void every settled action of one kind in a transaction.

        Already canceled actions are released again, so a void retried
        after a failed release still reaches every remote hold. Each
        action is released even when an earlier release fails; the
        failures are raised together once the loop is done.
        """

        async def handler() -> list[AuthorizeAction]:
            transaction = await self.load_owned(project_id, transaction_ref, agent_id)
            found = await self.actions.search_by_purpose(
                transaction.ref, object_type=object_type, statuses=CANCELABLE_STATUSES
            )
            canceled: list[AuthorizeAction] = []
            failed: list[tuple[str, ServiceUnavailableError]] = []
            for action in found:
                voided = await self.actions.cancel(action.id, transaction.ref)
                canceled.append(voided)
                try:
                    await self._release(voided)
                except ServiceUnavailableError as error:
                    failed.append((voided.id, error))
            logger.info(
                "Voided %d %s actions of %s",
                len(canceled),
                object_type.value,
                transaction.id,
            )
            if failed:
                action_ids = ", ".join(action_id for action_id, _ in failed)
                raise ServiceUnavailableError(
                    f"Could not release holds of actions {action_ids}"
                ) from failed[0][1]
            return canceled

        attributes = {
            "object_type": object_type.value,
            "project_id": project_id,
            "transaction_id": transaction_ref.id,
        }
        result: list[AuthorizeAction] = await fire(
            "authorization.void", attributes, handler
        )
        return result

    async def _release(self, action: AuthorizeAction) -> None:
        variant = self.dispatcher.get(self.dispatcher.resolve(action.instrument))
        try:
            await variant.release(action)
        except Exception as error:
            classified = variant.classify_error(error)
            logger.error(
                "Releasing hold of canceled action %s failed: %s", action.id, classified
            )
            if classified is error and isinstance(error, ServiceUnavailableError):
                raise
            if isinstance(classified, ServiceUnavailableError):
                raise classified from error
            raise ServiceUnavailableError(
                f"Could not release hold of action {action.id}: {classified}"
            ) from error
