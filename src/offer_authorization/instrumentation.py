"""Instrumentation hooks wrapping authorize, cancel and change operations."""

from __future__ import annotations

import fnmatch
import logging
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger("offer_authorization.instrumentation")


@runtime_checkable
class InstrumentationHook(Protocol):
    """Protocol for instrumentation hooks (tracing, metrics, audit)."""

    async def __call__(
        self,
        operation: str,
        attributes: dict[str, Any],
        next_handler: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Wrap an operation; must await ``next_handler`` exactly once."""
        ...


class HookRegistration:
    """A registered hook with operation filtering and priority."""

    def __init__(
        self,
        hook: InstrumentationHook,
        *,
        priority: int = 0,
        operations: list[str] | None = None,
        predicate: Callable[[str, dict[str, Any]], bool] | None = None,
        enabled: bool = True,
    ) -> None:
        self.hook = hook
        self.priority = priority
        self.operations = operations or []
        self.predicate = predicate
        self.enabled = enabled

    def matches(self, operation: str, attributes: dict[str, Any]) -> bool:
        if not self.enabled:
            return False
        if self.predicate is not None and not self.predicate(operation, attributes):
            return False
        if not self.operations:
            return True
        return any(fnmatch.fnmatch(operation, pattern) for pattern in self.operations)


class HookRegistry:
    """Priority-ordered chain of instrumentation hooks."""

    def __init__(self) -> None:
        self._registrations: list[HookRegistration] = []

    def register(
        self,
        hook: InstrumentationHook,
        *,
        priority: int = 0,
        operations: list[str] | None = None,
        predicate: Callable[[str, dict[str, Any]], bool] | None = None,
    ) -> HookRegistration:
        registration = HookRegistration(
            hook, priority=priority, operations=operations, predicate=predicate
        )
        self._registrations.append(registration)
        self._registrations.sort(key=lambda r: r.priority)
        return registration

    async def execute_all(
        self,
        operation: str,
        attributes: dict[str, Any],
        next_handler: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Run ``next_handler`` inside matching hooks, lowest priority outermost."""
        matching = [r for r in self._registrations if r.matches(operation, attributes)]
        if not matching:
            return await next_handler()

        async def pipeline(index: int = 0) -> Any:
            if index >= len(matching):
                return await next_handler()
            return await matching[index].hook(
                operation, attributes, lambda: pipeline(index + 1)
            )

        return await pipeline()

    def clear(self) -> None:
        self._registrations.clear()


_hook_registry_var: ContextVar[HookRegistry | None] = ContextVar(
    "offer_authorization_hook_registry", default=None
)


def get_hook_registry() -> HookRegistry:
    """Get the hook registry of the current context, creating it on first use."""
    registry = _hook_registry_var.get()
    if registry is None:
        registry = HookRegistry()
        _hook_registry_var.set(registry)
    return registry


def set_hook_registry(registry: HookRegistry) -> None:
    _hook_registry_var.set(registry)


async def fire(
    operation: str,
    attributes: dict[str, Any],
    handler: Callable[[], Awaitable[Any]],
) -> Any:
    """Execute ``handler`` through the current context's hooks."""
    logger.debug("Running %s %s", operation, attributes)
    return await get_hook_registry().execute_all(operation, attributes, handler)
