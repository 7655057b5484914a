"""Read-only offer catalogs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..domain.event import Event, Product, SeatSection
    from ..domain.offer import Offer


@runtime_checkable
class IEventCatalog(Protocol):
    """Events, their sellable ticket offers and live seat state."""

    async def find_event(self, event_id: str) -> Event: ...

    async def search_available_offers(
        self, event_id: str, seller_id: str
    ) -> list[Offer]: ...

    async def search_seat_sections(self, event_id: str) -> list[SeatSection]: ...


@runtime_checkable
class IProductCatalog(Protocol):
    """Registrable products (payment cards, memberships) and their offers."""

    async def find_product(self, product_id: str) -> Product: ...

    async def search_available_offers(
        self, product_id: str, seller_id: str
    ) -> list[Offer]: ...
