"""In-memory event and product catalogs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...primitives.exceptions import EntityNotFoundError

if TYPE_CHECKING:
    from ...domain.event import Event, Product, SeatSection
    from ...domain.offer import Offer


class InMemoryEventCatalog:
    def __init__(self) -> None:
        self._events: dict[str, Event] = {}
        self._offers: dict[str, list[Offer]] = {}
        self._sections: dict[str, list[SeatSection]] = {}

    def add_event(
        self,
        event: Event,
        offers: list[Offer],
        seat_sections: list[SeatSection] | None = None,
    ) -> None:
        self._events[event.id] = event
        self._offers[event.id] = list(offers)
        self._sections[event.id] = list(seat_sections or [])

    async def find_event(self, event_id: str) -> Event:
        event = self._events.get(event_id)
        if event is None:
            raise EntityNotFoundError("Event", event_id)
        return event

    async def search_available_offers(
        self, event_id: str, seller_id: str
    ) -> list[Offer]:
        await self.find_event(event_id)
        return list(self._offers.get(event_id, []))

    async def search_seat_sections(self, event_id: str) -> list[SeatSection]:
        return list(self._sections.get(event_id, []))


class InMemoryProductCatalog:
    def __init__(self) -> None:
        self._products: dict[str, Product] = {}
        self._offers: dict[str, list[Offer]] = {}

    def add_product(self, product: Product, offers: list[Offer]) -> None:
        self._products[product.id] = product
        self._offers[product.id] = list(offers)

    async def find_product(self, product_id: str) -> Product:
        product = self._products.get(product_id)
        if product is None:
            raise EntityNotFoundError("Product", product_id)
        return product

    async def search_available_offers(
        self, product_id: str, seller_id: str
    ) -> list[Offer]:
        await self.find_product(product_id)
        return list(self._offers.get(product_id, []))
