"""Shared fixtures: a project with one transaction, catalog data and fake providers."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any

import pytest

from offer_authorization.adapters.memory import (
    InMemoryActionStore,
    InMemoryEventCatalog,
    InMemoryNumberPublisher,
    InMemoryProductCatalog,
    InMemoryTransactionStore,
)
from offer_authorization.authorization import (
    ActionLifecycleManager,
    MoneyTransferService,
    PaymentCardService,
    ProgramMembershipService,
    SeatReservationService,
)
from offer_authorization.config import ProviderSettings
from offer_authorization.domain import (
    Agent,
    CategoryChargeSpecification,
    CompoundPriceSpecification,
    Event,
    ItemAvailability,
    Offer,
    OfferedThrough,
    OfferSelection,
    Place,
    ProviderIdentifier,
    QuantitativeValue,
    Seat,
    SeatSection,
    Seller,
    TicketedSeat,
    Transaction,
    UnitPriceSpecification,
)
from offer_authorization.instrumentation import HookRegistry, set_hook_registry
from offer_authorization.primitives.exceptions import ProviderRequestError
from offer_authorization.primitives.id_generator import SequentialIDGenerator
from offer_authorization.providers import (
    BoxOfficeVariant,
    DepositVariant,
    ProviderDispatcher,
    ReservationVariant,
    ServiceRegistrationVariant,
)
from offer_authorization.validation import OfferValidator

PROJECT_ID = "cinerino"
SELLER_ID = "seller-1"
CUSTOMER_ID = "customer-1"
EVENT_ID = "ev-1"
LEGACY_EVENT_ID = "ev-legacy"
TRANSACTION_EXPIRES = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def unit_price(price: int, *, per: int = 1, **kwargs: Any) -> UnitPriceSpecification:
    return UnitPriceSpecification(
        price=price, reference_quantity=QuantitativeValue(value=per), **kwargs
    )


def make_offer(offer_id: str, *components: Any, **kwargs: Any) -> Offer:
    return Offer(
        id=offer_id,
        price_specification=CompoundPriceSpecification(
            price_component=list(components)
        ),
        **kwargs,
    )


def seat(offer_id: str, seat_number: str, section: str = "A") -> OfferSelection:
    return OfferSelection(
        offer_id=offer_id,
        ticketed_seat=TicketedSeat(seat_section=section, seat_number=seat_number),
    )


# ── Fake provider clients ──────────────────────────────────────────


class FakeReservationClient:
    """Reserve transactions held in memory; failures injectable per call."""

    def __init__(self) -> None:
        self.started: list[dict[str, Any]] = []
        self.added: list[tuple[str, dict[str, Any]]] = []
        self.canceled: list[str] = []
        self.fail_start: BaseException | None = None
        self.fail_add: BaseException | None = None
        self.fail_cancel: BaseException | None = None
        self.add_delay = 0.0

    async def start(self, params: dict[str, Any]) -> dict[str, Any]:
        if self.fail_start is not None:
            raise self.fail_start
        self.started.append(params)
        return {"id": f"reserve-{len(self.started)}"}

    async def add_reservations(
        self, transaction_id: str, params: dict[str, Any]
    ) -> dict[str, Any]:
        if self.add_delay:
            await asyncio.sleep(self.add_delay)
        if self.fail_add is not None:
            raise self.fail_add
        self.added.append((transaction_id, params))
        offers = params["object"]["accepted_offer"]
        return {
            "reservations": [
                {
                    "id": f"{transaction_id}-r{index}",
                    "offer_id": offer["id"],
                    "ticketed_seat": offer["ticketed_seat"],
                    "additional_property": offer["additional_property"],
                }
                for index, offer in enumerate(offers, start=1)
            ]
        }

    async def cancel(self, transaction_number: str) -> None:
        if self.fail_cancel is not None:
            raise self.fail_cancel
        if transaction_number in self.canceled:
            raise ProviderRequestError(
                "Transaction already canceled", status_code=404, provider="reservation"
            )
        self.canceled.append(transaction_number)


class FakeBoxOfficeClient:
    def __init__(self, free_seats: list[tuple[str, str]] | None = None) -> None:
        self.free_seats = free_seats or []
        self.reserved: list[dict[str, Any]] = []
        self.deleted: list[dict[str, Any]] = []

    async def search_seat_state(self, params: dict[str, Any]) -> dict[str, Any]:
        return {
            "free_seats": [
                {"seat_section": section, "seat_number": number}
                for section, number in self.free_seats
            ]
        }

    async def reserve_temporarily(self, params: dict[str, Any]) -> dict[str, Any]:
        self.reserved.append(params)
        return {"tmp_reserve_num": f"{len(self.reserved):06d}"}

    async def delete_temporary_reservation(self, params: dict[str, Any]) -> None:
        self.deleted.append(params)


class FakeRegistrationClient:
    def __init__(self) -> None:
        self.started: list[dict[str, Any]] = []
        self.canceled: list[str] = []

    async def start(self, params: dict[str, Any]) -> dict[str, Any]:
        self.started.append(params)
        return {"id": f"register-{len(self.started)}"}

    async def cancel(self, transaction_number: str) -> None:
        self.canceled.append(transaction_number)


class FakeDepositClient:
    def __init__(self) -> None:
        self.started: list[dict[str, Any]] = []
        self.held: list[tuple[str, dict[str, Any]]] = []
        self.canceled: list[str] = []
        self.fail_cancel_once: set[str] = set()

    async def start(self, params: dict[str, Any]) -> dict[str, Any]:
        self.started.append(params)
        return {"id": f"deposit-{len(self.started)}", "transaction_number": "D1"}

    async def add_deposit(
        self, transaction_id: str, params: dict[str, Any]
    ) -> dict[str, Any]:
        self.held.append((transaction_id, params))
        return {"id": transaction_id, "status": "InProgress"}

    async def cancel(self, transaction_id: str) -> None:
        if transaction_id in self.fail_cancel_once:
            self.fail_cancel_once.discard(transaction_id)
            raise ProviderRequestError(
                "Deposit service unavailable", status_code=503, provider="deposit"
            )
        if transaction_id in self.canceled:
            raise ProviderRequestError(
                "Transaction already canceled", status_code=404, provider="deposit"
            )
        self.canceled.append(transaction_id)


# ── Fixtures ───────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def hook_registry() -> HookRegistry:
    """Fresh instrumentation registry per test."""
    registry = HookRegistry()
    set_hook_registry(registry)
    return registry


@pytest.fixture
def seller() -> Seller:
    return Seller(id=SELLER_ID, name="Cinema One", payment_accepted=["MovieTicket"])


@pytest.fixture
def transaction(seller: Seller) -> Transaction:
    return Transaction(
        id="tx-1",
        project_id=PROJECT_ID,
        agent=Agent(id=CUSTOMER_ID),
        seller=seller,
        expires=TRANSACTION_EXPIRES,
    )


@pytest.fixture
def transactions(transaction: Transaction) -> InMemoryTransactionStore:
    store = InMemoryTransactionStore()
    store.add(transaction)
    return store


@pytest.fixture
def actions() -> InMemoryActionStore:
    return InMemoryActionStore()


@pytest.fixture
def offers() -> list[Offer]:
    return [
        make_offer("adult", unit_price(1000, name="Adult")),
        make_offer("child", unit_price(700, name="Child")),
        make_offer("pair", unit_price(1800, per=2, name="Pair")),
    ]


@pytest.fixture
def seat_sections() -> list[SeatSection]:
    return [
        SeatSection(
            branch_code="A",
            seats=[
                Seat(seat_number="A1"),
                Seat(seat_number="A2"),
                Seat(seat_number="A3", availability=ItemAvailability.OUT_OF_STOCK),
                Seat(
                    seat_number="A4",
                    price_component=[
                        CategoryChargeSpecification(
                            price=500, category_code="Premium"
                        )
                    ],
                ),
            ],
        )
    ]


@pytest.fixture
def event() -> Event:
    return Event(
        id=EVENT_ID,
        project_id=PROJECT_ID,
        name="Opening night",
        start_date=datetime(2025, 12, 31, 19, 0, tzinfo=timezone.utc),
        location=Place(branch_code="01", name="Screen 1"),
        offered_through=OfferedThrough(identifier=ProviderIdentifier.RESERVATION),
    )


@pytest.fixture
def legacy_event() -> Event:
    return Event(
        id=LEGACY_EVENT_ID,
        project_id=PROJECT_ID,
        start_date=datetime(2025, 12, 31, 21, 0, tzinfo=timezone.utc),
        offered_through=OfferedThrough(identifier=ProviderIdentifier.BOX_OFFICE),
        provider_codes={"theater_code": "118", "screen_code": "20"},
    )


@pytest.fixture
def event_catalog(
    event: Event,
    legacy_event: Event,
    offers: list[Offer],
    seat_sections: list[SeatSection],
) -> InMemoryEventCatalog:
    catalog = InMemoryEventCatalog()
    catalog.add_event(event, offers, seat_sections)
    catalog.add_event(legacy_event, offers)
    return catalog


@pytest.fixture
def product_catalog() -> InMemoryProductCatalog:
    return InMemoryProductCatalog()


@pytest.fixture
def provider_settings() -> ProviderSettings:
    return ProviderSettings(endpoint="https://provider.example.com", timeout=0.5)


@pytest.fixture
def reservation_client() -> FakeReservationClient:
    return FakeReservationClient()


@pytest.fixture
def box_office_client() -> FakeBoxOfficeClient:
    return FakeBoxOfficeClient(free_seats=[("A", "A1"), ("A", "A2")])


@pytest.fixture
def registration_client() -> FakeRegistrationClient:
    return FakeRegistrationClient()


@pytest.fixture
def deposit_client() -> FakeDepositClient:
    return FakeDepositClient()


@pytest.fixture
def dispatcher(
    provider_settings: ProviderSettings,
    reservation_client: FakeReservationClient,
    box_office_client: FakeBoxOfficeClient,
    registration_client: FakeRegistrationClient,
    deposit_client: FakeDepositClient,
) -> ProviderDispatcher:
    numbers = InMemoryNumberPublisher()
    return ProviderDispatcher(
        [
            ReservationVariant(provider_settings, reservation_client, numbers),
            BoxOfficeVariant(provider_settings, box_office_client),
            ServiceRegistrationVariant(
                provider_settings, registration_client, numbers
            ),
            DepositVariant(provider_settings, deposit_client),
        ]
    )


@pytest.fixture
def lifecycle(
    transactions: InMemoryTransactionStore,
    actions: InMemoryActionStore,
    dispatcher: ProviderDispatcher,
) -> ActionLifecycleManager:
    return ActionLifecycleManager(
        transactions=transactions,
        actions=actions,
        dispatcher=dispatcher,
        id_generator=SequentialIDGenerator(),
    )


@pytest.fixture
def seat_service(
    lifecycle: ActionLifecycleManager, event_catalog: InMemoryEventCatalog
) -> SeatReservationService:
    return SeatReservationService(lifecycle, event_catalog, OfferValidator())


@pytest.fixture
def payment_card_service(
    lifecycle: ActionLifecycleManager, product_catalog: InMemoryProductCatalog
) -> PaymentCardService:
    return PaymentCardService(
        lifecycle,
        product_catalog,
        OfferValidator(),
        InMemoryNumberPublisher(check_digit=True),
    )


@pytest.fixture
def membership_service(
    lifecycle: ActionLifecycleManager, product_catalog: InMemoryProductCatalog
) -> ProgramMembershipService:
    return ProgramMembershipService(lifecycle, product_catalog, OfferValidator())


@pytest.fixture
def money_transfer_service(
    lifecycle: ActionLifecycleManager,
) -> MoneyTransferService:
    return MoneyTransferService(lifecycle)
