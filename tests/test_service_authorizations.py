"""Payment card, program membership and money transfer authorizations."""

from __future__ import annotations

import pytest
from conftest import CUSTOMER_ID, PROJECT_ID, make_offer, unit_price

from offer_authorization.authorization import MoneyTransferSelection
from offer_authorization.domain import (
    AccountLocation,
    ActionStatus,
    MonetaryAmount,
    ObjectType,
    OfferedThrough,
    OfferSelection,
    Product,
    ProductType,
    ProviderIdentifier,
    TransactionRef,
)
from offer_authorization.primitives.exceptions import (
    ArgumentError,
    ArgumentNullError,
    EntityNotFoundError,
    ServiceUnavailableError,
)
from offer_authorization.primitives.numbers import luhn_check_digit

TX = TransactionRef(id="tx-1")


@pytest.fixture
def card_product(product_catalog) -> Product:
    product = Product(
        id="card",
        project_id=PROJECT_ID,
        product_type=ProductType.PAYMENT_CARD,
        name="Member card",
        service_type="Prepaid",
    )
    product_catalog.add_product(product, [make_offer("card-offer", unit_price(500))])
    return product


@pytest.fixture
def membership_product(product_catalog) -> Product:
    product = Product(
        id="gold",
        project_id=PROJECT_ID,
        product_type=ProductType.MEMBERSHIP_SERVICE,
        name="Gold",
        membership_for="gold-program",
    )
    product_catalog.add_product(
        product,
        [make_offer("offer-1", unit_price(3000), identifier="GOLD-MONTHLY")],
    )
    return product


@pytest.mark.asyncio
class TestPaymentCard:
    async def test_issues_card_number_and_holds_registration(
        self, payment_card_service, card_product, registration_client
    ) -> None:
        action = await payment_card_service.authorize(
            project_id=PROJECT_ID,
            transaction_ref=TX,
            agent_id=CUSTOMER_ID,
            product_id=card_product.id,
            selections=[OfferSelection(offer_id="card-offer")],
        )

        assert action.action_status == ActionStatus.COMPLETED
        assert action.object.type_of == ObjectType.PAYMENT_CARD
        assert action.instrument.identifier == ProviderIdentifier.SERVICE_REGISTRATION
        assert action.result is not None
        assert action.result.price == 500

        output = action.object.accepted_offer[0].item_offered.service_output
        assert output is not None
        assert output.type_of == "Prepaid"
        number = output.identifier
        assert number is not None
        assert len(number) == 16
        assert luhn_check_digit(number[:-1]) == int(number[-1])

        sent = registration_client.started[0]
        assert sent["object"][0]["item_offered"]["service_output"]["identifier"] == (
            number
        )
        assert action.result.accepted_offers[0].reservation_id == number

    async def test_cancel_voids_register_transaction(
        self, payment_card_service, lifecycle, card_product, registration_client
    ) -> None:
        action = await payment_card_service.authorize(
            project_id=PROJECT_ID,
            transaction_ref=TX,
            agent_id=CUSTOMER_ID,
            product_id=card_product.id,
            selections=[OfferSelection(offer_id="card-offer")],
        )

        await lifecycle.cancel(
            project_id=PROJECT_ID,
            action_id=action.id,
            transaction_ref=TX,
            agent_id=CUSTOMER_ID,
        )

        pending = action.object.pending_transaction
        assert pending is not None
        assert registration_client.canceled == [pending.transaction_number]

    async def test_membership_product_rejected(
        self, payment_card_service, membership_product
    ) -> None:
        with pytest.raises(ArgumentError) as exc_info:
            await payment_card_service.authorize(
                project_id=PROJECT_ID,
                transaction_ref=TX,
                agent_id=CUSTOMER_ID,
                product_id=membership_product.id,
                selections=[OfferSelection(offer_id="GOLD-MONTHLY")],
            )

        assert exc_info.value.argument_name == "product"


@pytest.mark.asyncio
class TestProgramMembership:
    async def test_enrolls_by_offer_identifier(
        self, membership_service, membership_product, registration_client
    ) -> None:
        action = await membership_service.authorize(
            project_id=PROJECT_ID,
            transaction_ref=TX,
            agent_id=CUSTOMER_ID,
            product_id=membership_product.id,
            selections=[OfferSelection(offer_id="GOLD-MONTHLY")],
        )

        assert action.action_status == ActionStatus.COMPLETED
        assert action.result is not None
        assert action.result.price == 3000
        item = action.object.accepted_offer[0].item_offered
        assert item.type_of == ObjectType.PROGRAM_MEMBERSHIP.value
        assert item.membership_for == "gold-program"
        sent = registration_client.started[0]["object"][0]["item_offered"]
        assert sent["membership_for"] == "gold-program"

    async def test_offer_id_is_not_an_identifier(
        self, membership_service, membership_product
    ) -> None:
        with pytest.raises(EntityNotFoundError):
            await membership_service.authorize(
                project_id=PROJECT_ID,
                transaction_ref=TX,
                agent_id=CUSTOMER_ID,
                product_id=membership_product.id,
                selections=[OfferSelection(offer_id="offer-1")],
            )

    async def test_program_required(self, membership_service, product_catalog) -> None:
        product_catalog.add_product(
            Product(
                id="orphan",
                project_id=PROJECT_ID,
                product_type=ProductType.MEMBERSHIP_SERVICE,
            ),
            [make_offer("offer-2", unit_price(100), identifier="ORPHAN")],
        )

        with pytest.raises(ArgumentNullError) as exc_info:
            await membership_service.authorize(
                project_id=PROJECT_ID,
                transaction_ref=TX,
                agent_id=CUSTOMER_ID,
                product_id="orphan",
                selections=[OfferSelection(offer_id="ORPHAN")],
            )

        assert exc_info.value.argument_name == "item_offered.membership_for.id"


def transfer(value: int = 5000, **kwargs) -> MoneyTransferSelection:
    return MoneyTransferSelection(
        amount=MonetaryAmount(value=value),
        to_location=AccountLocation(account_number="P-123"),
        description="Top-up",
        **kwargs,
    )


@pytest.mark.asyncio
class TestMoneyTransfer:
    async def test_amount_is_held_and_priced(
        self, money_transfer_service, deposit_client
    ) -> None:
        action = await money_transfer_service.authorize(
            project_id=PROJECT_ID,
            transaction_ref=TX,
            agent_id=CUSTOMER_ID,
            selection=transfer(),
        )

        assert action.action_status == ActionStatus.COMPLETED
        assert action.instrument.identifier == ProviderIdentifier.ACCOUNT_DEPOSIT
        assert action.result is not None
        assert action.result.price == 5000
        assert action.result.price_currency == "JPY"
        transaction_id, params = deposit_client.held[0]
        assert transaction_id == "deposit-1"
        assert params["object"]["amount"]["value"] == 5000
        assert params["object"]["to_location"]["account_number"] == "P-123"

    async def test_non_positive_amount_rejected(
        self, money_transfer_service, deposit_client
    ) -> None:
        with pytest.raises(ArgumentError) as exc_info:
            await money_transfer_service.authorize(
                project_id=PROJECT_ID,
                transaction_ref=TX,
                agent_id=CUSTOMER_ID,
                selection=transfer(0),
            )

        assert exc_info.value.argument_name == "amount"
        assert deposit_client.started == []

    async def test_seat_provider_cannot_hold_money(
        self, money_transfer_service
    ) -> None:
        selection = transfer(
            offered_through=OfferedThrough(identifier=ProviderIdentifier.RESERVATION)
        )

        with pytest.raises(ServiceUnavailableError):
            await money_transfer_service.authorize(
                project_id=PROJECT_ID,
                transaction_ref=TX,
                agent_id=CUSTOMER_ID,
                selection=selection,
            )

    async def test_void_cancels_every_transfer(
        self, money_transfer_service, deposit_client, actions
    ) -> None:
        for value in (1000, 2000):
            await money_transfer_service.authorize(
                project_id=PROJECT_ID,
                transaction_ref=TX,
                agent_id=CUSTOMER_ID,
                selection=transfer(value),
            )

        voided = await money_transfer_service.void(
            project_id=PROJECT_ID, transaction_ref=TX, agent_id=CUSTOMER_ID
        )

        assert len(voided) == 2
        assert all(a.action_status == ActionStatus.CANCELED for a in voided)
        assert sorted(deposit_client.canceled) == ["deposit-1", "deposit-2"]
        assert (
            await actions.search_by_purpose(TX, statuses={ActionStatus.COMPLETED})
            == []
        )

    async def test_void_releases_remaining_holds_after_failure(
        self, money_transfer_service, deposit_client, actions
    ) -> None:
        for value in (1000, 2000):
            await money_transfer_service.authorize(
                project_id=PROJECT_ID,
                transaction_ref=TX,
                agent_id=CUSTOMER_ID,
                selection=transfer(value),
            )
        deposit_client.fail_cancel_once.add("deposit-1")

        with pytest.raises(ServiceUnavailableError):
            await money_transfer_service.void(
                project_id=PROJECT_ID, transaction_ref=TX, agent_id=CUSTOMER_ID
            )

        assert deposit_client.canceled == ["deposit-2"]
        assert len(
            await actions.search_by_purpose(TX, statuses={ActionStatus.CANCELED})
        ) == 2

    async def test_void_retry_releases_canceled_hold(
        self, money_transfer_service, deposit_client
    ) -> None:
        for value in (1000, 2000):
            await money_transfer_service.authorize(
                project_id=PROJECT_ID,
                transaction_ref=TX,
                agent_id=CUSTOMER_ID,
                selection=transfer(value),
            )
        deposit_client.fail_cancel_once.add("deposit-1")
        with pytest.raises(ServiceUnavailableError):
            await money_transfer_service.void(
                project_id=PROJECT_ID, transaction_ref=TX, agent_id=CUSTOMER_ID
            )

        voided = await money_transfer_service.void(
            project_id=PROJECT_ID, transaction_ref=TX, agent_id=CUSTOMER_ID
        )

        assert len(voided) == 2
        assert sorted(deposit_client.canceled) == ["deposit-1", "deposit-2"]
