"""Tests for ProviderDispatcher."""

from __future__ import annotations

import logging

import httpx
import pytest

from offer_authorization.adapters.memory import InMemoryNumberPublisher
from offer_authorization.config import ProjectSettings, ProviderSettings
from offer_authorization.domain import ObjectType, OfferedThrough, ProviderIdentifier
from offer_authorization.primitives.exceptions import ServiceUnavailableError
from offer_authorization.providers import (
    BoxOfficeVariant,
    DepositVariant,
    ProviderDispatcher,
    ReservationVariant,
)


def through(identifier: ProviderIdentifier | None) -> OfferedThrough:
    return OfferedThrough(identifier=identifier)


class TestResolve:
    def test_declared_identifier_wins(self, dispatcher) -> None:
        resolved = dispatcher.resolve(through(ProviderIdentifier.BOX_OFFICE))

        assert resolved == ProviderIdentifier.BOX_OFFICE

    def test_missing_identifier_defaults_with_warning(
        self, dispatcher, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="offer_authorization.providers"):
            resolved = dispatcher.resolve(None)

        assert resolved == ProviderIdentifier.RESERVATION
        assert any("defaulting to Reservation" in r.message for r in caplog.records)

    def test_fallback_used_for_missing_identifier(self, dispatcher) -> None:
        resolved = dispatcher.resolve(
            through(None), fallback=ProviderIdentifier.ACCOUNT_DEPOSIT
        )

        assert resolved == ProviderIdentifier.ACCOUNT_DEPOSIT


class TestSelect:
    def test_selects_variant_for_object_type(self, dispatcher) -> None:
        variant = dispatcher.select(
            through(ProviderIdentifier.BOX_OFFICE), ObjectType.SEAT_RESERVATION
        )

        assert isinstance(variant, BoxOfficeVariant)

    def test_variant_must_serve_object_type(self, dispatcher) -> None:
        with pytest.raises(ServiceUnavailableError):
            dispatcher.select(
                through(ProviderIdentifier.ACCOUNT_DEPOSIT), ObjectType.SEAT_RESERVATION
            )

    def test_unconfigured_provider(self, provider_settings, deposit_client) -> None:
        dispatcher = ProviderDispatcher(
            [DepositVariant(provider_settings, deposit_client)]
        )

        with pytest.raises(ServiceUnavailableError, match="not configured"):
            dispatcher.select(None, ObjectType.SEAT_RESERVATION)


class TestFromProjectSettings:
    def test_builds_configured_variants(self) -> None:
        project = ProjectSettings(
            project_id="cinerino",
            default_provider=ProviderIdentifier.BOX_OFFICE,
            providers={
                ProviderIdentifier.RESERVATION: ProviderSettings(
                    endpoint="https://reserve.example.com"
                ),
                ProviderIdentifier.BOX_OFFICE: ProviderSettings(
                    endpoint="https://box.example.com", timeout=5.0
                ),
            },
        )

        dispatcher = ProviderDispatcher.from_project_settings(
            project,
            transaction_numbers=InMemoryNumberPublisher(),
            http_client=httpx.AsyncClient(),
        )

        assert dispatcher.default == ProviderIdentifier.BOX_OFFICE
        assert isinstance(
            dispatcher.get(ProviderIdentifier.RESERVATION), ReservationVariant
        )
        box_office = dispatcher.get(ProviderIdentifier.BOX_OFFICE)
        assert box_office.settings.timeout == 5.0
        with pytest.raises(ServiceUnavailableError):
            dispatcher.get(ProviderIdentifier.ACCOUNT_DEPOSIT)
