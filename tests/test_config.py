"""Tests for environment-driven settings."""

from __future__ import annotations

import json
from datetime import timedelta

import pytest

from offer_authorization.config import (
    ProjectSettings,
    ProviderSettings,
    Settings,
    get_settings,
)
from offer_authorization.domain import ProviderIdentifier
from offer_authorization.primitives.exceptions import ServiceUnavailableError


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OFFER_AUTH_LOG_LEVEL", raising=False)

    settings = Settings(_env_file=None)

    assert settings.mongo_database == "offer_authorization"
    assert settings.log_level == "INFO"
    assert settings.projects == []


def test_projects_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OFFER_AUTH_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv(
        "OFFER_AUTH_PROJECTS",
        json.dumps(
            [
                {
                    "project_id": "cinerino",
                    "providers": {
                        "Reservation": {
                            "endpoint": "https://reserve.example.com",
                            "client_secret": "s3cret",
                            "timeout": 5,
                        }
                    },
                }
            ]
        ),
    )

    settings = get_settings()

    assert settings.log_level == "DEBUG"
    project = settings.project("cinerino")
    assert project.default_provider == ProviderIdentifier.RESERVATION
    reservation = project.provider(ProviderIdentifier.RESERVATION)
    assert reservation.timeout == 5.0
    assert reservation.client_secret.get_secret_value() == "s3cret"
    assert reservation.hold_extension == timedelta(days=30)


def test_secret_not_rendered() -> None:
    settings = ProviderSettings(
        endpoint="https://x.example.com", client_secret="s3cret"
    )

    assert "s3cret" not in repr(settings)


def test_unknown_project_and_provider() -> None:
    settings = Settings(_env_file=None, projects=[ProjectSettings(project_id="p1")])

    with pytest.raises(ServiceUnavailableError):
        settings.project("p2")
    with pytest.raises(ServiceUnavailableError):
        settings.project("p1").provider(ProviderIdentifier.BOX_OFFICE)
