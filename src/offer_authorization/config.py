"""Settings loaded from the environment and per-project provider configuration.

Provider credentials are scoped to a project and passed explicitly to the
provider dispatcher; no module-level client holds them.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.event import ProviderIdentifier
from .primitives.exceptions import ServiceUnavailableError

DEFAULT_HOLD_EXTENSION = timedelta(days=30)
DEFAULT_ALREADY_RESERVED_MESSAGE = "already reserved"


class ProviderSettings(BaseModel):
    """Connection settings of one remote provider for one project."""

    model_config = ConfigDict(frozen=True)

    endpoint: str
    client_id: str = ""
    client_secret: SecretStr = SecretStr("")
    timeout: float = Field(default=20.0, gt=0, description="Remote call deadline (s)")
    hold_extension: timedelta = Field(
        default=DEFAULT_HOLD_EXTENSION,
        description="Added to the transaction expiry to form the hold expiry",
    )
    already_reserved_message: str = DEFAULT_ALREADY_RESERVED_MESSAGE


class ProjectSettings(BaseModel):
    """Provider configuration of a single project (tenant)."""

    model_config = ConfigDict(frozen=True)

    project_id: str
    default_provider: ProviderIdentifier = ProviderIdentifier.RESERVATION
    providers: dict[ProviderIdentifier, ProviderSettings] = Field(default_factory=dict)

    def provider(self, identifier: ProviderIdentifier) -> ProviderSettings:
        settings = self.providers.get(identifier)
        if settings is None:
            raise ServiceUnavailableError(
                f"Provider {identifier.value} is not configured "
                f"for project {self.project_id}"
            )
        return settings


class Settings(BaseSettings):
    """Application settings loaded from ``OFFER_AUTH_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="OFFER_AUTH_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Storage
    mongo_url: str = "mongodb://localhost:27017"
    mongo_database: str = "offer_authorization"
    redis_url: str = "redis://localhost:6379/0"

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Tenants
    projects: list[ProjectSettings] = Field(default_factory=list)

    def project(self, project_id: str) -> ProjectSettings:
        for project in self.projects:
            if project.project_id == project_id:
                return project
        raise ServiceUnavailableError(f"Project {project_id} is not configured")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once."""
    return Settings()


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logging.getLogger("offer_authorization").setLevel(settings.log_level)
