"""Mini README: Centralised configuration for Pocketledger.

Structure:
    * PocketledgerSettings - Pydantic settings model read from the environment.
    * get_settings - cached accessor shared by the CLI and web application.

Usage:
    Every option can be supplied through ``POCKETLEDGER_*`` environment
    variables or a ``.env`` file. ``timezone`` fixes the calendar used for
    month boundaries and daily balance points; it defaults to UTC so results
    never depend on the host clock's local zone.
"""

from __future__ import annotations

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PocketledgerSettings(BaseSettings):
    """Runtime configuration for the ledger service."""

    model_config = SettingsConfigDict(
        env_prefix="POCKETLEDGER_",
        env_file=".env",
        case_sensitive=False,
    )

    environment: str = Field(
        "development",
        description='Environment label; "production" disables auto-reload in the launcher.',
    )
    log_level: str = Field("INFO", description="Root logging level name.")
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the web service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the web service exposes.",
        ge=1,
        le=65535,
    )
    timezone: str = Field(
        "UTC",
        description="IANA zone defining calendar days and month boundaries.",
    )
    default_owner: str = Field(
        "demo",
        description="Owner key used by the HTTP interface, which has no authentication.",
        min_length=1,
    )
    history_days: int = Field(
        30,
        description="Default trailing window for the balance history endpoint.",
        ge=0,
    )
    max_history_days: int = Field(
        3660,
        description="Largest balance history window a caller may request.",
        ge=0,
    )
    recent_limit: int = Field(
        10,
        description="Default number of recent transactions in the financial context.",
        ge=1,
    )
    seed_demo_data: bool = Field(
        True,
        description="Populate the default owner's ledger with demo transactions on startup.",
    )

    @field_validator("timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        """Reject zone names the zoneinfo database does not know."""

        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as error:
            raise ValueError(f"Unknown timezone: {value}") from error
        return value

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        """Store level names upper-cased so logging accepts them."""

        return value.strip().upper()

    @property
    def is_production(self) -> bool:
        """Whether the service runs with production defaults."""

        return self.environment.strip().lower() == "production"

    @property
    def tzinfo(self) -> ZoneInfo:
        """The configured ledger timezone as a ``tzinfo`` instance."""

        return ZoneInfo(self.timezone)


@lru_cache()
def get_settings() -> PocketledgerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return PocketledgerSettings()
