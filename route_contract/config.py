"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - Defaults reproduce the wire contract exactly (generic error text, ";;;" separator)

Design Decisions:
    - Env prefix ROUTE_CONTRACT_ so the adapter never collides with host app settings
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Adapter settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ROUTE_CONTRACT_", env_file=".env",
        case_sensitive=False, extra="ignore",
    )

    # Envelope
    unexpected_error_message: str = "Something went wrong"
    validation_error_prefix: str = "Validation error"
    validation_issue_separator: str = Field(";;;", min_length=1)

    # Observability
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
