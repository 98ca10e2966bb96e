"""Storefront configuration.

Environment-based configuration using Pydantic Settings.  Every value
can be overridden with a ``STOREFRONT_``-prefixed environment variable
or a ``.env`` file.
"""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Storefront"
    app_version: str = "0.1.0"
    api_prefix: str = "/api"
    log_level: str = "INFO"

    # Persistence
    data_dir: Path = _DEFAULT_DATA_DIR

    # Checkout pricing
    free_shipping_threshold: Decimal = Field(default=Decimal("100.00"), ge=0)
    flat_shipping_rate: Decimal = Field(default=Decimal("10.00"), ge=0)
    tax_rate: Decimal = Field(default=Decimal("0.10"), ge=0)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        """Accept ``info`` as well as ``INFO``."""
        if isinstance(v, str):
            return v.strip().upper()
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
