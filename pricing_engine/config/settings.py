"""
==============================================================================
Engine Settings Module
==============================================================================

Configuration management for the pricing engine using Pydantic Settings.

A single cached Settings instance is shared by the formatters, the catalog
loader and the command line entry point.

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables
2. .env file
3. Default values

==============================================================================
"""

from __future__ import annotations

import logging
from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Module logger
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Engine settings loaded from environment variables.

    Attributes:
        app_name: Display name used in logs and CLI output
        app_env: Environment mode (development/staging/production)
        debug: Enable verbose logging
        currency_suffix: Suffix appended to formatted prices
        thousands_separator: Separator placed between digit groups
        default_portion_weight: Portion weight (kg) for products that set none
        data_file: JSON document with products, catalogs and overrides

    Example:
        >>> settings = Settings()
        >>> settings.currency_suffix
        '₽'
    """

    # =========================================================================
    # PYDANTIC SETTINGS CONFIGURATION
    # =========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================
    app_name: str = Field(
        default="Storefront Pricing Engine",
        description="Display name for the engine"
    )

    app_env: str = Field(
        default="development",
        description="Environment mode: development, staging, production"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode for verbose logging"
    )

    # =========================================================================
    # DISPLAY SETTINGS
    # =========================================================================
    currency_suffix: str = Field(
        default="₽",
        max_length=8,
        description="Currency suffix appended to formatted prices"
    )

    thousands_separator: str = Field(
        default=" ",
        max_length=1,
        description="Separator between thousands groups"
    )

    # =========================================================================
    # PACKAGING SETTINGS
    # =========================================================================
    default_portion_weight: Decimal = Field(
        default=Decimal("0.1"),
        gt=0,
        le=100,
        description="Portion weight in kg when a product does not set one"
    )

    # =========================================================================
    # FILE PATH SETTINGS
    # =========================================================================
    data_file: str = Field(
        default="data/catalog.json",
        description="Path to the products/catalogs/overrides JSON document"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, value: str) -> str:
        """
        Validate and normalize application environment.

        Unknown values fall back to 'development' with a warning.
        """
        valid_envs = {"development", "staging", "production"}
        normalized = value.lower().strip()

        if normalized not in valid_envs:
            logger.warning(
                f"Unknown environment '{value}', defaulting to 'development'"
            )
            return "development"

        return normalized

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    def __repr__(self) -> str:
        return (
            f"Settings(app_name={self.app_name!r}, "
            f"app_env={self.app_env!r}, "
            f"debug={self.debug})"
        )


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the global Settings instance.

    Uses lru_cache so the environment is read once per process. Tests that
    change the environment call ``get_settings.cache_clear()``.

    Returns:
        Global Settings instance
    """
    settings = Settings()

    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
