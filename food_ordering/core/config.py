"""
Application Configuration Module

Centralizes all configuration using environment variables with Pydantic Settings.
Supports two modes:
    - DEVELOPMENT: Uses the in-memory backend and mock session provider
    - PRODUCTION: Talks to the real Appwrite project

The ENV_MODE variable controls which services are instantiated throughout
the application, so the seeder and the session gate can be exercised locally
without an Appwrite project.

Usage:
    from food_ordering.core.config import get_settings

    settings = get_settings()
    if settings.is_development:
        # Use mock services
    else:
        # Use Appwrite

Author: Khalil_Bannouri
Version: 1.0.0
"""

import logging
import sys
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


BUNDLED_DATASET = Path(__file__).resolve().parent.parent / "data" / "catalog.json"


class EnvironmentMode(str, Enum):
    """
    Application environment modes.

    Attributes:
        DEVELOPMENT: Local testing with mock services
        PRODUCTION: Live Appwrite project
        STAGING: Separate Appwrite project used before production
    """
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    STAGING = "staging"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    The Appwrite API key grants server access to the whole project and
    should NEVER be committed to version control.

    Attributes:
        env_mode: Current environment (development/production/staging)
        debug: Enable verbose logging and error details

        # Appwrite
        appwrite_endpoint: Base URL of the Appwrite REST API
        appwrite_project_id: Project the catalog lives in
        appwrite_api_key: Server key used by the seeder
        appwrite_session_jwt: Client session used by the session gate

        # Catalog
        database_id: Database holding the catalog collections
        categories_collection_id: Collection of categories
        customizations_collection_id: Collection of customizations
        menu_collection_id: Collection of menu items
        menu_customizations_collection_id: Join records menu <-> customization
        bucket_id: Storage bucket for menu item images
        user_collection_id: Collection of user profiles
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # ENVIRONMENT
    # ==========================================================================

    env_mode: EnvironmentMode = Field(
        default=EnvironmentMode.DEVELOPMENT,
        description="Application environment mode"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )

    # ==========================================================================
    # APPLICATION
    # ==========================================================================

    app_name: str = Field(
        default="Food Ordering",
        description="Application display name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    sign_in_route: str = Field(
        default="/sign-in",
        description="Route unauthenticated visitors are redirected to"
    )

    # ==========================================================================
    # APPWRITE
    # ==========================================================================

    appwrite_endpoint: str = Field(
        default="https://cloud.appwrite.io/v1",
        description="Appwrite REST API base URL"
    )
    appwrite_project_id: Optional[str] = Field(
        default=None,
        description="Appwrite project ID"
    )
    appwrite_api_key: Optional[str] = Field(
        default=None,
        description="Appwrite server API key (seeding)"
    )
    appwrite_session_jwt: Optional[str] = Field(
        default=None,
        description="JWT of the signed-in account (session gate)"
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for Appwrite and image requests"
    )

    # ==========================================================================
    # CATALOG COLLECTIONS
    # ==========================================================================

    database_id: str = Field(
        default="food_ordering",
        description="Appwrite database ID"
    )
    categories_collection_id: str = Field(
        default="categories",
        description="Categories collection ID"
    )
    customizations_collection_id: str = Field(
        default="customizations",
        description="Customizations collection ID"
    )
    menu_collection_id: str = Field(
        default="menu",
        description="Menu items collection ID"
    )
    menu_customizations_collection_id: str = Field(
        default="menu_customizations",
        description="Menu <-> customization join collection ID"
    )
    bucket_id: str = Field(
        default="assets",
        description="Storage bucket for menu images"
    )
    user_collection_id: Optional[str] = Field(
        default=None,
        description="User profiles collection ID"
    )

    # ==========================================================================
    # DATASET
    # ==========================================================================

    dataset_path: Optional[Path] = Field(
        default=None,
        description="JSON dataset to seed from (bundled dataset when unset)"
    )

    # ==========================================================================
    # VALIDATORS
    # ==========================================================================

    @field_validator("env_mode", mode="before")
    @classmethod
    def validate_env_mode(cls, v: str) -> EnvironmentMode:
        """Convert string to EnvironmentMode enum."""
        if isinstance(v, EnvironmentMode):
            return v
        try:
            return EnvironmentMode(v.lower())
        except ValueError:
            valid = [e.value for e in EnvironmentMode]
            raise ValueError(f"Invalid env_mode. Must be one of: {valid}")

    @field_validator("appwrite_endpoint")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.env_mode == EnvironmentMode.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.env_mode == EnvironmentMode.PRODUCTION

    @property
    def is_staging(self) -> bool:
        """Check if running in staging mode."""
        return self.env_mode == EnvironmentMode.STAGING

    @property
    def use_real_services(self) -> bool:
        """Check if the real Appwrite project should be used."""
        return self.env_mode in (EnvironmentMode.PRODUCTION, EnvironmentMode.STAGING)

    @property
    def resolved_dataset_path(self) -> Path:
        """Dataset file to seed from."""
        return self.dataset_path or BUNDLED_DATASET

    @property
    def catalog_collection_ids(self) -> list[str]:
        """Collections wiped by the seeder, in wipe order."""
        return [
            self.categories_collection_id,
            self.customizations_collection_id,
            self.menu_collection_id,
            self.menu_customizations_collection_id,
        ]

    # ==========================================================================
    # VALIDATION METHODS
    # ==========================================================================

    def validate_production_config(self) -> list[str]:
        """
        Validate that all required Appwrite settings are configured.

        Returns:
            List of missing configuration keys (empty if all present)
        """
        missing = []

        if self.use_real_services:
            required = {
                "APPWRITE_ENDPOINT": self.appwrite_endpoint,
                "APPWRITE_PROJECT_ID": self.appwrite_project_id,
                "APPWRITE_API_KEY": self.appwrite_api_key,
                "DATABASE_ID": self.database_id,
                "CATEGORIES_COLLECTION_ID": self.categories_collection_id,
                "CUSTOMIZATIONS_COLLECTION_ID": self.customizations_collection_id,
                "MENU_COLLECTION_ID": self.menu_collection_id,
                "MENU_CUSTOMIZATIONS_COLLECTION_ID": self.menu_customizations_collection_id,
                "BUCKET_ID": self.bucket_id,
            }
            missing = [key for key, value in required.items() if not value]

        return missing


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are loaded only once,
    so every service sees the same configuration for the
    lifetime of the process.

    Returns:
        Settings: Configured application settings

    Example:
        >>> settings = get_settings()
        >>> print(settings.env_mode)
        EnvironmentMode.DEVELOPMENT
    """
    return Settings()


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured package logger
    """
    settings = get_settings()

    if settings.debug:
        level = logging.DEBUG

    log_format = "%(asctime)s │ %(levelname)-8s │ %(name)-25s │ %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return logging.getLogger("food_ordering")
