"""
==============================================================================
Application Settings Module
==============================================================================

Configuration management for the marketplace using Pydantic Settings.

This module implements the Singleton pattern to ensure a single global
configuration instance throughout the application lifecycle.

Features:
---------
- Environment variable loading with type validation
- .env file support for local development
- Computed properties for derived values (cookie flags, expiry seconds)

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables
2. .env file
3. Default values

Security Considerations:
-----------------------
- Never commit .env files to version control
- Use a strong SESSION_SECRET_KEY in production
- Session cookies are only marked Secure in production unless overridden

==============================================================================
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Module logger
logger = logging.getLogger(__name__)

DEFAULT_SECRET_KEY = "dev-secret-change-me-please"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Display name for the application
        app_env: Environment mode (development/staging/production)
        debug: Enable debug mode for verbose logging
        host: Server bind address
        port: Server port number
        database_url: SQLAlchemy database connection string
        session_secret_key: Secret used to sign session tokens
        jwt_algorithm: Algorithm for session token signing (HS256 family)
        session_expire_days: Session token lifetime in days
        session_cookie_name: Name of the cookie carrying the session token
        session_cookie_secure: Force the Secure cookie flag on or off
        bcrypt_rounds: Bcrypt cost factor for password hashes
        cors_origins: Allowed CORS origins (JSON array string)

    Example:
        >>> settings = Settings()
        >>> settings.session_cookie_name
        'antbid_token'
        >>> settings.is_production
        False
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
        default="AntBid Marketplace",
        description="Display name for the application"
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
    # SERVER SETTINGS
    # =========================================================================
    host: str = Field(
        default="0.0.0.0",
        description="Server bind address"
    )

    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Server port number"
    )

    # =========================================================================
    # DATABASE SETTINGS
    # =========================================================================
    database_url: str = Field(
        default="sqlite:///./storage/db/antbid.db",
        description="SQLAlchemy database connection string"
    )

    # =========================================================================
    # SESSION SETTINGS
    # =========================================================================
    session_secret_key: str = Field(
        default=DEFAULT_SECRET_KEY,
        min_length=16,
        description="Secret key for session token signing"
    )

    jwt_algorithm: str = Field(
        default="HS256",
        description="Algorithm for session token signing"
    )

    session_expire_days: int = Field(
        default=7,
        ge=1,
        le=90,
        description="Session lifetime in days"
    )

    session_cookie_name: str = Field(
        default="antbid_token",
        min_length=1,
        description="Cookie carrying the session token"
    )

    session_cookie_secure: Optional[bool] = Field(
        default=None,
        description="Override for the Secure cookie flag (defaults to production)"
    )

    bcrypt_rounds: int = Field(
        default=10,
        ge=4,
        le=31,
        description="Bcrypt cost factor"
    )

    # =========================================================================
    # CORS SETTINGS
    # =========================================================================
    cors_origins: str = Field(
        default='["http://localhost:3000"]',
        description="Allowed CORS origins as JSON array string"
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

    @field_validator("jwt_algorithm")
    @classmethod
    def validate_jwt_algorithm(cls, value: str) -> str:
        """
        Validate the signing algorithm is a shared-secret HMAC algorithm.

        Raises:
            ValueError: If algorithm is not supported
        """
        supported = {"HS256", "HS384", "HS512"}

        if value.upper() not in supported:
            raise ValueError(
                f"Unsupported JWT algorithm: {value}. "
                f"Supported: {', '.join(sorted(supported))}"
            )

        return value.upper()

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def cookie_secure(self) -> bool:
        """Whether the session cookie carries the Secure flag."""
        if self.session_cookie_secure is not None:
            return self.session_cookie_secure
        return self.is_production

    @property
    def session_expire_seconds(self) -> int:
        """Get session lifetime in seconds."""
        return self.session_expire_days * 24 * 60 * 60

    @property
    def cors_origins_list(self) -> List[str]:
        """
        Parse CORS origins from JSON string to list.

        Returns:
            List of allowed origin strings
        """
        try:
            origins = json.loads(self.cors_origins)
            if isinstance(origins, list):
                return origins
            return []
        except json.JSONDecodeError:
            logger.warning(
                f"Invalid CORS origins JSON: {self.cors_origins}, "
                "defaulting to []"
            )
            return []

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================
    def get_database_path(self) -> Optional[Path]:
        """
        Extract database file path for SQLite databases.

        Returns:
            Path to database file, or None for in-memory and non-SQLite databases
        """
        if not self.database_url.startswith("sqlite:///"):
            return None

        db_path = self.database_url.replace("sqlite:///", "", 1)
        if not db_path or db_path == ":memory:":
            return None
        if db_path.startswith("./"):
            db_path = db_path[2:]
        return Path(db_path)

    def ensure_directories(self) -> None:
        """Create the SQLite database directory if needed."""
        db_path = self.get_database_path()
        if db_path:
            db_path.parent.mkdir(parents=True, exist_ok=True)

        logger.debug("Required directories created/verified")

    def __repr__(self) -> str:
        """String representation for debugging."""
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
    Get the global Settings instance (singleton pattern).

    Returns:
        Global Settings instance
    """
    settings = Settings()

    settings.ensure_directories()

    if settings.is_production and settings.session_secret_key == DEFAULT_SECRET_KEY:
        logger.warning(
            "⚠️ SESSION_SECRET_KEY is the development default; "
            "set a strong secret for production"
        )

    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
