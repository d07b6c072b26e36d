"""
Base settings class for environment configuration.

Uses Pydantic Settings for automatic environment variable loading.
Extend this class for application-specific settings.

Example:
    from common.config import BaseAppSettings

    class Settings(BaseAppSettings):
        # App-specific settings
        DEFAULT_COUNTRY: str = "Switzerland"

    settings = Settings()
    print(settings.API_BASE_URL)
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseAppSettings(BaseSettings):
    """
    Base settings class with common configuration options.

    Automatically loads values from environment variables.
    Extend this class for application-specific settings.
    """

    # ==========================================================================
    # API Settings
    # ==========================================================================
    API_BASE_URL: str = "http://localhost:5002"
    API_TIMEOUT_SECONDS: float = 10.0
    API_TOKEN: Optional[str] = None

    # ==========================================================================
    # Runtime Settings
    # ==========================================================================
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development, staging, production
    LOG_LEVEL: str = "INFO"

    # ==========================================================================
    # Pydantic Settings Configuration
    # ==========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",  # Allow app-specific settings
        case_sensitive=True,
    )

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT.lower() == "production"

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT.lower() == "development"

    def get_log_level(self) -> str:
        """Normalized logging level name."""
        return self.LOG_LEVEL.upper()

    def validate_required(self) -> None:
        """
        Validate that required settings are configured.

        Raises:
            ValueError: If required settings are missing
        """
        errors = []

        if not self.API_BASE_URL.startswith(("http://", "https://")):
            errors.append("API_BASE_URL must be an http(s) URL")

        if self.API_TIMEOUT_SECONDS <= 0:
            errors.append("API_TIMEOUT_SECONDS must be positive")

        if self.is_production() and not self.API_TOKEN:
            errors.append("API_TOKEN is required in production")

        if errors:
            raise ValueError("Configuration errors:\n- " + "\n- ".join(errors))
