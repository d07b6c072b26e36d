"""
Profile editor settings.

Extends the base settings with profile-editor-specific configuration.
"""

from common.config import BaseAppSettings


class Settings(BaseAppSettings):
    """Profile-editor-specific settings."""

    # ==========================================================================
    # Admin API
    # ==========================================================================
    ADMIN_USERS_PATH: str = "/api/admin/users"
    SELF_PROFILE_PATH: str = "/api/user/profile"

    # ==========================================================================
    # Form Defaults
    # ==========================================================================
    # Used when the snapshot's home address has no country
    DEFAULT_COUNTRY: str = "Switzerland"

    # ==========================================================================
    # Notifications
    # ==========================================================================
    NOTIFICATION_DURATION_MS: int = 3000
    NOTIFICATION_ACTION_LABEL: str = "Close"
    PROFILE_UPDATE_SUCCESS_MESSAGE: str = "User profile updated successfully"


# Global settings instance
settings = Settings()
