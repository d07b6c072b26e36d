"""
Service wiring for the profile editor.

Builds the API client, notification service and dialog host once at startup
and hands them out to screens.
"""

from functools import lru_cache
from typing import Optional

from profile_editor.config import Settings
from profile_editor.controllers.dialog import DialogHost, Presenter
from profile_editor.controllers.user_detail import UserDetailController
from profile_editor.services.admin_client import AdminApiClient
from profile_editor.services.notifications import NotificationService


# ─────────────────────────────────────────────────────────────────
# Global service instances
# ─────────────────────────────────────────────────────────────────

_admin_client: Optional[AdminApiClient] = None
_notification_service: Optional[NotificationService] = None
_dialog_host: Optional[DialogHost] = None
_settings: Optional[Settings] = None


# ─────────────────────────────────────────────────────────────────
# Cached singletons
# ─────────────────────────────────────────────────────────────────

@lru_cache()
def get_settings() -> Settings:
    """Get cached Settings instance."""
    return Settings()


# ─────────────────────────────────────────────────────────────────
# Initialization functions
# ─────────────────────────────────────────────────────────────────

def init_all_services(
    presenter: Presenter,
    settings: Optional[Settings] = None,
) -> None:
    """
    Initialize all services at application startup.

    Args:
        presenter: View-layer coroutine that renders and drives a dialog
        settings: Settings to use (defaults to get_settings())
    """
    global _admin_client, _notification_service, _dialog_host, _settings

    settings = settings or get_settings()
    settings.validate_required()
    _settings = settings

    _admin_client = AdminApiClient(
        base_url=settings.API_BASE_URL,
        token=settings.API_TOKEN,
        timeout=settings.API_TIMEOUT_SECONDS,
        admin_users_path=settings.ADMIN_USERS_PATH,
        self_profile_path=settings.SELF_PROFILE_PATH,
    )
    _notification_service = NotificationService(
        default_duration_ms=settings.NOTIFICATION_DURATION_MS,
    )
    _dialog_host = DialogHost(
        _admin_client,
        presenter,
        default_country=settings.DEFAULT_COUNTRY,
    )


def reset_services() -> None:
    """Drop all service instances (used by tests)."""
    global _admin_client, _notification_service, _dialog_host, _settings
    _admin_client = None
    _notification_service = None
    _dialog_host = None
    _settings = None


# ─────────────────────────────────────────────────────────────────
# Getters
# ─────────────────────────────────────────────────────────────────

def get_admin_client() -> AdminApiClient:
    """Get admin API client instance."""
    if _admin_client is None:
        raise RuntimeError("Profile editor services not initialized.")
    return _admin_client


def get_notification_service() -> NotificationService:
    """Get notification service instance."""
    if _notification_service is None:
        raise RuntimeError("Profile editor services not initialized.")
    return _notification_service


def get_dialog_host() -> DialogHost:
    """Get dialog host instance."""
    if _dialog_host is None:
        raise RuntimeError("Profile editor services not initialized.")
    return _dialog_host


def create_user_detail_controller() -> UserDetailController:
    """New controller for one user detail screen."""
    return UserDetailController(
        get_admin_client(),
        get_dialog_host(),
        get_notification_service(),
        settings=_settings or get_settings(),
    )
