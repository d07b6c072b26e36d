"""Tests for settings validation and service wiring."""

import pytest

from profile_editor import dependencies
from profile_editor.config import Settings
from profile_editor.controllers.dialog import DialogHost
from profile_editor.controllers.user_detail import UserDetailController
from profile_editor.services.admin_client import AdminApiClient
from profile_editor.services.notifications import NotificationService


async def noop_presenter(dialog):
    return None


@pytest.fixture(autouse=True)
def reset_dependencies():
    dependencies.reset_services()
    yield
    dependencies.reset_services()


class TestSettings:

    def test_defaults(self):
        settings = Settings()

        assert settings.ADMIN_USERS_PATH == "/api/admin/users"
        assert settings.DEFAULT_COUNTRY == "Switzerland"
        assert settings.NOTIFICATION_DURATION_MS == 3000
        assert settings.PROFILE_UPDATE_SUCCESS_MESSAGE == "User profile updated successfully"

    def test_log_level_normalized(self):
        assert Settings(LOG_LEVEL="debug").get_log_level() == "DEBUG"

    def test_environment_checks(self):
        assert Settings(ENVIRONMENT="Production").is_production() is True
        assert Settings(ENVIRONMENT="development").is_development() is True

    def test_validate_required_passes(self):
        Settings(API_BASE_URL="https://api.example.com").validate_required()

    def test_validate_required_collects_errors(self):
        settings = Settings(
            API_BASE_URL="ftp://api.example.com",
            API_TIMEOUT_SECONDS=0,
            ENVIRONMENT="production",
            API_TOKEN=None,
        )

        with pytest.raises(ValueError) as exc_info:
            settings.validate_required()

        message = str(exc_info.value)
        assert "API_BASE_URL" in message
        assert "API_TIMEOUT_SECONDS" in message
        assert "API_TOKEN" in message


class TestDependencies:

    def test_getters_before_init(self):
        with pytest.raises(RuntimeError):
            dependencies.get_admin_client()
        with pytest.raises(RuntimeError):
            dependencies.get_notification_service()
        with pytest.raises(RuntimeError):
            dependencies.get_dialog_host()

    def test_init_all_services(self):
        settings = Settings(API_BASE_URL="http://localhost:5002", NOTIFICATION_DURATION_MS=4000)

        dependencies.init_all_services(noop_presenter, settings=settings)

        assert isinstance(dependencies.get_admin_client(), AdminApiClient)
        assert isinstance(dependencies.get_notification_service(), NotificationService)
        assert isinstance(dependencies.get_dialog_host(), DialogHost)

    def test_init_rejects_bad_settings(self):
        with pytest.raises(ValueError):
            dependencies.init_all_services(noop_presenter, settings=Settings(API_BASE_URL="localhost"))

        with pytest.raises(RuntimeError):
            dependencies.get_admin_client()

    def test_create_user_detail_controller(self):
        settings = Settings(PROFILE_UPDATE_SUCCESS_MESSAGE="Saved")
        dependencies.init_all_services(noop_presenter, settings=settings)

        controller = dependencies.create_user_detail_controller()

        assert isinstance(controller, UserDetailController)
        controller._notify_success()
        assert dependencies.get_notification_service().recent()[-1].message == "Saved"
