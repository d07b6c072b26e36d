"""Tests for the user detail screen: load, edit and refresh after commit."""

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from profile_editor.config import Settings
from profile_editor.controllers.dialog import Cancelled, Committed
from profile_editor.controllers.user_detail import UserDetailController
from profile_editor.exceptions import ProfileNotFoundError
from profile_editor.schemas.profile import ProfileSnapshot, ProfileUpdateResponse
from profile_editor.services.notifications import NotificationService


@pytest.fixture
def refreshed_snapshot(sample_user_data):
    sample_user_data["firstName"] = "Jane"
    return ProfileSnapshot.model_validate(sample_user_data)


@pytest.fixture
def dialog_host():
    host = MagicMock()
    host.open = AsyncMock(return_value=Cancelled())
    return host


@pytest.fixture
def notifications():
    return NotificationService()


@pytest.fixture
def controller(mock_admin_client, dialog_host, notifications):
    return UserDetailController(
        mock_admin_client,
        dialog_host,
        notifications,
        settings=Settings(API_BASE_URL="http://localhost:5002"),
    )


class TestLoad:

    @pytest.mark.asyncio
    async def test_load_sets_user(self, controller, mock_admin_client, snapshot):
        user = await controller.load("123")

        assert user is snapshot
        assert controller.user is snapshot
        assert controller.loading is False
        assert controller.error is None
        mock_admin_client.get_user_details.assert_awaited_once_with("123")

    @pytest.mark.asyncio
    async def test_load_failure_keeps_error(self, controller, mock_admin_client):
        mock_admin_client.get_user_details.side_effect = ProfileNotFoundError("999")

        assert await controller.load("999") is None

        assert controller.user is None
        assert controller.loading is False
        assert isinstance(controller.error, ProfileNotFoundError)


class TestEditProfile:

    @pytest.mark.asyncio
    async def test_no_user_loaded(self, controller, dialog_host):
        assert await controller.edit_profile() is None
        dialog_host.open.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_opens_dialog_with_current_user(self, controller, dialog_host, snapshot):
        await controller.load("123")

        await controller.edit_profile(title="Edit User Profile")

        data = dialog_host.open.call_args.args[0]
        assert data.title == "Edit User Profile"
        assert data.user is snapshot
        assert data.isAdminEdit is True

    @pytest.mark.asyncio
    async def test_cancel_does_not_refresh(self, controller, mock_admin_client, notifications):
        await controller.load("123")

        result = await controller.edit_profile()

        assert isinstance(result, Cancelled)
        assert mock_admin_client.get_user_details.await_count == 1
        assert notifications.recent() == []

    @pytest.mark.asyncio
    async def test_commit_refreshes_and_notifies(
        self,
        controller,
        mock_admin_client,
        dialog_host,
        notifications,
        success_outcome,
        snapshot,
        refreshed_snapshot,
    ):
        mock_admin_client.get_user_details.side_effect = [snapshot, refreshed_snapshot]
        dialog_host.open.return_value = Committed(success_outcome)
        await controller.load("123")

        await controller.edit_profile()

        assert mock_admin_client.get_user_details.await_count == 2
        assert mock_admin_client.get_user_details.call_args.args == ("123",)
        assert controller.user is refreshed_snapshot

        shown = notifications.recent()
        assert len(shown) == 1
        assert shown[0].message == "User profile updated successfully"
        assert shown[0].action == "Close"
        assert shown[0].durationMs == 3000

    @pytest.mark.asyncio
    async def test_refresh_failure_still_notifies(
        self,
        controller,
        mock_admin_client,
        dialog_host,
        notifications,
        success_outcome,
        snapshot,
    ):
        mock_admin_client.get_user_details.side_effect = [snapshot, httpx.ConnectError("down")]
        dialog_host.open.return_value = Committed(success_outcome)
        await controller.load("123")

        await controller.edit_profile()

        assert controller.user is snapshot
        assert len(notifications.recent()) == 1

    @pytest.mark.asyncio
    async def test_unsuccessful_commit_does_not_refresh(self, controller, mock_admin_client, dialog_host, notifications):
        dialog_host.open.return_value = Committed(ProfileUpdateResponse(success=False))
        await controller.load("123")

        await controller.edit_profile()

        assert mock_admin_client.get_user_details.await_count == 1
        assert notifications.recent() == []

    @pytest.mark.asyncio
    async def test_refresh_after_dispose_ignored(
        self,
        controller,
        mock_admin_client,
        dialog_host,
        notifications,
        success_outcome,
        snapshot,
        refreshed_snapshot,
    ):
        await controller.load("123")

        async def open_and_leave(data):
            controller.dispose()
            return Committed(success_outcome)

        dialog_host.open.side_effect = open_and_leave
        mock_admin_client.get_user_details.side_effect = [refreshed_snapshot]

        await controller.edit_profile()

        assert controller.user is snapshot
        assert notifications.recent() == []

    @pytest.mark.asyncio
    async def test_custom_notification_settings(self, mock_admin_client, dialog_host, success_outcome):
        notifications = NotificationService()
        controller = UserDetailController(
            mock_admin_client,
            dialog_host,
            notifications,
            settings=Settings(
                API_BASE_URL="http://localhost:5002",
                PROFILE_UPDATE_SUCCESS_MESSAGE="Saved",
                NOTIFICATION_DURATION_MS=5000,
            ),
        )
        dialog_host.open.return_value = Committed(success_outcome)
        await controller.load("123")

        await controller.edit_profile()

        shown = notifications.recent()[0]
        assert shown.message == "Saved"
        assert shown.durationMs == 5000
