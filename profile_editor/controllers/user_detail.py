"""
User detail controller: the screen that displays one profile and opens the
editor for it.

After a committed edit it re-fetches the profile and shows a success
notification. The refresh is best effort; a failed fetch keeps the
previously displayed profile.
"""

import logging
from typing import Optional

from profile_editor.config import Settings, settings as default_settings
from profile_editor.controllers.dialog import Committed, DialogHost, DialogResult
from profile_editor.schemas.profile import ProfileSnapshot, UserProfileDialogData
from profile_editor.services.admin_client import AdminApiClient
from profile_editor.services.notifications import NotificationService

logger = logging.getLogger(__name__)


class UserDetailController:
    """
    Holds the displayed profile and reacts to editor results.
    """

    def __init__(
        self,
        admin_client: AdminApiClient,
        dialog_host: DialogHost,
        notifications: NotificationService,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize UserDetailController.

        Args:
            admin_client: Read collaborator for fetching profiles
            dialog_host: Opens the profile editor
            notifications: Transient notification channel
            settings: Application settings (defaults to the global instance)
        """
        self._admin_client = admin_client
        self._dialog_host = dialog_host
        self._notifications = notifications
        self._settings = settings or default_settings

        self.user: Optional[ProfileSnapshot] = None
        self.loading = False
        self.error: Optional[Exception] = None

        self._generation = 0
        self._disposed = False

    async def load(self, user_id: str) -> Optional[ProfileSnapshot]:
        """
        Fetch and display a profile.

        On failure the error is kept for the view to render and None is
        returned; the editor cannot be opened until a load succeeds.
        """
        self._generation += 1
        generation = self._generation
        self.loading = True

        try:
            user = await self._admin_client.get_user_details(user_id)
        except Exception as e:
            if self._is_stale(generation):
                return None
            logger.error(f"Failed to load user details for {user_id}: {e}")
            self.loading = False
            self.error = e
            return None

        if self._is_stale(generation):
            return None

        self.user = user
        self.error = None
        self.loading = False
        return user

    async def edit_profile(
        self,
        title: str = "Edit User Profile",
        is_admin_edit: bool = True,
    ) -> Optional[DialogResult]:
        """
        Open the editor for the displayed profile.

        Returns:
            The dialog result, or None when no profile is loaded
        """
        if self.user is None:
            logger.warning("Cannot edit profile: no user loaded")
            return None

        user_id = self.user.id
        result = await self._dialog_host.open(
            UserProfileDialogData(title=title, user=self.user, isAdminEdit=is_admin_edit)
        )

        # Sequenced strictly after the dialog has closed
        if isinstance(result, Committed) and result.outcome.success:
            await self._refresh_after_edit(user_id)

        return result

    async def _refresh_after_edit(self, user_id: str) -> None:
        self._generation += 1
        generation = self._generation

        try:
            fresh = await self._admin_client.get_user_details(user_id)
        except Exception as e:
            if not self._is_stale(generation):
                logger.error(f"Failed to refresh user {user_id} after profile update: {e}")
                self._notify_success()
            return

        if self._is_stale(generation):
            logger.debug(f"Discarding stale refresh for user {user_id}")
            return

        self.user = fresh
        self._notify_success()

    def _notify_success(self) -> None:
        self._notifications.show(
            self._settings.PROFILE_UPDATE_SUCCESS_MESSAGE,
            action=self._settings.NOTIFICATION_ACTION_LABEL,
            duration_ms=self._settings.NOTIFICATION_DURATION_MS,
        )

    def _is_stale(self, generation: int) -> bool:
        return self._disposed or generation != self._generation

    def dispose(self) -> None:
        """Stop applying results of calls still in flight."""
        self._disposed = True
