"""
User profile dialog: the contract between the edit engine and its host.

The host opens the dialog with a UserProfileDialogData and gets back a tagged
result: Cancelled, or Committed carrying the successful update outcome. The
dialog never closes itself on failure.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Union

from profile_editor.controllers.submission import SubmissionController, SubmissionState
from profile_editor.forms.edit_model import CompositeEditModel
from profile_editor.schemas.profile import (
    ProfileUpdateRequest,
    ProfileUpdateResponse,
    UserProfileDialogData,
)
from profile_editor.services.admin_client import AdminApiClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Cancelled:
    """Closed without submitting."""


@dataclass(frozen=True)
class Committed:
    """Closed after a successful update."""
    outcome: ProfileUpdateResponse


DialogResult = Union[Cancelled, Committed]


def close_value(result: DialogResult) -> Optional[ProfileUpdateResponse]:
    """The plain close value: None on cancel, the outcome on commit."""
    if isinstance(result, Committed):
        return result.outcome
    return None


class UserProfileDialog:
    """
    One open instance of the profile editor.

    Owns the CompositeEditModel and SubmissionController for its lifetime.
    """

    def __init__(
        self,
        data: UserProfileDialogData,
        admin_client: AdminApiClient,
        default_country: Optional[str] = None,
    ):
        """
        Initialize the dialog.

        Args:
            data: Title, snapshot and edit mode supplied by the host
            admin_client: API client used for the update call
            default_country: Country used when the snapshot has none
        """
        self.data = data
        self._admin_client = admin_client
        self._result: Optional[DialogResult] = None
        self._closed = asyncio.Event()

        self.model = CompositeEditModel(
            data.user,
            is_privileged_edit=data.isAdminEdit,
            default_country=default_country,
        )
        self.submission = SubmissionController(
            self.model,
            data.user.id,
            self._update_profile,
            on_success=self._on_success,
        )

    async def _update_profile(
        self,
        user_id: str,
        request: ProfileUpdateRequest,
    ) -> ProfileUpdateResponse:
        # Both edit modes write through the entity id; gating only limits fields
        return await self._admin_client.update_user_profile(user_id, request)

    # ─────────────────────────────────────────────────────────────────
    # State observed by the view
    # ─────────────────────────────────────────────────────────────────

    @property
    def title(self) -> str:
        return self.data.title

    @property
    def is_loading(self) -> bool:
        return self.submission.loading

    @property
    def can_submit(self) -> bool:
        """Save is offered only for a valid form with nothing in flight."""
        return (
            not self.closed
            and not self.is_loading
            and self.is_form_valid()
        )

    @property
    def closed(self) -> bool:
        return self._result is not None

    @property
    def result(self) -> Optional[DialogResult]:
        return self._result

    def is_form_valid(self) -> bool:
        return self.model.is_valid()

    # ─────────────────────────────────────────────────────────────────
    # User actions
    # ─────────────────────────────────────────────────────────────────

    async def submit(self) -> None:
        """Submit the edits; closes with Committed on success only."""
        if self.closed:
            return
        await self.submission.submit()

    def cancel(self) -> None:
        """Close without a result; nothing is sent."""
        if self.submission.state == SubmissionState.SUBMITTING:
            logger.info(f"Profile dialog for user {self.data.user.id} cancelled during submission")
        self._close(Cancelled())

    async def after_closed(self) -> DialogResult:
        """Wait until the dialog closes and return its result."""
        await self._closed.wait()
        return self._result

    def dispose(self) -> None:
        """Release the dialog; responses still in flight are ignored."""
        self.submission.dispose()

    def _on_success(self, outcome: ProfileUpdateResponse) -> None:
        self._close(Committed(outcome))

    def _close(self, result: DialogResult) -> None:
        if self._result is not None:
            return
        self._result = result
        self.submission.dispose()
        self._closed.set()


Presenter = Callable[[UserProfileDialog], Awaitable[None]]


class DialogHost:
    """
    Opens profile dialogs and resolves them to a DialogResult.

    The presenter is the view layer: it renders the dialog and drives user
    actions (edits, submit, cancel). If it returns while the dialog is still
    open, the dialog is treated as dismissed.
    """

    def __init__(
        self,
        admin_client: AdminApiClient,
        presenter: Presenter,
        default_country: Optional[str] = None,
    ):
        self._admin_client = admin_client
        self._presenter = presenter
        self._default_country = default_country

    async def open(self, data: UserProfileDialogData) -> DialogResult:
        dialog = UserProfileDialog(
            data,
            self._admin_client,
            default_country=self._default_country,
        )
        try:
            await self._presenter(dialog)
            if not dialog.closed:
                dialog.cancel()
            return await dialog.after_closed()
        finally:
            dialog.dispose()
