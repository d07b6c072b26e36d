"""
Submission controller for the profile editor.

Drives one update round trip at a time:

    IDLE -> SUBMITTING -> SUCCESS | FAILED
    FAILED -> IDLE on the next field edit
    SUCCESS is terminal for the dialog instance

Every failure is handled here; only cancellation of the awaiting task
propagates, after the controller is reset to IDLE.
"""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Dict, Optional

from pydantic import ValidationError

from profile_editor.forms.edit_model import CompositeEditModel
from profile_editor.forms.field_group import VALUE_CHANGED, FieldEvent
from profile_editor.pipelines.payload import build_update_request
from profile_editor.schemas.profile import ProfileUpdateRequest, ProfileUpdateResponse

logger = logging.getLogger(__name__)


UpdateProfile = Callable[[str, ProfileUpdateRequest], Awaitable[ProfileUpdateResponse]]
SuccessCallback = Callable[[ProfileUpdateResponse], None]


class SubmissionState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


class SubmissionController:
    """
    Guards against double submission and routes server errors onto fields.

    Responses arriving after dispose(), or for a superseded attempt, are
    ignored so nothing is written to a discarded model.
    """

    def __init__(
        self,
        model: CompositeEditModel,
        user_id: str,
        update_profile: UpdateProfile,
        on_success: Optional[SuccessCallback] = None,
    ):
        """
        Initialize SubmissionController.

        Args:
            model: Edit model to validate, read and annotate
            user_id: Id of the profile being edited
            update_profile: Write collaborator, called as (user_id, request)
            on_success: Called with the outcome after a successful update
        """
        self._model = model
        self._user_id = user_id
        self._update_profile = update_profile
        self._on_success = on_success

        self._state = SubmissionState.IDLE
        self._loading = False
        self._generation = 0
        self._disposed = False

        self.last_request: Optional[ProfileUpdateRequest] = None
        self.last_outcome: Optional[ProfileUpdateResponse] = None
        self.last_error: Optional[Exception] = None

        self._unsubscribe = model.subscribe(self._on_field_event)

    # ─────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────

    @property
    def state(self) -> SubmissionState:
        return self._state

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def disposed(self) -> bool:
        return self._disposed

    # ─────────────────────────────────────────────────────────────────
    # Submission
    # ─────────────────────────────────────────────────────────────────

    async def submit(self) -> Optional[ProfileUpdateResponse]:
        """
        Send the current edits if the form is valid.

        Returns:
            The successful outcome, or None when nothing was sent or the
            attempt failed
        """
        if self._disposed:
            return None

        if self._state in (SubmissionState.SUBMITTING, SubmissionState.SUCCESS):
            logger.debug(f"Ignoring submit for user {self._user_id} in state {self._state.value}")
            return None

        if not self._model.is_valid():
            logger.debug(f"Ignoring submit for user {self._user_id}: form is invalid")
            return None

        try:
            request = build_update_request(self._model.current_values())
        except ValidationError as e:
            self._fail(None, e)
            return None

        self.last_request = request

        self._generation += 1
        generation = self._generation
        self._state = SubmissionState.SUBMITTING
        self._loading = True

        logger.info(f"Submitting profile update for user {self._user_id}")

        try:
            outcome = await self._update_profile(self._user_id, request)
        except asyncio.CancelledError:
            if not self._is_stale(generation):
                self._loading = False
                self._state = SubmissionState.IDLE
            raise
        except Exception as e:
            if self._is_stale(generation):
                logger.debug(f"Discarding stale failure for user {self._user_id}")
                return None
            self._fail(getattr(e, "validation_errors", None), e)
            return None

        if self._is_stale(generation):
            logger.debug(f"Discarding stale response for user {self._user_id}")
            return None

        if not outcome.success:
            self._fail(outcome.validationErrors, None)
            return None

        self._loading = False
        self._state = SubmissionState.SUCCESS
        self.last_outcome = outcome
        self.last_error = None

        logger.info(f"Profile updated for user {self._user_id}")

        if self._on_success is not None:
            self._on_success(outcome)

        return outcome

    def _fail(
        self,
        validation_errors: Optional[Dict[str, str]],
        error: Optional[Exception],
    ) -> None:
        self._loading = False
        self._state = SubmissionState.FAILED
        self.last_error = error

        if validation_errors:
            applied = self._model.apply_server_errors(validation_errors)
            logger.warning(
                f"Profile update for user {self._user_id} rejected; "
                f"server errors on {applied}"
            )
            return

        logger.error(f"Failed to update user profile {self._user_id}: {error or 'unsuccessful response'}")

    def _is_stale(self, generation: int) -> bool:
        return self._disposed or generation != self._generation

    def _on_field_event(self, event: FieldEvent) -> None:
        if event.kind == VALUE_CHANGED and self._state == SubmissionState.FAILED:
            self._state = SubmissionState.IDLE

    def dispose(self) -> None:
        """Detach from the model; later responses are ignored."""
        if self._disposed:
            return
        self._disposed = True
        self._loading = False
        self._unsubscribe()
