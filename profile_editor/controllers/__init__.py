"""
Controllers: submission state machine, dialog protocol and the user detail screen.
"""

from profile_editor.controllers.submission import SubmissionController, SubmissionState
from profile_editor.controllers.dialog import (
    Cancelled,
    Committed,
    DialogHost,
    DialogResult,
    UserProfileDialog,
    close_value,
)
from profile_editor.controllers.user_detail import UserDetailController

__all__ = [
    "SubmissionController",
    "SubmissionState",
    "Cancelled",
    "Committed",
    "DialogHost",
    "DialogResult",
    "UserProfileDialog",
    "close_value",
    "UserDetailController",
]
