"""
Client-side exceptions for the profile editor.

Mirrors the API exception family used by the server: every error carries a
human-readable message, a machine-readable code and optional details.
"""

from typing import Any, Dict, Optional


class ProfileEditorError(Exception):
    """Base error for the profile editor."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details


class UnknownFieldError(ProfileEditorError):
    """No field group owns the requested field name."""

    def __init__(self, field: str):
        super().__init__(f"Unknown field: {field}", code="UNKNOWN_FIELD")
        self.field = field


class FieldNotEditableError(ProfileEditorError):
    """The field is disabled for the current edit mode."""

    def __init__(self, field: str):
        super().__init__(
            f"Field '{field}' cannot be updated",
            code="FIELD_NOT_EDITABLE",
        )
        self.field = field


class ProfileApiError(ProfileEditorError):
    """
    Non-2xx response from the admin user API.

    Attributes:
        status_code: HTTP status code of the response
        validation_errors: Field name to message mapping when the server
            rejected individual fields, otherwise None
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        code: Optional[str] = None,
        details: Optional[Any] = None,
        validation_errors: Optional[Dict[str, str]] = None,
    ):
        super().__init__(message, code=code, details=details)
        self.status_code = status_code
        self.validation_errors = validation_errors


class ProfileNotFoundError(ProfileApiError):
    """404 - the requested user profile does not exist."""

    def __init__(self, user_id: str, message: str = "User not found"):
        super().__init__(404, message, code="USER_NOT_FOUND", details={"userId": user_id})
        self.user_id = user_id
