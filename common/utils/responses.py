"""
Response envelopes shared by the mock API and the client that parses them.

Success bodies wrap the payload under "data"; error bodies carry an "error"
object and, for rejected fields, a top-level "validationErrors" map.
"""

from datetime import datetime, timezone
from typing import Any, Optional, Dict


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def success_response(
    data: Any = None,
    message: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create a standard success response.

    Args:
        data: The response data (can be dict, list, or any serializable type)
        message: Optional success message

    Returns:
        Dictionary with success=True, a timestamp and optional data/message
    """
    response: Dict[str, Any] = {"success": True, "timestamp": _timestamp()}

    if data is not None:
        response["data"] = data

    if message:
        response["message"] = message

    return response


def error_response(
    message: str,
    code: Optional[str] = None,
    details: Optional[Any] = None,
    validation_errors: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """
    Create a standard error response.

    Args:
        message: Human-readable error message
        code: Machine-readable error code (e.g., "USER_NOT_FOUND")
        details: Additional error details
        validation_errors: Field name to message mapping for rejected fields.
            Placed at the top level of the envelope so clients can route
            each message back onto the matching form field.

    Returns:
        Dictionary with success=False and error info
    """
    timestamp = _timestamp()
    error: Dict[str, Any] = {"message": message, "timestamp": timestamp}

    if code:
        error["code"] = code

    if details is not None:
        error["details"] = details

    response: Dict[str, Any] = {
        "success": False,
        "timestamp": timestamp,
        "error": error,
    }

    if validation_errors:
        response["validationErrors"] = dict(validation_errors)

    return response
