"""
Payload assembly for profile updates.

Turns the composite edit model's current values into a single
ProfileUpdateRequest.
"""

import logging
from typing import Any, Dict, Mapping

from profile_editor.forms.edit_model import EditValues
from profile_editor.schemas.profile import ProfileUpdateRequest

logger = logging.getLogger(__name__)

# Optional text fields whose blank value means "not provided"
OPTIONAL_TEXT_FIELDS = ("phoneNumber", "employeeNumber")

# Consents always sent as granted
FIXED_PRIVACY_CONSENTS = {
    "allowManagerAccess": True,
    "dataRetentionConsent": True,
}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def normalize_identity(identity: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy identity values, turning blank optional text fields into None."""
    normalized = dict(identity)
    for field in OPTIONAL_TEXT_FIELDS:
        if field in normalized and _is_blank(normalized[field]):
            normalized[field] = None
    return normalized


def build_update_request(values: EditValues) -> ProfileUpdateRequest:
    """
    Assemble the update request.

    Steps:
    1. Identity values, disabled fields included with their original value
    2. Address values nested under homeAddress
    3. notificationPreferences and privacySettings built from the
       preference flags, with both consents fixed to True
    4. Top-level keys whose value is None are dropped; blank optional text
       fields were normalized to None in step 1 so they are dropped too

    Args:
        values: Current values of the composite edit model

    Returns:
        Immutable ProfileUpdateRequest; only assigned keys serialize
    """
    preferences = values.preferences

    body: Dict[str, Any] = normalize_identity(values.identity)
    body["homeAddress"] = dict(values.address)
    body["notificationPreferences"] = {
        "email": preferences["emailNotifications"],
        "requestUpdates": preferences["requestUpdates"],
        "weeklyDigest": preferences["weeklyDigest"],
        "maintenanceAlerts": preferences["maintenanceAlerts"],
    }
    body["privacySettings"] = {
        "profileVisibility": preferences["profileVisibility"],
        "allowAnalytics": preferences["allowAnalytics"],
        "shareLocationData": preferences["shareLocationData"],
        **FIXED_PRIVACY_CONSENTS,
    }

    omitted = [key for key, value in body.items() if value is None]
    for key in omitted:
        del body[key]

    if omitted:
        logger.debug(f"Omitting unset fields from update request: {omitted}")

    return ProfileUpdateRequest.model_validate(body)
