"""
Pydantic schemas for the profile editor.
"""

from profile_editor.schemas.profile import (
    USER_ROLES,
    USER_STATUSES,
    PROFILE_VISIBILITIES,
    HomeAddress,
    HomeCoordinates,
    NotificationPreferences,
    PrivacySettings,
    ProfileSnapshot,
    AddressUpdate,
    ProfileUpdateRequest,
    DistanceChange,
    AddressChangeImpact,
    ProfileUpdateResponse,
    UserProfileDialogData,
)

__all__ = [
    "USER_ROLES",
    "USER_STATUSES",
    "PROFILE_VISIBILITIES",
    "HomeAddress",
    "HomeCoordinates",
    "NotificationPreferences",
    "PrivacySettings",
    "ProfileSnapshot",
    "AddressUpdate",
    "ProfileUpdateRequest",
    "DistanceChange",
    "AddressChangeImpact",
    "ProfileUpdateResponse",
    "UserProfileDialogData",
]
