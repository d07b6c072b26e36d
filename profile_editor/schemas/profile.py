"""
Pydantic models for the admin user profile editor.

Snapshot models mirror GET /api/admin/users/{id}; request and response models
mirror PUT /api/admin/users/{id} and PUT /api/user/profile.
"""

from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


UserRole = Literal["employee", "manager", "administrator"]
UserStatus = Literal["active", "inactive", "pending"]
ProfileVisibility = Literal["private", "team", "company"]

USER_ROLES = ("employee", "manager", "administrator")
USER_STATUSES = ("active", "inactive", "pending")
PROFILE_VISIBILITIES = ("private", "team", "company")


# =============================================================================
# Snapshot Schemas
# =============================================================================

class HomeAddress(BaseModel):
    """Home address as stored on the user."""
    model_config = ConfigDict(frozen=True)

    street: str = ""
    city: str = ""
    postalCode: str = ""
    country: Optional[str] = None


class HomeCoordinates(BaseModel):
    """Geocoded home location."""
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class NotificationPreferences(BaseModel):
    """Notification flags."""
    model_config = ConfigDict(frozen=True)

    email: bool = True
    requestUpdates: bool = True
    weeklyDigest: bool = False
    maintenanceAlerts: bool = True


class PrivacySettings(BaseModel):
    """Privacy settings, including the two consent flags."""
    model_config = ConfigDict(frozen=True)

    profileVisibility: ProfileVisibility = "team"
    allowAnalytics: bool = True
    shareLocationData: Optional[bool] = True
    allowManagerAccess: Optional[bool] = None
    dataRetentionConsent: Optional[bool] = None


class ProfileSnapshot(BaseModel):
    """
    Read-only user profile handed to the editor by its host.

    The editor copies values out of it at initialization and never mutates it.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    email: str
    firstName: str
    lastName: str
    phoneNumber: Optional[str] = None
    employeeNumber: Optional[str] = None
    role: UserRole = "employee"
    status: UserStatus = "active"
    isVerified: bool = False
    homeAddress: HomeAddress = Field(default_factory=HomeAddress)
    homeCoordinates: Optional[HomeCoordinates] = None
    notificationPreferences: Optional[NotificationPreferences] = None
    privacySettings: Optional[PrivacySettings] = None
    managerId: Optional[str] = None
    managerName: Optional[str] = None
    department: Optional[str] = None
    registrationDate: Optional[str] = None
    lastLoginAt: Optional[str] = None


# =============================================================================
# Request Schemas
# =============================================================================

class AddressUpdate(BaseModel):
    """Home address block of an update request."""
    model_config = ConfigDict(frozen=True)

    street: str
    city: str
    postalCode: str
    country: Optional[str] = None


class ProfileUpdateRequest(BaseModel):
    """
    PUT /api/admin/users/{id} and PUT /api/user/profile

    Keys that were never set are left out of the serialized body, see
    ``to_payload``.
    """
    model_config = ConfigDict(frozen=True)

    firstName: Optional[str] = None
    lastName: Optional[str] = None
    phoneNumber: Optional[str] = None
    homeAddress: Optional[AddressUpdate] = None
    notificationPreferences: Optional[NotificationPreferences] = None
    privacySettings: Optional[PrivacySettings] = None
    # Admin-only fields
    email: Optional[str] = None
    employeeNumber: Optional[str] = None
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None

    def to_payload(self) -> dict:
        """JSON body containing only the keys that were assigned."""
        return self.model_dump(mode="json", exclude_unset=True)


# =============================================================================
# Response Schemas (used inside success_response data)
# =============================================================================

class DistanceChange(BaseModel):
    """Effect of an address change on one pending travel request."""
    requestId: str
    projectName: str
    oldDistance: float
    newDistance: float
    oldAllowance: float
    newAllowance: float
    percentageChange: float


class AddressChangeImpact(BaseModel):
    """Summary of pending requests affected by an address change."""
    affectedRequests: int
    distanceChanges: List[DistanceChange] = Field(default_factory=list)
    totalAllowanceImpact: float = 0.0
    requiresManagerNotification: bool = False


class ProfileUpdateResponse(BaseModel):
    """
    Outcome of an update round trip.

    ``success=True`` carries the fresh profile; a failed outcome may carry
    per-field ``validationErrors``.
    """
    model_config = ConfigDict(frozen=True)

    success: bool
    profile: Optional[ProfileSnapshot] = None
    addressChangeImpact: Optional[AddressChangeImpact] = None
    validationErrors: Optional[Dict[str, str]] = None


# =============================================================================
# Dialog Schemas
# =============================================================================

class UserProfileDialogData(BaseModel):
    """Configuration passed by the host when opening the editor."""
    model_config = ConfigDict(frozen=True)

    title: str
    user: ProfileSnapshot
    isAdminEdit: bool = False
