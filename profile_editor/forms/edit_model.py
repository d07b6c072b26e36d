"""
Composite edit model for the user profile editor.

Owns the identity, address and preferences field groups, applies role-based
gating once at construction and exposes aggregate validity.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Optional, Tuple

from profile_editor.config import settings
from profile_editor.exceptions import UnknownFieldError
from profile_editor.forms.field_group import FieldGroup, FieldListener
from profile_editor.forms.rules import PHONE_PATTERN, EMAIL, FieldRule
from profile_editor.schemas.profile import (
    PROFILE_VISIBILITIES,
    USER_ROLES,
    USER_STATUSES,
    ProfileSnapshot,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Rule Tables
# =============================================================================

IDENTITY_RULES: Dict[str, FieldRule] = {
    "firstName": FieldRule(required=True, max_length=100),
    "lastName": FieldRule(required=True, max_length=100),
    "phoneNumber": FieldRule(pattern=PHONE_PATTERN),
    # Admin-only fields
    "email": FieldRule(required=True, format=EMAIL),
    "employeeNumber": FieldRule(),
    "role": FieldRule(choices=USER_ROLES),
    "status": FieldRule(choices=USER_STATUSES),
}

ADDRESS_RULES: Dict[str, FieldRule] = {
    "street": FieldRule(required=True, max_length=255),
    "city": FieldRule(required=True, max_length=100),
    "postalCode": FieldRule(required=True, max_length=20),
    "country": FieldRule(max_length=100),
}

NOTIFICATION_FIELDS = (
    "emailNotifications",
    "requestUpdates",
    "weeklyDigest",
    "maintenanceAlerts",
)

PRIVACY_FIELDS = (
    "profileVisibility",
    "allowAnalytics",
    "shareLocationData",
)

# On/off preference flags
FLAG_RULE = FieldRule(required=True, boolean=True)

PREFERENCES_RULES: Dict[str, FieldRule] = {
    "emailNotifications": FLAG_RULE,
    "requestUpdates": FLAG_RULE,
    "weeklyDigest": FLAG_RULE,
    "maintenanceAlerts": FLAG_RULE,
    "profileVisibility": FieldRule(required=True, choices=PROFILE_VISIBILITIES),
    "allowAnalytics": FLAG_RULE,
    "shareLocationData": FLAG_RULE,
}

# Used for any preference the snapshot does not carry
DEFAULT_PREFERENCES: Dict[str, Any] = {
    "emailNotifications": True,
    "requestUpdates": True,
    "weeklyDigest": False,
    "maintenanceAlerts": True,
    "profileVisibility": "team",
    "allowAnalytics": True,
    "shareLocationData": True,
}


# =============================================================================
# Capability Table
# =============================================================================

class Capability(str, Enum):
    """What the caller is allowed to change."""
    SELF_EDIT = "self_edit"
    PRIVILEGED_EDIT = "privileged_edit"


# Identity field -> capability needed to edit it
FIELD_CAPABILITIES: Dict[str, Capability] = {
    "firstName": Capability.SELF_EDIT,
    "lastName": Capability.SELF_EDIT,
    "phoneNumber": Capability.SELF_EDIT,
    "email": Capability.PRIVILEGED_EDIT,
    "employeeNumber": Capability.PRIVILEGED_EDIT,
    "role": Capability.PRIVILEGED_EDIT,
    "status": Capability.PRIVILEGED_EDIT,
}


def capabilities_for(is_privileged_edit: bool) -> FrozenSet[Capability]:
    """Capabilities granted by an edit mode."""
    if is_privileged_edit:
        return frozenset({Capability.SELF_EDIT, Capability.PRIVILEGED_EDIT})
    return frozenset({Capability.SELF_EDIT})


def editable_identity_fields(is_privileged_edit: bool) -> FrozenSet[str]:
    """Identity fields that are enabled in the given edit mode."""
    granted = capabilities_for(is_privileged_edit)
    return frozenset(
        name for name, capability in FIELD_CAPABILITIES.items()
        if capability in granted
    )


def preferences_from_snapshot(snapshot: ProfileSnapshot) -> Dict[str, Any]:
    """
    Initial preference values for a snapshot.

    Stored notification preferences and privacy settings win; anything the
    snapshot does not carry falls back to DEFAULT_PREFERENCES.
    """
    values = DEFAULT_PREFERENCES.copy()

    notifications = snapshot.notificationPreferences
    if notifications is not None:
        values.update({
            "emailNotifications": notifications.email,
            "requestUpdates": notifications.requestUpdates,
            "weeklyDigest": notifications.weeklyDigest,
            "maintenanceAlerts": notifications.maintenanceAlerts,
        })

    privacy = snapshot.privacySettings
    if privacy is not None:
        values["profileVisibility"] = privacy.profileVisibility
        values["allowAnalytics"] = privacy.allowAnalytics
        if privacy.shareLocationData is not None:
            values["shareLocationData"] = privacy.shareLocationData

    return values


# =============================================================================
# Composite Model
# =============================================================================

@dataclass(frozen=True)
class EditValues:
    """Read-only copy of every group's current values."""
    identity: Mapping[str, Any]
    address: Mapping[str, Any]
    preferences: Mapping[str, Any]


class CompositeEditModel:
    """
    Editable aggregate of identity, address and preferences.

    Created once per dialog open from a ProfileSnapshot and discarded when the
    dialog closes. The snapshot itself is never modified.
    """

    # Groups that may receive server validation errors, in lookup order
    SERVER_ERROR_TARGETS = ("identity", "address")

    def __init__(
        self,
        snapshot: ProfileSnapshot,
        is_privileged_edit: bool = False,
        default_country: Optional[str] = None,
    ):
        """
        Build and populate the three field groups.

        Args:
            snapshot: Profile to edit
            is_privileged_edit: Enables email, employeeNumber, role and status
            default_country: Country used when the snapshot has none
                (defaults to settings.DEFAULT_COUNTRY)
        """
        self._snapshot = snapshot
        self._is_privileged_edit = is_privileged_edit
        self._default_country = default_country or settings.DEFAULT_COUNTRY

        self.editable_fields = editable_identity_fields(is_privileged_edit)
        disabled = [name for name in IDENTITY_RULES if name not in self.editable_fields]

        self.identity = FieldGroup("identity", IDENTITY_RULES, disabled=disabled)
        self.address = FieldGroup("address", ADDRESS_RULES)
        self.preferences = FieldGroup("preferences", PREFERENCES_RULES)

        self._populate()

    def _populate(self) -> None:
        user = self._snapshot

        self.identity.patch_values({
            "firstName": user.firstName,
            "lastName": user.lastName,
            "phoneNumber": user.phoneNumber or "",
            "email": user.email,
            "employeeNumber": user.employeeNumber or "",
            "role": user.role,
            "status": user.status,
        })

        address = user.homeAddress
        self.address.patch_values({
            "street": address.street,
            "city": address.city,
            "postalCode": address.postalCode,
            "country": address.country or self._default_country,
        })

        self.preferences.patch_values(preferences_from_snapshot(user))

    # ─────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────

    @property
    def snapshot(self) -> ProfileSnapshot:
        return self._snapshot

    @property
    def is_privileged_edit(self) -> bool:
        return self._is_privileged_edit

    @property
    def groups(self) -> Tuple[FieldGroup, FieldGroup, FieldGroup]:
        return (self.identity, self.address, self.preferences)

    @property
    def dirty(self) -> bool:
        return any(group.dirty for group in self.groups)

    # ─────────────────────────────────────────────────────────────────
    # Operations
    # ─────────────────────────────────────────────────────────────────

    def is_valid(self) -> bool:
        """True only when all three groups are valid."""
        return self.identity.valid and self.address.valid and self.preferences.valid

    def current_values(self) -> EditValues:
        return EditValues(
            identity=self.identity.values(),
            address=self.address.values(),
            preferences=self.preferences.values(),
        )

    def owner_of(self, field_name: str) -> Optional[FieldGroup]:
        for group in self.groups:
            if field_name in group:
                return group
        return None

    def set_value(self, field_name: str, value: Any) -> None:
        """
        Apply a user edit to whichever group owns the field.

        Raises:
            UnknownFieldError: No group owns the field
            FieldNotEditableError: The field is disabled for this edit mode
        """
        group = self.owner_of(field_name)
        if group is None:
            raise UnknownFieldError(field_name)
        group.set_value(field_name, value)

    def apply_server_errors(self, validation_errors: Mapping[str, str]) -> List[str]:
        """
        Route server validation messages onto their fields.

        Identity is searched first, then address; names neither owns are
        dropped. Other fields' values and errors are left untouched.

        Returns:
            Names of the fields that received an error
        """
        targets = [getattr(self, name) for name in self.SERVER_ERROR_TARGETS]
        applied = []

        for field_name, message in validation_errors.items():
            group = next((g for g in targets if field_name in g), None)
            if group is None:
                logger.debug(f"Dropping server error for unknown field '{field_name}'")
                continue
            group.set_server_error(field_name, str(message))
            applied.append(field_name)

        return applied

    def errors(self) -> Dict[str, Dict[str, Dict[str, Any]]]:
        """Current errors per group, omitting groups without any."""
        return {
            group.name: group.errors()
            for group in self.groups
            if group.errors()
        }

    def subscribe(self, listener: FieldListener) -> Callable[[], None]:
        """Listen to field events from all three groups."""
        unsubscribers = [group.subscribe(listener) for group in self.groups]

        def unsubscribe() -> None:
            for remove in unsubscribers:
                remove()

        return unsubscribe
