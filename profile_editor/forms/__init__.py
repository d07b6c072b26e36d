"""
Form state for the profile editor: rules, field groups and the composite model.
"""

from profile_editor.forms.rules import FieldRule, validate_value
from profile_editor.forms.field_group import FieldEvent, FieldGroup, FieldState
from profile_editor.forms.edit_model import (
    Capability,
    CompositeEditModel,
    EditValues,
    FIELD_CAPABILITIES,
)

__all__ = [
    "FieldRule",
    "validate_value",
    "FieldEvent",
    "FieldGroup",
    "FieldState",
    "Capability",
    "CompositeEditModel",
    "EditValues",
    "FIELD_CAPABILITIES",
]
