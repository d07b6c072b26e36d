"""
Field groups: a flat set of named fields validated and gated together.

Each field is a plain record (value, rule, enabled, dirty, errors,
server_error). Local errors are recomputed by ``validate_value`` on every
value change; a server-assigned error sits next to them and is cleared the
next time the value changes.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from profile_editor.exceptions import FieldNotEditableError, UnknownFieldError
from profile_editor.forms.rules import (
    SERVER_VALIDATION,
    FieldRule,
    describe_error,
    validate_value,
)


# Event kinds
VALUE_CHANGED = "value_changed"
SERVER_ERROR_SET = "server_error_set"


@dataclass
class FieldState:
    """Current state of one field."""

    name: str
    rule: FieldRule
    value: Any = None
    enabled: bool = True
    dirty: bool = False
    errors: Dict[str, Any] = field(default_factory=dict)
    server_error: Optional[str] = None

    @property
    def valid(self) -> bool:
        # Disabled fields never block their group
        if not self.enabled:
            return True
        return not self.errors and self.server_error is None

    @property
    def pristine(self) -> bool:
        return not self.dirty

    @property
    def all_errors(self) -> Dict[str, Any]:
        """Local and server errors, server error first."""
        merged: Dict[str, Any] = {}
        if self.server_error is not None:
            merged[SERVER_VALIDATION] = self.server_error
        merged.update(self.errors)
        return merged

    def has_error(self, kind: str) -> bool:
        return kind in self.all_errors

    @property
    def error_message(self) -> Optional[str]:
        """The message to display: server error wins over local ones."""
        if self.server_error is not None:
            return self.server_error
        for kind, detail in self.errors.items():
            return describe_error(self.name, kind, detail, self.rule)
        return None

    def revalidate(self) -> None:
        self.errors = validate_value(self.value, self.rule)


@dataclass(frozen=True)
class FieldEvent:
    """Published to group listeners after a field changes."""

    group: str
    field: str
    kind: str
    state: FieldState


FieldListener = Callable[[FieldEvent], None]


class FieldGroup:
    """
    Validator for one flat set of named fields.

    Group validity is the AND of every field's validity; disabled fields
    always count as valid.
    """

    def __init__(
        self,
        name: str,
        rules: Mapping[str, FieldRule],
        initial: Optional[Mapping[str, Any]] = None,
        disabled: Iterable[str] = (),
    ):
        """
        Create a field group.

        Args:
            name: Group name used in events and logs
            rules: Field name to rule table
            initial: Initial values (fields not listed start as None)
            disabled: Names of fields to disable
        """
        self.name = name
        self._fields: Dict[str, FieldState] = {
            field_name: FieldState(name=field_name, rule=rule)
            for field_name, rule in rules.items()
        }
        self._listeners: List[FieldListener] = []

        for field_name in disabled:
            self.field(field_name).enabled = False

        for state in self._fields.values():
            state.revalidate()

        if initial:
            self.patch_values(initial)

    # ─────────────────────────────────────────────────────────────────
    # Lookup
    # ─────────────────────────────────────────────────────────────────

    def __contains__(self, field_name: object) -> bool:
        return field_name in self._fields

    @property
    def fields(self) -> Mapping[str, FieldState]:
        return MappingProxyType(self._fields)

    def get(self, field_name: str) -> Optional[FieldState]:
        return self._fields.get(field_name)

    def field(self, field_name: str) -> FieldState:
        state = self._fields.get(field_name)
        if state is None:
            raise UnknownFieldError(field_name)
        return state

    # ─────────────────────────────────────────────────────────────────
    # Mutation
    # ─────────────────────────────────────────────────────────────────

    def patch_values(self, values: Mapping[str, Any]) -> None:
        """
        Load values without marking fields dirty.

        Unknown names are ignored and disabled fields are written too, so a
        read-only field still shows its source value.
        """
        for field_name, value in values.items():
            state = self._fields.get(field_name)
            if state is None:
                continue
            state.value = value
            state.server_error = None
            state.revalidate()

    def set_value(self, field_name: str, value: Any) -> FieldState:
        """
        Apply a user edit.

        Raises:
            UnknownFieldError: The group has no such field
            FieldNotEditableError: The field is disabled
        """
        state = self.field(field_name)
        if not state.enabled:
            raise FieldNotEditableError(field_name)

        state.value = value
        state.dirty = True
        state.server_error = None
        state.revalidate()

        self._emit(FieldEvent(self.name, field_name, VALUE_CHANGED, state))
        return state

    def set_server_error(self, field_name: str, message: str) -> bool:
        """
        Attach a server validation message to a field.

        Returns:
            False when the group has no such field
        """
        state = self._fields.get(field_name)
        if state is None:
            return False

        state.server_error = message
        self._emit(FieldEvent(self.name, field_name, SERVER_ERROR_SET, state))
        return True

    def enable(self, field_name: str) -> None:
        self.field(field_name).enabled = True

    def disable(self, field_name: str) -> None:
        self.field(field_name).enabled = False

    # ─────────────────────────────────────────────────────────────────
    # Aggregate state
    # ─────────────────────────────────────────────────────────────────

    @property
    def valid(self) -> bool:
        return all(state.valid for state in self._fields.values())

    @property
    def dirty(self) -> bool:
        return any(state.dirty for state in self._fields.values())

    @property
    def pristine(self) -> bool:
        return not self.dirty

    def values(self) -> Dict[str, Any]:
        """All current values, disabled fields included."""
        return {name: state.value for name, state in self._fields.items()}

    def errors(self) -> Dict[str, Dict[str, Any]]:
        """Errors of every enabled field that has any."""
        return {
            name: state.all_errors
            for name, state in self._fields.items()
            if state.enabled and state.all_errors
        }

    # ─────────────────────────────────────────────────────────────────
    # Listeners
    # ─────────────────────────────────────────────────────────────────

    def subscribe(self, listener: FieldListener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: FieldEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
