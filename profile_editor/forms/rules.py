"""
Declarative field rules and the pure validation function behind them.

A rule is evaluated against a single value and yields an error mapping keyed
by error kind (``required``, ``maxlength``, ``pattern``, ``email``,
``choices``, ``boolean``). An empty mapping means the value is valid.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Pattern, Tuple


# Error kinds
REQUIRED = "required"
MAX_LENGTH = "maxlength"
PATTERN = "pattern"
EMAIL = "email"
CHOICES = "choices"
BOOLEAN = "boolean"
SERVER_VALIDATION = "serverValidation"

# Optional leading "+", then digits, whitespace, hyphens and parentheses only
PHONE_PATTERN = re.compile(r"^\+?[0-9\s\-()]+$")

# local@domain with at least one "." in the domain part
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s.]+(\.[^@\s.]+)+$")

FORMATS: Dict[str, Pattern[str]] = {
    EMAIL: EMAIL_PATTERN,
}

DEFAULT_MESSAGES = {
    REQUIRED: "{label} is required",
    MAX_LENGTH: "{label} must be at most {limit} characters",
    PATTERN: "{label} has an invalid format",
    EMAIL: "{label} must be a valid email address",
    CHOICES: "{label} must be one of: {choices}",
    BOOLEAN: "{label} must be true or false",
}


@dataclass(frozen=True)
class FieldRule:
    """
    Validation rule for one named field.

    Attributes:
        required: Empty or missing values are rejected
        max_length: Values longer than this are rejected (exactly max_length is valid)
        pattern: Non-empty values must match this expression
        format: Named format check ("email"); non-empty values only
        choices: Non-empty values must be one of these
        boolean: Non-empty values must be True or False
    """

    required: bool = False
    max_length: Optional[int] = None
    pattern: Optional[Pattern[str]] = None
    format: Optional[str] = None
    choices: Optional[Tuple[str, ...]] = None
    boolean: bool = False

    def __post_init__(self):
        if self.format is not None and self.format not in FORMATS:
            raise ValueError(f"Unknown field format: {self.format}")


def is_empty(value: Any) -> bool:
    """None and the empty string count as empty; False and 0 do not."""
    return value is None or (isinstance(value, str) and value == "")


def validate_value(value: Any, rule: FieldRule) -> Dict[str, Any]:
    """
    Evaluate a rule against a value.

    Args:
        value: Current field value
        rule: Rule to apply

    Returns:
        Error mapping keyed by error kind; empty when the value is valid
    """
    errors: Dict[str, Any] = {}

    if is_empty(value):
        # Only "required" applies to empty values
        if rule.required:
            errors[REQUIRED] = True
        return errors

    text = str(value)

    if rule.max_length is not None and len(text) > rule.max_length:
        errors[MAX_LENGTH] = {
            "requiredLength": rule.max_length,
            "actualLength": len(text),
        }

    if rule.pattern is not None and not rule.pattern.fullmatch(text):
        errors[PATTERN] = {
            "requiredPattern": rule.pattern.pattern,
            "actualValue": text,
        }

    if rule.format is not None and not FORMATS[rule.format].fullmatch(text):
        errors[rule.format] = True

    if rule.choices is not None and value not in rule.choices:
        errors[CHOICES] = {"allowed": list(rule.choices), "actualValue": value}

    if rule.boolean and not isinstance(value, bool):
        errors[BOOLEAN] = {"actualValue": value}

    return errors


def describe_error(label: str, kind: str, detail: Any, rule: FieldRule) -> str:
    """Human-readable message for a locally computed error."""
    if kind == SERVER_VALIDATION:
        return str(detail)

    template = DEFAULT_MESSAGES.get(kind, "{label} is invalid")
    return template.format(
        label=label,
        limit=rule.max_length,
        choices=", ".join(rule.choices or ()),
    )
