"""
Common library for reusable infrastructure components.

This package provides generic modules that can be used across projects:

- utils: Standard responses and HTTP exceptions
- config: Base settings class
"""

from common.utils import (
    success_response,
    error_response,
    APIException,
    BadRequestException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from common.config import BaseAppSettings

__all__ = [
    # Utils
    "success_response",
    "error_response",
    "APIException",
    "BadRequestException",
    "ForbiddenException",
    "NotFoundException",
    "ValidationException",
    # Config
    "BaseAppSettings",
]
