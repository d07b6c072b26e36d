"""
Configuration module - environment-driven settings shared by the editor and
the mock API.
"""

from common.config.base_settings import BaseAppSettings

__all__ = ["BaseAppSettings"]
