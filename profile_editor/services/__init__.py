"""
External collaborators: admin API client and notification channel.
"""

from profile_editor.services.admin_client import AdminApiClient, extract_validation_errors
from profile_editor.services.notifications import Notification, NotificationService

__all__ = [
    "AdminApiClient",
    "extract_validation_errors",
    "Notification",
    "NotificationService",
]
