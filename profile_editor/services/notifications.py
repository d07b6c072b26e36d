"""
Transient notification channel.

Fire-and-forget messages shown to the operator (snackbar-style). The service
keeps the shown notifications so a host can render or inspect them.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    """One transient message."""
    message: str
    action: Optional[str] = None
    durationMs: int = 3000
    createdAt: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class NotificationService:
    """
    Shows transient notifications.

    show() returns nothing; callers never wait on or inspect the outcome.
    """

    def __init__(self, default_duration_ms: int = 3000, max_history: int = 50):
        """
        Initialize NotificationService.

        Args:
            default_duration_ms: Display time used when show() gets none
            max_history: Number of recent notifications kept
        """
        self._default_duration_ms = default_duration_ms
        self._max_history = max_history
        self._history: List[Notification] = []

    def show(
        self,
        message: str,
        action: Optional[str] = None,
        duration_ms: Optional[int] = None,
    ) -> None:
        notification = Notification(
            message=message,
            action=action,
            durationMs=duration_ms or self._default_duration_ms,
        )
        self._history.append(notification)
        del self._history[:-self._max_history]

        logger.info(f"Notification: {message}")

    def recent(self, limit: int = 10) -> List[Notification]:
        """Most recent notifications, newest last."""
        return self._history[-limit:]

    def clear(self) -> None:
        self._history.clear()
