"""User-facing notifications emitted by the workflows."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Protocol

logger = logging.getLogger(__name__)


class Severity(Enum):
    """Severity of a user-facing notification."""
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    INFO = "info"


_LOG_LEVELS = {
    Severity.SUCCESS: logging.INFO,
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


@dataclass(frozen=True)
class Notification:
    severity: Severity
    message: str


class NotificationSink(Protocol):
    """Anything that can surface a message to the user."""

    def notify(self, severity: Severity, message: str) -> None:
        ...


class LoggingNotificationSink:
    """Sink that writes notifications to the log."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self._log = log or logger

    def notify(self, severity: Severity, message: str) -> None:
        self._log.log(_LOG_LEVELS[severity], "[%s] %s", severity.value, message)


class RecordingNotificationSink:
    """Sink that keeps notifications in emission order.

    Optionally forwards every notification to another sink, so a headless
    session can both inspect and display what happened.

    Example:
        >>> sink = RecordingNotificationSink()
        >>> sink.notify(Severity.SUCCESS, "Saved")
        >>> sink.messages(Severity.SUCCESS)
        ['Saved']
    """

    def __init__(self, forward_to: Optional[NotificationSink] = None):
        self.notifications: List[Notification] = []
        self._forward_to = forward_to

    def notify(self, severity: Severity, message: str) -> None:
        self.notifications.append(Notification(severity, message))
        if self._forward_to is not None:
            self._forward_to.notify(severity, message)

    def messages(self, severity: Optional[Severity] = None) -> List[str]:
        """Return recorded messages, optionally filtered by severity."""
        return [
            n.message
            for n in self.notifications
            if severity is None or n.severity is severity
        ]

    def clear(self) -> None:
        self.notifications.clear()
