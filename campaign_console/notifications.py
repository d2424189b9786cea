"""User-visible notifications (toasts)."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Protocol

import structlog
from rich.console import Console

logger = structlog.get_logger()


class Severity(str, Enum):
    """Toast variant."""
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class Notification:
    """A single toast."""
    message: str
    severity: Severity
    created_at: datetime = field(default_factory=datetime.now)


class NotificationSink(Protocol):
    """Fire-and-forget notification target."""

    def notify(self, message: str, severity: Severity) -> None:
        ...


class InMemoryNotificationSink:
    """Keeps every toast in order. Used by tests and batch commands."""

    def __init__(self):
        self.notifications: list[Notification] = []

    def notify(self, message: str, severity: Severity) -> None:
        self.notifications.append(Notification(message=message, severity=severity))
        logger.debug("notification.recorded", severity=severity.value, message=message)

    def of(self, severity: Severity) -> list[Notification]:
        return [n for n in self.notifications if n.severity == severity]

    @property
    def last(self) -> Optional[Notification]:
        return self.notifications[-1] if self.notifications else None

    def clear(self) -> None:
        self.notifications.clear()


class ConsoleNotificationSink:
    """Prints toasts to a rich console."""

    _STYLES = {
        Severity.SUCCESS: "bold green",
        Severity.ERROR: "bold red",
    }

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def notify(self, message: str, severity: Severity) -> None:
        style = self._STYLES.get(severity, "")
        self.console.print(f"[{style}]{message}[/{style}]")
