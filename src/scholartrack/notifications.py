"""User-facing notifications (toasts) raised by controllers."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum

logger = logging.getLogger("scholartrack.notifications")


class NoticeLevel(StrEnum):
    """Severity of a notification."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


Notifier = Callable[[NoticeLevel, str], None]


def log_notifier(level: NoticeLevel, message: str) -> None:
    """Default notifier: write notifications to the log."""
    if level is NoticeLevel.ERROR:
        logger.warning("%s", message)
    else:
        logger.info("%s", message)


@dataclass
class Notice:
    level: NoticeLevel
    message: str


@dataclass
class NoticeQueue:
    """Collects notifications until the client drains them."""

    notices: list[Notice] = field(default_factory=list)
    max_size: int = 50

    def __call__(self, level: NoticeLevel, message: str) -> None:
        log_notifier(level, message)
        self.notices.append(Notice(level=level, message=message))
        del self.notices[: -self.max_size]

    def drain(self) -> list[Notice]:
        notices, self.notices = self.notices, []
        return notices
