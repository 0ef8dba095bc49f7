from __future__ import annotations

import logging
from typing import Dict, Protocol

from .alert_engine import NotificationChannel, NotificationRecord

log = logging.getLogger(__name__)


class Notifier(Protocol):
    def create_channel(self, channel: NotificationChannel) -> None:
        ...

    def notify(self, record: NotificationRecord) -> None:
        """Show `record`, replacing any visible notification with the same id."""
        ...

    def cancel(self, notification_id: int) -> None:
        ...


class LogNotifier:
    """Writes notifications to the log; used for headless runs."""

    def __init__(self) -> None:
        self.channels: Dict[str, NotificationChannel] = {}
        self.active: Dict[int, NotificationRecord] = {}

    def create_channel(self, channel: NotificationChannel) -> None:
        self.channels[channel.id] = channel

    def notify(self, record: NotificationRecord) -> None:
        self.active[record.id] = record
        level = logging.WARNING if record.priority == "high" else logging.INFO
        log.log(level, "[%s] %s - %s", record.channel.id, record.title, record.body)

    def cancel(self, notification_id: int) -> None:
        self.active.pop(notification_id, None)
