from __future__ import annotations

import logging
from typing import Dict

from win10toast import ToastNotifier

from .alert_engine import NotificationChannel, NotificationRecord

log = logging.getLogger(__name__)


class ToastNotifierWin10:
    """
    Windows 10 toast notifications.

    Toasts are transient, so a record with a known id is simply shown again;
    low-priority records (the background indicator) are only logged.
    """

    def __init__(self, duration_s: int = 6) -> None:
        self._toaster = ToastNotifier()
        self._duration_s = duration_s
        self._channels: Dict[str, NotificationChannel] = {}

    def create_channel(self, channel: NotificationChannel) -> None:
        self._channels[channel.id] = channel

    def notify(self, record: NotificationRecord) -> None:
        if record.priority != "high":
            log.info("%s: %s", record.title, record.body)
            return
        try:
            self._toaster.show_toast(record.title, record.body, duration=self._duration_s, threaded=True)
        except Exception:
            log.exception("Failed to show toast notification")

    def cancel(self, notification_id: int) -> None:
        pass
