"""
System tray notification surface.

The tray icon doubles as the persistent background-monitoring indicator.
Alerts are shown as tray messages; a new message replaces the visible one,
which matches replace-by-id for the single alert id in use.
"""

from __future__ import annotations

import logging
from typing import Dict

from PySide6.QtCore import QObject, Signal, Slot
from PySide6.QtWidgets import QSystemTrayIcon

from smoke_alert.core.alerts.alert_engine import (
    FOREGROUND_NOTIFICATION_ID,
    NotificationChannel,
    NotificationRecord,
)
from smoke_alert.core.status.holder import DetectionState

from .components import status_icon

log = logging.getLogger(__name__)


class TrayNotifier(QObject):
    """Notifier backed by QSystemTrayIcon. Safe to call from any thread."""

    _notify_requested = Signal(object)
    _cancel_requested = Signal(int)
    _status_changed = Signal(object)

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self.icon_kind = "safe"
        self._tray = QSystemTrayIcon(status_icon(self.icon_kind), self)
        self._tray.setToolTip("Smoke Alert")
        self._channels: Dict[str, NotificationChannel] = {}
        self.active: Dict[int, NotificationRecord] = {}

        self._notify_requested.connect(self._show)
        self._cancel_requested.connect(self._hide)
        self._status_changed.connect(self._show_status)

        if not QSystemTrayIcon.isSystemTrayAvailable():
            log.warning("System tray unavailable; notifications will only be logged")

    def create_channel(self, channel: NotificationChannel) -> None:
        self._channels[channel.id] = channel

    def notify(self, record: NotificationRecord) -> None:
        self._notify_requested.emit(record)

    def cancel(self, notification_id: int) -> None:
        self._cancel_requested.emit(notification_id)

    def track_status(self, state: DetectionState) -> None:
        """StatusHolder observer: the icon follows the latest reading, not the last alert."""
        self._status_changed.emit(state)

    def _set_icon(self, kind: str) -> None:
        self.icon_kind = kind
        self._tray.setIcon(status_icon(kind))

    @Slot(object)
    def _show(self, record: NotificationRecord) -> None:
        self.active[record.id] = record

        if record.id == FOREGROUND_NOTIFICATION_ID:
            self._tray.setToolTip(f"{record.title}\n{record.body}")
            self._tray.show()
            return

        if not self._tray.isVisible():
            self._tray.show()
        icon = (QSystemTrayIcon.MessageIcon.Critical if record.priority == "high"
                else QSystemTrayIcon.MessageIcon.Information)
        if record.priority == "high":
            self._set_icon("warning")
        self._tray.showMessage(record.title, record.body, icon, 10_000)
        log.info("Tray notification %d shown on %s", record.id, record.channel.id)

    @Slot(int)
    def _hide(self, notification_id: int) -> None:
        self.active.pop(notification_id, None)
        if notification_id == FOREGROUND_NOTIFICATION_ID:
            self._tray.hide()

    @Slot(object)
    def _show_status(self, state: DetectionState) -> None:
        self._set_icon("warning" if state.detected else "safe")
