from __future__ import annotations

import logging

from PySide6.QtWidgets import QMessageBox, QWidget

from smoke_alert.core.presentation.permissions import PermissionCallback
from smoke_alert.shared.config import AppConfig
from smoke_alert.shared.store import ConfigStore

log = logging.getLogger(__name__)


class DialogPermissionGate:
    """
    Asks once whether the app may show notifications and remembers the answer.

    A stored answer is reused on later starts; a denial means monitoring stays
    off until the answer is changed in the config file.
    """

    def __init__(self, cfg: AppConfig, store: ConfigStore, parent: QWidget | None = None) -> None:
        self._cfg = cfg
        self._store = store
        self._parent = parent

    def is_required(self) -> bool:
        return self._cfg.require_notification_permission and self._cfg.notification_permission != "granted"

    def request(self, callback: PermissionCallback) -> None:
        if self._cfg.notification_permission == "denied":
            callback(False)
            return

        answer = QMessageBox.question(
            self._parent,
            "Allow notifications",
            "Smoke Alert needs to show notifications to warn you when smoke is detected.\n\n"
            "Allow notifications?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.Yes,
        )
        granted = answer == QMessageBox.StandardButton.Yes
        self._cfg.notification_permission = "granted" if granted else "denied"
        self._store.save(self._cfg)
        log.info("Notification permission %s", self._cfg.notification_permission)
        callback(granted)
