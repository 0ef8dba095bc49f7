"""
Reusable widgets for the smoke alert window.
"""

from __future__ import annotations

from PySide6.QtCore import QTimer
from PySide6.QtGui import QIcon
from PySide6.QtWidgets import (
    QApplication,
    QFrame,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QStyle,
    QVBoxLayout,
)

from smoke_alert.core.presentation.view import StatusView, Visual


def status_icon(kind: Visual) -> QIcon:
    """Standard platform icon for a status; no bundled image resources needed."""
    style = QApplication.style()
    if kind == "warning":
        return style.standardIcon(QStyle.StandardPixmap.SP_MessageBoxWarning)
    return style.standardIcon(QStyle.StandardPixmap.SP_DialogApplyButton)


class Card(QFrame):
    """Card container with rounded corners and subtle styling."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("Card")
        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(16, 16, 16, 16)
        self.layout.setSpacing(12)


class PrimaryButton(QPushButton):
    def __init__(self, text: str = "", parent=None):
        super().__init__(text, parent)
        self.setObjectName("PrimaryButton")


class SecondaryButton(QPushButton):
    def __init__(self, text: str = "", parent=None):
        super().__init__(text, parent)
        self.setObjectName("SecondaryButton")


class StatusPill(QLabel):
    """Monitor status pill ("RUNNING", "STOPPED")."""

    def __init__(self, text: str = "", active: bool = False, parent=None):
        super().__init__(text, parent)
        self.setObjectName("StatusPillActive" if active else "StatusPill")


class ActivityLog(QListWidget):
    """Newest-first event list that drops its oldest rows past max_rows."""

    MAX_ROWS = 200

    def __init__(self, max_rows: int = MAX_ROWS, parent=None):
        super().__init__(parent)
        self.max_rows = max_rows

    def add_line(self, line: str) -> None:
        self.insertItem(0, QListWidgetItem(line))
        while self.count() > self.max_rows:
            self.takeItem(self.count() - 1)


class StatusPanel(QFrame):
    """
    Large status block: icon, headline, subtitle and last-update line.

    While a warning is shown the background alternates between two warning
    colors, standing in for an animated drawable.
    """

    BLINK_INTERVAL_MS = 600

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("StatusPanelSafe")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(32, 32, 32, 32)
        layout.setSpacing(12)

        self.icon_label = QLabel()
        self.icon_label.setObjectName("StatusIcon")
        layout.addWidget(self.icon_label)

        self.status_text = QLabel()
        self.status_text.setObjectName("StatusText")
        layout.addWidget(self.status_text)

        self.subtitle_text = QLabel()
        self.subtitle_text.setObjectName("StatusSubtitle")
        self.subtitle_text.setWordWrap(True)
        layout.addWidget(self.subtitle_text)

        self.last_updated_text = QLabel()
        self.last_updated_text.setObjectName("LastUpdatedText")
        layout.addWidget(self.last_updated_text)

        self._blink_on = False
        self._blink_timer = QTimer(self)
        self._blink_timer.setInterval(self.BLINK_INTERVAL_MS)
        self._blink_timer.timeout.connect(self._blink)

    def show_view(self, view: StatusView) -> None:
        self.icon_label.setPixmap(status_icon(view.icon).pixmap(64, 64))
        self.status_text.setText(view.title)
        self.subtitle_text.setText(view.subtitle)
        self.last_updated_text.setText(view.last_updated_text)

        if view.animated:
            if not self._blink_timer.isActive():
                self._blink_on = False
                self._set_background("StatusPanelWarning")
                self._blink_timer.start()
        else:
            self._blink_timer.stop()
            self._set_background("StatusPanelSafe")

    def is_animating(self) -> bool:
        return self._blink_timer.isActive()

    def _blink(self) -> None:
        self._blink_on = not self._blink_on
        self._set_background("StatusPanelWarningAlt" if self._blink_on else "StatusPanelWarning")

    def _set_background(self, name: str) -> None:
        if self.objectName() == name:
            return
        self.setObjectName(name)
        # re-polish so the objectName selector applies
        self.style().unpolish(self)
        self.style().polish(self)
