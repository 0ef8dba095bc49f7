"""
Main window: renders the shared detection status and drives the monitor.
"""

from __future__ import annotations

import logging
from PySide6.QtCore import QObject, Signal, Slot
from PySide6.QtWidgets import (
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QCheckBox,
)

from smoke_alert.shared.config import AppConfig
from smoke_alert.shared.store import ConfigStore
from smoke_alert.core.alerts.dispatcher import AlertDispatcher
from smoke_alert.core.monitor.smoke_monitor import SmokeMonitor
from smoke_alert.core.presentation.activation import activate as activate_monitor
from smoke_alert.core.presentation.permissions import PermissionGate
from smoke_alert.core.presentation.view import StatusView, render_status
from smoke_alert.core.status.holder import DetectionState, StatusHolder

from .theme import Theme
from .components import ActivityLog, Card, PrimaryButton, SecondaryButton, StatusPanel, StatusPill

log = logging.getLogger(__name__)


class MonitorBridge(QObject):
    """Carries monitor-thread callbacks onto the GUI thread as queued signals."""

    status_changed = Signal(object)
    event_received = Signal(object)
    error_received = Signal(str)
    start_finished = Signal()


class BackgroundStart:
    """Startable that opens the subscription without blocking the GUI thread."""

    def __init__(self, monitor: SmokeMonitor, bridge: MonitorBridge) -> None:
        self._monitor = monitor
        self._bridge = bridge

    def start(self) -> None:
        self._monitor.start_in_background(self._bridge.start_finished.emit)


class MainWindow(QMainWindow):
    def __init__(
        self,
        cfg: AppConfig,
        store: ConfigStore,
        status: StatusHolder,
        monitor: SmokeMonitor,
        alerts: AlertDispatcher,
        permission: PermissionGate,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Smoke Alert")
        self.resize(720, 640)
        self.setMinimumSize(520, 480)

        self.cfg = cfg
        self.store = store
        self.status = status
        self.monitor = monitor
        self.alerts = alerts
        self.permission = permission
        self.theme = Theme("dark" if cfg.dark_mode else "light")
        self._permission_denied = False
        self.last_view: StatusView | None = None

        self._bridge = MonitorBridge(self)
        self._bridge.status_changed.connect(self._on_status_changed)
        self._bridge.event_received.connect(self._on_monitor_event)
        self._bridge.error_received.connect(self._on_monitor_error)
        self._bridge.start_finished.connect(self._refresh_controls)
        self.monitor.on_event(self._bridge.event_received.emit)
        self.monitor.on_error(self._bridge.error_received.emit)

        self._build_ui()
        self._apply_theme()

        self._subscription = self.status.subscribe(self._forward_status)

    def _forward_status(self, state: DetectionState) -> None:
        self._bridge.status_changed.emit(state)

    def _apply_theme(self) -> None:
        self.setStyleSheet(self.theme.get_stylesheet())

    def _toggle_dark_mode(self, checked: bool) -> None:
        if checked != (self.theme.mode == "dark"):
            self.theme.toggle_mode()
            self._apply_theme()
        self.cfg.dark_mode = checked
        self.store.save(self.cfg)

    def _toggle_sound(self, checked: bool) -> None:
        self.alerts.sound_enabled = checked
        self.cfg.sound_enabled = checked
        self.store.save(self.cfg)

    def _build_ui(self) -> None:
        root = QWidget()
        self.setCentralWidget(root)
        main_layout = QVBoxLayout(root)
        main_layout.setContentsMargins(24, 24, 24, 24)
        main_layout.setSpacing(20)

        header_layout = QVBoxLayout()
        header_layout.setSpacing(4)
        title = QLabel("Smoke Alert")
        title.setObjectName("TitleLabel")
        header_layout.addWidget(title)
        subtitle = QLabel(f"Watching /{self.cfg.sensor_path}")
        subtitle.setObjectName("SubtitleLabel")
        header_layout.addWidget(subtitle)
        main_layout.addLayout(header_layout)

        self.status_panel = StatusPanel()
        main_layout.addWidget(self.status_panel, 2)

        status_row = QHBoxLayout()
        status_row.setSpacing(12)
        self.monitor_pill = StatusPill("STOPPED", active=False)
        status_row.addWidget(self.monitor_pill)
        status_row.addStretch()

        self.btn_start = PrimaryButton("Start Monitoring")
        self.btn_start.clicked.connect(self.start_monitoring)
        status_row.addWidget(self.btn_start)

        self.btn_stop = SecondaryButton("Stop")
        self.btn_stop.setEnabled(False)
        self.btn_stop.clicked.connect(self.stop_monitoring)
        status_row.addWidget(self.btn_stop)
        main_layout.addLayout(status_row)

        bottom_layout = QHBoxLayout()
        bottom_layout.setSpacing(20)

        settings_card = Card()
        settings_label = QLabel("Settings")
        settings_label.setObjectName("SectionLabel")
        settings_card.layout.addWidget(settings_label)

        self.chk_dark_mode = QCheckBox("Dark mode")
        self.chk_dark_mode.setChecked(self.cfg.dark_mode)
        self.chk_dark_mode.toggled.connect(self._toggle_dark_mode)
        settings_card.layout.addWidget(self.chk_dark_mode)

        self.chk_sound = QCheckBox("Sound an alarm when smoke is detected")
        self.chk_sound.setChecked(self.cfg.sound_enabled)
        self.chk_sound.toggled.connect(self._toggle_sound)
        settings_card.layout.addWidget(self.chk_sound)
        settings_card.layout.addStretch()
        bottom_layout.addWidget(settings_card, 1)

        events_card = Card()
        events_label = QLabel("Activity")
        events_label.setObjectName("SectionLabel")
        events_card.layout.addWidget(events_label)
        self.events = ActivityLog()
        events_card.layout.addWidget(self.events, 1)
        bottom_layout.addWidget(events_card, 1)

        main_layout.addLayout(bottom_layout, 1)

    def activate(self) -> None:
        """Ask for notification permission, then start monitoring if allowed."""
        started = activate_monitor(self.permission, BackgroundStart(self.monitor, self._bridge))
        if not started:
            self._permission_denied = True
            self._append_event("Notifications not allowed; monitoring is off.")
        self._refresh_controls()

    def start_monitoring(self) -> None:
        if self._permission_denied:
            return
        BackgroundStart(self.monitor, self._bridge).start()
        self._append_event("Monitoring started.")
        self._refresh_controls()

    def stop_monitoring(self) -> None:
        self.monitor.stop()
        self._append_event("Monitoring stopped.")
        self._refresh_controls()

    def _refresh_controls(self) -> None:
        state = self.monitor.get_state()
        is_running = state.status == "RUNNING"
        self.monitor_pill.setText(state.status)
        if is_running and state.last_error:
            self.monitor_pill.setObjectName("StatusPillError")
        else:
            self.monitor_pill.setObjectName("StatusPillActive" if is_running else "StatusPill")
        self.monitor_pill.setStyleSheet(self.theme.get_stylesheet())
        self.btn_start.setEnabled(not is_running and not self._permission_denied)
        self.btn_stop.setEnabled(is_running)

    def _append_event(self, line: str) -> None:
        self.events.add_line(line)

    @Slot(object)
    def _on_status_changed(self, state: DetectionState) -> None:
        view = render_status(state, self.cfg.timestamp_format)
        self.last_view = view
        self.status_panel.show_view(view)

    @Slot(object)
    def _on_monitor_event(self, evt: dict) -> None:
        if evt.get("type") != "READING":
            return
        label = "SMOKE DETECTED" if evt.get("detected") else "clear"
        self._append_event(f"{evt.get('at', '')}  reading: {label}")

    @Slot(str)
    def _on_monitor_error(self, msg: str) -> None:
        self._append_event(f"ERROR: {msg}")
        self._refresh_controls()

    def closeEvent(self, event) -> None:
        self._subscription.close()
        self.monitor.stop()
        super().closeEvent(event)
