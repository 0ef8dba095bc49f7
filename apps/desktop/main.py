import argparse
import logging
import signal
import sys
from pathlib import Path
from typing import Optional

from PySide6.QtWidgets import QApplication

from smoke_alert.shared.config import AppConfig
from smoke_alert.shared.paths import ensure_app_dirs
from smoke_alert.shared.store import ConfigStore
from smoke_alert.core.logging_ import setup_logging
from smoke_alert.core.alerts.dispatcher import AlertDispatcher
from smoke_alert.core.alerts.notifier import LogNotifier, Notifier
from smoke_alert.core.alerts.sound import WinBeepSound
from smoke_alert.core.monitor.factory import create_source
from smoke_alert.core.monitor.smoke_monitor import SmokeMonitor
from smoke_alert.core.presentation.permissions import NotRequiredPermission, PermissionGate
from smoke_alert.core.status.holder import StatusHolder
from .ui.permission import DialogPermissionGate
from .ui.tray import TrayNotifier
from .ui.window import MainWindow

log = logging.getLogger(__name__)


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Desktop smoke sensor monitor")
    parser.add_argument("--config", type=Path, help="Path to a JSON config file")
    parser.add_argument("--simulate", action="store_true", help="Use the simulated sensor instead of Firebase")
    parser.add_argument("--verbose", action="store_true", help="Log every snapshot")
    return parser.parse_args(argv)


def build_notifier(cfg: AppConfig) -> Notifier:
    if cfg.notifier == "toast" and sys.platform == "win32":
        from smoke_alert.core.alerts.toast_notifier import ToastNotifierWin10
        return ToastNotifierWin10()
    if cfg.notifier == "log":
        return LogNotifier()
    return TrayNotifier()


def main(argv: Optional[list] = None) -> None:
    args = parse_args(argv)
    ensure_app_dirs()
    setup_logging(verbose=args.verbose)

    store = ConfigStore(args.config)
    cfg = store.load()

    app = QApplication(sys.argv)
    app.setQuitOnLastWindowClosed(True)

    # Composition root: one status holder shared by the monitor and the window
    status = StatusHolder()
    notifier = build_notifier(cfg)
    alerts = AlertDispatcher(notifier, sound=WinBeepSound(), sound_enabled=cfg.sound_enabled)
    source = create_source(cfg.with_env_overrides(), simulate=args.simulate)
    monitor = SmokeMonitor(status, source, alerts, config=cfg.to_monitor_config())

    permission: PermissionGate = NotRequiredPermission()
    if cfg.require_notification_permission:
        permission = DialogPermissionGate(cfg, store)

    if isinstance(notifier, TrayNotifier):
        status.subscribe(notifier.track_status)

    win = MainWindow(cfg, store, status, monitor, alerts, permission)
    win.show()
    win.activate()

    # Handle Ctrl+C gracefully (works on Unix/Linux/Mac)
    # On Windows, Qt handles Ctrl+C automatically and triggers closeEvent
    def signal_handler(sig, frame):
        log.info("Received interrupt signal, shutting down")
        win.close()

    if hasattr(signal, 'SIGINT'):
        signal.signal(signal.SIGINT, signal_handler)

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
