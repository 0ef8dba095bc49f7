from __future__ import annotations

import logging
from typing import Protocol

from .permissions import PermissionGate

log = logging.getLogger(__name__)


class Startable(Protocol):
    def start(self) -> None:
        ...


def activate(permission: PermissionGate, monitor: Startable) -> bool:
    """
    Start the monitor once notifications are allowed.

    A denied request leaves the monitor stopped; there is no retry until the
    application is restarted. Returns True when the monitor was started,
    which for asynchronous gates is only known once the callback has run.
    """
    started = []

    def on_result(granted: bool) -> None:
        if not granted:
            log.warning("Notification permission denied; monitoring not started")
            return
        monitor.start()
        started.append(True)

    if not permission.is_required():
        on_result(True)
    else:
        permission.request(on_result)
    return bool(started)
