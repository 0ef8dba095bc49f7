"""
Background monitor bridging one remote sensor path to the status holder.

State machine: STOPPED -> RUNNING -> STOPPED. Transport disconnects are the
data source's concern and never change the monitor's state.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Optional

from smoke_alert.core.alerts.dispatcher import AlertDispatcher
from smoke_alert.core.errors import SubscriptionError
from smoke_alert.core.status.holder import StatusHolder

from .readings import is_smoke_detected, parse_snapshot
from .source import DataSource, SourceSubscription
from .types import MonitorConfig, MonitorState

log = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _now_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime())


class SmokeMonitor:
    """Subscribes to the sensor path and pushes every reading into the status holder."""

    def __init__(
        self,
        status: StatusHolder,
        source: DataSource,
        alerts: AlertDispatcher,
        config: dict,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self._status = status
        self._source = source
        self._alerts = alerts
        self._cfg = MonitorConfig(**config)
        self._clock = clock or _now_ms
        self._state = MonitorState()
        self._lock = threading.Lock()

        self._event_cb: Optional[Callable[[dict], None]] = None
        self._error_cb: Optional[Callable[[str], None]] = None

        self._subscription: Optional[SourceSubscription] = None
        self._generation = 0

    def on_event(self, cb: Callable[[dict], None]) -> None:
        self._event_cb = cb

    def on_error(self, cb: Callable[[str], None]) -> None:
        self._error_cb = cb

    def get_state(self) -> MonitorState:
        with self._lock:
            return MonitorState(
                status=self._state.status,
                events_received=self._state.events_received,
                last_error=self._state.last_error,
            )

    @property
    def is_running(self) -> bool:
        return self.get_state().status == "RUNNING"

    def start(self) -> None:
        with self._lock:
            if self._state.status == "RUNNING":
                return
            self._state.status = "RUNNING"
            self._state.events_received = 0
            self._state.last_error = None
            self._generation += 1
            generation = self._generation
            path = self._cfg.sensor_path

        self._alerts.show_foreground_indicator()

        try:
            subscription = self._source.subscribe(
                path,
                lambda snapshot: self._on_change(generation, snapshot),
                lambda exc: self._on_source_error(generation, exc),
            )
        except SubscriptionError as e:
            log.error("Could not subscribe to /%s: %s", path, e)
            self._record_error(str(e))
            return

        with self._lock:
            stale = self._generation != generation or self._state.status != "RUNNING"
            if not stale:
                self._subscription = subscription
        if stale:
            subscription.close()
            return
        log.info("SmokeMonitor started and listener attached to /%s.", path)

    def start_in_background(self, on_done: Optional[Callable[[], None]] = None) -> threading.Thread:
        """
        Run start() on a worker thread.

        Opening the Firebase stream blocks on credential refresh and the first
        HTTP round trip, so UI callers use this instead of start().
        """
        def run() -> None:
            try:
                self.start()
            finally:
                if on_done is not None:
                    on_done()

        t = threading.Thread(target=run, name="SmokeMonitorStart", daemon=True)
        t.start()
        return t

    def stop(self) -> None:
        with self._lock:
            if self._state.status == "STOPPED":
                return
            self._state.status = "STOPPED"
            self._generation += 1
            subscription, self._subscription = self._subscription, None

        if subscription is not None:
            subscription.close()
        self._alerts.hide_foreground_indicator()
        self._status.set_status(False, 0)
        log.info("SmokeMonitor stopped and listener removed.")

    def _is_current(self, generation: int) -> bool:
        with self._lock:
            return self._generation == generation and self._state.status == "RUNNING"

    def _on_change(self, generation: int, snapshot: Any) -> None:
        if not self._is_current(generation):
            return

        log.debug("Snapshot received: %r", snapshot)
        reading = parse_snapshot(snapshot)
        detected = is_smoke_detected(reading)
        timestamp = reading.timestamp if reading.timestamp is not None else self._clock()

        with self._lock:
            self._state.events_received += 1

        self._status.set_status(detected, timestamp)
        if detected:
            self._alerts.dispatch_smoke_alert()

        self._emit({
            "type": "READING",
            "detected": detected,
            "timestamp": timestamp,
            "at": _now_iso(),
        })

    def _on_source_error(self, generation: int, exc: Exception) -> None:
        if not self._is_current(generation):
            return
        log.error("Database error in monitor: %s", exc, exc_info=exc)
        self._record_error(str(exc))

    def _record_error(self, msg: str) -> None:
        with self._lock:
            self._state.last_error = msg
        self._emit_error(msg)

    def _emit(self, evt: dict) -> None:
        if self._event_cb:
            self._event_cb(evt)

    def _emit_error(self, msg: str) -> None:
        if self._error_cb:
            self._error_cb(msg)
