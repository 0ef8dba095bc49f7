"""
Simulated data source for running the client without a Firebase project.

Writes a reading in the sensor's wire format every interval, raising the
digital flag on every `detect_every`-th tick.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Optional

from .readings import GAS_DIGITAL_FIELD, TIMESTAMP_FIELD
from .source import ErrorCallback, SnapshotCallback

log = logging.getLogger(__name__)


class SimulatedSubscription:
    def __init__(self, path: str, interval_s: float, detect_every: int,
                 on_change: SnapshotCallback, on_error: ErrorCallback) -> None:
        self._path = path
        self._interval_s = interval_s
        self._detect_every = detect_every
        self._on_change = on_change
        self._on_error = on_error
        self._stop_evt = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._tick = 0

    def start(self) -> None:
        self._thread = threading.Thread(target=self._run, name="SimulatedSensor", daemon=True)
        self._thread.start()

    def close(self) -> None:
        self._stop_evt.set()
        log.info("Simulated sensor on /%s stopped", self._path)

    def next_reading(self) -> dict:
        self._tick += 1
        detected = self._detect_every > 0 and self._tick % self._detect_every == 0
        return {
            GAS_DIGITAL_FIELD: 1 if detected else 0,
            TIMESTAMP_FIELD: int(time.time() * 1000),
        }

    def _run(self) -> None:
        while not self._stop_evt.is_set():
            try:
                self._on_change(self.next_reading())
            except Exception as e:
                log.exception("Simulated sensor callback error")
                self._on_error(e)
            self._stop_evt.wait(self._interval_s)


class SimulatedDataSource:
    def __init__(self, interval_s: float = 5.0, detect_every: int = 6) -> None:
        self._interval_s = interval_s
        self._detect_every = detect_every

    def subscribe(
        self,
        path: str,
        on_change: SnapshotCallback,
        on_error: ErrorCallback,
    ) -> SimulatedSubscription:
        sub = SimulatedSubscription(path, self._interval_s, self._detect_every, on_change, on_error)
        sub.start()
        log.info("Simulated sensor attached to /%s (every %.1fs)", path, self._interval_s)
        return sub
