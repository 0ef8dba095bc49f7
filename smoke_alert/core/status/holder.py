"""
Observable detection status shared by the background monitor and the window.

The holder is constructed by the composition root and handed to both sides.
Observers receive the latest state on subscription, then every update.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, List

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetectionState:
    detected: bool = False
    last_updated_at: int = 0  # epoch ms, 0 = never updated

    @property
    def never_updated(self) -> bool:
        return self.last_updated_at == 0


StatusObserver = Callable[[DetectionState], None]


class Subscription:
    """Handle returned by StatusHolder.subscribe(); close() stops delivery."""

    def __init__(self, holder: "StatusHolder", observer: StatusObserver) -> None:
        self._holder = holder
        self._observer = observer
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._holder._remove(self._observer)


class StatusHolder:
    def __init__(self) -> None:
        self._state = DetectionState()
        self._lock = threading.Lock()
        self._observers: List[StatusObserver] = []

    @property
    def state(self) -> DetectionState:
        with self._lock:
            return self._state

    @property
    def detected(self) -> bool:
        return self.state.detected

    @property
    def last_updated_at(self) -> int:
        return self.state.last_updated_at

    def set_status(self, detected: bool, timestamp: int) -> None:
        new_state = DetectionState(detected=bool(detected), last_updated_at=int(timestamp))
        with self._lock:
            self._state = new_state
            observers = list(self._observers)
        for observer in observers:
            self._deliver(observer, new_state)

    def subscribe(self, observer: StatusObserver) -> Subscription:
        with self._lock:
            self._observers.append(observer)
            current = self._state
        self._deliver(observer, current)
        return Subscription(self, observer)

    def _remove(self, observer: StatusObserver) -> None:
        with self._lock:
            try:
                self._observers.remove(observer)
            except ValueError:
                pass

    @staticmethod
    def _deliver(observer: StatusObserver, state: DetectionState) -> None:
        try:
            observer(state)
        except Exception:
            log.exception("Status observer failed")
