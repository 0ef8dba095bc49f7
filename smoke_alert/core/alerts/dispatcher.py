from __future__ import annotations

import logging
from typing import Optional, Set

from .alert_engine import NotificationChannel, build_foreground_indicator, build_smoke_alert
from .notifier import Notifier
from .sound import SoundPlayer

log = logging.getLogger(__name__)


class AlertDispatcher:
    """Turns detection events into notifications. Notifier failures never propagate."""

    def __init__(self, notifier: Notifier, sound: Optional[SoundPlayer] = None, sound_enabled: bool = False) -> None:
        self._notifier = notifier
        self._sound = sound
        self.sound_enabled = sound_enabled
        self._channels: Set[str] = set()

    def _ensure_channel(self, channel: NotificationChannel) -> None:
        if channel.id in self._channels:
            return
        self._notifier.create_channel(channel)
        self._channels.add(channel.id)

    def dispatch_smoke_alert(self) -> None:
        record = build_smoke_alert()
        try:
            self._ensure_channel(record.channel)
            self._notifier.notify(record)
            log.info("Smoke notification sent.")
        except Exception:
            log.exception("Failed to send smoke notification")

        if self.sound_enabled and self._sound is not None:
            self._sound.play()

    def show_foreground_indicator(self) -> None:
        record = build_foreground_indicator()
        try:
            self._ensure_channel(record.channel)
            self._notifier.notify(record)
        except Exception:
            log.exception("Failed to show foreground indicator")

    def hide_foreground_indicator(self) -> None:
        try:
            self._notifier.cancel(build_foreground_indicator().id)
        except Exception:
            log.exception("Failed to hide foreground indicator")
