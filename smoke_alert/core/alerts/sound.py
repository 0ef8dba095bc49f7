from __future__ import annotations

import logging
from typing import Protocol

log = logging.getLogger(__name__)


class SoundPlayer(Protocol):
    def play(self) -> None:
        ...


class WinBeepSound:
    """Short alarm pattern through winsound; a no-op outside Windows."""

    def __init__(self, pulses: int = 3) -> None:
        self._pulses = pulses

    def play(self) -> None:
        try:
            import winsound
            for _ in range(self._pulses):
                winsound.Beep(1800, 250)
        except ImportError:
            log.debug("winsound unavailable, skipping alarm sound")
        except Exception:
            log.exception("Failed to play sound")
