from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Priority = Literal["high", "low"]

FOREGROUND_NOTIFICATION_ID = 1
SMOKE_NOTIFICATION_ID = 2


@dataclass(frozen=True)
class NotificationChannel:
    id: str
    name: str
    importance: Priority


@dataclass(frozen=True)
class NotificationRecord:
    id: int
    channel: NotificationChannel
    title: str
    body: str
    priority: Priority


SMOKE_ALERT_CHANNEL = NotificationChannel("smoke_alert_channel", "Smoke Alerts", "high")
FOREGROUND_CHANNEL = NotificationChannel("foreground_service_channel", "App Status", "low")


def build_smoke_alert() -> NotificationRecord:
    return NotificationRecord(
        id=SMOKE_NOTIFICATION_ID,
        channel=SMOKE_ALERT_CHANNEL,
        title="SMOKE DETECTED!",
        body="High levels of smoke detected. Please check immediately.",
        priority="high",
    )


def build_foreground_indicator() -> NotificationRecord:
    return NotificationRecord(
        id=FOREGROUND_NOTIFICATION_ID,
        channel=FOREGROUND_CHANNEL,
        title="Smoke Detector Active",
        body="Monitoring your smoke sensor in the background.",
        priority="low",
    )
