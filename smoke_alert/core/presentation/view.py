from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from smoke_alert.core.status.holder import DetectionState

Visual = Literal["safe", "warning"]

DEFAULT_TIMESTAMP_FORMAT = "%I:%M:%S %p, %b %d"


@dataclass(frozen=True)
class StatusView:
    title: str
    subtitle: str
    icon: Visual
    background: Visual
    animated: bool
    last_updated_text: str


def format_last_updated(last_updated_at: int, timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT) -> str:
    if last_updated_at > 0:
        when = datetime.fromtimestamp(last_updated_at / 1000.0)
        return f"Last update: {when.strftime(timestamp_format)}"
    return "Last updated: --"


def render_status(state: DetectionState, timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT) -> StatusView:
    last_updated_text = format_last_updated(state.last_updated_at, timestamp_format)
    if state.detected:
        return StatusView(
            title="Smoke Detected!",
            subtitle="High levels of smoke detected. Please check immediately.",
            icon="warning",
            background="warning",
            animated=True,
            last_updated_text=last_updated_text,
        )
    return StatusView(
        title="All Clear",
        subtitle="Your smoke detector is online and monitoring.",
        icon="safe",
        background="safe",
        animated=False,
        last_updated_text=last_updated_text,
    )
