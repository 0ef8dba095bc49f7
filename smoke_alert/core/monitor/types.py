from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

MonitorStatus = Literal["STOPPED", "RUNNING"]


@dataclass
class MonitorConfig:
    sensor_path: str = "mq2_readings"


@dataclass
class MonitorState:
    status: MonitorStatus = "STOPPED"
    events_received: int = 0
    last_error: Optional[str] = None


@dataclass(frozen=True)
class SensorReading:
    """One snapshot of the watched path; fields are None when absent or malformed."""
    gas_digital: Optional[int] = None
    timestamp: Optional[int] = None  # epoch ms as written by the sensor
