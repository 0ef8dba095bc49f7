from __future__ import annotations

from typing import Any, Optional

from .types import SensorReading

GAS_DIGITAL_FIELD = "gasDigital"
TIMESTAMP_FIELD = "timestamp"


def _as_int(value: Any) -> Optional[int]:
    # bool is an int subclass but never a valid reading
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            return int(text)
    return None


def parse_snapshot(snapshot: Any) -> SensorReading:
    """Map a raw snapshot value to a SensorReading. Never raises."""
    if not isinstance(snapshot, dict):
        return SensorReading()
    return SensorReading(
        gas_digital=_as_int(snapshot.get(GAS_DIGITAL_FIELD)),
        timestamp=_as_int(snapshot.get(TIMESTAMP_FIELD)),
    )


def is_smoke_detected(reading: SensorReading) -> bool:
    return reading.gas_digital == 1
