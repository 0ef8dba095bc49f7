from __future__ import annotations

from smoke_alert.core.monitor.readings import is_smoke_detected, parse_snapshot
from smoke_alert.core.monitor.types import SensorReading


def test_parse_full_snapshot() -> None:
    reading = parse_snapshot({"gasDigital": 1, "timestamp": 1700000000000})

    assert reading == SensorReading(gas_digital=1, timestamp=1700000000000)
    assert is_smoke_detected(reading)


def test_missing_fields_are_none() -> None:
    reading = parse_snapshot({"gasDigital": 0})

    assert reading.timestamp is None
    assert not is_smoke_detected(reading)


def test_missing_flag_counts_as_not_detected() -> None:
    assert not is_smoke_detected(parse_snapshot({"timestamp": 5}))


def test_non_dict_snapshot_is_empty_reading() -> None:
    assert parse_snapshot(None) == SensorReading()
    assert parse_snapshot(1) == SensorReading()
    assert parse_snapshot(["gasDigital", 1]) == SensorReading()


def test_numeric_strings_and_whole_floats_are_accepted() -> None:
    reading = parse_snapshot({"gasDigital": "1", "timestamp": 1700000000000.0})

    assert reading == SensorReading(gas_digital=1, timestamp=1700000000000)


def test_malformed_values_are_dropped() -> None:
    reading = parse_snapshot({"gasDigital": True, "timestamp": "soon"})

    assert reading == SensorReading()
    assert parse_snapshot({"gasDigital": 1.5}).gas_digital is None
    assert parse_snapshot({"gasDigital": {"v": 1}}).gas_digital is None


def test_only_exact_one_means_detected() -> None:
    assert not is_smoke_detected(parse_snapshot({"gasDigital": 2}))
    assert not is_smoke_detected(parse_snapshot({"gasDigital": -1}))
