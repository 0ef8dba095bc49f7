from __future__ import annotations

import threading
from types import SimpleNamespace
from typing import Any, List

import pytest
import requests
from firebase_admin import db
from google.auth.exceptions import DefaultCredentialsError

from smoke_alert.core.alerts.dispatcher import AlertDispatcher
from smoke_alert.core.alerts.notifier import LogNotifier
from smoke_alert.core.errors import ConfigError, SubscriptionError
from smoke_alert.core.monitor import firebase_source
from smoke_alert.core.monitor.firebase_source import FirebaseDataSource, apply_stream_event
from smoke_alert.core.monitor.readings import parse_snapshot
from smoke_alert.core.monitor.simulated_source import SimulatedDataSource
from smoke_alert.core.monitor.smoke_monitor import SmokeMonitor
from smoke_alert.core.status.holder import DetectionState, StatusHolder


def _event(event_type: str, path: str, data: Any) -> SimpleNamespace:
    return SimpleNamespace(event_type=event_type, path=path, data=data)


class FakeRegistration:
    def __init__(self) -> None:
        self.closed = False

    def close(self) -> None:
        self.closed = True


class FakeReference:
    def __init__(self, fail: Exception | None = None) -> None:
        self.fail = fail
        self.callback = None
        self.registration = FakeRegistration()

    def listen(self, callback):
        if self.fail is not None:
            raise self.fail
        self.callback = callback
        return self.registration


@pytest.fixture
def fake_ref(monkeypatch: pytest.MonkeyPatch) -> FakeReference:
    ref = FakeReference()
    monkeypatch.setattr(firebase_source, "_get_or_init_app", lambda url, creds: object())
    monkeypatch.setattr(firebase_source.db, "reference", lambda path, app=None: ref)
    return ref


def test_put_at_root_replaces_tree() -> None:
    tree = apply_stream_event({"old": 1}, "put", "/", {"gasDigital": 1, "timestamp": 5})

    assert tree == {"gasDigital": 1, "timestamp": 5}


def test_put_at_child_updates_one_field() -> None:
    tree = {"gasDigital": 0, "timestamp": 5}

    updated = apply_stream_event(tree, "put", "/gasDigital", 1)

    assert updated == {"gasDigital": 1, "timestamp": 5}
    assert tree == {"gasDigital": 0, "timestamp": 5}


def test_patch_merges_keys() -> None:
    tree = apply_stream_event({"gasDigital": 0, "timestamp": 5}, "patch", "/", {"timestamp": 9})

    assert tree == {"gasDigital": 0, "timestamp": 9}


def test_put_none_deletes() -> None:
    assert apply_stream_event({"gasDigital": 1}, "put", "/gasDigital", None) is None
    assert apply_stream_event({"gasDigital": 1}, "put", "/", None) is None


def test_unknown_event_type_keeps_tree() -> None:
    assert apply_stream_event({"a": 1}, "keep-alive", "/", None) == {"a": 1}


def test_requires_database_url() -> None:
    with pytest.raises(ConfigError):
        FirebaseDataSource("")


def test_subscribe_delivers_full_mirrored_value(fake_ref: FakeReference) -> None:
    seen: List[Any] = []
    source = FirebaseDataSource("https://example.firebaseio.com")

    sub = source.subscribe("mq2_readings", seen.append, lambda e: None)
    fake_ref.callback(_event("put", "/", {"gasDigital": 0, "timestamp": 1}))
    fake_ref.callback(_event("put", "/gasDigital", 1))

    assert seen == [{"gasDigital": 0, "timestamp": 1}, {"gasDigital": 1, "timestamp": 1}]
    assert parse_snapshot(seen[-1]).gas_digital == 1

    sub.close()
    assert fake_ref.registration.closed

    fake_ref.callback(_event("put", "/", {"gasDigital": 0}))
    assert len(seen) == 2


def test_subscriber_error_is_reported(fake_ref: FakeReference) -> None:
    errors: List[Exception] = []

    def broken(value: Any) -> None:
        raise ValueError("bad handler")

    FirebaseDataSource("https://example.firebaseio.com").subscribe("mq2_readings", broken, errors.append)
    fake_ref.callback(_event("put", "/", {"gasDigital": 1}))

    assert [str(e) for e in errors] == ["bad handler"]


def test_listen_failure_raises_subscription_error(monkeypatch: pytest.MonkeyPatch) -> None:
    ref = FakeReference(fail=OSError("connection refused"))
    monkeypatch.setattr(firebase_source, "_get_or_init_app", lambda url, creds: object())
    monkeypatch.setattr(firebase_source.db, "reference", lambda path, app=None: ref)

    with pytest.raises(SubscriptionError) as exc_info:
        FirebaseDataSource("https://example.firebaseio.com").subscribe("mq2_readings", print, print)

    assert exc_info.value.path == "mq2_readings"


def test_bad_credentials_raise_subscription_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def no_app(url, creds):
        raise ConfigError("Unusable Firebase credentials: missing file")

    monkeypatch.setattr(firebase_source, "_get_or_init_app", no_app)

    with pytest.raises(SubscriptionError):
        FirebaseDataSource("https://example.firebaseio.com", "/nope.json").subscribe("mq2_readings", print, print)


def test_default_credentials_failure_raises_subscription_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def no_credentials(path, app=None):
        raise DefaultCredentialsError("Could not automatically determine credentials")

    monkeypatch.setattr(firebase_source, "_get_or_init_app", lambda url, creds: object())
    monkeypatch.setattr(firebase_source.db, "reference", no_credentials)

    with pytest.raises(SubscriptionError) as exc_info:
        FirebaseDataSource("https://example.firebaseio.com").subscribe("mq2_readings", print, print)

    assert "determine credentials" in str(exc_info.value)


def test_listen_transport_failure_raises_subscription_error(monkeypatch: pytest.MonkeyPatch) -> None:
    ref = FakeReference(fail=requests.ConnectionError("name resolution failed"))
    monkeypatch.setattr(firebase_source, "_get_or_init_app", lambda url, creds: object())
    monkeypatch.setattr(firebase_source.db, "reference", lambda path, app=None: ref)

    with pytest.raises(SubscriptionError):
        FirebaseDataSource("https://example.firebaseio.com").subscribe("mq2_readings", print, print)


def test_monitor_survives_missing_default_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    def no_credentials(path, app=None):
        raise DefaultCredentialsError("Could not automatically determine credentials")

    monkeypatch.setattr(firebase_source, "_get_or_init_app", lambda url, creds: object())
    monkeypatch.setattr(firebase_source.db, "reference", no_credentials)
    status = StatusHolder()
    monitor = SmokeMonitor(
        status,
        FirebaseDataSource("https://example.firebaseio.com"),
        AlertDispatcher(LogNotifier()),
        config={"sensor_path": "mq2_readings"},
    )
    errors: List[str] = []
    monitor.on_error(errors.append)

    monitor.start()

    state = monitor.get_state()
    assert state.status == "RUNNING"
    assert state.last_error is not None and "determine credentials" in state.last_error
    assert len(errors) == 1
    assert status.state == DetectionState(False, 0)


def test_cancel_event_is_reported_as_subscription_error(fake_ref: FakeReference, caplog: pytest.LogCaptureFixture) -> None:
    seen: List[Any] = []
    errors: List[Exception] = []
    FirebaseDataSource("https://example.firebaseio.com").subscribe("mq2_readings", seen.append, errors.append)

    fake_ref.callback(db.Event(SimpleNamespace(event_type="cancel", data='"Permission denied"')))

    assert seen == []
    assert len(errors) == 1
    assert isinstance(errors[0], SubscriptionError)
    assert "Permission denied" in str(errors[0])
    assert "Permission denied" in caplog.text


def test_auth_revoked_event_is_reported(fake_ref: FakeReference) -> None:
    errors: List[Exception] = []
    FirebaseDataSource("https://example.firebaseio.com").subscribe("mq2_readings", print, errors.append)

    fake_ref.callback(db.Event(SimpleNamespace(event_type="auth_revoked", data='"credential is no longer valid"')))

    assert [type(e) for e in errors] == [SubscriptionError]
    assert "no longer valid" in str(errors[0])


def test_real_stream_events_update_the_mirror(fake_ref: FakeReference) -> None:
    seen: List[Any] = []
    FirebaseDataSource("https://example.firebaseio.com").subscribe("mq2_readings", seen.append, print)

    fake_ref.callback(db.Event(SimpleNamespace(
        event_type="put", data='{"path": "/", "data": {"gasDigital": 0, "timestamp": 7}}')))
    fake_ref.callback(db.Event(SimpleNamespace(
        event_type="patch", data='{"path": "/", "data": {"gasDigital": 1}}')))
    fake_ref.callback(db.Event(SimpleNamespace(event_type="keep-alive", data="null")))

    assert seen == [{"gasDigital": 0, "timestamp": 7}, {"gasDigital": 1, "timestamp": 7}]


def test_simulated_readings_use_wire_format() -> None:
    received: List[dict] = []
    got_two = threading.Event()

    def on_change(value: dict) -> None:
        received.append(value)
        if len(received) >= 2:
            got_two.set()

    sub = SimulatedDataSource(interval_s=0.01, detect_every=2).subscribe("mq2_readings", on_change, lambda e: None)
    try:
        assert got_two.wait(timeout=5)
    finally:
        sub.close()

    assert [r["gasDigital"] for r in received[:2]] == [0, 1]
    assert all(isinstance(r["timestamp"], int) for r in received)
