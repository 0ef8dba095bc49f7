from __future__ import annotations

from pathlib import Path

import pytest

from smoke_alert.core.monitor.factory import create_source
from smoke_alert.core.monitor.simulated_source import SimulatedDataSource
from smoke_alert.shared.config import ENV_CREDENTIALS, ENV_DATABASE_URL, AppConfig
from smoke_alert.shared.store import ConfigStore


def test_missing_file_writes_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    cfg = ConfigStore(path).load()

    assert path.exists()
    assert cfg.sensor_path == "mq2_readings"
    assert cfg.notification_permission == "unknown"
    assert cfg.notifier == "tray"


def test_round_trip(tmp_path: Path) -> None:
    store = ConfigStore(tmp_path / "config.json")
    cfg = AppConfig(database_url="https://example.firebaseio.com", notification_permission="granted")

    store.save(cfg)

    assert store.load() == cfg


def test_invalid_file_is_replaced_with_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    cfg = ConfigStore(path).load()

    assert cfg == AppConfig()
    assert ConfigStore(path).load() == AppConfig()


def test_invalid_values_are_replaced_with_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text('{"source": "carrier-pigeon"}', encoding="utf-8")

    assert ConfigStore(path).load().source == "firebase"


def test_default_store_lives_in_app_data(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APPDATA", str(tmp_path))

    store = ConfigStore()
    store.load()

    assert Path(store.path()) == tmp_path / "SmokeAlert" / "config.json"
    assert (tmp_path / "SmokeAlert" / "logs").is_dir()


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_DATABASE_URL, "https://env.firebaseio.com")
    monkeypatch.setenv(ENV_CREDENTIALS, "/secrets/sa.json")
    cfg = AppConfig(database_url="https://file.firebaseio.com")

    overridden = cfg.with_env_overrides()

    assert overridden.database_url == "https://env.firebaseio.com"
    assert overridden.credentials_path == "/secrets/sa.json"
    assert cfg.database_url == "https://file.firebaseio.com"


def test_monitor_config_carries_sensor_path() -> None:
    assert AppConfig(sensor_path="kitchen").to_monitor_config() == {"sensor_path": "kitchen"}


def test_firebase_without_url_falls_back_to_simulation() -> None:
    cfg = AppConfig()

    assert cfg.effective_source() == "simulated"
    assert isinstance(create_source(cfg), SimulatedDataSource)


def test_simulate_flag_wins_over_firebase() -> None:
    cfg = AppConfig(database_url="https://example.firebaseio.com")

    assert isinstance(create_source(cfg, simulate=True), SimulatedDataSource)


def test_service_account_in_app_data_is_picked_up(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APPDATA", str(tmp_path))
    monkeypatch.delenv(ENV_CREDENTIALS, raising=False)
    key = tmp_path / "SmokeAlert" / "service-account.json"
    key.parent.mkdir(parents=True)
    key.write_text("{}", encoding="utf-8")

    assert AppConfig().with_env_overrides().credentials_path == str(key)
    assert AppConfig(credentials_path="/explicit.json").with_env_overrides().credentials_path == "/explicit.json"
