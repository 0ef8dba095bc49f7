from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "SmokeAlert"
SERVICE_ACCOUNT_FILE = "service-account.json"


def app_data_dir() -> Path:
    """Per-user data directory: %APPDATA%/SmokeAlert, or ~/SmokeAlert off Windows."""
    base = os.environ.get("APPDATA") or str(Path.home())
    return Path(base) / APP_NAME


def config_path() -> Path:
    return app_data_dir() / "config.json"


def default_credentials_path() -> Path:
    # Service-account key dropped next to the config is picked up without editing it
    return app_data_dir() / SERVICE_ACCOUNT_FILE


def logs_dir() -> Path:
    return app_data_dir() / "logs"


def log_path() -> Path:
    return logs_dir() / "smoke_alert.log"


def ensure_app_dirs() -> None:
    app_data_dir().mkdir(parents=True, exist_ok=True)
    logs_dir().mkdir(parents=True, exist_ok=True)
