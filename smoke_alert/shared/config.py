from __future__ import annotations

import os
from typing import Literal, Optional
from pydantic import BaseModel, Field

from smoke_alert.shared.paths import default_credentials_path

SourceKind = Literal["firebase", "simulated"]
NotifierKind = Literal["tray", "toast", "log"]
PermissionAnswer = Literal["unknown", "granted", "denied"]

ENV_DATABASE_URL = "SMOKE_ALERT_DATABASE_URL"
ENV_CREDENTIALS = "SMOKE_ALERT_CREDENTIALS"


class AppConfig(BaseModel):
    database_url: str = ""
    credentials_path: Optional[str] = None
    sensor_path: str = "mq2_readings"
    source: SourceKind = "firebase"
    notifier: NotifierKind = "tray"
    notification_permission: PermissionAnswer = "unknown"
    require_notification_permission: bool = True
    sound_enabled: bool = False
    dark_mode: bool = False
    timestamp_format: str = "%I:%M:%S %p, %b %d"
    simulate_interval_ms: int = Field(default=5000, ge=250)

    def with_env_overrides(self) -> "AppConfig":
        """
        Return a copy with the connection settings actually used to connect.

        Environment variables win over the file; with no credentials configured
        anywhere, a service-account key in the app data directory is used.
        """
        updates = {}
        url = os.environ.get(ENV_DATABASE_URL)
        if url:
            updates["database_url"] = url
        creds = os.environ.get(ENV_CREDENTIALS)
        if creds:
            updates["credentials_path"] = creds
        elif not self.credentials_path and default_credentials_path().is_file():
            updates["credentials_path"] = str(default_credentials_path())
        return self.model_copy(update=updates) if updates else self

    def effective_source(self) -> SourceKind:
        if self.source == "firebase" and not self.database_url:
            return "simulated"
        return self.source

    def to_monitor_config(self) -> dict:
        return {
            "sensor_path": self.sensor_path,
        }
