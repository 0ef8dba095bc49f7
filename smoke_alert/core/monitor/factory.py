from __future__ import annotations

import logging

from smoke_alert.shared.config import AppConfig

from .source import DataSource

log = logging.getLogger(__name__)


def create_source(cfg: AppConfig, simulate: bool = False) -> DataSource:
    """Pick the data source named by the config; Firebase without a URL falls back to simulation."""
    kind = "simulated" if simulate else cfg.effective_source()
    if kind != cfg.source and not simulate:
        log.warning("No database_url configured, using the simulated sensor")

    if kind == "simulated":
        from .simulated_source import SimulatedDataSource
        return SimulatedDataSource(interval_s=cfg.simulate_interval_ms / 1000.0)

    from .firebase_source import FirebaseDataSource
    return FirebaseDataSource(cfg.database_url, cfg.credentials_path)
