from __future__ import annotations


class SmokeAlertError(Exception):
    """Base class for errors raised by the smoke alert client."""


class ConfigError(SmokeAlertError):
    """Connection settings are missing or unusable."""


class SubscriptionError(SmokeAlertError):
    """The data source could not open a subscription to the watched path."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
