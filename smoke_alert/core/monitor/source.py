from __future__ import annotations

from typing import Any, Callable, Protocol

SnapshotCallback = Callable[[Any], None]
ErrorCallback = Callable[[Exception], None]


class SourceSubscription(Protocol):
    def close(self) -> None:
        ...


class DataSource(Protocol):
    """Client for a realtime data path that pushes the full value on every change."""

    def subscribe(
        self,
        path: str,
        on_change: SnapshotCallback,
        on_error: ErrorCallback,
    ) -> SourceSubscription:
        ...
