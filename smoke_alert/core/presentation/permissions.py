from __future__ import annotations

from typing import Callable, Protocol

PermissionCallback = Callable[[bool], None]


class PermissionGate(Protocol):
    """The "show notifications" permission, asked once at startup."""

    def is_required(self) -> bool:
        ...

    def request(self, callback: PermissionCallback) -> None:
        ...


class NotRequiredPermission:
    """For platforms where showing notifications needs no user consent."""

    def is_required(self) -> bool:
        return False

    def request(self, callback: PermissionCallback) -> None:
        callback(True)
