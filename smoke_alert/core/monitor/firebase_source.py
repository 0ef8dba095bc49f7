"""
Firebase Realtime Database data source.

The Admin SDK streams `put` and `patch` events relative to the watched
reference rather than whole values. FirebaseDataSource keeps a mirror of the
subtree and hands the full mirrored value to the subscriber on every event,
so callers see the same shape a value listener would deliver.
"""

from __future__ import annotations

import copy
import logging
import threading
from typing import Any, List, Optional

import firebase_admin
import requests
from firebase_admin import credentials, db
from firebase_admin.exceptions import FirebaseError
from google.auth.exceptions import GoogleAuthError

from smoke_alert.core.errors import ConfigError, SubscriptionError

from .source import ErrorCallback, SnapshotCallback

log = logging.getLogger(__name__)

APP_NAME = "smoke-alert"

# Stream events that end the listener instead of carrying data
CLOSING_EVENTS = ("cancel", "auth_revoked")
DATA_EVENTS = ("put", "patch")

_CONNECT_ERRORS = (
    ConfigError,
    FirebaseError,
    GoogleAuthError,
    requests.RequestException,
    OSError,
    ValueError,
)


def _split_path(path: str) -> List[str]:
    return [part for part in path.split("/") if part]


def apply_stream_event(tree: Any, event_type: str, path: str, data: Any) -> Any:
    """
    Return the mirrored value after applying one streaming event.

    `put` replaces the value at `path` (None deletes it); `patch` merges the
    keys of `data` into the value at `path`. The input tree is not modified.
    """
    parts = _split_path(path)

    if event_type == "put":
        return _set_at(tree, parts, copy.deepcopy(data))
    if event_type == "patch":
        if not isinstance(data, dict):
            return tree
        for key, value in data.items():
            tree = _set_at(tree, parts + _split_path(key), copy.deepcopy(value))
        return tree

    log.debug("Ignoring stream event of type %s", event_type)
    return tree


def _set_at(tree: Any, parts: List[str], value: Any) -> Any:
    if not parts:
        return value

    node = dict(tree) if isinstance(tree, dict) else {}
    head, rest = parts[0], parts[1:]
    child = _set_at(node.get(head), rest, value)
    if child is None or child == {}:
        node.pop(head, None)
    else:
        node[head] = child
    return node or None


def _closing_reason(event: Any) -> str:
    # cancel and auth_revoked carry a bare JSON string, which db.Event has no
    # public accessor for
    raw = getattr(event, "_data", None)
    if isinstance(raw, str) and raw:
        return raw
    return event.event_type


def _get_or_init_app(database_url: str, credentials_path: Optional[str]) -> firebase_admin.App:
    try:
        return firebase_admin.get_app(APP_NAME)
    except ValueError:
        pass

    try:
        if credentials_path:
            cred = credentials.Certificate(credentials_path)
        else:
            cred = credentials.ApplicationDefault()
    except (GoogleAuthError, OSError, ValueError) as e:
        raise ConfigError(f"Unusable Firebase credentials: {e}") from e

    return firebase_admin.initialize_app(cred, {"databaseURL": database_url}, name=APP_NAME)


class FirebaseSubscription:
    def __init__(self, path: str) -> None:
        self._path = path
        self._registration: Any = None
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def attach(self, registration: Any) -> None:
        self._registration = registration

    def close(self) -> None:
        if self._closed.is_set():
            return
        self._closed.set()
        if self._registration is not None:
            try:
                self._registration.close()
            except Exception:
                log.exception("Failed to close listener on %s", self._path)
        log.info("Firebase listener on /%s closed", self._path)


class FirebaseDataSource:
    def __init__(self, database_url: str, credentials_path: Optional[str] = None) -> None:
        if not database_url:
            raise ConfigError("database_url is required for the Firebase source")
        self._database_url = database_url
        self._credentials_path = credentials_path
        self._app: Optional[firebase_admin.App] = None

    def _ensure_app(self) -> firebase_admin.App:
        if self._app is None:
            self._app = _get_or_init_app(self._database_url, self._credentials_path)
        return self._app

    def subscribe(
        self,
        path: str,
        on_change: SnapshotCallback,
        on_error: ErrorCallback,
    ) -> FirebaseSubscription:
        try:
            ref = db.reference(path, app=self._ensure_app())
        except _CONNECT_ERRORS as e:
            raise SubscriptionError(path, str(e)) from e

        subscription = FirebaseSubscription(path)
        lock = threading.Lock()
        mirror: List[Any] = [None]

        def handle(event: db.Event) -> None:
            if subscription.closed:
                return
            if event.event_type in CLOSING_EVENTS:
                reason = _closing_reason(event)
                log.error("Firebase closed the stream on /%s: %s (%s)", path, reason, event.event_type)
                on_error(SubscriptionError(path, reason))
                return
            if event.event_type not in DATA_EVENTS:
                log.debug("Ignoring %s event on /%s", event.event_type, path)
                return
            try:
                with lock:
                    mirror[0] = apply_stream_event(mirror[0], event.event_type, event.path, event.data)
                    value = copy.deepcopy(mirror[0])
                on_change(value)
            except Exception as e:
                log.exception("Failed to handle stream event on /%s", path)
                on_error(e)

        try:
            registration = ref.listen(handle)
        except _CONNECT_ERRORS as e:
            raise SubscriptionError(path, str(e)) from e

        subscription.attach(registration)
        log.info("Firebase listener attached to /%s", path)
        return subscription
