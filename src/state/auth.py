from __future__ import annotations

import logging
from typing import Callable, List

from .local_store import LocalStorage


logger = logging.getLogger(__name__)

AUTH_STORAGE_KEY = "authenticated"
AUTH_MARKER = "true"

Listener = Callable[[bool], None]


class AuthStore:
    """
    Holds the console's single authentication flag.

    The flag is mirrored into `LocalStorage` under the `authenticated` key so
    that a login survives to the next run. In-memory and stored values agree
    right after `login()`, `logout()` and `check_auth()`.

    Listeners registered with `subscribe()` are called with the new value each
    time the flag changes.
    """

    def __init__(self, storage: LocalStorage) -> None:
        self._storage = storage
        self._authenticated = False
        self._listeners: List[Listener] = []

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    def login(self) -> None:
        self._set(True)
        self._storage.set_item(AUTH_STORAGE_KEY, AUTH_MARKER)

    def logout(self) -> None:
        self._set(False)
        self._storage.remove_item(AUTH_STORAGE_KEY)

    def check_auth(self) -> bool:
        """Reload the flag from storage; only the exact marker "true" counts."""
        self._set(self._storage.get_item(AUTH_STORAGE_KEY) == AUTH_MARKER)
        return self._authenticated

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener`; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, value: bool) -> None:
        if value == self._authenticated:
            return
        self._authenticated = value
        logger.debug("Authentication flag changed to %s", value)
        for listener in list(self._listeners):
            listener(value)


__all__ = ["AUTH_MARKER", "AUTH_STORAGE_KEY", "AuthStore"]
