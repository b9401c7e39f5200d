from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import httpx

from common.prisoners import PrisonerClient
from common.users import UserClient
from router.guards import create_router
from router.routes import Router
from state.auth import AuthStore
from state.local_store import LocalStorage

from .config import Settings


@dataclass
class AppContext:
    """Everything a view needs, created once per run by `create_app`."""

    settings: Settings
    storage: LocalStorage
    auth: AuthStore
    router: Router
    prisoners: PrisonerClient
    users: UserClient
    http_clients: List[httpx.Client] = field(default_factory=list)

    def close(self) -> None:
        self.prisoners.close()
        self.users.close()
        for client in self.http_clients:
            client.close()

    def __enter__(self) -> "AppContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def create_app(settings: Settings, *, transport: Optional[httpx.BaseTransport] = None) -> AppContext:
    """
    Wire storage, auth flag, router and API clients.

    The auth flag is restored from storage before anything else runs, so a
    login from a previous run is honoured. `transport` lets tests swap the
    network for an `httpx.MockTransport`.
    """
    storage = LocalStorage(settings.storage_path, fernet_key=settings.storage_key)
    auth = AuthStore(storage)
    auth.check_auth()

    http_clients: List[httpx.Client] = []

    def _client() -> Optional[httpx.Client]:
        if transport is None:
            return None
        client = httpx.Client(base_url=settings.api_base_url, transport=transport, timeout=settings.http_timeout)
        http_clients.append(client)
        return client

    prisoners = PrisonerClient(base_url=settings.api_base_url, timeout=settings.http_timeout, client=_client())
    users = UserClient(base_url=settings.api_base_url, timeout=settings.http_timeout, client=_client())
    return AppContext(
        settings=settings,
        storage=storage,
        auth=auth,
        router=create_router(auth),
        prisoners=prisoners,
        users=users,
        http_clients=http_clients,
    )
