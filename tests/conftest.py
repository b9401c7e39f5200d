import json
import os
import sys
from typing import Any, Dict, List, Optional
from urllib.parse import unquote

import httpx
import pytest


def pytest_configure():
    # Ensure `src/` is importable as top-level for `common.*` imports
    root = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    src_path = os.path.join(root, "src")
    if src_path not in sys.path:
        sys.path.insert(0, src_path)


BASE_URL = "https://mock.test/api"


class FakeMockApi:
    """In-memory stand-in for a MockAPI project with `prisoners` and `users`."""

    def __init__(self) -> None:
        self.collections: Dict[str, Dict[str, Dict[str, Any]]] = {"prisoners": {}, "users": {}}
        self.requests: List[httpx.Request] = []
        self.fail_with: Optional[int] = None
        self._next_id = 1

    def seed(self, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
        rid = str(self._next_id)
        self._next_id += 1
        stored = {**record, "id": rid}
        self.collections[collection][rid] = stored
        return stored

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, text="upstream exploded")

        # Split the raw path so escaped "/" inside an id stays inside that segment
        parts = [unquote(p) for p in request.url.raw_path.decode("ascii").split("?")[0].strip("/").split("/")]
        # ["api", collection] or ["api", collection, id]
        coll = self.collections.get(parts[1]) if len(parts) > 1 else None
        if coll is None:
            return httpx.Response(404, json="Not found")
        rid = parts[2] if len(parts) > 2 else None

        if request.method == "GET" and rid is None:
            return httpx.Response(200, json=list(coll.values()))
        if request.method == "POST" and rid is None:
            return httpx.Response(201, json=self.seed(parts[1], json.loads(request.content)))
        if rid is None or rid not in coll:
            return httpx.Response(404, json="Not found")
        if request.method == "GET":
            return httpx.Response(200, json=coll[rid])
        if request.method == "PUT":
            coll[rid] = {**coll[rid], **json.loads(request.content), "id": rid}
            return httpx.Response(200, json=coll[rid])
        if request.method == "DELETE":
            return httpx.Response(200, json=coll.pop(rid))
        return httpx.Response(405, text="method not allowed")

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self) -> httpx.Client:
        return httpx.Client(base_url=BASE_URL, transport=self.transport())


@pytest.fixture
def fake_api() -> FakeMockApi:
    return FakeMockApi()


@pytest.fixture
def base_url() -> str:
    return BASE_URL
