from __future__ import annotations

from typing import Any, ClassVar, Dict, Generic, List, Optional, Type, TypeVar, Union
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError


DEFAULT_BASE_URL = "https://6925dcd182b59600d7257f2e.mockapi.io/api"


class MockApiError(RuntimeError):
    """Base error for MockAPI resource clients."""


class MockApiTransportError(MockApiError):
    """The request never got an HTTP response (DNS, connect, timeout...)."""


class MockApiHttpError(MockApiError):
    """API answered with a non-success status."""

    def __init__(self, message: str, *, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class MockApiResponseError(MockApiError):
    """Response body was not JSON or did not match the expected record shape."""


RecordT = TypeVar("RecordT", bound=BaseModel)


class ResourceClient(Generic[RecordT]):
    """
    Thin CRUD wrapper around one MockAPI collection.

    Notes
    - Subclasses set `resource` (collection path segment) and `model`.
    - Every call is a single request: no retry, no caching, no pagination.
      Transport failures, non-2xx statuses and undecodable bodies raise a
      `MockApiError` subclass chained to the underlying cause.
    - Records are sent without their `id`; the server assigns it.
    """

    resource: ClassVar[str]
    model: ClassVar[Type[BaseModel]]

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        if client is not None:
            self._client = client
        elif timeout is not None:
            self._client = httpx.Client(base_url=self._base_url, timeout=timeout)
        else:
            self._client = httpx.Client(base_url=self._base_url)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "ResourceClient[RecordT]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # --------------- Public API ---------------
    def find_all(self) -> List[RecordT]:
        """Fetch the whole collection."""
        data = self._request("GET", self._collection_path())
        if not isinstance(data, list):
            raise MockApiResponseError(
                f"Expected a JSON array from /{self.resource}, got {type(data).__name__}"
            )
        return [self._parse(item) for item in data]

    def find_by_id(self, record_id: str) -> RecordT:
        return self._parse(self._request("GET", self._item_path(record_id)))

    def save(self, record: Union[RecordT, Dict[str, Any]]) -> RecordT:
        """Create a record; returns the server's copy including its assigned id."""
        data = self._request("POST", self._collection_path(), json=self._body(record))
        return self._parse(data)

    def update(self, record_id: str, record: Union[RecordT, Dict[str, Any]]) -> RecordT:
        data = self._request("PUT", self._item_path(record_id), json=self._body(record))
        return self._parse(data)

    def delete_by_id(self, record_id: str) -> Any:
        """
        Delete a record by id.

        Returns the decoded deletion payload exactly as the server sent it
        (MockAPI echoes the removed record, other backends may not).
        """
        return self._request("DELETE", self._item_path(record_id))

    # --------------- Internal ---------------
    def _collection_path(self) -> str:
        return f"/{self.resource}"

    def _item_path(self, record_id: str) -> str:
        if not str(record_id):
            raise ValueError("record id is required")
        # Escape the id so "/", "?" or ".." cannot address another resource
        return f"/{self.resource}/{quote(str(record_id), safe='')}"

    @staticmethod
    def _body(record: Union[BaseModel, Dict[str, Any]]) -> Dict[str, Any]:
        if isinstance(record, BaseModel):
            payload = record.model_dump(mode="json")
        else:
            payload = dict(record)
        payload.pop("id", None)
        return payload

    def _parse(self, item: Any) -> RecordT:
        try:
            return self.model.model_validate(item)  # type: ignore[return-value]
        except ValidationError as ve:
            raise MockApiResponseError(f"Failed to parse {self.resource} record: {ve}") from ve

    def _request(self, method: str, path: str, *, json: Optional[Dict[str, Any]] = None) -> Any:
        try:
            resp = self._client.request(method, path, json=json)
        except (httpx.TimeoutException, httpx.TransportError) as exc:
            raise MockApiTransportError(f"{method} {path} failed: {exc}") from exc

        if not resp.is_success:
            raise MockApiHttpError(
                f"HTTP {resp.status_code} from MockAPI for {method} {path}: {resp.text[:200]}",
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as exc:  # JSON decode error
            raise MockApiResponseError(f"Failed to parse JSON from {method} {path}") from exc


__all__ = [
    "DEFAULT_BASE_URL",
    "MockApiError",
    "MockApiHttpError",
    "MockApiResponseError",
    "MockApiTransportError",
    "ResourceClient",
]
