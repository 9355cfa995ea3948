"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
All HTTP calls use httpx.AsyncClient so they do not block the event loop.
Transport failures and unexpected statuses surface as StoreException.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator
from typing import Any
from urllib.parse import quote

import httpx

from app.infrastructure.exceptions import StoreException
from app.infrastructure.firebase._rest_encoding import (
    _encode_value,
    decode_document,
    encode_document,
)

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_BASE = "https://firestore.googleapis.com/v1"
_METHODS = frozenset({"GET", "PATCH", "POST"})

# Field path Firestore uses for the document name in order_by and cursors.
DOCUMENT_ID_FIELD = "__name__"


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[_FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    access_token: str | None = None,
    params: dict[str, Any] | None = None,
) -> Any:
    """Perform async HTTP request to Firestore REST API. 404 returns None."""
    if method not in _METHODS:
        raise ValueError(f"Unsupported method: {method!r}")
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    try:
        resp = await client.request(
            method, url, headers=headers, json=body, params=params
        )
    except httpx.HTTPError as e:
        raise StoreException(method, str(e)) from e
    if resp.status_code == 404:
        return None
    if resp.status_code == 409:
        raise DocumentExistsError("Document already exists")
    if resp.status_code not in (200, 204):
        raise StoreException(method, resp.text[:500], status_code=resp.status_code)
    raw = resp.content
    return json.loads(raw.decode()) if raw else {}


class DocumentExistsError(Exception):
    """Raised when createDocument returns 409 (document ID already exists)."""


class DocumentMissingError(Exception):
    """Raised when a merge update targets a document that does not exist."""


class DocumentSnapshot:
    """Snapshot of a document (id + data)."""

    def __init__(self, id_: str, data: dict):
        self.id = id_
        self._data = data

    def to_dict(self) -> dict:
        return self._data


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: FirestoreRESTClient, collection_path: str, document_id: str):
        if not document_id or "/" in document_id:
            raise ValueError(f"Invalid document ID: {document_id!r}")
        self._client = client
        self.id = document_id
        self._path = f"{collection_path}/{quote(document_id, safe='')}"

    async def update(self, data: dict[str, Any]) -> None:
        """Merge the given fields into an existing document.

        Only the keys present in data are written (updateMask); other fields
        keep their stored values.

        Raises:
            DocumentMissingError: If the document does not exist.
        """
        out = await _request_async(
            self._client._http,
            f"{_BASE}/{self._path}",
            method="PATCH",
            body=encode_document(data),
            access_token=await self._client.get_token(),
            params={
                "updateMask.fieldPaths": sorted(data),
                "currentDocument.exists": "true",
            },
        )
        if out is None:
            raise DocumentMissingError(self._path)

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        out = await _request_async(
            self._client._http,
            f"{_BASE}/{self._path}",
            access_token=await self._client.get_token(),
        )
        if not out:
            return None
        return DocumentSnapshot(self.id, decode_document(out))


def _field_filter(field: str, op: str, value: Any) -> dict:
    """Equality filter; Firestore rejects EQUAL against null, so None becomes IS_NULL."""
    if op != "==":
        raise ValueError(f"Unsupported operator: {op!r}")
    if value is None:
        return {
            "unaryFilter": {
                "op": "IS_NULL",
                "field": {"fieldPath": field},
            }
        }
    return {
        "fieldFilter": {
            "field": {"fieldPath": field},
            "op": "EQUAL",
            "value": _encode_value(value),
        }
    }


class _Query:
    """Fluent query builder for collection; runs via runQuery (filter/order/cursor/limit on server)."""

    def __init__(
        self,
        client: FirestoreRESTClient,
        parent: str,
        collection_id: str,
    ):
        self._client = client
        self._parent = parent
        self._collection_id = collection_id
        self._filters: list[dict] = []
        self._orders: list[tuple[str, str]] = []
        self._start_after: DocumentSnapshot | None = None
        self._limit: int | None = None

    def where(self, field: str, op: str, value: Any) -> _Query:
        """Add a filter; multiple filters are combined with AND."""
        self._filters.append(_field_filter(field, op, value))
        return self

    def order_by(self, field: str, direction: str = "ASCENDING") -> _Query:
        """Append an ordering; call repeatedly for tie-breakers."""
        self._orders.append((field, direction))
        return self

    def start_after(self, snapshot: DocumentSnapshot) -> _Query:
        """Resume strictly after snapshot; cursor values follow the order_by fields."""
        self._start_after = snapshot
        return self

    def limit(self, n: int | None) -> _Query:
        self._limit = n
        return self

    def _cursor_value(self, field: str) -> dict:
        snapshot = self._start_after
        if field == DOCUMENT_ID_FIELD:
            return {
                "referenceValue": f"{self._parent}/{self._collection_id}/{snapshot.id}"
            }
        return _encode_value(snapshot.to_dict().get(field))

    def to_structured_query(self) -> dict[str, Any]:
        """Return the runQuery structuredQuery body for this query."""
        structured: dict[str, Any] = {
            "from": [{"collectionId": self._collection_id}],
        }
        if len(self._filters) == 1:
            structured["where"] = self._filters[0]
        elif self._filters:
            structured["where"] = {
                "compositeFilter": {"op": "AND", "filters": list(self._filters)}
            }
        if self._orders:
            structured["orderBy"] = [
                {"field": {"fieldPath": field}, "direction": direction}
                for field, direction in self._orders
            ]
        if self._start_after is not None:
            if not self._orders:
                raise ValueError("start_after requires at least one order_by field")
            structured["startAt"] = {
                "values": [self._cursor_value(field) for field, _ in self._orders],
                "before": False,
            }
        if self._limit:
            structured["limit"] = self._limit
        return structured

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Execute the query and yield document snapshots."""
        resp = await _request_async(
            self._client._http,
            f"{_BASE}/{self._parent}:runQuery",
            method="POST",
            body={"structuredQuery": self.to_structured_query()},
            access_token=await self._client.get_token(),
        )
        items = resp if isinstance(resp, list) else ([resp] if resp else [])
        for item in items:
            if "document" not in item:
                continue
            doc = item["document"]
            name = doc.get("name", "")
            doc_id = name.split("/")[-1] if name else ""
            yield DocumentSnapshot(doc_id, decode_document(doc))


class CollectionReference:
    """Reference to a collection; matches firestore API style."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path.rstrip("/")

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, self._path, document_id)

    async def create(self, document_id: str, data: dict[str, Any]) -> None:
        """Create a document with the given ID (fail with DocumentExistsError if it exists)."""
        url = f"{_BASE}/{self._path}?documentId={quote(document_id, safe='')}"
        await _request_async(
            self._client._http,
            url,
            method="POST",
            body=encode_document(data),
            access_token=await self._client.get_token(),
        )

    def where(self, field: str, op: str, value: Any) -> _Query:
        """Start a query with a filter. Chain .where(), .order_by(), .start_after(), .limit(), then .stream()."""
        parent = self._path.rsplit("/", 1)[0]
        collection_id = self._path.split("/")[-1]
        return _Query(self._client, parent, collection_id).where(field, op, value)


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin)."""

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._prefix = f"projects/{project_id}/databases/(default)/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, f"{self._prefix}/{collection_id}")
