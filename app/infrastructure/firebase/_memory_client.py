"""Process-local document store with the same API as FirestoreRESTClient.

Selected with DATABASE_BACKEND=memory for local development and tests.
Documents are deep-copied on the way in and out so callers never share
state with the store. Data is lost when the process exits.
"""

from __future__ import annotations

import copy
from collections.abc import AsyncIterator
from typing import Any

from app.infrastructure.firebase._rest_client import (
    DOCUMENT_ID_FIELD,
    DocumentExistsError,
    DocumentMissingError,
    DocumentSnapshot,
)


class _MemoryDocumentReference:
    def __init__(self, store: dict[str, dict], document_id: str):
        if not document_id or "/" in document_id:
            raise ValueError(f"Invalid document ID: {document_id!r}")
        self._store = store
        self._id = document_id

    async def update(self, data: dict[str, Any]) -> None:
        """Merge fields into the stored document; raise DocumentMissingError if absent."""
        if self._id not in self._store:
            raise DocumentMissingError(self._id)
        self._store[self._id].update(copy.deepcopy(data))

    async def get(self) -> DocumentSnapshot | None:
        data = self._store.get(self._id)
        if data is None:
            return None
        return DocumentSnapshot(self._id, copy.deepcopy(data))


class _MemoryQuery:
    """Equality filter / order / cursor / limit evaluated over the collection's documents."""

    def __init__(self, store: dict[str, dict]):
        self._store = store
        self._filters: list[tuple[str, Any]] = []
        self._orders: list[tuple[str, str]] = []
        self._start_after: DocumentSnapshot | None = None
        self._limit: int | None = None

    def where(self, field: str, op: str, value: Any) -> _MemoryQuery:
        if op != "==":
            raise ValueError(f"Unsupported operator: {op!r}")
        self._filters.append((field, value))
        return self

    def order_by(self, field: str, direction: str = "ASCENDING") -> _MemoryQuery:
        self._orders.append((field, direction))
        return self

    def start_after(self, snapshot: DocumentSnapshot) -> _MemoryQuery:
        self._start_after = snapshot
        return self

    def limit(self, n: int | None) -> _MemoryQuery:
        self._limit = n
        return self

    @staticmethod
    def _value(doc_id: str, data: dict, field: str) -> Any:
        if field == DOCUMENT_ID_FIELD:
            return doc_id
        return data.get(field)

    def _matches(self, doc_id: str, data: dict) -> bool:
        return all(
            self._value(doc_id, data, field) == value
            for field, value in self._filters
        )

    def _is_after_cursor(self, doc_id: str, data: dict) -> bool:
        cursor = self._start_after
        cursor_data = cursor.to_dict()
        for field, direction in self._orders:
            current = self._value(doc_id, data, field)
            anchor = self._value(cursor.id, cursor_data, field)
            if current == anchor:
                continue
            if direction == "DESCENDING":
                return current < anchor
            return current > anchor
        return False

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        rows = [
            (doc_id, data)
            for doc_id, data in self._store.items()
            if self._matches(doc_id, data)
        ]
        for field, direction in reversed(self._orders):
            rows.sort(
                key=lambda row: self._value(row[0], row[1], field),
                reverse=direction == "DESCENDING",
            )
        if self._start_after is not None:
            if not self._orders:
                raise ValueError("start_after requires at least one order_by field")
            rows = [row for row in rows if self._is_after_cursor(*row)]
        if self._limit:
            rows = rows[: self._limit]
        for doc_id, data in rows:
            yield DocumentSnapshot(doc_id, copy.deepcopy(data))


class _MemoryCollection:
    def __init__(self, store: dict[str, dict]):
        self._store = store

    def document(self, document_id: str) -> _MemoryDocumentReference:
        return _MemoryDocumentReference(self._store, document_id)

    async def create(self, document_id: str, data: dict[str, Any]) -> None:
        if document_id in self._store:
            raise DocumentExistsError("Document already exists")
        self._store[document_id] = copy.deepcopy(data)

    def where(self, field: str, op: str, value: Any) -> _MemoryQuery:
        return _MemoryQuery(self._store).where(field, op, value)


class InMemoryFirestoreClient:
    """Drop-in replacement for FirestoreRESTClient backed by dicts."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict]] = {}

    async def aclose(self) -> None:
        """Nothing to release; kept for interface parity with the REST client."""

    def collection(self, collection_id: str) -> _MemoryCollection:
        return _MemoryCollection(self._collections.setdefault(collection_id, {}))
