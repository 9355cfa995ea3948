"""Request-shape tests for the Firestore REST client (httpx MockTransport, no network)."""

import json
from datetime import UTC, datetime
from types import SimpleNamespace

import httpx
import pytest

from app.infrastructure.exceptions import StoreException
from app.infrastructure.firebase._rest_client import (
    DOCUMENT_ID_FIELD,
    DocumentExistsError,
    DocumentMissingError,
    DocumentSnapshot,
    FirestoreRESTClient,
)

PREFIX = "projects/demo/databases/(default)/documents"
T0 = datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC)


def _client(handler) -> FirestoreRESTClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return FirestoreRESTClient(
        "demo", SimpleNamespace(valid=True, token="tok"), http_client=http
    )


async def test_create_posts_document_with_id_and_bearer_token() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"name": f"{PREFIX}/audit_logs/log-1"})

    db = _client(handler)
    await db.collection("audit_logs").create(
        "log-1", {"organization_id": 5, "deleted_at": None, "created_at": T0}
    )

    request = seen[0]
    assert request.method == "POST"
    assert request.url.path.endswith("/documents/audit_logs")
    assert request.url.params["documentId"] == "log-1"
    assert request.headers["authorization"] == "Bearer tok"
    assert json.loads(request.content) == {
        "fields": {
            "organization_id": {"integerValue": "5"},
            "deleted_at": {"nullValue": None},
            "created_at": {"timestampValue": "2025-01-01T12:00:00.000000Z"},
        }
    }


async def test_create_conflict_raises_document_exists() -> None:
    db = _client(lambda request: httpx.Response(409, json={}))
    with pytest.raises(DocumentExistsError):
        await db.collection("audit_logs").create("log-1", {"a": 1})


async def test_get_missing_document_returns_none() -> None:
    db = _client(lambda request: httpx.Response(404, json={}))
    assert await db.collection("audit_logs").document("nope").get() is None


async def test_get_decodes_document_fields() -> None:
    body = {
        "name": f"{PREFIX}/audit_logs/log-1",
        "fields": {
            "organization_id": {"integerValue": "5"},
            "user_roles": {"arrayValue": {"values": [{"stringValue": "admin"}]}},
            "created_at": {"timestampValue": "2025-01-01T12:00:00.123456Z"},
            "changes": {"mapValue": {"fields": {"amount": {"doubleValue": 9.5}}}},
        },
    }
    db = _client(lambda request: httpx.Response(200, json=body))

    snapshot = await db.collection("audit_logs").document("log-1").get()

    assert snapshot.id == "log-1"
    data = snapshot.to_dict()
    assert data["organization_id"] == 5
    assert data["user_roles"] == ["admin"]
    assert data["created_at"].replace(microsecond=0) == T0
    assert data["changes"] == {"amount": 9.5}


async def test_update_patches_only_given_fields_and_requires_existence() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    db = _client(handler)
    await db.collection("audit_log_categories").document("cat-1").update(
        {"updated_at": T0, "name": "Billing"}
    )

    request = seen[0]
    assert request.method == "PATCH"
    assert request.url.params.get_list("updateMask.fieldPaths") == ["name", "updated_at"]
    assert request.url.params["currentDocument.exists"] == "true"
    assert set(json.loads(request.content)["fields"]) == {"name", "updated_at"}


async def test_update_missing_document_raises() -> None:
    db = _client(lambda request: httpx.Response(404, json={}))
    with pytest.raises(DocumentMissingError):
        await db.collection("audit_log_categories").document("cat-1").update({"name": "x"})


async def test_query_builds_structured_query_with_cursor() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json=[
                {"readTime": "2025-01-01T00:00:00Z"},
                {
                    "document": {
                        "name": f"{PREFIX}/audit_logs/log-2",
                        "fields": {"organization_id": {"integerValue": "5"}},
                    }
                },
            ],
        )

    db = _client(handler)
    cursor = DocumentSnapshot("log-1", {"created_at": T0})
    query = (
        db.collection("audit_logs")
        .where("organization_id", "==", 5)
        .where("deleted_at", "==", None)
        .order_by("created_at")
        .order_by(DOCUMENT_ID_FIELD)
        .start_after(cursor)
        .limit(3)
    )
    results = [snapshot async for snapshot in query.stream()]

    assert [s.id for s in results] == ["log-2"]
    request = seen[0]
    assert request.url.path.endswith("/documents:runQuery")
    structured = json.loads(request.content)["structuredQuery"]
    assert structured["from"] == [{"collectionId": "audit_logs"}]
    assert structured["where"]["compositeFilter"]["op"] == "AND"
    filters = structured["where"]["compositeFilter"]["filters"]
    assert filters[0]["fieldFilter"]["op"] == "EQUAL"
    assert filters[0]["fieldFilter"]["value"] == {"integerValue": "5"}
    assert filters[1] == {
        "unaryFilter": {"op": "IS_NULL", "field": {"fieldPath": "deleted_at"}}
    }
    assert [o["field"]["fieldPath"] for o in structured["orderBy"]] == [
        "created_at",
        "__name__",
    ]
    assert structured["startAt"] == {
        "values": [
            {"timestampValue": "2025-01-01T12:00:00.000000Z"},
            {"referenceValue": f"{PREFIX}/audit_logs/log-1"},
        ],
        "before": False,
    }
    assert structured["limit"] == 3


def test_start_after_without_order_is_rejected() -> None:
    db = _client(lambda request: httpx.Response(200, json=[]))
    query = db.collection("audit_logs").where("organization_id", "==", 5)
    query.start_after(DocumentSnapshot("log-1", {}))
    with pytest.raises(ValueError):
        query.to_structured_query()


async def test_unexpected_status_raises_store_exception() -> None:
    db = _client(lambda request: httpx.Response(500, text="backend exploded"))
    with pytest.raises(StoreException) as exc_info:
        await db.collection("audit_logs").document("log-1").get()
    assert exc_info.value.details["status_code"] == 500
    assert exc_info.value.error_code == "STORE_ERROR"


async def test_transport_error_raises_store_exception() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    db = _client(handler)
    with pytest.raises(StoreException) as exc_info:
        await db.collection("audit_logs").document("log-1").get()
    assert "status_code" not in exc_info.value.details


async def test_injected_http_client_is_not_closed() -> None:
    http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    db = FirestoreRESTClient("demo", SimpleNamespace(valid=True, token="t"), http_client=http)
    await db.aclose()
    assert not http.is_closed
    await http.aclose()


async def test_document_id_is_url_encoded() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "name": f"{PREFIX}/audit_logs/log%201",
                "fields": {"organization_id": {"integerValue": "5"}},
            },
        )

    db = _client(handler)
    snapshot = await db.collection("audit_logs").document("log 1").get()

    assert seen[0].url.path.endswith("/documents/audit_logs/log 1")
    assert b"/audit_logs/log%201" in seen[0].url.raw_path
    assert snapshot.id == "log 1"


@pytest.mark.parametrize("document_id", ["", "a/b"])
def test_document_id_must_name_one_document(document_id: str) -> None:
    db = _client(lambda request: httpx.Response(200, json={}))
    with pytest.raises(ValueError):
        db.collection("audit_logs").document(document_id)


@pytest.mark.parametrize("op", ["!=", "<", "in", "array-contains"])
def test_only_equality_filters_are_supported(op: str) -> None:
    db = _client(lambda request: httpx.Response(200, json=[]))
    with pytest.raises(ValueError):
        db.collection("audit_logs").where("organization_id", op, 5)
