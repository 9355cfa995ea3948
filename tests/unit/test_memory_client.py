"""Tests for the in-memory document store used in development and tests."""

import pytest

from app.infrastructure.firebase._memory_client import InMemoryFirestoreClient
from app.infrastructure.firebase._rest_client import (
    DOCUMENT_ID_FIELD,
    DocumentExistsError,
    DocumentMissingError,
)


async def test_create_rejects_existing_id() -> None:
    coll = InMemoryFirestoreClient().collection("things")
    await coll.create("a", {"n": 1})
    with pytest.raises(DocumentExistsError):
        await coll.create("a", {"n": 2})
    assert (await coll.document("a").get()).to_dict() == {"n": 1}


async def test_update_merges_and_requires_document() -> None:
    coll = InMemoryFirestoreClient().collection("things")
    await coll.create("a", {"n": 1, "m": 2})
    await coll.document("a").update({"m": 3})
    assert (await coll.document("a").get()).to_dict() == {"n": 1, "m": 3}
    with pytest.raises(DocumentMissingError):
        await coll.document("missing").update({"m": 3})


async def test_snapshots_do_not_share_state_with_store() -> None:
    coll = InMemoryFirestoreClient().collection("things")
    data = {"tags": ["a"]}
    await coll.create("a", data)
    data["tags"].append("b")
    snapshot = await coll.document("a").get()
    snapshot.to_dict()["tags"].append("c")
    assert (await coll.document("a").get()).to_dict() == {"tags": ["a"]}


async def test_query_filters_orders_and_pages() -> None:
    coll = InMemoryFirestoreClient().collection("things")
    for doc_id, org, rank, gone in [
        ("d", 1, 2, None), ("b", 1, 1, None), ("a", 1, 1, None),
        ("c", 2, 0, None), ("e", 1, 3, "x"),
    ]:
        await coll.create(doc_id, {"org": org, "rank": rank, "gone": gone})

    def query():
        return (
            coll.where("org", "==", 1)
            .where("gone", "==", None)
            .order_by("rank")
            .order_by(DOCUMENT_ID_FIELD)
        )

    assert [s.id async for s in query().stream()] == ["a", "b", "d"]
    first = [s async for s in query().limit(2).stream()]
    assert [s.id for s in first] == ["a", "b"]
    rest = [s.id async for s in query().start_after(first[-1]).stream()]
    assert rest == ["d"]


async def test_collections_are_independent() -> None:
    db = InMemoryFirestoreClient()
    await db.collection("one").create("a", {})
    assert await db.collection("two").document("a").get() is None
    assert await db.collection("one").document("a").get() is not None


@pytest.mark.parametrize("op", ["!=", "<", "in", "array-contains"])
def test_only_equality_filters_are_supported(op: str) -> None:
    with pytest.raises(ValueError):
        InMemoryFirestoreClient().collection("things").where("n", op, 1)


@pytest.mark.parametrize("document_id", ["", "a/b"])
def test_document_id_must_name_one_document(document_id: str) -> None:
    with pytest.raises(ValueError):
        InMemoryFirestoreClient().collection("things").document(document_id)
