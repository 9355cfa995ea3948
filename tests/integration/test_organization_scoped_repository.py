"""Repository integration tests against the in-memory document store.

Covers organization isolation, soft delete, keyset pagination and partial
updates of OrganizationScopedRepository through its concrete repositories.
"""

import logging
from datetime import UTC, datetime, timedelta

import pytest

from app.application.dtos.pagination import PaginationQuery
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.infrastructure.firebase._memory_client import _MemoryDocumentReference
from app.infrastructure.firebase._rest_client import DocumentMissingError
from app.infrastructure.firebase.collections import COLLECTION_CATEGORIES
from app.infrastructure.firebase.repositories import (
    AuditLogRepository,
    CategoryRepository,
)
from app.infrastructure.firebase.repositories import base as base_module

ORG_ID = 5
OTHER_ORG_ID = 6
T0 = datetime(2025, 1, 1, tzinfo=UTC)


@pytest.fixture
def clock(monkeypatch):
    """Deterministic repository clock: every call advances one second."""
    ticks = iter(range(10_000))

    def fake_now() -> datetime:
        return T0 + timedelta(seconds=next(ticks))

    monkeypatch.setattr(base_module, "utc_now", fake_now)


@pytest.fixture
def categories(store) -> CategoryRepository:
    return CategoryRepository(store)


@pytest.fixture
def audit_logs(store) -> AuditLogRepository:
    return AuditLogRepository(store)


async def _collect_pages(repo, organization_id: int, page_size: int) -> list[list[str]]:
    pages: list[list[str]] = []
    last_id = None
    while True:
        page = await repo.paginated_find(
            organization_id, PaginationQuery(items_per_page=page_size, last_id=last_id)
        )
        pages.append([item.id for item in page.items])
        if page.last_id is None:
            return pages
        last_id = page.last_id


async def test_create_stamps_identity_and_timestamps(categories, clock) -> None:
    created = await categories.create(
        ORG_ID,
        {
            "name": "Billing",
            "id": "client-chosen",
            "organization_id": OTHER_ORG_ID,
            "deleted_at": T0,
        },
    )
    assert created.id and created.id != "client-chosen"
    assert created.organization_id == ORG_ID
    assert created.created_at == created.updated_at
    assert created.deleted_at is None
    assert created.name == "Billing"

    found = await categories.find_by_id(ORG_ID, created.id)
    assert found == created


async def test_create_without_required_field_raises(audit_logs) -> None:
    with pytest.raises(ValidationException):
        await audit_logs.create(ORG_ID, {"method": "POST", "url": "/payments"})


async def test_create_generates_unique_ids(categories) -> None:
    ids = {(await categories.create(ORG_ID, {"name": f"c{i}"})).id for i in range(20)}
    assert len(ids) == 20


async def test_find_by_id_other_organization_returns_none_and_logs(
    categories, caplog
) -> None:
    created = await categories.create(ORG_ID, {"name": "Billing"})

    with caplog.at_level(logging.WARNING, logger=base_module.__name__):
        found = await categories.find_by_id(OTHER_ORG_ID, created.id)

    assert found is None
    assert any(
        created.id in record.getMessage() and record.levelno == logging.WARNING
        for record in caplog.records
    )


async def test_find_by_id_unknown_returns_none(categories) -> None:
    assert await categories.find_by_id(ORG_ID, "does-not-exist") is None


async def test_find_lists_live_entities_of_organization_in_creation_order(
    categories, clock
) -> None:
    first = await categories.create(ORG_ID, {"name": "First"})
    await categories.create(OTHER_ORG_ID, {"name": "Elsewhere"})
    second = await categories.create(ORG_ID, {"name": "Second"})
    removed = await categories.create(ORG_ID, {"name": "Removed"})
    await categories.delete(ORG_ID, removed.id)

    found = await categories.find(ORG_ID)

    assert [c.id for c in found] == [first.id, second.id]


@pytest.mark.parametrize(("total", "page_size"), [(7, 3), (6, 3), (1, 5), (0, 2)])
async def test_pagination_returns_every_entity_once_in_order(
    audit_logs, clock, total, page_size
) -> None:
    created = [
        (await audit_logs.create(ORG_ID, {"user_id": 42, "method": "GET", "url": f"/r/{i}"})).id
        for i in range(total)
    ]
    await audit_logs.create(OTHER_ORG_ID, {"user_id": 1, "method": "GET", "url": "/x"})

    pages = await _collect_pages(audit_logs, ORG_ID, page_size)

    flattened = [entity_id for page in pages for entity_id in page]
    assert flattened == created
    assert all(len(page) <= page_size for page in pages)
    expected_pages = max(1, -(-total // page_size))
    assert len(pages) == expected_pages


async def test_pagination_orders_ties_by_id(audit_logs, monkeypatch) -> None:
    monkeypatch.setattr(base_module, "utc_now", lambda: T0)
    created = [
        (await audit_logs.create(ORG_ID, {"user_id": 42, "method": "GET", "url": "/"})).id
        for _ in range(5)
    ]

    pages = await _collect_pages(audit_logs, ORG_ID, 2)

    assert [entity_id for page in pages for entity_id in page] == sorted(created)


async def test_pagination_with_cursor_from_other_organization_is_empty(
    categories, clock
) -> None:
    await categories.create(ORG_ID, {"name": "Mine"})
    foreign = await categories.create(OTHER_ORG_ID, {"name": "Theirs"})

    page = await categories.paginated_find(
        ORG_ID, PaginationQuery(items_per_page=10, last_id=foreign.id)
    )

    assert page.items == []
    assert page.last_id is None


async def test_pagination_with_unknown_cursor_is_empty(categories) -> None:
    await categories.create(ORG_ID, {"name": "Mine"})
    page = await categories.paginated_find(
        ORG_ID, PaginationQuery(items_per_page=10, last_id="unknown")
    )
    assert page.items == []
    assert page.last_id is None


async def test_pagination_continues_after_cursor_entity_is_deleted(
    categories, clock
) -> None:
    ids = [(await categories.create(ORG_ID, {"name": f"c{i}"})).id for i in range(4)]
    first_page = await categories.paginated_find(ORG_ID, PaginationQuery(items_per_page=2))
    assert first_page.last_id == ids[1]

    await categories.delete(ORG_ID, ids[1])
    second_page = await categories.paginated_find(
        ORG_ID, PaginationQuery(items_per_page=2, last_id=first_page.last_id)
    )

    assert [c.id for c in second_page.items] == ids[2:]
    assert second_page.last_id is None


async def test_update_changes_only_given_fields(categories, store, clock) -> None:
    created = await categories.create(ORG_ID, {"name": "Billing", "description": "Money"})

    updated = await categories.update(ORG_ID, created.id, {"description": "Payments"})

    assert updated.description == "Payments"
    assert updated.name == "Billing"
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at
    stored = await store.collection(COLLECTION_CATEGORIES).document(created.id).get()
    assert stored.to_dict()["description"] == "Payments"
    assert stored.to_dict()["updated_at"] == updated.updated_at
    assert await categories.find_by_id(ORG_ID, created.id) == updated


async def test_update_rejects_immutable_fields(categories) -> None:
    created = await categories.create(ORG_ID, {"name": "Billing"})
    with pytest.raises(ValidationException):
        await categories.update(ORG_ID, created.id, {"organization_id": OTHER_ORG_ID})
    assert (await categories.find_by_id(ORG_ID, created.id)).organization_id == ORG_ID


async def test_update_in_other_organization_is_not_found(categories) -> None:
    created = await categories.create(ORG_ID, {"name": "Billing"})
    with pytest.raises(ResourceNotFoundException):
        await categories.update(OTHER_ORG_ID, created.id, {"name": "Hijacked"})
    assert (await categories.find_by_id(ORG_ID, created.id)).name == "Billing"


async def test_update_of_deleted_entity_is_not_found(categories) -> None:
    created = await categories.create(ORG_ID, {"name": "Billing"})
    await categories.delete(ORG_ID, created.id)
    with pytest.raises(ResourceNotFoundException):
        await categories.update(ORG_ID, created.id, {"name": "Back"})


async def test_delete_is_soft_and_idempotent(categories, clock) -> None:
    created = await categories.create(ORG_ID, {"name": "Billing"})

    assert await categories.delete(ORG_ID, created.id) is True
    deleted = await categories.find_by_id(ORG_ID, created.id, include_deleted=True)
    assert deleted is not None
    assert deleted.deleted_at is not None

    assert await categories.delete(ORG_ID, created.id) is True
    again = await categories.find_by_id(ORG_ID, created.id, include_deleted=True)
    assert again.deleted_at == deleted.deleted_at

    assert await categories.find_by_id(ORG_ID, created.id) is None
    assert await categories.find(ORG_ID) == []
    page = await categories.paginated_find(ORG_ID, PaginationQuery(items_per_page=10))
    assert page.items == []


async def test_delete_in_other_organization_is_not_found(categories) -> None:
    created = await categories.create(ORG_ID, {"name": "Billing"})
    with pytest.raises(ResourceNotFoundException):
        await categories.delete(OTHER_ORG_ID, created.id)
    assert await categories.find_by_id(ORG_ID, created.id) is not None


async def test_delete_unknown_is_not_found(categories) -> None:
    with pytest.raises(ResourceNotFoundException):
        await categories.delete(ORG_ID, "does-not-exist")


async def test_not_found_carries_localized_message(categories) -> None:
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await categories.update(ORG_ID, "does-not-exist", {"name": "x"})
    assert exc_info.value.message == 'category with ID "does-not-exist" was not found'
    assert exc_info.value.details == {
        "resource_type": "category",
        "resource_id": "does-not-exist",
    }


async def test_delete_of_document_removed_before_write_is_not_found(
    categories, monkeypatch
) -> None:
    created = await categories.create(ORG_ID, {"name": "Billing"})

    async def vanished(self, data):
        raise DocumentMissingError(self._id)

    monkeypatch.setattr(_MemoryDocumentReference, "update", vanished)
    with pytest.raises(ResourceNotFoundException):
        await categories.delete(ORG_ID, created.id)


@pytest.mark.parametrize("entity_id", ["a/b", "audit_log_categories/x"])
async def test_find_by_id_with_path_like_id_returns_none(categories, entity_id) -> None:
    await categories.create(ORG_ID, {"name": "Billing"})
    assert await categories.find_by_id(ORG_ID, entity_id, include_deleted=True) is None
    page = await categories.paginated_find(
        ORG_ID, PaginationQuery(items_per_page=10, last_id=entity_id)
    )
    assert page.items == []
    with pytest.raises(ResourceNotFoundException):
        await categories.delete(ORG_ID, entity_id)
