"""Pytest configuration and fixtures for the audit log service.

Tests run against the in-memory document store (DATABASE_BACKEND=memory);
the environment is set before app.main is imported so settings validation
does not require Firestore credentials.
"""

import os

os.environ["DATABASE_BACKEND"] = "memory"
os.environ.setdefault("TELEMETRY_ENABLED", "false")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.core.limiter import limiter  # noqa: E402
from app.infrastructure.firebase import close_firebase, init_firebase  # noqa: E402
from app.infrastructure.firebase._memory_client import (  # noqa: E402
    InMemoryFirestoreClient,
)
from app.main import app  # noqa: E402

ORG_ID = 5
OTHER_ORG_ID = 6


@pytest.fixture
def store() -> InMemoryFirestoreClient:
    """Fresh in-memory document store for repository tests."""
    return InMemoryFirestoreClient()


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) with an empty store.

    ASGITransport does not run the lifespan, so the store client is
    initialized and closed here.
    """
    await close_firebase()
    assert init_firebase()
    limiter.reset()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    await close_firebase()


@pytest.fixture
def org_headers() -> dict[str, str]:
    """Headers selecting organization ORG_ID."""
    return {"X-Organization-ID": str(ORG_ID)}


@pytest.fixture
def other_org_headers() -> dict[str, str]:
    """Headers selecting organization OTHER_ORG_ID."""
    return {"X-Organization-ID": str(OTHER_ORG_ID)}
