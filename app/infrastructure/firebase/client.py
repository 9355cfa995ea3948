"""Document store client selection and lifecycle.

Initialized at app startup from settings.database_backend:
- "firestore": Firestore REST API with google-auth, credentials from
  FIREBASE_SERVICE_ACCOUNT_KEY (JSON string) or FIREBASE_SERVICE_ACCOUNT_PATH.
- "memory": InMemoryFirestoreClient, same API, process-local.
"""

import json
import logging
from pathlib import Path
from typing import TypeAlias

from app.core.config import get_settings
from app.infrastructure.firebase._memory_client import InMemoryFirestoreClient
from app.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_credentials,
)

logger = logging.getLogger(__name__)

FirestoreClient: TypeAlias = FirestoreRESTClient | InMemoryFirestoreClient

_firestore_client: FirestoreClient | None = None


def _load_key_dict() -> dict | None:
    """Return service account dict from env key or file path."""
    settings = get_settings()
    key_json = (
        settings.firebase_service_account_key.get_secret_value()
        if settings.firebase_service_account_key
        else None
    )
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            logger.warning(
                "FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: %s (resolved: %s)",
                path,
                resolved,
            )
            return None
        with open(resolved, encoding="utf-8") as f:
            return json.load(f)
    return None


def _init_rest_client() -> FirestoreRESTClient | None:
    key_dict = _load_key_dict()
    if not key_dict:
        return None
    project_id = key_dict.get("project_id")
    if not project_id:
        logger.error("Firebase service account JSON missing 'project_id'")
        return None
    cred = _get_credentials(key_dict)
    return FirestoreRESTClient(
        project_id, cred, timeout=get_settings().firestore_timeout_seconds
    )


def init_firebase() -> bool:
    """Initialize the document store client for the configured backend.

    Idempotent if already initialized. On invalid/malformed credentials or any
    initialization error, logs the exception and returns False so the app can
    start and report not-ready on /health/ready.

    Returns:
        True if a client is available, False if disabled or on error.
    """
    global _firestore_client
    if _firestore_client is not None:
        return True
    backend = get_settings().database_backend
    try:
        if backend == "memory":
            _firestore_client = InMemoryFirestoreClient()
            logger.warning("Using in-memory document store; data is not persisted")
        else:
            _firestore_client = _init_rest_client()
    except Exception:
        logger.exception("Document store initialization failed (backend=%s)", backend)
        return False
    return _firestore_client is not None


def get_firestore_client() -> FirestoreClient | None:
    """Return the document store client, or None if not configured.

    Operations used by repositories (all async):
    - await db.collection(name).create(id, data)
    - await db.collection(name).document(id).get() -> DocumentSnapshot | None
    - await db.collection(name).document(id).update(data)
    - async for doc in db.collection(name).where(...).order_by(...).stream()
    """
    return _firestore_client


async def close_firebase() -> None:
    """Release the client's connection pool. Call from app shutdown."""
    global _firestore_client
    if _firestore_client is not None:
        await _firestore_client.aclose()
        _firestore_client = None
        logger.info("Document store client closed")
