"""Firestore integration: REST client, in-memory client, and repositories."""

from app.infrastructure.firebase.client import (
    FirestoreClient,
    close_firebase,
    get_firestore_client,
    init_firebase,
)

__all__ = [
    "FirestoreClient",
    "close_firebase",
    "get_firestore_client",
    "init_firebase",
]
