"""Firestore collection names (schema-in-code).

Firestore has no DDL or migrations. Collections are created automatically
when you first write a document. Use these constants so collection names
stay consistent and act as the single source of truth for the "schema".

Queries filter on organization_id and deleted_at and order by created_at,
so each collection needs the composite index declared in firestore.indexes.json.
"""

COLLECTION_AUDIT_LOGS = "audit_logs"
COLLECTION_CATEGORIES = "audit_log_categories"
COLLECTION_SUB_CATEGORIES = "audit_log_sub_categories"
COLLECTION_ACTION_TYPES = "audit_log_action_types"
