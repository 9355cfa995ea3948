"""Domain enumerations for the audit log service.

Enums represent fixed sets of domain values (e.g. reference kinds).
"""

from enum import Enum


class ReferenceKind(str, Enum):
    """Kind of classification an audit log may reference.

    Each kind maps to the audit log field holding its identifier and to the
    message used when that identifier does not resolve.
    """

    CATEGORY = "category"
    SUB_CATEGORY = "sub_category"
    ACTION_TYPE = "action_type"

    @property
    def field_name(self) -> str:
        """Audit log attribute holding the referenced ID (e.g. 'category_id')."""
        return f"{self.value}_id"

    @property
    def message_key(self) -> str:
        """Message catalog key for a reference of this kind that was not found."""
        return f"{self.value}_not_found"


class ResolutionStatus(str, Enum):
    """Outcome of one conditional reference lookup."""

    SKIPPED = "skipped"
    RESOLVED = "resolved"
    MISSING = "missing"
