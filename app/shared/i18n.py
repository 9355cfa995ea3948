"""Localized messages for named error conditions.

Catalog keyed by locale then message key. Templates use str.format fields;
unknown locales fall back to DEFAULT_LOCALE.
"""

from typing import Any

from app.core.config import get_settings

DEFAULT_LOCALE = "en"

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "category_not_found": 'Category with ID "{id}" was not found',
        "sub_category_not_found": 'Sub-category with ID "{id}" was not found',
        "action_type_not_found": 'Action type with ID "{id}" was not found',
        "document_not_of_organization": (
            '{resource_type} with ID "{id}" does not belong to organization {organization_id}'
        ),
        "entity_not_found": '{resource_type} with ID "{id}" was not found',
    },
}


def get_message(key: str, locale: str | None = None, **params: Any) -> str:
    """Return the formatted message for key in locale (settings.default_locale if None).

    Raises:
        KeyError: If key is not in the catalog for the fallback locale.
    """
    locale = locale or get_settings().default_locale
    catalog = MESSAGES.get(locale) or MESSAGES[DEFAULT_LOCALE]
    template = catalog.get(key) or MESSAGES[DEFAULT_LOCALE][key]
    return template.format(**params)
