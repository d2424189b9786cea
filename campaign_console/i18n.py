"""
String lookup for user-facing text.

Catalog values use ``{{name}}`` placeholders. Unknown keys come back as
the key itself so a missing translation never breaks rendering.
"""

import re
from typing import Any, Optional, Protocol

import structlog

logger = structlog.get_logger()

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")

DEFAULT_CATALOGS: dict[str, dict[str, str]] = {
    "en": {
        "campaigns": "Campaigns",
        "new": "New",
        "new_campaign": "New campaign",
        "no_campaigns": "No campaigns",
        "new_campaign_added": "New campaign added",
        "campaign_updated": "Campaign updated",
        "campaign_deleted": "Campaign deleted",
        "an_error_occurred": "An error occurred",
        "delete_name": "Delete {{name}}?",
        "delete": "Delete",
        "search": "Search",
    },
}


class Translator(Protocol):
    """Looks up user-facing text."""

    def t(self, key: str, **params: Any) -> str:
        ...


class CatalogTranslator:
    """Translator backed by in-memory catalogs keyed by locale."""

    def __init__(
        self,
        locale: str = "en",
        catalogs: Optional[dict[str, dict[str, str]]] = None,
        fallback_locale: str = "en",
    ):
        self.locale = locale
        self.fallback_locale = fallback_locale
        self.catalogs = catalogs if catalogs is not None else DEFAULT_CATALOGS

    def t(self, key: str, **params: Any) -> str:
        template = self._lookup(key)
        if template is None:
            logger.debug("i18n.missing_key", key=key, locale=self.locale)
            return key
        return _PLACEHOLDER.sub(
            lambda match: str(params.get(match.group(1), match.group(0))),
            template,
        )

    def _lookup(self, key: str) -> Optional[str]:
        for locale in (self.locale, self.fallback_locale):
            value = self.catalogs.get(locale, {}).get(key)
            if value is not None:
                return value
        return None
