"""Mapping of raw index documents onto SearchableItem."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError

from tenantkit.config import SearchFieldMap
from tenantkit.core.types import SearchableItem, utc_now

logger = structlog.get_logger()

DESCRIPTION_LENGTH = 500


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def first_text(document: Mapping[str, Any], fields: Sequence[str]) -> str | None:
    """Return the first non-empty text value among ``fields``."""
    for field in fields:
        text = _as_text(document.get(field))
        if text:
            return text
    return None


def _string_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [v for v in value if isinstance(v, str)]
    return []


def _as_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


class DocumentMapper:
    """Maps index documents using a configurable field map.

    Missing fields fall back to empty values. A document without an id
    is dropped rather than failing the page.
    """

    def __init__(self, fields: SearchFieldMap) -> None:
        self._fields = fields

    def map(self, document: Mapping[str, Any]) -> SearchableItem | None:
        """Map one document, returning None if it cannot be represented."""
        fields = self._fields
        item_id = first_text(document, fields.id)
        if not item_id:
            return None

        try:
            content = first_text(document, fields.content) or ""
            description = (
                content[:DESCRIPTION_LENGTH] + "..."
                if len(content) > DESCRIPTION_LENGTH
                else content
            )

            tags: list[str] = []
            for field in fields.tags:
                tags.extend(_string_list(document.get(field)))

            metadata: dict[str, str] = {}
            for field in fields.metadata:
                if field in document:
                    metadata[field] = _as_text(document[field]) or ""
            for field in fields.list_metadata:
                if isinstance(document.get(field), list):
                    metadata[field] = "; ".join(_string_list(document[field]))

            active = next(
                (document[f] for f in fields.active if isinstance(document.get(f), bool)),
                True,
            )

            return SearchableItem(
                id=item_id,
                title=first_text(document, fields.title) or "",
                description=description,
                content=content,
                type=first_text(document, fields.type) or "",
                category=first_text(document, fields.category) or "",
                url=first_text(document, fields.url) or "",
                image_url=first_text(document, fields.image_url),
                tags=tags,
                metadata=metadata,
                created_at=_as_datetime(first_text(document, fields.created_at)) or utc_now(),
                modified_at=_as_datetime(first_text(document, fields.modified_at)),
                is_active=active,
            )
        except (PydanticValidationError, TypeError, ValueError) as e:
            logger.warning("search_document_unmappable", document_id=item_id, error=str(e))
            return None
