"""Query sanitization and filter cleanup.

Sanitization is a blunt filter, not a parser: characters and keyword
fragments associated with injection are removed wherever they appear.
"""

from __future__ import annotations

import re

from tenantkit.core.search.types import SearchFilters

MAX_QUERY_LENGTH = 200

_DANGEROUS_CHARS = re.compile(r"[<>\"'&\\;|`]")
_WHITESPACE = re.compile(r"\s+")
_SQL_KEYWORDS = (
    "SELECT",
    "INSERT",
    "UPDATE",
    "DELETE",
    "DROP",
    "UNION",
    "EXEC",
    "EXECUTE",
    "--",
    "/*",
    "*/",
)
_KEYWORD_PATTERNS = tuple(re.compile(re.escape(k), re.IGNORECASE) for k in _SQL_KEYWORDS)


def sanitize_query(query: str | None) -> str:
    """Clean a raw query before it reaches any backend.

    Steps, in order: trim, strip dangerous characters, collapse whitespace,
    truncate to 200 characters, strip SQL keyword substrings, trim again.

    Args:
        query: Raw query text.

    Returns:
        The sanitized query, empty for blank input.
    """
    if not query or not query.strip():
        return ""

    sanitized = query.strip()
    sanitized = _DANGEROUS_CHARS.sub("", sanitized)
    sanitized = _WHITESPACE.sub(" ", sanitized)
    sanitized = sanitized[:MAX_QUERY_LENGTH]

    for pattern in _KEYWORD_PATTERNS:
        sanitized = pattern.sub("", sanitized)

    return sanitized.strip()


def clean_filters(filters: dict[str, list[str]] | None) -> SearchFilters | None:
    """Drop blank keys and values from a filter map.

    Keys are matched case-insensitively; when two keys differ only by
    case, the later one wins, keeping the first spelling.

    Returns:
        The cleaned filters, or None when nothing is left.
    """
    if not filters:
        return None

    cleaned: SearchFilters = {}
    spelling: dict[str, str] = {}
    for key, values in filters.items():
        if not key or not key.strip() or not values:
            continue
        kept = [v for v in values if v and v.strip()]
        if not kept:
            continue
        name = spelling.setdefault(key.lower(), key)
        cleaned[name] = kept

    return cleaned or None
